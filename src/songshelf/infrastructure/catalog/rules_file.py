"""Loading normalizer rule tables from a JSON file.

Hey future me - a rules file lets a deployment tune the heuristics without code changes.
Every section is optional; a missing section keeps the built-in default:

    {
      "synonyms": {"great britain": "UK"},
      "descriptor_pattern": "\\\\bmix\\\\b|\\\\bedit\\\\b",
      "tag_buckets": {"trance": "trance"},
      "mood_keywords": {"dark": ["dark", "sinister"]}
    }

Sections REPLACE the defaults (they are not merged), so a file with "tag_buckets" defines
the complete bucket table.
"""

import json
import logging
import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from songshelf.domain.exceptions import ConfigurationError
from songshelf.domain.value_objects.normalizer_rules import NormalizerRules

logger = logging.getLogger(__name__)


class RulesFileModel(BaseModel):
    """Schema of a normalizer rules file."""

    model_config = ConfigDict(extra="forbid")

    synonyms: dict[str, str] | None = None
    descriptor_pattern: str | None = None
    tag_buckets: dict[str, str] | None = None
    mood_keywords: dict[str, list[str]] | None = Field(default=None)

    @field_validator("descriptor_pattern")
    @classmethod
    def validate_descriptor_pattern(cls, value: str | None) -> str | None:
        if value is not None:
            _check_regex(value)
        return value

    @field_validator("tag_buckets")
    @classmethod
    def validate_tag_buckets(cls, value: dict[str, str] | None) -> dict[str, str] | None:
        if value is not None:
            for pattern in value.values():
                _check_regex(pattern)
        return value

    def to_rules(self) -> NormalizerRules:
        return NormalizerRules.from_tables(
            synonyms=self.synonyms,
            descriptor_pattern=self.descriptor_pattern,
            tag_buckets=self.tag_buckets,
            mood_keywords=self.mood_keywords,
        )


def _check_regex(pattern: str) -> None:
    try:
        re.compile(pattern)
    except re.error as e:
        raise ValueError(f"invalid regex {pattern!r}: {e}") from e


def load_normalizer_rules(path: Path | str) -> NormalizerRules:
    """Load and compile a rules file.

    Raises:
        ConfigurationError: If the file is unreadable, not JSON, or fails validation
    """
    rules_path = Path(path)
    try:
        data = json.loads(rules_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Cannot read normalizer rules file {rules_path}: {e}") from e
    except ValueError as e:
        raise ConfigurationError(f"Normalizer rules file {rules_path} is not valid JSON: {e}") from e

    try:
        model = RulesFileModel.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid normalizer rules file {rules_path}: {e}") from e

    try:
        rules = model.to_rules()
    except ConfigurationError as e:
        raise ConfigurationError(f"Invalid normalizer rules file {rules_path}: {e}") from e

    logger.info("Loaded normalizer rules from %s", rules_path)
    return rules
