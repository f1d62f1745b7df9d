"""Domain exceptions."""

from typing import Any


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    # Hey future me, message is stored as an attribute so callers can inspect it without parsing
    # str(exception). Don't raise this directly - always use a specific subclass so callers can
    # catch precisely.
    def __init__(self, message: str, *args: Any) -> None:
        super().__init__(message, *args)
        self.message = message


class EntityNotFoundException(DomainException):
    """Raised when an entity is not found."""

    # Yo, this is for "get by ID" lookups that fail - e.g. the detail page asks for song "abc"
    # and the catalog has no such id. entity_type/entity_id are kept separately for structured logs.
    def __init__(self, entity_type: str, entity_id: Any) -> None:
        super().__init__(f"{entity_type} with id {entity_id} not found")
        self.entity_type = entity_type
        self.entity_id = entity_id


class ValidationError(DomainException):
    """Input validation failed.

    Raised at the intent boundary when the presentation layer asks for
    something that doesn't exist (unknown facet, unknown sort key, a year
    bound other than "min"/"max").

    Example:
        raise ValidationError("Unknown facet: 'colour'")
    """

    pass


class ConfigurationError(DomainException):
    """Application misconfiguration.

    Raised when a configured resource (e.g. the normalizer rules file) is
    missing or invalid.

    Example:
        raise ConfigurationError("Normalizer rules file not found: rules.json")
    """

    pass


class CatalogLoadError(DomainException):
    """The song catalog could not be fetched or parsed.

    Hey future me - this one is FATAL! Startup stops, the UI shows a blocking
    message and never renders a half-loaded catalog. There is no retry.
    Adapters always chain the library error (raise ... from exc) so the log
    shows the root cause.

    Example:
        raise CatalogLoadError("Failed to load songs.json: HTTP 404", source="songs.json")
    """

    def __init__(self, message: str, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


class MalformedRecordWarning(UserWarning):
    """A catalog record had an unexpected field shape.

    Hey future me - this is NEVER raised! The normalizer creates one per problem,
    logs it and collects it in the NormalizationReport, then keeps going with an
    exclusion-safe default (empty set, empty string, no year). One bad record must
    never take down the batch.
    """

    def __init__(self, record_id: str | None, field: str, reason: str) -> None:
        super().__init__(f"Record {record_id or '<unknown>'}: field '{field}' {reason}")
        self.record_id = record_id
        self.field = field
        self.reason = reason


__all__ = [
    # Base
    "DomainException",
    # Lookup
    "EntityNotFoundException",
    # Validation
    "ValidationError",
    # Configuration
    "ConfigurationError",
    # Catalog
    "CatalogLoadError",
    "MalformedRecordWarning",
]
