"""Local JSON file catalog source."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from songshelf.domain.exceptions import CatalogLoadError
from songshelf.domain.ports import ICatalogSource

logger = logging.getLogger(__name__)


class JsonFileCatalogSource(ICatalogSource):
    """Read the raw catalog (a JSON array) from a file on disk."""

    def __init__(self, path: Path | str, encoding: str = "utf-8") -> None:
        self._path = Path(path)
        self._encoding = encoding

    @property
    def description(self) -> str:
        return str(self._path)

    async def fetch_raw_songs(self) -> list[Any]:
        """Read and decode the catalog file.

        The read runs in a worker thread so a big file doesn't stall the event loop.

        Raises:
            CatalogLoadError: If the file is missing/unreadable, not JSON, or not an array
        """
        try:
            text = await asyncio.to_thread(self._read_text)
        except (OSError, UnicodeDecodeError) as e:
            raise CatalogLoadError(
                f"Failed to read catalog file {self._path}: {e}", source=str(self._path)
            ) from e

        try:
            payload = json.loads(text)
        except ValueError as e:
            # JSONDecodeError, plus int() digit-limit errors for absurdly long numbers
            raise CatalogLoadError(
                f"Catalog file {self._path} is not valid JSON: {e}", source=str(self._path)
            ) from e

        if not isinstance(payload, list):
            raise CatalogLoadError(
                f"Catalog file {self._path} must contain a JSON array, "
                f"got {type(payload).__name__}",
                source=str(self._path),
            )
        logger.debug("Read %d raw records from %s", len(payload), self._path)
        return payload

    def _read_text(self) -> str:
        return self._path.read_text(encoding=self._encoding)
