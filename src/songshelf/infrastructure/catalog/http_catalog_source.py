"""HTTP catalog source - GET songs.json from a web server.

Hey future me - this is a ONE-SHOT fetch at startup, not a long-lived client! We open an
httpx.AsyncClient, GET the catalog, and close it again. Tests (or a host app that already
has a client) can pass their own AsyncClient; that one is NOT closed here - whoever created
it owns it.
"""

import logging
from typing import Any

import httpx

from songshelf.domain.exceptions import CatalogLoadError
from songshelf.domain.ports import ICatalogSource

logger = logging.getLogger(__name__)


class HttpCatalogSource(ICatalogSource):
    """Fetch the raw catalog (a JSON array) over HTTP."""

    DEFAULT_TIMEOUT = 10.0

    def __init__(
        self,
        url: str,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._client = client

    @property
    def description(self) -> str:
        return self._url

    async def fetch_raw_songs(self) -> list[Any]:
        """GET the catalog and return the decoded JSON array.

        Raises:
            CatalogLoadError: On transport errors, non-2xx status, invalid JSON,
                or a JSON payload that isn't an array
        """
        try:
            if self._client is not None:
                response = await self._client.get(self._url, timeout=self._timeout)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.get(self._url)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise CatalogLoadError(
                f"Failed to load catalog from {self._url}: HTTP {e.response.status_code}",
                source=self._url,
            ) from e
        except httpx.HTTPError as e:
            raise CatalogLoadError(
                f"Failed to fetch catalog from {self._url}: {e}", source=self._url
            ) from e
        except ValueError as e:
            # JSONDecodeError, UnicodeDecodeError (body not UTF-8) and int digit-limit errors
            raise CatalogLoadError(
                f"Catalog at {self._url} is not valid JSON: {e}", source=self._url
            ) from e

        if not isinstance(payload, list):
            raise CatalogLoadError(
                f"Catalog at {self._url} must be a JSON array, got {type(payload).__name__}",
                source=self._url,
            )
        logger.debug("Fetched %d raw records from %s", len(payload), self._url)
        return payload
