"""Catalog Source Client — wraps httpx.AsyncClient with timeout, optional retry, and error mapping.

Invariants:
    - Every request carries a timeout (no unbounded upstream waits)
    - Transient errors (429, 5xx, connection, timeout): retried up to max_retries
      with exponential backoff; default max_retries=0 means a single attempt
    - Client errors (4xx except 429), unparseable URLs and non-JSON bodies:
      immediate failure
    - All failures mapped to UpstreamFetchError (core/errors.py)

Design Decisions:
    - One shared AsyncClient per process: connection pooling + keep-alive across
      the hundreds of detail fetches of one ingestion
    - transport is injectable so tests can plug httpx.MockTransport
    - ±25% jitter on backoff: avoids synchronized retries inside one batch
"""

import asyncio
import logging
import random

import httpx

from storefront.config import Settings, get_settings
from storefront.core.errors import UpstreamFetchError

logger = logging.getLogger(__name__)


def _is_transient_status(status_code: int) -> bool:
    return status_code == 429 or status_code >= 500


class CatalogClient:
    """HTTP access to the paginated catalog API."""

    def __init__(
        self,
        timeout_seconds: float = 10.0,
        max_retries: int = 0,
        base_delay_ms: int = 500,
        max_delay_ms: int = 10_000,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client = httpx.AsyncClient(
            timeout=timeout_seconds,
            transport=transport,
            follow_redirects=True,
            headers={"Accept": "application/json"},
        )
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "CatalogClient":
        return cls(
            timeout_seconds=settings.catalog_timeout_seconds,
            max_retries=settings.catalog_max_retries,
            base_delay_ms=settings.catalog_base_delay_ms,
            max_delay_ms=settings.catalog_max_delay_ms,
            **kwargs,
        )

    async def fetch_page(self, url: str) -> dict:
        """GET one listing page: {results: [{name, url}], next}."""
        return await self._get_json(url)

    async def fetch_detail(self, url: str) -> dict:
        """GET one item detail: {id, sprites: {front_default}, ...}."""
        return await self._get_json(url)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _get_json(self, url: str) -> dict:
        for attempt in range(self.max_retries + 1):
            try:
                response = await self.client.get(url)
                response.raise_for_status()
                return response.json()

            except httpx.HTTPStatusError as e:
                status_code = e.response.status_code
                if not _is_transient_status(status_code):
                    raise UpstreamFetchError(
                        f"HTTP {status_code}", url, status_code,
                    ) from e
                await self._handle_transient_error(e, url, attempt, status_code)

            except httpx.TransportError as e:
                await self._handle_transient_error(e, url, attempt)

            except httpx.InvalidURL as e:
                raise UpstreamFetchError(f"Invalid URL: {e}", url) from e

            except httpx.HTTPError as e:
                raise UpstreamFetchError(f"{type(e).__name__}: {e}", url) from e

            except ValueError as e:
                raise UpstreamFetchError("Response body is not JSON", url) from e

        raise UpstreamFetchError("Retries exhausted", url)

    async def _handle_transient_error(
        self, e: Exception, url: str, attempt: int, status_code: int | None = None,
    ) -> None:
        """Sleep before the next attempt, or raise once retries are used up."""
        if attempt >= self.max_retries:
            raise UpstreamFetchError(
                f"{type(e).__name__}: {e}", url, status_code,
            ) from e
        delay = self._backoff(attempt)
        logger.warning(
            f"Transient catalog error, retry after {delay}ms: {e}",
            extra={"url": url, "attempt": attempt + 1},
        )
        await asyncio.sleep(delay / 1000)

    def _backoff(self, attempt: int) -> int:
        """Exponential backoff with ±25% jitter."""
        delay = min(self.max_delay_ms, (2 ** attempt) * self.base_delay_ms)
        return int(delay * random.uniform(0.75, 1.25))  # nosec B311


_catalog_client: CatalogClient | None = None


def init_catalog_client(settings: Settings) -> CatalogClient:
    global _catalog_client
    _catalog_client = CatalogClient.from_settings(settings)
    return _catalog_client


def get_catalog_client() -> CatalogClient:
    """Process-wide client; created lazily when the lifespan did not run (scripts)."""
    global _catalog_client
    if _catalog_client is None:
        _catalog_client = CatalogClient.from_settings(get_settings())
    return _catalog_client


async def close_catalog_client() -> None:
    global _catalog_client
    if _catalog_client is not None:
        await _catalog_client.aclose()
        _catalog_client = None
