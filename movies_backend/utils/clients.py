# movies_backend/utils/clients.py
import logging
from typing import Any, Optional

import httpx

from movies_backend.config import TMDB_KEY, TMDB_BASE, TMDB_LANG, TIMEOUT_TMDB
from movies_backend.services.errors import CatalogUnavailable

logger = logging.getLogger("movies_backend.clients")


class CatalogClient:
    """Thin async client for the TMDB v3 API. One request per call, no retries."""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = TMDB_BASE,
        language: str = TMDB_LANG,
        timeout: float = TIMEOUT_TMDB,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.language = language
        self.timeout = timeout
        self.transport = transport

    async def _get(self, path: str, params: Optional[dict] = None) -> Any:
        headers = {"Authorization": f"Bearer {self.api_key}", "accept": "application/json"}
        query = {"language": self.language, **(params or {})}
        try:
            async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(path, params=query, headers=headers)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(f"TMDB {path} answered {e.response.status_code}")
            raise CatalogUnavailable(f"TMDB returned {e.response.status_code}", e.response.status_code) from e
        except httpx.HTTPError as e:
            logger.error(f"TMDB request {path} failed: {e}")
            raise CatalogUnavailable(str(e)) from e
        except ValueError as e:
            logger.error(f"TMDB {path} returned an undecodable body: {e}")
            raise CatalogUnavailable(str(e)) from e

    @staticmethod
    def _results(data) -> list:
        results = data.get("results", []) if isinstance(data, dict) else None
        if not isinstance(results, list):
            logger.error(f"TMDB listing has an unexpected shape: {type(data).__name__}")
            raise CatalogUnavailable("unexpected listing payload")
        return results

    async def movie_details(self, movie_id: int) -> dict:
        return await self._get(f"/movie/{movie_id}")

    async def search_movies(self, query: str) -> list:
        return self._results(await self._get("/search/movie", {"query": query, "page": 1}))

    async def popular_movies(self) -> list:
        return self._results(await self._get("/movie/popular", {"page": 1}))


catalog_client = None


def get_catalog_client() -> CatalogClient:
    """
    Returns the shared catalog client.
    Lazy loads the client upon first request.
    """
    global catalog_client
    if catalog_client is None:
        if not TMDB_KEY:
            logger.warning("TMDB_KEY not found in environment variables. Catalog requests will be rejected upstream.")
        catalog_client = CatalogClient(TMDB_KEY)
        logger.info("TMDB catalog client initialized.")
    return catalog_client
