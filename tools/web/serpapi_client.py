"""SerpAPI search backend (https://serpapi.com)."""

import json
from typing import Any

import httpx

from utils.logger import get_logger

from .base_search_client import BaseSearchClient
from .contracts import SearchError, SearchResult
from .http_fetch import fetch_with_deadline

logger = get_logger(__name__)

SERPAPI_SEARCH_URL = "https://serpapi.com/search.json"
DEFAULT_TIMEOUT_S = 10.0


def _clean(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class SerpApiClient(BaseSearchClient):
    """
    Query SerpAPI's JSON endpoint and read ``organic_results``.
    """

    provider = "serpapi"

    def __init__(
        self,
        api_key: str,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        http_client: httpx.Client | None = None,
        search_url: str = SERPAPI_SEARCH_URL,
    ):
        """
        Args:
            api_key: SerpAPI key
            timeout_s: Total time allowed for each search request, body included
            http_client: Optional pre-built client (tests inject a MockTransport here)
            search_url: Endpoint override
        """
        self.api_key = api_key
        self.timeout_s = timeout_s
        self._http_client = http_client
        self.search_url = search_url

    def search(self, query: str, *, num_results: int, engine: str) -> list[SearchResult]:
        if not self.api_key:
            raise SearchError("SERPAPI_API_KEY not set in environment")

        params = {
            "q": query,
            "api_key": self.api_key,
            "num": str(num_results),
            "engine": engine,
        }
        logger.debug(f"SerpAPI search: '{query}' (num={num_results}, engine={engine})")

        body = fetch_with_deadline(
            "GET",
            self.search_url,
            timeout_s=self.timeout_s,
            http_client=self._http_client,
            params=params,
        )

        try:
            payload = json.loads(body)
        except ValueError as e:
            raise SearchError(f"SerpAPI returned invalid JSON: {e}") from e

        if not isinstance(payload, dict):
            raise SearchError("SerpAPI returned an unexpected payload")
        if payload.get("error") and not payload.get("organic_results"):
            raise SearchError(f"SerpAPI error: {payload['error']}")

        organic = payload.get("organic_results") or []
        if not isinstance(organic, list):
            raise SearchError("SerpAPI 'organic_results' is not a list")

        results = []
        for item in organic:
            if not isinstance(item, dict):
                continue
            results.append(
                SearchResult(
                    title=_clean(item.get("title")),
                    snippet=_clean(item.get("snippet")),
                    link=_clean(item.get("link")),
                )
            )
        return results
