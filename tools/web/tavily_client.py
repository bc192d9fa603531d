"""Tavily search backend (https://tavily.com), called over plain HTTP."""

import json
from typing import Any

import httpx

from utils.logger import get_logger

from .base_search_client import BaseSearchClient
from .contracts import SearchError, SearchResult
from .http_fetch import fetch_with_deadline

logger = get_logger(__name__)

TAVILY_SEARCH_URL = "https://api.tavily.com/search"
DEFAULT_TIMEOUT_S = 10.0
MAX_TAVILY_RESULTS = 10


def _clean(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class TavilySearchClient(BaseSearchClient):
    """
    Tavily-powered search.

    Tavily picks its own sources, so the ``engine`` selector is accepted for
    interface compatibility and ignored. ``content`` maps to the snippet and
    ``url`` to the link.
    """

    provider = "tavily"

    def __init__(
        self,
        api_key: str,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        http_client: httpx.Client | None = None,
        search_url: str = TAVILY_SEARCH_URL,
    ):
        self.api_key = api_key
        self.timeout_s = timeout_s
        self._http_client = http_client
        self.search_url = search_url

    def search(self, query: str, *, num_results: int, engine: str) -> list[SearchResult]:
        if not self.api_key:
            raise SearchError("TAVILY_API_KEY not set in environment")

        request_payload = {
            "api_key": self.api_key,
            "query": query,
            "search_depth": "basic",
            "include_answer": False,
            "max_results": max(1, min(int(num_results), MAX_TAVILY_RESULTS)),
        }
        logger.debug(f"Tavily search: '{query}' (max_results={request_payload['max_results']})")

        body = fetch_with_deadline(
            "POST",
            self.search_url,
            timeout_s=self.timeout_s,
            http_client=self._http_client,
            json=request_payload,
        )

        try:
            payload = json.loads(body) if body else {}
        except ValueError as e:
            raise SearchError(f"Tavily returned invalid JSON: {e}") from e

        if not isinstance(payload, dict):
            raise SearchError("Tavily returned an unexpected payload")

        items = payload.get("results") or []
        if not isinstance(items, list):
            raise SearchError("Tavily 'results' is not a list")

        return [
            SearchResult(
                title=_clean(item.get("title")),
                snippet=_clean(item.get("content")),
                link=_clean(item.get("url")),
            )
            for item in items
            if isinstance(item, dict)
        ]
