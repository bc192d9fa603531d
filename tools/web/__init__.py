"""Web search tools for NewsDesk."""

from .base_search_client import BaseSearchClient
from .contracts import SearchError, SearchResult
from .factory import create_search_client

__all__ = ["BaseSearchClient", "SearchError", "SearchResult", "create_search_client"]
