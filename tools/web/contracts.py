"""Data contracts for the web search module."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SearchResult:
    """One organic result from a search provider. Every field may be missing."""

    title: str | None = None
    snippet: str | None = None
    link: str | None = None


class SearchError(Exception):
    """Raised when a search backend cannot produce results for a query."""
