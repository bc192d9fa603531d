from abc import ABC, abstractmethod

from .contracts import SearchResult


class BaseSearchClient(ABC):
    """
    Abstract base class for web-search backends.

    Implementations raise on any failure (timeout, HTTP status, malformed
    payload, missing credential). Callers decide whether a failure is fatal.
    """

    provider: str = "unknown"

    @abstractmethod
    def search(self, query: str, *, num_results: int, engine: str) -> list[SearchResult]:
        """
        Run one search query.

        Args:
            query: Search query text
            num_results: Maximum number of results requested from the provider
            engine: Engine selector understood by the backend (e.g. "google")

        Returns:
            Results in provider ranking order
        """
