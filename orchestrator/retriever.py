"""Retriever: runs the planned queries against the search backend and flattens the results."""

from config.config import DEFAULT_MAX_RESULTS_PER_QUERY, DEFAULT_SEARCH_ENGINE
from tools.web import BaseSearchClient, SearchResult
from utils.logger import get_logger

from .prompts import NO_RESULTS_TEMPLATE

logger = get_logger(__name__)


def format_snippet(result: SearchResult) -> str:
    """
    Render one result as ``title / snippet / Source: link`` lines.

    Missing or blank fields are dropped; a result with nothing usable renders
    as an empty string.
    """
    title = (result.title or "").strip()
    snippet = (result.snippet or "").strip()
    link = (result.link or "").strip()
    parts = [title, snippet, f"Source: {link}" if link else ""]
    return "\n".join(part for part in parts if part)


def no_results_snippet(topic: str) -> str:
    return NO_RESULTS_TEMPLATE.format(topic=topic)


class Retriever:
    """
    Issues one search per query, sequentially.

    A failing query (timeout, HTTP error, bad payload, missing key) is logged
    and skipped. The returned research set is never empty.
    """

    def __init__(
        self,
        search_client: BaseSearchClient,
        max_results: int = DEFAULT_MAX_RESULTS_PER_QUERY,
        engine: str = DEFAULT_SEARCH_ENGINE,
    ):
        self.search_client = search_client
        self.max_results = max(1, max_results)
        self.engine = engine

    def _search_one(self, query: str) -> list[str]:
        results = self.search_client.search(query, num_results=self.max_results, engine=self.engine)
        snippets = []
        for result in list(results or [])[: self.max_results]:
            text = format_snippet(result)
            if text:
                snippets.append(text)
        return snippets

    def retrieve(self, queries: list[str], topic: str) -> list[str]:
        research: list[str] = []
        failed = 0

        for query in queries:
            try:
                snippets = self._search_one(query)
            except Exception as e:
                failed += 1
                logger.warning(
                    "Search query failed; skipping",
                    extra={
                        "extra_fields": {
                            "query": query,
                            "provider": getattr(self.search_client, "provider", "unknown"),
                            "error": str(e),
                            "error_type": type(e).__name__,
                        }
                    },
                )
                continue
            research.extend(snippets)

        if not research:
            logger.warning(
                "No search results collected; using general-knowledge fallback",
                extra={"extra_fields": {"queries": len(queries), "failed_queries": failed}},
            )
            return [no_results_snippet(topic)]

        logger.info(
            f"Collected {len(research)} research snippets",
            extra={"extra_fields": {"queries": len(queries), "failed_queries": failed}},
        )
        return research
