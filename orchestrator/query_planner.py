from api.base_client import BaseAIClient
from config.config import DEFAULT_MAX_QUERIES
from utils.logger import get_logger

from .prompts import PLANNER_PARAMS, PLANNER_SYSTEM_PROMPT, planner_user_prompt

logger = get_logger(__name__)


def parse_queries(text: str | None, max_queries: int = DEFAULT_MAX_QUERIES) -> list[str]:
    """Split model output into trimmed, non-empty lines, keeping the first ``max_queries``."""
    if not text:
        return []
    lines = [line.strip() for line in text.splitlines()]
    return [line for line in lines if line][:max_queries]


class QueryPlanner:
    """Turns a topic into a short list of web search queries with one model call."""

    def __init__(self, client: BaseAIClient, max_queries: int = DEFAULT_MAX_QUERIES):
        self.client = client
        self.max_queries = max(1, max_queries)

    def plan(self, topic: str) -> list[str]:
        """
        Returns 1..max_queries queries. Falls back to the topic itself when the
        model gives nothing usable. Client errors propagate.
        """
        topic = topic.strip()
        text = self.client.get_completion(
            [
                {"role": "system", "content": PLANNER_SYSTEM_PROMPT},
                {"role": "user", "content": planner_user_prompt(topic)},
            ],
            temperature=PLANNER_PARAMS.temperature,
            max_tokens=PLANNER_PARAMS.max_tokens,
        )

        queries = parse_queries(text, self.max_queries)
        if not queries:
            logger.warning("Query planner returned no usable text; searching for the topic itself")
            return [topic]

        logger.info(
            f"Planned {len(queries)} search queries",
            extra={"extra_fields": {"queries": queries}},
        )
        return queries
