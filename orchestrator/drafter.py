from api.base_client import BaseAIClient
from utils.logger import get_logger

from .prompts import DRAFTER_PARAMS, DRAFTER_SYSTEM_PROMPT, RESEARCH_SEPARATOR, drafter_user_prompt

logger = get_logger(__name__)


def build_research_context(research: list[str]) -> str:
    return RESEARCH_SEPARATOR.join(research)


class Drafter:
    """Writes the first full article draft from the topic and research snippets."""

    def __init__(self, client: BaseAIClient):
        self.client = client

    def draft(self, topic: str, research: list[str]) -> str:
        """Returns the draft text, or "" when the model produced nothing. Client errors propagate."""
        text = self.client.get_completion(
            [
                {"role": "system", "content": DRAFTER_SYSTEM_PROMPT},
                {"role": "user", "content": drafter_user_prompt(topic, build_research_context(research))},
            ],
            temperature=DRAFTER_PARAMS.temperature,
            max_tokens=DRAFTER_PARAMS.max_tokens,
        )
        draft = text or ""
        if not draft.strip():
            logger.warning("Drafter returned empty text")
            return ""
        return draft
