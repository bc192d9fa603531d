from api.base_client import BaseAIClient
from utils.logger import get_logger

from .prompts import REFINER_PARAMS, REFINER_SYSTEM_PROMPT

logger = get_logger(__name__)


class Refiner:
    """Editorial pass over a draft. Never blanks out a good draft."""

    def __init__(self, client: BaseAIClient):
        self.client = client

    def refine(self, draft: str) -> str:
        text = self.client.get_completion(
            [
                {"role": "system", "content": REFINER_SYSTEM_PROMPT},
                {"role": "user", "content": draft},
            ],
            temperature=REFINER_PARAMS.temperature,
            max_tokens=REFINER_PARAMS.max_tokens,
        )
        if not text or not text.strip():
            logger.warning("Refiner returned empty text; keeping the unrefined draft")
            return draft
        return text
