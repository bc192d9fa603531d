import time
from typing import Optional

import openai

from utils.logger import get_logger

from .base_client import BaseAIClient, Message

logger = get_logger(__name__)

DEFAULT_TIMEOUT_S = 120.0


class OpenAIClient(BaseAIClient):
    """
    A client for the OpenAI Chat Completions API.
    """

    provider = "openai"

    def __init__(
        self,
        api_key: str,
        model_name: str = "gpt-4o",
        timeout: float = DEFAULT_TIMEOUT_S,
        **kwargs,
    ):
        """
        Initialize the OpenAI client.

        Args:
            api_key: The OpenAI API key
            model_name: The name of the model to use (default: gpt-4o)
            timeout: Whole-request timeout in seconds
            **kwargs: Additional keyword arguments
        """
        super().__init__(api_key, model_name=model_name, **kwargs)
        # Single attempt per call, no SDK retries
        self.client = openai.OpenAI(api_key=api_key, timeout=timeout, max_retries=0)
        self.timeout = timeout
        self.model_name = model_name

    def get_completion(
        self,
        messages: list[Message],
        *,
        temperature: float = 0.7,
        max_tokens: int = 1024,
        model: Optional[str] = None,
    ) -> str:
        model = model or self.model_name
        start_time = time.time()

        response = self.client.chat.completions.create(
            model=model,
            messages=self._normalize_messages(messages),
            temperature=temperature,
            max_tokens=max_tokens,
        )

        text = ""
        if response.choices:
            text = self._text_or_empty(response.choices[0].message.content)

        usage = getattr(response, "usage", None)
        logger.debug(
            "OpenAI completion finished",
            extra={
                "extra_fields": {
                    "model": model,
                    "latency_ms": int((time.time() - start_time) * 1000),
                    "total_tokens": getattr(usage, "total_tokens", None),
                    "chars": len(text),
                }
            },
        )
        return text
