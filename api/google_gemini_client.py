import time
from typing import Optional

from google import genai

from utils.logger import get_logger

from .base_client import BaseAIClient, Message

logger = get_logger(__name__)

DEFAULT_TIMEOUT_S = 120.0


class GeminiClient(BaseAIClient):
    """
    A client for the Google Gemini API using the google.genai package.

    System messages are folded into the request's system instruction; the
    remaining turns are sent as contents, with "assistant" mapped to Gemini's
    "model" role.
    """

    provider = "gemini"

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-2.5-flash",
        timeout: float = DEFAULT_TIMEOUT_S,
        **kwargs,
    ):
        """
        Initialize the Gemini client.

        Args:
            api_key: The Google Gemini API key
            model_name: The name of the model to use (default: gemini-2.5-flash)
            timeout: Request timeout in seconds
            **kwargs: Additional keyword arguments
        """
        super().__init__(api_key, model_name=model_name, **kwargs)

        if not api_key:
            raise ValueError("API key is required for Gemini")

        # google.genai takes its HTTP timeout in milliseconds
        self.client = genai.Client(api_key=api_key, http_options={"timeout": int(timeout * 1000)})
        self.timeout = timeout
        self.model_name = model_name

    @staticmethod
    def _split_messages(messages: list[Message]) -> tuple[str, list[dict]]:
        system_parts = []
        contents = []
        for message in messages:
            if message["role"] == "system":
                system_parts.append(message["content"])
                continue
            role = "model" if message["role"] == "assistant" else "user"
            contents.append({"role": role, "parts": [{"text": message["content"]}]})
        return "\n\n".join(system_parts), contents

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

        system_instruction, contents = self._split_messages(self._normalize_messages(messages))
        if not contents:
            raise ValueError("Gemini requires at least one user message")

        config = {
            'temperature': temperature,
            'max_output_tokens': max_tokens,
        }
        if system_instruction:
            config['system_instruction'] = system_instruction

        response = self.client.models.generate_content(
            model=model,
            contents=contents,
            config=config,
        )

        text = self._text_or_empty(getattr(response, 'text', None))

        usage_metadata = getattr(response, 'usage_metadata', None)
        logger.debug(
            "Gemini completion finished",
            extra={
                "extra_fields": {
                    "model": model,
                    "latency_ms": int((time.time() - start_time) * 1000),
                    "total_tokens": getattr(usage_metadata, 'total_token_count', None),
                    "chars": len(text),
                }
            },
        )
        return text
