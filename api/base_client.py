from abc import ABC, abstractmethod
from typing import Any, Optional

# A role-tagged chat message: {"role": "system" | "user" | "assistant", "content": "..."}
Message = dict[str, str]


class BaseAIClient(ABC):
    """
    Abstract base class for generative-text clients.
    Each provider client turns role-tagged messages into generated text.
    """

    provider: str = "unknown"

    @abstractmethod
    def __init__(self, api_key: str, **kwargs):
        """
        Initialize the AI client.

        Args:
            api_key: API key for the AI service
            **kwargs: Additional model-specific parameters
        """
        self.api_key = api_key
        self.model_name = kwargs.get('model_name')

    @abstractmethod
    def get_completion(
        self,
        messages: list[Message],
        *,
        temperature: float = 0.7,
        max_tokens: int = 1024,
        model: Optional[str] = None,
    ) -> str:
        """
        Generate text for an ordered list of role-tagged messages.

        Args:
            messages: Conversation to send, system instructions first
            temperature: Sampling temperature
            max_tokens: Maximum number of tokens to generate
            model: Override the client's default model for this call

        Returns:
            The generated text, or an empty string when the provider produced nothing

        Raises:
            Exception: Transport and API errors are raised to the caller unchanged
        """

    @staticmethod
    def _normalize_messages(messages: list[Message]) -> list[Message]:
        """Drop malformed entries and coerce content to str."""
        normalized: list[Message] = []
        for message in messages or []:
            role = (message.get("role") or "").strip().lower()
            if role not in {"system", "user", "assistant"}:
                continue
            normalized.append({"role": role, "content": str(message.get("content") or "")})
        if not normalized:
            raise ValueError("At least one system, user or assistant message is required")
        return normalized

    @staticmethod
    def _text_or_empty(value: Any) -> str:
        if value is None:
            return ""
        return str(value)
