"""Build the generative-text client for the configured provider."""

from config.config import Config, ModelType
from utils.logger import get_logger

from .base_client import BaseAIClient

logger = get_logger(__name__)


def create_ai_client(config: Config) -> BaseAIClient:
    """
    Initialize the AI client selected by ``config.MODEL_TYPE``.

    Provider SDKs are imported lazily so only the active one has to be installed.

    Raises:
        ValueError: If the model type is unsupported or its API key is missing
    """
    model_type = config.MODEL_TYPE

    if model_type == ModelType.OPENAI.value:
        from api.openai_client import OpenAIClient

        if not config.OPENAI_API_KEY:
            raise ValueError("OPENAI_API_KEY not found in environment variables")
        client = OpenAIClient(
            api_key=config.OPENAI_API_KEY,
            model_name=config.DEFAULT_OPENAI_MODEL,
            timeout=config.GENERATION_TIMEOUT_S,
        )

    elif model_type == ModelType.GEMINI.value:
        from api.google_gemini_client import GeminiClient

        if not config.GOOGLE_GEMINI_API_KEY:
            raise ValueError("GOOGLE_GEMINI_API_KEY not found in environment variables")
        client = GeminiClient(
            api_key=config.GOOGLE_GEMINI_API_KEY,
            model_name=config.DEFAULT_GEMINI_MODEL,
            timeout=config.GENERATION_TIMEOUT_S,
        )

    else:
        raise ValueError(f"Unsupported MODEL_TYPE: {model_type}. Must be 'openai' or 'gemini'")

    logger.info(f"Initialized {client.provider} client with model: {client.model_name}")
    return client
