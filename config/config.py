import os
from dotenv import load_dotenv
from pathlib import Path
from enum import Enum

from utils.logger import get_logger

logger = get_logger(__name__)


class ModelType(Enum):
    """Supported generative-text providers."""
    OPENAI = "openai"
    GEMINI = "gemini"


class SearchProvider(Enum):
    """Supported web-search backends."""
    SERPAPI = "serpapi"
    TAVILY = "tavily"


DEFAULT_MAX_QUERIES = 3
DEFAULT_MAX_RESULTS_PER_QUERY = 3
DEFAULT_SEARCH_TIMEOUT_S = 10.0
DEFAULT_SEARCH_ENGINE = "google"
DEFAULT_GENERATION_TIMEOUT_S = 120.0


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Invalid integer for {name}: {raw!r}; using {default}")
        return default
    if value < 1:
        logger.warning(f"{name} must be >= 1, got {value}; using {default}")
        return default
    return value


def _key_env(name: str) -> str:
    """API keys are stripped; a blank value counts as unset."""
    return (os.getenv(name) or "").strip()


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Invalid number for {name}: {raw!r}; using {default}")
        return default
    if value <= 0:
        logger.warning(f"{name} must be > 0, got {value}; using {default}")
        return default
    return value


class Config:
    """Configuration management for the article pipeline."""

    def __init__(self):
        """Initialize configuration with environment variables."""
        # Load environment variables from .env file if it exists
        env_path = Path(__file__).parent.parent / '.env'
        if env_path.exists():
            load_dotenv(dotenv_path=env_path)

        # Generative-text provider
        self.MODEL_TYPE = (os.getenv('MODEL_TYPE') or ModelType.OPENAI.value).lower().strip()
        self.OPENAI_API_KEY = _key_env('OPENAI_API_KEY')
        self.GOOGLE_GEMINI_API_KEY = _key_env('GOOGLE_GEMINI_API_KEY')
        self.DEFAULT_OPENAI_MODEL = os.getenv('DEFAULT_OPENAI_MODEL') or 'gpt-4o'
        self.DEFAULT_GEMINI_MODEL = os.getenv('DEFAULT_GEMINI_MODEL') or 'gemini-2.5-flash'
        self.GENERATION_TIMEOUT_S = _float_env('GENERATION_TIMEOUT_S', DEFAULT_GENERATION_TIMEOUT_S)

        if self.MODEL_TYPE == ModelType.GEMINI.value:
            self.DEFAULT_MODEL = self.DEFAULT_GEMINI_MODEL
        else:
            self.DEFAULT_MODEL = self.DEFAULT_OPENAI_MODEL

        # Web search
        self.SEARCH_PROVIDER = (os.getenv('SEARCH_PROVIDER') or SearchProvider.SERPAPI.value).lower().strip()
        self.SERPAPI_API_KEY = _key_env('SERPAPI_API_KEY')
        self.TAVILY_API_KEY = _key_env('TAVILY_API_KEY')
        self.SEARCH_ENGINE = os.getenv('SEARCH_ENGINE') or DEFAULT_SEARCH_ENGINE

        # Pipeline caps
        self.MAX_QUERIES = _int_env('MAX_QUERIES', DEFAULT_MAX_QUERIES)
        self.MAX_RESULTS_PER_QUERY = _int_env('MAX_RESULTS_PER_QUERY', DEFAULT_MAX_RESULTS_PER_QUERY)
        self.SEARCH_TIMEOUT_S = _float_env('SEARCH_TIMEOUT_S', DEFAULT_SEARCH_TIMEOUT_S)

    @property
    def generation_api_key(self) -> str:
        """Credential for the active generative-text provider."""
        if self.MODEL_TYPE == ModelType.GEMINI.value:
            return self.GOOGLE_GEMINI_API_KEY
        return self.OPENAI_API_KEY

    @property
    def search_api_key(self) -> str:
        if self.SEARCH_PROVIDER == SearchProvider.TAVILY.value:
            return self.TAVILY_API_KEY
        return self.SERPAPI_API_KEY

    def credential_error(self) -> str | None:
        """
        User-facing message describing a missing generative-text credential.

        Returns:
            str: the error message, or None when the active provider is configured
        """
        if self.generation_api_key:
            return None
        if self.MODEL_TYPE == ModelType.GEMINI.value:
            return "Gemini API key is not configured."
        return "OpenAI API key is not configured."

    def model_type_error(self) -> str | None:
        if self.MODEL_TYPE in {e.value for e in ModelType}:
            return None
        return (
            f"Unknown MODEL_TYPE '{self.MODEL_TYPE}'. "
            f"Must be one of: {', '.join([e.value for e in ModelType])}"
        )

    def search_provider_error(self) -> str | None:
        if self.SEARCH_PROVIDER in {e.value for e in SearchProvider}:
            return None
        return (
            f"Unknown SEARCH_PROVIDER '{self.SEARCH_PROVIDER}'. "
            f"Must be one of: {', '.join([e.value for e in SearchProvider])}"
        )

    def validate(self) -> bool:
        """
        Validate that all required configuration is present based on the selected model type.

        Returns:
            bool: True if configuration is valid, False otherwise
        """
        message = self.model_type_error() or self.search_provider_error()
        if message:
            logger.error(message)
            return False

        message = self.credential_error()
        if message:
            logger.error(message)
            return False

        if not self.search_api_key:
            # Not fatal: every search degrades to the no-results fallback
            logger.warning(f"No API key configured for search provider '{self.SEARCH_PROVIDER}'")

        return True

    def get_model_info(self) -> str:
        """
        Get information about the currently selected model.

        Returns:
            str: Formatted string with model information
        """
        if self.MODEL_TYPE == ModelType.OPENAI.value:
            return f"OpenAI ({self.DEFAULT_MODEL})"
        elif self.MODEL_TYPE == ModelType.GEMINI.value:
            return f"Google Gemini ({self.DEFAULT_MODEL})"
        return "Unknown"
