"""Factory for creating the web search backend from configuration."""

from config.config import Config, SearchProvider
from utils.logger import get_logger

from .base_search_client import BaseSearchClient
from .serpapi_client import SerpApiClient
from .tavily_client import TavilySearchClient

logger = get_logger(__name__)


def create_search_client(config: Config) -> BaseSearchClient:
    """
    Create the search client selected by ``config.SEARCH_PROVIDER``.

    A missing search key is not an error here: each query will fail and the
    retriever falls back to its no-results snippet.

    Raises:
        ValueError: If SEARCH_PROVIDER names an unknown backend
    """
    provider = config.SEARCH_PROVIDER

    if provider == SearchProvider.SERPAPI.value:
        client: BaseSearchClient = SerpApiClient(
            api_key=config.SERPAPI_API_KEY, timeout_s=config.SEARCH_TIMEOUT_S
        )
    elif provider == SearchProvider.TAVILY.value:
        client = TavilySearchClient(api_key=config.TAVILY_API_KEY, timeout_s=config.SEARCH_TIMEOUT_S)
    else:
        raise ValueError(f"Unsupported SEARCH_PROVIDER: {provider}. Must be 'serpapi' or 'tavily'")

    if not config.search_api_key:
        logger.warning(f"Search provider '{provider}' has no API key; research will use fallback text")

    logger.info(f"Using {provider} for web research (timeout={config.SEARCH_TIMEOUT_S}s)")
    return client
