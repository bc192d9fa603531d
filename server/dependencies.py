"""FastAPI dependencies for configuration and orchestrator access."""

from config.config import Config
from orchestrator.core import ArticleOrchestrator


def get_config() -> Config:
    """Dependency to get the process configuration (singleton pattern)."""
    if not hasattr(get_config, "_instance"):
        get_config._instance = Config()
    return get_config._instance


def get_orchestrator() -> ArticleOrchestrator:
    """Dependency to get orchestrator instance (singleton pattern)."""
    if not hasattr(get_orchestrator, "_instance"):
        get_orchestrator._instance = ArticleOrchestrator(config=get_config())
    return get_orchestrator._instance
