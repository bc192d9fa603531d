import pytest
from dotenv import load_dotenv

from api.base_client import BaseAIClient
from config.config import Config
from tools.web import BaseSearchClient, SearchResult

# Load environment variables from .env file for tests
load_dotenv()

CONFIG_ENV_VARS = [
    "MODEL_TYPE",
    "OPENAI_API_KEY",
    "GOOGLE_GEMINI_API_KEY",
    "DEFAULT_OPENAI_MODEL",
    "DEFAULT_GEMINI_MODEL",
    "GENERATION_TIMEOUT_S",
    "SEARCH_PROVIDER",
    "SERPAPI_API_KEY",
    "TAVILY_API_KEY",
    "SEARCH_ENGINE",
    "MAX_QUERIES",
    "MAX_RESULTS_PER_QUERY",
    "SEARCH_TIMEOUT_S",
]


# -------------------------------------------------------------------
# Fake collaborators (keep tests offline & deterministic)
# -------------------------------------------------------------------


class FakeAIClient(BaseAIClient):
    """
    Answers each call from a queue of scripted replies.

    A reply may be a string, None, or an Exception instance to raise.
    """

    provider = "fake"

    def __init__(self, replies=None):
        self.api_key = "fake-key"
        self.model_name = "fake-model"
        self.replies = list(replies or [])
        self.calls = []

    def get_completion(self, messages, *, temperature=0.7, max_tokens=1024, model=None):
        self.calls.append(
            {"messages": messages, "temperature": temperature, "max_tokens": max_tokens, "model": model}
        )
        if not self.replies:
            raise AssertionError("FakeAIClient received an unexpected call")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


class FakeSearchClient(BaseSearchClient):
    """
    Looks up results per query; a mapped Exception is raised for that query.
    Unknown queries use ``default``.
    """

    provider = "fake"

    def __init__(self, results_by_query=None, default=None):
        self.results_by_query = dict(results_by_query or {})
        self.default = default if default is not None else []
        self.calls = []

    def search(self, query, *, num_results, engine):
        self.calls.append({"query": query, "num_results": num_results, "engine": engine})
        outcome = self.results_by_query.get(query, self.default)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def make_results(prefix: str, count: int = 3) -> list[SearchResult]:
    return [
        SearchResult(
            title=f"{prefix} title {i}",
            snippet=f"{prefix} snippet {i}",
            link=f"https://example.com/{prefix.replace(' ', '-')}/{i}",
        )
        for i in range(1, count + 1)
    ]


@pytest.fixture
def clean_env(monkeypatch):
    """
    Blank every pipeline variable so Config sees its defaults.

    Blank values (not deleted ones) keep a local .env from filling them back in.
    """
    for name in CONFIG_ENV_VARS:
        monkeypatch.setenv(name, "")
    return monkeypatch


@pytest.fixture
def config(clean_env):
    """Config with an OpenAI credential and SerpAPI key set."""
    clean_env.setenv("OPENAI_API_KEY", "test-openai-key")
    clean_env.setenv("SERPAPI_API_KEY", "test-serpapi-key")
    return Config()
