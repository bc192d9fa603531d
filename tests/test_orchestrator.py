"""
Pipeline-level behaviour of ArticleOrchestrator with fake collaborators.

Covers input/config rejection without collaborator calls, each fallback path,
error mapping at the outer boundary and progress reporting.
"""

import pytest

from config.config import Config
from conftest import FakeAIClient, FakeSearchClient, make_results
from models.article_response import PipelineStage
from orchestrator.core import (
    EMPTY_DRAFT_MESSAGE,
    INVALID_BODY_MESSAGE,
    INVALID_TOPIC_MESSAGE,
    ArticleOrchestrator,
)
from orchestrator.retriever import no_results_snippet
from tools.web import SearchError

QUERIES = "local election candidates\nelection turnout data\nballot measures explained"


def build(config, replies, search=None):
    ai = FakeAIClient(replies)
    search = search if search is not None else FakeSearchClient(default=make_results("r"))
    return ArticleOrchestrator(config=config, ai_client=ai, search_client=search), ai, search


# -------------------------------------------------------------------
# Validation
# -------------------------------------------------------------------


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"topic": None},
        {"topic": ""},
        {"topic": "   "},
        {"topic": "\n\t"},
        {"topic": 42},
        {"topic": ["Local elections"]},
    ],
)
def test_invalid_topic_rejected_without_collaborators(config, payload):
    orchestrator, ai, search = build(config, [])
    result = orchestrator.generate(payload)

    assert result.is_error
    assert result.error.code == "bad_request"
    assert result.status_code == 400
    assert result.to_body() == {"error": INVALID_TOPIC_MESSAGE}
    assert ai.calls == []
    assert search.calls == []


@pytest.mark.parametrize("payload", [None, "Local elections", ["topic"], 7])
def test_non_object_body_rejected(config, payload):
    orchestrator, ai, search = build(config, [])
    result = orchestrator.generate(payload)

    assert result.status_code == 400
    assert result.to_body() == {"error": INVALID_BODY_MESSAGE}
    assert ai.calls == [] and search.calls == []


def test_missing_credential_rejected_without_collaborators(clean_env):
    clean_env.setenv("SERPAPI_API_KEY", "serp")
    orchestrator, ai, search = build(Config(), [])
    result = orchestrator.generate({"topic": "Local elections"})

    assert result.error.code == "config"
    assert result.status_code == 500
    assert result.to_body() == {"error": "OpenAI API key is not configured."}
    assert ai.calls == [] and search.calls == []


def test_whitespace_credential_rejected_without_collaborators(clean_env):
    clean_env.setenv("OPENAI_API_KEY", "   ")
    clean_env.setenv("SERPAPI_API_KEY", "serp")
    orchestrator, ai, search = build(Config(), [])
    result = orchestrator.generate({"topic": "Local elections"})

    assert result.error.code == "config"
    assert result.to_body() == {"error": "OpenAI API key is not configured."}
    assert ai.calls == [] and search.calls == []


def test_unknown_search_provider_is_config_error(clean_env):
    clean_env.setenv("OPENAI_API_KEY", "sk-test")
    clean_env.setenv("SEARCH_PROVIDER", "altavista")
    ai = FakeAIClient([])
    orchestrator = ArticleOrchestrator(config=Config(), ai_client=ai)
    result = orchestrator.generate({"topic": "Local elections"})

    assert result.error.code == "config"
    assert result.status_code == 500
    assert result.error.stage == PipelineStage.RECEIVED
    assert result.to_body()["error"].startswith("Unknown SEARCH_PROVIDER 'altavista'")
    assert ai.calls == []


def test_unknown_model_type_is_config_error(clean_env):
    clean_env.setenv("OPENAI_API_KEY", "sk-test")
    clean_env.setenv("MODEL_TYPE", "llama")
    search = FakeSearchClient()
    orchestrator = ArticleOrchestrator(config=Config(), search_client=search)
    result = orchestrator.generate({"topic": "Local elections"})

    assert result.error.code == "config"
    assert result.to_body()["error"].startswith("Unknown MODEL_TYPE 'llama'")
    assert search.calls == []


def test_injected_clients_skip_provider_checks(clean_env):
    clean_env.setenv("OPENAI_API_KEY", "sk-test")
    clean_env.setenv("SEARCH_PROVIDER", "altavista")
    orchestrator, _, _ = build(Config(), [QUERIES, "Draft", "Article"])
    assert orchestrator.generate({"topic": "Local elections"}).is_success


def test_topic_checked_before_credential(clean_env):
    orchestrator, _, _ = build(Config(), [])
    result = orchestrator.generate({"topic": ""})
    assert result.status_code == 400


# -------------------------------------------------------------------
# End-to-end scenarios
# -------------------------------------------------------------------


def test_full_research_produces_article(config):
    search = FakeSearchClient(default=make_results("hit", 3))
    orchestrator, ai, search = build(config, [QUERIES, "Draft body", "Final article"], search)

    result = orchestrator.generate({"topic": "Local elections"})

    assert result.is_success
    assert result.to_body() == {"article": "Final article"}
    assert result.queries == QUERIES.splitlines()
    assert result.source_count == 9
    assert [c["query"] for c in search.calls] == QUERIES.splitlines()
    assert len(ai.calls) == 3
    # The refiner receives exactly the draft
    assert ai.calls[2]["messages"][1]["content"] == "Draft body"


def test_no_search_results_still_succeeds(config):
    search = FakeSearchClient(default=[])
    orchestrator, ai, _ = build(config, [QUERIES, "Draft", "Article"], search)

    result = orchestrator.generate({"topic": "Obscure topic X"})

    assert result.to_body() == {"article": "Article"}
    drafter_prompt = ai.calls[1]["messages"][1]["content"]
    assert no_results_snippet("Obscure topic X") in drafter_prompt


def test_every_search_failing_still_succeeds(config):
    search = FakeSearchClient(default=SearchError("503 from provider"))
    orchestrator, _, _ = build(config, [QUERIES, "Draft", "Article"], search)

    result = orchestrator.generate({"topic": "Obscure topic X"})

    assert result.is_success
    assert result.source_count == 1


def test_topic_is_trimmed_before_use(config):
    orchestrator, ai, _ = build(config, ["", "Draft", "Article"])
    result = orchestrator.generate({"topic": "  Local elections  "})

    assert result.queries == ["Local elections"]
    assert ai.calls[0]["messages"][1]["content"] == "Topic: Local elections"


def test_drafter_exception_message_is_reported(config):
    orchestrator, ai, _ = build(config, [QUERIES, ConnectionError("Connection reset by peer")])
    result = orchestrator.generate({"topic": "Local elections"})

    assert result.error.code == "internal"
    assert result.status_code == 500
    assert result.to_body() == {"error": "Connection reset by peer"}
    assert result.error.stage == PipelineStage.QUERIED
    assert len(ai.calls) == 2


def test_planner_exception_aborts_request(config):
    orchestrator, _, search = build(config, [RuntimeError("quota exceeded")])
    result = orchestrator.generate({"topic": "Local elections"})

    assert result.to_body() == {"error": "quota exceeded"}
    assert search.calls == []


def test_exception_without_message_uses_generic_text(config):
    orchestrator, _, _ = build(config, [QUERIES, RuntimeError()])
    result = orchestrator.generate({"topic": "Local elections"})
    assert result.to_body() == {"error": "Internal server error"}


@pytest.mark.parametrize("empty_draft", [None, "", "   "])
def test_empty_draft_is_error_and_refiner_not_called(config, empty_draft):
    orchestrator, ai, _ = build(config, [QUERIES, empty_draft])
    result = orchestrator.generate({"topic": "Local elections"})

    assert result.error.code == "generation_failed"
    assert result.status_code == 500
    assert result.to_body() == {"error": EMPTY_DRAFT_MESSAGE}
    assert len(ai.calls) == 2


@pytest.mark.parametrize("empty_refinement", [None, "", " \n"])
def test_empty_refinement_returns_draft_verbatim(config, empty_refinement):
    draft = "# Headline\n\nDraft body with trailing space "
    orchestrator, _, _ = build(config, [QUERIES, draft, empty_refinement])
    result = orchestrator.generate({"topic": "Local elections"})

    assert result.to_body() == {"article": draft}


def test_response_body_has_exactly_one_field(config):
    ok, _, _ = build(config, [QUERIES, "Draft", "Article"])
    failed, _, _ = build(config, [QUERIES, ""])

    assert set(ok.generate({"topic": "t"}).to_body()) == {"article"}
    assert set(failed.generate({"topic": "t"}).to_body()) == {"error"}


# -------------------------------------------------------------------
# Progress reporting
# -------------------------------------------------------------------


def test_progress_callback_sees_every_stage_in_order(config):
    orchestrator, _, _ = build(config, [QUERIES, "Draft", "Article"])
    stages = []
    orchestrator.generate({"topic": "Local elections"}, progress_callback=stages.append)

    assert stages == [
        PipelineStage.RECEIVED,
        PipelineStage.VALIDATED,
        PipelineStage.QUERIED,
        PipelineStage.DRAFTED,
        PipelineStage.REFINED,
        PipelineStage.RESPONDED,
    ]


def test_progress_callback_reports_error_terminal_state(config):
    orchestrator, _, _ = build(config, [])
    stages = []
    orchestrator.generate({"topic": ""}, progress_callback=stages.append)
    assert stages == [PipelineStage.RECEIVED, PipelineStage.ERROR]


def test_failing_progress_callback_does_not_break_request(config):
    orchestrator, _, _ = build(config, [QUERIES, "Draft", "Article"])

    def explode(stage):
        raise RuntimeError("ui went away")

    result = orchestrator.generate({"topic": "Local elections"}, progress_callback=explode)
    assert result.to_body() == {"article": "Article"}


def test_each_request_gets_its_own_id(config):
    orchestrator, _, _ = build(config, [QUERIES, "D1", "A1", QUERIES, "D2", "A2"])
    first = orchestrator.generate({"topic": "one"})
    second = orchestrator.generate({"topic": "two"})

    assert first.request_id != second.request_id
    assert (first.article, second.article) == ("A1", "A2")
