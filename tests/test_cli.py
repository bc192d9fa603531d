import json

import pytest

import main as cli
from conftest import FakeAIClient, FakeSearchClient, make_results
from orchestrator.core import ArticleOrchestrator


@pytest.fixture
def wire_cli(monkeypatch, config):
    def install(replies):
        orchestrator = ArticleOrchestrator(
            config=config,
            ai_client=FakeAIClient(replies),
            search_client=FakeSearchClient(default=make_results("hit")),
        )
        monkeypatch.setattr(cli, "ArticleOrchestrator", lambda config: orchestrator)

    return install


def test_cli_prints_article_and_progress(wire_cli, capsys):
    wire_cli(["q1\nq2", "Draft", "# Final\n\nBody"])

    assert cli.main(["Local elections"]) == 0
    out, err = capsys.readouterr()
    assert out.strip() == "# Final\n\nBody"
    assert "[validated]" in err
    assert "[responded]" in err


def test_cli_json_output(wire_cli, capsys):
    wire_cli(["q1", "Draft", "Article"])

    assert cli.main(["Local elections", "--json"]) == 0
    out, _ = capsys.readouterr()
    assert json.loads(out) == {"article": "Article"}


def test_cli_reports_errors(wire_cli, capsys):
    wire_cli([])

    assert cli.main(["   "]) == 1
    _, err = capsys.readouterr()
    assert "Error: A valid topic is required." in err
