import httpx
import pytest

from conftest import FakeSearchClient, make_results
from orchestrator.retriever import Retriever, format_snippet, no_results_snippet
from tools.web import SearchError, SearchResult


def test_format_snippet_joins_all_fields():
    result = SearchResult(title="Title", snippet="Body text", link="https://example.com/a")
    assert format_snippet(result) == "Title\nBody text\nSource: https://example.com/a"


@pytest.mark.parametrize(
    "result, expected",
    [
        (SearchResult(title="Only title"), "Only title"),
        (SearchResult(snippet="Only snippet"), "Only snippet"),
        (SearchResult(link="https://example.com"), "Source: https://example.com"),
        (SearchResult(title="T", link="https://example.com"), "T\nSource: https://example.com"),
        (SearchResult(title="  ", snippet="S", link=""), "S"),
    ],
)
def test_format_snippet_drops_missing_fields(result, expected):
    assert format_snippet(result) == expected


def test_format_snippet_empty_result_is_empty_string():
    assert format_snippet(SearchResult()) == ""
    assert format_snippet(SearchResult(title=" ", snippet="", link=None)) == ""


def test_retrieve_collects_in_query_order():
    search = FakeSearchClient({"q1": make_results("one", 2), "q2": make_results("two", 1)})
    research = Retriever(search).retrieve(["q1", "q2"], topic="topic")

    assert research == [
        "one title 1\none snippet 1\nSource: https://example.com/one/1",
        "one title 2\none snippet 2\nSource: https://example.com/one/2",
        "two title 1\ntwo snippet 1\nSource: https://example.com/two/1",
    ]


def test_retrieve_caps_results_per_query():
    search = FakeSearchClient(default=make_results("many", 7))
    research = Retriever(search, max_results=3).retrieve(["q"], topic="topic")

    assert len(research) == 3
    assert search.calls == [{"query": "q", "num_results": 3, "engine": "google"}]


def test_retrieve_passes_engine_selector():
    search = FakeSearchClient(default=make_results("x", 1))
    Retriever(search, engine="bing").retrieve(["q"], topic="topic")
    assert search.calls[0]["engine"] == "bing"


def test_retrieve_skips_failed_queries_and_continues():
    search = FakeSearchClient(
        {
            "bad": httpx.ConnectTimeout("timed out"),
            "good": make_results("good", 1),
            "worse": SearchError("malformed"),
        }
    )
    research = Retriever(search).retrieve(["bad", "good", "worse"], topic="topic")

    assert [call["query"] for call in search.calls] == ["bad", "good", "worse"]
    assert research == ["good title 1\ngood snippet 1\nSource: https://example.com/good/1"]


@pytest.mark.parametrize(
    "failure",
    [
        httpx.ReadTimeout("timed out"),
        SearchError("SERPAPI_API_KEY not set in environment"),
        ValueError("bad json"),
        KeyError("organic_results"),
    ],
)
def test_retrieve_all_failures_use_fallback(failure):
    search = FakeSearchClient(default=failure)
    research = Retriever(search).retrieve(["q1", "q2", "q3"], topic="Obscure topic X")

    assert research == [no_results_snippet("Obscure topic X")]
    assert len(search.calls) == 3


def test_retrieve_empty_results_use_fallback():
    search = FakeSearchClient(default=[])
    research = Retriever(search).retrieve(["q1"], topic="Obscure topic X")
    assert research == [
        "No search results were found. Write the article based on your general knowledge of: Obscure topic X"
    ]


def test_retrieve_all_blank_results_contribute_nothing():
    search = FakeSearchClient(default=[SearchResult(), SearchResult(title="", snippet="  ")])
    research = Retriever(search).retrieve(["q"], topic="topic")

    assert research == [no_results_snippet("topic")]
    assert "" not in research


def test_retrieve_mixes_blank_and_usable_results():
    search = FakeSearchClient(default=[SearchResult(), SearchResult(title="Real")])
    assert Retriever(search).retrieve(["q"], topic="topic") == ["Real"]
