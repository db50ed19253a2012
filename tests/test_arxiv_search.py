import asyncio
import logging
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from arxiv_explorer import arxiv_search
from arxiv_explorer.arxiv_search import (
    FeedResult,
    SearchRequestError,
    _timeout,
    build_preset_query,
    build_query,
    fetch_feed,
    fetch_from_endpoint,
    search,
)
from arxiv_explorer.models import SearchRequest
from arxiv_explorer.presets import DEFAULT_REGISTRY, UnknownPresetError
from arxiv_explorer.sample_feed import SAMPLE_FEED

ONE_ENTRY_FEED = """<feed xmlns="http://www.w3.org/2005/Atom">
  <entry>
    <id>http://arxiv.org/abs/2401.00001v1</id>
    <title>Quantum Key Distribution Networks</title>
    <summary>Quantum cryptography for metropolitan networks.</summary>
    <category term="quant-ph"/>
  </entry>
</feed>
"""


def _run(coro):
    return asyncio.run(coro)


# ---------------------------------------------------------------------------
# Query building
# ---------------------------------------------------------------------------

def test_build_basic_query() -> None:
    assert build_query("basic", "ti", " neural networks ") == "ti:neural networks"


def test_build_category_query_without_terms() -> None:
    assert build_query("category", "all", "", ["cs.CR", "cs.AI"]) == "cat:cs.CR OR cat:cs.AI"


def test_build_category_query_with_terms() -> None:
    query = build_query("category", "abs", "phishing", ["cs.CR"])
    assert query == "(cat:cs.CR) AND (abs:phishing)"


def test_build_category_query_defaults_to_machine_learning() -> None:
    assert build_query("category", "all", "", []) == "cat:cs.LG"


def test_build_preset_query() -> None:
    query = build_preset_query(DEFAULT_REGISTRY.get("Quantum Cryptography"))
    assert query == "(cat:cs.CR OR cat:quant-ph) AND (all:quantum cryptography encryption)"


# ---------------------------------------------------------------------------
# Fetching
# ---------------------------------------------------------------------------

def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def test_fetch_from_endpoint_returns_body() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, text=ONE_ENTRY_FEED)

    async def go():
        async with _client(handler) as client:
            return await fetch_from_endpoint("http://arxiv.test/api/query", "all:qkd", 7, client)

    assert _run(go()) == ONE_ENTRY_FEED
    assert seen["params"] == {"search_query": "all:qkd", "start": "0", "max_results": "7"}


@pytest.mark.parametrize("response", [httpx.Response(503), httpx.Response(200, text="  ")])
def test_fetch_from_endpoint_failures_return_none(response: httpx.Response) -> None:
    async def go():
        async with _client(lambda request: response) as client:
            return await fetch_from_endpoint("http://arxiv.test/api/query", "all:qkd", 5, client)

    assert _run(go()) is None


@pytest.mark.parametrize("raw", ["ten", "0", "-3", "nan", "inf"])
def test_invalid_timeout_falls_back_to_default(raw: str, caplog) -> None:
    with patch.dict("os.environ", {"ARXIV_TIMEOUT_SECONDS": raw}):
        with caplog.at_level(logging.WARNING, logger="arxiv_explorer.arxiv_search"):
            timeout = _timeout()

    assert timeout == httpx.Timeout(10.0)
    assert "ARXIV_TIMEOUT_SECONDS" in caplog.text


def test_configured_timeout_is_used() -> None:
    with patch.dict("os.environ", {"ARXIV_TIMEOUT_SECONDS": "2.5"}):
        assert _timeout() == httpx.Timeout(2.5)


def test_fetch_from_endpoint_survives_bad_timeout_setting() -> None:
    async def go():
        async with _client(lambda request: httpx.Response(200, text=ONE_ENTRY_FEED)) as client:
            return await fetch_from_endpoint("http://arxiv.test/api/query", "all:qkd", 5, client)

    with patch.dict("os.environ", {"ARXIV_TIMEOUT_SECONDS": "ten"}):
        assert _run(go()) == ONE_ENTRY_FEED


def test_fetch_from_endpoint_transport_error_returns_none() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    async def go():
        async with _client(handler) as client:
            return await fetch_from_endpoint("http://arxiv.test/api/query", "all:qkd", 5, client)

    assert _run(go()) is None


def test_fetch_feed_tries_sources_in_order() -> None:
    fetch = AsyncMock(side_effect=[None, ONE_ENTRY_FEED])
    env = {"ARXIV_API_URLS": "http://a.test/api, http://b.test/api", "ARXIV_OFFLINE": ""}

    with patch.dict("os.environ", env), patch.object(arxiv_search, "fetch_from_endpoint", fetch):
        result = _run(fetch_feed("all:qkd", 5))

    assert result == FeedResult(xml=ONE_ENTRY_FEED, source="http://b.test/api", offline=False)
    assert [call.args[0] for call in fetch.call_args_list] == ["http://a.test/api", "http://b.test/api"]


def test_fetch_feed_falls_back_to_sample_feed() -> None:
    fetch = AsyncMock(return_value=None)

    with patch.dict("os.environ", {"ARXIV_API_URLS": "", "ARXIV_OFFLINE": ""}), \
         patch.object(arxiv_search, "fetch_from_endpoint", fetch):
        result = _run(fetch_feed("all:qkd", 5))

    assert result.offline is True
    assert result.xml == SAMPLE_FEED
    fetch.assert_awaited_once()
    assert fetch.call_args.args[0] == arxiv_search.ARXIV_API_URL


def test_offline_mode_skips_network() -> None:
    fetch = AsyncMock()

    with patch.object(arxiv_search, "fetch_from_endpoint", fetch):
        result = _run(fetch_feed("all:qkd", 5, offline=True))

    assert result.offline is True
    fetch.assert_not_called()


def test_offline_env_flag_skips_network() -> None:
    fetch = AsyncMock()

    with patch.dict("os.environ", {"ARXIV_OFFLINE": "true"}), \
         patch.object(arxiv_search, "fetch_from_endpoint", fetch):
        result = _run(fetch_feed("all:qkd", 5))

    assert result.source == arxiv_search.SAMPLE_SOURCE
    fetch.assert_not_called()


# ---------------------------------------------------------------------------
# search()
# ---------------------------------------------------------------------------

def _online(xml: str) -> AsyncMock:
    return AsyncMock(return_value=FeedResult(xml=xml, source="http://a.test/api", offline=False))


def test_search_basic_mode_scores_query_terms() -> None:
    with patch.object(arxiv_search, "fetch_feed", _online(ONE_ENTRY_FEED)) as fetch:
        resp = _run(search(SearchRequest(search_terms="quantum networks")))

    fetch.assert_awaited_once_with("all:quantum networks", 10, offline=False)
    assert resp.offline is False
    assert resp.papers[0].relevance_topic == "Search Terms"


def test_search_preset_mode() -> None:
    req = SearchRequest(search_mode="preset", preset="Quantum Cryptography")
    with patch.object(arxiv_search, "fetch_feed", _online(ONE_ENTRY_FEED)):
        resp = _run(search(req))

    assert resp.query.startswith("(cat:cs.CR OR cat:quant-ph)")
    assert resp.papers[0].relevance_topic == "Quantum Cryptography"


def test_search_unknown_preset() -> None:
    with pytest.raises(UnknownPresetError):
        _run(search(SearchRequest(search_mode="preset", preset="Astrology")))


@pytest.mark.parametrize("req", [
    SearchRequest(search_mode="basic", search_terms="  "),
    SearchRequest(search_mode="preset"),
])
def test_search_rejects_incomplete_requests(req: SearchRequest) -> None:
    with pytest.raises(SearchRequestError):
        _run(search(req))


def test_search_category_mode_filters_papers() -> None:
    req = SearchRequest(search_mode="category", categories=["cs.CR"])
    with patch.object(arxiv_search, "fetch_feed", _online(SAMPLE_FEED)):
        resp = _run(search(req))

    assert [p.arxiv_id for p in resp.papers] == ["2304.01629v1"]
    assert resp.papers[0].relevance_score == 6
    assert resp.papers[0].relevance_topic == "Category Search"


def test_search_offline_results_use_sample_label() -> None:
    req = SearchRequest(search_terms="quantum", offline=True, max_results=3)
    resp = _run(search(req))

    assert resp.offline is True
    assert len(resp.papers) == 3
    assert {p.relevance_topic for p in resp.papers} == {"Sample Results"}


def test_search_offline_category_mode_still_filters() -> None:
    req = SearchRequest(search_mode="category", categories=["cs.CR"], offline=True)
    resp = _run(search(req))

    assert resp.offline is True
    assert [p.arxiv_id for p in resp.papers] == ["2304.01629v1"]
    assert resp.papers[0].relevance_topic == "Sample Results"
