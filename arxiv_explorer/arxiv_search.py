"""
Paper discovery via the arXiv query API.

Feed sources are tried in order until one answers with a non-empty body:
  1. every endpoint in ARXIV_API_URLS (default: the public export.arxiv.org API)
  2. the bundled sample feed (also used directly in offline mode)

The scoring core never sees any of this; it only receives the feed text.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import httpx

from arxiv_explorer.models import (
    CategoryContext,
    ContentContext,
    PresetContext,
    QueryContext,
    ScoringContext,
    SearchRequest,
    SearchResponse,
    TopicPreset,
)
from arxiv_explorer.ranking import filter_by_categories, rank_feed
from arxiv_explorer.presets import DEFAULT_CATEGORY
from arxiv_explorer.relevance import RelevanceScorer
from arxiv_explorer.sample_feed import SAMPLE_FEED, SAMPLE_TOPIC

LOGGER = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

ARXIV_API_URL = "http://export.arxiv.org/api/query"
SAMPLE_SOURCE = "sample"
_DEFAULT_TIMEOUT_SECONDS = 10.0
_TRUTHY = {"1", "true", "yes", "on"}


def _api_urls() -> list[str]:
    raw = os.environ.get("ARXIV_API_URLS", "")
    urls = [u.strip() for u in raw.split(",") if u.strip()]
    return urls or [ARXIV_API_URL]


def _timeout() -> httpx.Timeout:
    raw = os.environ.get("ARXIV_TIMEOUT_SECONDS", "").strip()
    if not raw:
        return httpx.Timeout(_DEFAULT_TIMEOUT_SECONDS)
    try:
        seconds = float(raw)
    except ValueError:
        seconds = 0.0
    if not seconds > 0 or seconds == float("inf"):
        LOGGER.warning(
            "Invalid ARXIV_TIMEOUT_SECONDS=%r, using default %ss", raw, _DEFAULT_TIMEOUT_SECONDS
        )
        seconds = _DEFAULT_TIMEOUT_SECONDS
    return httpx.Timeout(seconds)


def _offline_forced() -> bool:
    return os.environ.get("ARXIV_OFFLINE", "").strip().lower() in _TRUTHY


# ---------------------------------------------------------------------------
# Query building
# ---------------------------------------------------------------------------

def _category_clause(categories: list[str] | tuple[str, ...]) -> str:
    return " OR ".join(f"cat:{cat}" for cat in categories)


def build_query(
    search_mode: str,
    search_field: str,
    search_terms: str,
    categories: list[str] | tuple[str, ...] = (),
) -> str:
    terms = search_terms.strip()
    if search_mode == "category":
        category_query = _category_clause(categories or (DEFAULT_CATEGORY,))
        if not terms:
            return category_query
        return f"({category_query}) AND ({search_field}:{terms})"
    return f"{search_field}:{terms}"


def build_preset_query(preset: TopicPreset) -> str:
    return f"({_category_clause(preset.categories)}) AND (all:{preset.search_terms})"


# ---------------------------------------------------------------------------
# Fetching
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FeedResult:
    xml: str
    source: str
    offline: bool


async def fetch_from_endpoint(
    url: str,
    query: str,
    max_results: int,
    client: httpx.AsyncClient,
) -> str | None:
    params = {"search_query": query, "start": 0, "max_results": max_results}
    try:
        resp = await client.get(
            url,
            params=params,
            headers={"Accept": "application/atom+xml, application/xml"},
            timeout=_timeout(),
        )
        resp.raise_for_status()
    except httpx.HTTPError as exc:
        LOGGER.warning("arXiv fetch failed url=%s query=%r: %s", url, query, exc)
        return None

    body = resp.text
    if not body.strip():
        LOGGER.warning("arXiv fetch returned an empty body url=%s", url)
        return None
    return body


async def fetch_feed(query: str, max_results: int, offline: bool = False) -> FeedResult:
    if offline or _offline_forced():
        LOGGER.info("Offline mode: serving sample feed")
        return FeedResult(xml=SAMPLE_FEED, source=SAMPLE_SOURCE, offline=True)

    async with httpx.AsyncClient(follow_redirects=True) as client:
        for url in _api_urls():
            body = await fetch_from_endpoint(url, query, max_results, client)
            if body is not None:
                LOGGER.info("arXiv fetch ok url=%s bytes=%s", url, len(body))
                return FeedResult(xml=body, source=url, offline=False)

    LOGGER.warning("All arXiv sources failed; falling back to sample feed")
    return FeedResult(xml=SAMPLE_FEED, source=SAMPLE_SOURCE, offline=True)


# ---------------------------------------------------------------------------
# Combined search
# ---------------------------------------------------------------------------

class SearchRequestError(ValueError):
    """Raised when a search request is missing what its mode needs."""


def _plan(req: SearchRequest, scorer: RelevanceScorer) -> tuple[str, ScoringContext]:
    """Return the arXiv query string and the scoring context for a request."""
    if req.search_mode == "preset":
        if not req.preset:
            raise SearchRequestError("A preset name is required in preset mode.")
        preset = scorer.registry.get(req.preset)
        return build_preset_query(preset), PresetContext(name=preset.name)

    if req.search_mode == "category":
        categories = req.categories or [DEFAULT_CATEGORY]
        query = build_query("category", req.search_field, req.search_terms, categories)
        return query, CategoryContext(categories=categories, text=req.search_terms)

    if not req.search_terms.strip():
        raise SearchRequestError("Search terms cannot be empty.")
    query = build_query("basic", req.search_field, req.search_terms)
    return query, QueryContext(text=req.search_terms)


async def search(req: SearchRequest, scorer: RelevanceScorer | None = None) -> SearchResponse:
    scorer = scorer or RelevanceScorer()
    query, context = _plan(req, scorer)

    feed = await fetch_feed(query, req.max_results, offline=req.offline)

    scoring = context
    if feed.offline and not isinstance(context, PresetContext):
        scoring = ContentContext(topic=SAMPLE_TOPIC)

    papers = rank_feed(feed.xml, scoring, scorer)
    if isinstance(context, CategoryContext):
        papers = filter_by_categories(papers, context.categories)

    LOGGER.info(
        "Search done query=%r source=%s offline=%s results=%s",
        query,
        feed.source,
        feed.offline,
        len(papers),
    )
    return SearchResponse(
        query=query,
        offline=feed.offline,
        source=feed.source,
        papers=papers[: req.max_results],
    )
