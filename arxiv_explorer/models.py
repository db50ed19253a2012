from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Record(BaseModel):
    # snake_case in Python, camelCase on the wire
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Raw feed schema (one Atom <entry> as read from the XML, before normalisation)
# ---------------------------------------------------------------------------

class FeedLink(_Record):
    href: Optional[str] = None
    title: Optional[str] = None
    rel: Optional[str] = None


class FeedAuthor(_Record):
    name: Optional[str] = None


class FeedCategory(_Record):
    term: Optional[str] = None


class FeedEntry(_Record):
    id: Optional[str] = None
    title: Optional[str] = None
    summary: Optional[str] = None
    published: Optional[str] = None
    updated: Optional[str] = None
    authors: list[FeedAuthor] = []
    categories: list[FeedCategory] = []
    links: list[FeedLink] = []


# ---------------------------------------------------------------------------
# Normalised papers
# ---------------------------------------------------------------------------

class Paper(_Record):
    title: str
    abstract: str
    authors: list[str]
    author_text: str
    published: str
    updated: str
    pdf_url: str
    arxiv_id: str
    categories: list[str]
    primary_category: str


class ScoreResult(_Record):
    score: int = Field(ge=1, le=10)
    topic: str


class ScoredPaper(Paper):
    relevance_score: int = Field(ge=1, le=10)
    relevance_topic: str


# ---------------------------------------------------------------------------
# Topic presets
# ---------------------------------------------------------------------------

class TopicPreset(_Record):
    name: str
    search_terms: str
    keyword_weights: dict[str, float]
    required_keywords: tuple[str, ...] = ()
    excluded_keywords: tuple[str, ...] = ()
    categories: tuple[str, ...] = ()
    description: str = ""


class CategoryOption(_Record):
    id: str
    name: str


# ---------------------------------------------------------------------------
# Scoring contexts
# ---------------------------------------------------------------------------

class QueryContext(_Record):
    mode: Literal["query"] = "query"
    text: str


class ContentContext(_Record):
    mode: Literal["content-only"] = "content-only"
    topic: str = "Search Terms"


class PresetContext(_Record):
    mode: Literal["preset"] = "preset"
    name: str


class CategoryContext(_Record):
    mode: Literal["category"] = "category"
    categories: list[str]
    text: str = ""


ScoringContext = Annotated[
    Union[QueryContext, ContentContext, PresetContext, CategoryContext],
    Field(discriminator="mode"),
]


# ---------------------------------------------------------------------------
# API payloads
# ---------------------------------------------------------------------------

class SearchRequest(_Record):
    search_mode: Literal["basic", "category", "preset"] = "basic"
    search_field: Literal["all", "ti", "au", "abs"] = "all"
    search_terms: str = ""
    categories: list[str] = []
    preset: Optional[str] = None
    max_results: int = Field(default=10, ge=1, le=100)
    offline: bool = False


class SearchResponse(_Record):
    query: str
    offline: bool
    source: str
    papers: list[ScoredPaper]


class PresetSummary(_Record):
    name: str
    description: str
    search_terms: str
    categories: list[str]


class DownloadResponse(_Record):
    arxiv_id: Optional[str] = None
    pdf_url: Optional[str] = None
    message: str
