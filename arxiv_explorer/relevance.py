"""
Relevance scoring for normalised papers.

Every strategy yields an integer from 1 (unrelated) to 10 (on topic):
  - evaluate_terms   free-text query: title/abstract hits, coverage and domain bonuses
  - content_score    no query: fixed research-area vocabulary, title weighted
  - preset_score     named topic preset: weighted keywords with diminishing
                     returns, required/excluded keyword caps, title-match boost
  - category_score   category search: membership first, then query terms

Fractional intermediates round half-up; anything non-finite falls back to the
neutral score.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from arxiv_explorer.models import (
    CategoryContext,
    ContentContext,
    Paper,
    PresetContext,
    QueryContext,
    ScoredPaper,
    ScoreResult,
    ScoringContext,
    TopicPreset,
)
from arxiv_explorer.presets import DEFAULT_REGISTRY, TopicPresetRegistry

MIN_SCORE = 1
MAX_SCORE = 10
NEUTRAL_SCORE = 5

QUERY_TOPIC = "Search Terms"
CATEGORY_TOPIC = "Category Search"

_MIN_TERM_LENGTH = 3

_IMPORTANT_AREAS = (
    "quantum", "machine learning", "deep learning", "neural", "security",
    "cryptography", "algorithm", "network", "computer vision", "language",
)

# Checked in order against the title; only the first hit applies.
_TITLE_BOOSTS: tuple[tuple[tuple[str, ...], float], ...] = (
    (("quantum computing",), 2.0),
    (("machine learning", "artificial intelligence"), 1.5),
    (("deep learning", "neural network"), 1.5),
    (("security", "cryptography"), 1.5),
)

# (query triggers, title triggers) -> +2 each, cumulative
_DOMAIN_BONUSES: tuple[tuple[tuple[str, ...], tuple[str, ...]], ...] = (
    (("quantum",), ("quantum",)),
    (
        ("machine learning", "artificial intelligence"),
        ("machine learning", "artificial intelligence", "neural network"),
    ),
    (("security", "cryptography"), ("security", "cryptography", "encryption")),
)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def clamp_score(value: float) -> int:
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        return NEUTRAL_SCORE
    return max(MIN_SCORE, min(MAX_SCORE, _round_half_up(value)))


def _contains_any(text: str, needles: Sequence[str]) -> bool:
    return any(needle in text for needle in needles)


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

def evaluate_terms(title: str, abstract: str, query_text: str) -> int:
    if not title or not abstract or not query_text or not query_text.strip():
        return NEUTRAL_SCORE

    title_lower = title.lower()
    abstract_lower = abstract.lower()
    query_lower = query_text.lower()

    terms = [t for t in query_lower.split() if len(t) >= _MIN_TERM_LENGTH]
    if not terms:
        return NEUTRAL_SCORE

    score = 0.0
    matched = 0
    for term in terms:
        in_title = term in title_lower
        in_abstract = term in abstract_lower
        if in_title:
            score += 3
        if in_abstract:
            score += 1
        if in_title or in_abstract:
            matched += 1

    coverage = matched / len(terms)
    if coverage > 0.8:
        score += 3
    elif coverage > 0.5:
        score += 2
    elif coverage > 0.3:
        score += 1

    for query_triggers, title_triggers in _DOMAIN_BONUSES:
        if _contains_any(query_lower, query_triggers) and _contains_any(title_lower, title_triggers):
            score += 2

    return clamp_score(score)


def content_score(title: str, abstract: str) -> int:
    if not title or not abstract:
        return NEUTRAL_SCORE

    title_lower = title.lower()
    abstract_lower = abstract.lower()

    score = 3.0
    for area in _IMPORTANT_AREAS:
        if area in title_lower:
            score += 1.5
        elif area in abstract_lower:
            score += 0.5

    for phrases, boost in _TITLE_BOOSTS:
        if _contains_any(title_lower, phrases):
            score += boost
            break

    return clamp_score(score)


def preset_score(title: str, abstract: str, preset: TopicPreset) -> int:
    if not title or not abstract:
        return NEUTRAL_SCORE

    title_text = title.lower()
    combined = f"{title_text} {title_text} {abstract.lower()}"

    required = [kw.lower() for kw in preset.required_keywords]
    excluded = [kw.lower() for kw in preset.excluded_keywords]
    has_required = all(kw in combined for kw in required)
    has_excluded = any(kw in combined for kw in excluded)

    weighted = 0.0
    total_possible = 0.0
    found = 0
    for keyword, weight in preset.keyword_weights.items():
        if not math.isfinite(weight):
            continue
        total_possible += weight
        count = combined.count(keyword.lower())
        if count > 0:
            weighted += weight * min(1.0, 0.5 + count / 5)
            found += 1

    if total_possible == 0:
        total_possible = 1.0
    coverage = found / max(1, len(preset.keyword_weights))

    ratio = weighted / total_possible * 10
    score = _round_half_up(ratio) if math.isfinite(ratio) else NEUTRAL_SCORE

    if not has_required:
        score = min(score, 5)
    if has_excluded:
        score = min(score, 3)
    if coverage < 0.5:
        score = min(score, 6)

    if score == 10:
        if coverage < 0.75:
            score = 9
        if any(kw not in combined for kw in required):
            score = min(score, 7)

    topic_terms = [t for t in preset.name.lower().split(" ") if len(t) > 2]
    title_hits = sum(1 for term in topic_terms if term in title_text)
    if title_hits >= len(topic_terms) / 2:
        score = min(MAX_SCORE, score + 1)

    return clamp_score(score)


def category_score(
    title: str,
    abstract: str,
    paper_categories: Sequence[str],
    selected: Sequence[str],
    query_text: str = "",
) -> int:
    if not any(category in selected for category in paper_categories):
        return 3
    if query_text and query_text.strip():
        return evaluate_terms(title, abstract, query_text)
    return 6


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

class RelevanceScorer:
    """
    Picks a strategy from the scoring context. Presets come from the registry
    handed in at construction; an unknown preset name raises UnknownPresetError.
    """

    def __init__(self, registry: TopicPresetRegistry = DEFAULT_REGISTRY) -> None:
        self._registry = registry

    @property
    def registry(self) -> TopicPresetRegistry:
        return self._registry

    def validate(self, context: ScoringContext) -> None:
        if isinstance(context, PresetContext):
            self._registry.get(context.name)

    def score(self, paper: Paper, context: ScoringContext) -> ScoreResult:
        if isinstance(context, PresetContext):
            preset = self._registry.get(context.name)
            value = preset_score(paper.title, paper.abstract, preset)
            return ScoreResult(score=value, topic=preset.name)

        if isinstance(context, QueryContext) and context.text.strip():
            value = evaluate_terms(paper.title, paper.abstract, context.text)
            return ScoreResult(score=value, topic=QUERY_TOPIC)

        if isinstance(context, CategoryContext):
            value = category_score(
                paper.title, paper.abstract, paper.categories, context.categories, context.text
            )
            return ScoreResult(score=value, topic=CATEGORY_TOPIC)

        topic = context.topic if isinstance(context, ContentContext) else QUERY_TOPIC
        return ScoreResult(score=content_score(paper.title, paper.abstract), topic=topic)

    def apply(self, paper: Paper, context: ScoringContext) -> ScoredPaper:
        return with_score(paper, self.score(paper, context))


def with_score(paper: Paper, result: ScoreResult) -> ScoredPaper:
    return ScoredPaper(
        **paper.model_dump(exclude={"relevance_score", "relevance_topic"}),
        relevance_score=result.score,
        relevance_topic=result.topic,
    )
