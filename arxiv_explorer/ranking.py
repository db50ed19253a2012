"""
Feed -> ranked papers.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from arxiv_explorer.feed_parser import normalize
from arxiv_explorer.models import Paper, ScoredPaper, ScoringContext
from arxiv_explorer.relevance import MIN_SCORE, RelevanceScorer


def filter_by_categories(papers: Iterable[Paper], categories: Sequence[str]) -> list[Paper]:
    """Keep papers listed under at least one of the given categories."""
    wanted = set(categories)
    return [p for p in papers if wanted.intersection(p.categories)]


def rank_papers(
    papers: Iterable[Paper],
    context: ScoringContext,
    scorer: RelevanceScorer | None = None,
) -> list[ScoredPaper]:
    """
    Score every paper that does not carry a score yet, then sort by descending
    relevance. The sort is stable, so ties keep feed order.
    """
    scorer = scorer or RelevanceScorer()
    scorer.validate(context)

    scored: list[ScoredPaper] = []
    for paper in papers:
        if isinstance(paper, ScoredPaper):
            if paper.relevance_score < MIN_SCORE:
                paper = paper.model_copy(update={"relevance_score": MIN_SCORE})
            scored.append(paper)
        else:
            scored.append(scorer.apply(paper, context))

    return sorted(scored, key=lambda p: p.relevance_score, reverse=True)


def rank_feed(
    raw_xml: str,
    context: ScoringContext,
    scorer: RelevanceScorer | None = None,
) -> list[ScoredPaper]:
    return rank_papers(normalize(raw_xml), context, scorer)
