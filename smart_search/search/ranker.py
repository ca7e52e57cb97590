"""
Multi-signal result ranker.

final = min(1, (title * w_title + content * w_content + tags * w_tags
                + recency * w_recency) * popularity)
"""

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from .models import ScoringWeights, SearchResult
from .relevance_scorer import RelevanceScorer
from .tokenizer import tokenize

logger = logging.getLogger(__name__)

# Content older than this gets no recency credit
RECENCY_WINDOW_DAYS = 365.0

# Results with more views than this get the popularity multiplier
POPULARITY_VIEW_THRESHOLD = 100


def calculate_recency_score(created_at: datetime, now: Optional[datetime] = None) -> float:
    """
    Linear recency decay: 1.0 when new, 0.0 after a year.

    Args:
        created_at: Content creation date
        now: Reference time (defaults to current UTC time)

    Returns:
        Recency score between 0.0 and 1.0
    """
    if created_at is None:
        return 0.0

    now = now or datetime.now(timezone.utc)
    age_days = (now - created_at).total_seconds() / 86400.0

    # Future dates count as brand new
    return min(1.0, max(0.0, 1.0 - age_days / RECENCY_WINDOW_DAYS))


def calculate_tag_score(tags: List[str], query_terms: List[str]) -> float:
    """Fraction of the result's tags that are query terms."""
    if not tags:
        return 0.0

    terms = set(query_terms)
    matching = sum(1 for tag in tags if tag.lower() in terms)
    return matching / len(tags)


class ResultRanker:
    """
    Scores and orders candidate results for a query.

    Candidates are never modified; rank() returns scored copies.
    """

    def __init__(
        self,
        weights: Optional[ScoringWeights] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Initialize ranker.

        Args:
            weights: Scoring weights (defaults from configuration)
            clock: Returns the reference time for recency decay
        """
        self.weights = weights or ScoringWeights.from_config()
        self.scorer = RelevanceScorer(exact_match_boost=self.weights.exact_match_boost)
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def score_result(
        self,
        query: str,
        result: SearchResult,
        query_terms: Optional[List[str]] = None,
        now: Optional[datetime] = None
    ) -> float:
        """
        Compute the final relevance score of one result.

        Args:
            query: Search query
            result: Candidate result
            query_terms: Pre-tokenized query terms
            now: Reference time for recency

        Returns:
            Score between 0.0 and 1.0
        """
        terms = query_terms if query_terms is not None else tokenize(query)
        w = self.weights

        title_score = self.scorer.score(query, result.title, terms)
        content_score = self.scorer.score(query, result.snippet, terms)
        tag_score = calculate_tag_score(result.tags, terms)
        recency_score = calculate_recency_score(result.created_at, now or self.clock())

        popularity = (
            w.popularity_boost
            if result.view_count is not None and result.view_count > POPULARITY_VIEW_THRESHOLD
            else 1.0
        )

        base_score = (
            title_score * w.title_weight +
            content_score * w.content_weight +
            tag_score * w.tag_weight +
            recency_score * w.recency_weight
        )

        return min(1.0, max(0.0, base_score * popularity))

    def rank(self, query: str, candidates: List[SearchResult]) -> List[SearchResult]:
        """
        Score candidates and sort them by descending relevance.

        Ties keep their input order.

        Args:
            query: Search query
            candidates: Unscored results

        Returns:
            New list of scored result copies
        """
        terms = tokenize(query)
        now = self.clock()

        scored = [
            candidate.model_copy(
                update={'relevance_score': self.score_result(query, candidate, terms, now)}
            )
            for candidate in candidates
        ]

        ranked = sorted(scored, key=lambda r: r.relevance_score, reverse=True)

        logger.debug(f"Ranked {len(ranked)} results for '{query}'")
        return ranked
