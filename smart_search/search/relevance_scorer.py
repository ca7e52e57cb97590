"""
Term-overlap relevance scorer for a single query/text pair.
"""

import logging
from typing import List, Optional

from .tokenizer import tokenize

logger = logging.getLogger(__name__)


class RelevanceScorer:
    """
    Scores how well a piece of text matches a query, in [0, 1].

    score(Q, T) = min(1, matched / |terms| + boost * matched_if_phrase)

    Where:
    - terms = tokenize(Q)
    - matched = number of terms found as substrings of lowercase T
    - matched_if_phrase = matched when lowercase Q appears verbatim in T, else 0

    The exact-match boost is added once per matching term, so a verbatim
    phrase hit normally saturates the score at 1.0.
    """

    def __init__(self, exact_match_boost: float = 1.5):
        """
        Initialize scorer.

        Args:
            exact_match_boost: Added per matching term on a verbatim phrase hit
        """
        self.exact_match_boost = exact_match_boost

    def score(self, query: str, content: str, query_terms: Optional[List[str]] = None) -> float:
        """
        Score content against a query.

        Args:
            query: Search query
            content: Text to score (title, snippet, ...)
            query_terms: Pre-tokenized query terms, to avoid re-tokenizing

        Returns:
            Relevance score between 0.0 and 1.0
        """
        if not query or not query.strip() or not content or not content.strip():
            return 0.0

        terms = query_terms if query_terms is not None else tokenize(query)
        if not terms:
            return 0.0

        content_lower = content.lower()
        has_phrase = query.lower() in content_lower

        score = 0.0
        match_count = 0
        for term in terms:
            if term in content_lower:
                match_count += 1
                if has_phrase:
                    score += self.exact_match_boost

        score += match_count / len(terms)

        return min(1.0, score)
