"""
Query tokenizer shared by the scorer and the ranker.
"""

import re
from typing import List

# Anything that is neither a word character nor whitespace
NON_WORD_PATTERN = re.compile(r'[^\w\s]')

# Terms this short are too common to carry signal
MIN_TERM_LENGTH = 3


def tokenize(text: str) -> List[str]:
    """
    Split text into unique lowercase match terms.

    Punctuation is replaced by whitespace, terms shorter than
    MIN_TERM_LENGTH are dropped and first-occurrence order is kept.

    Args:
        text: Raw query text

    Returns:
        Ordered list of distinct terms
    """
    if not text:
        return []

    normalized = NON_WORD_PATTERN.sub(' ', text.lower())

    terms = []
    seen = set()
    for term in normalized.split():
        if len(term) < MIN_TERM_LENGTH or term in seen:
            continue
        seen.add(term)
        terms.append(term)

    return terms
