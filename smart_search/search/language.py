"""
Heuristic language detection and entity extraction.

Used when no AI provider is available and to annotate AI prompts.
"""

import re
from typing import List

# Only this many characters are inspected
LANGUAGE_SAMPLE_LENGTH = 500

# Checked in order; the first script found wins
LANGUAGE_PATTERNS = [
    ('vi', re.compile(
        '[àáảãạăắằẳẵặâấầẩẫậđèéẻẽẹêếềểễệìíỉĩịòóỏõọôốồổỗộơớờởỡợùúủũụưứừửữựỳýỷỹỵ]'
    )),
    ('zh', re.compile(r'[\u4e00-\u9fff]')),
    ('ja', re.compile(r'[\u3040-\u309f\u30a0-\u30ff]')),
    ('ko', re.compile(r'[\uac00-\ud7af]')),
]

QUOTED_PHRASE_PATTERN = re.compile(r'"([^"]+)"')

# Runs of capitalized words, e.g. "New York" or "Python"
CAPITALIZED_RUN_PATTERN = re.compile(r'\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*\b')


def detect_language(text: str, default: str = 'en') -> str:
    """
    Guess the language of text from the scripts it uses.

    Args:
        text: Text to inspect
        default: Code returned when no known script is found

    Returns:
        Language code (vi, zh, ja, ko or default)
    """
    if not text:
        return default

    sample = text[:LANGUAGE_SAMPLE_LENGTH]
    for code, pattern in LANGUAGE_PATTERNS:
        if pattern.search(sample):
            return code

    return default


def extract_basic_entities(query: str) -> List[str]:
    """
    Extract quoted phrases and capitalized word runs.

    Quoted phrases come first; duplicates are dropped keeping the first
    occurrence.
    """
    if not query:
        return []

    candidates = QUOTED_PHRASE_PATTERN.findall(query)
    candidates.extend(CAPITALIZED_RUN_PATTERN.findall(query))

    return list(dict.fromkeys(candidates))
