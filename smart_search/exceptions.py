"""
Exceptions raised to callers of the search engine.

Only request validation is surfaced. AI enrichment failures are absorbed
inside the engine, and content source errors propagate unchanged.
"""

from typing import Optional


class SearchError(Exception):
    """Base exception for smart search errors."""

    default_code = "SEARCH_ERROR"

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_code

    def to_dict(self):
        return {"error": self.message, "code": self.error_code}


class SearchValidationError(SearchError, ValueError):
    """The search request was rejected (e.g. blank query)."""

    default_code = "INVALID_QUERY"


class SearchDisabledError(SearchValidationError):
    """Smart search is switched off in configuration."""

    default_code = "SEARCH_DISABLED"
