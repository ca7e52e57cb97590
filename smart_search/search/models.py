"""
Pydantic models for search requests, results and engine settings.
"""

from enum import Enum
from typing import Optional, List, Dict, Any
from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config.search_config import SMART_SEARCH_CONFIG, SCORING_WEIGHTS


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC so they compare with aware ones."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ============================================================================
# Search Models
# ============================================================================

class SearchType(str, Enum):
    """Content type filter for a search."""

    ALL = "All"
    POSTS = "Posts"
    QUESTIONS = "Questions"
    ARTICLES = "Articles"
    USERS = "Users"
    DOCUMENTS = "Documents"
    FAQS = "FAQs"


class SearchRequest(BaseModel):
    """Search request."""

    query: str = Field("", description="Search query")
    search_type: SearchType = Field(SearchType.ALL, description="Content type to search")
    category: Optional[str] = Field(None, description="Exact category filter")
    tags: Optional[List[str]] = Field(None, description="Match results carrying any of these tags")
    start_date: Optional[datetime] = Field(None, description="Earliest creation date")
    end_date: Optional[datetime] = Field(None, description="Latest creation date")
    min_relevance_score: float = Field(0.0, ge=0.0, le=1.0, description="Relevance cutoff")
    page: int = Field(1, description="Page number (1-based), clamped to the available pages")
    page_size: int = Field(10, description="Results per page, clamped into [1, max_page_size]")
    include_suggestions: bool = Field(True, description="Generate query suggestions")
    user_id: Optional[str] = Field(None, description="Requesting user")
    language: Optional[str] = Field(None, description="Language hint")

    @field_validator('start_date', 'end_date')
    @classmethod
    def normalize_dates(cls, v):
        return ensure_utc(v)


class SearchResult(BaseModel):
    """Individual search result.

    Results are immutable; the ranker returns scored copies.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique content id")
    content_type: str = Field(..., description="Post, Question, Article, Document, FAQ, ...")
    title: str = Field("", description="Result title")
    snippet: str = Field("", description="Content snippet")
    url: str = Field("", description="Path or URL to the content")
    author: Optional[str] = Field(None, description="Author name")
    created_at: datetime = Field(..., description="Creation date")
    category: Optional[str] = Field(None, description="Content category")
    tags: List[str] = Field(default_factory=list, description="Content tags")
    view_count: Optional[int] = Field(None, description="Number of views")
    relevance_score: float = Field(0.0, description="Relevance for the current query")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Opaque metadata")

    @field_validator('created_at')
    @classmethod
    def normalize_created_at(cls, v):
        return ensure_utc(v)

    @field_validator('tags', mode='before')
    @classmethod
    def default_tags(cls, v):
        return v or []


class QueryUnderstanding(BaseModel):
    """Structured interpretation of a raw query."""

    original_query: str = Field(..., description="Query as entered")
    expanded_query: str = Field(..., description="Query with synonyms and related terms")
    intent: str = Field(..., description="Detected intent")
    entities: List[str] = Field(default_factory=list, description="Extracted entities")
    language: str = Field("en", description="Detected language code")
    suggested_correction: Optional[str] = Field(None, description="Typo correction, if any")


class SearchResponse(BaseModel):
    """Search response."""

    results: List[SearchResult] = Field(..., description="Results on this page")
    total_count: int = Field(..., description="Results above the relevance cutoff")
    page: int = Field(..., description="Page actually returned")
    page_size: int = Field(..., description="Results per page")
    total_pages: int = Field(..., description="Number of pages")
    suggestions: List[str] = Field(default_factory=list, description="Query suggestions")
    query_understanding: Optional[QueryUnderstanding] = Field(None, description="AI query understanding")
    processing_time_ms: int = Field(..., description="Processing time in milliseconds")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    query: str = Field("", description="Normalized query")
    search_type: SearchType = Field(SearchType.ALL, description="Content type searched")


# ============================================================================
# Settings Models
# ============================================================================

class ScoringWeights(BaseModel):
    """Weights for combining relevance signals."""

    title_weight: float = Field(0.4, ge=0.0)
    content_weight: float = Field(0.3, ge=0.0)
    tag_weight: float = Field(0.2, ge=0.0)
    recency_weight: float = Field(0.1, ge=0.0)
    exact_match_boost: float = Field(1.5, ge=0.0)
    popularity_boost: float = Field(1.2, ge=0.0)

    @classmethod
    def from_config(cls, **overrides) -> "ScoringWeights":
        return cls(**{**SCORING_WEIGHTS, **overrides})


class SearchSettings(BaseModel):
    """Engine settings, normally built from SMART_SEARCH_CONFIG."""

    is_enabled: bool = True
    enable_query_understanding: bool = True
    enable_search_history: bool = True
    max_page_size: int = Field(50, ge=1)
    default_page_size: int = Field(10, ge=1)
    max_query_length: int = Field(500, ge=1)
    default_suggestion_count: int = Field(5, ge=0)
    popular_searches_limit: int = Field(20, ge=1)
    popular_searches_window_hours: int = Field(24, ge=0)
    history_capacity: int = Field(1000, ge=1)
    default_language: str = "en"
    ai_timeout_seconds: float = Field(10.0, gt=0)
    supported_search_types: List[str] = Field(
        default_factory=lambda: [t.value for t in SearchType]
    )
    weights: ScoringWeights = Field(default_factory=ScoringWeights)

    @classmethod
    def from_config(cls, **overrides) -> "SearchSettings":
        """
        Build settings from the module configuration.

        Args:
            **overrides: Field values taking precedence over the config dicts

        Returns:
            SearchSettings instance
        """
        values = {**SMART_SEARCH_CONFIG, **overrides}
        values.setdefault('weights', ScoringWeights.from_config())
        return cls(**values)
