"""
Content sources supplying unscored candidate results.
"""

import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, List, Optional

from .models import SearchResult, SearchType

logger = logging.getLogger(__name__)

# Search type -> content type it selects
CONTENT_TYPE_BY_SEARCH_TYPE = {
    SearchType.POSTS: "Post",
    SearchType.QUESTIONS: "Question",
    SearchType.ARTICLES: "Article",
    SearchType.USERS: "User",
    SearchType.DOCUMENTS: "Document",
    SearchType.FAQS: "FAQ",
}


def matches_search_type(result: SearchResult, search_type: SearchType) -> bool:
    if search_type == SearchType.ALL:
        return True
    return result.content_type.lower() == CONTENT_TYPE_BY_SEARCH_TYPE[search_type].lower()


class ContentSource(ABC):
    """Supplies candidate results for a query."""

    @abstractmethod
    async def fetch_candidates(self, query: str, search_type: SearchType) -> List[SearchResult]:
        """
        Fetch unscored candidates.

        Args:
            query: Normalized search query
            search_type: Content type filter

        Returns:
            Candidate results (relevance_score is ignored)
        """


class InMemoryContentSource(ContentSource):
    """Serves a fixed list of results, filtered by content type."""

    def __init__(self, items: Optional[List[SearchResult]] = None):
        self.items = list(items or [])

    async def fetch_candidates(self, query: str, search_type: SearchType) -> List[SearchResult]:
        return [item for item in self.items if matches_search_type(item, search_type)]


def load_content_file(path: str) -> List[SearchResult]:
    """
    Load results from a JSON array of result objects.

    Args:
        path: Path to the JSON file

    Returns:
        List of SearchResult
    """
    with open(Path(path), 'r', encoding='utf-8') as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError(f"Content file {path} must contain a JSON array")

    items = [SearchResult.model_validate(entry) for entry in data]
    logger.info(f"Loaded {len(items)} content items from {path}")
    return items


class DemoContentSource(ContentSource):
    """
    Generates twenty demo results mentioning the query.

    Content types, categories and tags rotate with the item number;
    item i was created i days ago.
    """

    CONTENT_TYPES = ["Post", "Question", "Article", "Document", "FAQ"]
    CATEGORIES = ["Technology", "Education", "Career", "General", "Resources"]
    TAGS = ["programming", "web", "database", "career", "tutorial", "guide", "tips", "discussion"]

    def __init__(self, count: int = 20, clock: Optional[Callable[[], datetime]] = None):
        self.count = count
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    async def fetch_candidates(self, query: str, search_type: SearchType) -> List[SearchResult]:
        now = self.clock()
        results = []

        for i in range(1, self.count + 1):
            if search_type == SearchType.ALL:
                content_type = self.CONTENT_TYPES[i % len(self.CONTENT_TYPES)]
            else:
                content_type = CONTENT_TYPE_BY_SEARCH_TYPE[search_type]

            tag_start = i % 5
            results.append(SearchResult(
                id=f"result-{i}",
                content_type=content_type,
                title=f"Result {i} matching '{query}'",
                snippet=(
                    f"This is a snippet of content that matches your search query '{query}'. "
                    "It contains relevant information about the topic you're looking for..."
                ),
                url=f"/content/{content_type.lower()}/{i}",
                author=f"User{i % 5 + 1}",
                created_at=now - timedelta(days=i),
                category=self.CATEGORIES[i % len(self.CATEGORIES)],
                tags=self.TAGS[tag_start:tag_start + (i % 3) + 1],
                view_count=(self.count - i) * 10 + (i * 7) % 50
            ))

        return results
