"""
Result filtering and pagination.
"""

import math
import logging
from dataclasses import dataclass
from typing import List

from .models import SearchRequest, SearchResult

logger = logging.getLogger(__name__)


@dataclass
class Page:
    """One page of results plus pagination totals."""
    results: List[SearchResult]
    total_count: int
    page: int
    page_size: int
    total_pages: int


class SearchFilters:
    """Applies request filters before ranking and pagination after."""

    @staticmethod
    def apply_filters(results: List[SearchResult], request: SearchRequest) -> List[SearchResult]:
        """
        Filter candidates by category, tags and creation date.

        Args:
            results: Candidate results
            request: Search request carrying the filters
                - category: exact category match
                - tags: keep results sharing at least one tag
                - start_date: created_at >= start_date
                - end_date: created_at <= end_date

        Returns:
            Filtered results in input order
        """
        filtered = results

        # Category filter
        if request.category and request.category.strip():
            filtered = [r for r in filtered if r.category == request.category]

        # Tag filter (any overlap)
        if request.tags:
            wanted = set(request.tags)
            filtered = [r for r in filtered if any(tag in wanted for tag in r.tags)]

        # Date range filters
        if request.start_date is not None:
            filtered = [r for r in filtered if r.created_at >= request.start_date]

        if request.end_date is not None:
            filtered = [r for r in filtered if r.created_at <= request.end_date]

        logger.debug(f"Filtered {len(results)} -> {len(filtered)} results")
        return filtered

    @staticmethod
    def apply_relevance_threshold(results: List[SearchResult], min_score: float) -> List[SearchResult]:
        """Drop results scoring below min_score."""
        return [r for r in results if r.relevance_score >= min_score]

    @staticmethod
    def paginate(results: List[SearchResult], page: int, page_size: int) -> Page:
        """
        Slice one page out of ranked results.

        The requested page is clamped into [1, max(total_pages, 1)].

        Args:
            results: Ranked results
            page: Requested page (1-based)
            page_size: Results per page (>= 1)

        Returns:
            Page with the slice and totals
        """
        total_count = len(results)
        total_pages = math.ceil(total_count / page_size)
        page = max(1, min(page, total_pages if total_pages > 0 else 1))

        start = (page - 1) * page_size
        return Page(
            results=results[start:start + page_size],
            total_count=total_count,
            page=page,
            page_size=page_size,
            total_pages=total_pages
        )
