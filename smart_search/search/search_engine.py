"""
Search orchestration: understanding, filtering, ranking, pagination,
suggestions and history.
"""

import time
import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from ..ai.provider import AIProviderFactory
from ..exceptions import SearchDisabledError, SearchValidationError
from .content_source import ContentSource
from .filters import SearchFilters
from .history_tracker import SearchHistoryEntry, SearchHistoryTracker
from .models import QueryUnderstanding, SearchRequest, SearchResponse, SearchSettings
from .query_understanding import QueryUnderstandingAdapter
from .ranker import ResultRanker
from .suggestions import SuggestionGenerator

logger = logging.getLogger('search')


class SmartSearchEngine:
    """
    Search engine with AI-assisted query understanding.

    Features:
    - Weighted title/content/tag/recency ranking with popularity boost
    - Category, tag and date filtering with a relevance cutoff
    - AI query understanding and suggestions with heuristic fallbacks
    - Thread-safe search history for popular-query suggestions

    Request-scoped work holds no shared state; only the history tracker
    is shared between concurrent searches.
    """

    def __init__(
        self,
        content_source: ContentSource,
        settings: Optional[SearchSettings] = None,
        provider_factory: Optional[AIProviderFactory] = None,
        history: Optional[SearchHistoryTracker] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Initialize search engine.

        Args:
            content_source: Supplies candidate results
            settings: Engine settings (defaults from configuration)
            provider_factory: AI providers (None = heuristics only)
            history: Shared search history (created when omitted)
            clock: Reference time for recency scoring
        """
        self.settings = settings or SearchSettings.from_config()
        self.content_source = content_source
        self.provider_factory = provider_factory or AIProviderFactory()
        if history is None:
            history = SearchHistoryTracker(self.settings.history_capacity)
        self.history = history

        self.understanding_adapter = QueryUnderstandingAdapter(
            provider_factory=self.provider_factory,
            default_language=self.settings.default_language,
            timeout_seconds=self.settings.ai_timeout_seconds
        )
        self.ranker = ResultRanker(weights=self.settings.weights, clock=clock)
        self.suggestion_generator = SuggestionGenerator(
            history=self.history,
            provider_factory=self.provider_factory,
            popular_window_hours=self.settings.popular_searches_window_hours,
            timeout_seconds=self.settings.ai_timeout_seconds
        )

    async def search(self, request: SearchRequest) -> SearchResponse:
        """
        Execute a search.

        Args:
            request: Search request

        Returns:
            SearchResponse with one page of ranked results

        Raises:
            SearchValidationError: Blank query or unsupported search type
            SearchDisabledError: Smart search is switched off
        """
        if not request.query or not request.query.strip():
            raise SearchValidationError("Search query cannot be empty.")

        if not self.settings.is_enabled:
            raise SearchDisabledError("Smart search is disabled.")

        if request.search_type.value not in self.settings.supported_search_types:
            raise SearchValidationError(f"Unsupported search type: {request.search_type.value}")

        start_time = time.perf_counter()

        query = request.query.strip()[:self.settings.max_query_length]
        page_size = max(1, min(request.page_size, self.settings.max_page_size))

        logger.info(
            f"Executing search: query='{query}', type={request.search_type.value}, "
            f"page={request.page}, page_size={page_size}"
        )

        understanding = None
        if self.settings.enable_query_understanding:
            understanding = await self.understand_query(query)

        # Content source errors propagate to the caller
        candidates = await self.content_source.fetch_candidates(query, request.search_type)

        filtered = SearchFilters.apply_filters(candidates, request)
        ranked = self.ranker.rank(query, filtered)
        relevant = SearchFilters.apply_relevance_threshold(ranked, request.min_relevance_score)
        page = SearchFilters.paginate(relevant, request.page, page_size)

        logger.debug(
            f"Candidates {len(candidates)} -> filtered {len(filtered)} -> "
            f"above {request.min_relevance_score} {len(relevant)}"
        )

        suggestions = []
        if request.include_suggestions:
            suggestions = await self.get_suggestions(query, self.settings.default_suggestion_count)

        processing_time_ms = int((time.perf_counter() - start_time) * 1000)

        if self.settings.enable_search_history:
            self.history.record(SearchHistoryEntry(
                raw_query=request.query,
                search_type=request.search_type.value,
                result_count=page.total_count,
                processing_time_ms=processing_time_ms,
                user_id=request.user_id,
                language=request.language or self.settings.default_language
            ))

        logger.info(
            f"Search completed: {len(page.results)} results returned, "
            f"{page.total_count} total, {processing_time_ms}ms"
        )

        return SearchResponse(
            results=page.results,
            total_count=page.total_count,
            page=page.page,
            page_size=page.page_size,
            total_pages=page.total_pages,
            suggestions=suggestions,
            query_understanding=understanding,
            processing_time_ms=processing_time_ms,
            timestamp=datetime.now(timezone.utc),
            query=query,
            search_type=request.search_type
        )

    async def get_suggestions(self, partial_query: str, limit: Optional[int] = None) -> List[str]:
        """Query suggestions; never fails because of the AI provider."""
        if limit is None:
            limit = self.settings.default_suggestion_count
        return await self.suggestion_generator.suggest(partial_query, limit)

    async def understand_query(self, query: str) -> QueryUnderstanding:
        """Query understanding; degrades to heuristics, never raises."""
        return await self.understanding_adapter.understand(query)

    def get_popular_searches(self, limit: Optional[int] = None) -> List[str]:
        """Most frequent recent queries from the search history."""
        return self.history.popular_queries(
            self.settings.popular_searches_window_hours,
            limit if limit is not None else self.settings.popular_searches_limit
        )
