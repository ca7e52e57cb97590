"""
Query suggestion generation.

Fallback chain:
1. AI suggestions (one per line)
2. Templated variations when the AI call fails or no provider is available
3. Popular recent searches when the AI reply has no usable lines
"""

import re
import logging
from typing import List, Optional

from ..ai.provider import AIProviderFactory, AIRequest
from .history_tracker import SearchHistoryTracker

logger = logging.getLogger(__name__)

SYSTEM_MESSAGE = "You are a helpful search assistant that suggests relevant search queries."

# Suggestions longer than this are discarded
MAX_SUGGESTION_LENGTH = 100

SUGGESTION_TEMPLATES = [
    "{q} tutorial",
    "{q} guide",
    "how to {q}",
    "{q} examples",
    "best {q}",
]

# Returned when there is no search history at all
DEFAULT_POPULAR_SUGGESTIONS = [
    "programming tutorials",
    "web development",
    "data structures",
    "algorithms",
    "career advice",
]

# Leading bullets, or numbering followed by whitespace: "- ", "* ", "• ", "1. ", "2) "
LIST_MARKER_PATTERN = re.compile(r'^\s*(?:[-*•]+\s*|\d+[.)]\s+)')


def templated_suggestions(query: str, limit: int) -> List[str]:
    return [template.format(q=query) for template in SUGGESTION_TEMPLATES][:max(0, limit)]


def parse_suggestion_lines(reply: str, limit: int) -> List[str]:
    """
    Turn an AI reply into suggestions.

    Args:
        reply: Raw reply text, one suggestion per line
        limit: Maximum suggestions returned

    Returns:
        Cleaned suggestions without markers, blanks or overlong lines
    """
    suggestions = []
    for line in reply.splitlines():
        cleaned = LIST_MARKER_PATTERN.sub('', line.strip()).strip()
        if not cleaned or len(cleaned) > MAX_SUGGESTION_LENGTH:
            continue
        suggestions.append(cleaned)
        if len(suggestions) >= limit:
            break
    return suggestions


class SuggestionGenerator:
    """Generates query completions and related queries."""

    def __init__(
        self,
        history: SearchHistoryTracker,
        provider_factory: Optional[AIProviderFactory] = None,
        popular_window_hours: float = 24,
        timeout_seconds: float = 10.0
    ):
        """
        Initialize suggestion generator.

        Args:
            history: Search history used for popular suggestions
            provider_factory: Source of AI providers (None = no AI)
            popular_window_hours: Trailing window for popular searches
            timeout_seconds: Bound on a single AI round trip
        """
        self.history = history
        self.provider_factory = provider_factory or AIProviderFactory()
        self.popular_window_hours = popular_window_hours
        self.timeout_seconds = timeout_seconds

    async def suggest(self, partial_query: str, limit: int = 5) -> List[str]:
        """
        Suggest up to limit queries. Never raises.

        Args:
            partial_query: Query typed so far
            limit: Maximum suggestions

        Returns:
            Ordered list of suggestions
        """
        if not partial_query or not partial_query.strip() or limit <= 0:
            return []

        query = partial_query.strip()
        request = AIRequest(
            prompt=(
                f"Given the search query '{query}', suggest {limit} related or completed "
                "search queries that users might want to search for. "
                "Return only the suggestions, one per line, without numbering or explanations."
            ),
            system_message=SYSTEM_MESSAGE,
            max_tokens=200,
            temperature=0.7
        )

        reply = await self.provider_factory.try_complete(request, self.timeout_seconds)
        if reply is None:
            logger.info(f"Using templated suggestions for '{query}'")
            return templated_suggestions(query, limit)

        suggestions = parse_suggestion_lines(reply, limit)
        if not suggestions:
            logger.warning("AI reply had no usable suggestions, using popular searches")
            return self.popular_suggestions(limit)

        return suggestions

    def popular_suggestions(self, limit: int) -> List[str]:
        """Popular recent searches, or a fixed list when history is empty."""
        if not len(self.history):
            return DEFAULT_POPULAR_SUGGESTIONS[:limit]

        return self.history.popular_queries(self.popular_window_hours, limit)
