"""
AI-assisted query understanding with heuristic fallback.

The adapter always returns a fully populated QueryUnderstanding:
1. Ask the AI provider for a JSON analysis and parse it permissively
2. On any failure (no provider, timeout, error, no JSON) build the basic
   understanding from the heuristic detector
"""

import json
import re
import logging
from typing import Any, Dict, List, Optional

from ..ai.provider import AIProviderFactory, AIRequest
from .language import detect_language, extract_basic_entities
from .models import QueryUnderstanding

logger = logging.getLogger(__name__)

SYSTEM_MESSAGE = (
    "You are an expert at understanding search queries and user intent. "
    "Analyze queries to expand them with synonyms, detect intent, and extract key entities."
)

# Outermost {...} block in the reply
JSON_OBJECT_PATTERN = re.compile(r'\{[\s\S]*\}')

DEFAULT_INTENT = 'search'
UNKNOWN_INTENT = 'unknown'


class QueryUnderstandingAdapter:
    """
    Interprets raw queries: expansion, intent, entities and typo correction.
    """

    def __init__(
        self,
        provider_factory: Optional[AIProviderFactory] = None,
        default_language: str = 'en',
        timeout_seconds: float = 10.0,
        max_tokens: int = 300,
        temperature: float = 0.3
    ):
        """
        Initialize adapter.

        Args:
            provider_factory: Source of AI providers (None = heuristics only)
            default_language: Language code when no script is detected
            timeout_seconds: Bound on a single AI round trip
            max_tokens: Completion token budget
            temperature: Low values keep the analysis deterministic
        """
        self.provider_factory = provider_factory or AIProviderFactory()
        self.default_language = default_language
        self.timeout_seconds = timeout_seconds
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def understand(self, query: str) -> QueryUnderstanding:
        """
        Understand a query. Never raises.

        Args:
            query: Raw query

        Returns:
            QueryUnderstanding (AI-derived or heuristic)
        """
        if not query or not query.strip():
            return QueryUnderstanding(
                original_query=query or '',
                expanded_query=query or '',
                intent=UNKNOWN_INTENT,
                language=detect_language(query, self.default_language)
            )

        normalized = query.strip()
        language = detect_language(normalized, self.default_language)

        request = AIRequest(
            prompt=self.build_prompt(normalized, language),
            system_message=SYSTEM_MESSAGE,
            max_tokens=self.max_tokens,
            temperature=self.temperature
        )
        reply = await self.provider_factory.try_complete(request, self.timeout_seconds)

        if reply is None:
            logger.info(f"Using basic understanding for '{normalized}'")
            return self.basic_understanding(normalized, language)

        return self.parse_understanding(normalized, reply, language)

    def build_prompt(self, query: str, language: str) -> str:
        language_note = f" (query is in {language})" if language != 'en' else ""

        return (
            f"Analyze this search query{language_note}: \"{query}\"\n\n"
            "Provide the following in JSON format:\n"
            "1. expandedQuery: Add synonyms and related terms to improve search\n"
            "2. intent: Classify the intent (e.g., 'find_information', 'ask_question', "
            "'find_person', 'find_document')\n"
            "3. entities: Extract key entities (names, topics, dates)\n"
            "4. suggestedCorrection: If the query has typos, suggest correction (null if none)\n\n"
            "Example format:\n"
            "{\n"
            "  \"expandedQuery\": \"...\",\n"
            "  \"intent\": \"...\",\n"
            "  \"entities\": [\"...\"],\n"
            "  \"suggestedCorrection\": null\n"
            "}"
        )

    def basic_understanding(self, query: str, language: str) -> QueryUnderstanding:
        return QueryUnderstanding(
            original_query=query,
            expanded_query=query,
            intent=DEFAULT_INTENT,
            entities=extract_basic_entities(query),
            language=language
        )

    def parse_understanding(self, query: str, reply: str, language: str) -> QueryUnderstanding:
        """
        Parse an AI reply into a QueryUnderstanding.

        Missing or mistyped fields fall back to the basic values; a reply
        without a JSON object yields the basic understanding.
        """
        data = self._extract_json_object(reply)
        if data is None:
            logger.warning("AI reply contained no usable JSON object, using basic understanding")
            return self.basic_understanding(query, language)

        expanded = data.get('expandedQuery')
        intent = data.get('intent')

        return QueryUnderstanding(
            original_query=query,
            expanded_query=expanded if isinstance(expanded, str) and expanded.strip() else query,
            intent=intent if isinstance(intent, str) and intent.strip() else DEFAULT_INTENT,
            entities=self._parse_entities(data.get('entities'), query),
            language=language,
            suggested_correction=self._parse_correction(data.get('suggestedCorrection'))
        )

    def _extract_json_object(self, reply: str) -> Optional[Dict[str, Any]]:
        match = JSON_OBJECT_PATTERN.search(reply)
        if not match:
            return None

        try:
            data = json.loads(match.group(0))
        except ValueError as e:
            logger.warning(f"Could not parse AI reply as JSON: {e}")
            return None

        return data if isinstance(data, dict) else None

    def _parse_entities(self, value: Any, query: str) -> List[str]:
        if not isinstance(value, list):
            return extract_basic_entities(query)

        entities = [e.strip() for e in value if isinstance(e, str) and e.strip()]
        return list(dict.fromkeys(entities))

    def _parse_correction(self, value: Any) -> Optional[str]:
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None
