"""
Shared fixtures: fake AI providers and sample content.
"""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from smart_search.ai.provider import AIProvider, AIProviderConfig, AIProviderFactory, AIRequest, AIResponse
from smart_search.search.models import SearchResult, SearchSettings

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


class ScriptedProvider(AIProvider):
    """Replies with a fixed text and records the requests it received."""

    def __init__(self, reply="", name="scripted", priority=1, enabled=True,
                 max_requests_per_minute=60, is_success=True):
        super().__init__(AIProviderConfig(
            name=name,
            priority=priority,
            enabled=enabled,
            max_requests_per_minute=max_requests_per_minute
        ))
        self.reply = reply
        self.is_success = is_success
        self.requests = []

    async def _send(self, request: AIRequest) -> AIResponse:
        self.requests.append(request)
        if not self.is_success:
            return self.failure("provider error")
        return self.success(self.reply, tokens_used=42)


class RaisingProvider(ScriptedProvider):
    async def _send(self, request):
        raise ConnectionError("network down")


class SlowProvider(ScriptedProvider):
    async def _send(self, request):
        await asyncio.sleep(5)
        return self.success(self.reply)


def make_factory(*providers):
    return AIProviderFactory(list(providers))


def make_result(result_id, title="", snippet="", days_old=0, tags=None,
                category=None, view_count=None, content_type="Post"):
    return SearchResult(
        id=result_id,
        content_type=content_type,
        title=title,
        snippet=snippet,
        created_at=NOW - timedelta(days=days_old),
        tags=tags or [],
        category=category,
        view_count=view_count
    )


@pytest.fixture
def settings():
    return SearchSettings(ai_timeout_seconds=0.5)


@pytest.fixture
def no_ai():
    """Factory without providers."""
    return AIProviderFactory()


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def sample_results():
    return [
        make_result("r1", title="Python tutorial for beginners",
                    snippet="Learn python step by step", days_old=10,
                    tags=["python", "tutorial"], category="Education", view_count=150),
        make_result("r2", title="Docker in production",
                    snippet="Containers and orchestration", days_old=100,
                    tags=["devops"], category="Technology", view_count=20,
                    content_type="Article"),
        make_result("r3", title="Career advice",
                    snippet="How to grow as a python developer", days_old=400,
                    tags=["career"], category="Career", content_type="Question"),
        make_result("r4", title="Database indexing",
                    snippet="B-trees and hash indexes", days_old=30,
                    tags=["database", "python"], category="Technology",
                    content_type="Document"),
    ]
