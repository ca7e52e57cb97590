"""
AI completion provider abstraction.

Providers are tried in priority order by AIProviderFactory. Each provider
keeps a sliding one-minute request window so that the engine can skip a
provider whose quota is exhausted instead of waiting on it.
"""

import asyncio
import threading
import logging
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Any

logger = logging.getLogger('ai')


@dataclass
class AIRequest:
    """Chat completion request."""
    prompt: str
    system_message: Optional[str] = None
    max_tokens: int = 1024
    temperature: float = 0.7


@dataclass
class AIResponse:
    """Chat completion response."""
    content: str
    provider_name: str
    tokens_used: int = 0
    is_success: bool = True
    error_message: Optional[str] = None


@dataclass
class AIProviderConfig:
    """Connection and quota settings for one provider."""
    name: str
    base_url: str = ""
    api_key: str = ""
    model: str = ""
    priority: int = 100
    enabled: bool = True
    max_requests_per_minute: int = 60
    max_tokens_per_request: int = 1024
    timeout_seconds: float = 30

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AIProviderConfig":
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**known)


class AIProvider(ABC):
    """
    Base class for AI providers.

    Subclasses implement _send(); the base class handles quota tracking
    and turns an exhausted quota into a failure response.
    """

    def __init__(self, config: AIProviderConfig):
        self.config = config
        self._request_times = deque()
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return self.config.name

    async def is_available(self) -> bool:
        """Check if the provider is enabled and has quota left."""
        if not self.config.enabled:
            return False
        return self.get_remaining_quota() > 0

    def get_remaining_quota(self) -> int:
        """Requests still allowed in the current one-minute window."""
        with self._lock:
            self._expire_old_requests()
            used = len(self._request_times)
        return max(0, self.config.max_requests_per_minute - used)

    def _expire_old_requests(self):
        cutoff = datetime.now(timezone.utc) - timedelta(minutes=1)
        while self._request_times and self._request_times[0] < cutoff:
            self._request_times.popleft()

    def _try_acquire_slot(self) -> bool:
        with self._lock:
            self._expire_old_requests()
            if len(self._request_times) >= self.config.max_requests_per_minute:
                return False
            self._request_times.append(datetime.now(timezone.utc))
            return True

    async def complete(self, request: AIRequest) -> AIResponse:
        """
        Send a completion request.

        Args:
            request: Prompt and generation parameters

        Returns:
            AIResponse; is_success is False when the quota is exhausted
        """
        if not self._try_acquire_slot():
            logger.warning(f"Rate limit exceeded for provider {self.name}")
            return self.failure(f"Rate limit exceeded for {self.name} provider")

        return await self._send(request)

    @abstractmethod
    async def _send(self, request: AIRequest) -> AIResponse:
        """Perform the actual provider call."""

    def success(self, content: str, tokens_used: int = 0) -> AIResponse:
        return AIResponse(
            content=content,
            provider_name=self.name,
            tokens_used=tokens_used,
        )

    def failure(self, error_message: str) -> AIResponse:
        return AIResponse(
            content="",
            provider_name=self.name,
            is_success=False,
            error_message=error_message,
        )


class AIProviderFactory:
    """Selects the first available provider by priority."""

    def __init__(self, providers: Optional[List[AIProvider]] = None):
        """
        Initialize factory.

        Args:
            providers: Candidate providers; disabled ones are dropped
        """
        providers = providers or []
        self._providers = sorted(
            (p for p in providers if p.config.enabled),
            key=lambda p: p.config.priority
        )

    @classmethod
    def from_config(cls, provider_configs: Optional[List[Dict[str, Any]]] = None) -> "AIProviderFactory":
        """Build OpenAI-compatible providers from AI_PROVIDERS_CONFIG."""
        from .openai_compatible import OpenAICompatibleProvider
        from ..config.search_config import AI_PROVIDERS_CONFIG

        if provider_configs is None:
            provider_configs = AI_PROVIDERS_CONFIG

        providers = [
            OpenAICompatibleProvider(AIProviderConfig.from_dict(entry))
            for entry in provider_configs
        ]
        factory = cls(providers)
        logger.info(f"AI provider factory with {len(factory._providers)} enabled providers")
        return factory

    async def get_available_provider(self) -> Optional[AIProvider]:
        """Return the highest-priority available provider, or None."""
        for provider in self._providers:
            if await provider.is_available():
                return provider
        return None

    async def try_complete(self, request: AIRequest, timeout_seconds: float) -> Optional[str]:
        """
        Run one completion on the best available provider.

        Unavailability, timeouts, failure responses and unexpected errors
        all yield None. No retries are made.

        Args:
            request: Prompt and generation parameters
            timeout_seconds: Bound on provider selection plus completion

        Returns:
            Non-blank reply text or None
        """
        try:
            return await asyncio.wait_for(self._complete(request), timeout=timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning(f"AI completion timed out after {timeout_seconds}s")
            return None
        except Exception as e:
            logger.error(f"AI completion failed: {e}", exc_info=True)
            return None

    async def _complete(self, request: AIRequest) -> Optional[str]:
        provider = await self.get_available_provider()
        if provider is None:
            logger.info("No AI provider available")
            return None

        response = await provider.complete(request)
        if not response.is_success:
            logger.warning(f"AI provider {provider.name} failed: {response.error_message}")
            return None

        if not response.content or not response.content.strip():
            logger.warning(f"AI provider {provider.name} returned an empty reply")
            return None

        logger.debug(f"AI provider {provider.name} used {response.tokens_used} tokens")
        return response.content

    def get_provider(self, name: str) -> Optional[AIProvider]:
        for provider in self._providers:
            if provider.name == name:
                return provider
        return None

    def get_all_providers(self) -> List[AIProvider]:
        return list(self._providers)
