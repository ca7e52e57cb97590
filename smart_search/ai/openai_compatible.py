"""
OpenAI-compatible chat completion provider (Groq, OpenRouter, local servers).
"""

import asyncio
import logging
from typing import Dict, Any

import aiohttp

from .provider import AIProvider, AIRequest, AIResponse

logger = logging.getLogger('ai')


class OpenAICompatibleProvider(AIProvider):
    """Calls a /chat/completions endpoint over aiohttp."""

    def build_payload(self, request: AIRequest) -> Dict[str, Any]:
        """
        Build the chat completion request body.

        Args:
            request: Prompt and generation parameters

        Returns:
            JSON-serializable payload
        """
        messages = []
        if request.system_message:
            messages.append({"role": "system", "content": request.system_message})
        messages.append({"role": "user", "content": request.prompt})

        return {
            "model": self.config.model,
            "messages": messages,
            "max_tokens": min(request.max_tokens, self.config.max_tokens_per_request),
            "temperature": request.temperature,
        }

    def parse_response(self, data: Dict[str, Any]) -> AIResponse:
        """Extract the reply text and token usage from a response body."""
        try:
            content = data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError):
            return self.failure("Malformed completion response")

        tokens = (data.get("usage") or {}).get("total_tokens", 0)
        return self.success(content, tokens)

    async def _send(self, request: AIRequest) -> AIResponse:
        url = f"{self.config.base_url.rstrip('/')}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }

        try:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout_seconds)
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(url, json=self.build_payload(request), headers=headers) as response:
                    if response.status != 200:
                        body = await response.text()
                        logger.warning(f"HTTP {response.status} from {self.name}: {body[:200]}")
                        return self.failure(f"HTTP {response.status}")

                    data = await response.json(content_type=None)
                    return self.parse_response(data)

        except asyncio.TimeoutError:
            logger.warning(f"Timeout calling {self.name}")
            return self.failure("Request timed out")
        except aiohttp.ClientError as e:
            logger.warning(f"HTTP error calling {self.name}: {e}")
            return self.failure(str(e))
        except ValueError as e:
            logger.warning(f"Invalid JSON from {self.name}: {e}")
            return self.failure("Invalid JSON response")
