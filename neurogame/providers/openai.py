"""OpenAI chat completions provider (system role + user message)."""

import logging
from typing import Optional

import httpx
from openai import AsyncOpenAI, OpenAIError

from ..errors import ProviderError
from .base import BaseLLMProvider, ProviderConfig

logger = logging.getLogger(__name__)


class OpenAIProvider(BaseLLMProvider):
    """OpenAI direct API provider."""

    provider_id = "openai"

    def __init__(
        self,
        config: ProviderConfig,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(config)
        self.client = AsyncOpenAI(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.timeout,
            max_retries=0,
            http_client=http_client,
        )

    async def invoke(
        self,
        role: str,
        prompt: str,
        model: str,
        max_tokens: Optional[int] = None,
    ) -> str:
        """
        Query an OpenAI chat model.

        The role goes out as a true ``system`` message. ``max_tokens`` is
        accepted for contract symmetry; when given it is sent as
        ``max_completion_tokens``.
        """
        request = {
            "model": model,
            "messages": [
                {"role": "system", "content": role},
                {"role": "user", "content": prompt},
            ],
        }
        if max_tokens is not None:
            request["max_completion_tokens"] = max_tokens

        try:
            response = await self.client.chat.completions.create(**request)
        except OpenAIError as e:
            raise ProviderError(self.provider_id, f"query failed: {e}") from e

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            raise ProviderError(self.provider_id, f"malformed response: {e}") from e

        if not isinstance(content, str):
            raise ProviderError(self.provider_id, "malformed response: message has no text content")

        return content.strip()
