"""Anthropic messages provider (role as an assistant turn, block content)."""

import logging
from typing import List, Optional

import httpx
from anthropic import AnthropicError, AsyncAnthropic

from ..errors import ProviderError
from .base import BaseLLMProvider, ProviderConfig
from .content import ContentBlock, OtherBlock, join_text_blocks, to_content_block

logger = logging.getLogger(__name__)


class AnthropicProvider(BaseLLMProvider):
    """Anthropic direct API provider."""

    provider_id = "anthropic"

    def __init__(
        self,
        config: ProviderConfig,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(config)
        kwargs = {}
        if config.base_url:
            kwargs["base_url"] = config.base_url
        self.client = AsyncAnthropic(
            api_key=config.api_key,
            timeout=config.timeout,
            max_retries=0,
            http_client=http_client,
            **kwargs,
        )

    async def invoke(
        self,
        role: str,
        prompt: str,
        model: str,
        max_tokens: Optional[int] = None,
    ) -> str:
        """
        Query an Anthropic model.

        The role is sent as a preceding ``assistant`` turn rather than through
        the ``system`` parameter. Only ``text`` blocks contribute to the result.
        """
        if max_tokens is None:
            raise ProviderError(self.provider_id, "max_tokens is required")

        try:
            response = await self.client.messages.create(
                model=model,
                max_tokens=max_tokens,
                messages=[
                    {"role": "assistant", "content": role},
                    {"role": "user", "content": prompt},
                ],
            )
        except AnthropicError as e:
            raise ProviderError(self.provider_id, f"query failed: {e}") from e

        raw_blocks = getattr(response, "content", None)
        if raw_blocks is None or isinstance(raw_blocks, (str, bytes)):
            raise ProviderError(self.provider_id, "malformed response: no content blocks")

        try:
            blocks: List[ContentBlock] = [to_content_block(raw) for raw in raw_blocks]
        except (TypeError, ValueError) as e:
            raise ProviderError(self.provider_id, f"malformed response: {e}") from e

        skipped = sum(1 for block in blocks if isinstance(block, OtherBlock))
        if skipped:
            logger.debug(f"Skipped {skipped} non-text content block(s) from {model}")

        return join_text_blocks(blocks)
