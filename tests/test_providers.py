"""Tests for the OpenAI and Anthropic provider adapters.

The SDK clients are replaced with mocks; no network access happens.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import anthropic
import httpx
import openai
import pytest

from neurogame.errors import ProviderError
from neurogame.providers.anthropic import AnthropicProvider
from neurogame.providers.base import ProviderConfig
from neurogame.providers.openai import OpenAIProvider


def _chat_response(content):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
    )


@pytest.fixture
def openai_provider():
    provider = OpenAIProvider(ProviderConfig(provider_id="openai", api_key="test-key"))
    provider.client = MagicMock()
    provider.client.chat.completions.create = AsyncMock()
    return provider


@pytest.fixture
def anthropic_provider():
    provider = AnthropicProvider(ProviderConfig(provider_id="anthropic", api_key="test-key"))
    provider.client = MagicMock()
    provider.client.messages.create = AsyncMock()
    return provider


# ==================== OpenAI ====================


class TestOpenAIProvider:
    @pytest.mark.asyncio
    async def test_role_sent_as_system_message_and_text_trimmed(self, openai_provider):
        create = openai_provider.client.chat.completions.create
        create.return_value = _chat_response("  A structured concept.\n")

        text = await openai_provider.invoke("You are perception.", "Task: cats", "gpt-4o")

        assert text == "A structured concept."
        create.assert_awaited_once()
        kwargs = create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["messages"] == [
            {"role": "system", "content": "You are perception."},
            {"role": "user", "content": "Task: cats"},
        ]
        assert "max_completion_tokens" not in kwargs

    @pytest.mark.asyncio
    async def test_max_tokens_forwarded_when_given(self, openai_provider):
        create = openai_provider.client.chat.completions.create
        create.return_value = _chat_response("ok")

        await openai_provider.invoke("role", "prompt", "o3-mini", max_tokens=512)

        assert create.call_args.kwargs["max_completion_tokens"] == 512

    @pytest.mark.asyncio
    async def test_transport_error_raises_provider_error(self, openai_provider):
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        openai_provider.client.chat.completions.create.side_effect = openai.APIConnectionError(
            request=request
        )

        with pytest.raises(ProviderError) as exc_info:
            await openai_provider.invoke("role", "prompt", "gpt-4o")

        assert exc_info.value.provider_id == "openai"
        assert isinstance(exc_info.value.__cause__, openai.APIConnectionError)

    @pytest.mark.asyncio
    async def test_missing_content_is_malformed(self, openai_provider):
        openai_provider.client.chat.completions.create.return_value = _chat_response(None)

        with pytest.raises(ProviderError, match="malformed"):
            await openai_provider.invoke("role", "prompt", "gpt-4o")

    @pytest.mark.asyncio
    async def test_empty_choices_is_malformed(self, openai_provider):
        openai_provider.client.chat.completions.create.return_value = SimpleNamespace(choices=[])

        with pytest.raises(ProviderError, match="malformed"):
            await openai_provider.invoke("role", "prompt", "gpt-4o")

    def test_validate_key(self):
        assert ProviderConfig("openai", api_key="k").validate_key()
        assert not ProviderConfig("openai", api_key="").validate_key()
        assert not ProviderConfig("openai").validate_key()


# ==================== Anthropic ====================


class TestAnthropicProvider:
    @pytest.mark.asyncio
    async def test_text_blocks_concatenated_in_order(self, anthropic_provider):
        anthropic_provider.client.messages.create.return_value = SimpleNamespace(
            content=[
                SimpleNamespace(type="text", text="  A"),
                SimpleNamespace(type="image", source={}),
                SimpleNamespace(type="text", text="B \n"),
            ]
        )

        text = await anthropic_provider.invoke(
            "You are action.", "Task: cats\nDecision: plan", "claude-3-7-sonnet-20250219", max_tokens=16384
        )

        assert text == "AB"

    @pytest.mark.asyncio
    async def test_role_sent_as_assistant_turn_with_token_ceiling(self, anthropic_provider):
        create = anthropic_provider.client.messages.create
        create.return_value = SimpleNamespace(content=[SimpleNamespace(type="text", text="ok")])

        await anthropic_provider.invoke("You are action.", "Task: cats", "claude-3-7-sonnet-20250219", max_tokens=16384)

        kwargs = create.call_args.kwargs
        assert kwargs["model"] == "claude-3-7-sonnet-20250219"
        assert kwargs["max_tokens"] == 16384
        assert kwargs["messages"] == [
            {"role": "assistant", "content": "You are action."},
            {"role": "user", "content": "Task: cats"},
        ]
        assert "system" not in kwargs

    @pytest.mark.asyncio
    async def test_missing_max_tokens_fails_without_a_call(self, anthropic_provider):
        with pytest.raises(ProviderError, match="max_tokens"):
            await anthropic_provider.invoke("role", "prompt", "claude-3-7-sonnet-20250219")

        anthropic_provider.client.messages.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_transport_error_raises_provider_error(self, anthropic_provider):
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        anthropic_provider.client.messages.create.side_effect = anthropic.APIConnectionError(
            request=request
        )

        with pytest.raises(ProviderError) as exc_info:
            await anthropic_provider.invoke("role", "prompt", "claude", max_tokens=10)

        assert exc_info.value.provider_id == "anthropic"

    @pytest.mark.asyncio
    async def test_response_without_content_is_malformed(self, anthropic_provider):
        anthropic_provider.client.messages.create.return_value = SimpleNamespace()

        with pytest.raises(ProviderError, match="malformed"):
            await anthropic_provider.invoke("role", "prompt", "claude", max_tokens=10)

    @pytest.mark.asyncio
    async def test_untyped_block_is_malformed(self, anthropic_provider):
        anthropic_provider.client.messages.create.return_value = SimpleNamespace(
            content=[{"text": "no type"}]
        )

        with pytest.raises(ProviderError, match="malformed"):
            await anthropic_provider.invoke("role", "prompt", "claude", max_tokens=10)
