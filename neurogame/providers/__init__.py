"""LLM provider abstractions normalizing heterogeneous responses to text."""

from .base import BaseLLMProvider, ProviderConfig
from .content import ContentBlock, OtherBlock, TextBlock, join_text_blocks, to_content_block
from .openai import OpenAIProvider
from .anthropic import AnthropicProvider
from .registry import ProviderRegistry

__all__ = [
    "BaseLLMProvider",
    "ProviderConfig",
    "ContentBlock",
    "TextBlock",
    "OtherBlock",
    "join_text_blocks",
    "to_content_block",
    "OpenAIProvider",
    "AnthropicProvider",
    "ProviderRegistry",
]
