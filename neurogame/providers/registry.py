"""Provider registry: builds provider instances once at process start."""

import logging
import os
from typing import Dict, Optional

import httpx

from ..http_pool import create_http_client
from ..model_config import ModelsConfig, load_models_config
from .anthropic import AnthropicProvider
from .base import BaseLLMProvider, ProviderConfig
from .openai import OpenAIProvider

logger = logging.getLogger(__name__)

PROVIDER_CLASSES = {
    "openai": OpenAIProvider,
    "anthropic": AnthropicProvider,
}


class ProviderRegistry:
    """Registry for managing LLM providers.

    Providers are registered once and shared by reference with every run.
    Tests register fakes through ``register``.
    """

    def __init__(self, http_client: Optional[httpx.AsyncClient] = None):
        self._providers: Dict[str, BaseLLMProvider] = {}
        self._http_client = http_client

    @classmethod
    def from_config(
        cls,
        models_config: Optional[ModelsConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "ProviderRegistry":
        """
        Build the registry from provider settings.

        Args:
            models_config: Parsed config/models.yaml (loaded when omitted)
            http_client: Shared HTTP client (a pooled one is created when omitted)

        Returns:
            ProviderRegistry with every enabled provider whose key is set
        """
        models_config = models_config or load_models_config()
        registry = cls(http_client=http_client or create_http_client())

        for provider_id, settings in models_config.providers.items():
            if not settings.enabled:
                logger.info(f"Provider {provider_id} disabled in config (skipping)")
                continue

            config = ProviderConfig(
                provider_id=provider_id,
                api_key=os.getenv(settings.api_key_env),
                base_url=settings.base_url,
                timeout=settings.timeout,
                enabled=settings.enabled,
            )
            if not config.validate_key():
                logger.warning(
                    f"⚠️  Provider {provider_id} has no API key in ${settings.api_key_env} (skipping)"
                )
                continue

            registry.register(provider_id, registry._create_provider(provider_id, config))
            logger.info(f"✅ Loaded provider: {provider_id}")

        return registry

    def _create_provider(
        self, provider_id: str, config: ProviderConfig
    ) -> BaseLLMProvider:
        provider_class = PROVIDER_CLASSES.get(provider_id)
        if not provider_class:
            raise ValueError(f"Unknown provider: {provider_id}")

        return provider_class(config, http_client=self._http_client)

    def register(self, provider_id: str, provider: BaseLLMProvider) -> None:
        self._providers[provider_id] = provider

    def get_provider(self, provider_id: str) -> Optional[BaseLLMProvider]:
        """Get provider instance by ID, or None if it is not loaded."""
        return self._providers.get(provider_id)

    def require(self, provider_id: str) -> BaseLLMProvider:
        """Get provider instance by ID, raising ValueError if it is not loaded."""
        provider = self.get_provider(provider_id)
        if provider is None:
            raise ValueError(f"Provider not loaded: {provider_id}")
        return provider

    def get_all_providers(self) -> Dict[str, BaseLLMProvider]:
        """Get all loaded providers."""
        return self._providers.copy()

    async def aclose(self) -> None:
        """Close providers and the shared HTTP client."""
        for provider in self._providers.values():
            await provider.aclose()
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
