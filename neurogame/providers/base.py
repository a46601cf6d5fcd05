"""Base abstract class for LLM providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class ProviderConfig:
    """Configuration for a provider."""

    provider_id: str
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    timeout: float = 600.0
    enabled: bool = True

    def validate_key(self) -> bool:
        """
        Validate that the API key is configured.

        Checked before the SDK client is built; some SDKs refuse a missing key.

        Returns:
            True if valid, False otherwise
        """
        return self.api_key is not None and len(self.api_key) > 0


class BaseLLMProvider(ABC):
    """Abstract base class for LLM providers.

    Every provider exposes the same ``invoke`` contract and returns a plain,
    trimmed string, so callers never branch on provider identity.
    """

    provider_id: str = ""

    def __init__(self, config: ProviderConfig):
        self.config = config

    @abstractmethod
    async def invoke(
        self,
        role: str,
        prompt: str,
        model: str,
        max_tokens: Optional[int] = None,
    ) -> str:
        """
        Make exactly one model call and return its normalized text.

        Args:
            role: Persona/responsibility text for the model
            prompt: User prompt
            model: Model identifier
            max_tokens: Output-token ceiling (required by some providers)

        Returns:
            Trimmed response text

        Raises:
            ProviderError: On transport errors, non-success responses or
                malformed response bodies. No partial text is returned.
        """
        pass

    async def aclose(self) -> None:
        """Release provider resources. The shared HTTP client is closed by its owner."""
        return None
