"""Loader for config/models.yaml (provider settings and stage overrides)."""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderSettings:
    provider_id: str
    api_key_env: str
    base_url: Optional[str] = None
    timeout: float = 600.0
    enabled: bool = True


@dataclass(frozen=True)
class StageModelOverride:
    stage_id: str
    model: Optional[str] = None
    provider: Optional[str] = None
    max_output_tokens: Optional[int] = None


@dataclass(frozen=True)
class NamingSettings:
    provider: str = "openai"
    model: str = "gpt-4o-mini"


DEFAULT_PROVIDERS: Dict[str, ProviderSettings] = {
    "openai": ProviderSettings(provider_id="openai", api_key_env="OPENAI_API_KEY"),
    "anthropic": ProviderSettings(
        provider_id="anthropic", api_key_env="ANTHROPIC_API_KEY"
    ),
}


@dataclass(frozen=True)
class ModelsConfig:
    providers: Dict[str, ProviderSettings] = field(
        default_factory=lambda: dict(DEFAULT_PROVIDERS)
    )
    stages: Dict[str, StageModelOverride] = field(default_factory=dict)
    naming: NamingSettings = field(default_factory=NamingSettings)


def _parse_providers(data: Dict[str, Dict[str, Any]]) -> Dict[str, ProviderSettings]:
    providers = dict(DEFAULT_PROVIDERS)
    for provider_id, value in data.items():
        value = value or {}
        default = DEFAULT_PROVIDERS.get(provider_id)
        providers[provider_id] = ProviderSettings(
            provider_id=provider_id,
            api_key_env=value.get(
                "api_key_env",
                default.api_key_env if default else f"{provider_id.upper()}_API_KEY",
            ),
            base_url=value.get("base_url"),
            timeout=float(value.get("timeout", 600.0)),
            enabled=value.get("enabled", True),
        )
    return providers


def _parse_stages(data: Dict[str, Dict[str, Any]]) -> Dict[str, StageModelOverride]:
    overrides = {}
    for stage_id, value in data.items():
        value = value or {}
        max_tokens = value.get("max_output_tokens")
        overrides[stage_id] = StageModelOverride(
            stage_id=stage_id,
            model=value.get("model"),
            provider=value.get("provider"),
            max_output_tokens=int(max_tokens) if max_tokens is not None else None,
        )
    return overrides


def _parse_naming(data: Dict[str, Any]) -> NamingSettings:
    default = NamingSettings()
    return NamingSettings(
        provider=data.get("provider", default.provider),
        model=data.get("model", default.model),
    )


def load_models_config(path: Optional[os.PathLike] = None) -> ModelsConfig:
    """
    Load provider settings and per-stage model overrides.

    Args:
        path: YAML file path (defaults to MODELS_CONFIG_PATH / config/models.yaml)

    Returns:
        ModelsConfig; built-in defaults when the file does not exist
    """
    if path is None:
        from .config import get_models_config_path

        path = get_models_config_path()

    if not os.path.exists(path):
        logger.info(f"No models config at {path}, using built-in defaults")
        return ModelsConfig()

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Models config {path} must be a mapping")

    return ModelsConfig(
        providers=_parse_providers(data.get("providers") or {}),
        stages=_parse_stages(data.get("stages") or {}),
        naming=_parse_naming(data.get("naming") or {}),
    )
