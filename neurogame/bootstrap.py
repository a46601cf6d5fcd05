"""Process-start wiring: provider instances and the services that share them."""

import logging
from dataclasses import dataclass
from typing import Optional

from .model_config import ModelsConfig, load_models_config
from .pipeline.executor import ProgressObserver, log_progress
from .pipeline.registry import STAGES, apply_overrides
from .providers.registry import ProviderRegistry
from .services.generation_service import GenerationService
from .services.naming_service import NamingService

logger = logging.getLogger(__name__)


@dataclass
class AppServices:
    providers: ProviderRegistry
    generation: Optional[GenerationService] = None
    naming: Optional[NamingService] = None

    async def aclose(self) -> None:
        await self.providers.aclose()


def build_services(
    models_config: Optional[ModelsConfig] = None,
    providers: Optional[ProviderRegistry] = None,
    observer: Optional[ProgressObserver] = log_progress,
) -> AppServices:
    """
    Build providers once and wire the generation and naming services to them.

    A service whose provider is not loaded (missing API key) is left as None
    and a warning is logged; the other service still works.

    Args:
        models_config: Parsed models config (loaded from disk when omitted)
        providers: Pre-built provider registry (built from config when omitted)
        observer: Progress observer for pipeline runs

    Returns:
        AppServices

    Raises:
        RegistryError: If the stage overrides are invalid; no provider is built
    """
    models_config = models_config or load_models_config()
    stages = apply_overrides(STAGES, models_config.stages)

    if providers is None:
        providers = ProviderRegistry.from_config(models_config)
    services = AppServices(providers=providers)

    try:
        services.generation = GenerationService(providers, stages=stages, observer=observer)
    except ValueError as e:
        logger.warning(f"⚠️  Generation pipeline unavailable: {e}")

    try:
        services.naming = NamingService(providers, models_config.naming)
    except ValueError as e:
        logger.warning(f"⚠️  Naming service unavailable: {e}")

    return services
