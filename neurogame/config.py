"""Configuration for the neurogame service."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parent.parent

# ============================================================================
# Provider Configuration
# ============================================================================

# API keys are read again by the provider registry at startup; these are
# only used for status reporting.
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY")

DEFAULT_MODELS_CONFIG_PATH = PROJECT_ROOT / "config" / "models.yaml"


def get_models_config_path() -> Path:
    """Path of the YAML file with provider settings and stage overrides."""
    return Path(os.getenv("MODELS_CONFIG_PATH", str(DEFAULT_MODELS_CONFIG_PATH)))


# ============================================================================
# Port Configuration
# ============================================================================

def get_port(env_var: str, default: int) -> int:
    """Get port from environment or return default."""
    try:
        return int(os.getenv(env_var, default))
    except ValueError:
        print(f"Warning: Invalid {env_var}, using default {default}")
        return default

# Backend API server port
BACKEND_PORT = get_port("PORT_BACKEND", 8200)

# Frontend dev server port
FRONTEND_PORT = get_port("PORT_FRONTEND", 3000)


def get_cors_origins():
    """Generate CORS allowed origins from CORS_ORIGINS or the frontend port."""
    configured = os.getenv("CORS_ORIGINS")
    if configured:
        return [origin.strip() for origin in configured.split(",") if origin.strip()]
    return [
        f"http://localhost:{FRONTEND_PORT}",
        f"http://127.0.0.1:{FRONTEND_PORT}",
    ]

# ============================================================================
# Logging
# ============================================================================

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging from LOG_LEVEL (default INFO)."""
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
    )
