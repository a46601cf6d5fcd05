"""Shared httpx client for the model provider SDKs.

Both provider SDKs accept an ``http_client``; the provider registry creates
one pooled ``httpx.AsyncClient`` at startup and hands it to every provider,
so connections to the model APIs are reused across stages and runs.

Environment Variables:
    Connection pool settings:
        HTTP_MAX_CONNECTIONS: Max connections (default: 100)
        HTTP_MAX_KEEPALIVE_CONNECTIONS: Max keepalive connections (default: 20)
        HTTP_KEEPALIVE_EXPIRY: Keepalive expiry in seconds (default: 5.0)

    Timeout settings:
        HTTP_CONNECT_TIMEOUT: Connection timeout in seconds (default: 10.0)
        HTTP_READ_TIMEOUT: Read timeout in seconds (default: 600.0)
        HTTP_WRITE_TIMEOUT: Write timeout in seconds (default: 30.0)
        HTTP_POOL_TIMEOUT: Pool acquire timeout in seconds (default: 10.0)

    Protocol settings:
        HTTP2_ENABLED: Enable HTTP/2 support (default: true)
"""

import logging
import os
from typing import Optional

import httpx
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


class HttpClientConfig:
    """Connection pool and timeout settings loaded from the environment.

    Model calls can take minutes (the final stage writes a whole HTML
    document), so the read timeout default is much longer than the others.
    """

    def __init__(self):
        # Connection pool settings
        self.max_connections = int(os.getenv("HTTP_MAX_CONNECTIONS", "100"))
        self.max_keepalive_connections = int(
            os.getenv("HTTP_MAX_KEEPALIVE_CONNECTIONS", "20")
        )
        self.keepalive_expiry = float(os.getenv("HTTP_KEEPALIVE_EXPIRY", "5.0"))

        # Timeout settings (all in seconds)
        self.connect_timeout = float(os.getenv("HTTP_CONNECT_TIMEOUT", "10.0"))
        self.read_timeout = float(os.getenv("HTTP_READ_TIMEOUT", "600.0"))
        self.write_timeout = float(os.getenv("HTTP_WRITE_TIMEOUT", "30.0"))
        self.pool_timeout = float(os.getenv("HTTP_POOL_TIMEOUT", "10.0"))

        # Protocol settings
        self.http2_enabled = os.getenv("HTTP2_ENABLED", "true").lower() == "true"

    def get_limits(self) -> dict:
        """Keyword arguments for ``httpx.Limits``."""
        return {
            "max_connections": self.max_connections,
            "max_keepalive_connections": self.max_keepalive_connections,
            "keepalive_expiry": self.keepalive_expiry,
        }

    def get_timeout(self) -> dict:
        """Keyword arguments for ``httpx.Timeout``."""
        return {
            "connect": self.connect_timeout,
            "read": self.read_timeout,
            "write": self.write_timeout,
            "pool": self.pool_timeout,
        }

    def __repr__(self) -> str:
        return (
            f"HttpClientConfig("
            f"max_connections={self.max_connections}, "
            f"max_keepalive={self.max_keepalive_connections}, "
            f"connect_timeout={self.connect_timeout}s, "
            f"read_timeout={self.read_timeout}s, "
            f"http2={self.http2_enabled})"
        )


def create_http_client(config: Optional[HttpClientConfig] = None) -> httpx.AsyncClient:
    """
    Create a pooled ``httpx.AsyncClient``.

    The caller owns the client and must ``await client.aclose()`` on shutdown.

    Args:
        config: Pool settings (defaults to ``HttpClientConfig()``)

    Returns:
        httpx.AsyncClient configured with limits and timeouts
    """
    config = config or HttpClientConfig()
    logger.info(f"Initializing HTTP client with config: {config}")

    client = httpx.AsyncClient(
        limits=httpx.Limits(**config.get_limits()),
        timeout=httpx.Timeout(**config.get_timeout()),
        http2=config.http2_enabled,
        follow_redirects=True,
    )

    logger.info("✓ HTTP client initialized")
    return client
