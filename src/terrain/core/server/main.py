"""Terrain server entry point: ``python -m terrain.core.server.main``."""

from __future__ import annotations

import logging
from ipaddress import ip_address

from terrain.core.config.settings import Settings, get_settings
from terrain.core.server.app import create_app

logger = logging.getLogger(__name__)


def _is_loopback_host(host: str) -> bool:
    if host == "localhost":
        return True
    try:
        return ip_address(host).is_loopback
    except ValueError:
        return False


def check_bind_address(settings: Settings) -> None:
    """Refuse non-loopback binds unless explicitly allowed.

    Raises:
        RuntimeError: if ``terrain_host`` is public and the override is unset.
    """
    if _is_loopback_host(settings.terrain_host):
        return
    if not settings.terrain_allow_insecure_bind:
        raise RuntimeError(
            f"Refusing to bind Terrain server to {settings.terrain_host!r}: the MCP tools "
            "have no auth layer. Set TERRAIN_ALLOW_INSECURE_BIND=true to override."
        )
    logger.warning("Binding Terrain server to non-loopback host %s", settings.terrain_host)


def run() -> None:
    """Start the Terrain MCP server with Streamable HTTP transport."""
    settings = get_settings()
    logging.basicConfig(level=getattr(logging, settings.terrain_log_level.upper(), logging.INFO))
    check_bind_address(settings)

    logger.info("Starting Terrain scoring server on %s:%d", settings.terrain_host, settings.terrain_port)
    create_app().run(
        transport="streamable-http",
        host=settings.terrain_host,
        port=settings.terrain_port,
    )


if __name__ == "__main__":
    run()
