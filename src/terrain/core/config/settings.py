"""Application settings loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Terrain scoring server configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Server
    # Default to loopback; there is no auth layer in front of the MCP tools.
    terrain_host: str = "127.0.0.1"
    terrain_port: int = 8001
    terrain_log_level: str = "info"
    # If binding to a non-loopback host, refuse to start unless this is true.
    terrain_allow_insecure_bind: bool = False

    # Catalogs (empty = packaged YAML under domains/constitution/catalog/data)
    question_catalog_path: str = ""
    pulse_catalog_path: str = ""


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()
