"""Terrain MCP Server: application factory.

This module provides:
- create_app() for testability (integration tests create fresh server instances)
- Module-level `mcp` variable for FastMCP discovery
"""

from __future__ import annotations

import logging

from fastmcp import FastMCP

from terrain.core.config.settings import get_settings
from terrain.domains.constitution.catalog.loader import (
    default_pulse_catalog,
    default_question_catalog,
    load_pulse_catalog,
    load_question_catalog,
)
from terrain.domains.constitution.catalog.models import PulseCatalog, QuestionCatalog
from terrain.domains.constitution.domain_logic.drift_detector import TerrainDriftDetector
from terrain.domains.constitution.domain_logic.scoring_engine import TerrainScoringEngine
from terrain.domains.constitution.prompts.terrain_prompts import register_terrain_prompts
from terrain.domains.constitution.resources.taxonomy import register_taxonomy_resources
from terrain.domains.constitution.tools.terrain_tools import register_terrain_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "Terrain Scoring"
SERVER_VERSION = "0.1.0"


def create_app(
    *,
    question_catalog_override: QuestionCatalog | None = None,
    pulse_catalog_override: PulseCatalog | None = None,
) -> FastMCP:
    """Create and configure the Terrain MCP server.

    This is the main application factory. It:
    1. Creates the FastMCP server instance
    2. Loads the quiz and pulse catalogs (override > configured path > packaged)
    3. Builds the scoring engine and drift detector over those catalogs
    4. Registers all tools, resources, and prompts
    """
    settings = get_settings()

    # --- Server instance ---
    server = FastMCP(
        SERVER_NAME,
        instructions=(
            "Terrain constitution scoring server. Scores the onboarding quiz into "
            "a primary terrain type and modifier, and checks quarterly pulse "
            "check-ins for drift against a stored terrain profile."
        ),
    )

    # --- Catalogs (immutable snapshots shared by every tool call) ---
    if question_catalog_override is not None:
        question_catalog = question_catalog_override
    elif settings.question_catalog_path:
        question_catalog = load_question_catalog(settings.question_catalog_path)
    else:
        question_catalog = default_question_catalog()

    if pulse_catalog_override is not None:
        pulse_catalog = pulse_catalog_override
    elif settings.pulse_catalog_path:
        pulse_catalog = load_pulse_catalog(settings.pulse_catalog_path)
    else:
        pulse_catalog = default_pulse_catalog()

    engine = TerrainScoringEngine(question_catalog)
    detector = TerrainDriftDetector(pulse_catalog, engine)
    logger.info(
        "Terrain engine ready: %d quiz questions, %d pulse questions",
        len(question_catalog),
        len(pulse_catalog),
    )

    # --- Register tools ---
    @server.tool
    def health_check() -> dict:
        """Check server health and return basic status information."""
        return {
            "status": "ok",
            "server": SERVER_NAME,
            "version": SERVER_VERSION,
            "quiz_questions": len(question_catalog),
            "pulse_questions": len(pulse_catalog),
        }

    register_terrain_tools(server, engine, detector, pulse_catalog)
    logger.info("Terrain scoring tools registered")

    # --- Register resources ---
    register_taxonomy_resources(server)

    # --- Register prompts ---
    register_terrain_prompts(server)

    return server


# Module-level instance for FastMCP discovery ("...app.py:mcp").
# Lazy: only created when this module is loaded directly (not when tests import create_app).
def __getattr__(name: str):
    if name == "mcp":
        global mcp  # noqa: PLW0603
        mcp = create_app()
        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
