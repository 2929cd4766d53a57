"""MCP Resources for terrain taxonomy discovery."""

from __future__ import annotations

import json

from fastmcp import FastMCP

from terrain.domains.constitution.domain_logic.taxonomy import (
    MODIFIER_DISPLAY_NAMES,
    PRIMARY_TYPE_DISPLAY,
    Goal,
    Modifier,
    PrimaryType,
    QuizFlag,
)


def register_taxonomy_resources(mcp: FastMCP) -> None:
    """Register the terrain taxonomy resource on the MCP server."""

    @mcp.resource("terrain://taxonomy")
    def terrain_taxonomy_resource() -> str:
        """Discover the primary types, modifiers, flags and goals used in scoring."""
        return json.dumps(
            {
                "primary_types": [
                    {
                        "id": t.value,
                        "label": PRIMARY_TYPE_DISPLAY[t].label,
                        "nickname": PRIMARY_TYPE_DISPLAY[t].nickname,
                    }
                    for t in PrimaryType
                ],
                "modifiers": [
                    {"id": m.value, "display_name": MODIFIER_DISPLAY_NAMES[m]}
                    for m in Modifier
                ],
                "flags": [f.value for f in QuizFlag],
                "goals": [g.value for g in Goal],
            },
            indent=2,
        )
