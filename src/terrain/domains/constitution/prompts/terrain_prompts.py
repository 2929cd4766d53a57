"""MCP Prompts: pre-built interaction templates for terrain journeys."""

from __future__ import annotations

from fastmcp import FastMCP


def register_terrain_prompts(mcp: FastMCP) -> None:
    """Register terrain domain MCP prompts."""

    @mcp.prompt()
    def terrain_quiz_prompt(goals: str = "sleep, energy") -> str:
        """Prompt template for walking a user through the terrain quiz."""
        return f"""I'd like to find out my body terrain. My goals are: {goals}.

1. List the quiz questions for my goals
2. Ask me each question one at a time and record my answer
3. Score my answers and tell me my terrain type and any modifier
4. Explain in plain language what my type and modifier mean

Please keep it friendly and don't give medical advice."""

    @mcp.prompt()
    def terrain_pulse_prompt(current_terrain_id: str = "", current_modifier: str = "none") -> str:
        """Prompt template for a quarterly pulse check-in."""
        return f"""It's time for my terrain pulse check-in.
My saved terrain is '{current_terrain_id or "unknown"}' with modifier '{current_modifier}'.

1. Ask me the 5 pulse questions
2. Check whether my terrain has drifted
3. Tell me whether I should retake the full assessment"""
