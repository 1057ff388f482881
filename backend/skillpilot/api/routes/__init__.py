"""API routes."""

from skillpilot.api.routes import explore, generation, skill_paths

__all__ = ["generation", "skill_paths", "explore"]
