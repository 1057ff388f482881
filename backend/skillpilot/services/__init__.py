"""Service layer modules."""

from skillpilot.services import skill_path_service

__all__ = [
    "skill_path_service",
]
