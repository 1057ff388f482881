"""Database models."""

from skillpilot.models.skill import Skill
from skillpilot.models.skill_path import RoadmapMilestone, SkillPath

__all__ = [
    "Skill",
    "SkillPath",
    "RoadmapMilestone",
]
