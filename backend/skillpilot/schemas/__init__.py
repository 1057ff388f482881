"""Pydantic schemas."""

from skillpilot.schemas.generation import (
    Difficulty,
    Exercise,
    GenerationRequest,
    Milestone,
    Resource,
    RoadmapGeneration,
    SuggestionsRequest,
    SuggestionsResponse,
)
from skillpilot.schemas.skill_path import (
    DeletePathResponse,
    MilestoneResponse,
    MilestoneUpdate,
    PathProgress,
    SkillPathResponse,
    SkillPathSummary,
    SkillPathUpdate,
)

__all__ = [
    "Difficulty",
    "GenerationRequest",
    "Resource",
    "Exercise",
    "Milestone",
    "RoadmapGeneration",
    "SuggestionsRequest",
    "SuggestionsResponse",
    "PathProgress",
    "MilestoneResponse",
    "MilestoneUpdate",
    "SkillPathResponse",
    "SkillPathSummary",
    "SkillPathUpdate",
    "DeletePathResponse",
]
