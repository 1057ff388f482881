"""Skill path schemas for API requests and responses."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from skillpilot.schemas.generation import CamelModel


class PathProgress(BaseModel):
    """Completion summary for a skill path."""

    completed: int
    total: int
    percentage: float  # 0.0 to 100.0


class MilestoneResponse(CamelModel):
    """A stored milestone."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str | None
    order_index: int
    week_number: int
    estimated_hours: float
    resources: list[dict]
    exercises: list[dict]
    completed: bool
    completed_at: datetime | None


class SkillSummary(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    category: str


class SkillPathResponse(CamelModel):
    """A skill path with its milestones."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    description: str | None
    target_duration_weeks: int
    hours_per_week: int
    difficulty_level: str
    status: str
    ai_generated: bool
    skill: SkillSummary
    milestones: list[MilestoneResponse]
    progress: PathProgress
    created_at: datetime
    updated_at: datetime


class SkillPathSummary(CamelModel):
    """A skill path as listed on the dashboard or explore page."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    description: str | None
    target_duration_weeks: int
    hours_per_week: int
    difficulty_level: str
    status: str
    ai_generated: bool
    skill: SkillSummary
    milestone_count: int
    total_hours: float
    progress: PathProgress
    created_at: datetime


class MilestoneUpdate(BaseModel):
    completed: bool


class DeletePathResponse(CamelModel):
    message: str
    deleted_path: str = Field(description="Title of the deleted path")


PathStatus = Literal["not_started", "in_progress", "completed", "paused"]

DEFAULT_HOURS_PER_WEEK = 5
MAX_HOURS_PER_WEEK = 40


class SkillPathUpdate(CamelModel):
    """Editable fields of a skill path; omitted fields are left unchanged.

    Changing ``target_duration_weeks`` or ``hours_per_week`` regenerates the
    milestones. ``status="paused"`` pauses the path and any other status
    resumes it, with the actual status derived from milestone completion.
    """

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    target_duration_weeks: int | None = Field(default=None, ge=1, le=52)
    hours_per_week: int | None = Field(default=None, ge=1, le=MAX_HOURS_PER_WEEK)
    difficulty_level: Literal["beginner", "intermediate", "advanced"] | None = None
    status: PathStatus | None = None

    @field_validator("difficulty_level", mode="before")
    @classmethod
    def lower_difficulty(cls, value: object) -> object:
        return value.lower() if isinstance(value, str) else value
