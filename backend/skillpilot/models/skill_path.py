"""Skill path and roadmap milestone models."""

import uuid
from datetime import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from skillpilot.core.database import Base, utcnow
from skillpilot.models.skill import Skill


def _uuid() -> str:
    return str(uuid.uuid4())


class SkillPath(Base):
    """A user's learning path for one skill."""

    __tablename__ = "skill_paths"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(String, index=True)
    skill_id: Mapped[int] = mapped_column(ForeignKey("skills.id"))

    title: Mapped[str] = mapped_column(String)
    description: Mapped[str | None] = mapped_column(Text)
    target_duration_weeks: Mapped[int] = mapped_column(Integer)
    hours_per_week: Mapped[int] = mapped_column(Integer, default=5)
    difficulty_level: Mapped[str] = mapped_column(String)  # beginner | intermediate | advanced
    status: Mapped[str] = mapped_column(
        String, default="not_started"
    )  # not_started | in_progress | completed | paused
    ai_generated: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    skill: Mapped[Skill] = relationship(lazy="selectin")
    milestones: Mapped[list["RoadmapMilestone"]] = relationship(
        back_populates="skill_path",
        order_by="RoadmapMilestone.week_number",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class RoadmapMilestone(Base):
    """One stored week of a skill path."""

    __tablename__ = "roadmap_milestones"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_uuid)
    skill_path_id: Mapped[str] = mapped_column(ForeignKey("skill_paths.id"), index=True)

    title: Mapped[str] = mapped_column(String)
    description: Mapped[str | None] = mapped_column(Text)
    order_index: Mapped[int] = mapped_column(Integer)
    week_number: Mapped[int] = mapped_column(Integer)
    estimated_hours: Mapped[float] = mapped_column(Float)
    resources: Mapped[list] = mapped_column(JSON, default=list)
    exercises: Mapped[list] = mapped_column(JSON, default=list)

    completed: Mapped[bool] = mapped_column(Boolean, default=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    skill_path: Mapped[SkillPath] = relationship(back_populates="milestones")
