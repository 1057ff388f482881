"""Skill path service for storing, editing and tracking generated roadmaps."""

from collections.abc import Sequence

from langchain_core.language_models import BaseChatModel

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from skillpilot.core.database import utcnow
from skillpilot.core.logging import get_logger
from skillpilot.generator import generate_learning_path
from skillpilot.models import RoadmapMilestone, Skill, SkillPath
from skillpilot.schemas.generation import GenerationRequest, RoadmapGeneration
from skillpilot.schemas.skill_path import DEFAULT_HOURS_PER_WEEK, SkillPathUpdate

logger = get_logger(__name__)

PAUSED = "paused"

# Rough catalogue estimate for a newly seen skill
HOURS_PER_WEEK_ESTIMATE = 10


# ============================================================================
# Progress Calculation
# ============================================================================


def calc_path_progress(milestones: Sequence[RoadmapMilestone]) -> dict:
    """Count completed milestones.

    Returns:
        {"completed": n, "total": m, "percentage": 0.0 to 100.0}
    """
    total = len(milestones)
    completed = sum(1 for m in milestones if m.completed)
    percentage = (completed / total) * 100 if total > 0 else 0.0
    return {"completed": completed, "total": total, "percentage": percentage}


def calc_path_status(milestones: Sequence[RoadmapMilestone], current_status: str) -> str:
    """Derive a path's status from its milestones.

    A paused path stays paused until the user resumes it.

    Returns: "not_started" | "in_progress" | "completed" | "paused"
    """
    if current_status == PAUSED:
        return PAUSED

    completed = sum(1 for m in milestones if m.completed)
    if milestones and completed == len(milestones):
        return "completed"
    elif completed > 0:
        return "in_progress"
    else:
        return "not_started"


# ============================================================================
# CRUD Operations
# ============================================================================


async def get_or_create_skill(
    db: AsyncSession,
    *,
    name: str,
    category: str,
    difficulty_level: str,
    duration_weeks: int,
    description: str | None = None,
) -> Skill:
    """Find a skill by exact name or add it to the catalogue."""
    result = await db.execute(select(Skill).where(Skill.name == name))
    skill = result.scalar_one_or_none()
    if skill:
        return skill

    skill = Skill(
        name=name,
        category=category,
        description=description,
        difficulty_level=difficulty_level,
        estimated_hours=duration_weeks * HOURS_PER_WEEK_ESTIMATE,
    )
    db.add(skill)
    await db.flush()
    logger.info("Skill created", skill_id=skill.id, name=name)
    return skill


def _build_milestones(roadmap: RoadmapGeneration) -> list[RoadmapMilestone]:
    """One milestone record per generated week, in week order."""
    return [
        RoadmapMilestone(
            title=m.title,
            description=m.description,
            order_index=m.week_number - 1,
            week_number=m.week_number,
            estimated_hours=m.estimated_hours,
            resources=[
                r.model_dump(mode="json", by_alias=True, exclude_none=True) for r in m.resources
            ],
            exercises=[e.model_dump(mode="json", by_alias=True) for e in m.exercises],
            completed=False,
        )
        for m in sorted(roadmap.milestones, key=lambda m: m.week_number)
    ]


async def create_skill_path(
    db: AsyncSession,
    *,
    user_id: str,
    request: GenerationRequest,
    roadmap: RoadmapGeneration,
    category: str = "Other",
    hours_per_week: int = DEFAULT_HOURS_PER_WEEK,
) -> SkillPath:
    """Store a generated roadmap as a skill path with one record per milestone.

    Args:
        db: Database session
        user_id: Owner of the new path
        request: The request the roadmap was generated from
        roadmap: Generator output
        category: Catalogue category for a skill seen for the first time
        hours_per_week: Weekly study time the learner plans for

    Returns:
        The new skill path with its milestones

    Note: This function flushes but does not commit.
    """
    difficulty_level = request.difficulty.value.lower()
    skill = await get_or_create_skill(
        db,
        name=request.skill_name,
        category=category,
        difficulty_level=difficulty_level,
        duration_weeks=request.duration_weeks,
        description=request.context or None,
    )

    milestones = _build_milestones(roadmap)

    path = SkillPath(
        user_id=user_id,
        skill=skill,
        title=roadmap.title,
        description=roadmap.description,
        target_duration_weeks=request.duration_weeks,
        hours_per_week=hours_per_week,
        difficulty_level=difficulty_level,
        status="not_started",
        ai_generated=roadmap.origin == "ai",
        milestones=milestones,
    )
    db.add(path)
    await db.flush()

    logger.info(
        "Skill path created",
        path_id=path.id,
        user_id=user_id,
        origin=roadmap.origin,
        milestone_count=len(milestones),
    )
    return path


async def get_skill_path(
    db: AsyncSession,
    path_id: str,
) -> SkillPath | None:
    """Get a skill path by ID, regardless of owner."""
    return await db.get(SkillPath, path_id)


async def get_user_skill_path(
    db: AsyncSession,
    user_id: str,
    path_id: str,
) -> SkillPath | None:
    """Get a skill path only if ``user_id`` owns it."""
    path = await db.get(SkillPath, path_id)
    if not path or path.user_id != user_id:
        return None
    return path


async def list_user_paths(
    db: AsyncSession,
    user_id: str,
) -> list[SkillPath]:
    """List a user's skill paths, newest first."""
    result = await db.execute(
        select(SkillPath)
        .where(SkillPath.user_id == user_id)
        .order_by(SkillPath.created_at.desc())
    )
    return list(result.scalars().all())


async def list_public_paths(
    db: AsyncSession,
    *,
    exclude_user_id: str | None = None,
    search: str | None = None,
    category: str | None = None,
    limit: int = 50,
) -> list[SkillPath]:
    """List skill paths created by other users, newest first.

    Args:
        db: Database session
        exclude_user_id: Hide this user's own paths
        search: Case-insensitive match on title, description or skill name
        category: Skill category; "All" or None disables the filter
        limit: Maximum number of paths
    """
    query = select(SkillPath).join(Skill, SkillPath.skill_id == Skill.id)

    if exclude_user_id:
        query = query.where(SkillPath.user_id != exclude_user_id)
    if category and category != "All":
        query = query.where(Skill.category == category)
    if search and search.strip():
        pattern = f"%{search.strip()}%"
        query = query.where(
            or_(
                SkillPath.title.ilike(pattern),
                SkillPath.description.ilike(pattern),
                Skill.name.ilike(pattern),
            )
        )

    result = await db.execute(query.order_by(SkillPath.created_at.desc()).limit(limit))
    return list(result.scalars().all())


async def set_milestone_completed(
    db: AsyncSession,
    *,
    user_id: str,
    path_id: str,
    milestone_id: str,
    completed: bool,
) -> RoadmapMilestone | None:
    """Mark a milestone complete or incomplete and refresh the path status.

    Returns:
        The updated milestone, or None if the path or milestone is not the user's

    Note: This function flushes but does not commit.
    """
    path = await get_user_skill_path(db, user_id, path_id)
    if not path:
        return None

    milestone = next((m for m in path.milestones if m.id == milestone_id), None)
    if not milestone:
        return None

    milestone.completed = completed
    milestone.completed_at = utcnow() if completed else None
    path.status = calc_path_status(path.milestones, path.status)
    await db.flush()

    logger.info(
        "Milestone updated",
        path_id=path_id,
        milestone_id=milestone_id,
        completed=completed,
        path_status=path.status,
    )
    return milestone


def _regeneration_request(path: SkillPath) -> GenerationRequest:
    context = f"Plan for about {path.hours_per_week} hours of study per week."
    if path.description:
        context = f"{path.description}\n{context}"
    return GenerationRequest(
        skill_name=path.skill.name,
        duration_weeks=path.target_duration_weeks,
        difficulty=path.difficulty_level.capitalize(),
        context=context,
    )


async def update_skill_path(
    db: AsyncSession,
    *,
    user_id: str,
    path_id: str,
    changes: SkillPathUpdate,
    llm: BaseChatModel | None = None,
) -> SkillPath | None:
    """Apply an edit to a user's skill path.

    A new duration or weekly time allocation replaces every milestone with a
    freshly generated roadmap, which also resets completion. Setting status to
    anything but "paused" resumes the path with a status derived from its
    milestones.

    Args:
        db: Database session
        user_id: Caller; must own the path
        path_id: Path to edit
        changes: Fields to change; unset fields are kept
        llm: Chat model to use instead of the configured provider

    Returns:
        The updated path, or None if it does not exist or belongs to someone else

    Note: This function flushes but does not commit.
    """
    path = await get_user_skill_path(db, user_id, path_id)
    if not path:
        return None

    fields = changes.model_dump(exclude_unset=True)
    requested_status = fields.pop("status", None)

    regenerate = any(
        fields.get(key) is not None and fields[key] != getattr(path, key)
        for key in ("target_duration_weeks", "hours_per_week")
    )
    for key, value in fields.items():
        # Only the description may be cleared
        if value is not None or key == "description":
            setattr(path, key, value)

    if regenerate:
        roadmap = await generate_learning_path(_regeneration_request(path), llm=llm)
        path.milestones = _build_milestones(roadmap)
        path.ai_generated = roadmap.origin == "ai"
        logger.info(
            "Skill path milestones regenerated",
            path_id=path_id,
            origin=roadmap.origin,
            milestone_count=len(path.milestones),
        )

    if requested_status == PAUSED:
        path.status = PAUSED
    elif requested_status is not None:
        # Resuming: status follows milestone completion again
        path.status = calc_path_status(path.milestones, "not_started")
    elif regenerate:
        path.status = calc_path_status(path.milestones, path.status)

    await db.flush()

    logger.info(
        "Skill path updated",
        path_id=path_id,
        fields=sorted(fields),
        regenerated=regenerate,
        status=path.status,
    )
    return path


async def delete_skill_path(
    db: AsyncSession,
    *,
    user_id: str,
    path_id: str,
) -> str | None:
    """Delete a user's skill path and its milestones.

    Returns:
        Title of the deleted path, or None if it does not exist or belongs to someone else

    Note: This function flushes but does not commit.
    """
    path = await get_user_skill_path(db, user_id, path_id)
    if not path:
        logger.warning("Skill path not found for delete", path_id=path_id, user_id=user_id)
        return None

    title = path.title
    # Milestones go first through the delete-orphan cascade
    await db.delete(path)
    await db.flush()

    logger.info("Skill path deleted", path_id=path_id, title=title)
    return title
