"""Skill path routes."""

from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Body, Depends, HTTPException, status
from langchain_core.language_models import BaseChatModel
from sqlalchemy.ext.asyncio import AsyncSession

from skillpilot.api.deps import get_db, get_generation_llm
from skillpilot.api.routes.generation import invalid_request
from skillpilot.core.auth import CurrentUserDep
from skillpilot.core.logging import get_logger
from skillpilot.generator import (
    InvalidRequestError,
    generate_learning_path,
    parse_generation_request,
)
from skillpilot.models import SkillPath
from skillpilot.schemas.skill_path import (
    DEFAULT_HOURS_PER_WEEK,
    MAX_HOURS_PER_WEEK,
    DeletePathResponse,
    MilestoneResponse,
    MilestoneUpdate,
    SkillPathResponse,
    SkillPathSummary,
    SkillPathUpdate,
    SkillSummary,
)
from skillpilot.services import skill_path_service

logger = get_logger(__name__)
router = APIRouter(prefix="/skill-paths", tags=["skill-paths"])


def path_response(path: SkillPath) -> dict:
    """Serialize a path with milestones and progress."""
    response = SkillPathResponse.model_validate(
        {
            "id": path.id,
            "user_id": path.user_id,
            "title": path.title,
            "description": path.description,
            "target_duration_weeks": path.target_duration_weeks,
            "hours_per_week": path.hours_per_week,
            "difficulty_level": path.difficulty_level,
            "status": path.status,
            "ai_generated": path.ai_generated,
            "skill": SkillSummary.model_validate(path.skill),
            "milestones": [MilestoneResponse.model_validate(m) for m in path.milestones],
            "progress": skill_path_service.calc_path_progress(path.milestones),
            "created_at": path.created_at,
            "updated_at": path.updated_at,
        }
    )
    return response.model_dump(mode="json", by_alias=True)


def path_summary(path: SkillPath) -> dict:
    """Serialize a path for list views."""
    summary = SkillPathSummary.model_validate(
        {
            "id": path.id,
            "user_id": path.user_id,
            "title": path.title,
            "description": path.description,
            "target_duration_weeks": path.target_duration_weeks,
            "hours_per_week": path.hours_per_week,
            "difficulty_level": path.difficulty_level,
            "status": path.status,
            "ai_generated": path.ai_generated,
            "skill": SkillSummary.model_validate(path.skill),
            "milestone_count": len(path.milestones),
            "total_hours": sum(m.estimated_hours for m in path.milestones),
            "progress": skill_path_service.calc_path_progress(path.milestones),
            "created_at": path.created_at,
        }
    )
    return summary.model_dump(mode="json", by_alias=True)


def pop_path_options(fields: dict[str, Any]) -> tuple[str, int]:
    """Take ``category`` and ``hoursPerWeek`` out of a create body.

    Raises:
        InvalidRequestError: If either value has the wrong type or range
    """
    problems = []

    category = fields.pop("category", None)
    if category is None or (isinstance(category, str) and not category.strip()):
        category = "Other"
    elif not isinstance(category, str):
        problems.append("category: must be a string")

    hours = fields.pop("hoursPerWeek", fields.pop("hours_per_week", None))
    if hours is None:
        hours = DEFAULT_HOURS_PER_WEEK
    elif isinstance(hours, bool) or not isinstance(hours, int):
        problems.append("hoursPerWeek: must be a whole number")
    elif not 1 <= hours <= MAX_HOURS_PER_WEEK:
        problems.append(f"hoursPerWeek: must be between 1 and {MAX_HOURS_PER_WEEK}")

    if problems:
        raise InvalidRequestError("Invalid skill path request", problems=problems)
    return category.strip(), hours


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_skill_path(
    user_id: CurrentUserDep,
    payload: Annotated[dict[str, Any], Body()],
    db: Annotated[AsyncSession, Depends(get_db)],
    llm: Annotated[BaseChatModel | None, Depends(get_generation_llm)],
) -> dict:
    """Generate a roadmap and store it as a new skill path.

    Body: ``{skillName, duration, difficulty, userContext?, category?, hoursPerWeek?}``.
    """
    fields = dict(payload)
    try:
        category, hours_per_week = pop_path_options(fields)
        request = parse_generation_request(fields)
    except InvalidRequestError as e:
        logger.info("Rejected skill path request", user_id=user_id, problems=e.problems)
        raise invalid_request(e) from e

    with structlog.contextvars.bound_contextvars(user_id=user_id):
        roadmap = await generate_learning_path(request, llm=llm)
        path = await skill_path_service.create_skill_path(
            db,
            user_id=user_id,
            request=request,
            roadmap=roadmap,
            category=category,
            hours_per_week=hours_per_week,
        )
    return path_response(path)


@router.get("")
async def list_skill_paths(
    user_id: CurrentUserDep,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[dict]:
    """List the caller's skill paths."""
    paths = await skill_path_service.list_user_paths(db, user_id)
    return [path_summary(p) for p in paths]


@router.get("/{path_id}")
async def get_skill_path(
    path_id: str,
    user_id: CurrentUserDep,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """Get one of the caller's skill paths with its milestones."""
    path = await skill_path_service.get_user_skill_path(db, user_id, path_id)
    if not path:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Learning path not found",
        )
    return path_response(path)


@router.patch("/{path_id}")
async def update_skill_path(
    path_id: str,
    data: SkillPathUpdate,
    user_id: CurrentUserDep,
    db: Annotated[AsyncSession, Depends(get_db)],
    llm: Annotated[BaseChatModel | None, Depends(get_generation_llm)],
) -> dict:
    """Edit a skill path, pause or resume it.

    A new ``targetDurationWeeks`` or ``hoursPerWeek`` regenerates the milestones.
    """
    with structlog.contextvars.bound_contextvars(user_id=user_id):
        path = await skill_path_service.update_skill_path(
            db, user_id=user_id, path_id=path_id, changes=data, llm=llm
        )
    if not path:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Learning path not found",
        )
    return path_response(path)


@router.patch("/{path_id}/milestones/{milestone_id}")
async def update_milestone(
    path_id: str,
    milestone_id: str,
    data: MilestoneUpdate,
    user_id: CurrentUserDep,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """Mark a milestone complete or incomplete; returns the updated path."""
    milestone = await skill_path_service.set_milestone_completed(
        db,
        user_id=user_id,
        path_id=path_id,
        milestone_id=milestone_id,
        completed=data.completed,
    )
    if not milestone:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Milestone not found",
        )

    path = await skill_path_service.get_user_skill_path(db, user_id, path_id)
    return path_response(path)


@router.delete("/{path_id}", response_model=DeletePathResponse)
async def delete_skill_path(
    path_id: str,
    user_id: CurrentUserDep,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """Delete one of the caller's skill paths."""
    title = await skill_path_service.delete_skill_path(db, user_id=user_id, path_id=path_id)
    if title is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Learning path not found",
        )
    return {"message": "Learning path deleted successfully", "deletedPath": title}
