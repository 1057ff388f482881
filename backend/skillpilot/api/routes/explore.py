"""Explore routes: browse roadmaps created by other users."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from skillpilot.api.deps import get_db
from skillpilot.api.routes.skill_paths import path_response, path_summary
from skillpilot.core.auth import OptionalUserDep
from skillpilot.core.config import get_settings
from skillpilot.services import skill_path_service

router = APIRouter(prefix="/explore", tags=["explore"])


@router.get("")
async def list_public_paths(
    user_id: OptionalUserDep,
    db: Annotated[AsyncSession, Depends(get_db)],
    search: str | None = None,
    category: str | None = None,
) -> list[dict]:
    """List other users' paths; signed-in callers do not see their own."""
    paths = await skill_path_service.list_public_paths(
        db,
        exclude_user_id=user_id,
        search=search,
        category=category,
        limit=get_settings().EXPLORE_PAGE_SIZE,
    )
    return [path_summary(p) for p in paths]


@router.get("/{path_id}")
async def get_public_path(
    path_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """Read-only view of any path."""
    path = await skill_path_service.get_skill_path(db, path_id)
    if not path:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Learning path not found",
        )
    return path_response(path)
