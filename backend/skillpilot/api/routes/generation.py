"""Roadmap generation routes."""

from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Body, Depends, HTTPException, status
from langchain_core.language_models import BaseChatModel

from skillpilot.api.deps import get_generation_llm
from skillpilot.core.auth import CurrentUserDep
from skillpilot.core.logging import get_logger
from skillpilot.generator import InvalidRequestError, generate_learning_path, generate_suggestions
from skillpilot.schemas.generation import (
    RoadmapGeneration,
    SuggestionsRequest,
    SuggestionsResponse,
)

logger = get_logger(__name__)
router = APIRouter(tags=["generation"])


def invalid_request(error: InvalidRequestError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"error": str(error), "details": error.problems},
    )


@router.post("/generate-path", response_model=RoadmapGeneration)
async def generate_path(
    user_id: CurrentUserDep,
    payload: Annotated[dict[str, Any], Body()],
    llm: Annotated[BaseChatModel | None, Depends(get_generation_llm)],
) -> dict:
    """Generate a roadmap without storing it.

    Body: ``{skillName, duration, difficulty, userContext?}``. Field ranges are
    checked by the generator, which answers with a roadmap even when the
    provider is down.
    """
    with structlog.contextvars.bound_contextvars(user_id=user_id):
        try:
            roadmap = await generate_learning_path(payload, llm=llm)
        except InvalidRequestError as e:
            logger.info("Rejected generation request", problems=e.problems)
            raise invalid_request(e) from e

    return roadmap.model_dump(mode="json", by_alias=True)


@router.get("/generate-path")
async def generate_path_info() -> dict:
    """Service banner."""
    return {"message": "AI Learning Path Generator API"}


@router.post("/suggestions", response_model=SuggestionsResponse)
async def suggestions(
    user_id: CurrentUserDep,
    data: SuggestionsRequest,
    llm: Annotated[BaseChatModel | None, Depends(get_generation_llm)],
) -> dict:
    """Short reasons to learn a skill."""
    return {"suggestions": await generate_suggestions(data.skill_name, llm=llm)}
