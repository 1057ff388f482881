"""Roadmap generation entry points.

``generate_learning_path`` makes a single provider attempt and falls back to
the template roadmap on any provider, configuration or parsing failure. Only
``InvalidRequestError`` reaches the caller.
"""

from collections.abc import Mapping
from typing import Any

from langchain_core.language_models import BaseChatModel
from pydantic import ValidationError

from skillpilot.core.config import get_settings
from skillpilot.core.logging import get_logger
from skillpilot.generator.errors import (
    ConfigurationError,
    GenerationError,
    InvalidRequestError,
    MalformedResponseError,
)
from skillpilot.generator.fallback import (
    fallback_exercises,
    fallback_resources,
    fallback_suggestions,
    synthesize_fallback_roadmap,
)
from skillpilot.generator.llm import get_llm, get_suggestions_llm, invoke_provider
from skillpilot.generator.llm_utils import RAW_PREVIEW_CHARS, parse_json_object
from skillpilot.generator.prompts import (
    MAX_SUGGESTIONS,
    ROADMAP_SYSTEM_PROMPT,
    SUGGESTIONS_SYSTEM_PROMPT,
    build_roadmap_prompt,
    build_suggestions_prompt,
)
from skillpilot.generator.validation import validate_roadmap
from skillpilot.schemas.generation import GenerationRequest, RoadmapGeneration

logger = get_logger(__name__)

# Inbound field names accepted on top of the model's own aliases
_REQUEST_KEY_ALIASES = {
    "duration": "duration_weeks",
    "userContext": "context",
    "user_context": "context",
}


def parse_generation_request(data: GenerationRequest | Mapping[str, Any]) -> GenerationRequest:
    """Build a validated request from a model or an untyped mapping.

    Raises:
        InvalidRequestError: If a field is missing or out of range
    """
    if isinstance(data, GenerationRequest):
        # Models built with model_construct skip validation
        payload: dict[str, Any] = data.model_dump()
    elif isinstance(data, Mapping):
        payload = {_REQUEST_KEY_ALIASES.get(key, key): value for key, value in data.items()}
    else:
        raise InvalidRequestError("Generation request must be an object")

    duration = payload.get("duration_weeks", payload.get("durationWeeks"))
    if isinstance(duration, bool) or (duration is not None and not isinstance(duration, int)):
        raise InvalidRequestError(
            "Invalid generation request",
            problems=["duration: must be a whole number between 1 and 52"],
        )

    try:
        return GenerationRequest.model_validate(payload)
    except ValidationError as e:
        problems = [
            f"{'.'.join(str(part) for part in item['loc'])}: {item['msg']}" for item in e.errors()
        ]
        raise InvalidRequestError("Invalid generation request", problems=problems) from e


def _fill_missing_content(roadmap: RoadmapGeneration, request: GenerationRequest) -> None:
    """Give every milestone at least one resource and one exercise."""
    for milestone in roadmap.milestones:
        if not milestone.resources:
            milestone.resources = fallback_resources(request.skill_name, milestone.week_number)
        if not milestone.exercises:
            milestone.exercises = fallback_exercises(request.skill_name, milestone.week_number)


def _log_failure(error: GenerationError, request: GenerationRequest) -> None:
    context = {
        "cause": error.cause.value,
        "error": str(error),
        "skill_name": request.skill_name,
        "duration_weeks": request.duration_weeks,
    }
    if isinstance(error, ConfigurationError):
        logger.error("Roadmap provider misconfigured, using fallback", **context)
    elif isinstance(error, MalformedResponseError):
        raw_preview = (error.raw_text or "")[:RAW_PREVIEW_CHARS]
        logger.warning(
            "Roadmap response malformed, using fallback", raw_text=raw_preview, **context
        )
    else:
        logger.warning("Roadmap provider call failed, using fallback", **context)


async def _generate_with_provider(
    request: GenerationRequest, llm: BaseChatModel | None
) -> RoadmapGeneration:
    settings = get_settings()
    model = llm if llm is not None else get_llm()

    raw_text = await invoke_provider(
        model,
        system=ROADMAP_SYSTEM_PROMPT,
        prompt=build_roadmap_prompt(request),
        timeout=settings.GENERATION_TIMEOUT_SECONDS,
    )

    payload = parse_json_object(raw_text)
    try:
        return validate_roadmap(payload, request.duration_weeks)
    except MalformedResponseError as e:
        e.raw_text = raw_text
        raise


async def generate_learning_path(
    request: GenerationRequest | Mapping[str, Any],
    *,
    llm: BaseChatModel | None = None,
) -> RoadmapGeneration:
    """Generate a week-by-week roadmap for a skill.

    Args:
        request: The request model, or a mapping with ``skillName``,
            ``duration``, ``difficulty`` and optional ``userContext``
        llm: Chat model to use instead of the configured provider

    Returns:
        A roadmap with exactly ``duration`` milestones numbered 1..duration

    Raises:
        InvalidRequestError: If the request itself is invalid
    """
    request = parse_generation_request(request)

    logger.info(
        "Generating learning path",
        skill_name=request.skill_name,
        duration_weeks=request.duration_weeks,
        difficulty=request.difficulty.value,
    )

    try:
        roadmap = await _generate_with_provider(request, llm)
    except GenerationError as e:
        _log_failure(e, request)
        roadmap = synthesize_fallback_roadmap(request)
    except Exception:
        logger.exception(
            "Unexpected roadmap generation failure, using fallback",
            skill_name=request.skill_name,
        )
        roadmap = synthesize_fallback_roadmap(request)
    else:
        _fill_missing_content(roadmap, request)

    logger.info(
        "Learning path generated",
        title=roadmap.title,
        origin=roadmap.origin,
        milestone_count=len(roadmap.milestones),
    )
    return roadmap


def _split_suggestions(text: str) -> list[str]:
    lines = []
    for line in text.splitlines():
        cleaned = line.strip().lstrip("-*•").strip()
        # Drop list numbering such as "1." or "2)"
        head, sep, tail = cleaned.partition(" ")
        if sep and head.rstrip(".)").isdigit():
            cleaned = tail.strip()
        if cleaned:
            lines.append(cleaned)
    return lines[:MAX_SUGGESTIONS]


async def generate_suggestions(
    skill_name: str,
    *,
    llm: BaseChatModel | None = None,
) -> list[str]:
    """Return up to five short reasons to learn a skill. Never raises."""
    skill_name = skill_name.strip()
    try:
        model = llm if llm is not None else get_suggestions_llm()
        text = await invoke_provider(
            model,
            system=SUGGESTIONS_SYSTEM_PROMPT,
            prompt=build_suggestions_prompt(skill_name),
            timeout=get_settings().GENERATION_TIMEOUT_SECONDS,
        )
        suggestions = _split_suggestions(text)
        if not suggestions:
            raise MalformedResponseError("Empty suggestions response", raw_text=text)
    except GenerationError as e:
        logger.warning(
            "Suggestions generation failed, using fallback",
            cause=e.cause.value,
            error=str(e),
            skill_name=skill_name,
        )
        return fallback_suggestions(skill_name)
    except Exception:
        logger.exception("Unexpected suggestions failure, using fallback", skill_name=skill_name)
        return fallback_suggestions(skill_name)

    return suggestions
