"""Turn an untyped provider payload into a ``RoadmapGeneration``."""

from typing import Any

from pydantic import ValidationError

from skillpilot.core.logging import get_logger
from skillpilot.generator.errors import MalformedResponseError
from skillpilot.schemas.generation import RoadmapGeneration

logger = get_logger(__name__)


def _describe_errors(error: ValidationError, limit: int = 5) -> str:
    parts = []
    for item in error.errors()[:limit]:
        location = ".".join(str(part) for part in item["loc"]) or "<root>"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


def validate_roadmap(payload: dict[str, Any], duration_weeks: int) -> RoadmapGeneration:
    """Validate a parsed provider payload against the roadmap shape.

    Milestones are renumbered by position, so week numbers always run
    1..duration_weeks in the order the provider listed them. A payload with a
    different number of milestones than requested is rejected.

    Raises:
        MalformedResponseError: If a required field is missing or has the wrong type
    """
    if not isinstance(payload, dict):
        raise MalformedResponseError("Roadmap payload must be a JSON object")

    # Origin is ours to decide, never the provider's
    data = {key: value for key, value in payload.items() if key != "origin"}

    milestones = data.get("milestones")
    if not isinstance(milestones, list) or not milestones:
        raise MalformedResponseError("Roadmap must contain a non-empty 'milestones' list")
    if len(milestones) != duration_weeks:
        raise MalformedResponseError(
            f"Expected {duration_weeks} milestones, got {len(milestones)}"
        )

    try:
        roadmap = RoadmapGeneration.model_validate(data)
    except ValidationError as e:
        raise MalformedResponseError(f"Invalid roadmap structure: {_describe_errors(e)}") from e

    renumbered = False
    for position, milestone in enumerate(roadmap.milestones, start=1):
        if milestone.week_number != position:
            milestone.week_number = position
            renumbered = True
    if renumbered:
        logger.info("Renumbered provider milestones", milestone_count=len(roadmap.milestones))

    roadmap.origin = "ai"
    return roadmap
