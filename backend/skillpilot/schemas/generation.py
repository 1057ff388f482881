"""Roadmap generation schemas.

Provider output is parsed into plain JSON first and only becomes one of these
models after validation. Every model accepts camelCase and snake_case keys and
serializes with camelCase aliases.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Difficulty(str, Enum):
    """Requested learner level."""

    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class ResourceType(str, Enum):
    VIDEO = "video"
    ARTICLE = "article"
    BOOK = "book"
    PRACTICE = "practice"
    PROJECT = "project"
    DOCUMENTATION = "documentation"
    COURSE = "course"
    TUTORIAL = "tutorial"


class ResourceDifficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class ExerciseDifficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class ExerciseType(str, Enum):
    CODING = "coding"
    READING = "reading"
    PRACTICE = "practice"
    PROJECT = "project"


GenerationOrigin = Literal["ai", "fallback"]


class CamelModel(BaseModel):
    """Base model that reads either key style and writes camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


def _lower(value: object) -> object:
    return value.strip().lower() if isinstance(value, str) else value


class GenerationRequest(CamelModel):
    """One roadmap generation request. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    skill_name: str = Field(min_length=1)
    duration_weeks: int = Field(ge=1, le=52)
    difficulty: Difficulty
    context: str = ""

    @field_validator("difficulty", mode="before")
    @classmethod
    def normalize_difficulty(cls, value: object) -> object:
        return value.strip().capitalize() if isinstance(value, str) else value

    @field_validator("context", mode="before")
    @classmethod
    def null_context(cls, value: object) -> object:
        return "" if value is None else value


class Resource(CamelModel):
    """A learning resource attached to a milestone."""

    type: ResourceType
    title: str = Field(min_length=1)
    description: str | None = None
    url: str | None = None
    platform: str | None = None
    duration: str | None = None
    difficulty: ResourceDifficulty | None = None
    section: str | None = None
    chapter: str | None = None

    @field_validator("type", "difficulty", mode="before")
    @classmethod
    def normalize_enums(cls, value: object) -> object:
        return _lower(value)


class Exercise(CamelModel):
    """A practice exercise attached to a milestone."""

    title: str = Field(min_length=1)
    description: str
    difficulty: ExerciseDifficulty
    estimated_time: str
    type: ExerciseType

    @field_validator("difficulty", "type", mode="before")
    @classmethod
    def normalize_enums(cls, value: object) -> object:
        return _lower(value)


class Milestone(CamelModel):
    """One week of the roadmap."""

    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    # Provider numbering is replaced by position in validate_roadmap
    week_number: int
    estimated_hours: float = Field(gt=0)
    resources: list[Resource] = Field(default_factory=list)
    exercises: list[Exercise] = Field(default_factory=list)

    @field_validator("resources", "exercises", mode="before")
    @classmethod
    def null_to_empty(cls, value: object) -> object:
        # Providers sometimes send null for an empty list
        return [] if value is None else value


class RoadmapGeneration(CamelModel):
    """Generator output handed to the caller and then to persistence."""

    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    milestones: list[Milestone] = Field(min_length=1)
    origin: GenerationOrigin = "ai"


class SuggestionsRequest(CamelModel):
    skill_name: str = Field(min_length=1)


class SuggestionsResponse(BaseModel):
    suggestions: list[str]
