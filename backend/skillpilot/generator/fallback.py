"""Deterministic template roadmap used when the provider path fails.

Output depends only on the request: no clock, no randomness, no network.
"""

import math

from skillpilot.schemas.generation import (
    Exercise,
    ExerciseDifficulty,
    ExerciseType,
    GenerationRequest,
    Milestone,
    Resource,
    ResourceType,
    RoadmapGeneration,
)

# Total learning budget spread evenly over the weeks
TOTAL_LEARNING_HOURS = 40


def weekly_hours(duration_weeks: int) -> int:
    return max(1, math.ceil(TOTAL_LEARNING_HOURS / duration_weeks))


def fallback_resources(skill_name: str, week: int) -> list[Resource]:
    return [
        Resource(
            type=ResourceType.ARTICLE,
            title=f"{skill_name} Basics - Week {week}",
            description=f"Essential reading material for week {week}",
        ),
        Resource(
            type=ResourceType.PRACTICE,
            title=f"Hands-on {skill_name} Practice - Week {week}",
            description="Coding exercises and practical tasks",
        ),
        Resource(
            type=ResourceType.PROJECT,
            title=f"{skill_name} Mini Project - Week {week}",
            description="Apply your learning with a small project",
        ),
    ]


def fallback_exercises(skill_name: str, week: int) -> list[Exercise]:
    return [
        Exercise(
            title=f"Week {week} {skill_name} Practice",
            description=f"Work through the week {week} material and apply each new {skill_name} "
            "concept in a short hands-on task.",
            difficulty=ExerciseDifficulty.EASY,
            estimated_time="1-2 hours",
            type=ExerciseType.PRACTICE,
        )
    ]


def _milestone_title(skill_name: str, week: int) -> str:
    title = f"Week {week}: {skill_name} Fundamentals"
    if week > 1:
        title += f" - Part {week}"
    return title


def synthesize_fallback_roadmap(request: GenerationRequest) -> RoadmapGeneration:
    """Build a complete roadmap from templates. Never raises."""
    skill_name = request.skill_name
    duration = request.duration_weeks
    hours = weekly_hours(duration)

    milestones = [
        Milestone(
            title=_milestone_title(skill_name, week),
            description=f"Learn core {skill_name} concepts and practice with hands-on "
            "exercises. Build a solid foundation for advanced topics.",
            week_number=week,
            estimated_hours=hours,
            resources=fallback_resources(skill_name, week),
            exercises=fallback_exercises(skill_name, week),
        )
        for week in range(1, duration + 1)
    ]

    return RoadmapGeneration(
        title=f"Master {skill_name} in {duration} Weeks",
        description=f"A comprehensive {request.difficulty.value.lower()} learning path to build "
        f"strong {skill_name} skills through hands-on practice and real-world projects.",
        milestones=milestones,
        origin="fallback",
    )


def fallback_suggestions(skill_name: str) -> list[str]:
    return [
        f"{skill_name} is in high demand across industries",
        f"Build valuable {skill_name} skills for career growth",
        f"Create amazing projects and solutions with {skill_name}",
        f"Join a thriving community of {skill_name} learners",
        f"Unlock new opportunities and possibilities with {skill_name}",
    ]
