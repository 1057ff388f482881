"""Tests for prompt rendering."""

from skillpilot.generator.prompts import build_roadmap_prompt, build_suggestions_prompt
from skillpilot.schemas.generation import GenerationRequest


def test_roadmap_prompt_embeds_request():
    request = GenerationRequest(
        skill_name="Kubernetes",
        duration_weeks=6,
        difficulty="Intermediate",
        context="I run Docker in production already",
    )
    prompt = build_roadmap_prompt(request)

    assert "6-week learning roadmap for mastering Kubernetes at Intermediate level" in prompt
    assert "Additional context: I run Docker in production already" in prompt
    assert "Exactly 6 weekly milestones" in prompt
    assert "3-12 hours per week" in prompt
    assert '"weekNumber": 1' in prompt
    assert '"estimatedTime"' in prompt
    assert "placeholder" in prompt


def test_roadmap_prompt_without_context():
    request = GenerationRequest(skill_name="SQL", duration_weeks=2, difficulty="Beginner")
    prompt = build_roadmap_prompt(request)
    assert "Additional context" not in prompt


def test_roadmap_prompt_is_pure():
    request = GenerationRequest(skill_name="SQL", duration_weeks=2, difficulty="Beginner")
    assert build_roadmap_prompt(request) == build_roadmap_prompt(request)


def test_suggestions_prompt():
    assert build_suggestions_prompt("Figma") == "Why should someone learn Figma?"
