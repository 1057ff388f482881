"""Tests for generate_learning_path and generate_suggestions."""

import json

import httpx
import pytest
from langchain_core.language_models import FakeListChatModel

from conftest import build_roadmap_payload
from skillpilot.core.config import get_settings
from skillpilot.generator import (
    ConfigurationError,
    InvalidRequestError,
    generate_learning_path,
    generate_suggestions,
    parse_generation_request,
)
from skillpilot.generator import pipeline
from skillpilot.schemas.generation import Difficulty, GenerationRequest

PYTHON_REQUEST = {
    "skillName": "Python",
    "duration": 4,
    "difficulty": "Beginner",
    "userContext": "",
}


def _weeks(roadmap) -> list[int]:
    return [m.week_number for m in roadmap.milestones]


class TestProviderSuccess:
    """The provider answers with a usable roadmap."""

    @pytest.mark.asyncio
    async def test_returns_ai_roadmap(self, roadmap_json):
        llm = FakeListChatModel(responses=[roadmap_json(4)])
        roadmap = await generate_learning_path(PYTHON_REQUEST, llm=llm)

        assert roadmap.origin == "ai"
        assert roadmap.title == "Python from Zero to Projects"
        assert _weeks(roadmap) == [1, 2, 3, 4]

    @pytest.mark.asyncio
    async def test_prose_around_json(self, roadmap_json):
        llm = FakeListChatModel(responses=[f"Here is your plan:\n{roadmap_json(4)}\nEnjoy!"])
        roadmap = await generate_learning_path(PYTHON_REQUEST, llm=llm)

        assert roadmap.origin == "ai"
        assert len(roadmap.milestones) == 4

    @pytest.mark.asyncio
    async def test_empty_lists_are_filled(self, stub_llm, roadmap_json):
        """Milestones without resources or exercises get templated ones."""
        llm = stub_llm(
            response=roadmap_json(
                2,
                milestones=[
                    {"title": "A", "description": "a", "weekNumber": 1, "estimatedHours": 5},
                    {
                        "title": "B",
                        "description": "b",
                        "weekNumber": 2,
                        "estimatedHours": 5,
                        "resources": [],
                        "exercises": [],
                    },
                ],
            )
        )
        roadmap = await generate_learning_path(
            {"skillName": "Go", "duration": 2, "difficulty": "Advanced"}, llm=llm
        )

        assert roadmap.origin == "ai"
        for milestone in roadmap.milestones:
            assert milestone.resources
            assert milestone.exercises
        assert roadmap.milestones[1].resources[0].title == "Go Basics - Week 2"

    @pytest.mark.asyncio
    async def test_single_provider_call_with_prompt(self, stub_llm, roadmap_json):
        llm = stub_llm(response=roadmap_json(4))
        await generate_learning_path(
            {**PYTHON_REQUEST, "userContext": "for data analysis"}, llm=llm
        )

        assert len(llm.calls) == 1
        system, human = llm.calls[0]
        assert "learning designer" in system.content
        assert "mastering Python at Beginner level" in human.content
        assert "Additional context: for data analysis" in human.content

    @pytest.mark.asyncio
    async def test_zero_based_weeks_kept(self, stub_llm):
        """A roadmap numbered from week 0 is still used, renumbered from 1."""
        payload = build_roadmap_payload(4)
        for index, milestone in enumerate(payload["milestones"]):
            milestone["weekNumber"] = index
        llm = stub_llm(response=json.dumps(payload))
        roadmap = await generate_learning_path(PYTHON_REQUEST, llm=llm)

        assert roadmap.origin == "ai"
        assert _weeks(roadmap) == [1, 2, 3, 4]


class TestFallback:
    """Every failure mode ends in the template roadmap."""

    @pytest.mark.asyncio
    async def test_end_to_end_provider_failure(self, stub_llm):
        llm = stub_llm(error=RuntimeError("rate limited"))
        roadmap = await generate_learning_path(PYTHON_REQUEST, llm=llm)

        assert roadmap.origin == "fallback"
        assert len(roadmap.milestones) == 4
        assert roadmap.milestones[0].week_number == 1
        assert roadmap.milestones[3].week_number == 4
        assert roadmap.milestones[0].estimated_hours == 10
        assert roadmap.title == "Master Python in 4 Weeks"

    @pytest.mark.asyncio
    async def test_network_error(self, stub_llm):
        llm = stub_llm(error=httpx.ConnectError("connection refused"))
        roadmap = await generate_learning_path(PYTHON_REQUEST, llm=llm)
        assert roadmap.origin == "fallback"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [
            "",
            "I'm sorry, I can't do that.",
            "{not json at all}",
            '{"description": "no title", "milestones": []}',
            '{"title": "T", "description": "D", "milestones": [{"title": "only one"}]}',
        ],
    )
    async def test_garbage_responses(self, stub_llm, response):
        roadmap = await generate_learning_path(PYTHON_REQUEST, llm=stub_llm(response=response))

        assert roadmap.origin == "fallback"
        assert _weeks(roadmap) == [1, 2, 3, 4]

    @pytest.mark.asyncio
    async def test_wrong_milestone_count(self, stub_llm, roadmap_json):
        roadmap = await generate_learning_path(
            PYTHON_REQUEST, llm=stub_llm(response=roadmap_json(6))
        )
        assert roadmap.origin == "fallback"
        assert len(roadmap.milestones) == 4

    @pytest.mark.asyncio
    async def test_timeout(self, stub_llm, roadmap_json, monkeypatch):
        monkeypatch.setattr(get_settings(), "GENERATION_TIMEOUT_SECONDS", 0.01)
        llm = stub_llm(response=roadmap_json(4), delay=1.0)
        roadmap = await generate_learning_path(PYTHON_REQUEST, llm=llm)
        assert roadmap.origin == "fallback"

    @pytest.mark.asyncio
    async def test_missing_credentials(self, monkeypatch):
        def _unconfigured():
            raise ConfigurationError("OPENAI_API_KEY is not configured")

        monkeypatch.setattr(pipeline, "get_llm", _unconfigured)
        roadmap = await generate_learning_path(PYTHON_REQUEST)
        assert roadmap.origin == "fallback"

    @pytest.mark.asyncio
    async def test_unexpected_error(self, stub_llm, monkeypatch):
        def _broken(payload, duration_weeks):
            raise KeyError("bug")

        monkeypatch.setattr(pipeline, "validate_roadmap", _broken)
        roadmap = await generate_learning_path(PYTHON_REQUEST, llm=stub_llm(response="{}"))
        assert roadmap.origin == "fallback"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("weeks", [1, 2, 13, 52])
    @pytest.mark.parametrize("difficulty", ["Beginner", "Intermediate", "Advanced"])
    async def test_total_over_valid_requests(self, stub_llm, weeks, difficulty):
        request = {"skillName": "Chess", "duration": weeks, "difficulty": difficulty}
        roadmap = await generate_learning_path(request, llm=stub_llm(error=ValueError("boom")))
        assert _weeks(roadmap) == list(range(1, weeks + 1))


class TestRequestValidation:
    """Invalid requests are the one error the caller sees."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "changes",
        [
            {"duration": 0},
            {"duration": 53},
            {"duration": -1},
            {"duration": 4.5},
            {"duration": "4"},
            {"duration": True},
            {"difficulty": "Expert"},
            {"skillName": ""},
            {"skillName": "   "},
        ],
    )
    async def test_invalid_request_raises(self, stub_llm, changes):
        llm = stub_llm(response="{}")
        with pytest.raises(InvalidRequestError) as exc_info:
            await generate_learning_path({**PYTHON_REQUEST, **changes}, llm=llm)

        assert exc_info.value.problems
        assert llm.calls == []

    def test_missing_fields(self):
        with pytest.raises(InvalidRequestError) as exc_info:
            parse_generation_request({"skillName": "Python"})
        problems = " ".join(exc_info.value.problems)
        assert "durationWeeks" in problems or "duration_weeks" in problems
        assert "difficulty" in problems

    def test_accepts_key_variants(self):
        request = parse_generation_request(
            {"skill_name": "Python", "durationWeeks": 3, "difficulty": "advanced", "context": None}
        )
        assert request == GenerationRequest(
            skill_name="Python", duration_weeks=3, difficulty=Difficulty.ADVANCED
        )

    def test_revalidates_constructed_model(self):
        unchecked = GenerationRequest.model_construct(
            skill_name="Python", duration_weeks=99, difficulty=Difficulty.BEGINNER, context=""
        )
        with pytest.raises(InvalidRequestError):
            parse_generation_request(unchecked)

    def test_rejects_non_mapping(self):
        with pytest.raises(InvalidRequestError):
            parse_generation_request(["Python", 4, "Beginner"])  # type: ignore[arg-type]


class TestSuggestions:
    """generate_suggestions never raises."""

    @pytest.mark.asyncio
    async def test_lines_become_suggestions(self):
        text = (
            "1. High demand\n\n2) Great pay\n- Fun projects\n"
            "* Community\n5. Portability\n6. Extra"
        )
        llm = FakeListChatModel(responses=[text])
        suggestions = await generate_suggestions("Python", llm=llm)
        assert suggestions == [
            "High demand",
            "Great pay",
            "Fun projects",
            "Community",
            "Portability",
        ]

    @pytest.mark.asyncio
    async def test_failure_returns_templates(self, stub_llm):
        suggestions = await generate_suggestions(
            "Python", llm=stub_llm(error=RuntimeError("down"))
        )
        assert len(suggestions) == 5
        assert suggestions[0] == "Python is in high demand across industries"

    @pytest.mark.asyncio
    async def test_empty_response_returns_templates(self, stub_llm):
        suggestions = await generate_suggestions("Python", llm=stub_llm(response="  \n "))
        assert len(suggestions) == 5

    @pytest.mark.asyncio
    async def test_unconfigured_provider_returns_templates(self):
        # conftest blanks OPENAI_API_KEY
        suggestions = await generate_suggestions("Python")
        assert len(suggestions) == 5
