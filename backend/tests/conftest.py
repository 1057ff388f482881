"""Shared test fixtures."""

import asyncio
import json
import os

# Never reach a real provider or the on-disk database from tests
os.environ["OPENAI_API_KEY"] = ""
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from langchain_core.messages import AIMessage  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from skillpilot.api.deps import get_db, get_generation_llm  # noqa: E402
from skillpilot.core.database import build_engine, build_session_factory, init_db  # noqa: E402
from skillpilot.main import app  # noqa: E402


class StubChatModel:
    """Chat model double: answers with fixed text, raises, or stalls."""

    def __init__(
        self,
        response: str = "",
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self.response = response
        self.error = error
        self.delay = delay
        self.calls: list[list] = []

    async def ainvoke(self, messages, *args, **kwargs) -> AIMessage:
        self.calls.append(messages)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return AIMessage(content=self.response)


def build_roadmap_payload(weeks: int, **overrides) -> dict:
    """A well-formed provider roadmap with ``weeks`` milestones."""
    payload = {
        "title": "Python from Zero to Projects",
        "description": "Learn Python syntax, data structures and packaging by building tools.",
        "milestones": [
            {
                "title": f"Week {week}: Topic {week}",
                "description": f"Study topic {week} and practice it.",
                "weekNumber": week,
                "estimatedHours": 6,
                "resources": [
                    {
                        "type": "documentation",
                        "title": "The Python Tutorial",
                        "url": "https://docs.python.org/3/tutorial/",
                        "platform": "python.org",
                    }
                ],
                "exercises": [
                    {
                        "title": f"Exercise {week}",
                        "description": "Write a small script.",
                        "difficulty": "medium",
                        "estimatedTime": "2 hours",
                        "type": "coding",
                    }
                ],
            }
            for week in range(1, weeks + 1)
        ],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def stub_llm():
    """Factory for stub chat models."""
    return StubChatModel


@pytest.fixture
def roadmap_json():
    """Factory returning provider JSON text for a roadmap of N weeks."""

    def _make(weeks: int, **overrides) -> str:
        return json.dumps(build_roadmap_payload(weeks, **overrides))

    return _make


@pytest_asyncio.fixture
async def test_engine():
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_engine) -> AsyncSession:
    async with build_session_factory(test_engine)() as session:
        yield session


@pytest.fixture
def provider():
    """Holder for the chat model the API routes will use; None means unconfigured."""

    class _Provider:
        llm = None

    return _Provider


@pytest_asyncio.fixture
async def client(test_session: AsyncSession, provider):
    async def _get_db():
        yield test_session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_generation_llm] = lambda: provider.llm
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()
