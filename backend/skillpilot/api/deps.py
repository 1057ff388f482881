"""API dependencies."""

from collections.abc import AsyncGenerator

from fastapi import Depends
from langchain_core.language_models import BaseChatModel
from sqlalchemy.ext.asyncio import AsyncSession

from skillpilot.core.database import get_session


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    async for session in get_session():
        yield session


def get_generation_llm() -> BaseChatModel | None:
    """Chat model override for generation; None means the configured provider."""
    return None


# Database dependency
DBDep = Depends(get_db)
