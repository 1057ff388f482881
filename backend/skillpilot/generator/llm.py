"""LLM provider configuration and the single provider call."""

import asyncio
from functools import lru_cache
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from skillpilot.core.config import Settings, get_settings
from skillpilot.core.logging import get_logger
from skillpilot.generator.errors import ConfigurationError, ProviderError

logger = get_logger(__name__)


def build_llm(settings: Settings, *, temperature: float, max_tokens: int) -> ChatOpenAI:
    """Create a chat model from settings.

    Raises:
        ConfigurationError: If no API key is configured or the client rejects the settings
    """
    if not settings.OPENAI_API_KEY or not settings.OPENAI_API_KEY.strip():
        raise ConfigurationError("OPENAI_API_KEY is not configured")

    kwargs: dict = {
        "model": settings.OPENAI_MODEL,
        "temperature": temperature,
        "max_tokens": max_tokens,
        "api_key": settings.OPENAI_API_KEY,
        # One attempt per generation request
        "max_retries": 0,
    }
    if settings.OPENAI_API_BASE_URL:
        kwargs["base_url"] = settings.OPENAI_API_BASE_URL

    try:
        return ChatOpenAI(**kwargs)
    except ValueError as e:
        # pydantic's ValidationError is a ValueError
        raise ConfigurationError(f"Invalid provider configuration: {e}") from e


@lru_cache
def get_llm() -> ChatOpenAI:
    """Get the chat model used for roadmap generation."""
    settings = get_settings()
    llm = build_llm(
        settings,
        temperature=settings.OPENAI_TEMPERATURE,
        max_tokens=settings.OPENAI_MAX_TOKENS,
    )
    logger.info("Initializing LLM", model=settings.OPENAI_MODEL)
    return llm


@lru_cache
def get_suggestions_llm() -> ChatOpenAI:
    """Get a small, warmer chat model for short motivational suggestions."""
    settings = get_settings()
    return build_llm(
        settings,
        temperature=settings.SUGGESTIONS_TEMPERATURE,
        max_tokens=settings.SUGGESTIONS_MAX_TOKENS,
    )


def _content_to_text(content: Any) -> str:
    """Flatten message content, which may be a string or a list of content blocks."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and isinstance(block.get("text"), str):
                parts.append(block["text"])
        return "".join(parts)
    return ""


async def invoke_provider(
    llm: BaseChatModel,
    *,
    system: str,
    prompt: str,
    timeout: float | None = None,
) -> str:
    """Send one system + user message pair and return the raw response text.

    Raises:
        ProviderError: If the call fails or does not finish within ``timeout`` seconds
    """
    messages = [SystemMessage(content=system), HumanMessage(content=prompt)]
    try:
        if timeout is None:
            response = await llm.ainvoke(messages)
        else:
            response = await asyncio.wait_for(llm.ainvoke(messages), timeout=timeout)
    except TimeoutError as e:
        raise ProviderError(f"Provider call timed out after {timeout}s", cause_error=e) from e
    except Exception as e:
        raise ProviderError(f"Provider call failed: {e}", cause_error=e) from e

    return _content_to_text(response.content)
