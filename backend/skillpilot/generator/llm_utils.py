"""Extract a JSON object from raw provider text."""

import json
import re
from typing import Any

from skillpilot.core.logging import get_logger
from skillpilot.generator.errors import MalformedResponseError

logger = get_logger(__name__)

RAW_PREVIEW_CHARS = 500


def _fix_trailing_commas(text: str) -> str:
    """Remove trailing commas before closing brackets."""
    return re.sub(r",(\s*[}\]])", r"\1", text)


def _try_parse_object(text: str) -> dict[str, Any] | None:
    """Parse ``text`` as JSON, returning it only when it is an object.

    Trailing commas are stripped only after a strict parse fails, so valid
    JSON is never rewritten.
    """
    text = text.strip()
    try:
        parsed = json.loads(text)
    except (json.JSONDecodeError, ValueError):
        try:
            parsed = json.loads(_fix_trailing_commas(text))
        except (json.JSONDecodeError, ValueError):
            return None
    return parsed if isinstance(parsed, dict) else None


def _extract_from_code_block(text: str) -> str | None:
    """Return the body of the first fenced code block, if any."""
    pattern = r"```(?:json|javascript|js|text)?\s*\n(.*?)\n\s*```"
    match = re.search(pattern, text, re.DOTALL | re.IGNORECASE)
    if match:
        return match.group(1)
    return None


def _extract_balanced_object(text: str) -> str | None:
    """Return the first balanced ``{...}`` span, ignoring braces inside strings.

    Args:
        text: Text potentially containing a JSON object among prose

    Returns:
        The span, or None when no ``{`` opens or it is never closed
    """
    start_idx = text.find("{")
    if start_idx == -1:
        return None

    depth = 0
    in_string = False
    escape_next = False

    for i in range(start_idx, len(text)):
        char = text[i]

        if escape_next:
            escape_next = False
            continue
        if char == "\\":
            escape_next = True
            continue
        if char == '"':
            in_string = not in_string
            continue

        if not in_string:
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return text[start_idx : i + 1]

    return None


def _extract_outer_span(text: str) -> str | None:
    """Return everything from the first ``{`` to the last ``}``."""
    start_idx = text.find("{")
    end_idx = text.rfind("}")
    if start_idx == -1 or end_idx <= start_idx:
        return None
    return text[start_idx : end_idx + 1]


def parse_json_object(content: str | None) -> dict[str, Any]:
    """Parse the JSON object embedded in a provider response.

    Tries, in order: the whole text, the first fenced code block, the first
    balanced ``{...}`` span and finally the first ``{`` to the last ``}``.
    Every attempt tolerates trailing commas.

    Args:
        content: Raw provider response

    Returns:
        The parsed object

    Raises:
        MalformedResponseError: If the content is empty or holds no JSON object
    """
    if not content or not content.strip():
        raise MalformedResponseError("Empty provider response", raw_text=content)

    strategies = (
        ("direct", lambda text: text),
        ("code_block", _extract_from_code_block),
        ("balanced_span", _extract_balanced_object),
        ("outer_span", _extract_outer_span),
    )
    for name, extract in strategies:
        candidate = extract(content)
        if not candidate:
            continue
        result = _try_parse_object(candidate)
        if result is not None:
            logger.debug("Parsed provider JSON", strategy=name)
            return result

    raise MalformedResponseError(
        "No valid JSON object found in provider response",
        raw_text=content[:RAW_PREVIEW_CHARS],
    )
