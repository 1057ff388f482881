"""Errors raised inside the roadmap generation pipeline.

Every failure carries a ``FailureCause`` tag so logs can tell causes apart
even though ``generate_learning_path`` hides all but ``InvalidRequestError``
from its caller.
"""

from enum import Enum


class FailureCause(str, Enum):
    """Why a generation attempt did not produce an AI roadmap."""

    CONFIGURATION = "configuration"
    PROVIDER = "provider"
    MALFORMED_RESPONSE = "malformed_response"
    INVALID_REQUEST = "invalid_request"


class GenerationError(Exception):
    """Base class for generation pipeline errors."""

    cause: FailureCause


class ConfigurationError(GenerationError):
    """Provider credentials or settings are missing or unusable."""

    cause = FailureCause.CONFIGURATION


class ProviderError(GenerationError):
    """The provider call itself failed (network, rate limit, provider error, timeout)."""

    cause = FailureCause.PROVIDER

    def __init__(self, message: str, cause_error: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause_error = cause_error


class MalformedResponseError(GenerationError):
    """The provider answered but the content did not parse or validate."""

    cause = FailureCause.MALFORMED_RESPONSE

    def __init__(self, message: str, raw_text: str | None = None) -> None:
        super().__init__(message)
        self.raw_text = raw_text


class InvalidRequestError(GenerationError):
    """The generation request itself is unusable. Never absorbed by fallback."""

    cause = FailureCause.INVALID_REQUEST

    def __init__(self, message: str, problems: list[str] | None = None) -> None:
        super().__init__(message)
        self.problems = problems or []
