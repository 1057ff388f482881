"""AI roadmap generation with deterministic fallback."""

from skillpilot.generator.errors import (
    ConfigurationError,
    FailureCause,
    GenerationError,
    InvalidRequestError,
    MalformedResponseError,
    ProviderError,
)
from skillpilot.generator.fallback import synthesize_fallback_roadmap
from skillpilot.generator.pipeline import (
    generate_learning_path,
    generate_suggestions,
    parse_generation_request,
)

__all__ = [
    "generate_learning_path",
    "generate_suggestions",
    "parse_generation_request",
    "synthesize_fallback_roadmap",
    "FailureCause",
    "GenerationError",
    "ConfigurationError",
    "ProviderError",
    "MalformedResponseError",
    "InvalidRequestError",
]
