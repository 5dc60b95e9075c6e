"""Configuration and request validation for the code review tool."""

from review_tool.config import Config, get_api_key, get_config, is_debug_mode
from review_tool.models import (
    CodeReviewRequest,
    LLMProvider,
    LogLevel,
    ReviewTarget,
    ValidationError,
    validate_request,
)

__all__ = [
    "CodeReviewRequest",
    "Config",
    "LLMProvider",
    "LogLevel",
    "ReviewTarget",
    "ValidationError",
    "get_api_key",
    "get_config",
    "is_debug_mode",
    "validate_request",
]
