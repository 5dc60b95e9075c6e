"""
Data models for the review tool.
Using Pydantic for validation and type safety.

The wire names of CodeReviewRequest (camelCase) are part of the tool's
public input contract.
"""

from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

DEFAULT_MAX_TOKENS = 32000


class LogLevel(str, Enum):
    """Process-wide log levels."""
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


class LLMProvider(str, Enum):
    """Supported LLM providers."""
    GOOGLE = "google"
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


class ReviewTarget(str, Enum):
    """Git context to review."""
    STAGED = "staged"
    HEAD = "HEAD"
    BRANCH_DIFF = "branch_diff"


def require_text(v: Any) -> Any:
    """Enum values must arrive as strings; lax mode would otherwise decode bytes."""
    if not isinstance(v, str):
        raise ValueError("must be a string")
    return v


class FieldError(NamedTuple):
    """Single violated constraint."""

    field: str
    reason: str


class ValidationError(ValueError):
    """Raised when a log level or review request fails its constraints.

    ``errors`` lists every violation as (field, reason) pairs, not just the
    first one found.
    """

    def __init__(self, errors: List[FieldError]):
        self.errors = list(errors)
        details = "; ".join(f"{e.field}: {e.reason}" for e in self.errors)
        super().__init__(f"Validation failed: {details}")

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError, default_field: str = "request") -> "ValidationError":
        """Collapse pydantic's error list into (field, reason) pairs."""
        errors = []
        for err in exc.errors():
            loc = err.get("loc") or ()
            field = str(loc[0]) if loc else default_field
            errors.append(FieldError(field, err["msg"]))
        return cls(errors)


class CodeReviewRequest(BaseModel):
    """Parameters for a single code review invocation."""

    model_config = ConfigDict(frozen=True, extra="ignore", protected_namespaces=())

    target: ReviewTarget = Field(
        ...,
        description="The git target to review (e.g., 'staged', 'HEAD', or 'branch_diff').",
    )
    task_description: str = Field(
        ...,
        alias="taskDescription",
        strict=True,
        min_length=1,
        description="Description of the task/feature/bugfix that led to these code changes.",
    )
    llm_provider: LLMProvider = Field(
        ...,
        alias="llmProvider",
        description="The LLM provider to use (google, openai, anthropic).",
    )
    model_name: str = Field(
        ...,
        alias="modelName",
        strict=True,
        min_length=1,
        description=(
            "The specific model name from the provider (e.g., 'gemini-2.5-pro-preview-05-06', "
            "'o4-mini', 'claude-3-7-sonnet-20250219')."
        ),
    )
    review_focus: Optional[str] = Field(
        None,
        alias="reviewFocus",
        strict=True,
        description=(
            "Specific areas or aspects to focus the review on (e.g., 'security vulnerabilities', "
            "'performance optimizations', 'adherence to SOLID principles')."
        ),
    )
    project_context: Optional[str] = Field(
        None,
        alias="projectContext",
        strict=True,
        description="General context about the project, its architecture, or coding standards.",
    )
    # Needed for branch_diff in practice, but not checked by the schema.
    diff_base: Optional[str] = Field(
        None,
        alias="diffBase",
        strict=True,
        description=(
            "For 'branch_diff' target, the base branch or commit SHA to compare against "
            "(e.g., 'main', 'develop', 'specific-commit-sha'). Required if target is 'branch_diff'."
        ),
    )
    max_tokens: Optional[Union[int, float]] = Field(
        None,
        alias="maxTokens",
        description=(
            f"Maximum number of tokens to use for the LLM response. "
            f"Defaults to {DEFAULT_MAX_TOKENS} if not specified."
        ),
    )

    @field_validator("target", "llm_provider", mode="before")
    @classmethod
    def validate_enum_input(cls, v: Any) -> Any:
        return require_text(v)

    # Defaults are not validated, so this only fires for an explicit null
    @field_validator("review_focus", "project_context", "diff_base", "max_tokens", mode="before")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("must not be null when present")
        return v

    @field_validator("max_tokens", mode="before")
    @classmethod
    def validate_max_tokens(cls, v: Any) -> Any:
        """Accept only real, positive numbers (bools and numeric strings are rejected)."""
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("must be a number")
        if not v > 0:
            raise ValueError("must be a positive number")
        return v

    @property
    def effective_max_tokens(self) -> Union[int, float]:
        return self.max_tokens if self.max_tokens is not None else DEFAULT_MAX_TOKENS

    def to_params(self) -> Dict[str, Any]:
        """Wire-named dict of the fields that were supplied."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def validate_request(candidate: Any) -> CodeReviewRequest:
    """
    Validate untyped tool input into a CodeReviewRequest.

    Raises ValidationError listing every invalid field. Nothing is returned
    unless the whole candidate is valid.
    """
    try:
        return CodeReviewRequest.model_validate(candidate)
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e) from e


def tool_input_schema() -> Dict[str, Any]:
    """JSON Schema of the request, keyed by wire names."""
    return CodeReviewRequest.model_json_schema(by_alias=True)
