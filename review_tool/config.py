"""
Environment-sourced configuration.

Load order for .env files:
1. ./.env in the directory the tool is invoked from (user's project root)
2. .env bundled next to the tool itself (fallback)

Values from step 1 take precedence over step 2, and anything already set in
the real process environment takes precedence over both.

Configuration is resolved once per process. Restart the process to pick up
environment changes.
"""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Annotated, List, Mapping, Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, BeforeValidator, ConfigDict, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from review_tool.models import LLMProvider, LogLevel, ValidationError, require_text

logger = logging.getLogger(__name__)

BUNDLED_ENV_FILE = Path(__file__).resolve().parent.parent / ".env"

# Legacy numeric LOG_LEVEL values
NUMERIC_LOG_LEVELS = {
    "0": LogLevel.DEBUG.value,
    "1": LogLevel.INFO.value,
    "2": LogLevel.WARN.value,
    "3": LogLevel.ERROR.value,
}

_STDLIB_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}

_log_level_adapter = TypeAdapter(Annotated[LogLevel, BeforeValidator(require_text)])


def normalize_log_level(level: Optional[str]) -> str:
    """Map legacy numeric levels to names. Unknown values pass through for validation."""
    if not level:
        return LogLevel.INFO.value
    return NUMERIC_LOG_LEVELS.get(level, level)


def parse_log_level(raw: Optional[str]) -> LogLevel:
    """
    Normalize and validate a raw LOG_LEVEL value.

    Matching is case-sensitive: "DEBUG" is rejected.
    """
    try:
        return _log_level_adapter.validate_python(normalize_log_level(raw))
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e, default_field="LOG_LEVEL") from e


def _present(value: Optional[str]) -> Optional[str]:
    """Blank or whitespace-only values count as unset."""
    if value is None or not value.strip():
        return None
    return value


class Config(BaseModel):
    """Resolved process configuration. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    log_level: LogLevel = LogLevel.INFO
    google_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """Build from an environment snapshot (defaults to os.environ)."""
        env = os.environ if environ is None else environ
        return cls(
            log_level=parse_log_level(env.get("LOG_LEVEL")),
            google_api_key=env.get("GOOGLE_API_KEY"),
            gemini_api_key=env.get("GEMINI_API_KEY"),
            openai_api_key=env.get("OPENAI_API_KEY"),
            anthropic_api_key=env.get("ANTHROPIC_API_KEY"),
        )

    def get_api_key(self, provider: Union[LLMProvider, str]) -> Optional[str]:
        """
        Get the API key for an LLM provider.

        For google, GOOGLE_API_KEY is preferred with GEMINI_API_KEY as fallback.
        Returns None if the key is unset or blank, never an empty string.
        """
        try:
            provider = LLMProvider(provider)
        except ValueError:
            # Unreachable for validated requests
            logger.warning(f"Attempted to get API key for unknown provider: {provider}")
            return None

        if provider is LLMProvider.GOOGLE:
            return _present(self.google_api_key) or _present(self.gemini_api_key)
        if provider is LLMProvider.OPENAI:
            return _present(self.openai_api_key)
        return _present(self.anthropic_api_key)

    def is_debug_mode(self) -> bool:
        """Verbose debug output is enabled with LOG_LEVEL=debug (or 0)."""
        return self.log_level is LogLevel.DEBUG


def load_environment(cwd: Optional[Path] = None, bundled: Optional[Path] = None) -> List[Path]:
    """Load layered .env files into os.environ. Returns the files that were read."""
    candidates = [
        (cwd or Path.cwd()) / ".env",
        bundled or BUNDLED_ENV_FILE,
    ]
    loaded = []
    for path in candidates:
        if path in loaded:
            continue
        # override=False: earlier files and the real environment win
        if load_dotenv(path, override=False):
            loaded.append(path)
            logger.debug(f"Loaded environment from {path}")
    return loaded


@lru_cache(maxsize=None)
def get_config() -> Config:
    """Process-wide configuration, resolved on first use."""
    load_environment()
    return Config.from_env()


def configure_logging(config: Config) -> None:
    """Apply the resolved log level to the root logger."""
    logging.basicConfig(level=_STDLIB_LEVELS[config.log_level], format='%(levelname)s: %(message)s')


def get_api_key(provider: Union[LLMProvider, str], config: Optional[Config] = None) -> Optional[str]:
    return (config or get_config()).get_api_key(provider)


def is_debug_mode(config: Optional[Config] = None) -> bool:
    return (config or get_config()).is_debug_mode()


def __getattr__(name: str):
    # LOG_LEVEL is resolved lazily so importing this module never touches the environment
    if name == "LOG_LEVEL":
        return get_config().log_level
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
