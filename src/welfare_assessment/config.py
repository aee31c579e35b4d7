"""Centralised, injectable runtime settings for assessment runs."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Self

from dotenv import load_dotenv

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR"})


class BooleanEnvVarError(ValueError):
    """Raised when an environment variable must be a supported boolean."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a boolean value (true/false, 1/0, yes/no, on/off).")


class LogLevelEnvVarError(ValueError):
    """Raised when an environment variable must name a log level."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be one of {', '.join(sorted(_LOG_LEVELS))}.")


@dataclass(frozen=True)
class AssessmentSettings:
    """Immutable settings for CLI and batch assessment runs.

    Load from environment with `AssessmentSettings.from_env()` or construct directly for testing.
    """

    # Optional JSON file with admin overrides merged over the default config
    config_path: str = ""
    # Refuse to score surveys that fail validation
    strict_validation: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> Self:
        """Load settings from environment variables.

        Args:
            dotenv_path: Optional path to .env file. If None, uses default .env discovery.

        Returns:
            AssessmentSettings instance populated from environment.
        """
        load_dotenv(dotenv_path)

        return cls(
            config_path=os.getenv("ASSESSMENT_CONFIG_PATH", "").strip(),
            strict_validation=_parse_optional_bool(
                os.getenv("ASSESSMENT_STRICT_VALIDATION", ""),
                env_name="ASSESSMENT_STRICT_VALIDATION",
            )
            or False,
            log_level=_parse_log_level(
                os.getenv("ASSESSMENT_LOG_LEVEL", ""),
                env_name="ASSESSMENT_LOG_LEVEL",
            ),
        )

    def with_overrides(
        self,
        *,
        config_path: str | None = None,
        strict_validation: bool | None = None,
    ) -> Self:
        """Return new settings with specified overrides (for CLI options)."""
        return replace(
            self,
            config_path=self.config_path if config_path is None else config_path.strip(),
            strict_validation=self.strict_validation
            if strict_validation is None
            else strict_validation,
        )


def _parse_optional_bool(value: str, *, env_name: str) -> bool | None:
    """Parse an optional boolean from an environment variable."""
    text = value.strip().lower()
    if not text:
        return None
    if text in {"1", "true", "yes", "y", "on"}:
        return True
    if text in {"0", "false", "no", "n", "off"}:
        return False
    raise BooleanEnvVarError(env_name)


def _parse_log_level(value: str, *, env_name: str) -> str:
    text = value.strip().upper()
    if not text:
        return "INFO"
    if text not in _LOG_LEVELS:
        raise LogLevelEnvVarError(env_name)
    return text
