"""Custom exceptions for the welfare assessment engine.

Scoring itself never raises; these cover loading configuration and survey
files, and callers that choose to refuse invalid data.
"""

from __future__ import annotations

from collections.abc import Sequence


class AssessmentError(Exception):
    """Base exception for all assessment errors."""

    pass


class AssessmentConfigFileNotFoundError(AssessmentError):
    """Raised when an assessment config file path does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(
            f"Assessment config file not found: {path}\n"
            "Check ASSESSMENT_CONFIG_PATH or the --config option."
        )


class AssessmentConfigValidationError(AssessmentError):
    """Raised when an assessment config file fails schema validation."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid assessment config {path}: {detail}")


class SurveyFileNotFoundError(AssessmentError):
    """Raised when a survey submission file does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Survey file not found: {path}")


class SurveyValidationError(AssessmentError):
    """Raised when a survey payload cannot be parsed into assessment inputs."""

    def __init__(self, source: str, detail: str) -> None:
        self.source = source
        self.detail = detail
        super().__init__(f"Invalid survey {source}: {detail}")


class InvalidAssessmentDataError(AssessmentError):
    """Raised in strict mode when assessment inputs fail validation.

    The full list of problems is kept on ``errors`` for display.
    """

    def __init__(self, errors: Sequence[str]) -> None:
        self.errors = tuple(errors)
        super().__init__("Assessment data is invalid: " + "; ".join(self.errors))


class UnknownCategoryError(AssessmentError):
    """Raised when a category name is not one of the three tiers."""

    def __init__(self, category: str, available: Sequence[str]) -> None:
        self.category = category
        super().__init__(f"Unknown category '{category}'. Available: {', '.join(available)}")
