"""Domain modules for household needs assessment."""

from .assessment import AssessmentEngine, AssessmentScores, ValidationResult
from .assessment_config import DEFAULT_CONFIG, AssessmentConfig
from .household import FamilyMember, OfficerReport

__all__ = [
    "DEFAULT_CONFIG",
    "AssessmentConfig",
    "AssessmentEngine",
    "AssessmentScores",
    "FamilyMember",
    "OfficerReport",
    "ValidationResult",
]
