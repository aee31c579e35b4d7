"""Household value types gathered during a field survey.

Usage example:
    from welfare_assessment.domain.household import FamilyMember, OfficerReport

    member = FamilyMember(
        name="Amina",
        age=34,
        relationship="Wife",
        marital_status="married",
        monthly_income=0.0,
        has_disability=False,
        is_dependent=True,
    )
    report = OfficerReport(officer_score=4)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

HousingCondition = Literal["good", "fair", "poor", "very_poor"]
VerificationStatus = Literal["verified", "partially_verified", "unverified"]

POOR_HOUSING_CONDITIONS = frozenset({"poor", "very_poor"})


@dataclass(frozen=True)
class HouseholdFinancials:
    """Monthly household totals used for per-capita income."""

    total_income: float
    total_expenses: float
    family_size: int

    @property
    def per_capita_income(self) -> float:
        """Net income per family member (0.0 when family size is not positive)."""
        if self.family_size <= 0:
            return 0.0
        return (self.total_income - self.total_expenses) / self.family_size


@dataclass(frozen=True)
class FamilyMember:
    """One member of a surveyed household."""

    name: str
    age: int
    relationship: str  # free text, matched case-insensitively
    marital_status: str = ""  # blank when not recorded
    monthly_income: float = 0.0
    has_disability: bool = False
    is_dependent: bool = False
    income_from_other_sources: float = 0.0

    def relationship_mentions(self, *keywords: str) -> bool:
        """Return True when the relationship text contains any keyword."""
        text = self.relationship.lower()
        return any(keyword in text for keyword in keywords)


@dataclass(frozen=True)
class OfficerReport:
    """Field officer verdict recorded after a home visit."""

    officer_score: float  # 0-5 scale, clamped when scored
    verification_status: VerificationStatus = "unverified"
    officer_recommendation: str = ""
