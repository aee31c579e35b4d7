"""Rule-based needs assessment for surveyed households.

Four dimensions are scored independently on a 0-5 scale (financial need,
dependents burden, social vulnerability, field-officer judgement), summed to a
0-20 total and mapped to a three-tier category.

Usage example:
    from welfare_assessment.domain.assessment import AssessmentEngine
    from welfare_assessment.domain.household import FamilyMember, OfficerReport

    engine = AssessmentEngine()
    scores = engine.calculate_assessment(
        total_income=4000,
        total_expenses=1000,
        family_size=4,
        family_members=[
            FamilyMember(name="Amina", age=34, relationship="Spouse", is_dependent=True),
        ],
        housing_condition="fair",
        officer_report=OfficerReport(officer_score=4),
    )
    assert scores.category == "category_2"
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime

from .assessment_config import (
    DEFAULT_CONFIG,
    AssessmentConfig,
    DependentWeights,
    FinancialThresholds,
    ScoreRange,
    ScoringRanges,
    SocialStatusWeights,
)
from .categories import FACILITIES_BY_CATEGORY, Category, CategoryColor, CategoryResult
from .household import POOR_HOUSING_CONDITIONS, FamilyMember, HouseholdFinancials, OfficerReport

# Per-capita income ceilings (inclusive) → financial score, checked in order
PER_CAPITA_INCOME_BANDS: tuple[tuple[float, int], ...] = (
    (500, 5),
    (750, 4),
    (1000, 3),
    (1500, 2),
    (2000, 1),
)

# Accumulated weight floors (inclusive) → score, checked in order
WEIGHT_BANDS: tuple[tuple[float, int], ...] = (
    (8, 5),
    (6, 4),
    (4, 3),
    (2, 2),
    (1, 1),
)

MIN_OFFICER_SCORE = 0
MAX_OFFICER_SCORE = 5
MAX_MEMBER_AGE = 120
ADULT_AGE = 18
UNMARRIED_STATUSES = frozenset({"single", "divorced"})


def _utc_now() -> datetime:
    return datetime.now(UTC)


def weight_to_score(weight: float) -> int:
    """Convert an accumulated weight to a 0-5 score."""
    for floor, score in WEIGHT_BANDS:
        if weight >= floor:
            return score
    return 0


def _in_range(total_score: float, score_range: ScoreRange) -> bool:
    low, high = score_range
    return low <= total_score <= high


@dataclass(frozen=True)
class AssessmentScores:
    """Snapshot of one household assessment."""

    financial_score: int
    dependents_score: int
    social_status_score: int
    officer_score: float
    total_score: float
    category: Category
    category_color: CategoryColor
    per_capita_income: float
    calculated_at: datetime

    def to_record(self) -> dict[str, object]:
        """Flatten to the camelCase shape persisted alongside survey records."""
        return {
            "financialScore": self.financial_score,
            "dependentsScore": self.dependents_score,
            "socialStatusScore": self.social_status_score,
            "officerScore": self.officer_score,
            "totalScore": self.total_score,
            "category": self.category,
            "categoryColor": self.category_color,
            "perCapitaIncome": self.per_capita_income,
            "calculatedAt": self.calculated_at.isoformat(),
        }


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of pre-flight checks on assessment inputs."""

    errors: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        return not self.errors


class AssessmentEngine:
    """Deterministic scorer holding one immutable configuration value.

    Build one engine per request or batch. ``update_config`` only rebinds this
    engine's config, so separate engines never observe each other's changes.
    """

    def __init__(
        self,
        config: AssessmentConfig | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._config = config or DEFAULT_CONFIG
        self._clock = clock or _utc_now

    def with_config(self, config: AssessmentConfig) -> AssessmentEngine:
        """Return a new engine sharing this engine's clock."""
        return AssessmentEngine(config, clock=self._clock)

    def calculate_financial_score(
        self, total_income: float, total_expenses: float, family_size: int
    ) -> int:
        """Score per-capita net income; lower income scores higher (0-5)."""
        if family_size <= 0:
            return 0

        per_capita_income = (total_income - total_expenses) / family_size
        for ceiling, score in PER_CAPITA_INCOME_BANDS:
            if per_capita_income <= ceiling:
                return score
        return 0

    def calculate_dependents_score(self, family_members: Sequence[FamilyMember]) -> int:
        """Score the weighted burden of dependent members (0-5)."""
        weights = self._config.dependent_weights
        dependent_weight = 0.0

        for member in family_members:
            if not member.is_dependent:
                continue

            if member.relationship_mentions("spouse", "wife"):
                dependent_weight += weights.spouse
            elif member.relationship_mentions("father", "mother"):
                dependent_weight += weights.elderly_parent
            elif member.relationship_mentions("son", "daughter"):
                dependent_weight += weights.child

            if member.has_disability:
                dependent_weight += weights.disabled_member

            if (
                member.relationship_mentions("daughter")
                and member.marital_status in UNMARRIED_STATUSES
            ):
                dependent_weight += weights.unmarried_daughter

        return weight_to_score(dependent_weight)

    def calculate_social_status_score(
        self,
        family_members: Sequence[FamilyMember],
        housing_condition: str,
        is_widow_headed: bool = False,
    ) -> int:
        """Score household vulnerability factors (0-5).

        Widow-headed, orphan and female-headed status each count once; the
        disability weight is multiplied by the number of disabled members.
        """
        weights = self._config.social_status_weights
        social_weight = 0.0

        if is_widow_headed:
            social_weight += weights.widow

        has_parent = any(
            member.relationship_mentions("father", "mother") for member in family_members
        )
        has_orphans = not has_parent and any(
            member.relationship_mentions("son", "daughter") and member.age < ADULT_AGE
            for member in family_members
        )
        if has_orphans:
            social_weight += weights.orphan

        disabled_count = sum(1 for member in family_members if member.has_disability)
        social_weight += disabled_count * weights.disabled

        # No explicit gender field: wives and daughters are excluded instead
        adult_male_earners = sum(
            1
            for member in family_members
            if member.age >= ADULT_AGE
            and member.monthly_income > 0
            and not member.relationship_mentions("wife", "daughter")
        )
        if adult_male_earners == 0:
            social_weight += weights.female_headed

        if housing_condition in POOR_HOUSING_CONDITIONS:
            social_weight += weights.poor_housing

        return weight_to_score(social_weight)

    def calculate_officer_score(self, officer_report: OfficerReport) -> float:
        """Clamp the officer's score into 0-5 without rejecting it."""
        return max(MIN_OFFICER_SCORE, min(MAX_OFFICER_SCORE, officer_report.officer_score))

    def determine_category(self, total_score: float) -> CategoryResult:
        """Map a total score to a category.

        Category 1 is checked before category 2; anything matching neither is
        category 3, so overlapping ranges resolve in that order.
        """
        ranges = self._config.scoring_ranges
        if _in_range(total_score, ranges.category1_range):
            return CategoryResult.for_category("category_1")
        if _in_range(total_score, ranges.category2_range):
            return CategoryResult.for_category("category_2")
        return CategoryResult.for_category("category_3")

    def get_eligible_facilities(self, category: str) -> list[str]:
        """Return the facilities a category qualifies for."""
        return list(FACILITIES_BY_CATEGORY.get(category, ()))

    def calculate_assessment(
        self,
        total_income: float,
        total_expenses: float,
        family_size: int,
        family_members: Sequence[FamilyMember],
        housing_condition: str,
        officer_report: OfficerReport,
        is_widow_headed: bool = False,
    ) -> AssessmentScores:
        """Score every dimension and categorise the household."""
        financial_score = self.calculate_financial_score(total_income, total_expenses, family_size)
        dependents_score = self.calculate_dependents_score(family_members)
        social_status_score = self.calculate_social_status_score(
            family_members, housing_condition, is_widow_headed
        )
        officer_score = self.calculate_officer_score(officer_report)

        total_score = financial_score + dependents_score + social_status_score + officer_score
        result = self.determine_category(total_score)
        financials = HouseholdFinancials(
            total_income=total_income,
            total_expenses=total_expenses,
            family_size=family_size,
        )

        return AssessmentScores(
            financial_score=financial_score,
            dependents_score=dependents_score,
            social_status_score=social_status_score,
            officer_score=officer_score,
            total_score=total_score,
            category=result.category,
            category_color=result.category_color,
            per_capita_income=financials.per_capita_income,
            calculated_at=self._clock(),
        )

    def update_config(
        self,
        *,
        financial_thresholds: FinancialThresholds | None = None,
        scoring_ranges: ScoringRanges | None = None,
        dependent_weights: DependentWeights | None = None,
        social_status_weights: SocialStatusWeights | None = None,
    ) -> None:
        """Replace whole config sections on this engine only."""
        self._config = self._config.merged(
            financial_thresholds=financial_thresholds,
            scoring_ranges=scoring_ranges,
            dependent_weights=dependent_weights,
            social_status_weights=social_status_weights,
        )

    def get_config(self) -> AssessmentConfig:
        """Return a shallow copy of the current config."""
        return replace(self._config)

    def validate_assessment_data(
        self,
        total_income: float,
        total_expenses: float,
        family_size: int,
        family_members: Sequence[FamilyMember],
        officer_report: OfficerReport,
    ) -> ValidationResult:
        """Check inputs strictly, collecting every problem instead of raising.

        Unlike ``calculate_officer_score`` this rejects out-of-range officer
        scores. Calculation does not require validation to pass first.
        """
        errors: list[str] = []

        if total_income < 0:
            errors.append("Total income cannot be negative")
        if total_expenses < 0:
            errors.append("Total expenses cannot be negative")
        if family_size <= 0:
            errors.append("Family size must be greater than 0")
        if not family_members:
            errors.append("At least one family member is required")
        if not MIN_OFFICER_SCORE <= officer_report.officer_score <= MAX_OFFICER_SCORE:
            errors.append("Officer score must be between 0 and 5")

        for index, member in enumerate(family_members, start=1):
            if not member.name or not member.name.strip():
                errors.append(f"Family member {index}: Name is required")
            if member.age < 0 or member.age > MAX_MEMBER_AGE:
                errors.append(f"Family member {index}: Age must be between 0 and 120")
            if member.monthly_income < 0:
                errors.append(f"Family member {index}: Monthly income cannot be negative")

        return ValidationResult(errors=tuple(errors))
