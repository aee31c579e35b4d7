"""Domain model for configurable assessment weights and category ranges."""

from __future__ import annotations

from dataclasses import dataclass, replace

ScoreRange = tuple[int, int]

MIN_TOTAL_SCORE = 0
MAX_TOTAL_SCORE = 20


@dataclass(frozen=True)
class FinancialThresholds:
    """Per-capita income ceilings shown to admins.

    The financial scorer uses its own fixed bands and does not read these values.
    """

    category1_max: float
    category2_max: float
    category3_max: float


@dataclass(frozen=True)
class ScoringRanges:
    """Inclusive total-score ranges for each category."""

    category1_range: ScoreRange
    category2_range: ScoreRange
    category3_range: ScoreRange

    def as_tuple(self) -> tuple[ScoreRange, ScoreRange, ScoreRange]:
        return (self.category1_range, self.category2_range, self.category3_range)


@dataclass(frozen=True)
class DependentWeights:
    """Weights added per dependent member."""

    spouse: float
    elderly_parent: float
    child: float
    disabled_member: float
    unmarried_daughter: float


@dataclass(frozen=True)
class SocialStatusWeights:
    """Weights added per household vulnerability factor."""

    widow: float
    orphan: float
    disabled: float
    female_headed: float
    poor_housing: float


@dataclass(frozen=True)
class AssessmentConfig:
    """Complete, immutable assessment configuration."""

    financial_thresholds: FinancialThresholds
    scoring_ranges: ScoringRanges
    dependent_weights: DependentWeights
    social_status_weights: SocialStatusWeights

    def merged(
        self,
        *,
        financial_thresholds: FinancialThresholds | None = None,
        scoring_ranges: ScoringRanges | None = None,
        dependent_weights: DependentWeights | None = None,
        social_status_weights: SocialStatusWeights | None = None,
    ) -> AssessmentConfig:
        """Return a new config with whole sections replaced (shallow merge)."""
        return replace(
            self,
            financial_thresholds=self.financial_thresholds
            if financial_thresholds is None
            else financial_thresholds,
            scoring_ranges=self.scoring_ranges if scoring_ranges is None else scoring_ranges,
            dependent_weights=self.dependent_weights
            if dependent_weights is None
            else dependent_weights,
            social_status_weights=self.social_status_weights
            if social_status_weights is None
            else social_status_weights,
        )


DEFAULT_CONFIG = AssessmentConfig(
    financial_thresholds=FinancialThresholds(
        category1_max=750,
        category2_max=1500,
        category3_max=2000,
    ),
    scoring_ranges=ScoringRanges(
        category1_range=(15, 20),
        category2_range=(8, 14),
        category3_range=(0, 7),
    ),
    dependent_weights=DependentWeights(
        spouse=1.0,
        elderly_parent=1.5,
        child=0.8,
        disabled_member=2.0,
        unmarried_daughter=1.2,
    ),
    social_status_weights=SocialStatusWeights(
        widow=2.0,
        orphan=2.5,
        disabled=2.0,
        female_headed=1.5,
        poor_housing=1.0,
    ),
)


def check_scoring_ranges(
    ranges: ScoringRanges,
    *,
    min_total: int = MIN_TOTAL_SCORE,
    max_total: int = MAX_TOTAL_SCORE,
) -> list[str]:
    """Describe every way the ranges fail to partition ``min_total..max_total``.

    An empty list means each possible integer total falls in exactly one range.
    """
    problems: list[str] = []
    labelled = list(
        zip(
            ("category1_range", "category2_range", "category3_range"),
            ranges.as_tuple(),
            strict=True,
        )
    )

    for label, (low, high) in labelled:
        if low > high:
            problems.append(f"{label}: lower bound {low} is greater than upper bound {high}")
        if low < min_total or high > max_total:
            problems.append(f"{label}: must lie within {min_total}-{max_total}")
    if problems:
        return problems

    for score in range(min_total, max_total + 1):
        owners = [label for label, (low, high) in labelled if low <= score <= high]
        if not owners:
            problems.append(f"total score {score} is not covered by any range")
        elif len(owners) > 1:
            problems.append(f"total score {score} is covered by {', '.join(owners)}")
    return problems
