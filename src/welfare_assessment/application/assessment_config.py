"""Loading and strict validation for admin assessment config overrides.

A config file may carry any subset of the four sections; present sections
replace the matching section of the base config wholesale.

Example file:
    {
        "schema_version": 1,
        "scoring_ranges": {
            "category1_range": [16, 20],
            "category2_range": [9, 15],
            "category3_range": [0, 8]
        }
    }
"""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from ..config import AssessmentSettings
from ..domain.assessment_config import (
    DEFAULT_CONFIG,
    MAX_TOTAL_SCORE,
    MIN_TOTAL_SCORE,
    AssessmentConfig,
    DependentWeights,
    FinancialThresholds,
    ScoringRanges,
    SocialStatusWeights,
    check_scoring_ranges,
)
from ..exceptions import AssessmentConfigFileNotFoundError, AssessmentConfigValidationError
from ..protocols import FileSystem
from .pydantic_errors import format_validation_error

_SCHEMA_VERSION = 1


class _FinancialThresholdsModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    category1_max: float
    category2_max: float
    category3_max: float

    @model_validator(mode="after")
    def _validate_order(self) -> _FinancialThresholdsModel:
        if not 0 <= self.category1_max <= self.category2_max <= self.category3_max:
            raise ValueError("thresholds must be non-negative and ascending")
        return self


class _ScoringRangesModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    category1_range: tuple[int, int]
    category2_range: tuple[int, int]
    category3_range: tuple[int, int]

    @model_validator(mode="after")
    def _validate_partition(self) -> _ScoringRangesModel:
        problems = check_scoring_ranges(
            ScoringRanges(
                category1_range=self.category1_range,
                category2_range=self.category2_range,
                category3_range=self.category3_range,
            ),
            min_total=MIN_TOTAL_SCORE,
            max_total=MAX_TOTAL_SCORE,
        )
        if problems:
            raise ValueError("; ".join(problems))
        return self


class _DependentWeightsModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    spouse: float
    elderly_parent: float
    child: float
    disabled_member: float
    unmarried_daughter: float

    @field_validator("spouse", "elderly_parent", "child", "disabled_member", "unmarried_daughter")
    @classmethod
    def _validate_non_negative(cls, value: float) -> float:
        if value < 0.0:
            raise ValueError("weight must not be negative")
        return value


class _SocialStatusWeightsModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    widow: float
    orphan: float
    disabled: float
    female_headed: float
    poor_housing: float

    @field_validator("widow", "orphan", "disabled", "female_headed", "poor_housing")
    @classmethod
    def _validate_non_negative(cls, value: float) -> float:
        if value < 0.0:
            raise ValueError("weight must not be negative")
        return value


class _AssessmentConfigFileModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    schema_version: int
    financial_thresholds: _FinancialThresholdsModel | None = None
    scoring_ranges: _ScoringRangesModel | None = None
    dependent_weights: _DependentWeightsModel | None = None
    social_status_weights: _SocialStatusWeightsModel | None = None

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, value: int) -> int:
        if value != _SCHEMA_VERSION:
            raise ValueError(f"unsupported schema version (expected {_SCHEMA_VERSION})")
        return value


def _merge_over(base: AssessmentConfig, model: _AssessmentConfigFileModel) -> AssessmentConfig:
    return base.merged(
        financial_thresholds=None
        if model.financial_thresholds is None
        else FinancialThresholds(**model.financial_thresholds.model_dump()),
        scoring_ranges=None
        if model.scoring_ranges is None
        else ScoringRanges(**model.scoring_ranges.model_dump()),
        dependent_weights=None
        if model.dependent_weights is None
        else DependentWeights(**model.dependent_weights.model_dump()),
        social_status_weights=None
        if model.social_status_weights is None
        else SocialStatusWeights(**model.social_status_weights.model_dump()),
    )


def parse_assessment_config(
    payload: str,
    *,
    source: str = "<string>",
    base: AssessmentConfig = DEFAULT_CONFIG,
) -> AssessmentConfig:
    """Validate a JSON config document and merge it over ``base``."""
    try:
        model = _AssessmentConfigFileModel.model_validate_json(payload)
    except ValidationError as exc:
        raise AssessmentConfigValidationError(source, format_validation_error(exc)) from exc
    return _merge_over(base, model)


def load_assessment_config(
    *,
    path: Path,
    fs: FileSystem,
    base: AssessmentConfig = DEFAULT_CONFIG,
) -> AssessmentConfig:
    """Load and validate an assessment config file from JSON."""
    if not fs.exists(path):
        raise AssessmentConfigFileNotFoundError(str(path))
    return parse_assessment_config(fs.read_text(path), source=str(path), base=base)


def resolve_assessment_config(settings: AssessmentSettings, fs: FileSystem) -> AssessmentConfig:
    """Return the effective config: defaults, overlaid by the configured file if any."""
    if not settings.config_path:
        return DEFAULT_CONFIG
    return load_assessment_config(path=Path(settings.config_path), fs=fs)


def dump_assessment_config(config: AssessmentConfig) -> str:
    """Render a config in the file format accepted by ``load_assessment_config``."""
    payload: dict[str, object] = {"schema_version": _SCHEMA_VERSION, **asdict(config)}
    return json.dumps(payload, indent=2)
