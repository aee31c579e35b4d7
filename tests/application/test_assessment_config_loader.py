"""Tests for assessment config file validation and loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tests.fakes import InMemoryFileSystem
from welfare_assessment.application.assessment_config import (
    dump_assessment_config,
    load_assessment_config,
    parse_assessment_config,
    resolve_assessment_config,
)
from welfare_assessment.config import AssessmentSettings
from welfare_assessment.domain.assessment_config import (
    DEFAULT_CONFIG,
    ScoringRanges,
    SocialStatusWeights,
)
from welfare_assessment.exceptions import (
    AssessmentConfigFileNotFoundError,
    AssessmentConfigValidationError,
)


def _ranges_payload(**ranges: list[int]) -> dict[str, object]:
    section: dict[str, list[int]] = {
        "category1_range": [16, 20],
        "category2_range": [9, 15],
        "category3_range": [0, 8],
    }
    section.update(ranges)
    return {"schema_version": 1, "scoring_ranges": section}


def _parse_invalid(payload: dict[str, object]) -> AssessmentConfigValidationError:
    with pytest.raises(AssessmentConfigValidationError) as exc_info:
        parse_assessment_config(json.dumps(payload), source="admin.json")
    return exc_info.value


def test_partial_file_replaces_only_present_sections() -> None:
    config = parse_assessment_config(json.dumps(_ranges_payload()))

    assert config.scoring_ranges == ScoringRanges(
        category1_range=(16, 20),
        category2_range=(9, 15),
        category3_range=(0, 8),
    )
    assert config.financial_thresholds == DEFAULT_CONFIG.financial_thresholds
    assert config.dependent_weights == DEFAULT_CONFIG.dependent_weights
    assert config.social_status_weights == DEFAULT_CONFIG.social_status_weights


def test_sections_merge_over_given_base() -> None:
    base = DEFAULT_CONFIG.merged(
        social_status_weights=SocialStatusWeights(
            widow=0.0,
            orphan=0.0,
            disabled=0.0,
            female_headed=0.0,
            poor_housing=0.0,
        )
    )

    config = parse_assessment_config(json.dumps(_ranges_payload()), base=base)

    assert config.social_status_weights == base.social_status_weights
    assert config.scoring_ranges.category1_range == (16, 20)


def test_schema_version_only_keeps_defaults() -> None:
    assert parse_assessment_config('{"schema_version": 1}') == DEFAULT_CONFIG


def test_rejects_unsupported_schema_version() -> None:
    error = _parse_invalid({"schema_version": 2})

    assert error.path == "admin.json"
    assert error.detail.startswith("schema_version:")
    assert "unsupported schema version (expected 1)" in error.detail


def test_rejects_missing_schema_version() -> None:
    error = _parse_invalid({"scoring_ranges": _ranges_payload()["scoring_ranges"]})

    assert error.detail.startswith("schema_version:")


def test_rejects_unknown_sections() -> None:
    error = _parse_invalid({"schema_version": 1, "category_colors": {}})

    assert "Extra inputs are not permitted" in error.detail


def test_rejects_ranges_with_gap() -> None:
    error = _parse_invalid(_ranges_payload(category2_range=[9, 14]))

    assert error.detail.startswith("scoring_ranges:")
    assert "total score 15 is not covered by any range" in error.detail


def test_rejects_overlapping_ranges() -> None:
    error = _parse_invalid(_ranges_payload(category3_range=[0, 9]))

    assert "total score 9 is covered by category2_range, category3_range" in error.detail


def test_rejects_ranges_outside_total_domain() -> None:
    error = _parse_invalid(_ranges_payload(category1_range=[16, 24]))

    assert "category1_range: must lie within 0-20" in error.detail


def test_rejects_negative_weight() -> None:
    error = _parse_invalid(
        {
            "schema_version": 1,
            "dependent_weights": {
                "spouse": 1.0,
                "elderly_parent": 1.5,
                "child": -0.8,
                "disabled_member": 2.0,
                "unmarried_daughter": 1.2,
            },
        }
    )

    assert error.detail.startswith("dependent_weights.child:")
    assert "weight must not be negative" in error.detail


def test_rejects_incomplete_section() -> None:
    error = _parse_invalid(
        {
            "schema_version": 1,
            "social_status_weights": {"widow": 2.0, "orphan": 2.5},
        }
    )

    assert error.detail.startswith("social_status_weights.")


def test_rejects_descending_thresholds() -> None:
    error = _parse_invalid(
        {
            "schema_version": 1,
            "financial_thresholds": {
                "category1_max": 1500,
                "category2_max": 750,
                "category3_max": 2000,
            },
        }
    )

    assert "thresholds must be non-negative and ascending" in error.detail


def test_rejects_malformed_json() -> None:
    with pytest.raises(AssessmentConfigValidationError):
        parse_assessment_config("{not json", source="admin.json")


def test_load_reads_from_filesystem() -> None:
    fs = InMemoryFileSystem()
    path = Path("config/assessment.json")
    fs.write_text(json.dumps(_ranges_payload()), path)

    config = load_assessment_config(path=path, fs=fs)

    assert config.scoring_ranges.category3_range == (0, 8)


def test_load_missing_file_raises() -> None:
    path = Path("config/missing.json")

    with pytest.raises(AssessmentConfigFileNotFoundError) as exc_info:
        load_assessment_config(path=path, fs=InMemoryFileSystem())

    assert exc_info.value.path == str(path)
    assert "ASSESSMENT_CONFIG_PATH" in str(exc_info.value)


def test_resolve_without_path_uses_defaults() -> None:
    config = resolve_assessment_config(AssessmentSettings(), InMemoryFileSystem())

    assert config is DEFAULT_CONFIG


def test_resolve_with_path_loads_file() -> None:
    fs = InMemoryFileSystem()
    fs.write_text(json.dumps(_ranges_payload()), Path("config/assessment.json"))
    settings = AssessmentSettings(config_path="config/assessment.json")

    config = resolve_assessment_config(settings, fs)

    assert config.scoring_ranges.category1_range == (16, 20)


def test_dump_is_accepted_by_loader() -> None:
    config = parse_assessment_config(json.dumps(_ranges_payload()))

    dumped = dump_assessment_config(config)

    assert json.loads(dumped)["schema_version"] == 1
    assert json.loads(dumped)["scoring_ranges"]["category1_range"] == [16, 20]
    assert parse_assessment_config(dumped) == config


@pytest.mark.parametrize("value", [float("nan"), float("inf")])
def test_rejects_non_finite_weight(value: float) -> None:
    error = _parse_invalid(
        {
            "schema_version": 1,
            "dependent_weights": {
                "spouse": value,
                "elderly_parent": 1.5,
                "child": 0.8,
                "disabled_member": 2.0,
                "unmarried_daughter": 1.2,
            },
        }
    )

    assert error.detail.startswith("dependent_weights.spouse:")


def test_rejects_non_finite_threshold() -> None:
    error = _parse_invalid(
        {
            "schema_version": 1,
            "financial_thresholds": {
                "category1_max": 750,
                "category2_max": 1500,
                "category3_max": float("inf"),
            },
        }
    )

    assert error.detail.startswith("financial_thresholds.category3_max:")
