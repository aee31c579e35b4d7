"""Batch assessment: score a directory of survey files into one CSV report."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from ..domain.assessment import AssessmentEngine
from ..exceptions import InvalidAssessmentDataError, SurveyValidationError
from ..infrastructure import LocalFileSystem
from ..observability import get_logger
from ..protocols import FileSystem
from .survey_intake import assess_survey, load_survey

BATCH_OUTPUT_COLUMNS = (
    "survey_id",
    "status",  # assessed | rejected
    "financial_score",
    "dependents_score",
    "social_status_score",
    "officer_score",
    "total_score",
    "category",
    "category_color",
    "per_capita_income",
    "validation_errors",  # "; "-joined
    "calculated_at",
)


@dataclass(frozen=True)
class BatchAssessmentResult:
    """Summary of one batch run."""

    output_path: Path
    total_surveys: int
    assessed: int
    rejected: int


def _rejected_row(survey_id: str, errors: tuple[str, ...]) -> dict[str, object]:
    row: dict[str, object] = {column: None for column in BATCH_OUTPUT_COLUMNS}
    row.update(survey_id=survey_id, status="rejected", validation_errors="; ".join(errors))
    return row


def run_batch_assessment(
    input_dir: str | Path,
    out_path: str | Path,
    engine: AssessmentEngine,
    fs: FileSystem | None = None,
    strict: bool = False,
) -> BatchAssessmentResult:
    """Assess every ``*.json`` survey in ``input_dir`` and write a CSV report.

    Args:
        input_dir: Directory of survey JSON files.
        out_path: CSV path for the report.
        engine: Engine carrying the effective config.
        fs: Optional filesystem for testing.
        strict: Reject surveys that fail validation instead of scoring them.

    Returns:
        Counts of assessed and rejected surveys plus the report path.
    """
    fs = fs or LocalFileSystem()
    logger = get_logger("welfare_assessment.batch")
    input_dir = Path(input_dir)
    out_path = Path(out_path)

    survey_paths = fs.list_files(input_dir, "*.json")
    logger.info("Assessing: %s surveys from %s", len(survey_paths), input_dir)

    rows: list[dict[str, object]] = []
    for path in survey_paths:
        try:
            survey = load_survey(path=path, fs=fs)
        except SurveyValidationError as exc:
            logger.warning("Skipping unreadable survey %s: %s", path, exc.detail)
            rows.append(_rejected_row(path.stem, (exc.detail,)))
            continue

        try:
            outcome = assess_survey(survey, engine, strict=strict)
        except InvalidAssessmentDataError as exc:
            rows.append(_rejected_row(survey.survey_id, exc.errors))
            continue

        scores = outcome.scores
        rows.append(
            {
                "survey_id": outcome.survey_id,
                "status": "assessed",
                "financial_score": scores.financial_score,
                "dependents_score": scores.dependents_score,
                "social_status_score": scores.social_status_score,
                "officer_score": scores.officer_score,
                "total_score": scores.total_score,
                "category": scores.category,
                "category_color": scores.category_color,
                "per_capita_income": scores.per_capita_income,
                "validation_errors": "; ".join(outcome.validation.errors),
                "calculated_at": scores.calculated_at.isoformat(),
            }
        )

    df = pd.DataFrame(rows, columns=list(BATCH_OUTPUT_COLUMNS))
    if not df.empty:
        # Highest need first; rejected rows (no score) sink to the bottom
        df = df.sort_values(
            ["total_score", "survey_id"], ascending=[False, True], na_position="last"
        )

    fs.write_csv(df, out_path)
    assessed = int((df["status"] == "assessed").sum())
    rejected = len(df) - assessed
    logger.info("Report: %s (%s assessed, %s rejected)", out_path, assessed, rejected)

    return BatchAssessmentResult(
        output_path=out_path,
        total_surveys=len(survey_paths),
        assessed=assessed,
        rejected=rejected,
    )
