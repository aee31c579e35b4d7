"""Turn a field survey submission into an assessment.

Survey payloads arrive as camelCase JSON from the survey form. Only the fields
the assessment needs are parsed; everything else on the record is ignored.
Missing or null amounts count as zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from ..domain.assessment import AssessmentEngine, AssessmentScores, ValidationResult
from ..domain.household import (
    FamilyMember,
    HousingCondition,
    OfficerReport,
    VerificationStatus,
)
from ..exceptions import InvalidAssessmentDataError, SurveyFileNotFoundError, SurveyValidationError
from ..observability import get_logger
from ..protocols import FileSystem
from .pydantic_errors import format_validation_error

DEFAULT_HOUSING_CONDITION: HousingCondition = "fair"


def _none_as_zero(value: object) -> object:
    return 0 if value is None else value


Amount = Annotated[float, BeforeValidator(_none_as_zero)]


class _SurveyModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
        allow_inf_nan=False,
    )


class _FamilyMemberModel(_SurveyModel):
    name: str = ""
    age: int
    relationship: str = ""
    marital_status: str = ""
    monthly_income: Amount = 0.0
    income_from_other_sources: Amount = 0.0
    has_disability: bool = False
    is_dependent: bool = False


class _MonthlyEarningsModel(_SurveyModel):
    primary_income: Amount = 0.0
    secondary_income: Amount = 0.0
    other_earnings: Amount = 0.0


class _MonthlyExpensesModel(_SurveyModel):
    rent: Amount = 0.0
    electricity_bill: Amount = 0.0
    education_expenses: Amount = 0.0
    medical_expenses: Amount = 0.0
    food_expenses: Amount = 0.0
    other_expenses: Amount = 0.0


class _IncomeExpensesModel(_SurveyModel):
    monthly_earnings: _MonthlyEarningsModel = Field(default_factory=_MonthlyEarningsModel)
    monthly_expenses: _MonthlyExpensesModel = Field(default_factory=_MonthlyExpensesModel)


class _UtilityBillsModel(_SurveyModel):
    electricity_bill_amount: Amount = 0.0
    gas_bill_amount: Amount = 0.0
    water_bill_amount: Amount = 0.0


class _HousingDetailsModel(_SurveyModel):
    housing_condition: HousingCondition | None = None
    rent_amount: Amount = 0.0
    utility_bills: _UtilityBillsModel = Field(default_factory=_UtilityBillsModel)


class _OfficerReportModel(_SurveyModel):
    officer_score: float
    verification_status: VerificationStatus = "unverified"
    officer_recommendation: str = ""


class _SurveyPayloadModel(_SurveyModel):
    survey_id: str | None = None
    family_members: list[_FamilyMemberModel] = Field(default_factory=list)
    income_expenses: _IncomeExpensesModel = Field(default_factory=_IncomeExpensesModel)
    housing_details: _HousingDetailsModel = Field(default_factory=_HousingDetailsModel)
    officer_report: _OfficerReportModel


@dataclass(frozen=True)
class SurveySubmission:
    """Assessment-relevant content of one survey record."""

    survey_id: str
    family_members: tuple[FamilyMember, ...]
    monthly_earnings: float  # primary + secondary + other, excluding member incomes
    monthly_expenses: float  # itemised household expenses
    housing_expenses: float  # rent and utility bills from housing details
    housing_condition: HousingCondition
    officer_report: OfficerReport


@dataclass(frozen=True)
class AssessmentRequest:
    """Arguments for ``AssessmentEngine.calculate_assessment``."""

    total_income: float
    total_expenses: float
    family_size: int
    family_members: tuple[FamilyMember, ...]
    housing_condition: HousingCondition
    officer_report: OfficerReport
    is_widow_headed: bool


@dataclass(frozen=True)
class SurveyAssessment:
    """Outcome of assessing one survey."""

    survey_id: str
    request: AssessmentRequest
    validation: ValidationResult
    scores: AssessmentScores
    eligible_facilities: tuple[str, ...]


def _to_submission(model: _SurveyPayloadModel, fallback_id: str) -> SurveySubmission:
    earnings = model.income_expenses.monthly_earnings
    expenses = model.income_expenses.monthly_expenses
    housing = model.housing_details
    bills = housing.utility_bills
    report = model.officer_report

    return SurveySubmission(
        survey_id=model.survey_id or fallback_id,
        family_members=tuple(
            FamilyMember(
                name=member.name,
                age=member.age,
                relationship=member.relationship,
                marital_status=member.marital_status,
                monthly_income=member.monthly_income,
                has_disability=member.has_disability,
                is_dependent=member.is_dependent,
                income_from_other_sources=member.income_from_other_sources,
            )
            for member in model.family_members
        ),
        monthly_earnings=earnings.primary_income
        + earnings.secondary_income
        + earnings.other_earnings,
        monthly_expenses=expenses.rent
        + expenses.electricity_bill
        + expenses.education_expenses
        + expenses.medical_expenses
        + expenses.food_expenses
        + expenses.other_expenses,
        housing_expenses=housing.rent_amount
        + bills.electricity_bill_amount
        + bills.gas_bill_amount
        + bills.water_bill_amount,
        housing_condition=housing.housing_condition or DEFAULT_HOUSING_CONDITION,
        officer_report=OfficerReport(
            officer_score=report.officer_score,
            verification_status=report.verification_status,
            officer_recommendation=report.officer_recommendation,
        ),
    )


def parse_survey(
    payload: str, *, source: str = "<string>", fallback_id: str = ""
) -> SurveySubmission:
    """Validate a survey JSON document."""
    try:
        model = _SurveyPayloadModel.model_validate_json(payload)
    except ValidationError as exc:
        raise SurveyValidationError(source, format_validation_error(exc)) from exc
    return _to_submission(model, fallback_id or source)


def load_survey(*, path: Path, fs: FileSystem) -> SurveySubmission:
    """Load one survey JSON file; the file stem is the id when the payload has none."""
    if not fs.exists(path):
        raise SurveyFileNotFoundError(str(path))
    try:
        payload = fs.read_text(path)
    except UnicodeDecodeError as exc:
        raise SurveyValidationError(str(path), "file is not valid UTF-8") from exc
    return parse_survey(payload, source=str(path), fallback_id=path.stem)


def household_income(survey: SurveySubmission) -> float:
    """Declared earnings plus every member's own and other-source income."""
    member_income = sum(
        member.monthly_income + member.income_from_other_sources
        for member in survey.family_members
    )
    return survey.monthly_earnings + member_income


def household_expenses(survey: SurveySubmission) -> float:
    return survey.monthly_expenses + survey.housing_expenses


def family_size(survey: SurveySubmission) -> int:
    """Number of listed members, never less than one."""
    return len(survey.family_members) or 1


def is_widow_headed(family_members: tuple[FamilyMember, ...]) -> bool:
    """A wife is listed and no husband is."""
    has_wife = any(member.relationship_mentions("wife") for member in family_members)
    has_husband = any(member.relationship_mentions("husband") for member in family_members)
    return has_wife and not has_husband


def build_assessment_request(survey: SurveySubmission) -> AssessmentRequest:
    return AssessmentRequest(
        total_income=household_income(survey),
        total_expenses=household_expenses(survey),
        family_size=family_size(survey),
        family_members=survey.family_members,
        housing_condition=survey.housing_condition,
        officer_report=survey.officer_report,
        is_widow_headed=is_widow_headed(survey.family_members),
    )


def validate_survey(survey: SurveySubmission, engine: AssessmentEngine) -> ValidationResult:
    """Run the engine's pre-flight checks against a survey."""
    request = build_assessment_request(survey)
    # Validate the raw member count, not the floored family size
    return engine.validate_assessment_data(
        request.total_income,
        request.total_expenses,
        len(survey.family_members),
        request.family_members,
        request.officer_report,
    )


def assess_survey(
    survey: SurveySubmission,
    engine: AssessmentEngine,
    *,
    strict: bool = False,
) -> SurveyAssessment:
    """Validate and score one survey.

    Args:
        survey: Parsed survey submission.
        engine: Engine carrying the effective config.
        strict: Raise instead of scoring when validation fails.

    Returns:
        Scores, validation outcome and eligible facilities.

    Raises:
        InvalidAssessmentDataError: When ``strict`` and validation fails.
    """
    logger = get_logger("welfare_assessment.survey_intake")
    request = build_assessment_request(survey)
    validation = validate_survey(survey, engine)
    if not validation.is_valid:
        if strict:
            raise InvalidAssessmentDataError(validation.errors)
        logger.warning(
            "Survey %s has %s validation error(s); scoring anyway",
            survey.survey_id,
            len(validation.errors),
        )

    scores = engine.calculate_assessment(
        request.total_income,
        request.total_expenses,
        request.family_size,
        request.family_members,
        request.housing_condition,
        request.officer_report,
        request.is_widow_headed,
    )
    logger.info(
        "Survey %s: total score %s → %s", survey.survey_id, scores.total_score, scores.category
    )
    return SurveyAssessment(
        survey_id=survey.survey_id,
        request=request,
        validation=validation,
        scores=scores,
        eligible_facilities=tuple(engine.get_eligible_facilities(scores.category)),
    )
