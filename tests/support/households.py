"""Builders for household members and survey payloads used across tests."""

from __future__ import annotations

import json
from typing import Any

from welfare_assessment.domain.household import FamilyMember


def make_member(
    relationship: str = "Head",
    *,
    name: str = "Member",
    age: int = 40,
    marital_status: str = "married",
    monthly_income: float = 0.0,
    has_disability: bool = False,
    is_dependent: bool = False,
) -> FamilyMember:
    return FamilyMember(
        name=name,
        age=age,
        relationship=relationship,
        marital_status=marital_status,
        monthly_income=monthly_income,
        has_disability=has_disability,
        is_dependent=is_dependent,
    )


def make_survey_payload(**overrides: Any) -> dict[str, Any]:
    """Return a camelCase survey record as stored by the survey form."""
    payload: dict[str, Any] = {
        "surveyId": "SRV-001",
        "personalDetails": {"district": "Lucknow"},
        "familyMembers": [
            {
                "name": "Rashid",
                "age": 45,
                "religion": "Islam",
                "relationship": "Husband",
                "maritalStatus": "married",
                "monthlyIncome": 3000,
                "incomeFromOtherSources": 500,
                "isDependent": False,
                "hasDisability": False,
            },
            {
                "name": "Amina",
                "age": 40,
                "relationship": "Wife",
                "maritalStatus": "married",
                "monthlyIncome": 0,
                "isDependent": True,
                "hasDisability": False,
            },
            {
                "name": "Sana",
                "age": 12,
                "relationship": "Daughter",
                "maritalStatus": "single",
                "monthlyIncome": 0,
                "isDependent": True,
                "hasDisability": False,
            },
            {
                "name": "Imran",
                "age": 9,
                "relationship": "Son",
                "maritalStatus": "single",
                "monthlyIncome": None,
                "isDependent": True,
                "hasDisability": False,
            },
        ],
        "incomeExpenses": {
            "monthlyEarnings": {
                "primaryIncome": 0,
                "secondaryIncome": 500,
                "otherEarnings": 0,
                "totalEarnings": 500,
            },
            "monthlyExpenses": {
                "rent": 0,
                "electricityBill": 200,
                "educationExpenses": 300,
                "medicalExpenses": 100,
                "foodExpenses": 1200,
                "otherExpenses": 0,
                "totalExpenses": 1800,
            },
        },
        "housingDetails": {
            "housingCondition": "poor",
            "rentAmount": 200,
            "utilityBills": {
                "electricityBillAmount": 0,
                "gasBillAmount": 0,
                "waterBillAmount": 0,
            },
        },
        "officerReport": {
            "officerScore": 3,
            "verificationStatus": "verified",
            "officerRecommendation": "Genuine need",
            "neighborReferences": "Confirmed by two neighbours",
        },
    }
    payload.update(overrides)
    return payload


def survey_json(**overrides: Any) -> str:
    return json.dumps(make_survey_payload(**overrides))
