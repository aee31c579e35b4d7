"""Beneficiary categories, their display colours and eligible facilities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Category = Literal["category_1", "category_2", "category_3"]
CategoryColor = Literal["white", "yellow", "green"]

CATEGORIES: tuple[Category, ...] = ("category_1", "category_2", "category_3")

CATEGORY_COLORS: dict[Category, CategoryColor] = {
    "category_1": "white",
    "category_2": "yellow",
    "category_3": "green",
}

FACILITIES_BY_CATEGORY: dict[str, tuple[str, ...]] = {
    "category_1": (
        "Full sponsorship and monthly stipends",
        "Priority medical aid and free medicines",
        "Education support and school fees",
        "Monthly ration support",
        "Widow/disability pension assistance",
        "Emergency financial assistance",
    ),
    "category_2": (
        "Partial sponsorship and targeted support",
        "Subsidized medical treatment",
        "Partial education support",
        "Crisis-based emergency aid",
    ),
    "category_3": (
        "Emergency aid in verified crises",
        "Skill development programs",
        "Government scheme guidance",
    ),
}


@dataclass(frozen=True)
class CategoryResult:
    """A category paired with its display colour."""

    category: Category
    category_color: CategoryColor

    @classmethod
    def for_category(cls, category: Category) -> CategoryResult:
        return cls(category=category, category_color=CATEGORY_COLORS[category])
