"""
Core Data Models for the Budget Allocator

These models define the budget document that flows between the engine,
the persistence adapter and the view.

DESIGN DECISION: A category stores its AMOUNT only. The percentage shown
to the user is always derived from the amount and the current income, so
switching a category between input modes can never drift its value.

Models are frozen. Engine operations return new models instead of
mutating the one they were given.
"""

from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)
from pydantic.alias_generators import to_camel


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class InputMode(str, Enum):
    """
    How the user-facing field of a category is interpreted.

    The stored amount is the same in both modes.
    """
    AMOUNT = "amount"
    PERCENTAGE = "percentage"


# Round-robin palette for new categories
PALETTE: tuple[str, ...] = (
    "bg-red-500",
    "bg-orange-500",
    "bg-green-500",
    "bg-blue-500",
    "bg-purple-500",
    "bg-yellow-500",
    "bg-pink-500",
    "bg-teal-500",
    "bg-indigo-500",
    "bg-cyan-500",
    "bg-lime-500",
    "bg-rose-500",
)


def color_for_index(index: int) -> str:
    """Palette entry for the category at ``index`` (wraps around)."""
    return PALETTE[index % len(PALETTE)]


# =============================================================================
# CORE BUDGET MODELS
# =============================================================================

class BudgetCategory(BaseModel):
    """
    A named spending category.

    Serialised with camelCase keys (``inputMode``) so the stored document
    keeps its established shape.
    """
    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque unique identifier, fixed at creation"
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Display label"
    )
    amount: float = Field(
        default=0.0,
        ge=0,
        allow_inf_nan=False,
        description="Allocated amount in currency units"
    )
    color: str = Field(
        default=PALETTE[0],
        description="Palette tag (cosmetic only)"
    )
    input_mode: InputMode = Field(
        default=InputMode.PERCENTAGE,
        description="How the user edits this category"
    )


class BudgetModel(BaseModel):
    """
    The whole budget: one income and an ordered list of categories.

    This is the unit of persistence. It is always saved and loaded whole.
    """
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    monthly_income: float = Field(
        default=0.0,
        ge=0,
        allow_inf_nan=False,
        description="Monthly income in currency units"
    )
    categories: list[BudgetCategory] = Field(
        default_factory=list,
        description="Categories in insertion order"
    )

    @model_validator(mode='after')
    def validate_unique_ids(self) -> 'BudgetModel':
        """Category ids must be unique within a budget."""
        seen: set[str] = set()
        for category in self.categories:
            if category.id in seen:
                raise ValueError(f"Duplicate category id: {category.id}")
            seen.add(category.id)
        return self

    def find_category(self, category_id: str) -> Optional[BudgetCategory]:
        """Return the category with ``category_id``, or None."""
        for category in self.categories:
            if category.id == category_id:
                return category
        return None

    def to_document(self) -> dict:
        """The storage document: ``{"monthlyIncome": ..., "categories": [...]}``."""
        return self.model_dump(mode="json", by_alias=True)


# =============================================================================
# DEFAULTS
# =============================================================================

DEFAULT_CATEGORIES: tuple[BudgetCategory, ...] = (
    BudgetCategory(id="rent", name="Rent/Housing", color="bg-red-500",
                   input_mode=InputMode.PERCENTAGE),
    BudgetCategory(id="food", name="Food & Dining", color="bg-orange-500",
                   input_mode=InputMode.PERCENTAGE),
    BudgetCategory(id="savings", name="Savings", color="bg-green-500",
                   input_mode=InputMode.PERCENTAGE),
    BudgetCategory(id="investment", name="Investment", color="bg-blue-500",
                   input_mode=InputMode.PERCENTAGE),
    BudgetCategory(id="transportation", name="Transportation", color="bg-purple-500",
                   input_mode=InputMode.PERCENTAGE),
    BudgetCategory(id="utilities", name="Utilities", color="bg-yellow-500",
                   input_mode=InputMode.AMOUNT),
    BudgetCategory(id="entertainment", name="Entertainment", color="bg-pink-500",
                   input_mode=InputMode.PERCENTAGE),
    BudgetCategory(id="healthcare", name="Healthcare", color="bg-teal-500",
                   input_mode=InputMode.AMOUNT),
)


def default_categories() -> list[BudgetCategory]:
    """A fresh list holding the eight default categories."""
    return list(DEFAULT_CATEGORIES)


def default_model() -> BudgetModel:
    """Zero income and the default categories."""
    return BudgetModel(monthly_income=0.0, categories=default_categories())
