"""
Derived budget figures.

All functions are pure over the model they are given. Nothing here is
cached: percentages are always recomputed against the current income.
"""

from typing import Optional

from budget_allocator.engine.parsing import parse_non_negative_number_or_zero
from budget_allocator.models.budget import BudgetCategory, BudgetModel, InputMode


def percentage_of(model: BudgetModel, amount: float, precision: int = 1) -> float:
    """
    ``amount`` as a percentage of income, rounded for display.

    Zero income is a normal transient state, not an error: the
    percentage is defined as 0 then.
    """
    if model.monthly_income == 0:
        return 0.0
    return round(amount / model.monthly_income * 100, precision)


def amount_from_percentage(model: BudgetModel, percentage: float) -> float:
    """
    The amount that is ``percentage`` percent of income.

    A product too large to represent overflows to infinity, which is
    not a storable amount; it becomes 0 like any other unusable number.
    """
    return parse_non_negative_number_or_zero(model.monthly_income * percentage / 100)


def total_allocated(model: BudgetModel) -> float:
    """Sum of every category amount (0 for an empty budget)."""
    return sum((category.amount for category in model.categories), 0.0)


def remaining(model: BudgetModel) -> float:
    """Income left to allocate. Negative when over budget."""
    return model.monthly_income - total_allocated(model)


def allocation_percentage(model: BudgetModel) -> float:
    """Share of income allocated, unrounded. 0 when income is 0."""
    if model.monthly_income == 0:
        return 0.0
    return total_allocated(model) / model.monthly_income * 100


def is_over_budget(model: BudgetModel) -> bool:
    """True when more than the whole income is allocated."""
    return allocation_percentage(model) > 100


def display_value(
    model: BudgetModel,
    category: BudgetCategory,
    precision: int = 1,
) -> Optional[float]:
    """
    The value shown in a category's input field.

    Amount mode shows the stored amount. Percentage mode shows the derived
    percentage, or None (an empty field) while income is 0.
    """
    if category.input_mode is InputMode.AMOUNT:
        return category.amount
    if category.input_mode is InputMode.PERCENTAGE:
        if model.monthly_income == 0:
            return None
        return percentage_of(model, category.amount, precision)
    raise ValueError(f"Unsupported input mode: {category.input_mode}")
