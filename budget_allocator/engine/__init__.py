"""Budget allocation engine package."""

from budget_allocator.engine.allocation import BudgetEngine
from budget_allocator.engine.parsing import parse_non_negative_number_or_zero

__all__ = ["BudgetEngine", "parse_non_negative_number_or_zero"]
