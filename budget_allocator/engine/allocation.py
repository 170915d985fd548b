"""
Budget Allocation Engine

The engine owns every rule for changing a budget:
- income and amounts pass through the numeric parser
- percentages are converted to amounts against the current income
- blank names and unknown ids are no-ops, never errors

DESIGN DECISION: The engine holds no budget of its own. Each operation
takes the current BudgetModel and returns the next one, so callers (the
session, tests) decide where the budget lives.

Every operation is total: for any input it returns a model, it never raises.
"""

from typing import Any, Callable, Optional, Union
from uuid import uuid4

from budget_allocator.audit import AuditLogger
from budget_allocator.engine import aggregates
from budget_allocator.engine.parsing import parse_non_negative_number_or_zero
from budget_allocator.models.audit import AuditEventBuilder
from budget_allocator.models.budget import (
    BudgetCategory,
    BudgetModel,
    InputMode,
    color_for_index,
    default_model,
)


def _new_category_id() -> str:
    return uuid4().hex


class BudgetEngine:
    """
    Applies user edits to a budget and answers derived queries.
    """

    def __init__(
        self,
        audit_logger: Optional[AuditLogger] = None,
        id_factory: Optional[Callable[[], str]] = None,
        percentage_precision: int = 1,
    ):
        """
        Initialize engine.

        Args:
            audit_logger: Receives one event per edit. If None, edits are not logged.
            id_factory: Produces ids for new categories. Defaults to uuid4 hex.
            percentage_precision: Decimal places for display percentages.
        """
        self._audit_logger = audit_logger
        self._id_factory = id_factory or _new_category_id
        self._precision = percentage_precision

    def _audit(self, event) -> None:
        if self._audit_logger:
            self._audit_logger.log(event)

    def _replace_category(
        self,
        model: BudgetModel,
        category_id: str,
        operation: str,
        **changes: Any,
    ) -> BudgetModel:
        """Copy of ``model`` with one category updated, or ``model`` if the id is unknown."""
        if model.find_category(category_id) is None:
            self._audit(AuditEventBuilder.category_not_found(category_id, operation))
            return model

        categories = [
            category.model_copy(update=changes) if category.id == category_id else category
            for category in model.categories
        ]
        return model.model_copy(update={"categories": categories})

    # -------------------------------------------------------------------------
    # Edits
    # -------------------------------------------------------------------------

    def set_income(self, model: BudgetModel, value: Any) -> BudgetModel:
        """
        Set the monthly income.

        Changes the denominator of every percentage in the budget.
        """
        income = parse_non_negative_number_or_zero(value)
        self._audit(AuditEventBuilder.income_set(income))
        return model.model_copy(update={"monthly_income": income})

    def add_category(self, model: BudgetModel, name: Optional[str]) -> BudgetModel:
        """
        Append a new category in percentage mode with a zero amount.

        Blank or whitespace-only names leave the budget unchanged. The new
        category takes the next palette colour, based on how many
        categories exist already.
        """
        clean_name = (name or "").strip()
        if not clean_name:
            self._audit(AuditEventBuilder.category_rejected(name or ""))
            return model

        existing = {category.id for category in model.categories}
        category_id = self._id_factory()
        while category_id in existing:
            category_id = self._id_factory()

        category = BudgetCategory(
            id=category_id,
            name=clean_name,
            amount=0.0,
            color=color_for_index(len(model.categories)),
            input_mode=InputMode.PERCENTAGE,
        )
        self._audit(AuditEventBuilder.category_added(category.id, category.name, category.color))
        return model.model_copy(update={"categories": [*model.categories, category]})

    def remove_category(self, model: BudgetModel, category_id: str) -> BudgetModel:
        """Remove a category by id. Unknown ids are ignored."""
        categories = [c for c in model.categories if c.id != category_id]
        if len(categories) == len(model.categories):
            self._audit(AuditEventBuilder.category_not_found(category_id, "remove_category"))
            return model

        self._audit(AuditEventBuilder.category_removed(category_id))
        return model.model_copy(update={"categories": categories})

    def set_input_mode(
        self,
        model: BudgetModel,
        category_id: str,
        mode: Union[InputMode, str],
    ) -> BudgetModel:
        """Switch how a category is edited. The stored amount is untouched."""
        input_mode = InputMode(mode)
        updated = self._replace_category(
            model, category_id, "set_input_mode", input_mode=input_mode
        )
        if updated is not model:
            self._audit(AuditEventBuilder.input_mode_changed(category_id, input_mode.value))
        return updated

    def set_category_amount(
        self,
        model: BudgetModel,
        category_id: str,
        amount: Any,
    ) -> BudgetModel:
        """Store an absolute amount for a category (amount mode)."""
        value = parse_non_negative_number_or_zero(amount)
        updated = self._replace_category(
            model, category_id, "set_category_amount", amount=value
        )
        if updated is not model:
            self._audit(AuditEventBuilder.category_updated(category_id, value))
        return updated

    def set_category_percentage(
        self,
        model: BudgetModel,
        category_id: str,
        percentage: Any,
    ) -> BudgetModel:
        """
        Store ``income * percentage / 100`` as the category amount (percentage mode).

        Only the resulting amount is kept; the percentage itself is not stored.
        """
        pct = parse_non_negative_number_or_zero(percentage)
        value = aggregates.amount_from_percentage(model, pct)
        updated = self._replace_category(
            model, category_id, "set_category_percentage", amount=value
        )
        if updated is not model:
            self._audit(AuditEventBuilder.category_updated(category_id, value, percentage=pct))
        return updated

    def apply_category_input(
        self,
        model: BudgetModel,
        category_id: str,
        raw_value: Any,
    ) -> BudgetModel:
        """
        Route a raw field value according to the category's input mode.
        """
        category = model.find_category(category_id)
        if category is None:
            self._audit(AuditEventBuilder.category_not_found(category_id, "apply_category_input"))
            return model

        if category.input_mode is InputMode.AMOUNT:
            return self.set_category_amount(model, category_id, raw_value)
        if category.input_mode is InputMode.PERCENTAGE:
            return self.set_category_percentage(model, category_id, raw_value)
        raise ValueError(f"Unsupported input mode: {category.input_mode}")

    def reset(self) -> BudgetModel:
        """A fresh budget: zero income and the default categories."""
        self._audit(AuditEventBuilder.budget_reset())
        return default_model()

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def percentage_of(self, model: BudgetModel, amount: float) -> float:
        return aggregates.percentage_of(model, amount, self._precision)

    def total_allocated(self, model: BudgetModel) -> float:
        return aggregates.total_allocated(model)

    def remaining(self, model: BudgetModel) -> float:
        return aggregates.remaining(model)

    def allocation_percentage(self, model: BudgetModel) -> float:
        return aggregates.allocation_percentage(model)

    def is_over_budget(self, model: BudgetModel) -> bool:
        return aggregates.is_over_budget(model)

    def display_value(self, model: BudgetModel, category: BudgetCategory) -> Optional[float]:
        return aggregates.display_value(model, category, self._precision)
