"""
Budget Persistence

Saves and loads the whole budget as one JSON document under a fixed key:

    {
      "monthlyIncome": 50000,
      "categories": [
        {"id": "rent", "name": "Rent/Housing", "amount": 15000,
         "color": "bg-red-500", "inputMode": "percentage"},
        ...
      ]
    }

DESIGN DECISION: Loading never fails. A missing or unreadable document
means "no data"; a document with bad fields falls back field by field:
- monthlyIncome missing or invalid -> 0
- categories missing or not a list -> the default categories
- individual category entries that fail validation are dropped
"""

import json
from typing import Any, Optional

from pydantic import ValidationError

from budget_allocator.audit import AuditLogger
from budget_allocator.engine.parsing import parse_non_negative_number_or_zero
from budget_allocator.models.audit import AuditEventBuilder
from budget_allocator.models.budget import (
    BudgetCategory,
    BudgetModel,
    default_categories,
)
from budget_allocator.services.storage import KeyValueStore, StorageError


DEFAULT_DOCUMENT_KEY = "budgetCalculator"


class BudgetPersistence:
    """
    Serializes a BudgetModel to and from a key-value store.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str = DEFAULT_DOCUMENT_KEY,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._key = key
        self._audit_logger = audit_logger

    @property
    def key(self) -> str:
        return self._key

    def _audit(self, event) -> None:
        if self._audit_logger:
            self._audit_logger.log(event)

    def save(self, model: BudgetModel) -> None:
        """
        Write the whole budget, replacing any previous document.

        Raises:
            StorageError: If the store cannot be written
        """
        document = json.dumps(model.to_document())
        try:
            self._store.set(self._key, document)
        except StorageError as e:
            self._audit(AuditEventBuilder.storage_error("save", str(e)))
            raise
        self._audit(AuditEventBuilder.budget_saved(self._key, len(model.categories)))

    def load(self) -> Optional[BudgetModel]:
        """
        Read the saved budget.

        Returns:
            The budget, or None when nothing usable is stored
        """
        try:
            raw = self._store.get(self._key)
        except StorageError as e:
            self._audit(AuditEventBuilder.storage_error("load", str(e)))
            return None

        if raw is None:
            return None

        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, TypeError, RecursionError) as e:
            self._audit(AuditEventBuilder.load_fallback(self._key, f"invalid JSON: {e}"))
            return None

        if not isinstance(data, dict):
            self._audit(AuditEventBuilder.load_fallback(self._key, "document is not an object"))
            return None

        income = parse_non_negative_number_or_zero(data.get("monthlyIncome"))
        categories, dropped = self._parse_categories(data.get("categories"))

        model = BudgetModel(monthly_income=income, categories=categories)
        self._audit(AuditEventBuilder.budget_loaded(self._key, len(categories), dropped))
        return model

    def clear(self) -> None:
        """
        Delete the saved budget.

        Raises:
            StorageError: If the store cannot be written
        """
        try:
            self._store.remove(self._key)
        except StorageError as e:
            self._audit(AuditEventBuilder.storage_error("clear", str(e)))
            raise
        self._audit(AuditEventBuilder.budget_cleared(self._key))

    def _parse_categories(self, raw: Any) -> tuple[list[BudgetCategory], int]:
        """Validated categories from the stored list, and how many entries were dropped."""
        if not isinstance(raw, list):
            if raw is not None:
                self._audit(AuditEventBuilder.load_fallback(self._key, "categories is not a list"))
            return default_categories(), 0

        categories: list[BudgetCategory] = []
        seen: set[str] = set()
        dropped = 0
        for entry in raw:
            try:
                category = BudgetCategory.model_validate(entry)
            except ValidationError as e:
                dropped += 1
                self._audit(AuditEventBuilder.load_fallback(
                    self._key, f"invalid category entry dropped: {e.error_count()} errors"
                ))
                continue
            if category.id in seen:
                dropped += 1
                self._audit(AuditEventBuilder.load_fallback(
                    self._key, f"duplicate category id dropped: {category.id}"
                ))
                continue
            seen.add(category.id)
            categories.append(category)

        return categories, dropped
