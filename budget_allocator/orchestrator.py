"""
Main Orchestrator for the Budget Allocator

Ties the engine, persistence and audit logging together for one
interactive session.

DESIGN DECISION: The engine is stateless; the session is the single
owner of the current budget. Edits replace the session's model with the
one the engine returns. Saving, loading and resetting are explicit
actions on the whole budget.
"""

from typing import Any, Optional, Union

from budget_allocator.audit import AuditLogger, configure_logging, create_correlation_id
from budget_allocator.config import Settings, get_settings
from budget_allocator.engine import BudgetEngine
from budget_allocator.models.budget import (
    BudgetCategory,
    BudgetModel,
    InputMode,
    default_model,
)
from budget_allocator.services.persistence import BudgetPersistence
from budget_allocator.services.storage import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
)
from budget_allocator.views import AllocationSummary, build_summary


class BudgetSession:
    """
    Holds the current budget for one user session.

    Flow:
    1. Load → saved budget, or defaults
    2. Edit → income, categories, amounts, percentages, modes
    3. Save → whole budget to the store (user action)
    4. Reset → defaults in memory, saved copy removed
    """

    def __init__(
        self,
        engine: BudgetEngine,
        persistence: BudgetPersistence,
        model: Optional[BudgetModel] = None,
        percentage_precision: int = 1,
    ):
        self._engine = engine
        self._persistence = persistence
        self._model = model if model is not None else default_model()
        self._precision = percentage_precision

    @property
    def model(self) -> BudgetModel:
        return self._model

    @property
    def categories(self) -> list[BudgetCategory]:
        return self._model.categories

    # Edits

    def set_income(self, value: Any) -> BudgetModel:
        self._model = self._engine.set_income(self._model, value)
        return self._model

    def add_category(self, name: Optional[str]) -> list[BudgetCategory]:
        """Add a category; returns the updated category list."""
        self._model = self._engine.add_category(self._model, name)
        return self._model.categories

    def remove_category(self, category_id: str) -> BudgetModel:
        self._model = self._engine.remove_category(self._model, category_id)
        return self._model

    def set_input_mode(self, category_id: str, mode: Union[InputMode, str]) -> BudgetModel:
        self._model = self._engine.set_input_mode(self._model, category_id, mode)
        return self._model

    def set_category_amount(self, category_id: str, amount: Any) -> BudgetModel:
        self._model = self._engine.set_category_amount(self._model, category_id, amount)
        return self._model

    def set_category_percentage(self, category_id: str, percentage: Any) -> BudgetModel:
        self._model = self._engine.set_category_percentage(self._model, category_id, percentage)
        return self._model

    def apply_category_input(self, category_id: str, raw_value: Any) -> BudgetModel:
        self._model = self._engine.apply_category_input(self._model, category_id, raw_value)
        return self._model

    # Queries

    def percentage_of(self, amount: float) -> float:
        return self._engine.percentage_of(self._model, amount)

    def display_value(self, category: BudgetCategory) -> Optional[float]:
        return self._engine.display_value(self._model, category)

    def summary(self) -> AllocationSummary:
        return build_summary(self._model, self._precision)

    # Whole-budget actions

    def save(self) -> None:
        """
        Raises:
            StorageError: If the store cannot be written
        """
        self._persistence.save(self._model)

    def load(self) -> bool:
        """
        Replace the current budget with the saved one.

        Returns:
            True if a saved budget was found. When False the session
            falls back to the default budget.
        """
        loaded = self._persistence.load()
        self._model = loaded if loaded is not None else default_model()
        return loaded is not None

    def reset(self) -> BudgetModel:
        """
        Back to defaults, and remove the saved copy.

        Raises:
            StorageError: If the saved copy cannot be removed
        """
        self._model = self._engine.reset()
        self._persistence.clear()
        return self._model


def create_store(settings: Optional[Settings] = None) -> KeyValueStore:
    """Build the key-value store selected by the storage settings."""
    storage_settings = (settings or get_settings()).storage
    if storage_settings.backend == "memory":
        return InMemoryKeyValueStore()
    return JsonFileKeyValueStore(
        storage_settings.file_path,
        retry_attempts=storage_settings.retry_attempts,
    )


def create_app_components(
    store: Optional[KeyValueStore] = None,
    settings: Optional[Settings] = None,
    load_saved: bool = True,
) -> BudgetSession:
    """
    Factory function to create a wired session.

    Args:
        store: Key-value store to use. Built from settings when None.
        settings: Settings to use. Defaults to get_settings().
        load_saved: Load the saved budget into the session.

    Returns:
        A BudgetSession holding the saved budget or the defaults
    """
    settings = settings or get_settings()
    configure_logging(settings.app.log_level)

    precision = settings.display.percentage_precision
    audit_logger = AuditLogger(correlation_id=create_correlation_id())
    engine = BudgetEngine(audit_logger=audit_logger, percentage_precision=precision)
    persistence = BudgetPersistence(
        store if store is not None else create_store(settings),
        key=settings.storage.document_key,
        audit_logger=audit_logger,
    )

    session = BudgetSession(engine, persistence, percentage_precision=precision)
    if load_saved:
        session.load()
    return session
