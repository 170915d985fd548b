"""
Data Models Package

Pydantic models for the budget document and the audit trail.
"""

from budget_allocator.models.budget import (
    DEFAULT_CATEGORIES,
    PALETTE,
    BudgetCategory,
    BudgetModel,
    InputMode,
    color_for_index,
    default_categories,
    default_model,
)
from budget_allocator.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Budget models
    "DEFAULT_CATEGORIES",
    "PALETTE",
    "BudgetCategory",
    "BudgetModel",
    "InputMode",
    "color_for_index",
    "default_categories",
    "default_model",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
