"""
Audit Models for the Budget Allocator

Every change to the budget and every persistence action produces an
audit event. Events are emitted to the structured log only; they are
not persisted and cannot be replayed.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """
    Types of events we audit.
    """
    # Budget edits
    INCOME_SET = "income_set"
    CATEGORY_ADDED = "category_added"
    CATEGORY_REMOVED = "category_removed"
    CATEGORY_UPDATED = "category_updated"
    INPUT_MODE_CHANGED = "input_mode_changed"
    CATEGORY_REJECTED = "category_rejected"
    CATEGORY_NOT_FOUND = "category_not_found"
    BUDGET_RESET = "budget_reset"

    # Persistence
    BUDGET_SAVED = "budget_saved"
    BUDGET_LOADED = "budget_loaded"
    BUDGET_CLEARED = "budget_cleared"
    LOAD_FALLBACK = "load_fallback"

    # System events
    STORAGE_ERROR = "storage_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'category', 'budget')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - one interactive session
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate events from the same session"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.income_set(50000.0)
        event = AuditEventBuilder.category_added("rent", "Rent/Housing", correlation_id)
    """

    @staticmethod
    def income_set(
        monthly_income: float,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INCOME_SET,
            severity=AuditSeverity.DEBUG,
            entity_type="budget",
            correlation_id=correlation_id,
            description=f"Monthly income set to {monthly_income:g}",
            details={"monthly_income": monthly_income},
        )

    @staticmethod
    def category_added(
        category_id: str,
        name: str,
        color: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_ADDED,
            entity_type="category",
            entity_id=category_id,
            correlation_id=correlation_id,
            description=f"Category added: {name}",
            details={"name": name, "color": color},
        )

    @staticmethod
    def category_rejected(
        raw_name: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_REJECTED,
            severity=AuditSeverity.DEBUG,
            entity_type="category",
            correlation_id=correlation_id,
            description="Blank category name ignored",
            details={"raw_name": raw_name},
        )

    @staticmethod
    def category_removed(
        category_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_REMOVED,
            entity_type="category",
            entity_id=category_id,
            correlation_id=correlation_id,
            description=f"Category removed: {category_id}",
        )

    @staticmethod
    def category_updated(
        category_id: str,
        amount: float,
        percentage: Optional[float] = None,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        details: dict[str, Any] = {"amount": amount}
        if percentage is not None:
            details["percentage"] = percentage
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_UPDATED,
            severity=AuditSeverity.DEBUG,
            entity_type="category",
            entity_id=category_id,
            correlation_id=correlation_id,
            description=f"Category {category_id} amount set to {amount:g}",
            details=details,
        )

    @staticmethod
    def input_mode_changed(
        category_id: str,
        mode: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INPUT_MODE_CHANGED,
            severity=AuditSeverity.DEBUG,
            entity_type="category",
            entity_id=category_id,
            correlation_id=correlation_id,
            description=f"Category {category_id} switched to {mode} input",
            details={"input_mode": mode},
        )

    @staticmethod
    def category_not_found(
        category_id: str,
        operation: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_NOT_FOUND,
            severity=AuditSeverity.DEBUG,
            entity_type="category",
            entity_id=category_id,
            correlation_id=correlation_id,
            description=f"Unknown category id ignored by {operation}",
            details={"operation": operation, "found": False},
        )

    @staticmethod
    def budget_reset(correlation_id: Optional[UUID] = None) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_RESET,
            entity_type="budget",
            correlation_id=correlation_id,
            description="Budget reset to defaults",
        )

    @staticmethod
    def budget_saved(
        key: str,
        category_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_SAVED,
            entity_type="budget",
            entity_id=key,
            correlation_id=correlation_id,
            description=f"Budget saved with {category_count} categories",
            details={"category_count": category_count},
        )

    @staticmethod
    def budget_loaded(
        key: str,
        category_count: int,
        dropped: int = 0,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_LOADED,
            entity_type="budget",
            entity_id=key,
            correlation_id=correlation_id,
            description=f"Budget loaded with {category_count} categories",
            details={"category_count": category_count, "dropped_entries": dropped},
        )

    @staticmethod
    def budget_cleared(
        key: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_CLEARED,
            entity_type="budget",
            entity_id=key,
            correlation_id=correlation_id,
            description="Saved budget removed from storage",
        )

    @staticmethod
    def load_fallback(
        key: str,
        reason: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOAD_FALLBACK,
            severity=AuditSeverity.WARNING,
            entity_type="budget",
            entity_id=key,
            correlation_id=correlation_id,
            description=f"Stored budget unusable, falling back to defaults: {reason}",
            details={"reason": reason},
        )

    @staticmethod
    def storage_error(
        operation: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            entity_type="store",
            correlation_id=correlation_id,
            description=f"Storage error during {operation}",
            error_message=error_message,
            details={"operation": operation},
        )
