"""Shared fixtures for the Budget Allocator tests."""

import itertools

import pytest

from budget_allocator.audit import AuditLogger
from budget_allocator.engine import BudgetEngine
from budget_allocator.models.audit import AuditEvent
from budget_allocator.models.budget import BudgetModel
from budget_allocator.services.storage import InMemoryKeyValueStore


class RecordingAuditLogger(AuditLogger):
    """Audit logger that keeps every event for assertions."""

    def __init__(self):
        super().__init__()
        self.events: list[AuditEvent] = []

    def log(self, event: AuditEvent) -> AuditEvent:
        event = super().log(event)
        self.events.append(event)
        return event

    def types(self) -> list[str]:
        return [event.event_type.value for event in self.events]


@pytest.fixture
def audit_logger() -> RecordingAuditLogger:
    return RecordingAuditLogger()


@pytest.fixture
def engine(audit_logger) -> BudgetEngine:
    """Engine with predictable ids: cat-1, cat-2, ..."""
    counter = itertools.count(1)
    return BudgetEngine(
        audit_logger=audit_logger,
        id_factory=lambda: f"cat-{next(counter)}",
    )


@pytest.fixture
def empty_model() -> BudgetModel:
    return BudgetModel()


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()
