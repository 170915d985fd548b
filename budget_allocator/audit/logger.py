"""
Audit Logger

Every change to the budget is logged as a structured event. This gives:
1. Traceability of what the user changed and when
2. Debugging capability for load fallbacks and storage failures

The audit logger:
- Is synchronous, like the engine it serves
- Never raises (a broken log line must not break a budget edit)
- Supports correlation IDs to trace events from one session
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

from budget_allocator.models.audit import AuditEvent, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """
    Route stdlib logging (which structlog renders through) to stderr.

    Safe to call more than once; only the level is updated afterwards.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", level=numeric_level)
    logging.getLogger("budget_allocator").setLevel(numeric_level)


class AuditLogger:
    """
    Central audit logging service.

    Events go to the structured local log only.
    """

    def __init__(self, correlation_id: Optional[UUID] = None):
        """
        Initialize audit logger.

        Args:
            correlation_id: Attached to every event that has none of its own.
        """
        self._correlation_id = correlation_id
        self._logger = structlog.get_logger("budget_allocator.audit")

    @property
    def correlation_id(self) -> Optional[UUID]:
        return self._correlation_id

    def log(self, event: AuditEvent) -> AuditEvent:
        """
        Log an audit event and return it.
        """
        if event.correlation_id is None and self._correlation_id is not None:
            event = event.model_copy(update={"correlation_id": self._correlation_id})

        log_dict = event.to_log_dict()
        try:
            if event.severity == AuditSeverity.ERROR:
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except (TypeError, ValueError) as e:
            # Unserialisable details; keep the event id at least
            logging.getLogger(__name__).warning(
                "audit_log_failed event_id=%s error=%s", event.event_id, e
            )
        return event


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for one interactive session.
    """
    return uuid4()
