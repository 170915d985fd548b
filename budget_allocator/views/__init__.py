"""Display data for the view layer."""

from budget_allocator.views.summary import (
    AllocationSegment,
    AllocationSummary,
    build_summary,
    format_currency,
)

__all__ = [
    "AllocationSegment",
    "AllocationSummary",
    "build_summary",
    "format_currency",
]
