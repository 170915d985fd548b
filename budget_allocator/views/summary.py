"""
Allocation Summary

Everything the view needs to draw the overview card, computed from a
budget without any rendering:
- headline figures (income, allocated, remaining, progress)
- the stacked bar: one segment per funded category, plus unallocated space
- the legend: funded categories by size, plus the unallocated/over-budget line
"""

from typing import Optional

from pydantic import BaseModel, Field

from budget_allocator.engine import aggregates
from budget_allocator.models.budget import BudgetModel


UNALLOCATED_COLOR = "bg-gray-300"
OVER_BUDGET_COLOR = "bg-red-500"


class AllocationSegment(BaseModel):
    """One slice of the stacked bar or one legend row."""

    label: str
    amount: float
    color: str
    category_id: Optional[str] = Field(
        default=None,
        description="None for the unallocated / over-budget entry"
    )
    width_percentage: float = Field(
        default=0.0,
        description="Unrounded share of income, for bar widths"
    )
    percentage: float = Field(
        default=0.0,
        description="Rounded share of income, for labels"
    )


class AllocationSummary(BaseModel):
    """Display data for one budget."""

    monthly_income: float
    total_allocated: float
    remaining: float
    allocation_percentage: float
    progress_value: float
    is_over_budget: bool
    over_budget_by: float = 0.0
    segments: list[AllocationSegment] = Field(default_factory=list)
    legend: list[AllocationSegment] = Field(default_factory=list)

    @property
    def balance_label(self) -> Optional[str]:
        """'Unallocated', 'Over Budget', or None when exactly balanced."""
        if self.remaining > 0:
            return "Unallocated"
        if self.remaining < 0:
            return "Over Budget"
        return None


def _share(model: BudgetModel, amount: float) -> float:
    if model.monthly_income == 0:
        return 0.0
    return amount / model.monthly_income * 100


def build_summary(model: BudgetModel, precision: int = 1) -> AllocationSummary:
    """
    Derive the overview display data for ``model``.
    """
    allocated = aggregates.total_allocated(model)
    left = aggregates.remaining(model)
    used = aggregates.allocation_percentage(model)
    over = aggregates.is_over_budget(model)

    funded = [
        AllocationSegment(
            label=category.name,
            amount=category.amount,
            color=category.color,
            category_id=category.id,
            width_percentage=_share(model, category.amount),
            percentage=aggregates.percentage_of(model, category.amount, precision),
        )
        for category in model.categories
        if category.amount > 0
    ]

    segments = list(funded)
    if left > 0:
        segments.append(AllocationSegment(
            label="Unallocated",
            amount=left,
            color=UNALLOCATED_COLOR,
            width_percentage=_share(model, left),
            percentage=round(_share(model, left), precision),
        ))

    legend = sorted(funded, key=lambda segment: segment.amount, reverse=True)
    if left != 0:
        legend.append(AllocationSegment(
            label="Unallocated" if left > 0 else "Over Budget",
            amount=abs(left),
            color=UNALLOCATED_COLOR if left > 0 else OVER_BUDGET_COLOR,
            width_percentage=_share(model, abs(left)),
            percentage=round(_share(model, abs(left)), precision),
        ))

    return AllocationSummary(
        monthly_income=model.monthly_income,
        total_allocated=allocated,
        remaining=left,
        allocation_percentage=used,
        progress_value=min(used, 100.0),
        is_over_budget=over,
        over_budget_by=round(used - 100, precision) if over else 0.0,
        segments=segments,
        legend=legend,
    )


def format_currency(value: float, symbol: str = "฿") -> str:
    """
    Thousands-separated amount with a currency prefix.

    Whole numbers drop the decimals: 15000 -> '฿15,000', 1234.5 -> '฿1,234.50'.
    Negative values keep their sign in front of the symbol.
    """
    sign = "-" if value < 0 else ""
    magnitude = abs(value)
    if magnitude == int(magnitude):
        body = f"{int(magnitude):,}"
    else:
        body = f"{magnitude:,.2f}"
    return f"{sign}{symbol}{body}"
