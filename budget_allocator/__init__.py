"""
Budget Allocator - Source Package

Allocate a monthly income across named spending categories, each
entered either as a fixed amount or as a percentage of income.

DESIGN PRINCIPLES:
1. Amounts are stored, percentages are derived
2. Every input has a defined result (bad numbers become 0)
3. The engine holds no state; the session owns the budget
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Budget Allocator Team"
