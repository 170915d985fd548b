"""
Numeric Input Parsing

Every number that reaches the engine from the outside world (form fields,
stored documents) passes through ``parse_non_negative_number_or_zero``.

Policy:
- ints, floats and Decimals are taken as-is
- text is stripped and parsed as a float; empty text is 0
- anything unparseable, None, booleans, NaN and infinities become 0
- negative values are clamped to 0
"""

import math
from decimal import Decimal
from typing import Any


def parse_non_negative_number_or_zero(value: Any) -> float:
    """
    Coerce ``value`` to a finite, non-negative float, or 0.0.

    Examples:
        >>> parse_non_negative_number_or_zero("50000")
        50000.0
        >>> parse_non_negative_number_or_zero("abc")
        0.0
        >>> parse_non_negative_number_or_zero(-5)
        0.0
    """
    if value is None or isinstance(value, bool):
        return 0.0

    if isinstance(value, (int, float, Decimal)):
        try:
            number = float(value)
        except OverflowError:
            return 0.0
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
    else:
        return 0.0

    if not math.isfinite(number) or number <= 0:
        return 0.0
    return number
