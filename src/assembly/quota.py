"""
Exam Prep API - Quota Allocation
Per-exam target counts and request parameter defaults.

Targets are rounded half-up (2.5 -> 3, 8.25 -> 8) independently per exam.
They are not renormalized against base, so the sum of all targets can land
above or below it.
"""
import math
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

DEFAULT_BASE = 25
DEFAULT_MAX = 100


def _positive_int(value: Any, default: int) -> int:
    """Positive integer from a loosely typed value, else the default."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(str(value).strip())
    except ValueError:
        return default
    if not math.isfinite(number):
        return default
    number = int(number)
    return number if number > 0 else default


def resolve_base(value: Any, default: int = DEFAULT_BASE) -> int:
    """Requested base size, or the default when missing / non-positive."""
    return _positive_int(value, default)


def resolve_max(value: Any, default: int = DEFAULT_MAX) -> int:
    """Requested global cap, or the default when missing / non-positive."""
    return _positive_int(value, default)


def compute_target(base: int, weight_percent: Any) -> int:
    """
    Number of questions an exam should contribute.

    Args:
        base: Resolved global base size
        weight_percent: Exam weight, 0-100 (missing / invalid counts as 0)

    Returns:
        round_half_up(base * weight_percent / 100), never negative
    """
    if not weight_percent:
        return 0
    try:
        weight = Decimal(str(weight_percent))
    except (InvalidOperation, ValueError):
        return 0
    if not weight.is_finite():
        return 0

    raw = Decimal(base) * weight / Decimal(100)
    target = int(raw.to_integral_value(rounding=ROUND_HALF_UP))
    return max(target, 0)
