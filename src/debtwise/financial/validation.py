"""Numeric input checks shared by the models and calculators.

Everything here raises ``InvalidInputError`` so bad input is rejected before
any iterative computation starts, instead of surfacing later as NaN.
"""

import math
from numbers import Real

from debtwise.core.exceptions import InvalidInputError


def require_number(name: str, value: object) -> float:
    """Return ``value`` as a finite float or raise InvalidInputError."""
    # bool is a Real subclass but never a meaningful amount
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidInputError(f"{name} must be a number, got {value!r}")
    number = float(value)
    if not math.isfinite(number):
        raise InvalidInputError(f"{name} must be finite, got {value!r}")
    return number


def require_non_negative(name: str, value: object) -> float:
    number = require_number(name, value)
    if number < 0:
        raise InvalidInputError(f"{name} cannot be negative, got {number}")
    return number


def require_positive(name: str, value: object) -> float:
    number = require_number(name, value)
    if number <= 0:
        raise InvalidInputError(f"{name} must be positive, got {number}")
    return number


def require_positive_int(name: str, value: object) -> int:
    """Month counts: positive integers only (floats like 360.0 are accepted)."""
    number = require_positive(name, value)
    if number != int(number):
        raise InvalidInputError(f"{name} must be a whole number of months, got {number}")
    return int(number)
