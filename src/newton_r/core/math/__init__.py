"""
Core math modules для Newton-R

Численные примитивы метода Newton-Raphson.
"""

from newton_r.core.math.numerical_safeguards import (
    # Epsilon constants
    DERIVATIVE_STEP_H,
    ZERO_DERIVATIVE_EPS,
    # NaN/Inf checks
    is_below_threshold,
    is_valid_float,
    # Newton primitives
    central_difference,
    newton_step,
    # Validation
    validate_positive,
)

__all__ = [
    # Epsilon constants
    "DERIVATIVE_STEP_H",
    "ZERO_DERIVATIVE_EPS",
    # NaN/Inf checks
    "is_below_threshold",
    "is_valid_float",
    # Newton primitives
    "central_difference",
    "newton_step",
    # Validation
    "validate_positive",
]
