"""
Domain models and value objects.

Contains the calculation entities: CalculationInput, IterationRecord,
CalculationResult and the CalculationStatus outcome enum.
"""

from newton_r.core.domain.calculation import (
    CalculationInput,
    CalculationResult,
    CalculationStatus,
    IterationRecord,
)

__all__ = [
    "CalculationInput",
    "CalculationResult",
    "CalculationStatus",
    "IterationRecord",
]
