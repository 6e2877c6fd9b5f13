"""Engine — итерационный поиск корня методом Newton-Raphson."""

from .newton_raphson import (
    Evaluator,
    NewtonRaphsonConfig,
    NewtonRaphsonEngine,
    run_newton_raphson,
)

__all__ = [
    "Evaluator",
    "NewtonRaphsonConfig",
    "NewtonRaphsonEngine",
    "run_newton_raphson",
]
