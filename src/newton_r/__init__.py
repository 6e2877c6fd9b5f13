"""
Newton-R — поиск корней f(x) = 0 методом Newton-Raphson

Компоненты:
- evaluator: вычисление строкового выражения одной переменной x (sympy)
- engine: итерации Newton-Raphson с численной производной и трассой
- validation: проверка сырого ввода формы
- calculator: единая точка входа для слоя представления
"""

from newton_r.calculator import (
    CalculationOutcome,
    OutcomeStatus,
    calculate,
    calculate_input,
)
from newton_r.core.domain import (
    CalculationInput,
    CalculationResult,
    CalculationStatus,
    IterationRecord,
)
from newton_r.core.exceptions import (
    InvalidExpression,
    InvalidInput,
    NonFiniteStep,
    NewtonRaphsonError,
)
from newton_r.engine import (
    NewtonRaphsonConfig,
    NewtonRaphsonEngine,
    run_newton_raphson,
)
from newton_r.evaluator import evaluate, evaluate_with_scope

__version__ = "0.1.0"

__all__ = [
    # Calculator
    "CalculationOutcome",
    "OutcomeStatus",
    "calculate",
    "calculate_input",
    # Domain
    "CalculationInput",
    "CalculationResult",
    "CalculationStatus",
    "IterationRecord",
    # Exceptions
    "InvalidExpression",
    "InvalidInput",
    "NonFiniteStep",
    "NewtonRaphsonError",
    # Engine
    "NewtonRaphsonConfig",
    "NewtonRaphsonEngine",
    "run_newton_raphson",
    # Evaluator
    "evaluate",
    "evaluate_with_scope",
]
