"""
Calculator — единая точка входа для слоя представления

Цепочка: сырые поля формы → parse_inputs → NewtonRaphsonEngine → CalculationOutcome

Каждый исход возвращается как значение (исключения таксономии не
выходят наружу), чтобы вызывающий код мог отрисовать их по-разному:
- SUCCESS: все итерации выполнены, есть корень
- ZERO_DERIVATIVE: частичная трасса + пояснение с номером итерации
- INVALID_INPUT: ввод отклонён до вычислений, результата нет
- INVALID_EXPRESSION: выражение не вычисляется, результата нет
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from newton_r.core.domain.calculation import (
    CalculationInput,
    CalculationResult,
    CalculationStatus,
)
from newton_r.core.exceptions import InvalidExpression, InvalidInput
from newton_r.engine import NewtonRaphsonConfig, NewtonRaphsonEngine
from newton_r.validation import parse_inputs

logger = logging.getLogger(__name__)


class OutcomeStatus(str, Enum):
    """Исход вызова калькулятора."""

    SUCCESS = "SUCCESS"
    ZERO_DERIVATIVE = "ZERO_DERIVATIVE"
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_EXPRESSION = "INVALID_EXPRESSION"


@dataclass(frozen=True)
class CalculationOutcome:
    """Результат вызова калькулятора."""

    status: OutcomeStatus

    # None для INVALID_INPUT / INVALID_EXPRESSION
    result: Optional[CalculationResult]

    # Сообщение для пользователя (пустое для SUCCESS)
    error_message: str

    # Детали для диагностики
    details: str = ""

    @property
    def ok(self) -> bool:
        return self.status == OutcomeStatus.SUCCESS


def calculate_input(
    calculation_input: CalculationInput,
    config: Optional[NewtonRaphsonConfig] = None,
) -> CalculationOutcome:
    """Запуск расчёта для провалидированного ввода."""
    engine = NewtonRaphsonEngine(config=config or NewtonRaphsonConfig())

    try:
        result = engine.run_input(calculation_input)
    except InvalidExpression as exc:
        logger.warning("Calculation failed for %r: %s", calculation_input.expression, exc)
        return CalculationOutcome(
            status=OutcomeStatus.INVALID_EXPRESSION,
            result=None,
            error_message=f"Error: {exc}",
            details=exc.reason,
        )

    if result.status == CalculationStatus.ZERO_DERIVATIVE:
        return CalculationOutcome(
            status=OutcomeStatus.ZERO_DERIVATIVE,
            result=result,
            error_message=result.message,
            details=f"{len(result.iterations)} iterations completed before abort",
        )

    return CalculationOutcome(
        status=OutcomeStatus.SUCCESS,
        result=result,
        error_message="",
        details=f"PASS: {len(result.iterations)} iterations, root={result.final_root!r}",
    )


def calculate(
    function_input: str,
    initial_guess: str,
    iterations: str,
    config: Optional[NewtonRaphsonConfig] = None,
) -> CalculationOutcome:
    """
    Полный цикл: валидация сырых полей формы и расчёт.

    Args:
        function_input: Выражение f(x), например "x^3 - 7*x"
        initial_guess: Начальное приближение (строка)
        iterations: Число итераций (строка)
        config: Численные параметры движка (optional)

    Returns:
        CalculationOutcome с одним из четырёх статусов
    """
    try:
        calculation_input = parse_inputs(function_input, initial_guess, iterations)
    except InvalidInput as exc:
        return CalculationOutcome(
            status=OutcomeStatus.INVALID_INPUT,
            result=None,
            error_message=exc.message,
            details=exc.detail or "",
        )

    return calculate_input(calculation_input, config=config)
