"""
Newton-Raphson Engine — итерационный поиск корня f(x) = 0

Алгоритм (на каждой итерации i = 1..max_iterations):
1. fx  = f(x)
2. fpx = (f(x + h) - f(x - h)) / (2h)          # центральная разность
3. |fpx| < eps → ранний выход ZERO_DERIVATIVE (частичная трасса, без корня)
4. x_new = x - fx / fpx
5. запись {i, x, fx, fpx, x_new}; x = x_new

Цикл всегда выполняет все max_iterations шагов: раннего выхода по
толерантности |x_new - x| нет.

Исходы:
- COMPLETED: все шаги выполнены, final_root = последний x_new
- ZERO_DERIVATIVE: штатный исход, НЕ исключение
- NO_ITERATIONS: max_iterations <= 0, ни одного шага
- InvalidExpression от evaluator: пробрасывается вызывающему коду (фатально)
- NonFiniteStep: x_new = NaN/Inf при конечных f(x), f'(x) (фатально)

Движок stateless: вся изменяемая часть (x, трасса) локальна для run().
"""

import logging
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, Optional

from newton_r.core.domain.calculation import (
    CalculationInput,
    CalculationResult,
    CalculationStatus,
    IterationRecord,
)
from newton_r.core.exceptions import NonFiniteStep
from newton_r.core.math.numerical_safeguards import (
    DERIVATIVE_STEP_H,
    ZERO_DERIVATIVE_EPS,
    central_difference,
    is_below_threshold,
    is_valid_float,
    newton_step,
    validate_positive,
)
from newton_r.evaluator import evaluate

logger = logging.getLogger(__name__)

# evaluate(expression, x) -> float; выбрасывает InvalidExpression
Evaluator = Callable[[str, float], float]


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class NewtonRaphsonConfig:
    """Конфигурация движка.

    Значения по умолчанию фиксированы; изменение имеет смысл только для
    экспериментов с численной устойчивостью.
    """

    # Шаг центральной разности
    derivative_step: float = DERIVATIVE_STEP_H

    # Порог |f'(x)|, ниже которого метод останавливается
    zero_derivative_threshold: float = ZERO_DERIVATIVE_EPS

    def __post_init__(self) -> None:
        validate_positive(self.derivative_step, "derivative_step")
        validate_positive(self.zero_derivative_threshold, "zero_derivative_threshold")


# =============================================================================
# ENGINE
# =============================================================================


@dataclass(frozen=True)
class NewtonRaphsonEngine:
    """Движок Newton-Raphson.

    Зависимости:
    - evaluator: вычисление f(x) (по умолчанию sympy-evaluator)
    - config: численные параметры
    """

    config: NewtonRaphsonConfig = field(default_factory=NewtonRaphsonConfig)
    evaluator: Evaluator = evaluate

    def run(
        self,
        expression: str,
        initial_guess: float,
        max_iterations: int,
    ) -> CalculationResult:
        """Запуск итераций Newton-Raphson.

        Args:
            expression: Выражение f(x)
            initial_guess: Начальное приближение x0
            max_iterations: Число итераций (<= 0 → ни одной итерации)

        Returns:
            CalculationResult с трассой и статусом

        Raises:
            InvalidExpression: Выражение не вычисляется в одной из точек
            NonFiniteStep: f вычислилась, но шаг Ньютона дал NaN/Inf
                (подкласс InvalidExpression; переполнение итерации, а не
                ошибка самого выражения)
        """
        f = partial(self.evaluator, expression)
        h = self.config.derivative_step
        eps = self.config.zero_derivative_threshold

        x = float(initial_guess)
        records: list[IterationRecord] = []

        for i in range(1, max_iterations + 1):
            fx = f(x)
            fpx = central_difference(f, x, h)

            if is_below_threshold(fpx, eps):
                logger.warning(
                    "Derivative is zero at iteration %d (x=%r, f'(x)=%r) for %r",
                    i, x, fpx, expression,
                )
                return CalculationResult(
                    status=CalculationStatus.ZERO_DERIVATIVE,
                    iterations=tuple(records),
                    final_root=None,
                    requested_iterations=max_iterations,
                    zero_derivative_iteration=i,
                )

            x_new = newton_step(x, fx, fpx)
            if not is_valid_float(x_new):
                raise NonFiniteStep(expression, x=x, x_new=x_new, iteration=i)

            records.append(
                IterationRecord(iteration=i, x=x, fx=fx, fpx=fpx, x_new=x_new)
            )
            logger.debug(
                "Iteration %d: x=%r f(x)=%r f'(x)=%r x_new=%r", i, x, fx, fpx, x_new
            )
            x = x_new

        if not records:
            logger.info("No iterations requested (max_iterations=%d)", max_iterations)
            return CalculationResult(
                status=CalculationStatus.NO_ITERATIONS,
                iterations=(),
                final_root=None,
                requested_iterations=max_iterations,
            )

        logger.info(
            "Completed %d iterations for %r: root estimate %r",
            len(records), expression, x,
        )
        return CalculationResult(
            status=CalculationStatus.COMPLETED,
            iterations=tuple(records),
            final_root=x,
            requested_iterations=max_iterations,
        )

    def run_input(self, calculation_input: CalculationInput) -> CalculationResult:
        """Запуск для провалидированного CalculationInput."""
        return self.run(
            calculation_input.expression,
            calculation_input.initial_guess,
            calculation_input.max_iterations,
        )


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def run_newton_raphson(
    expression: str,
    initial_guess: float,
    max_iterations: int,
    config: Optional[NewtonRaphsonConfig] = None,
) -> CalculationResult:
    """
    Newton-Raphson с evaluator по умолчанию.

    Examples:
        >>> result = run_newton_raphson("x^2 - 4", 3.0, 10)
        >>> round(result.final_root, 6)
        2.0
    """
    engine = NewtonRaphsonEngine(config=config or NewtonRaphsonConfig())
    return engine.run(expression, initial_guess, max_iterations)
