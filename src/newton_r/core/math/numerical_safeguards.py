"""
Numerical Safeguards — численные примитивы метода Newton-Raphson

Модуль обеспечивает численную устойчивость шага Ньютона:
- Epsilon-параметры: шаг центральной разности и порог "нулевой" производной
- NaN/Inf проверки для значений функции
- Центральная разностная производная
- Шаг Ньютона x_new = x - f(x) / f'(x)
- Валидация параметров конфигурации

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление на производную выполняется только после проверки |f'(x)| >= порога
2. Порог сравнивается строго: |f'(x)| < eps → производная считается нулевой
3. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Callable, Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Шаг h для центральной разности: f'(x) ≈ (f(x+h) - f(x-h)) / (2h)
DERIVATIVE_STEP_H: Final[float] = 1e-7

# Порог производной: при |f'(x)| < ZERO_DERIVATIVE_EPS метод останавливается
ZERO_DERIVATIVE_EPS: Final[float] = 1e-12


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение валидное (finite), False если NaN или Inf
    """
    return math.isfinite(value)


def is_below_threshold(value: float, eps: float = ZERO_DERIVATIVE_EPS) -> bool:
    """
    Строгая проверка |value| < eps.

    В отличие от is_close, граница не включается: |value| == eps
    считается допустимым значением.

    Examples:
        >>> is_below_threshold(0.0)
        True
        >>> is_below_threshold(1e-12)
        False
        >>> is_below_threshold(-1e-13)
        True
    """
    return abs(value) < eps


# =============================================================================
# ПРОИЗВОДНАЯ И ШАГ НЬЮТОНА
# =============================================================================


def central_difference(
    func: Callable[[float], float],
    x: float,
    h: float = DERIVATIVE_STEP_H,
) -> float:
    """
    Численная производная центральной разностью.

    f'(x) ≈ (f(x + h) - f(x - h)) / (2h)

    Порядок вычислений фиксирован (сначала x+h, затем x-h), поэтому результат
    воспроизводим бит-в-бит при одинаковых входах.

    Args:
        func: Функция одной переменной
        x: Точка дифференцирования
        h: Шаг разности (default: DERIVATIVE_STEP_H)

    Returns:
        Оценка f'(x)

    Raises:
        ValueError: Если h <= 0
        Любое исключение func пробрасывается без изменений

    Examples:
        >>> round(central_difference(lambda t: t * t, 3.0), 6)
        6.0
    """
    validate_positive(h, "h")

    f_plus = func(x + h)
    f_minus = func(x - h)
    return (f_plus - f_minus) / (2 * h)


def newton_step(x: float, fx: float, fpx: float) -> float:
    """
    Шаг Newton-Raphson: x_new = x - f(x) / f'(x).

    Вызывающий код обязан предварительно проверить fpx через
    is_below_threshold; здесь деление не защищается.

    Examples:
        >>> newton_step(3.0, 5.0, 6.0)
        2.1666666666666665
    """
    return x - fx / fpx


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_positive(value: float, name: str) -> None:
    """
    Валидация, что значение положительное и конечное.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Raises:
        ValueError: Если value <= 0 или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
