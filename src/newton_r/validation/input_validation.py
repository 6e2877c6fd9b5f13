"""
Input Validation — защита перед движком Newton-Raphson

Сырые строки формы (функция, начальное приближение, число итераций)
превращаются в CalculationInput либо отклоняются через InvalidInput
до начала любых вычислений.

Правила:
- Функция: непустая, без латинских букв кроме `x` (регистр не важен)
- Начальное приближение: префиксный разбор числа (как parseFloat)
- Число итераций: префиксный разбор целого (как parseInt), строго > 0
- Нормализация при потере фокуса: нечисловой ввод → fallback ("0"),
  число итераций → floor(abs(n))
"""

import logging
import math
import re
from dataclasses import dataclass
from typing import Final, Optional

from pydantic import ValidationError

from newton_r.core.domain.calculation import CalculationInput
from newton_r.core.exceptions import InvalidInput

logger = logging.getLogger(__name__)

# =============================================================================
# СООБЩЕНИЯ ОБ ОШИБКАХ
# =============================================================================

MSG_EMPTY_FUNCTION: Final[str] = "Unexpected end after undefined"
MSG_INVALID_VARIABLE: Final[str] = "any variables other than x is not allowed"
MSG_FIX_FUNCTION: Final[str] = "Please fix the function input errors"
MSG_INVALID_NUMBERS: Final[str] = "Please ensure all inputs are valid numbers"
MSG_NON_POSITIVE_ITERATIONS: Final[str] = "Number of iterations must be greater than 0"

# Любая латинская буква, кроме x/X
_INVALID_LETTERS_RE: Final[re.Pattern] = re.compile(r"[a-wyzA-WYZ]")

# Префикс вещественного числа (parseFloat)
_FLOAT_PREFIX_RE: Final[re.Pattern] = re.compile(
    r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
)

# Префикс целого числа (parseInt, основание 10)
_INT_PREFIX_RE: Final[re.Pattern] = re.compile(r"[+-]?\d+")

# parseInt без radix читает "0x"/"0X" как шестнадцатеричное число
_HEX_PREFIX_RE: Final[re.Pattern] = re.compile(r"([+-]?)0[xX]([0-9a-fA-F]*)")


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class InputDefaults:
    """Значения полей формы по умолчанию и fallback для нечислового ввода."""

    function_input: str = "x^3 - 7*x"
    initial_guess: str = "1.5"
    iterations: str = "20"

    # Подставляется вместо нечислового значения при нормализации поля
    fallback_number: str = "0"


DEFAULT_INPUTS: Final[InputDefaults] = InputDefaults()


# =============================================================================
# РАЗБОР ЧИСЕЛ
# =============================================================================


def parse_float_prefix(text: str) -> Optional[float]:
    """
    Разбор самого длинного числового префикса (семантика parseFloat).

    Returns:
        float или None, если префикс не является числом

    Examples:
        >>> parse_float_prefix("  1.5abc")
        1.5
        >>> parse_float_prefix("-.5e2")
        -50.0
        >>> parse_float_prefix("abc") is None
        True
    """
    match = _FLOAT_PREFIX_RE.match(text.lstrip())
    if match is None:
        return None
    token = match.group(0).replace("Infinity", "inf")
    return float(token)


def parse_int_prefix(text: str) -> Optional[int]:
    """
    Разбор целого префикса (семантика parseInt без radix).

    Основание 10, кроме префикса "0x"/"0X": тогда основание 16, а "0x"
    без шестнадцатеричных цифр не является числом.

    Examples:
        >>> parse_int_prefix("20.9")
        20
        >>> parse_int_prefix(" -7 steps")
        -7
        >>> parse_int_prefix("0x10")
        16
        >>> parse_int_prefix("x") is None
        True
    """
    stripped = text.lstrip()

    hex_match = _HEX_PREFIX_RE.match(stripped)
    if hex_match is not None:
        sign, digits = hex_match.groups()
        if not digits:
            return None
        value = int(digits, 16)
        return -value if sign == "-" else value

    match = _INT_PREFIX_RE.match(stripped)
    if match is None:
        return None
    return int(match.group(0))


# =============================================================================
# ВАЛИДАЦИЯ ФУНКЦИИ
# =============================================================================


def function_error(expression: str) -> str:
    """
    Текст ошибки для поля функции (пустая строка, если ошибок нет).

    Examples:
        >>> function_error("x^3 - 7*x")
        ''
        >>> function_error("y + 1")
        'any variables other than x is not allowed'
    """
    if expression.strip() == "":
        return MSG_EMPTY_FUNCTION
    if _INVALID_LETTERS_RE.search(expression):
        return MSG_INVALID_VARIABLE
    return ""


def validate_function(expression: str) -> None:
    """
    Валидация выражения функции.

    Raises:
        InvalidInput: Пустое выражение или переменная, отличная от x
    """
    error = function_error(expression)
    if error:
        raise InvalidInput(error)


# =============================================================================
# НОРМАЛИЗАЦИЯ ПОЛЕЙ
# =============================================================================


def sanitize_initial_guess(text: str, defaults: InputDefaults = DEFAULT_INPUTS) -> str:
    """Нормализация поля начального приближения: нечисловое → fallback."""
    if text.strip() == "" or parse_float_prefix(text) is None:
        return defaults.fallback_number
    return text


def sanitize_iterations(text: str, defaults: InputDefaults = DEFAULT_INPUTS) -> str:
    """
    Нормализация поля числа итераций: нечисловое → fallback,
    иначе floor(abs(n)).

    Examples:
        >>> sanitize_iterations("-12")
        '12'
        >>> sanitize_iterations("abc")
        '0'
    """
    if text.strip() == "":
        return defaults.fallback_number
    parsed = parse_int_prefix(text)
    if parsed is None:
        return defaults.fallback_number
    return str(math.floor(abs(parsed)))


# =============================================================================
# СБОРКА ВВОДА
# =============================================================================


def parse_inputs(
    function_input: str,
    initial_guess: str,
    iterations: str,
) -> CalculationInput:
    """
    Проверка сырых полей и сборка CalculationInput.

    Порядок проверок:
    1. Функция (пустая / посторонние переменные)
    2. Числа (x0 и число итераций разбираются как числа)
    3. Число итераций > 0

    Raises:
        InvalidInput: На первой же нарушенной проверке
    """
    error = function_error(function_input)
    if error:
        logger.warning("Rejected function input %r: %s", function_input, error)
        raise InvalidInput(MSG_FIX_FUNCTION, detail=error)

    x0 = parse_float_prefix(initial_guess)
    max_iterations = parse_int_prefix(iterations)

    if x0 is None or max_iterations is None:
        logger.warning(
            "Rejected numeric inputs: initial_guess=%r iterations=%r",
            initial_guess, iterations,
        )
        raise InvalidInput(MSG_INVALID_NUMBERS)

    if max_iterations <= 0:
        logger.warning("Rejected iterations=%d", max_iterations)
        raise InvalidInput(MSG_NON_POSITIVE_ITERATIONS)

    try:
        return CalculationInput(
            expression=function_input,
            initial_guess=x0,
            max_iterations=max_iterations,
        )
    except ValidationError as exc:
        raise InvalidInput(MSG_INVALID_NUMBERS, detail=str(exc)) from exc
