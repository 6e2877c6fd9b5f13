"""
Expression Evaluator — вычисление f(x) для строкового выражения

Обёртка над sympy:
- Парсинг строки в sympy-выражение (поддерживаются `^` как степень и
  неявное умножение `2x`, `2(x+1)`)
- Компиляция в Python-функцию через lambdify (модуль math), с кэшем
- Вычисление при заданном x с проверкой результата

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. В область видимости связывается ровно одна переменная — `x`
2. Любая другая переменная, неизвестная функция или недопустимый токен
   (строки, индексация, атрибуты, сравнения) → InvalidExpression ДО eval
   (fail closed, даже если валидация ввода пропустила выражение)
3. Синтаксические ошибки, деление на ноль, выход из области определения,
   комплексный или NaN/Inf результат → InvalidExpression
4. Вычисление детерминировано: одинаковые (expression, x) → одинаковый float
"""

import io
import logging
import tokenize
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Final, Mapping

import sympy as sp
from sympy.parsing.sympy_parser import (
    convert_xor,
    implicit_multiplication,
    parse_expr,
    standard_transformations,
)

from newton_r.core.exceptions import InvalidExpression
from newton_r.core.math.numerical_safeguards import is_valid_float

logger = logging.getLogger(__name__)

# Имя единственной переменной выражения
VARIABLE_NAME: Final[str] = "x"

X_SYMBOL: Final[sp.Symbol] = sp.Symbol(VARIABLE_NAME)

# standard + неявное умножение + `^` как возведение в степень
PARSER_TRANSFORMATIONS: Final[tuple] = standard_transformations + (
    implicit_multiplication,
    convert_xor,
)

# Размер кэша скомпилированных выражений
COMPILED_CACHE_SIZE: Final[int] = 128

# Математические функции, допустимые в выражении (имена sympy)
ALLOWED_FUNCTIONS: Final[frozenset] = frozenset({
    "sin", "cos", "tan",
    "asin", "acos", "atan",
    "sinh", "cosh", "tanh",
    "exp", "log", "sqrt", "abs",
})

# Константы, допустимые в выражении
ALLOWED_CONSTANTS: Final[frozenset] = frozenset({"pi", "E"})

# Операторы: арифметика и скобки
ALLOWED_OPERATORS: Final[frozenset] = frozenset({
    "+", "-", "*", "/", "**", "^", "(", ")",
})

# Служебные токены, не несущие содержимого
_STRUCTURAL_TOKENS: Final[frozenset] = frozenset({
    tokenize.NEWLINE,
    tokenize.NL,
    tokenize.ENDMARKER,
})

# Ошибки вычисления скомпилированной функции (ZeroDivisionError, OverflowError,
# math domain error, комплексный аргумент math-функции)
_EVALUATION_ERRORS = (ArithmeticError, ValueError, TypeError)


# =============================================================================
# COMPILED EXPRESSION
# =============================================================================


@dataclass(frozen=True)
class CompiledExpression:
    """Распарсенное и скомпилированное выражение f(x)."""

    expression: str
    sympy_expr: sp.Expr
    func: Callable[[float], object]

    def __call__(self, x: float) -> float:
        """
        Вычисление f(x).

        Raises:
            InvalidExpression: Ошибка вычисления или невалидный результат
        """
        try:
            value = self.func(x)
        except _EVALUATION_ERRORS as exc:
            raise InvalidExpression(self.expression, str(exc), x=x) from exc

        if isinstance(value, complex):
            raise InvalidExpression(
                self.expression, f"complex result {value!r}", x=x
            )

        try:
            result = float(value)
        except (TypeError, ValueError, OverflowError) as exc:
            raise InvalidExpression(
                self.expression, f"result {value!r} is not a real number", x=x
            ) from exc

        if not is_valid_float(result):
            raise InvalidExpression(
                self.expression, f"non-finite result {result!r}", x=x
            )

        return result


# =============================================================================
# COMPILATION
# =============================================================================


def _check_tokens(expression: str, source: str) -> None:
    """
    Allowlist токенов до передачи строки в parse_expr.

    parse_expr исполняет строку через eval, поэтому сюда доходят только
    числа, арифметические операторы, скобки, `x`, ALLOWED_CONSTANTS и
    вызовы ALLOWED_FUNCTIONS.

    Raises:
        InvalidExpression: Недопустимый токен, посторонняя переменная
            или неизвестная функция
    """
    try:
        tokens = list(tokenize.generate_tokens(io.StringIO(source).readline))
    except (tokenize.TokenError, SyntaxError) as exc:
        raise InvalidExpression(expression, f"cannot parse: {exc}") from exc

    unknown_variables: list[str] = []
    unknown_functions: list[str] = []

    for index, token in enumerate(tokens):
        if token.type in _STRUCTURAL_TOKENS or token.type == tokenize.NUMBER:
            continue
        if token.type == tokenize.OP and token.string in ALLOWED_OPERATORS:
            continue
        if token.type != tokenize.NAME:
            raise InvalidExpression(expression, f"disallowed token {token.string!r}")

        name = token.string
        is_call = index + 1 < len(tokens) and tokens[index + 1].string == "("

        if name == VARIABLE_NAME or name in ALLOWED_CONSTANTS:
            continue
        if name in ALLOWED_FUNCTIONS:
            if not is_call:
                raise InvalidExpression(
                    expression, f"function {name!r} must be called with parentheses"
                )
            continue

        if is_call:
            unknown_functions.append(name)
        else:
            unknown_variables.append(name)

    if unknown_variables:
        names = ", ".join(sorted(set(unknown_variables)))
        raise InvalidExpression(expression, f"unknown variable(s): {names}")
    if unknown_functions:
        names = ", ".join(sorted(set(unknown_functions)))
        raise InvalidExpression(expression, f"unknown function(s): {names}")


def _parse(expression: str) -> sp.Expr:
    """Парсинг строки в sympy-выражение с проверкой переменных."""
    if not expression or not expression.strip():
        raise InvalidExpression(expression, "expression is empty")

    source = expression.strip()
    _check_tokens(expression, source)

    try:
        parsed = parse_expr(
            source,
            local_dict={VARIABLE_NAME: X_SYMBOL},
            transformations=PARSER_TRANSFORMATIONS,
        )
    except Exception as exc:
        # sympy пробрасывает из eval что угодно: SyntaxError, TypeError, ...
        raise InvalidExpression(expression, f"cannot parse: {exc}") from exc

    if not isinstance(parsed, sp.Expr):
        raise InvalidExpression(
            expression, f"not an algebraic expression ({type(parsed).__name__})"
        )

    return parsed


@lru_cache(maxsize=COMPILED_CACHE_SIZE)
def compile_expression(expression: str) -> CompiledExpression:
    """
    Парсинг и компиляция выражения (результат кэшируется по строке).

    Args:
        expression: Выражение f(x), например "x^3 - 7*x"

    Returns:
        CompiledExpression, вызываемый как f(x)

    Raises:
        InvalidExpression: Ошибка синтаксиса, посторонняя переменная,
            неизвестная функция

    Examples:
        >>> compile_expression("x^2 - 4")(3.0)
        5.0
    """
    parsed = _parse(expression)
    func = sp.lambdify(X_SYMBOL, parsed, modules="math")
    logger.debug("Compiled expression %r as %s", expression, parsed)
    return CompiledExpression(expression=expression, sympy_expr=parsed, func=func)


# =============================================================================
# EVALUATION
# =============================================================================


def evaluate(expression: str, x: float) -> float:
    """
    Вычисление выражения при заданном значении x.

    Args:
        expression: Выражение f(x)
        x: Значение переменной

    Returns:
        f(x) как конечный float

    Raises:
        InvalidExpression: Выражение не парсится или не вычисляется при x

    Examples:
        >>> evaluate("x^3 - 7*x", 2.0)
        -6.0
        >>> evaluate("5", 100.0)
        5.0
    """
    return compile_expression(expression)(float(x))


def evaluate_with_scope(expression: str, scope: Mapping[str, float]) -> float:
    """
    Вычисление выражения с явной областью видимости {"x": value}.

    Scope должен содержать ровно одну переменную `x`.

    Raises:
        InvalidExpression: Scope не совпадает с {"x"}, либо ошибка вычисления
    """
    names = set(scope)
    if names != {VARIABLE_NAME}:
        extra = ", ".join(sorted(names - {VARIABLE_NAME})) or "<none>"
        raise InvalidExpression(
            expression,
            f"scope must bind exactly '{VARIABLE_NAME}', got extra: {extra}"
            if VARIABLE_NAME in names
            else f"scope must bind '{VARIABLE_NAME}'",
        )
    return evaluate(expression, scope[VARIABLE_NAME])
