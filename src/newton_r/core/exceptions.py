"""
Exceptions — таксономия ошибок калькулятора Newton-Raphson

Три класса исходов, которые вызывающий код обязан различать:
- InvalidInput: некорректный ввод, отклоняется ДО любых вычислений
- InvalidExpression: выражение не парсится / не вычисляется при данном x
  (подкласс NonFiniteStep: шаг Ньютона переполнился),
  фатально для текущего расчёта
- Zero derivative: НЕ исключение, а штатный статус результата
  (CalculationStatus.ZERO_DERIVATIVE) с частичной трассой итераций
"""

from typing import Optional


class NewtonRaphsonError(Exception):
    """Базовое исключение для всех ошибок калькулятора."""

    pass


class InvalidInput(NewtonRaphsonError, ValueError):
    """
    Некорректный пользовательский ввод (пустое выражение, посторонняя
    переменная, нечисловое начальное приближение или число итераций).

    Attributes:
        message: Сообщение для пользователя (исправимая ошибка)
        detail: Уточнение причины (например, ошибка поля функции)
    """

    def __init__(self, message: str, detail: Optional[str] = None):
        self.message = message
        self.detail = detail
        super().__init__(message if detail is None else f"{message}: {detail}")


class InvalidExpression(NewtonRaphsonError, ValueError):
    """
    Выражение не удалось распарсить или вычислить при заданном x.

    Исходная причина (SyntaxError, ZeroDivisionError, ...) сохраняется
    в __cause__ через `raise ... from exc`.

    Attributes:
        expression: Исходная строка выражения
        x: Значение переменной, при котором произошёл сбой (None для ошибок парсинга)
        reason: Краткое описание причины
    """

    def __init__(self, expression: str, reason: str, x: Optional[float] = None):
        self.expression = expression
        self.reason = reason
        self.x = x
        location = "" if x is None else f" at x={x!r}"
        super().__init__(f"Invalid function expression{location}: {reason}")


class NonFiniteStep(InvalidExpression):
    """
    Шаг Ньютона x - f(x)/f'(x) дал NaN/Inf, хотя f вычислилась успешно.

    Наследует InvalidExpression: расчёт прерывается так же фатально, и
    фасад отдаёт INVALID_EXPRESSION. Отдельный класс отличает
    переполнение итерации от ошибки разбора или вычисления f.

    Attributes:
        iteration: Номер итерации (с 1), на которой произошло переполнение
        x_new: Полученное нечисловое значение
    """

    def __init__(self, expression: str, x: float, x_new: float, iteration: int):
        self.iteration = iteration
        self.x_new = x_new
        super().__init__(
            expression,
            f"Newton step at iteration {iteration} produced non-finite value {x_new!r}",
            x=x,
        )
