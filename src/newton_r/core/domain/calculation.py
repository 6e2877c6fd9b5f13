"""
Calculation — модели входа и результата расчёта Newton-Raphson

Immutable Pydantic модели:
- CalculationInput: провалидированный ввод (выражение, x0, число итераций)
- IterationRecord: диагностика одного шага (x, f(x), f'(x), x_new)
- CalculationResult: упорядоченная трасса итераций + итоговый корень

Результат создаётся один раз на вызов движка и никогда не изменяется.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


# =============================================================================
# ENUMS
# =============================================================================


class CalculationStatus(str, Enum):
    """Исход расчёта."""

    COMPLETED = "COMPLETED"  # Выполнены все max_iterations шагов
    ZERO_DERIVATIVE = "ZERO_DERIVATIVE"  # |f'(x)| < порога, частичная трасса
    NO_ITERATIONS = "NO_ITERATIONS"  # max_iterations <= 0, цикл не выполнялся


# =============================================================================
# INPUT MODEL
# =============================================================================


class CalculationInput(BaseModel):
    """
    Провалидированный ввод для движка.

    Создаётся слоем валидации (newton_r.validation) из сырых строк.
    Движок не перепроверяет эти поля.
    """

    expression: str = Field(..., min_length=1, description="Выражение f(x)")
    initial_guess: float = Field(..., description="Начальное приближение x0")
    max_iterations: int = Field(..., gt=0, description="Число итераций")

    model_config = {"frozen": True}

    @field_validator("expression")
    @classmethod
    def validate_expression_not_blank(cls, v: str) -> str:
        """Выражение не может состоять только из пробелов"""
        if not v.strip():
            raise ValueError("expression must not be blank")
        return v


# =============================================================================
# ITERATION RECORD
# =============================================================================


class IterationRecord(BaseModel):
    """
    Диагностика одного шага Newton-Raphson.

    x_new = x - fx / fpx
    """

    iteration: int = Field(..., ge=1, description="Номер итерации (с 1)")
    x: float = Field(..., description="Текущее приближение x_n")
    fx: float = Field(..., description="f(x_n)")
    fpx: float = Field(..., description="Численная производная f'(x_n)")
    x_new: float = Field(..., description="Следующее приближение x_{n+1}")

    model_config = {"frozen": True}


# =============================================================================
# CALCULATION RESULT
# =============================================================================


class CalculationResult(BaseModel):
    """
    Результат одного вызова движка.

    Инварианты:
    - iterations упорядочены, номера идут подряд с 1
    - x каждой записи равен x_new предыдущей
    - len(iterations) <= max(requested_iterations, 0)
    - final_root задан тогда и только тогда, когда status == COMPLETED,
      и равен x_new последней записи
    - zero_derivative_iteration задан тогда и только тогда, когда
      status == ZERO_DERIVATIVE, и равен len(iterations) + 1
    """

    status: CalculationStatus = Field(..., description="Исход расчёта")
    iterations: tuple[IterationRecord, ...] = Field(
        default=(), description="Трасса итераций в порядке выполнения"
    )
    final_root: Optional[float] = Field(
        None, description="Итоговое приближение корня (None при раннем выходе)"
    )
    requested_iterations: int = Field(..., description="Запрошенное max_iterations")
    zero_derivative_iteration: Optional[int] = Field(
        None, ge=1, description="Итерация, на которой производная обнулилась"
    )

    model_config = {"frozen": True}

    @field_validator("iterations")
    @classmethod
    def validate_iteration_chain(
        cls, v: tuple[IterationRecord, ...]
    ) -> tuple[IterationRecord, ...]:
        """Проверка порядка номеров и сцепления x_{n+1} == x_new_n"""
        for index, record in enumerate(v, start=1):
            if record.iteration != index:
                raise ValueError(
                    f"iteration records must be consecutive from 1, "
                    f"got {record.iteration} at position {index}"
                )
            if index > 1 and record.x != v[index - 2].x_new:
                raise ValueError(
                    f"record {index} x={record.x} must equal previous "
                    f"x_new={v[index - 2].x_new}"
                )
        return v

    @model_validator(mode="after")
    def validate_status_consistency(self) -> "CalculationResult":
        """Согласованность status, final_root и длины трассы"""
        count = len(self.iterations)

        if count > max(self.requested_iterations, 0):
            raise ValueError(
                f"{count} iterations recorded but only "
                f"{self.requested_iterations} requested"
            )

        if self.status == CalculationStatus.COMPLETED:
            if self.final_root is None:
                raise ValueError("final_root is required for COMPLETED status")
            if count == 0 or count != self.requested_iterations:
                raise ValueError(
                    f"COMPLETED status requires {self.requested_iterations} "
                    f"iterations, got {count}"
                )
            if self.final_root != self.iterations[-1].x_new:
                raise ValueError("final_root must equal x_new of the last iteration")
        elif self.final_root is not None:
            raise ValueError(f"final_root must be None for {self.status.value} status")

        if self.status == CalculationStatus.ZERO_DERIVATIVE:
            if self.zero_derivative_iteration != count + 1:
                raise ValueError(
                    f"zero_derivative_iteration must be {count + 1}, "
                    f"got {self.zero_derivative_iteration}"
                )
        elif self.zero_derivative_iteration is not None:
            raise ValueError(
                f"zero_derivative_iteration must be None for {self.status.value} status"
            )

        if self.status == CalculationStatus.NO_ITERATIONS and self.requested_iterations > 0:
            raise ValueError("NO_ITERATIONS status requires requested_iterations <= 0")

        return self

    @property
    def converged(self) -> bool:
        """True если цикл выполнен полностью и корень получен."""
        return self.status == CalculationStatus.COMPLETED

    @property
    def message(self) -> str:
        """Пояснение для пользователя (пустая строка для COMPLETED)."""
        if self.status == CalculationStatus.ZERO_DERIVATIVE:
            return (
                f"Derivative is zero at iteration {self.zero_derivative_iteration}. "
                f"Method cannot continue."
            )
        if self.status == CalculationStatus.NO_ITERATIONS:
            return "Number of iterations must be greater than 0"
        return ""
