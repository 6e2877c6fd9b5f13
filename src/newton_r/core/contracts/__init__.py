"""
Contract Validation Module

Модуль для валидации JSON контрактов между движком и слоем представления.
"""

from .validators import (
    CalculationInputValidator,
    CalculationResultValidator,
    ContractValidator,
    SchemaLoader,
    validate_calculation_input,
    validate_calculation_result,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "CalculationInputValidator",
    "CalculationResultValidator",
    # Functions
    "validate_calculation_input",
    "validate_calculation_result",
]
