"""Evaluator — вычисление строковых выражений одной переменной (sympy)."""

from .expression_evaluator import (
    VARIABLE_NAME,
    X_SYMBOL,
    CompiledExpression,
    compile_expression,
    evaluate,
    evaluate_with_scope,
)

__all__ = [
    "VARIABLE_NAME",
    "X_SYMBOL",
    "CompiledExpression",
    "compile_expression",
    "evaluate",
    "evaluate_with_scope",
]
