"""Validation — проверка сырого ввода формы перед запуском движка."""

from .input_validation import (
    DEFAULT_INPUTS,
    MSG_EMPTY_FUNCTION,
    MSG_FIX_FUNCTION,
    MSG_INVALID_NUMBERS,
    MSG_INVALID_VARIABLE,
    MSG_NON_POSITIVE_ITERATIONS,
    InputDefaults,
    function_error,
    parse_float_prefix,
    parse_inputs,
    parse_int_prefix,
    sanitize_initial_guess,
    sanitize_iterations,
    validate_function,
)

__all__ = [
    "DEFAULT_INPUTS",
    "MSG_EMPTY_FUNCTION",
    "MSG_FIX_FUNCTION",
    "MSG_INVALID_NUMBERS",
    "MSG_INVALID_VARIABLE",
    "MSG_NON_POSITIVE_ITERATIONS",
    "InputDefaults",
    "function_error",
    "parse_float_prefix",
    "parse_inputs",
    "parse_int_prefix",
    "sanitize_initial_guess",
    "sanitize_iterations",
    "validate_function",
]
