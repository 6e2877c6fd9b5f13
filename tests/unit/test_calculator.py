"""
Тесты для Calculator (единая точка входа)

Покрытие:
- SUCCESS для корректного ввода
- ZERO_DERIVATIVE: частичная трасса + сообщение с номером итерации
- INVALID_INPUT: отклонение до любых вычислений
- INVALID_EXPRESSION: ошибка вычисления, без результата
"""

import logging

import pytest

import newton_r.calculator as calculator_module
from newton_r import (
    CalculationInput,
    CalculationStatus,
    NewtonRaphsonConfig,
    OutcomeStatus,
    calculate,
    calculate_input,
)
from newton_r.validation import (
    MSG_EMPTY_FUNCTION,
    MSG_FIX_FUNCTION,
    MSG_INVALID_NUMBERS,
    MSG_INVALID_VARIABLE,
    MSG_NON_POSITIVE_ITERATIONS,
)


# =============================================================================
# SUCCESS
# =============================================================================


class TestSuccess:
    """Корректный ввод"""

    def test_square_root(self):
        outcome = calculate("x^2 - 4", "3", "10")

        assert outcome.status == OutcomeStatus.SUCCESS
        assert outcome.ok
        assert outcome.error_message == ""
        assert outcome.result is not None
        assert outcome.result.status == CalculationStatus.COMPLETED
        assert outcome.result.final_root == pytest.approx(2.0, abs=1e-6)

    def test_default_form_values(self):
        outcome = calculate("x^3 - 7*x", "1.5", "20")

        assert outcome.status in (OutcomeStatus.SUCCESS, OutcomeStatus.ZERO_DERIVATIVE)
        assert outcome.result is not None
        if outcome.status == OutcomeStatus.SUCCESS:
            assert len(outcome.result.iterations) == 20
        else:
            assert outcome.result.final_root is None

    def test_details_mention_iterations(self):
        outcome = calculate("x^2 - 4", "3", "4")
        assert outcome.details.startswith("PASS: 4 iterations")

    def test_calculate_input(self):
        outcome = calculate_input(
            CalculationInput(expression="x^2 - 4", initial_guess=3.0, max_iterations=10)
        )
        assert outcome.status == OutcomeStatus.SUCCESS

    def test_custom_config(self):
        outcome = calculate(
            "x^2 - 4", "3", "10", config=NewtonRaphsonConfig(zero_derivative_threshold=10.0)
        )
        assert outcome.status == OutcomeStatus.ZERO_DERIVATIVE


# =============================================================================
# ZERO DERIVATIVE
# =============================================================================


class TestZeroDerivative:
    """Ранний выход — штатный исход с частичным результатом"""

    def test_constant(self):
        outcome = calculate("5", "1", "20")

        assert outcome.status == OutcomeStatus.ZERO_DERIVATIVE
        assert not outcome.ok
        assert outcome.error_message == (
            "Derivative is zero at iteration 1. Method cannot continue."
        )
        assert outcome.result is not None
        assert outcome.result.iterations == ()
        assert outcome.result.final_root is None


# =============================================================================
# INVALID INPUT
# =============================================================================


class TestInvalidInput:
    """Отклонение ввода до вычислений"""

    def test_other_variable(self):
        outcome = calculate("y + 1", "1", "10")

        assert outcome.status == OutcomeStatus.INVALID_INPUT
        assert outcome.result is None
        assert outcome.error_message == MSG_FIX_FUNCTION
        assert outcome.details == MSG_INVALID_VARIABLE

    def test_empty_function(self):
        outcome = calculate("", "1", "10")
        assert outcome.status == OutcomeStatus.INVALID_INPUT
        assert outcome.details == MSG_EMPTY_FUNCTION

    def test_non_numeric_guess(self):
        outcome = calculate("x^2 - 4", "abc", "10")
        assert outcome.status == OutcomeStatus.INVALID_INPUT
        assert outcome.error_message == MSG_INVALID_NUMBERS

    @pytest.mark.parametrize("iterations", ["0", "-3"])
    def test_non_positive_iterations(self, iterations):
        outcome = calculate("x^2 - 4", "3", iterations)
        assert outcome.status == OutcomeStatus.INVALID_INPUT
        assert outcome.error_message == MSG_NON_POSITIVE_ITERATIONS

    def test_no_evaluation_attempted(self, monkeypatch):
        """Движок не создаётся при невалидном вводе"""

        def fail(*args, **kwargs):
            raise AssertionError("engine must not run on invalid input")

        monkeypatch.setattr(calculator_module, "NewtonRaphsonEngine", fail)

        outcome = calculate("y + 1", "1", "10")
        assert outcome.status == OutcomeStatus.INVALID_INPUT


# =============================================================================
# INVALID EXPRESSION
# =============================================================================


class TestInvalidExpression:
    """Выражение проходит валидацию, но не вычисляется"""

    def test_unbalanced_parentheses(self):
        outcome = calculate("(x + 1", "1", "10")

        assert outcome.status == OutcomeStatus.INVALID_EXPRESSION
        assert outcome.result is None
        assert outcome.error_message.startswith("Error: Invalid function expression")
        assert outcome.details

    def test_domain_error(self):
        outcome = calculate("1/(x - 1)", "1", "10")
        assert outcome.status == OutcomeStatus.INVALID_EXPRESSION
        assert "x=1.0" in outcome.error_message

    @pytest.mark.parametrize("function_input", ["x + ()[0]", "x + {}[1]", "x + [][0]"])
    def test_letter_free_garbage_does_not_crash(self, function_input):
        """Проходит проверку букв, но не является арифметикой"""
        outcome = calculate(function_input, "1.5", "5")

        assert outcome.status == OutcomeStatus.INVALID_EXPRESSION
        assert outcome.result is None
        assert "disallowed token" in outcome.details

    def test_uppercase_x_passes_validation_but_fails_closed(self):
        outcome = calculate("X + 1", "1", "10")
        assert outcome.status == OutcomeStatus.INVALID_EXPRESSION

    def test_failure_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="newton_r"):
            calculate("(x + 1", "1", "10")
        assert "Calculation failed" in caplog.text
