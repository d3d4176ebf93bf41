"""
Tests for the calculator input state machine
"""
import pytest

import calculator
from calculator import Calculator, DisplayState, Mode


def composing(buffer):
    return DisplayState(buffer, Mode.COMPOSING)


def result(buffer):
    return DisplayState(buffer, Mode.RESULT_SHOWN)


ERROR = DisplayState("Error", Mode.ERROR_SHOWN)


def type_keys(calc, keys):
    for key in keys:
        assert calc.press_key(key), key
    return calc.get_expression()


class TestDisplayState:
    def test_initial_state(self):
        assert calculator.INITIAL_STATE == composing("0")

    @pytest.mark.parametrize("buffer, mode", [
        ("Error", Mode.COMPOSING),
        ("Error", Mode.RESULT_SHOWN),
        ("5", Mode.ERROR_SHOWN),
        ("", Mode.COMPOSING),
    ])
    def test_illegal_states(self, buffer, mode):
        with pytest.raises(ValueError):
            DisplayState(buffer, mode)


class TestAppendToken:
    def test_replaces_lone_zero(self):
        assert calculator.append_token(composing("0"), "5") == composing("5")

    def test_appends(self):
        assert calculator.append_token(composing("5"), "+") == composing("5+")

    def test_digit_after_result_starts_fresh(self):
        assert calculator.append_token(result("14"), "3") == composing("3")
        assert calculator.append_token(result("14"), "(") == composing("(")

    def test_operator_after_result_continues(self):
        assert calculator.append_token(result("14"), "×") == composing("14×")
        assert calculator.append_token(result("14"), "^") == composing("14^")

    def test_function(self):
        assert calculator.append_function(composing("0"), "sin") == composing("sin(")
        assert calculator.append_function(composing("2×"), "√") == composing("2×√(")
        assert calculator.append_function(result("9"), "log") == composing("log(")

    def test_error_is_absorbing(self):
        assert calculator.append_token(ERROR, "5") == ERROR
        assert calculator.append_function(ERROR, "sin") == ERROR


class TestDecimalPoint:
    def test_appends_to_number(self):
        assert calculator.append_decimal_point(composing("5")) == composing("5.")
        assert calculator.append_decimal_point(composing("1.5+2")) == composing("1.5+2.")

    def test_second_dot_is_ignored(self):
        assert calculator.append_decimal_point(composing("5.")) == composing("5.")
        assert calculator.append_decimal_point(composing("3+1.25")) == composing("3+1.25")

    def test_after_operator_prefixes_zero(self):
        assert calculator.append_decimal_point(composing("5+")) == composing("5+0.")

    def test_after_open_paren_does_nothing(self):
        assert calculator.append_decimal_point(composing("(")) == composing("(")
        assert calculator.append_decimal_point(composing("5×(")) == composing("5×(")

    def test_after_result_starts_fresh(self):
        assert calculator.append_decimal_point(result("14")) == composing("0.")


class TestToggleSign:
    def test_negates_trailing_operand_only(self):
        assert calculator.toggle_sign(composing("5+3")) == composing("5+-3")
        assert calculator.toggle_sign(composing("5+-3")) == composing("5+3")
        assert calculator.toggle_sign(composing("2×(7")) == composing("2×(-7")

    def test_whole_buffer_when_no_operator(self):
        assert calculator.toggle_sign(composing("7")) == composing("-7")
        assert calculator.toggle_sign(composing("-7")) == composing("7")

    def test_nothing_to_negate(self):
        assert calculator.toggle_sign(composing("5+")) == composing("5+")

    def test_result_becomes_input(self):
        assert calculator.toggle_sign(result("4")) == composing("-4")
        assert calculator.toggle_sign(result("-4")) == composing("4")
        assert calculator.toggle_sign(result("0")) == composing("0")

    def test_error(self):
        assert calculator.toggle_sign(ERROR) == ERROR

    def test_negated_operand_still_evaluates(self):
        calc = Calculator()
        type_keys(calc, "5+3")
        calc.toggle_sign()
        assert calc.get_expression() == "5+-3"
        assert calc.calculate() == "2"


class TestEditing:
    def test_square_wraps_buffer(self):
        assert calculator.square(composing("3+1")) == composing("(3+1)^2")
        assert calculator.square(result("4")) == composing("(4)^2")
        assert calculator.square(ERROR) == ERROR

    def test_backspace(self):
        assert calculator.backspace(composing("12")) == composing("1")
        assert calculator.backspace(composing("1")) == composing("0")

    def test_backspace_on_result_clears(self):
        assert calculator.backspace(result("14")) == composing("0")

    def test_backspace_on_error_does_nothing(self):
        assert calculator.backspace(ERROR) == ERROR

    def test_clear_leaves_error(self):
        assert calculator.clear(ERROR) == composing("0")


class TestCalculate:
    def test_success_records_history(self):
        state, ledger, outcome = calculator.calculate(composing("2+2"), "deg", ())
        assert state == result("4")
        assert [str(e) for e in ledger] == ["2+2 = 4"]
        assert outcome.ok

    def test_failure_shows_error(self):
        state, ledger, outcome = calculator.calculate(composing("5÷0"), "deg", ())
        assert state == ERROR
        assert ledger == ()
        assert not outcome.ok

    def test_history_limit(self):
        ledger = ()
        for expression in ("1+1", "2+2", "3+3"):
            _, ledger, _ = calculator.calculate(composing(expression), "deg", ledger, limit=2)
        assert [str(e) for e in ledger] == ["3+3 = 6", "2+2 = 4"]

    @pytest.mark.parametrize("state", [result("4"), ERROR])
    def test_equals_only_from_composing(self, state):
        assert calculator.calculate(state, "deg", ()) == (state, (), None)


class TestCalculator:
    def test_keystrokes_to_result(self):
        calc = Calculator()
        assert type_keys(calc, "2(3+4") == "2(3+4"
        assert type_keys(calc, ["Enter"]) == "14"
        assert calc.mode == Mode.RESULT_SHOWN

    def test_keyboard_glyphs(self):
        calc = Calculator()
        assert type_keys(calc, "8*2/4-1") == "8×2÷4−1"
        assert type_keys(calc, "=") == "3"

    def test_unhandled_key(self):
        calc = Calculator()
        assert calc.press_key("x") is False
        assert calc.press_key("Shift_L") is False
        assert calc.get_expression() == "0"

    def test_clear_and_backspace_keys(self):
        calc = Calculator()
        type_keys(calc, "123")
        type_keys(calc, ["BackSpace"])
        assert calc.get_expression() == "12"
        type_keys(calc, ["Escape"])
        assert calc.get_expression() == "0"

    def test_continue_from_result(self):
        calc = Calculator()
        type_keys(calc, "7*2=")
        assert type_keys(calc, "+1=") == "15"
        assert calc.history.format_calculation_history() == ["14+1 = 15", "7×2 = 14"]

    def test_repeated_equals_records_once(self):
        calc = Calculator()
        type_keys(calc, "2+2==")
        calc.clear()
        type_keys(calc, "2+2=")
        assert len(calc.history) == 1

    def test_history_limit(self):
        calc = Calculator(history_limit=3)
        for n in range(1, 6):
            type_keys(calc, f"{n}+1=")
        assert len(calc.history) == 3
        assert calc.history.format_calculation_history() == ["5+1 = 6", "4+1 = 5", "3+1 = 4"]

    def test_error_until_clear(self):
        calc = Calculator()
        type_keys(calc, "5/0=")
        assert calc.get_expression() == "Error"
        assert calc.mode == Mode.ERROR_SHOWN
        assert calc.last_outcome.reason.value == "NonFiniteResult"
        calc.add_token("5")
        calc.add_decimal_point()
        calc.backspace()
        assert calc.get_expression() == "Error"
        assert calc.clear() == "0"
        assert len(calc.history) == 0

    def test_angle_mode(self):
        calc = Calculator()
        calc.add_function("sin")
        type_keys(calc, "30=")
        assert calc.get_expression() == "0.5"

        assert calc.toggle_angle_mode().value == "rad"
        calc.add_function("sin")
        type_keys(calc, "30=")
        assert calc.get_expression() != "0.5"
        assert calc.toggle_angle_mode().value == "deg"

    def test_select_history(self):
        calc = Calculator()
        type_keys(calc, "6*7=")
        calc.clear()
        assert calc.select_history(0)
        assert calc.get_expression() == "42"
        assert calc.mode == Mode.RESULT_SHOWN
        assert type_keys(calc, "1") == "1"
        assert not calc.select_history(5)

    def test_clear_history(self):
        calc = Calculator()
        type_keys(calc, "1+1=")
        calc.clear_history()
        assert len(calc.history) == 0

    def test_to_dict(self):
        calc = Calculator(angle_mode="rad")
        type_keys(calc, "1+1=")
        assert calc.to_dict() == {
            "display": "2",
            "mode": "result",
            "angle_mode": "rad",
            "history": ["1+1 = 2"],
        }
