"""
Calculator Engine for SciCalc
Builds the display expression keystroke by keystroke and hands it to the
evaluator on equals
"""
import re
from dataclasses import dataclass
from enum import Enum

import config
import evaluator
import history_manager
from evaluator import AngleMode
from history_manager import HistoryManager

# Characters that end the number currently being typed
_SEGMENT_SPLIT_RE = re.compile(r"([+−×÷^()])")
_OPERAND_BOUNDARIES = "+−×÷^("


class Mode(Enum):
    COMPOSING = "composing"
    RESULT_SHOWN = "result"
    ERROR_SHOWN = "error"


@dataclass(frozen=True)
class DisplayState:
    buffer: str = "0"
    mode: Mode = Mode.COMPOSING

    def __post_init__(self):
        if self.mode == Mode.ERROR_SHOWN:
            if self.buffer != config.DISPLAY_ERROR:
                raise ValueError(f"Error state must show {config.DISPLAY_ERROR!r}, not {self.buffer!r}")
        elif self.buffer in ("", config.DISPLAY_ERROR):
            raise ValueError(f"Invalid display {self.buffer!r} in {self.mode.value} mode")

    def to_dict(self):
        return {"display": self.buffer, "mode": self.mode.value}


INITIAL_STATE = DisplayState()


def _composing(buffer):
    return DisplayState(buffer or "0", Mode.COMPOSING)


def append_token(state, token):
    """Type a digit, operator, parenthesis or constant"""
    if state.mode == Mode.ERROR_SHOWN:
        return state
    if state.mode == Mode.RESULT_SHOWN and token not in config.BINARY_OPERATORS:
        return _composing(token)
    if state.buffer == "0":
        return _composing(token)
    return _composing(state.buffer + token)


def append_function(state, name):
    """Open a function call such as 'sin('"""
    return append_token(state, f"{name}(")


def append_decimal_point(state):
    if state.mode == Mode.ERROR_SHOWN:
        return state
    if state.mode == Mode.RESULT_SHOWN:
        return _composing("0.")

    buffer = state.buffer
    last_part = _SEGMENT_SPLIT_RE.split(buffer)[-1]
    if last_part and "." not in last_part:
        return _composing(buffer + ".")
    if not last_part and buffer and not buffer.endswith("("):
        # '5+' becomes '5+0.'
        return _composing(buffer + "0.")
    return state


def toggle_sign(state):
    """Negate the number being typed, or the whole result on display"""
    if state.mode == Mode.ERROR_SHOWN:
        return state

    buffer = state.buffer
    if state.mode == Mode.RESULT_SHOWN:
        if buffer == "0":
            return _composing(buffer)
        return _composing(buffer[1:] if buffer.startswith("-") else "-" + buffer)

    start = 0
    for i in range(len(buffer) - 1, -1, -1):
        if buffer[i] in _OPERAND_BOUNDARIES:
            start = i + 1
            break
    prefix, operand = buffer[:start], buffer[start:]
    if not operand:
        return state
    if operand.startswith("-"):
        return _composing(prefix + operand[1:])
    return _composing(prefix + "-" + operand)


def square(state):
    if state.mode == Mode.ERROR_SHOWN:
        return state
    return _composing(f"({state.buffer})^2")


def backspace(state):
    if state.mode == Mode.ERROR_SHOWN:
        return state
    if state.mode == Mode.RESULT_SHOWN:
        return clear(state)
    return _composing(state.buffer[:-1])


def clear(state):
    return INITIAL_STATE


def show_result(state, value):
    """Put a previous result back on the display as if just computed"""
    if state.mode == Mode.ERROR_SHOWN:
        return state
    return DisplayState(value, Mode.RESULT_SHOWN)


def calculate(state, angle_mode, ledger, limit=config.MAX_HISTORY_ITEMS):
    """Evaluate the display; returns the new state, the new ledger and the outcome"""
    if state.mode != Mode.COMPOSING:
        return state, ledger, None

    outcome = evaluator.evaluate(state.buffer, angle_mode)
    if not outcome.ok:
        return DisplayState(config.DISPLAY_ERROR, Mode.ERROR_SHOWN), ledger, outcome

    ledger = history_manager.record(ledger, state.buffer, outcome.display, limit)
    return DisplayState(outcome.display, Mode.RESULT_SHOWN), ledger, outcome


class Calculator:
    # Keyboard key -> display glyph typed by that key
    KEY_TOKENS = {
        "+": "+",
        "-": "−",
        "*": "×",
        "/": "÷",
        "^": "^",
        "(": "(",
        ")": ")",
    }

    def __init__(self, angle_mode=config.DEFAULT_ANGLE_MODE, history_limit=config.MAX_HISTORY_ITEMS):
        self.state = INITIAL_STATE
        self.angle_mode = AngleMode(angle_mode)
        self.history = HistoryManager(history_limit)
        self.last_outcome = None

    @property
    def mode(self):
        return self.state.mode

    def get_expression(self):
        """Get current display text"""
        return self.state.buffer

    def add_token(self, token):
        """Add a digit, operator, parenthesis or constant to the expression"""
        self.state = append_token(self.state, token)
        return self.get_expression()

    def add_function(self, name):
        """Add a function such as sin, cos, tan, ln, log or √"""
        self.state = append_function(self.state, name)
        return self.get_expression()

    def add_decimal_point(self):
        self.state = append_decimal_point(self.state)
        return self.get_expression()

    def toggle_sign(self):
        self.state = toggle_sign(self.state)
        return self.get_expression()

    def square(self):
        self.state = square(self.state)
        return self.get_expression()

    def backspace(self):
        """Clear last entry"""
        self.state = backspace(self.state)
        return self.get_expression()

    def clear(self):
        """Clear current expression"""
        self.state = clear(self.state)
        return self.get_expression()

    def calculate(self):
        """Evaluate the current expression and record it in history"""
        state, ledger, outcome = calculate(
            self.state, self.angle_mode, self.history.ledger, self.history.limit)
        self.state = state
        self.history.ledger = ledger
        if outcome is not None:
            self.last_outcome = outcome
        return self.get_expression()

    def toggle_angle_mode(self):
        if self.angle_mode == AngleMode.DEG:
            self.angle_mode = AngleMode.RAD
        else:
            self.angle_mode = AngleMode.DEG
        return self.angle_mode

    def select_history(self, index):
        """Reuse the result of a history entry; False when index is out of range"""
        value = self.history.select(index)
        if value is None:
            return False
        self.state = show_result(self.state, value)
        return True

    def clear_history(self):
        self.history.clear_calculation_history()

    def press_key(self, key):
        """Handle a keyboard key; returns False for keys the calculator ignores"""
        if len(key) == 1 and "0" <= key <= "9":
            self.add_token(key)
        elif key in self.KEY_TOKENS:
            self.add_token(self.KEY_TOKENS[key])
        elif key == ".":
            self.add_decimal_point()
        elif key == "BackSpace" or key == "Backspace":
            self.backspace()
        elif key in ("Enter", "Return", "="):
            self.calculate()
        elif key in ("c", "C", "Escape"):
            self.clear()
        else:
            return False
        return True

    def to_dict(self):
        data = self.state.to_dict()
        data["angle_mode"] = self.angle_mode.value
        data["history"] = self.history.format_calculation_history()
        return data
