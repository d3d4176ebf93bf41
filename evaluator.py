"""
Expression Evaluator for SciCalc
Turns a calculator display string into a number without eval()

1) Repair the raw display: drop one dangling operator or dot, then close any
parentheses the user left open.

2) Tokenize. Numbers, the constants π and e, the functions sin( cos( tan(
ln( log( √( and the operator glyphs are the only accepted tokens.

3) Insert the multiplication the user left implicit: )( , 2π , )π and 2( .

4) Parse by recursive descent into a small tree, with the precedence
power > unary sign > multiply/divide > add/subtract.

5) In degree mode wrap every trig argument in a π/180 scaling, then walk the
tree.
"""
import math
import re
import sys
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Union

import config


class AngleMode(str, Enum):
    DEG = "deg"
    RAD = "rad"


class FailureReason(str, Enum):
    MALFORMED_EXPRESSION = "MalformedExpression"
    NON_FINITE_RESULT = "NonFiniteResult"


class CalculationError(Exception):
    """Raised when the display cannot be tokenized or parsed"""


@dataclass(frozen=True)
class Success:
    value: float
    display: str

    ok = True

    def to_dict(self):
        return {"ok": True, "value": self.value, "display": self.display}


@dataclass(frozen=True)
class Failure:
    reason: FailureReason

    ok = False
    display = config.DISPLAY_ERROR

    def to_dict(self):
        return {"ok": False, "reason": self.reason.value}


EvaluationOutcome = Union[Success, Failure]


# ── Tokens ───────────────────────────────────────────────────────────────────

NUMBER = "number"
CONSTANT = "constant"
FUNCTION = "function"
OPERATOR = "operator"
LPAREN = "lparen"
RPAREN = "rparen"

_TOKEN_RE = re.compile(
    r"""
    (?P<space>\s+)
  | (?P<number>(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+\-]?[0-9]+)?)
  | (?P<function>(?:sin|cos|tan|ln|log|√)\()
  | (?P<constant>[πe])
  | (?P<operator>[+\-−×*÷/^])
  | (?P<lparen>\()
  | (?P<rparen>\))
    """,
    re.VERBOSE,
)

CONSTANTS = {"π": math.pi, "e": math.e}

# Display glyph -> canonical operator
OPERATOR_SYMBOLS = {
    "+": "+",
    "-": "-",
    "−": "-",
    "×": "*",
    "*": "*",
    "÷": "/",
    "/": "/",
    "^": "^",
}

# Function token -> function name in the tree
FUNCTION_NAMES = {
    "sin(": "sin",
    "cos(": "cos",
    "tan(": "tan",
    "ln(": "ln",
    "log(": "log",
    "√(": "sqrt",
}

FUNCTIONS = {
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "ln": math.log,
    "log": math.log10,
    "sqrt": math.sqrt,
}

TRIG_FUNCTIONS = ("sin", "cos", "tan")

# (previous kind, next kind) pairs that get a × between them
_IMPLICIT_MULTIPLICATION = {
    (RPAREN, LPAREN),
    (NUMBER, CONSTANT),
    (RPAREN, CONSTANT),
    (NUMBER, LPAREN),
}


@dataclass(frozen=True)
class Token:
    kind: str
    text: str


# ── Tree ─────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class UnaryOp:
    operator: str
    operand: "Node"


@dataclass(frozen=True)
class BinaryOp:
    operator: str
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class Call:
    function: str
    argument: "Node"


Node = Union[Number, UnaryOp, BinaryOp, Call]


# ── Repair ───────────────────────────────────────────────────────────────────

def trim_dangling_operator(expression: str) -> str:
    """Drop a single trailing operator or dot, so '5+' reads as '5'"""
    if expression and expression[-1] in config.BINARY_OPERATORS + ".":
        return expression[:-1]
    return expression


def close_parentheses(expression: str) -> str:
    """Append the ')' needed to balance every '('"""
    missing = expression.count("(") - expression.count(")")
    return expression + ")" * missing


def prepare(expression: str) -> str:
    return close_parentheses(trim_dangling_operator(expression))


# ── Tokenizer ────────────────────────────────────────────────────────────────

def tokenize(text: str) -> List[Token]:
    tokens = []
    position = 0
    while position < len(text):
        match = _TOKEN_RE.match(text, position)
        if match is None:
            raise CalculationError(f"Unexpected character {text[position]!r} at {position}")
        if match.lastgroup != "space":
            tokens.append(Token(match.lastgroup, match.group()))
        position = match.end()
    return tokens


def insert_implicit_multiplication(tokens: List[Token]) -> List[Token]:
    result: List[Token] = []
    for token in tokens:
        if result and (result[-1].kind, token.kind) in _IMPLICIT_MULTIPLICATION:
            result.append(Token(OPERATOR, "×"))
        result.append(token)
    return result


# ── Parser ───────────────────────────────────────────────────────────────────

class Parser:
    """Recursive descent parser over calculator tokens.

    Grammar:
        expression := term (('+' | '-') term)*
        term       := unary (('*' | '/') unary)*
        unary      := ('+' | '-') unary | power
        power      := primary ('^' unary)?
        primary    := NUMBER | CONSTANT | FUNCTION expression ')'
                    | '(' expression ')'

    Because the exponent of '^' is a unary, '^' is right associative and
    accepts a signed exponent, and an operator directly followed by a sign
    (5+-3) reads as adding a negative number.
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.position = 0
        self.depth = 0

    def parse(self) -> Node:
        if not self.tokens:
            raise CalculationError("Empty expression")
        node = self._expression()
        token = self._peek()
        if token is not None:
            raise CalculationError(f"Unexpected {token.text!r} at token {self.position}")
        return node

    def _peek(self) -> Optional[Token]:
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        return None

    def _advance(self) -> Token:
        token = self._peek()
        if token is None:
            raise CalculationError("Unexpected end of expression")
        self.position += 1
        return token

    def _match_operator(self, *symbols) -> Optional[str]:
        token = self._peek()
        if token is not None and token.kind == OPERATOR:
            symbol = OPERATOR_SYMBOLS[token.text]
            if symbol in symbols:
                self.position += 1
                return symbol
        return None

    def _expect_close(self):
        token = self._advance()
        if token.kind != RPAREN:
            raise CalculationError(f"Expected ')' but found {token.text!r}")

    def _expression(self) -> Node:
        node = self._term()
        while True:
            operator = self._match_operator("+", "-")
            if operator is None:
                return node
            node = BinaryOp(operator, node, self._term())

    def _term(self) -> Node:
        node = self._unary()
        while True:
            operator = self._match_operator("*", "/")
            if operator is None:
                return node
            node = BinaryOp(operator, node, self._unary())

    def _unary(self) -> Node:
        # Every bracket, sign and exponent nests through here
        self.depth += 1
        if self.depth > config.MAX_NESTING_DEPTH:
            raise CalculationError(f"Nested deeper than {config.MAX_NESTING_DEPTH} levels")
        try:
            operator = self._match_operator("+", "-")
            if operator is not None:
                return UnaryOp(operator, self._unary())
            return self._power()
        finally:
            self.depth -= 1

    def _power(self) -> Node:
        base = self._primary()
        if self._match_operator("^"):
            return BinaryOp("^", base, self._unary())
        return base

    def _primary(self) -> Node:
        token = self._advance()
        if token.kind == NUMBER:
            return Number(float(token.text))
        if token.kind == CONSTANT:
            return Number(CONSTANTS[token.text])
        if token.kind == FUNCTION:
            argument = self._expression()
            self._expect_close()
            return Call(FUNCTION_NAMES[token.text], argument)
        if token.kind == LPAREN:
            node = self._expression()
            self._expect_close()
            return node
        raise CalculationError(f"Unexpected {token.text!r}")


def parse(text: str) -> Node:
    """Tokenize and parse an already repaired expression"""
    return Parser(insert_implicit_multiplication(tokenize(text))).parse()


# ── Evaluation ───────────────────────────────────────────────────────────────

def resolve_angles(node: Node, angle_mode: AngleMode) -> Node:
    """Rewrite sin/cos/tan(X) as sin/cos/tan(π/180 × X) in degree mode"""
    if angle_mode == AngleMode.RAD:
        return node
    if isinstance(node, Call):
        argument = resolve_angles(node.argument, angle_mode)
        if node.function in TRIG_FUNCTIONS:
            argument = BinaryOp("*", Number(math.pi / 180), argument)
        return Call(node.function, argument)
    if isinstance(node, BinaryOp):
        return BinaryOp(
            node.operator,
            resolve_angles(node.left, angle_mode),
            resolve_angles(node.right, angle_mode),
        )
    if isinstance(node, UnaryOp):
        return UnaryOp(node.operator, resolve_angles(node.operand, angle_mode))
    return node


def evaluate_tree(node: Node) -> float:
    if isinstance(node, Number):
        return node.value
    if isinstance(node, UnaryOp):
        value = evaluate_tree(node.operand)
        return -value if node.operator == "-" else value
    if isinstance(node, BinaryOp):
        left = evaluate_tree(node.left)
        right = evaluate_tree(node.right)
        if node.operator == "+":
            return left + right
        if node.operator == "-":
            return left - right
        if node.operator == "*":
            return left * right
        if node.operator == "/":
            return left / right
        # math.pow raises instead of returning a complex number for (-8)^(1/3)
        return math.pow(left, right)
    if isinstance(node, Call):
        return FUNCTIONS[node.function](evaluate_tree(node.argument))
    raise CalculationError(f"Unknown node {node!r}")


def format_result(value: float, digits: int = config.SIGNIFICANT_DIGITS) -> str:
    """Round to `digits` significant digits and render the shortest string.

    Output follows how a browser prints numbers: plain digits between 1e-7
    and 1e21, exponent form ('1e+21', '1.5e-7') outside that range.
    """
    rounded = float(f"{value:.{digits}g}")
    if rounded == 0:
        return "0"
    text = repr(rounded)
    mantissa, _, exponent = text.partition("e")
    if exponent and not -7 < int(exponent) < 21:
        return f"{mantissa}e{int(exponent):+d}"
    text = format(Decimal(text), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def evaluate(expression: str, angle_mode=config.DEFAULT_ANGLE_MODE) -> EvaluationOutcome:
    """Evaluate a calculator display string.

    Returns Success(value, display) or Failure(reason); never raises for any
    expression string. `angle_mode` is 'deg' or 'rad'.
    """
    angle_mode = AngleMode(angle_mode)
    try:
        tree = resolve_angles(parse(prepare(expression)), angle_mode)
        value = evaluate_tree(tree)
    except (CalculationError, RecursionError) as e:
        print(f"Calculation Error: {e}", file=sys.stderr)
        return Failure(FailureReason.MALFORMED_EXPRESSION)
    except (ZeroDivisionError, OverflowError, ValueError) as e:
        print(f"Calculation Error: {e}", file=sys.stderr)
        return Failure(FailureReason.NON_FINITE_RESULT)

    if math.isnan(value) or math.isinf(value):
        return Failure(FailureReason.NON_FINITE_RESULT)
    return Success(value, format_result(value))
