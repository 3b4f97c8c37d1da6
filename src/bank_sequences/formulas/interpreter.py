"""Formula evaluation with variable substitution.

Bound names are replaced as whole words by their values, then the
resulting arithmetic expression is evaluated by walking its syntax tree.
Only numbers, arithmetic operators, parentheses and a few math helpers
are allowed; anything else is an evaluation error.
"""

import ast
import math
import numbers
import operator
import re
from typing import Mapping, Union

Number = Union[int, float]

# Integer powers whose result would exceed this many bits are refused
MAX_POWER_BITS = 10000


def _power(base, exponent):
    if (isinstance(base, numbers.Integral) and isinstance(exponent, numbers.Integral)
            and abs(base) > 1 and exponent * int(base).bit_length() > MAX_POWER_BITS):
        raise OverflowError(f"integer power exceeds {MAX_POWER_BITS} bits")
    return operator.pow(base, exponent)


_BINARY_OPERATORS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
    ast.Pow: _power,
}

_UNARY_OPERATORS = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}

FUNCTIONS = {
    'abs': abs,
    'min': min,
    'max': max,
    'round': round,
    'sqrt': math.sqrt,
    'floor': math.floor,
    'ceil': math.ceil,
}

CONSTANTS = {
    'pi': math.pi,
    'e': math.e,
}


class FormulaEvaluationError(ValueError):
    """Raised when a formula cannot be parsed or evaluated."""

    def __init__(self, formula: str, reason: str):
        self.formula = formula
        self.reason = reason
        super().__init__(f"Invalid formula or evaluation error: {reason} (formula: {formula!r})")


def substitute(formula: str, bindings: Mapping[str, Number]) -> str:
    """Replace whole-word occurrences of each bound name with its value.

    Examples
    --------
    >>> substitute('x/1 + y', {'x': 4, 'y': 6})
    '(4)/1 + (6)'
    """
    processed = formula
    for name, value in bindings.items():
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise FormulaEvaluationError(formula, f"value for '{name}' is not a number: {value!r}")
        literal = int(value) if isinstance(value, numbers.Integral) else float(value)
        pattern = re.compile(rf"\b{re.escape(name)}\b")
        processed = pattern.sub(f"({literal!r})", processed)
    return processed


def _evaluate_node(node: ast.AST) -> Number:
    if isinstance(node, ast.Expression):
        return _evaluate_node(node.body)

    if isinstance(node, ast.Constant):
        if isinstance(node.value, bool) or not isinstance(node.value, numbers.Real):
            raise TypeError(f"unsupported literal {node.value!r}")
        return node.value

    if isinstance(node, ast.BinOp) and type(node.op) in _BINARY_OPERATORS:
        left = _evaluate_node(node.left)
        right = _evaluate_node(node.right)
        return _BINARY_OPERATORS[type(node.op)](left, right)

    if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY_OPERATORS:
        return _UNARY_OPERATORS[type(node.op)](_evaluate_node(node.operand))

    if isinstance(node, ast.Name):
        if node.id in CONSTANTS:
            return CONSTANTS[node.id]
        raise NameError(f"name '{node.id}' is not defined")

    if isinstance(node, ast.Call):
        if not isinstance(node.func, ast.Name) or node.func.id not in FUNCTIONS:
            raise NameError(f"unknown function {ast.unparse(node.func)!r}")
        if node.keywords:
            raise TypeError("keyword arguments are not supported")
        args = [_evaluate_node(arg) for arg in node.args]
        return FUNCTIONS[node.func.id](*args)

    raise TypeError(f"unsupported expression element {type(node).__name__}")


def evaluate(formula: str, bindings: Mapping[str, Number] = None) -> Number:
    """
    Evaluate ``formula`` after substituting ``bindings``.

    Parameters
    ----------
    formula : str
        Arithmetic expression, e.g. ``'x/1 + y'``
    bindings : Mapping[str, Number]
        Variable name -> numeric value

    Returns
    -------
    Number
        The evaluated result

    Raises
    ------
    FormulaEvaluationError
        On syntax errors, unknown names or arithmetic failures; the
        underlying exception is chained as ``__cause__``

    Examples
    --------
    >>> evaluate('x/1 + y', {'x': 4, 'y': 6})
    10.0
    """
    processed = substitute(formula, bindings or {})
    try:
        tree = ast.parse(processed.strip(), mode='eval')
        return _evaluate_node(tree)
    except (SyntaxError, NameError, TypeError, ArithmeticError, ValueError) as exc:
        raise FormulaEvaluationError(formula, str(exc)) from exc
