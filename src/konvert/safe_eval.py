# -----------------------------------------------------------------------------
# Safe expression compiler for table formulas
# Purpose:
#   Turn a formula string over `x` (e.g. "x * 9/5 + 32") into a unary numeric
#   function, using only whitelisted math functions/constants, and derive the
#   reverse expression symbolically when a table entry omits it.
# Safety:
#   - The parsed tree is checked node by node before compiling: numbers,
#     arithmetic operators, `x`, whitelisted constants and calls to
#     whitelisted functions only (no attributes, lambdas or comprehensions).
#   - `__builtins__` disabled at evaluation time.
# -----------------------------------------------------------------------------

from __future__ import annotations
import ast
import math
from typing import Callable
from sympy import symbols, sympify, Eq, solve, sqrt, exp, log, pi as SPI, SympifyError

class ExpressionError(Exception): pass

# Whitelisted math functions/constants
_ALLOWED_FUNCS = {
    "sqrt": math.sqrt, "log": math.log, "ln": math.log, "log10": math.log10,
    "exp": math.exp, "abs": abs,
}
_ALLOWED_CONSTS = {"pi": math.pi, "e": math.e}
ALLOWED = {**_ALLOWED_FUNCS, **_ALLOWED_CONSTS}

# Allowed AST operator node types
_ALLOWED_BINOPS = {ast.Add, ast.Sub, ast.Mult, ast.Div, ast.Pow}
_ALLOWED_UNARYOPS = {ast.UAdd, ast.USub}

def _check_ast(node: ast.AST):
    """
    Recursively validate a parsed expression under a strict whitelist.
    Raises ExpressionError on the first node outside it.
    """
    if isinstance(node, ast.Expression):
        return _check_ast(node.body)
    if isinstance(node, ast.Constant):
        if isinstance(node.value, (int, float)) and not isinstance(node.value, bool):
            return
        raise ExpressionError("Unsupported constant type.")
    if isinstance(node, ast.BinOp):
        if type(node.op) not in _ALLOWED_BINOPS:
            raise ExpressionError("Unsupported operator.")
        _check_ast(node.left)
        return _check_ast(node.right)
    if isinstance(node, ast.UnaryOp):
        if type(node.op) not in _ALLOWED_UNARYOPS:
            raise ExpressionError("Unsupported unary operator.")
        return _check_ast(node.operand)
    if isinstance(node, ast.Call):
        # Only bare function names; no attribute access or lambdas
        if not isinstance(node.func, ast.Name) or node.func.id not in _ALLOWED_FUNCS:
            raise ExpressionError("Unsupported call.")
        if node.keywords:
            raise ExpressionError("Keywords not allowed.")
        for a in node.args:
            _check_ast(a)
        return
    if isinstance(node, ast.Name):
        if node.id == "x" or node.id in _ALLOWED_CONSTS:
            return
        raise ExpressionError(f"Unknown name: {node.id}")
    raise ExpressionError(f"Unsupported syntax: {type(node).__name__}")

def compile_transform(expr: str) -> Callable[[float], float]:
    """
    Validate and compile `expr` once and return a unary function x -> value.
    Raises ExpressionError if the text is not a whitelisted expression.
    """
    if not expr or not str(expr).strip():
        raise ExpressionError("Empty expression.")
    text = str(expr).strip()
    try:
        tree = ast.parse(text, mode="eval")
    except SyntaxError as e:
        raise ExpressionError(f"Invalid expression '{text}': {e.msg}")
    try:
        _check_ast(tree)
    except ExpressionError as e:
        raise ExpressionError(f"Rejected expression '{text}': {e}")
    code = compile(tree, "<formula>", "eval")

    def transform(x: float) -> float:
        env = {"__builtins__": {}}
        env.update(ALLOWED)
        env["x"] = x
        return float(eval(code, env, {}))

    transform.__name__ = text
    return transform

def derive_reverse(expr: str) -> str:
    """
    Symbolically invert y = expr(x) and return the reverse expression, again
    written over `x`.
    - Parses the forward text with sympy
    - Solves y = f(x) for x
    - Requires exactly one solution; a formula with several branches
      (e.g. x**2) needs an explicit `reverse` in the table
    """
    local = {"sqrt": sqrt, "exp": exp, "log": log, "ln": log, "pi": SPI}
    x, y = symbols("x y")
    try:
        fwd = sympify(expr, locals=local)
    except (SympifyError, SyntaxError, TypeError) as e:
        raise ExpressionError(f"Could not parse '{expr}': {e}")
    try:
        sol = solve(Eq(y, fwd), x)
    except NotImplementedError as e:
        raise ExpressionError(f"Could not solve '{expr}' for its reverse: {e}")
    if not sol:
        raise ExpressionError(f"Could not solve '{expr}' for its reverse.")
    if len(sol) > 1:
        raise ExpressionError(f"'{expr}' has {len(sol)} reverse branches; give 'reverse' explicitly.")
    return str(sol[0].subs(y, x))
