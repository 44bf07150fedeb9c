"""Evaluate doctest statements in an isolated namespace.

Each call to :func:`evaluate` builds a fresh namespace exposing exactly three
names alongside a curated set of side-effect-free builtins:

``T``
    ``toolz.curried``, the utility/combinator library.
``S``
    The ``returns`` containers and helpers, the safety library.
``sqrt``
    A safe square root returning ``Success`` or ``Failure``.

Nothing in the namespace reaches the filesystem, the network, or process
state. The namespace guards against accidental errors in README examples; it
is not a security boundary.

Example
-------
>>> from readme_pages.sandbox import evaluate
>>> evaluate("T.pipe([1, 2], T.map(lambda n: n + 1), list)")
<Success: [2, 3]>
>>> evaluate("1 / 0")
<Failure: ZeroDivisionError: division by zero>
"""

from __future__ import annotations

import ast
import builtins
import math
import traceback
import types
import typing as typ

import toolz.curried
from returns import pipeline, pointfree
from returns.functions import identity
from returns.maybe import Maybe, Nothing, Some, maybe
from returns.result import Failure, Result, Success, safe

SQRT_NEGATIVE_MESSAGE = "Cannot represent square root of negative number"
ASSIGNED_VALUE = "__doctest_value__"

SAFE_BUILTINS: tuple[str, ...] = (
    "abs",
    "all",
    "any",
    "ArithmeticError",
    "bool",
    "chr",
    "dict",
    "divmod",
    "enumerate",
    "Exception",
    "filter",
    "float",
    "frozenset",
    "int",
    "isinstance",
    "KeyError",
    "len",
    "list",
    "map",
    "max",
    "min",
    "ord",
    "pow",
    "range",
    "repr",
    "reversed",
    "round",
    "set",
    "sorted",
    "str",
    "sum",
    "tuple",
    "TypeError",
    "ValueError",
    "ZeroDivisionError",
    "zip",
)

S = types.SimpleNamespace(
    Success=Success,
    Failure=Failure,
    Result=Result,
    Some=Some,
    Nothing=Nothing,
    Maybe=Maybe,
    safe=safe,
    maybe=maybe,
    identity=identity,
    flow=pipeline.flow,
    pipe=pipeline.pipe,
    is_successful=pipeline.is_successful,
    bind=pointfree.bind,
    map_=pointfree.map_,
    alt=pointfree.alt,
    lash=pointfree.lash,
)


def sqrt(n: float) -> Result[float, str]:
    """Return the square root of ``n``, failing for negative numbers.

    >>> sqrt(4)
    <Success: 2.0>
    >>> sqrt(-1)
    <Failure: Cannot represent square root of negative number>
    """
    if n < 0:
        return Failure(SQRT_NEGATIVE_MESSAGE)
    return Success(math.sqrt(n))


def _fresh_namespace() -> dict[str, typ.Any]:
    """Return a new namespace holding the sandbox bindings."""
    allowed = {name: getattr(builtins, name) for name in SAFE_BUILTINS}
    return {"__builtins__": allowed, "T": toolz.curried, "S": S, "sqrt": sqrt}


def _compile_eval(node: ast.expr) -> types.CodeType:
    return compile(
        ast.fix_missing_locations(ast.Expression(node)), "<doctest>", "eval"
    )


def _run(expression: str) -> object:
    """Execute ``expression`` as one statement and return its value.

    Assignments evaluate their right-hand side once and bind it through a
    hidden name, so target expressions such as ``d[key()]`` run only once.
    """
    module = ast.parse(expression, mode="exec")
    if len(module.body) != 1:
        msg = f"expected a single statement, got {len(module.body)}"
        raise SyntaxError(msg)
    statement = module.body[0]
    namespace = _fresh_namespace()
    if isinstance(statement, ast.Expr):
        return eval(_compile_eval(statement.value), namespace)  # noqa: S307
    if isinstance(statement, ast.AugAssign) and not isinstance(
        statement.target, ast.Name
    ):
        msg = "augmented assignment target must be a name"
        raise SyntaxError(msg)
    value: object = None
    assigns = isinstance(statement, ast.Assign | ast.AnnAssign)
    if assigns and statement.value is not None:
        value = eval(_compile_eval(statement.value), namespace)  # noqa: S307
        namespace[ASSIGNED_VALUE] = value
        statement.value = ast.copy_location(
            ast.Name(id=ASSIGNED_VALUE, ctx=ast.Load()), statement.value
        )
    code = compile(ast.fix_missing_locations(module), "<doctest>", "exec")
    exec(code, namespace)  # noqa: S102 - restricted namespace
    if isinstance(statement, ast.AugAssign):
        return namespace[statement.target.id]
    return value


def evaluate(expression: str) -> Result[str, str]:
    """Run ``expression`` in a fresh sandbox and stringify the outcome.

    Parameters
    ----------
    expression : str
        A single Python statement, usually an expression. Assignments
        evaluate to the assigned value; other statements to ``None``.

    Returns
    -------
    Result[str, str]
        ``Success(str(value))`` on completion, or ``Failure(message)`` with
        the one-line exception description. Tracebacks are discarded.
    """
    try:
        value = _run(expression)
    except Exception as exc:  # noqa: BLE001 - every failure is rendered inline
        message = traceback.format_exception_only(type(exc), exc)[-1].strip()
        return Failure(message)
    return Success(str(value))


__all__ = ["S", "SAFE_BUILTINS", "SQRT_NEGATIVE_MESSAGE", "evaluate", "sqrt"]
