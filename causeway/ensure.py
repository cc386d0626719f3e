"""Checks that raise a descriptive error when a condition does not hold."""

from __future__ import annotations

import operator
from typing import Any, Callable

from .context import ContextError
from .partition import partition
from .render import render

_PREFIX = "Condition failed"

_OPERATORS: dict[str, Callable[[Any, Any], Any]] = {
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
    "in": lambda lhs, rhs: lhs in rhs,
    "not in": lambda lhs, rhs: lhs not in rhs,
    "is": operator.is_,
    "is not": operator.is_not,
}


class EnsureError(ContextError):
    """Raised when an ensured condition is false."""

    def __init__(self, message: Any) -> None:
        super().__init__(message)


def ensure(condition: Any, *args: Any) -> None:
    """Raise unless ``condition`` is true.

    With no further arguments the error reads ``Condition failed``. A single
    exception argument is raised as it is. Otherwise the first argument is the
    message, formatted with ``str.format`` against any remaining arguments.
    """
    if condition:
        return
    if not args:
        raise EnsureError(_PREFIX)
    first, *rest = args
    if not rest and isinstance(first, BaseException):
        raise first
    if rest:
        raise EnsureError(str(first).format(*rest))
    raise EnsureError(first)


def ensure_compare(lhs: Any, op: str, rhs: Any, text: str | None = None) -> None:
    """Raise unless ``lhs op rhs`` holds.

    ``text`` is the source of the condition shown in the message; without it
    the representations of both sides are used. Both values are appended as
    ``(lhs vs rhs)`` when they render compactly.
    """
    try:
        compare = _OPERATORS[op]
    except KeyError:
        raise ValueError(f"unsupported comparison operator: {op!r}") from None
    if compare(lhs, rhs):
        return
    if text is None:
        text = f"{lhs!r} {op} {rhs!r}"
    raise EnsureError(render(f"{_PREFIX}: `{text}`", lhs, rhs))


def ensure_expression(text: str, lhs: Any, rhs: Any) -> None:
    """Raise unless the comparison written in ``text`` holds for ``lhs`` and ``rhs``.

    ``text`` must be a single top-level comparison such as ``"a + b == c"``;
    its operator is applied to the evaluated sides ``lhs`` and ``rhs``.
    Raises ValueError when ``text`` is not such a comparison.
    """
    comparison = partition(text)
    if comparison is None:
        raise ValueError(f"not a single comparison: {text!r}")
    ensure_compare(lhs, comparison.op, rhs, comparison.text)