"""Errors that carry a message on top of the error that caused them."""

from __future__ import annotations

import contextlib
from typing import Any, Callable, TypeVar

from .backtrace import Backtrace, BacktraceStatus, capture
from .chain import Chain, source_of

T = TypeVar("T")

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "'": "\\'",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}


def quoted(text: str) -> str:
    """Wrap ``text`` in double quotes, escaping quotes, backslashes and controls."""
    pieces = []
    for ch in text:
        if ch in _ESCAPES:
            pieces.append(_ESCAPES[ch])
        elif not ch.isprintable():
            pieces.append(f"\\u{{{ord(ch):x}}}")
        else:
            pieces.append(ch)
    return '"' + "".join(pieces) + '"'


def _message_debug(message: Any) -> str:
    return quoted(message) if isinstance(message, str) else repr(message)


def _indented(text: str, number: int | None) -> str:
    if number is None:
        first, rest = "    ", "    "
    else:
        first, rest = f"{number:>5}: ", "       "
    return first + text.replace("\n", "\n" + rest)


def _pretty_debug(error: Any) -> str:
    if isinstance(error, ContextError):
        if error._error is None:
            return _message_debug(error.context)
        inner = _pretty_debug(error._error).replace("\n", "\n    ")
        return (
            "Error {\n"
            f"    context: {quoted(str(error.context))},\n"
            f"    source: {inner},\n"
            "}"
        )
    return repr(error)


class ContextError(Exception):
    """An error described by ``context`` and caused by ``error``.

    With no underlying error it is a plain message error.
    """

    def __init__(self, context: Any, error: BaseException | None = None) -> None:
        super().__init__(context)
        self.context = context
        self._error = error
        if isinstance(error, BaseException):
            self.__cause__ = error
        inherited = getattr(error, "backtrace", None)
        self.backtrace: Backtrace = (
            inherited if isinstance(inherited, Backtrace) else capture()
        )

    def __str__(self) -> str:
        return str(self.context)

    def source(self) -> BaseException | None:
        """Return the error this one wraps, if any."""
        return self._error

    def chain(self) -> Chain:
        """Iterate over this error and every error beneath it."""
        return Chain(self)

    def root_cause(self) -> Any:
        """Return the deepest error in the chain."""
        return self.chain().next_back()

    def alternate(self) -> str:
        """Render the whole chain on one line, separated by colons."""
        return ": ".join(str(error) for error in self.chain())

    def debug(self, pretty: bool = False) -> str:
        """Render the message with its causes, or the nested structure if ``pretty``."""
        if pretty:
            return _pretty_debug(self)
        parts = [str(self)]
        cause = self.source()
        if cause is not None:
            parts.append("\n\nCaused by:")
            multiple = source_of(cause) is not None
            for number, error in enumerate(Chain(cause)):
                parts.append("\n")
                parts.append(_indented(str(error), number if multiple else None))
        if self.backtrace.status() is BacktraceStatus.CAPTURED:
            parts.append("\n\nStack backtrace:\n")
            parts.append(self.backtrace.format(False))
        return "".join(parts)

    def __format__(self, spec: str) -> str:
        if spec == "#":
            return self.alternate()
        if spec == "?":
            return self.debug(False)
        if spec == "#?":
            return self.debug(True)
        return format(str(self), spec)


def add_context(error: BaseException, context: Any) -> ContextError:
    """Wrap ``error`` in a new error described by ``context``."""
    return ContextError(context, error)


def with_context(error: BaseException, factory: Callable[[], Any]) -> ContextError:
    """Wrap ``error`` with a context built by calling ``factory``."""
    return ContextError(factory(), error)


def require(value: T | None, context: Any) -> T:
    """Return ``value``, or raise a message error if it is None."""
    if value is None:
        raise ContextError(context)
    return value


class _ContextScope(contextlib.ContextDecorator):
    def __init__(self, message: Any) -> None:
        self.message = message

    def __enter__(self) -> _ContextScope:
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc is None or not isinstance(exc, Exception):
            return False
        raise ContextError(self.message, exc) from exc


def context(message: Any) -> _ContextScope:
    """Context manager and decorator wrapping raised exceptions with ``message``."""
    return _ContextScope(message)