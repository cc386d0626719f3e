"""Optional capture of the call stack at the point an error is created."""

from __future__ import annotations

import enum
import functools
import os
import sys
import threading
from dataclasses import dataclass
from pathlib import PurePath
from types import CodeType, FrameType

_LIB_ENV = "CAUSEWAY_LIB_BACKTRACE"
_GLOBAL_ENV = "CAUSEWAY_BACKTRACE"


class BacktraceStatus(enum.Enum):
    """Whether a backtrace holds frames, and if not, why."""

    UNSUPPORTED = "unsupported"
    DISABLED = "disabled"
    CAPTURED = "captured"


@functools.lru_cache(maxsize=None)
def backtrace_enabled() -> bool:
    """Report whether capturing is switched on by the environment.

    The library-specific variable wins over the general one; any value other
    than ``"0"`` enables capture. The answer is computed once and cached.
    """
    value = os.environ.get(_LIB_ENV)
    if value is None:
        value = os.environ.get(_GLOBAL_ENV)
    if value is None:
        return False
    return value != "0"


@dataclass(frozen=True)
class _RawFrame:
    code: CodeType
    lineno: int | None


@dataclass(frozen=True)
class _Symbol:
    name: str | None
    filename: str | None
    lineno: int | None

    def debug(self, cwd: str | None) -> str:
        parts = [f'fn: "{self.name}"' if self.name else "fn: <unknown>"]
        if self.filename is not None:
            parts.append(f'file: "{output_filename(self.filename, True, cwd)}"')
        if self.lineno is not None:
            parts.append(f"line: {self.lineno}")
        return "{ " + ", ".join(parts) + " }"


def _trace(frame: FrameType | None) -> list[_RawFrame]:
    frames = []
    while frame is not None:
        frames.append(_RawFrame(frame.f_code, frame.f_lineno))
        frame = frame.f_back
    return frames


def _current_dir() -> str | None:
    try:
        return os.getcwd()
    except OSError:
        return None


def output_filename(path: str, short: bool, cwd: str | None) -> str:
    """Render a frame's file name, relative to ``cwd`` in the short style."""
    file = PurePath(path)
    if short and file.is_absolute() and cwd is not None:
        try:
            stripped = file.relative_to(cwd)
        except ValueError:
            pass
        else:
            rest = str(stripped) if stripped.parts else ""
            return "." + os.sep + rest
    return str(file)


class Backtrace:
    """A captured call stack, resolved to symbols on first use."""

    def __init__(
        self,
        status: BacktraceStatus,
        frames: list[_RawFrame] | tuple = (),
        actual_start: int = 0,
    ) -> None:
        self._status = status
        self._frames = list(frames)
        self._actual_start = actual_start
        self._symbols: list[_Symbol] | None = None
        self._lock = threading.Lock()

    @classmethod
    def _create(cls, frames: list[_RawFrame], actual_start: int) -> Backtrace:
        if not frames:
            return cls(BacktraceStatus.UNSUPPORTED)
        return cls(BacktraceStatus.CAPTURED, frames, actual_start)

    def status(self) -> BacktraceStatus:
        """Return whether this backtrace was captured."""
        return self._status

    def _resolve(self) -> list[_Symbol]:
        with self._lock:
            if self._symbols is None:
                symbols = []
                for raw in self._frames:
                    name = getattr(raw.code, "co_qualname", raw.code.co_name)
                    symbols.append(_Symbol(name, raw.code.co_filename, raw.lineno))
                self._symbols = symbols
            return self._symbols

    def format(self, full: bool = False) -> str:
        """Render the frames; ``full`` keeps capture internals and full paths."""
        if self._status is BacktraceStatus.UNSUPPORTED:
            return "unsupported backtrace"
        if self._status is BacktraceStatus.DISABLED:
            return "disabled backtrace"
        symbols = self._resolve()
        if not full:
            symbols = symbols[self._actual_start:]
        cwd = _current_dir()
        lines = ["stack backtrace:"]
        for index, symbol in enumerate(symbols):
            lines.append(f"{index:>4}: {symbol.name or '<unknown>'}")
            if symbol.filename is not None:
                location = output_filename(symbol.filename, not full, cwd)
                if symbol.lineno is not None:
                    location += f":{symbol.lineno}"
                lines.append(f"             at {location}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.format(False)

    def __format__(self, spec: str) -> str:
        full = "#" in spec
        return format(self.format(full), spec.replace("#", ""))

    def __repr__(self) -> str:
        if self._status is BacktraceStatus.UNSUPPORTED:
            return "<unsupported>"
        if self._status is BacktraceStatus.DISABLED:
            return "<disabled>"
        cwd = _current_dir()
        symbols = self._resolve()[self._actual_start:]
        return "Backtrace [" + ", ".join(s.debug(cwd) for s in symbols) + "]"


def capture() -> Backtrace:
    """Capture the caller's stack if the environment enables it."""
    if not backtrace_enabled():
        return Backtrace(BacktraceStatus.DISABLED)
    frames = _trace(sys._getframe())
    actual_start = next(
        (i + 1 for i, raw in enumerate(frames) if raw.code is capture.__code__),
        0,
    )
    return Backtrace._create(frames, actual_start)