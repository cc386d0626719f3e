"""Rendering of the two sides of a failed comparison."""

from __future__ import annotations

from typing import Any

_LIMIT = 40


def short_repr(value: Any, limit: int = _LIMIT) -> str | None:
    """Return ``repr(value)`` if it is short and on one word, else None.

    The representation must fit in ``limit`` bytes of UTF-8 and hold no
    space or newline.
    """
    try:
        text = repr(value)
    except Exception:
        return None
    if " " in text or "\n" in text:
        return None
    if len(text.encode("utf-8")) > limit:
        return None
    return text


def render(msg: str, lhs: Any, rhs: Any) -> str:
    """Append ``(lhs vs rhs)`` to ``msg`` when both sides render compactly."""
    lhs_text = short_repr(lhs)
    if lhs_text is not None:
        rhs_text = short_repr(rhs)
        if rhs_text is not None:
            return f"{msg} ({lhs_text} vs {rhs_text})"
    return msg