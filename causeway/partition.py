"""Splitting of a condition's source text at its top-level comparison."""

from __future__ import annotations

import ast
import io
import tokenize
from dataclasses import dataclass

_SKIPPED = frozenset(
    {
        tokenize.ENCODING,
        tokenize.NEWLINE,
        tokenize.NL,
        tokenize.ENDMARKER,
        tokenize.COMMENT,
        tokenize.INDENT,
        tokenize.DEDENT,
    }
)

_OPEN = frozenset("([{")
_CLOSE = frozenset(")]}")
_SYMBOL_OPS = frozenset({"==", "!=", "<", "<=", ">", ">="})

# Constructs that bind more loosely than a comparison. Seeing one outside
# brackets means the expression cannot be split into ``lhs op rhs``.
_LOOSER = frozenset({"and", "or", "not", "lambda", "if", "else", "yield", ":=", ",", ":"})


@dataclass(frozen=True)
class Comparison:
    """A condition of the form ``lhs op rhs``, each side as source text."""

    lhs: str
    op: str
    rhs: str

    @property
    def text(self) -> str:
        """The condition with single spaces around the operator."""
        return f"{self.lhs} {self.op} {self.rhs}"

    def __str__(self) -> str:
        return self.text


def _tokens(text: str) -> list[tokenize.TokenInfo]:
    try:
        return [
            token
            for token in tokenize.generate_tokens(io.StringIO(text).readline)
            if token.type not in _SKIPPED
        ]
    except (tokenize.TokenError, SyntaxError) as exc:
        raise ValueError(f"cannot tokenize expression: {text!r}") from exc


def tokenize_expression(text: str) -> list[str]:
    """Return the significant tokens of ``text`` as strings.

    Raises ValueError when ``text`` cannot be tokenized.
    """
    return [token.string for token in _tokens(text)]


def _line_offsets(text: str) -> list[int]:
    offsets = [0]
    for line in text.splitlines(keepends=True):
        offsets.append(offsets[-1] + len(line))
    return offsets


def _is_expression(text: str) -> bool:
    try:
        ast.parse(text, mode="eval")
    except (SyntaxError, ValueError):
        return False
    return True


def partition(text: str) -> Comparison | None:
    """Split ``text`` at its single top-level comparison operator.

    Returns None when the text is not an expression, has no comparison at
    the top level, has more than one, or contains a construct that binds
    more loosely than a comparison outside any brackets.
    """
    text = text.strip()
    if not text or not _is_expression(text):
        return None
    try:
        tokens = _tokens(text)
    except ValueError:
        return None

    offsets = _line_offsets(text)

    def offset(position: tuple[int, int]) -> int:
        row, col = position
        return offsets[row - 1] + col

    depth = 0
    found: tuple[int, int, str] | None = None
    index = 0
    while index < len(tokens):
        token = tokens[index]
        word = token.string
        following = tokens[index + 1].string if index + 1 < len(tokens) else None
        if token.type == tokenize.OP and word in _OPEN:
            depth += 1
        elif token.type == tokenize.OP and word in _CLOSE:
            depth -= 1
        elif depth == 0:
            op: str | None = None
            end_token = token
            if token.type == tokenize.OP and word in _SYMBOL_OPS:
                op = word
            elif token.type == tokenize.NAME and word == "not" and following == "in":
                op, end_token = "not in", tokens[index + 1]
            elif token.type == tokenize.NAME and word == "is":
                if following == "not":
                    op, end_token = "is not", tokens[index + 1]
                else:
                    op = "is"
            elif token.type == tokenize.NAME and word == "in":
                op = "in"
            elif word in _LOOSER:
                return None
            if op is not None:
                if found is not None:
                    return None
                found = (offset(token.start), offset(end_token.end), op)
                if end_token is not token:
                    index += 1
        index += 1

    if found is None:
        return None
    start, end, op = found
    lhs = text[:start].strip()
    rhs = text[end:].strip()
    if not lhs or not rhs:
        return None
    return Comparison(lhs, op, rhs)