# causeway

Errors that carry their history. `causeway` wraps exceptions in layers of
context and walks the chain of causes. It can capture backtraces when the
environment asks for them. It also checks conditions, with messages that name
the failing expression and show both sides of a comparison.

No runtime dependencies. Python 3.10 or later.

## Adding context

```python
from causeway.context import add_context, with_context, require, context

try:
    open("/no/such/config")
except OSError as exc:
    raise add_context(exc, "failed to load config") from exc
```

- `add_context(error, message)` returns a `ContextError` that wraps `error`.
- `with_context(error, factory)` does the same, but first calls `factory()` to build the message.
- `require(value, message)` returns `value`. When `value` is `None`, it raises a `ContextError` carrying `message`.
- `context(message)` works as a context manager and as a decorator. Any `Exception` raised inside it is re-raised wrapped in a `ContextError` carrying `message`.

```python
with context("failed to start server"):
    load_config()
```

`ContextError(message)` with no underlying error is a plain message error.
`ContextError` reuses the backtrace of the error it wraps when that error
carries one. Otherwise it captures a new backtrace.

## Inspecting a chain

`str()` of a `ContextError` is its own message only.

`alternate()` joins the whole chain with `": "`, for example:

```
g failed: f failed: oh no!
```

The same text comes from `format(err, "#")`.

`debug()` and `format(err, "?")` list the causes underneath. The causes are numbered when there is more than one:

```
g failed

Caused by:
    0: f failed
    1: oh no!
```

When a backtrace was captured, it is appended after the causes.

`debug(pretty=True)` and `format(err, "#?")` show the nested structure:

```
Error {
    context: "g failed",
    source: Error {
        context: "f failed",
        source: PermissionError('oh no!'),
    },
}
```

`causeway.context.quoted(text)` produces the escaped, double-quoted form that
is used for the `context` fields.

`chain()` returns a `causeway.chain.Chain`. This is an iterator over the error and every error beneath it, and it can be consumed from either end:

- `len()` gives the number of errors remaining.
- `next_back()` takes the deepest remaining error, or returns `None` when none are left.
- `reversed()` yields the remaining errors from the deepest upward.
- `copy()` returns an independent iterator at the same position.

`Chain()` with no argument is empty.

`root_cause()` returns the innermost error.

`causeway.chain.source_of(error)` gives the direct cause of an error. It uses the error's own `source()` method when it has one. Otherwise it follows `__cause__`, then an unsuppressed `__context__`.

## Checking conditions

```python
from causeway.ensure import ensure, ensure_compare, ensure_expression

ensure(len(items) > 0, "no items given")
ensure(v > 0, "bad value: {}", v)
ensure_compare(v + v, "==", 1, "v + v == 1")
# EnsureError: Condition failed: `v + v == 1` (2 vs 1)
```

All failures raise `EnsureError`, which is a `ContextError`.

`ensure(condition, *args)` takes these forms:

- With no further arguments, the message reads `Condition failed`.
- With a single exception argument, that exception is raised as it is.
- Otherwise the first argument is the message. It is formatted with `str.format` when more arguments follow.

`ensure_compare(lhs, op, rhs, text=None)` takes one of these operators: `==`, `!=`, `<`, `<=`, `>`, `>=`, `in`, `not in`, `is` and `is not`. Any other operator raises `ValueError`. Without `text`, the message uses the `repr` of both sides.

`ensure_expression(text, lhs, rhs)` takes the operator from a written comparison such as `"a + b == c"`. It applies that operator to the values `lhs` and `rhs`. If `text` is not a single top-level comparison, it raises `ValueError`.

The two values are appended as `(lhs vs rhs)` only when each `repr` fits in 40 bytes of UTF-8 and contains no space or newline. Otherwise the message names only the expression. This rule lives in `causeway.render.short_repr` and `causeway.render.render`.

`causeway.partition.partition(text)` splits a condition's source text at its single top-level comparison. It returns a `Comparison` with `lhs`, `op`, `rhs` and `text`. It returns `None` in these cases:

- the text is not an expression;
- it has no top-level comparison;
- it has more than one top-level comparison;
- it contains a construct that binds more loosely than a comparison outside brackets, such as `and`, `or`, `not`, `lambda`, a conditional expression, or a comma.

`tokenize_expression(text)` returns the significant tokens of `text` as strings.

The checks cannot see the source text of the caller's expression. To get a message that names the expression, pass its text yourself.

## Backtraces

Backtraces are captured only when the environment asks for them. The package checks `CAUSEWAY_LIB_BACKTRACE` first, then `CAUSEWAY_BACKTRACE`. Any value other than `0` turns capture on. The answer is read once and cached by `backtrace_enabled()`.

`causeway.backtrace.capture()` returns a `Backtrace`.

- `status()` reports a `BacktraceStatus`: `CAPTURED`, `DISABLED` or `UNSUPPORTED`.
- `format(full=False)` renders the frames starting from the caller of `capture()`. It shows paths relative to the working directory, prefixed with `./` (the platform's `.` and separator).
- `format(full=True)` keeps every frame and shows full paths.
- `str()` gives the short form and `format(bt, "#")` gives the full form.

`output_filename(path, short, cwd)` applies the same path shortening to a single file name.