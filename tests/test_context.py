import pytest

from causeway.context import (
    ContextError,
    add_context,
    context,
    quoted,
    require,
    with_context,
)


class LowLevel(Exception):
    pass


class _Display:
    def __init__(self, message):
        self.message = message

    def __str__(self):
        return self.message


class MidLevel(_Display):
    pass


class HighLevel(_Display):
    pass


def make_chain():
    low = LowLevel("no such file or directory")
    mid = add_context(low, MidLevel("failed to load config"))
    high = add_context(mid, HighLevel("failed to start server"))
    return high, low


def f():
    raise PermissionError("oh no!")


@context("f failed")
def g():
    f()


def test_inference():
    with context("..."):
        y = require(int("1"), "...")
    assert y == 1


def test_context_wraps_raised_error():
    with pytest.raises(ContextError) as info:
        with context("parse failed"):
            int("x")
    assert str(info.value) == "parse failed"
    assert isinstance(info.value.source(), ValueError)
    assert info.value.__cause__ is info.value.source()


def test_chain_messages():
    err, _ = make_chain()
    assert [str(e) for e in err.chain()] == [
        "failed to start server",
        "failed to load config",
        "no such file or directory",
    ]


def test_context_objects_kept():
    err, low = make_chain()
    assert isinstance(err.context, HighLevel)
    assert isinstance(err.source().context, MidLevel)
    assert err.source().source() is low


def test_root_cause():
    err, low = make_chain()
    assert err.root_cause() is low
    assert str(err.root_cause()) == "no such file or directory"


def test_with_context_calls_factory():
    calls = []

    def factory():
        calls.append(1)
        return "lazy"

    err = with_context(KeyError("k"), factory)
    assert str(err) == "lazy"
    assert calls == [1]


def test_require_present():
    assert require(5, "there is no T") == 5
    assert require(0, "there is no T") == 0


def test_require_missing():
    with pytest.raises(ContextError) as info:
        require(None, "there is no T")
    assert str(info.value) == "there is no T"
    assert info.value.source() is None


def test_boxed_anyhow():
    error = add_context(ContextError("oh no!"), "it failed")
    assert str(error.source()) == "oh no!"


def test_display():
    with pytest.raises(ContextError) as info:
        with context("g failed"):
            g()
    assert str(info.value) == "g failed"


def test_altdisplay():
    g_err = add_context(PermissionError("oh no!"), "f failed")
    h_err = add_context(g_err, "g failed")
    assert g_err.alternate() == "f failed: oh no!"
    assert h_err.alternate() == "g failed: f failed: oh no!"
    assert f"{h_err:#}" == "g failed: f failed: oh no!"


def test_decorated_chain_alternate():
    with pytest.raises(ContextError) as info:
        with context("g failed"):
            g()
    assert info.value.alternate() == "g failed: f failed: oh no!"


def test_debug():
    g_err = add_context(PermissionError("oh no!"), "f failed")
    h_err = add_context(g_err, "g failed")
    assert g_err.debug() == "f failed\n\nCaused by:\n    oh no!"
    assert h_err.debug() == (
        "g failed\n\nCaused by:\n    0: f failed\n    1: oh no!"
    )
    assert f"{g_err:?}" == "f failed\n\nCaused by:\n    oh no!"


def test_debug_multiline_cause():
    err = add_context(ValueError("line one\nline two"), "outer")
    assert err.debug() == "outer\n\nCaused by:\n    line one\n    line two"


def test_altdebug():
    g_err = add_context(PermissionError("oh no!"), "f failed")
    h_err = add_context(g_err, "g failed")
    assert g_err.debug(True) == (
        "Error {\n"
        '    context: "f failed",\n'
        "    source: PermissionError('oh no!'),\n"
        "}"
    )
    assert f"{h_err:#?}" == (
        "Error {\n"
        '    context: "g failed",\n'
        "    source: Error {\n"
        '        context: "f failed",\n'
        "        source: PermissionError('oh no!'),\n"
        "    },\n"
        "}"
    )


def test_message_only_formats():
    err = ContextError("oh no!")
    assert err.debug() == "oh no!"
    assert err.debug(True) == '"oh no!"'
    assert err.alternate() == "oh no!"


def test_quoted_escapes():
    assert quoted('a"b\n') == '"a\\"b\\n"'
    assert quoted("tab\there") == '"tab\\there"'
    assert quoted("back\\slash") == '"back\\\\slash"'


def test_backtrace_inherited():
    inner = ContextError("inner")
    outer = add_context(inner, "outer")
    assert outer.backtrace is inner.backtrace