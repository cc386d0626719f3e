import os

import pytest

from causeway.backtrace import (
    Backtrace,
    BacktraceStatus,
    backtrace_enabled,
    capture,
    output_filename,
)


@pytest.fixture(autouse=True)
def _fresh_cache(monkeypatch):
    monkeypatch.delenv("CAUSEWAY_LIB_BACKTRACE", raising=False)
    monkeypatch.delenv("CAUSEWAY_BACKTRACE", raising=False)
    backtrace_enabled.cache_clear()
    yield
    backtrace_enabled.cache_clear()


def test_disabled_by_default():
    assert backtrace_enabled() is False
    bt = capture()
    assert bt.status() is BacktraceStatus.DISABLED
    assert str(bt) == "disabled backtrace"
    assert repr(bt) == "<disabled>"


@pytest.mark.parametrize(
    "lib, general, expected",
    [
        ("1", None, True),
        ("0", None, False),
        (None, "1", True),
        (None, "0", False),
        ("0", "1", False),
        ("full", "0", True),
    ],
)
def test_enabled_from_environment(monkeypatch, lib, general, expected):
    if lib is not None:
        monkeypatch.setenv("CAUSEWAY_LIB_BACKTRACE", lib)
    if general is not None:
        monkeypatch.setenv("CAUSEWAY_BACKTRACE", general)
    assert backtrace_enabled() is expected


def test_capture_when_enabled(monkeypatch):
    monkeypatch.setenv("CAUSEWAY_BACKTRACE", "1")
    bt = capture()
    assert bt.status() is BacktraceStatus.CAPTURED
    text = bt.format(False)
    assert text.startswith("stack backtrace:")
    assert "test_capture_when_enabled" in text
    assert "capture\n" not in text.split("test_capture_when_enabled")[0]


def test_debug_listing(monkeypatch):
    monkeypatch.setenv("CAUSEWAY_BACKTRACE", "1")
    bt = capture()
    text = repr(bt)
    assert text.startswith("Backtrace [{ fn: ")
    assert "test_debug_listing" in text
    assert "line: " in text


def test_unsupported():
    bt = Backtrace(BacktraceStatus.UNSUPPORTED)
    assert bt.status() is BacktraceStatus.UNSUPPORTED
    assert str(bt) == "unsupported backtrace"
    assert repr(bt) == "<unsupported>"


def test_create_without_frames_is_unsupported():
    assert Backtrace._create([], 0).status() is BacktraceStatus.UNSUPPORTED


def test_output_filename_strips_cwd(tmp_path):
    path = tmp_path / "src" / "main.py"
    expected = "." + os.sep + os.path.join("src", "main.py")
    assert output_filename(str(path), True, str(tmp_path)) == expected


def test_output_filename_full_keeps_path(tmp_path):
    path = tmp_path / "src" / "main.py"
    assert output_filename(str(path), False, str(tmp_path)) == str(path)


def test_output_filename_without_cwd(tmp_path):
    path = tmp_path / "main.py"
    assert output_filename(str(path), True, None) == str(path)


def test_output_filename_relative_unchanged(tmp_path):
    rel = os.path.join("src", "main.py")
    assert output_filename(rel, True, str(tmp_path)) == rel


def test_output_filename_outside_cwd(tmp_path):
    other = tmp_path / "a" / "main.py"
    cwd = tmp_path / "b"
    assert output_filename(str(other), True, str(cwd)) == str(other)