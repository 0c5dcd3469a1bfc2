"""Tests for the chart dependency check used before drawing donuts."""

import sys
import types

import pytest

from src.adapters.interface.streamlit import app


def _install(monkeypatch, numpy_attrs: dict, pandas_attrs: dict) -> None:
    monkeypatch.setitem(sys.modules, "numpy", types.SimpleNamespace(**numpy_attrs))
    monkeypatch.setitem(
        sys.modules, "pandas", types.SimpleNamespace(**pandas_attrs)
    )


def test_check_altair_dependencies_ok(monkeypatch) -> None:
    """Complete numpy/pandas imports allow the allocation donuts."""
    _install(monkeypatch, {"ndarray": object}, {"Timestamp": object})

    assert app._check_altair_dependencies() == (True, None)


@pytest.mark.parametrize(
    ("numpy_attrs", "pandas_attrs", "broken"),
    [
        ({}, {"Timestamp": object}, "numpy"),
        ({"ndarray": object}, {}, "pandas"),
    ],
)
def test_check_altair_dependencies_incomplete(
    monkeypatch, numpy_attrs, pandas_attrs, broken
) -> None:
    """Partial imports are reported with the broken package name."""
    _install(monkeypatch, numpy_attrs, pandas_attrs)

    ok, message = app._check_altair_dependencies()

    assert ok is False
    assert broken in message


def test_check_altair_dependencies_missing_module(monkeypatch) -> None:
    """A missing package is reported instead of raising."""
    monkeypatch.setitem(sys.modules, "pandas", None)
    monkeypatch.setitem(sys.modules, "numpy", types.SimpleNamespace(ndarray=1))

    ok, message = app._check_altair_dependencies()

    assert ok is False
    assert message.startswith("Chart dependencies unavailable")
