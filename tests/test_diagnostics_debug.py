"""Tests for debug mode functionality."""

import logging
from concurrent.futures import ThreadPoolExecutor
from io import StringIO

import numpy as np

from eqqp.diagnostics import debug_mode
from eqqp.diagnostics import (
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)
from eqqp.logging import configure_logging, get_logger
from eqqp.solvers.kkt import solve_kkt


def test_debug_mode_toggle_and_context() -> None:
    """Test debug mode toggling and context manager."""
    original = is_debug_enabled()

    try:
        set_debug_enabled(False)
        assert not is_debug_enabled()

        with debug_context(True):
            assert is_debug_enabled()

        assert not is_debug_enabled()

        set_debug_enabled(True)
        assert is_debug_enabled()

        with debug_context(False):
            assert not is_debug_enabled()

        assert is_debug_enabled()
    finally:
        set_debug_enabled(original)


def test_debug_context_nested() -> None:
    """Test nested debug contexts."""
    original = is_debug_enabled()

    try:
        set_debug_enabled(False)

        with debug_context(True):
            assert is_debug_enabled()

            with debug_context(False):
                assert not is_debug_enabled()

            assert is_debug_enabled()

        assert not is_debug_enabled()
    finally:
        set_debug_enabled(original)


def test_debug_mode_logs_kkt_residuals() -> None:
    """Solves inside a debug context report their residuals."""
    get_logger("eqqp.solvers.kkt")
    stream = StringIO()
    configure_logging(level=logging.DEBUG, stream=stream)
    try:
        with debug_context(True):
            solve_kkt(2.0 * np.eye(2), np.zeros(2), np.ones((1, 2)), np.ones(1))
        assert "KKT residuals" in stream.getvalue()
    finally:
        configure_logging(level=logging.WARNING)


def test_debug_context_does_not_leak_into_other_threads() -> None:
    """An override in one thread leaves solves on other threads alone."""
    original = is_debug_enabled()

    try:
        set_debug_enabled(False)
        with debug_context(True):
            assert is_debug_enabled()
            with ThreadPoolExecutor(max_workers=2) as pool:
                seen = list(pool.map(lambda _: is_debug_enabled(), range(4)))
        assert seen == [False] * 4
    finally:
        set_debug_enabled(original)


def test_set_debug_enabled_waits_for_active_override() -> None:
    """The process default changes, but an open context keeps its value."""
    original = is_debug_enabled()

    try:
        set_debug_enabled(False)
        with debug_context(False):
            set_debug_enabled(True)
            assert not is_debug_enabled()
        assert is_debug_enabled()
    finally:
        set_debug_enabled(original)


def test_env_flag_parsing(monkeypatch) -> None:
    """Common truthy spellings of EQQP_DEBUG turn debug mode on."""
    for value in ("1", "true", "YES", " on "):
        monkeypatch.setenv(debug_mode.ENV_VAR, value)
        assert debug_mode.debug_flag_from_env()
    for value in ("0", "false", "", "off"):
        monkeypatch.setenv(debug_mode.ENV_VAR, value)
        assert not debug_mode.debug_flag_from_env()
    monkeypatch.delenv(debug_mode.ENV_VAR)
    assert not debug_mode.debug_flag_from_env()
