"""
Debug switch for residual checking.

The switch has two layers. A process-wide default comes from the
``EQQP_DEBUG`` environment variable and can be changed with
:func:`set_debug_enabled`. :func:`debug_context` overrides it for the current
thread or task only, so independent solves running concurrently do not see
each other's overrides.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

ENV_VAR = "EQQP_DEBUG"
_TRUTHY = frozenset({"1", "true", "yes", "on"})


def debug_flag_from_env() -> bool:
    """Read the ``EQQP_DEBUG`` environment variable as a boolean."""

    return os.getenv(ENV_VAR, "0").strip().lower() in _TRUTHY


_process_default: bool = debug_flag_from_env()
_override: ContextVar[Optional[bool]] = ContextVar("eqqp_debug_override", default=None)


def is_debug_enabled() -> bool:
    """
    Return whether KKT residuals are checked and logged on every solve.

    A :func:`debug_context` active in the current context wins over the
    process-wide default.
    """

    override = _override.get()
    return _process_default if override is None else override


def set_debug_enabled(enabled: bool) -> None:
    """
    Change the process-wide default.

    Contexts that currently hold a :func:`debug_context` override keep it
    until the block exits.
    """

    global _process_default
    _process_default = bool(enabled)


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Override debug mode for the current thread or task.

    Example
    -------
    >>> with debug_context(True):
    ...     # residuals are logged for solves inside the block
    ...     pass
    """

    token = _override.set(bool(enabled))
    try:
        yield
    finally:
        _override.reset(token)
