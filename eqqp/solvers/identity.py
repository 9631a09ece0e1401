"""
Solver identities used for dispatch and reporting.

Each solver exposes one process-wide :class:`SolverId`. Identities are built
on first access under a lock and are immutable afterwards, so concurrent
solves may read them freely.
"""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass, field
from typing import Callable, Dict

_id_counter = itertools.count(1)
_id_counter_lock = threading.Lock()


def _next_id() -> int:
    with _id_counter_lock:
        return next(_id_counter)


@dataclass(frozen=True)
class SolverId:
    """
    Identity token of a solver.

    Two tokens compare equal only when they came from the same construction;
    a second ``SolverId`` with the same name is a different identity.
    """

    name: str
    _id: int = field(default_factory=_next_id, repr=False)


_registry: Dict[str, SolverId] = {}
_registry_lock = threading.Lock()


def singleton_id(name: str) -> SolverId:
    """
    Return the process-wide identity registered under ``name``.

    The first call constructs the token; later calls, from any thread,
    return the same object.
    """

    existing = _registry.get(name)
    if existing is not None:
        return existing
    with _registry_lock:
        existing = _registry.get(name)
        if existing is None:
            existing = SolverId(name)
            _registry[name] = existing
        return existing


def identity_accessor(name: str) -> Callable[[], SolverId]:
    """Build a zero-argument accessor bound to the identity ``name``."""

    def accessor() -> SolverId:
        return singleton_id(name)

    accessor.__doc__ = f"Return the solver identity {name!r}."
    return accessor


__all__ = ["SolverId", "singleton_id", "identity_accessor"]
