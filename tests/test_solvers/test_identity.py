from concurrent.futures import ThreadPoolExecutor

import pytest

from eqqp.solvers.equality_qp import EqualityConstrainedQPSolver
from eqqp.solvers.identity import SolverId, identity_accessor, singleton_id
from eqqp.solvers.ipopt import IpoptSolver


def test_singleton_is_shared_across_threads():
    with ThreadPoolExecutor(max_workers=8) as pool:
        ids = list(pool.map(lambda _: singleton_id("threaded solver"), range(64)))
    assert all(token is ids[0] for token in ids)


def test_identities_are_distinct_per_solver():
    assert EqualityConstrainedQPSolver.id() != IpoptSolver.id()
    assert IpoptSolver.id().name == "IPOPT"


def test_same_name_constructed_twice_is_a_different_identity():
    assert SolverId("IPOPT") != IpoptSolver.id()


def test_identity_is_immutable():
    token = IpoptSolver.id()
    with pytest.raises(AttributeError):
        token.name = "other"


def test_identity_accessor_returns_singleton():
    accessor = identity_accessor("accessor solver")
    assert accessor() is accessor()
    assert accessor() is singleton_id("accessor solver")


def test_ipopt_stub_is_identity_only():
    solver = IpoptSolver()
    assert not solver.available()
    assert solver.solver_id() is IpoptSolver.id()
    with pytest.raises(RuntimeError):
        solver.solve(None)
