import pytest
from pysat.examples.genhard import PHP

from attempt import ClauseRecorder, HorizonAttempt, VariableRegistry
from data_structures import Failure, Literal, Sat, SolverSpec, Timeout, Unsat
from sat_interface import (
    SolverSession, check_solver, solve_clauses, solve_dimacs, solver_class,
)


def test_unknown_solver_is_rejected():
    with pytest.raises(ValueError, match="Unknown solver"):
        solver_class("nosuchsolver")


@pytest.mark.parametrize("name", ["cadical", "glucose", "maple", "minisat", "M22"])
def test_known_solvers_decide_small_formula(name):
    with SolverSession(name) as session:
        v1 = session.new_variable()
        v2 = session.new_variable()
        session.add_clause([v1, v2])
        session.add_clause([v1, -v2])
        assert session.solve() == Sat
        assert session.model_value(v1) is True


def test_model_value_requires_satisfying_solve():
    with SolverSession() as session:
        v = session.new_variable()
        with pytest.raises(RuntimeError):
            session.model_value(v)
        session.add_clause([v])
        session.add_clause([-v])
        assert session.solve() == Unsat
        with pytest.raises(RuntimeError):
            session.model_value(v)


def test_empty_clause_makes_session_unsat():
    with SolverSession() as session:
        v = session.new_variable()
        session.add_clause([v])
        session.add_clause([])
        assert session.solve() == Unsat


def test_assumptions_do_not_persist():
    with SolverSession() as session:
        v = session.new_variable()
        w = session.new_variable()
        session.add_clause([v, w])
        assert session.solve(assumptions=[-v]) == Sat
        assert session.model_value(v) is False
        assert session.model_value(w) is True
        assert session.solve(assumptions=[v, -w]) == Sat
        assert session.model_value(v) is True


def test_solve_clauses_and_dimacs():
    assert solve_clauses([[1, 2], [-1], [-2]]) == Unsat
    assert solve_clauses([[1, 2], [-1]]) == Sat
    assert solve_clauses([[1], []]) == Unsat
    assert solve_dimacs("p cnf 2 2\n1 2 0\n-1 0\n") == Sat


def test_registry_memoises_names():
    with SolverSession() as session:
        registry = VariableRegistry(session)
        a = registry.get_or_create("state@(0, 0)=person@0")
        b = registry.get_or_create("state@(0, 0)=empty@0")
        assert registry.get_or_create("state@(0, 0)=person@0") == a
        assert a != b
        assert registry.num_vars == 2
        assert registry.name_of(b) == "state@(0, 0)=empty@0"
        assert "state@(0, 0)=empty@0" in registry
        assert registry.lookup("missing") is None


def test_registry_allocates_consecutive_one_based_ids():
    with SolverSession() as session:
        registry = VariableRegistry(session)
        ids = [registry.get_or_create(f"v{i}") for i in range(5)]
        assert ids == [1, 2, 3, 4, 5]


def test_recorder_mirrors_signed_literals():
    with SolverSession() as session:
        recorder = ClauseRecorder(session)
        v1, v2 = session.new_variable(), session.new_variable()
        recorder.record([Literal(v1), -Literal(v2)], group="g")
        recorder.record([Literal(v2)])
        assert recorder.clauses == [[1, -2], [2]]
        assert recorder.num_clauses == 2
        assert recorder.counts_by_group == {"g": 1, "other": 1}
        assert session.solve() == Sat
        assert session.model_value(v1) is True


def test_literal_negation():
    lit = Literal(7)
    assert lit.to_int() == 7
    assert (-lit).to_int() == -7
    assert -(-lit) == lit


def test_attempt_exports_assumptions_as_units():
    attempt = HorizonAttempt(0, SolverSpec("minisat"))
    try:
        a = attempt.literal("a")
        b = attempt.literal("b")
        attempt.add_clause([a, b])
        attempt.assumptions = [-a]
        assert attempt.solve() == Sat
        assert attempt.is_true("b")
        assert not attempt.is_true("a")
        assert attempt.export_clauses() == [[1, 2], [-1]]
    finally:
        attempt.delete()


def test_cadical_rejects_time_limit():
    assert check_solver("cadical") == solver_class("cadical")
    with pytest.raises(ValueError, match="time limit"):
        check_solver("cadical", maxsec=1)
    with pytest.raises(ValueError, match="time limit"):
        SolverSession("cadical", maxsec=1)


@pytest.mark.parametrize("name", ["glucose", "maple", "minisat"])
def test_time_limit_on_easy_formula(name):
    with SolverSession(name, maxsec=5) as session:
        v = session.new_variable()
        session.add_clause([v])
        assert session.solve() == Sat
        assert session.solve(assumptions=[-v]) == Unsat


@pytest.mark.parametrize("name", ["glucose", "minisat"])
def test_time_limit_interrupts_hard_formula(name):
    # Eleven pigeons, ten holes: far beyond a tenth of a second.
    formula = PHP(10)
    with SolverSession(name, maxsec=0.1) as session:
        while session.numvar < formula.nv:
            session.new_variable()
        for clause in formula.clauses:
            session.add_clause(clause)
        assert session.solve() == Timeout
        with pytest.raises(RuntimeError):
            session.model_value(1)


def test_solver_exception_becomes_failure(monkeypatch, capsys):
    with SolverSession("minisat") as session:
        session.add_clause([session.new_variable()])

        def broken(*args, **kwargs):
            raise RuntimeError("solver crashed")

        monkeypatch.setattr(session.solver, "solve", broken)
        assert session.solve() == Failure
        assert "solver crashed" in capsys.readouterr().err
