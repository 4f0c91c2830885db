"""
attempt.py - Per-horizon solving context.

A ``HorizonAttempt`` bundles the three collaborators one horizon needs: a
fresh solver session, the registry that names its variables and the recorder
that mirrors every submitted clause for DIMACS export.  Nothing is shared
between attempts.
"""

from __future__ import annotations
from typing import Iterable, Optional

from data_structures import Literal, SolverSpec
from sat_interface import SolverSession


class VariableRegistry:
    """Bijective mapping between symbolic names and solver variables."""

    def __init__(self, session: SolverSession):
        self.session = session
        self._name2var: dict[str, int] = {}
        self._var2name: dict[int, str] = {}

    def get_or_create(self, name: str) -> int:
        var = self._name2var.get(name)
        if var is not None:
            return var
        var = self.session.new_variable()
        self._name2var[name] = var
        self._var2name[var] = name
        return var

    def lookup(self, name: str) -> Optional[int]:
        return self._name2var.get(name)

    def name_of(self, var: int) -> str:
        return self._var2name[var]

    @property
    def num_vars(self) -> int:
        return len(self._name2var)

    def var_map(self) -> dict[str, int]:
        return self._name2var.copy()

    def __contains__(self, name: str) -> bool:
        return name in self._name2var


class ClauseRecorder:
    """Submits clauses to the solver and keeps an integer mirror of each."""

    def __init__(self, session: SolverSession):
        self.session = session
        self.clauses: list[list[int]] = []
        self.counts_by_group: dict[str, int] = {}

    @property
    def num_clauses(self) -> int:
        return len(self.clauses)

    def record(self, literals: Iterable[Literal], group: str = "other"):
        clause = [lit.to_int() for lit in literals]
        self.clauses.append(clause)
        self.counts_by_group[group] = self.counts_by_group.get(group, 0) + 1
        self.session.add_clause(clause)


class HorizonAttempt:
    """Solver session, variable registry and clause recorder for one horizon.

    In incremental mode a single attempt lives across horizons; ``horizon``
    then tracks the latest layer encoded and ``assumptions`` carries the
    goal literal for the current horizon.
    """

    def __init__(self, horizon: int, spec: Optional[SolverSpec] = None,
                 debug: int = 0):
        spec = spec or SolverSpec()
        self.horizon = horizon
        self.session = SolverSession(spec.solver_name, maxsec=spec.maxsec,
                                     debug=debug)
        self.registry = VariableRegistry(self.session)
        self.recorder = ClauseRecorder(self.session)
        self.assumptions: list[Literal] = []
        self.status: Optional[int] = None

    # ── Convenience accessors ────────────────────────────────────────────

    def literal(self, name: str) -> Literal:
        return Literal(self.registry.get_or_create(name))

    def add_clause(self, literals: Iterable[Literal], group: str = "other"):
        self.recorder.record(literals, group)

    @property
    def num_vars(self) -> int:
        return self.registry.num_vars

    @property
    def num_clauses(self) -> int:
        return self.recorder.num_clauses

    # ── Solving ──────────────────────────────────────────────────────────

    def solve(self) -> int:
        self.status = self.session.solve([lit.to_int() for lit in self.assumptions])
        return self.status

    def is_true(self, name: str) -> bool:
        """Model value of a named variable; unknown names are false."""
        var = self.registry.lookup(name)
        if var is None:
            return False
        return self.session.model_value(var)

    def export_clauses(self) -> list[list[int]]:
        """Recorded clauses plus the active assumptions as unit clauses."""
        return ([list(c) for c in self.recorder.clauses]
                + [[lit.to_int()] for lit in self.assumptions])

    def delete(self):
        self.session.delete()
