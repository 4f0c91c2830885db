"""
sat_interface.py - Interface to SAT solvers via PySAT.

Uses the python-sat (PySAT) library for SAT solving. No C++ compilation
or external binaries required.

Available solvers:
  - cadical  (CaDiCaL 1.9.5) - default, top SAT competition performer
  - glucose  (Glucose 4.2)   - strong on industrial benchmarks
  - maple   (MapleChrono)    - SAT competition 2018 winner
  - minisat (MiniSat 2.2)    - classic CDCL solver

Install: pip install python-sat
"""

from __future__ import annotations
import sys
from threading import Timer
from typing import Optional

from pysat.formula import CNF
from pysat.solvers import Cadical195, Glucose42, MapleChrono, Minisat22

from data_structures import Sat, Unsat, Timeout, Failure


# ── Solver dispatch ──────────────────────────────────────────────────────────

SOLVER_CLASSES = {
    'cadical': Cadical195,
    'cd195': Cadical195,
    'glucose': Glucose42,
    'g42': Glucose42,
    'maple': MapleChrono,
    'mcb': MapleChrono,
    'minisat': Minisat22,
    'm22': Minisat22,
}

DEFAULT_SOLVER = 'cadical'

# No solve_limited() in PySAT's CaDiCaL binding, so no per-call time limit.
UNLIMITED_SOLVERS = (Cadical195,)


def solver_class(solver_name: Optional[str]):
    key = (solver_name or DEFAULT_SOLVER).lower()
    solver_cls = SOLVER_CLASSES.get(key)
    if solver_cls is None:
        raise ValueError(f"Unknown solver '{solver_name}'")
    return key, solver_cls


def check_solver(solver_name: Optional[str], maxsec: float = 0):
    """Resolve a solver name and make sure it can honour *maxsec*.

    Raises ``ValueError`` for an unknown name, or for a time limit on a
    solver that cannot be interrupted.
    """
    key, solver_cls = solver_class(solver_name)
    if maxsec > 0 and solver_cls in UNLIMITED_SOLVERS:
        raise ValueError(f"Solver '{key}' does not support a time limit; "
                         "use glucose, maple or minisat with -maxsec")
    return key, solver_cls


def _print_search_stats(solver, before: Optional[dict]):
    if before is None:
        return
    after = solver.accum_stats().copy()
    delta = {k: int(after.get(k, 0)) - int(before.get(k, 0))
             for k in after.keys()}
    print("  SAT search: "
          f"decisions={delta.get('decisions', 0)} "
          f"conflicts={delta.get('conflicts', 0)} "
          f"propagations={delta.get('propagations', 0)}")


class SolverSession:
    """One PySAT solver instance plus the variable space handed out from it.

    Variables are consecutive positive integers starting at 1.  Clauses are
    lists of signed integers.  ``model_value`` may only be called after a
    ``solve`` that returned ``Sat``.
    """

    def __init__(self, solver_name: str = DEFAULT_SOLVER, maxsec: float = 0,
                 debug: int = 0):
        self.solver_name, self.solver_cls = check_solver(solver_name, maxsec)
        self.maxsec = maxsec
        self.debug = debug
        self.solver = self.solver_cls()
        self.numvar: int = 0
        self._inconsistent = False
        self._soln: Optional[list[int]] = None

    def __enter__(self) -> 'SolverSession':
        return self

    def __exit__(self, exc_type, exc, tb):
        self.delete()

    # ── Variables and clauses ────────────────────────────────────────────

    def new_variable(self) -> int:
        self.numvar += 1
        return self.numvar

    def add_clause(self, clause: list[int]):
        # The empty clause cannot be satisfied; the solver never sees it.
        if not clause:
            self._inconsistent = True
            return
        self.solver.add_clause(clause)

    # ── Solving ──────────────────────────────────────────────────────────

    def solve(self, assumptions: Optional[list[int]] = None) -> int:
        """Decide satisfiability under optional assumption literals.

        Returns one of ``Sat``, ``Unsat``, ``Timeout``, ``Failure``.
        """
        self._soln = None
        if self._inconsistent:
            return Unsat
        assumps = assumptions if assumptions is not None else []
        try:
            before = self.solver.accum_stats().copy() \
                if self.debug >= 1 and hasattr(self.solver, 'accum_stats') else None
            if self.maxsec > 0:
                timer = Timer(self.maxsec, self.solver.interrupt)
                timer.start()
                try:
                    result = self.solver.solve_limited(assumptions=assumps,
                                                       expect_interrupt=True)
                finally:
                    timer.cancel()
                    self.solver.clear_interrupt()
            else:
                result = self.solver.solve(assumptions=assumps)
        except Exception as e:
            print(f"  SAT solver error: {e}", file=sys.stderr)
            return Failure

        if self.debug >= 1:
            _print_search_stats(self.solver, before)

        if result is True:
            soln = [0] * (self.numvar + 1)
            for lit in self.solver.get_model() or []:
                var = abs(lit)
                if 1 <= var <= self.numvar:
                    soln[var] = 1 if lit > 0 else 0
            self._soln = soln
            return Sat
        if result is False:
            return Unsat
        return Timeout

    def model_value(self, var: int) -> bool:
        if self._soln is None:
            raise RuntimeError("model_value() called without a satisfying assignment")
        if not 1 <= var <= self.numvar:
            raise RuntimeError(f"Variable {var} was not allocated by this session")
        return self._soln[var] == 1

    def delete(self):
        if self.solver is not None:
            try:
                self.solver.delete()
            finally:
                self.solver = None


# ── One-shot solving of a clause list ────────────────────────────────────────

def solve_clauses(clauses: list[list[int]], solver_name: str = DEFAULT_SOLVER) -> int:
    """Run a fresh solver on *clauses* and return ``Sat`` or ``Unsat``."""
    if any(not clause for clause in clauses):
        return Unsat
    _, solver_cls = solver_class(solver_name)
    with solver_cls(bootstrap_with=clauses) as solver:
        return Sat if solver.solve() else Unsat


def solve_dimacs(text: str, solver_name: str = DEFAULT_SOLVER) -> int:
    """Parse a DIMACS string and solve it independently of any session."""
    formula = CNF(from_string=text)
    return solve_clauses(formula.clauses, solver_name)
