"""
planner.py - Horizon search orchestration and model decoding.

Tries plan lengths ``k = start, start+1, ...`` below a step budget and stops
at the first satisfiable one.  By default every horizon is solved from a
freshly built attempt; with ``incremental=True`` a single solver grows one
time layer per horizon and the goal is passed as an assumption.
"""

from __future__ import annotations
import time as time_mod
from dataclasses import dataclass, field
from typing import Optional

from attempt import HorizonAttempt
from data_structures import (
    Move, SolverSpec, Sat, Unsat, STATUS_NAMES,
    DECODE_ORDER, DEFAULT_START_HORIZON, PrintCNF,
)
from maze import Grid
from maze2wff import MazeEncoder, DEFAULT_AXIOMS
from plan_output import to_dimacs
from sat_interface import check_solver
from utilities import action_name, manhattan


@dataclass
class HorizonStats:
    """Size and timing of one horizon attempt."""
    horizon: int
    status: int
    numvar: int
    numclause: int
    encode_sec: float = 0.0
    solve_sec: float = 0.0


@dataclass
class PlanResult:
    """Outcome of a horizon search.

    ``status`` is ``Sat`` when a plan was found, ``Unsat`` when every horizon
    in the budget was refuted, and ``Timeout``/``Failure`` when the solver
    gave up on some horizon.
    """
    status: int
    horizon: Optional[int] = None
    moves: list[Move] = field(default_factory=list)
    attempt: Optional[HorizonAttempt] = None
    stats: list[HorizonStats] = field(default_factory=list)

    @property
    def solved(self) -> bool:
        return self.status == Sat

    @property
    def exhausted(self) -> bool:
        return self.status == Unsat

    @property
    def tried(self) -> list[int]:
        return [s.horizon for s in self.stats]

    @property
    def status_name(self) -> str:
        return STATUS_NAMES[self.status]


# ── Model decoding ───────────────────────────────────────────────────────────

def decode_moves(attempt: HorizonAttempt, grid: Grid, k: int) -> list[Move]:
    """Read back the single true action of every time step ``0..k-1``."""
    free_cells = grid.free_cells()
    moves: list[Move] = []
    for t in range(k):
        move = _find_move(attempt, free_cells, t)
        if move is None:
            raise RuntimeError(f"No action is true at time {t} in a satisfying model")
        moves.append(move)
    return moves


def _find_move(attempt: HorizonAttempt, free_cells: list[tuple[int, int]],
               t: int) -> Optional[Move]:
    for x, y in free_cells:
        for direction in DECODE_ORDER:
            if attempt.is_true(action_name(x, y, direction, t)):
                return Move(t, x, y, direction)
    return None


# ── Planner ──────────────────────────────────────────────────────────────────

class MazePlanner:
    """Iterative-deepening SAT search over plan lengths."""

    def __init__(self, grid: Grid, solver_spec: Optional[SolverSpec] = None,
                 axioms: int = DEFAULT_AXIOMS,
                 start_horizon: int = DEFAULT_START_HORIZON,
                 incremental: bool = False, prune_lower: bool = False,
                 printflag: int = 0, debug: int = 0):
        if start_horizon < 0:
            raise ValueError(f"start_horizon must be >= 0, got {start_horizon}")
        self.grid = grid
        self.solver_spec = solver_spec or SolverSpec()
        check_solver(self.solver_spec.solver_name, self.solver_spec.maxsec)
        self.axioms = axioms
        self.start_horizon = start_horizon
        self.incremental = incremental
        self.prune_lower = prune_lower    # skip horizons shorter than the distance
        self.printflag = printflag
        self.debug = debug

        self._sat_encode_total_sec: float = 0.0
        self._sat_solve_total_sec: float = 0.0
        self._sat_calls: int = 0

    # ── Main planning loop ───────────────────────────────────────────────

    def solve(self, max_k: int) -> PlanResult:
        """Search horizons ``start_horizon <= k < max_k``."""
        if self.incremental:
            return self._solve_incremental(max_k)

        stats: list[HorizonStats] = []
        for k in range(self.start_horizon, max_k):
            if self._cannot_reach(k):
                if self.debug >= 1:
                    print(f"  Lower bound prune: cannot reach goal in {k} steps")
                continue

            if self.debug >= 1:
                print(f"Trying plan length {k}...")
            attempt = HorizonAttempt(k, self.solver_spec, debug=self.debug)
            result, stat = self._run_horizon(attempt, k)
            stats.append(stat)

            if result == Sat:
                return self._solved(attempt, k, stats)
            attempt.delete()
            if result != Unsat:
                if self.debug >= 1:
                    print(f"  Solver {self.solver_spec.solver_name} "
                          f"{STATUS_NAMES[result].lower()} at time {k}")
                return PlanResult(status=result, stats=stats)
            if self.debug >= 1:
                print(f"  No plan at time {k}")

        return PlanResult(status=Unsat, stats=stats)

    def _run_horizon(self, attempt: HorizonAttempt, k: int) -> tuple[int, HorizonStats]:
        t_encode = time_mod.time()
        encoder = MazeEncoder(self.grid, attempt, axioms=self.axioms,
                              printflag=self.printflag)
        numvar, numclause = encoder.encode(k)
        encode_sec = time_mod.time() - t_encode
        if self.debug >= 2:
            print(f"  [{attempt.session.solver_name}] {numvar} vars, {numclause} clauses")
        if self.printflag & PrintCNF:
            print(to_dimacs(numvar, attempt.export_clauses()), end='')

        t_solve = time_mod.time()
        result = attempt.solve()
        solve_sec = time_mod.time() - t_solve

        self._record_timing(encode_sec, solve_sec)
        return result, HorizonStats(k, result, numvar, numclause, encode_sec, solve_sec)

    def _solve_incremental(self, max_k: int) -> PlanResult:
        stats: list[HorizonStats] = []
        attempt = HorizonAttempt(0, self.solver_spec, debug=self.debug)
        encoder = MazeEncoder(self.grid, attempt, axioms=self.axioms,
                              printflag=self.printflag)
        encoder.encode_layer(0)
        encoded = 0

        for k in range(self.start_horizon, max_k):
            if self._cannot_reach(k):
                if self.debug >= 1:
                    print(f"  Lower bound prune: cannot reach goal in {k} steps")
                continue

            if self.debug >= 1:
                print(f"Trying plan length {k} (incremental)...")
            t_encode = time_mod.time()
            while encoded < k:
                encoded += 1
                encoder.encode_layer(encoded)
            attempt.horizon = k
            attempt.assumptions = [encoder.goal_literal(k)]
            encode_sec = time_mod.time() - t_encode

            t_solve = time_mod.time()
            result = attempt.solve()
            solve_sec = time_mod.time() - t_solve
            self._record_timing(encode_sec, solve_sec)
            stats.append(HorizonStats(k, result, attempt.num_vars,
                                      attempt.num_clauses + len(attempt.assumptions),
                                      encode_sec, solve_sec))

            if result == Sat:
                return self._solved(attempt, k, stats)
            if result != Unsat:
                attempt.delete()
                return PlanResult(status=result, stats=stats)
            if self.debug >= 1:
                print(f"  No plan at time {k}")

        attempt.delete()
        return PlanResult(status=Unsat, stats=stats)

    def _solved(self, attempt: HorizonAttempt, k: int,
                stats: list[HorizonStats]) -> PlanResult:
        moves = decode_moves(attempt, self.grid, k)
        if self.debug >= 1:
            print(f"Solved in step {k}")
        return PlanResult(status=Sat, horizon=k, moves=moves,
                          attempt=attempt, stats=stats)

    def _cannot_reach(self, k: int) -> bool:
        return self.prune_lower and k < manhattan(self.grid.start, self.grid.goal)

    # ── Timing ───────────────────────────────────────────────────────────

    def _record_timing(self, encode_sec: float, solve_sec: float):
        self._sat_encode_total_sec += encode_sec
        self._sat_solve_total_sec += solve_sec
        self._sat_calls += 1

    def get_timing_stats(self) -> dict[str, float]:
        return {
            'sat_encode_sec': self._sat_encode_total_sec,
            'sat_solve_sec': self._sat_solve_total_sec,
            'sat_calls': self._sat_calls,
        }
