"""
maze2wff.py - SAT encoding of the maze planning problem.

Converts a grid and a plan length ``k`` into CNF over state fluents
``state@(x, y)=<domain>@t`` and action fluents ``action@<dir>@(x, y)@t``.
Every clause goes through the attempt's clause recorder so the formula can
also be written out in DIMACS form.
"""

from __future__ import annotations

from attempt import HorizonAttempt
from data_structures import (
    Direction, Domain, Literal, DECODE_ORDER,
    BB_OutputStatic, BB_OutputDomain, BB_OutputAction, BB_OutputNoRing,
    PrintLit,
)
from maze import Grid
from utilities import state_name, action_name, enabled_target


# ── Axiom presets ────────────────────────────────────────────────────────────

AXIOM_PRESETS = {
    7:  BB_OutputStatic | BB_OutputDomain | BB_OutputAction,                    # default
    15: BB_OutputStatic | BB_OutputDomain | BB_OutputAction | BB_OutputNoRing,  # no revisits
}

DEFAULT_AXIOMS = 7

# Order in which a free cell's moves are encoded.
ENCODE_ORDER = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)


def resolve_axioms(axioms: int) -> int:
    """Map a preset number to its flag set; raw flag combinations pass through."""
    return AXIOM_PRESETS.get(axioms, axioms)


class MazeEncoder:
    """Encodes a maze reachability problem of fixed length as CNF."""

    def __init__(self, grid: Grid, attempt: HorizonAttempt,
                 axioms: int = DEFAULT_AXIOMS, printflag: int = 0):
        self.grid = grid
        self.attempt = attempt
        self.axioms = resolve_axioms(axioms)
        self.printflag = printflag
        self._free_cells = grid.free_cells()

    # ── Main entry points ────────────────────────────────────────────────

    def encode(self, k: int) -> tuple[int, int]:
        """Emit the full formula for plan length *k*.

        Returns ``(numvar, numclause)`` of the attempt afterwards.
        """
        if self.axioms & BB_OutputStatic:
            for t in range(1, k + 1):
                self._generate_static(t)
            self._generate_initial_state()
            self._generate_goal(k)

        if self.axioms & BB_OutputDomain:
            for t in range(1, k + 1):
                self._generate_domain(t)

        if self.axioms & BB_OutputAction:
            for t in range(k):
                self._generate_actions(t)

        if self.axioms & BB_OutputNoRing:
            for t in range(1, k + 1):
                self._generate_no_ring(t)

        if self.printflag & PrintLit:
            self.print_variable_map()

        return self.attempt.num_vars, self.attempt.num_clauses

    def encode_layer(self, t: int):
        """Emit only the clauses introduced by time layer *t*.

        Encoding layers ``0..k`` one after another yields the same clause set
        as ``encode(k)`` without the goal, which incremental solving supplies
        as an assumption instead.
        """
        if t == 0:
            if self.axioms & BB_OutputStatic:
                self._generate_initial_state()
            return
        if self.axioms & BB_OutputStatic:
            self._generate_static(t)
        if self.axioms & BB_OutputDomain:
            self._generate_domain(t)
        if self.axioms & BB_OutputAction:
            self._generate_actions(t - 1)
        if self.axioms & BB_OutputNoRing:
            self._generate_no_ring(t)

    def goal_literal(self, k: int) -> Literal:
        gx, gy = self.grid.goal
        return self._state(gx, gy, Domain.PERSON, k)

    # ── Literal helpers ──────────────────────────────────────────────────

    def _state(self, x: int, y: int, domain: Domain, t: int) -> Literal:
        return self.attempt.literal(state_name(x, y, domain, t))

    def _action(self, x: int, y: int, direction: Direction, t: int) -> Literal:
        return self.attempt.literal(action_name(x, y, direction, t))

    def _add(self, literals: list[Literal], group: str):
        self.attempt.add_clause(literals, group)

    # ── Axiom generators ─────────────────────────────────────────────────

    def _generate_static(self, t: int):
        """Blocked cells stay blocked, free cells are never blocked."""
        for x, y in self.grid.cells():
            if self.grid.is_blocked(x, y):
                self._add([self._state(x, y, Domain.BLOCKED, t)], "static")
                self._add([-self._state(x, y, Domain.PERSON, t)], "static")
                self._add([-self._state(x, y, Domain.EMPTY, t)], "static")
            else:
                self._add([-self._state(x, y, Domain.BLOCKED, t)], "static")

    def _generate_initial_state(self):
        """Person on the start cell, every other free cell empty at t=0."""
        for x, y in self.grid.cells():
            if (x, y) == self.grid.start:
                self._add([self._state(x, y, Domain.PERSON, 0)], "init")
                self._add([-self._state(x, y, Domain.EMPTY, 0)], "init")
            elif not self.grid.is_blocked(x, y):
                self._add([self._state(x, y, Domain.EMPTY, 0)], "init")
                self._add([-self._state(x, y, Domain.PERSON, 0)], "init")
            else:
                self._add([-self._state(x, y, Domain.PERSON, 0)], "init")

    def _generate_goal(self, k: int):
        self._add([self.goal_literal(k)], "goal")

    def _generate_domain(self, t: int):
        """Exactly one of person/empty/blocked per cell."""
        for x, y in self.grid.cells():
            person = self._state(x, y, Domain.PERSON, t)
            empty = self._state(x, y, Domain.EMPTY, t)
            blocked = self._state(x, y, Domain.BLOCKED, t)
            self._add([person, empty, blocked], "domain")
            self._add([-person, -empty], "domain")
            self._add([-person, -blocked], "domain")
            self._add([-empty, -blocked], "domain")

    def _generate_actions(self, t: int):
        """Preconditions/effects, explanatory frame axioms and one move per step."""
        actions_at_t: list[Literal] = []
        for x, y in self._free_cells:
            moves = {d: self._action(x, y, d, t) for d in DECODE_ORDER}
            leave: list[Literal] = []
            come: list[Literal] = []
            for direction in ENCODE_ORDER:
                a = moves[direction]
                target = enabled_target(self.grid, x, y, direction)
                if target is None:
                    self._add([-a], "action")
                    continue
                tx, ty = target
                leave.append(a)
                come.append(self._action(tx, ty, direction.opposite, t))
                self._add([-a, self._state(x, y, Domain.PERSON, t)], "action")
                self._add([-a, self._state(tx, ty, Domain.EMPTY, t)], "action")
                self._add([-a, self._state(x, y, Domain.EMPTY, t + 1)], "action")
                self._add([-a, self._state(tx, ty, Domain.PERSON, t + 1)], "action")

            actions_at_t.extend(leave)
            self._add(leave + [-self._state(x, y, Domain.PERSON, t),
                               -self._state(x, y, Domain.EMPTY, t + 1)], "frame")
            self._add(come + [-self._state(x, y, Domain.EMPTY, t),
                              -self._state(x, y, Domain.PERSON, t + 1)], "frame")

        # Something moves every step, and never more than one thing.
        self._add(list(actions_at_t), "mutex")
        for i, a1 in enumerate(actions_at_t):
            for a2 in actions_at_t[i + 1:]:
                self._add([-a1, -a2], "mutex")

    def _generate_no_ring(self, t: int):
        """A free cell holds the person at most once up to time *t*."""
        for x, y in self._free_cells:
            later = self._state(x, y, Domain.PERSON, t)
            for i in range(t):
                self._add([-self._state(x, y, Domain.PERSON, i), -later], "noring")

    # ── Diagnostics ──────────────────────────────────────────────────────

    def print_variable_map(self):
        """Print the mapping from variable numbers to fluent names."""
        for name, var in sorted(self.attempt.registry.var_map().items(),
                                key=lambda item: item[1]):
            print(f"  {var}: {name}")
