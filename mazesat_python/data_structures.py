"""
data_structures.py - Core data types for the maze SAT planner.

Status codes, cell domains, move directions, constraint-group flags and
the solver settings shared by the encoder, planner and CLI.
"""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
CONNECTOR = '@'
DEFAULT_MAX_AUTO = 100
DEFAULT_START_HORIZON = 1

# SAT solver return values
Unsat = 0
Sat = 1
Timeout = 2
Failure = 3

STATUS_NAMES = {
    Unsat: "UNSAT",
    Sat: "SAT",
    Timeout: "TIMEOUT",
    Failure: "FAILURE",
}

# Print masks
PrintLit = 1
PrintCNF = 2

# Constraint-group output flags
BB_OutputStatic = 1        # static domain fixing + initial state + goal
BB_OutputDomain = 2        # exactly-one domain per (cell, time)
BB_OutputAction = 4        # action semantics, frame axioms, one move per step
BB_OutputNoRing = 8        # no cell occupied twice across the horizon


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Domain(str, Enum):
    """Contents of one cell at one time step."""
    PERSON = "person"
    EMPTY = "empty"
    BLOCKED = "blocked"

    def __str__(self) -> str:
        return self.value


class Direction(str, Enum):
    """A unit move on the grid.  ``x`` is the row, ``y`` the column."""
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"

    def __str__(self) -> str:
        return self.value

    @property
    def delta(self) -> tuple[int, int]:
        return DIRECTION_DELTAS[self]

    @property
    def opposite(self) -> 'Direction':
        return OPPOSITES[self]


DIRECTION_DELTAS = {
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
}

OPPOSITES = {
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
}

# Order in which a cell's actions are scanned when decoding a model.
DECODE_ORDER = (Direction.LEFT, Direction.RIGHT, Direction.UP, Direction.DOWN)


# ---------------------------------------------------------------------------
# Literal - signed reference to a propositional variable
# ---------------------------------------------------------------------------

class Literal(NamedTuple):
    """A variable together with its polarity."""
    var: int
    negated: bool = False

    def __neg__(self) -> 'Literal':
        return Literal(self.var, not self.negated)

    def to_int(self) -> int:
        """Signed DIMACS literal."""
        return -self.var if self.negated else self.var


# ---------------------------------------------------------------------------
# Move - one decoded step of a plan
# ---------------------------------------------------------------------------

class Move(NamedTuple):
    time: int
    x: int
    y: int
    direction: Direction

    @property
    def target(self) -> tuple[int, int]:
        dx, dy = self.direction.delta
        return self.x + dx, self.y + dy

    def __str__(self) -> str:
        return f"@{self.time}: ({self.x}, {self.y}) move {self.direction}"


# ---------------------------------------------------------------------------
# Solver settings
# ---------------------------------------------------------------------------

@dataclass
class SolverSpec:
    """Which SAT solver to run and how long a single call may take."""
    solver_name: str = "cadical"     # "cadical", "glucose", "maple", "minisat"
    maxsec: float = 0                # 0 = no limit
