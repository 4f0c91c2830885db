"""
justify.py - Plan justification.

After a plan is decoded, replays it on the grid from the start cell and
checks that every move is legal: consecutive time stamps, the token is on
the moving cell, and the destination is an in-bounds free cell.
"""

from __future__ import annotations

from data_structures import Move
from maze import Grid


def justify_plan(grid: Grid, moves: list[Move]) -> tuple[int, int]:
    """Replay *moves* and return the cell the token ends on.

    Raises ``ValueError`` at the first illegal move.
    """
    pos = grid.start
    for i, move in enumerate(moves):
        if move.time != i:
            raise ValueError(f"Move {move} out of order: expected time {i}")
        if (move.x, move.y) != pos:
            raise ValueError(f"Move {move} does not start at token position {pos}")
        tx, ty = move.target
        if not grid.in_bounds(tx, ty):
            raise ValueError(f"Move {move} leaves the grid")
        if grid.is_blocked(tx, ty):
            raise ValueError(f"Move {move} enters blocked cell ({tx}, {ty})")
        pos = (tx, ty)
    return pos


def reaches_goal(grid: Grid, moves: list[Move]) -> bool:
    """True when *moves* is legal and ends on the goal cell."""
    try:
        return justify_plan(grid, moves) == grid.goal
    except ValueError:
        return False
