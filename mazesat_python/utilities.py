"""
utilities.py - Variable naming and neighbourhood helpers.
"""

from __future__ import annotations
from typing import Optional

from data_structures import CONNECTOR, Direction, Domain
from maze import Grid


# ── Symbolic variable names ───────────────────────────────────────────────────

def state_name(x: int, y: int, domain: Domain, t: int) -> str:
    """``state@(x, y)=person@t``"""
    return f"state{CONNECTOR}({x}, {y})={domain}{CONNECTOR}{t}"


def action_name(x: int, y: int, direction: Direction, t: int) -> str:
    """``action@left@(x, y)@t``"""
    return f"action{CONNECTOR}{direction}{CONNECTOR}({x}, {y}){CONNECTOR}{t}"


# ── Neighbourhood ─────────────────────────────────────────────────────────────

def neighbour(x: int, y: int, direction: Direction) -> tuple[int, int]:
    dx, dy = direction.delta
    return x + dx, y + dy


def enabled_target(grid: Grid, x: int, y: int,
                   direction: Direction) -> Optional[tuple[int, int]]:
    """Destination of a move, or ``None`` if it leaves the grid or is blocked."""
    nx, ny = neighbour(x, y, direction)
    if grid.is_free(nx, ny):
        return nx, ny
    return None


def manhattan(a: tuple[int, int], b: tuple[int, int]) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])
