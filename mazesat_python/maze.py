"""
maze.py - Grid model and maze file loading.

A maze file holds the grid size ``N`` on its first line followed by exactly
``N`` lines of ``N`` characters each; ``'1'`` marks a blocked cell and any
other character a free one.  The token starts at ``(0, 0)`` and has to reach
``(N-1, N-1)``.
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Iterator


class MazeFormatError(ValueError):
    """Raised when a maze description is malformed."""


@dataclass(frozen=True)
class Grid:
    """Static maze: ``blocked[x][y]`` with ``x`` the row, ``y`` the column."""
    size: int
    blocked: tuple[tuple[bool, ...], ...]
    name: str = ""

    def __post_init__(self):
        if self.size < 1:
            raise MazeFormatError(f"invalid Maze: size must be positive, got {self.size}")
        if len(self.blocked) != self.size:
            raise MazeFormatError("invalid Maze: lines count != size")
        for i, row in enumerate(self.blocked):
            if len(row) != self.size:
                raise MazeFormatError(f"invalid Maze: line length != size in line {i}")
        if self.blocked[0][0]:
            raise MazeFormatError("invalid Maze: start point is blocked")

    @classmethod
    def from_rows(cls, rows: list[str], name: str = "") -> 'Grid':
        """Build a grid from row strings such as ``["00", "10"]``."""
        blocked = tuple(tuple(c == '1' for c in row) for row in rows)
        return cls(size=len(rows), blocked=blocked, name=name)

    @property
    def start(self) -> tuple[int, int]:
        return 0, 0

    @property
    def goal(self) -> tuple[int, int]:
        return self.size - 1, self.size - 1

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def is_blocked(self, x: int, y: int) -> bool:
        return self.blocked[x][y]

    def is_free(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and not self.blocked[x][y]

    def cells(self) -> Iterator[tuple[int, int]]:
        for x in range(self.size):
            for y in range(self.size):
                yield x, y

    def free_cells(self) -> list[tuple[int, int]]:
        """Free cells in row-major order."""
        return [(x, y) for x, y in self.cells() if not self.blocked[x][y]]

    def blocked_cells(self) -> list[tuple[int, int]]:
        return [(x, y) for x, y in self.cells() if self.blocked[x][y]]

    def render(self) -> str:
        return '\n'.join(''.join('1' if b else '0' for b in row)
                         for row in self.blocked)


def parse_maze(text: str, name: str = "") -> Grid:
    """Parse the textual maze format into a ``Grid``."""
    lines = text.split('\n')
    # Tolerate one trailing newline (and CRLF line endings).
    lines = [line.rstrip('\r') for line in lines]
    if len(lines) > 1 and lines[-1] == '':
        lines.pop()
    try:
        size = int(lines[0].strip())
    except ValueError:
        raise MazeFormatError(f"invalid Maze: bad size line {lines[0]!r}") from None
    rows = lines[1:]
    if len(rows) != size:
        raise MazeFormatError("invalid Maze: lines count != size")
    for i, row in enumerate(rows):
        if len(row) != size:
            raise MazeFormatError(f"invalid Maze: line length != size in line {i}")
    return Grid.from_rows(rows, name=name)


def load_maze(path: str) -> Grid:
    """Read and parse a maze file; the grid is named after the file."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise MazeFormatError(f"invalid Maze: not UTF-8 text (byte {e.start})") from None
    return parse_maze(text, name=os.path.basename(path))
