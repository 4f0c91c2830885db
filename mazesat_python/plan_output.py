"""
plan_output.py - DIMACS export and solution files.

Writes ``<name>.cnf`` (the formula of the solved horizon) and
``<name>.model`` (one ``@<t>: (<x>, <y>) move <direction>`` line per step).
"""

from __future__ import annotations
import os

from data_structures import Move


def to_dimacs(numvar: int, clauses: list[list[int]]) -> str:
    """Return the CNF formula as a DIMACS-format string."""
    lines = [f"p cnf {numvar} {len(clauses)}"]
    for clause in clauses:
        lines.append(' '.join([str(lit) for lit in clause] + ['0']))
    return '\n'.join(lines) + '\n'


def format_moves(moves: list[Move]) -> str:
    return ''.join(f"{move}\n" for move in moves)


def _output_path(outdir: str, name: str, suffix: str) -> str:
    os.makedirs(outdir, exist_ok=True)
    return os.path.join(outdir, name + suffix)


def write_cnf(outdir: str, name: str, numvar: int,
              clauses: list[list[int]]) -> str:
    """Write ``<outdir>/<name>.cnf``; returns the path written."""
    path = _output_path(outdir, name, ".cnf")
    with open(path, 'w', encoding='utf-8') as f:
        f.write(to_dimacs(numvar, clauses))
    return path


def write_model(outdir: str, name: str, moves: list[Move]) -> str:
    """Write ``<outdir>/<name>.model``; returns the path written."""
    path = _output_path(outdir, name, ".model")
    with open(path, 'w', encoding='utf-8') as f:
        f.write(format_moves(moves))
    return path
