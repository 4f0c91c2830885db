#!/usr/bin/env python3
"""
mazesat.py - CLI entry point for the maze SAT planner.

Usage:
    python mazesat.py <maze file or directory> [options]
"""

from __future__ import annotations
import argparse
import os
import sys
import time as time_mod

from data_structures import (
    SolverSpec, DEFAULT_MAX_AUTO, DEFAULT_START_HORIZON,
    PrintLit, PrintCNF,
)
from justify import justify_plan
from maze import MazeFormatError, load_maze
from maze2wff import DEFAULT_AXIOMS
from plan_output import write_cnf, write_model
from planner import MazePlanner
from sat_interface import check_solver


def discover_mazes(path: str) -> list[str]:
    """A single maze file, or every non-hidden file below a directory."""
    if not os.path.isdir(path):
        return [path]
    found: list[str] = []
    for root, dirs, files in os.walk(path):
        dirs[:] = sorted(d for d in dirs if not d.startswith('.'))
        for name in sorted(files):
            if not name.startswith('.'):
                found.append(os.path.join(root, name))
    return found


def solve_maze(path: str, args: argparse.Namespace, printflag: int = 0) -> bool:
    """Load, solve and write outputs for one maze.  Returns True if solved."""
    debug = args.info
    try:
        grid = load_maze(path)
    except (OSError, MazeFormatError) as e:
        print(f"Error loading maze {path}: {e}", file=sys.stderr)
        return False

    if debug >= 1:
        print(f"Maze {grid.name}: {grid.size}x{grid.size}, "
              f"{len(grid.blocked_cells())} blocked cells")

    planner = MazePlanner(
        grid,
        solver_spec=SolverSpec(solver_name=args.solver, maxsec=args.maxsec),
        axioms=args.axioms,
        start_horizon=args.start,
        incremental=args.incsat,
        prune_lower=args.lower,
        printflag=printflag,
        debug=debug,
    )
    start = time_mod.time()
    result = planner.solve(args.maxauto)
    elapsed = time_mod.time() - start

    if not result.solved:
        if result.exhausted:
            print(f"{grid.name}: can't find solution in {args.maxauto} steps.")
        else:
            print(f"{grid.name}: search stopped ({result.status_name}) "
                  f"at time {result.tried[-1]}")
        return False

    attempt = result.attempt
    try:
        if debug >= 1:
            end = justify_plan(grid, result.moves)
            print(f"  Plan replayed to {end} in {len(result.moves)} moves")
        print(f"{grid.name}: solved in step {result.horizon} ({elapsed:.2f}s)")
        model_path = write_model(args.result, grid.name, result.moves)
        print(f"  solution written to {model_path}")
        cnf_path = write_cnf(args.cnf, grid.name, attempt.session.numvar,
                             attempt.export_clauses())
        print(f"  cnf written to {cnf_path}")
    finally:
        attempt.delete()
    return True


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description='MazeSAT - SAT-based maze planning',
        add_help=False,
    )
    parser.add_argument('path', nargs='?',
                        help='Maze file or directory of maze files')
    parser.add_argument('-maxauto', type=int, default=DEFAULT_MAX_AUTO,
                        help='Step budget: horizons below this are tried')
    parser.add_argument('-start', type=int, choices=(0, 1),
                        default=DEFAULT_START_HORIZON,
                        help='First horizon to try')
    parser.add_argument('-solver', default='cadical',
                        help='SAT solver name')
    parser.add_argument('-maxsec', type=float, default=0,
                        help='Time limit per SAT call (0 = none)')
    parser.add_argument('-axioms', type=int, default=DEFAULT_AXIOMS,
                        help='Encoding preset (7, 15)')
    parser.add_argument('-incsat', action='store_true',
                        help='Incremental SAT across horizons')
    parser.add_argument('-lower', action='store_true',
                        help='Skip horizons shorter than the Manhattan distance')
    parser.add_argument('-result', default='./result',
                        help='Directory for .model files')
    parser.add_argument('-cnf', default='./cnf',
                        help='Directory for .cnf files')
    parser.add_argument('-i', '--info', type=int, default=0,
                        help='Debug info level (0-2)')
    parser.add_argument('-printlit', action='store_true',
                        help='Print variable map')
    parser.add_argument('-printcnf', action='store_true',
                        help='Print DIMACS CNF of every horizon')
    parser.add_argument('-h', '--help', action='store_true',
                        help='Show help')

    args = parser.parse_args(argv)

    if args.help or args.path is None:
        _print_usage()
        return 0 if args.help else 2

    try:
        check_solver(args.solver, args.maxsec)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    printflag = 0
    if args.printlit:
        printflag |= PrintLit
    if args.printcnf:
        printflag |= PrintCNF

    mazes = discover_mazes(args.path)
    if not mazes:
        print(f"No maze files found under {args.path}", file=sys.stderr)
        return 1

    global_start = time_mod.time()
    solved = 0
    for path in mazes:
        if solve_maze(path, args, printflag):
            solved += 1

    elapsed = time_mod.time() - global_start
    print()
    print(f"Solved {solved}/{len(mazes)} mazes")
    if elapsed < 60:
        print(f"Total time: {elapsed:.2f} seconds")
    else:
        print(f"Total time: {elapsed / 60:.2f} minutes ({elapsed:.1f} seconds)")
    return 0 if solved == len(mazes) else 1


def _print_usage():
    print("""
MazeSAT

Usage:
  python mazesat.py <maze file or directory> [options]

Options:
  -maxauto <n>      Step budget: try horizons below n (default: 100)
  -start <0|1>      First horizon to try (default: 1)
  -solver <name>    cadical (default), glucose, maple, minisat
  -maxsec <s>       Time limit per SAT call (0 = none; not with cadical)
  -axioms <type>    Encoding preset: 7 (default), 15 (no revisits)
  -incsat           Incremental SAT across horizons
  -lower            Skip horizons shorter than the Manhattan distance
  -result <dir>     Directory for .model files (default: ./result)
  -cnf <dir>        Directory for .cnf files (default: ./cnf)
  -i <level>        Debug info level (0-2)
  -printlit         Print variable map
  -printcnf         Print DIMACS CNF of every horizon

Maze file format:
  first line N, then N lines of N characters; '1' is blocked.
  The token moves from (0, 0) to (N-1, N-1).

Examples:
  python mazesat.py maze/
  python mazesat.py maze/m1 -maxauto 50 -solver glucose
""")


if __name__ == '__main__':
    sys.exit(main())
