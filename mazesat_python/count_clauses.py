"""
count_clauses.py - Print per-group CNF clause counts at each horizon,
                   then solve and print the plan.

Usage:
    python count_clauses.py -f <maze file> [-maxtime <n>]

Example:
    python count_clauses.py -f maze/m1 -maxtime 12
"""
import argparse
import sys

from attempt import HorizonAttempt
from data_structures import Sat, SolverSpec
from maze import MazeFormatError, load_maze
from maze2wff import MazeEncoder, DEFAULT_AXIOMS
from planner import decode_moves

GROUPS = (
    ("Init", "init"),
    ("Goal", "goal"),
    ("Static", "static"),
    ("Domain", "domain"),
    ("Action", "action"),
    ("Frame", "frame"),
    ("Mutex AMO", "mutex"),
    ("No revisit", "noring"),
)


def main():
    parser = argparse.ArgumentParser(description='Count CNF clauses per group at each horizon, then solve')
    parser.add_argument('-f', '--maze', required=True)
    parser.add_argument('-maxtime', type=int, default=10)
    parser.add_argument('-axioms', type=int, default=DEFAULT_AXIOMS)
    parser.add_argument('-solver', default='cadical')
    args = parser.parse_args()

    try:
        grid = load_maze(args.maze)
    except (OSError, MazeFormatError) as e:
        print(f"Error loading maze {args.maze}: {e}", file=sys.stderr)
        sys.exit(1)

    for maxtime in range(1, args.maxtime + 1):
        attempt = HorizonAttempt(maxtime, SolverSpec(solver_name=args.solver))
        enc = MazeEncoder(grid, attempt, axioms=args.axioms)
        numvar, numclause = enc.encode(maxtime)
        counts = attempt.recorder.counts_by_group

        print(f"Horizon t: {maxtime}")
        print(f"  Vars:          {numvar:>6,}")
        print(f"  Total Clauses: {numclause:>6,}")
        for label, group in GROUPS:
            if group in counts:
                print(f"  {label + ':':<15}{counts[group]:>6,}")

        status = attempt.solve()
        if status == Sat:
            moves = decode_moves(attempt, grid, maxtime)
            print("\n  Plan:")
            for move in moves:
                print(f"    {move}")
            print(f"  {len(moves)} actions")
        else:
            print("\n  UNSAT at this horizon")
        attempt.delete()

        print()


if __name__ == '__main__':
    main()
