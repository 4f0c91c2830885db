#!/usr/bin/env python3
"""
run_maze_experiments.py

Drive count_clauses.py over suites of maze files, collect the per-horizon
clause statistics it prints and chart how the encoding grows with the
horizon.

Mazes are grouped by the folder they sit in:
  mazes/
    open/
      m4
      m8
    corridors/
      ...

Example:
  python run_maze_experiments.py --root mazes --no-show
"""

from __future__ import annotations

import argparse
import glob
import os
import re
import subprocess
import sys
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import matplotlib.pyplot as plt


Series = Tuple[List[int], List[int]]
SuiteSeries = Dict[str, List[Series]]

# Report label -> series key, in the order count_clauses.py prints them.
COUNT_LABELS = {
    "Vars": "vars",
    "Total Clauses": "total",
    "Init": "init",
    "Goal": "goal",
    "Static": "static",
    "Domain": "domain",
    "Action": "action",
    "Frame": "frame",
    "Mutex AMO": "mutex",
    "No revisit": "noring",
}
SERIES_KEYS = ("t",) + tuple(COUNT_LABELS.values()) + ("actions", "sat")

HORIZON_RE = re.compile(r"^Horizon t:\s*(\d+)$")
COUNT_RE = re.compile(r"^(%s):\s*([\d,]+)$" % "|".join(map(re.escape, COUNT_LABELS)))
PLAN_LEN_RE = re.compile(r"^(\d+)\s+actions$")
UNSAT_RE = re.compile(r"^UNSAT at this horizon$")

# Charts written by main(): (series key, title, y label, file name)
CHARTS = (
    ("total", "Total clauses per horizon", "Clauses", "total_by_suite.png"),
    ("mutex", "One-move-per-step clauses per horizon", "Mutex AMO clauses", "mutex_by_suite.png"),
    ("frame", "Frame axioms per horizon", "Frame clauses", "frame_by_suite.png"),
)


def parse_count_log(text: str) -> Dict[str, List[int]]:
    """
    Turn count_clauses.py output into parallel per-horizon lists.

    Keys: t, vars, total, the per-group counts (init ... noring), actions
    and sat.  Counts may carry thousands separators.  A horizon ends at its
    '<n> actions' line (sat = 1) or its 'UNSAT at this horizon' line
    (sat = 0, actions = 0); groups the report left out count as 0.
    """
    series: Dict[str, List[int]] = {key: [] for key in SERIES_KEYS}
    block: Dict[str, int] = {}

    def finish(actions: int, sat: int):
        if "t" not in block or "total" not in block:
            raise ValueError(f"Malformed horizon block: {block}")
        block.update(actions=actions, sat=sat)
        for key in SERIES_KEYS:
            series[key].append(block.get(key, 0))
        block.clear()

    for line in (raw.strip() for raw in text.splitlines()):
        horizon = HORIZON_RE.match(line)
        if horizon:
            block.clear()
            block["t"] = int(horizon.group(1))
            continue
        if not block:
            continue

        count = COUNT_RE.match(line)
        if count:
            block[COUNT_LABELS[count.group(1)]] = int(count.group(2).replace(",", ""))
        elif PLAN_LEN_RE.match(line):
            finish(int(PLAN_LEN_RE.match(line).group(1)), 1)
        elif UNSAT_RE.match(line):
            finish(0, 0)

    return series


@dataclass(frozen=True)
class ExperimentCase:
    suite: str
    maze_path: str


def discover_cases(root: str, pattern: str = "*") -> List[ExperimentCase]:
    """Every file matching PATTERN inside each immediate subfolder of ROOT."""
    cases = []
    for entry in sorted(os.listdir(root)):
        folder = os.path.join(root, entry)
        if not os.path.isdir(folder):
            continue
        cases.extend(
            ExperimentCase(suite=entry, maze_path=path)
            for path in sorted(glob.glob(os.path.join(folder, pattern)))
            if os.path.isfile(path)
        )
    return cases


def run_count_clauses(script: str, case: ExperimentCase, maxtime: int,
                      axioms: int, solver: str) -> str:
    """Run the clause-count report for one maze and return its stdout."""
    cmd = [sys.executable, script, "-f", case.maze_path,
           "-maxtime", str(maxtime), "-axioms", str(axioms), "-solver", solver]
    proc = subprocess.run(cmd, capture_output=True, text=True)
    if proc.returncode:
        raise RuntimeError(
            f"{' '.join(cmd)} exited with {proc.returncode}\n"
            f"--- stdout ---\n{proc.stdout}\n"
            f"--- stderr ---\n{proc.stderr}"
        )
    return proc.stdout


def plot_grouped_series(
    grouped: SuiteSeries,
    title: str,
    ylabel: str,
    outpath: Optional[str],
    show: bool = True,
) -> None:
    """One line per run, coloured and labelled by suite."""
    fig, ax = plt.subplots()
    colours = plt.rcParams["axes.prop_cycle"].by_key()["color"]

    for i, (suite, runs) in enumerate(grouped.items()):
        colour = colours[i % len(colours)]
        for j, (t, y) in enumerate(runs):
            # Label only the first run so the legend lists each suite once.
            ax.plot(t, y, marker="o", color=colour, label=suite if j == 0 else None)

    ax.set_xlabel("Horizon t")
    ax.set_ylabel(ylabel)
    ax.set_title(title)
    if grouped:
        ax.legend(loc="best")
    fig.tight_layout()

    if outpath:
        fig.savefig(outpath, dpi=200)
    if show:
        plt.show()
    plt.close(fig)


def first_sat_horizon(parsed: Dict[str, List[int]]) -> Optional[int]:
    return next((t for t, sat in zip(parsed["t"], parsed["sat"]) if sat), None)


def main() -> None:
    ap = argparse.ArgumentParser(description="Chart maze encoding size against the horizon.")
    ap.add_argument("--root", required=True, help="Folder holding one subfolder per suite.")
    ap.add_argument("--count_clauses", default=os.path.join("mazesat_python", "count_clauses.py"))
    ap.add_argument("--maze_glob", default="*", help="Maze file pattern inside each suite.")
    ap.add_argument("--maxtime", type=int, default=10)
    ap.add_argument("--axioms", type=int, default=7)
    ap.add_argument("--solver", default="cadical")
    ap.add_argument("--outdir", default="plots")
    ap.add_argument("--no-show", action="store_true", help="Only write the PNG files.")
    args = ap.parse_args()

    cases = discover_cases(args.root, pattern=args.maze_glob)
    if not cases:
        raise SystemExit(f"Nothing matches {args.root}/<suite>/{args.maze_glob}")
    os.makedirs(args.outdir, exist_ok=True)

    by_chart: Dict[str, SuiteSeries] = {key: {} for key, *_ in CHARTS}
    for case in cases:
        report = run_count_clauses(args.count_clauses, case, args.maxtime,
                                   args.axioms, args.solver)
        print(report)
        parsed = parse_count_log(report)
        for key in by_chart:
            by_chart[key].setdefault(case.suite, []).append((parsed["t"], parsed[key]))

        first = first_sat_horizon(parsed)
        print(f"[{case.suite}] {os.path.basename(case.maze_path)}: "
              f"{len(parsed['t'])} horizons, first SAT at "
              f"{first if first is not None else 'none'}")

    for key, title, ylabel, filename in CHARTS:
        plot_grouped_series(by_chart[key], title=title, ylabel=ylabel,
                            outpath=os.path.join(args.outdir, filename),
                            show=not args.no_show)


if __name__ == "__main__":
    main()
