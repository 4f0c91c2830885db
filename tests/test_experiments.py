import os

import matplotlib
matplotlib.use("Agg")

import pytest

import count_clauses
import run_maze_experiments as rme


@pytest.fixture
def open_maze(tmp_path):
    path = tmp_path / "open2"
    path.write_text("2\n00\n00\n")
    return path


def count_output(monkeypatch, capsys, path, *extra):
    monkeypatch.setattr("sys.argv", ["count_clauses.py", "-f", str(path),
                                     "-solver", "minisat", *extra])
    count_clauses.main()
    return capsys.readouterr().out


def test_count_clauses_prints_groups_and_plan(monkeypatch, capsys, open_maze):
    out = count_output(monkeypatch, capsys, open_maze, "-maxtime", "2")
    assert "Horizon t: 1" in out
    assert "  Total Clauses:    106" in out
    assert f"  {'Mutex AMO:':<15}{29:>6,}" in out
    assert "No revisit" not in out
    assert "UNSAT at this horizon" in out
    assert "  2 actions" in out


def test_parse_count_log_from_real_run(monkeypatch, capsys, open_maze):
    out = count_output(monkeypatch, capsys, open_maze, "-maxtime", "3")
    data = rme.parse_count_log(out)
    assert data["t"] == [1, 2, 3]
    assert data["sat"] == [0, 1, 0]
    assert data["actions"] == [0, 2, 0]
    assert data["total"][0] == 106
    assert data["vars"][0] == 36
    assert data["noring"] == [0, 0, 0]
    assert data["total"][0] < data["total"][1] < data["total"][2]


def test_parse_count_log_with_no_revisit_group(monkeypatch, capsys, open_maze):
    out = count_output(monkeypatch, capsys, open_maze, "-maxtime", "2", "-axioms", "15")
    data = rme.parse_count_log(out)
    assert data["noring"] == [4, 12]


def test_parse_count_log_handles_commas():
    text = (
        "Horizon t: 7\n"
        "  Vars:           1,234\n"
        "  Total Clauses:  12,001\n"
        "  Mutex AMO:      10,000\n"
        "\n"
        "  UNSAT at this horizon\n"
    )
    data = rme.parse_count_log(text)
    assert data["t"] == [7]
    assert data["vars"] == [1234]
    assert data["total"] == [12001]
    assert data["mutex"] == [10000]
    assert data["frame"] == [0]


def test_parse_count_log_rejects_truncated_block():
    with pytest.raises(ValueError, match="Malformed"):
        rme.parse_count_log("Horizon t: 1\n  UNSAT at this horizon\n")


def test_discover_cases(tmp_path):
    (tmp_path / "suiteB").mkdir()
    (tmp_path / "suiteA").mkdir()
    (tmp_path / "suiteA" / "m2").write_text("1\n0\n")
    (tmp_path / "suiteA" / "m1").write_text("1\n0\n")
    (tmp_path / "suiteB" / "x").write_text("1\n0\n")
    (tmp_path / "stray").write_text("")
    cases = rme.discover_cases(str(tmp_path))
    assert [(c.suite, os.path.basename(c.maze_path)) for c in cases] == [
        ("suiteA", "m1"), ("suiteA", "m2"), ("suiteB", "x"),
    ]


def test_plot_grouped_series_writes_png(tmp_path):
    out = tmp_path / "total.png"
    rme.plot_grouped_series(
        {"small": [([1, 2], [10, 20]), ([1, 2], [11, 21])], "big": [([1], [5])]},
        title="Total", ylabel="Clauses", outpath=str(out), show=False,
    )
    assert out.exists()
    assert out.stat().st_size > 0
