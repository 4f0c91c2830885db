import os

import pytest

from data_structures import Direction, Move
from justify import justify_plan, reaches_goal
from maze import Grid
from plan_output import format_moves, to_dimacs, write_cnf, write_model


def test_dimacs_header_and_terminators():
    text = to_dimacs(3, [[1, -2], [3], []])
    assert text == "p cnf 3 3\n1 -2 0\n3 0\n0\n"


def test_format_moves():
    moves = [Move(0, 0, 0, Direction.RIGHT), Move(1, 0, 1, Direction.DOWN)]
    assert format_moves(moves) == "@0: (0, 0) move right\n@1: (0, 1) move down\n"
    assert format_moves([]) == ""


def test_writers_create_directories(tmp_path):
    outdir = str(tmp_path / "nested" / "result")
    model = write_model(outdir, "m1", [Move(0, 0, 0, Direction.DOWN)])
    cnf = write_cnf(outdir, "m1", 2, [[1, 2], [-1]])
    assert model == os.path.join(outdir, "m1.model")
    assert cnf == os.path.join(outdir, "m1.cnf")
    with open(model) as f:
        assert f.read() == "@0: (0, 0) move down\n"
    with open(cnf) as f:
        assert f.read().splitlines()[0] == "p cnf 2 2"


def test_move_target_and_opposite():
    move = Move(3, 2, 2, Direction.UP)
    assert move.target == (1, 2)
    assert Direction.UP.opposite is Direction.DOWN
    assert Direction.LEFT.opposite is Direction.RIGHT


GRID = Grid.from_rows(["00", "10"])


def test_justify_accepts_legal_plan():
    moves = [Move(0, 0, 0, Direction.RIGHT), Move(1, 0, 1, Direction.DOWN)]
    assert justify_plan(GRID, moves) == (1, 1)
    assert reaches_goal(GRID, moves)


def test_justify_empty_plan_stays_on_start():
    assert justify_plan(GRID, []) == (0, 0)
    assert not reaches_goal(GRID, [])


@pytest.mark.parametrize("moves, message", [
    ([Move(1, 0, 0, Direction.RIGHT)], "out of order"),
    ([Move(0, 0, 1, Direction.DOWN)], "token position"),
    ([Move(0, 0, 0, Direction.UP)], "leaves the grid"),
    ([Move(0, 0, 0, Direction.DOWN)], "blocked"),
])
def test_justify_rejects_illegal_moves(moves, message):
    with pytest.raises(ValueError, match=message):
        justify_plan(GRID, moves)
    assert not reaches_goal(GRID, moves)
