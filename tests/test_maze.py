import pytest

from maze import Grid, MazeFormatError, load_maze, parse_maze


def test_parse_basic_maze():
    grid = parse_maze("2\n00\n10\n", name="m1")
    assert grid.size == 2
    assert grid.name == "m1"
    assert grid.is_blocked(1, 0)
    assert not grid.is_blocked(0, 1)
    assert grid.start == (0, 0)
    assert grid.goal == (1, 1)
    assert grid.free_cells() == [(0, 0), (0, 1), (1, 1)]
    assert grid.blocked_cells() == [(1, 0)]


def test_parse_without_trailing_newline_and_other_free_chars():
    grid = parse_maze("3\n0.0\n1x1\n000")
    assert grid.size == 3
    assert grid.free_cells() == [(0, 0), (0, 1), (0, 2), (1, 1), (2, 0), (2, 1), (2, 2)]


def test_parse_crlf():
    grid = parse_maze("2\r\n00\r\n00\r\n")
    assert grid.size == 2
    assert grid.blocked_cells() == []


@pytest.mark.parametrize("text, message", [
    ("x\n0\n", "bad size"),
    ("2\n00\n", "lines count"),
    ("2\n00\n0\n", "line length"),
    ("2\n10\n00\n", "start point is blocked"),
    ("0\n", "size must be positive"),
])
def test_malformed_mazes_are_rejected(text, message):
    with pytest.raises(MazeFormatError, match=message):
        parse_maze(text)


def test_format_error_is_a_value_error():
    with pytest.raises(ValueError):
        Grid.from_rows(["1"])


def test_load_maze_names_grid_after_file(tmp_path):
    path = tmp_path / "tiny"
    path.write_text("1\n0\n")
    grid = load_maze(str(path))
    assert grid.name == "tiny"
    assert grid.start == grid.goal == (0, 0)


def test_grid_is_immutable():
    grid = Grid.from_rows(["00", "00"])
    with pytest.raises(Exception):
        grid.size = 3


def test_render_round_trips_rows():
    rows = ["000", "101", "000"]
    assert Grid.from_rows(rows).render() == "\n".join(rows)


def test_load_maze_rejects_undecodable_bytes(tmp_path):
    path = tmp_path / "binary"
    path.write_bytes(b"2\n0\xff\n00\n")
    with pytest.raises(MazeFormatError, match="not UTF-8"):
        load_maze(str(path))
