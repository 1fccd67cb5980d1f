import pytest

from raycub.mapcheck import (
    CubError,
    check_open_cell,
    check_row_ends,
    check_space,
    scan_row,
    validate_grid,
)

CLOSED = [
    "111111",
    "100N01",
    "102001",
    "111111",
]


def test_scan_row_finds_player():
    row = "10W01"
    assert scan_row(row) == (row.index("W"), "W")


def test_scan_row_without_player():
    assert scan_row("1021 ") is None


def test_scan_row_rejects_unknown_character():
    with pytest.raises(CubError, match="Wrong caracter map"):
        scan_row("10x1")


def test_scan_row_rejects_two_players():
    with pytest.raises(CubError, match="Multiple position player"):
        scan_row("1NS1")


def test_check_row_ends_skips_spaces():
    row = "  101  "
    assert check_row_ends(row) == (row.index("1"), row.rindex("1"))


def test_check_row_ends_rejects_open_start():
    with pytest.raises(CubError, match="Map error 1 start"):
        check_row_ends("  011")


@pytest.mark.parametrize("row", ["110", "11N  ", "1 2 "])
def test_check_row_ends_rejects_open_end(row):
    with pytest.raises(CubError, match="Map error 1 end"):
        check_row_ends(row)


def test_check_open_cell_on_first_row():
    with pytest.raises(CubError, match="Map error 1 end"):
        check_open_cell(["101", "111"], 1, 0)


def test_check_open_cell_on_last_row():
    with pytest.raises(CubError, match="Map error 1 end"):
        check_open_cell(["111", "101"], 1, 1)


def test_check_open_cell_short_row_above():
    with pytest.raises(CubError, match="Map error 1 end"):
        check_open_cell(["1", "101", "111"], 1, 1)


def test_check_open_cell_space_neighbour():
    with pytest.raises(CubError, match="Map error 1 end"):
        check_open_cell(["111", "10 ", "111"], 1, 1)


def test_check_space_floor_to_the_right():
    with pytest.raises(CubError, match="Map error 2"):
        check_space(["1 01"], 1, 0)


def test_check_space_floor_to_the_left():
    with pytest.raises(CubError, match="Map error 1 la"):
        check_space(["10 1"], 2, 0)


def test_check_space_floor_above():
    with pytest.raises(CubError, match="Map error 3"):
        check_space(["1", "0", " "], 0, 2)


def test_check_space_floor_below():
    with pytest.raises(CubError, match="Map error 4"):
        check_space([" ", "0", "1"], 0, 0)


def test_validate_grid_accepts_closed_map():
    assert validate_grid(CLOSED, 3.5, 1.5) == tuple(CLOSED)


def test_validate_grid_accepts_trailing_spaces():
    grid = ["111  ", "1N1", "111"]
    assert validate_grid(grid, 1.5, 1.5) == tuple(grid)


def test_validate_grid_rejects_hole_below_floor():
    grid = ["111", "1N1", "101", "1 1", "111"]
    with pytest.raises(CubError, match="Map error 1 end"):
        validate_grid(grid, 1.5, 1.5)


def test_validate_grid_rejects_player_on_border():
    grid = ["1N1", "101", "111"]
    with pytest.raises(CubError, match="Map error 1 end"):
        validate_grid(grid, 1.5, 0.5)


def test_validate_grid_rejects_open_row_start():
    grid = ["1111", "1N01", "0001", "1111"]
    with pytest.raises(CubError, match="Map error 1"):
        validate_grid(grid, 1.5, 1.5)


def test_validate_grid_rejects_empty():
    with pytest.raises(CubError, match="Missing information"):
        validate_grid([], 0.5, 0.5)