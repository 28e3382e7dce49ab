import pytest

from solong.mapfile import (
    GameMap,
    MapError,
    check_path,
    flood_fill,
    has_only_valid_tiles,
    has_required_tiles,
    is_rectangular,
    is_walled,
    load_map,
    path_is_valid,
    read_map,
    validate_map,
)

GOOD = [
    "111111",
    "1P0C01",
    "100001",
    "1C00E1",
    "111111",
]


def write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8", newline="")
    return path


@pytest.mark.parametrize(
    "name, expected",
    [
        ("map.ber", True),
        ("maps/level.ber", True),
        (".ber", False),
        ("maps/.ber", False),
        ("map.txt", False),
        ("map.ber.txt", False),
        ("ber", False),
    ],
)
def test_check_path(name, expected):
    assert check_path(name) is expected


def test_read_map_strips_newlines(tmp_path):
    path = write(tmp_path, "a.ber", "\n".join(GOOD) + "\n")
    assert read_map(path) == GOOD


def test_read_map_without_final_newline(tmp_path):
    path = write(tmp_path, "a.ber", "\n".join(GOOD))
    assert read_map(path) == GOOD


def test_read_map_keeps_blank_lines(tmp_path):
    path = write(tmp_path, "a.ber", "11\n\n11\n")
    assert read_map(path) == ["11", "", "11"]


def test_read_map_empty_file(tmp_path):
    path = write(tmp_path, "a.ber", "")
    assert read_map(path) == []


def test_read_map_missing_file(tmp_path):
    with pytest.raises(OSError):
        read_map(tmp_path / "missing.ber")


def test_is_rectangular():
    assert is_rectangular(GOOD)
    assert not is_rectangular(["111", "11"])
    assert not is_rectangular([])


def test_is_walled():
    assert is_walled(GOOD)
    broken_top = ["101111"] + GOOD[1:]
    assert not is_walled(broken_top)
    broken_side = GOOD[:2] + ["000001"] + GOOD[3:]
    assert not is_walled(broken_side)
    broken_bottom = GOOD[:-1] + ["111101"]
    assert not is_walled(broken_bottom)


def test_has_required_tiles():
    assert has_required_tiles(GOOD)
    assert not has_required_tiles([row.replace("C", "0") for row in GOOD])
    assert not has_required_tiles(GOOD + ["1P1"])
    assert not has_required_tiles(GOOD + ["1E1"])


def test_has_only_valid_tiles():
    assert has_only_valid_tiles(GOOD + ["1X1"])
    assert not has_only_valid_tiles(GOOD + ["1Z1"])


def test_flood_fill_marks_reachable_cells():
    grid = [list(row) for row in GOOD]
    flood_fill(grid, 1, 1)
    assert all(tile == "1" for row in grid for tile in row)


def test_flood_fill_stops_at_walls():
    rows = ["11111", "1P101", "11111"]
    grid = [list(row) for row in rows]
    flood_fill(grid, 1, 1)
    assert grid[1][3] == "0"
    assert grid[1][1] == "1"


def test_flood_fill_does_not_pass_exit():
    rows = ["111111", "1PE0C1", "111111"]
    grid = [list(row) for row in rows]
    flood_fill(grid, 1, 1)
    assert grid[1][2] == "1"
    assert grid[1][4] == "C"


def test_path_is_valid():
    assert path_is_valid(GOOD, 1, 1)
    assert not path_is_valid(["111111", "1PE0C1", "111111"], 1, 1)
    assert not path_is_valid(["1111111", "1P0101E", "1C01111"][:2] + ["1111111"], 1, 1)


def test_path_is_valid_leaves_rows_untouched():
    rows = list(GOOD)
    path_is_valid(rows, 1, 1)
    assert rows == GOOD


def test_validate_map_builds_map():
    game_map = validate_map(GOOD)
    assert game_map.lines() == GOOD
    assert game_map.width == len(GOOD[0])
    assert game_map.height == len(GOOD)
    assert game_map.find("P") == (1, 1)
    assert game_map.find("E") == (4, 3)


@pytest.mark.parametrize(
    "rows, message",
    [
        ([], "Failed to read map."),
        (["1111", "111"], "Map is not rectangular."),
        (["1111", "1P01", "1111"], "Map is not complete."),
        (["0111", "1PCE", "1111"], "Wall is not complete."),
        (["11111", "1PE01", "111C1", "11111"], "Map is not accessible."),
        (["111111", "1PZCE1", "111111"], "Invalid Character in map"),
    ],
)
def test_validate_map_errors(rows, message):
    with pytest.raises(MapError) as excinfo:
        validate_map(rows)
    assert str(excinfo.value) == message


def test_validate_map_checks_rectangle_before_tiles():
    with pytest.raises(MapError, match="rectangular"):
        validate_map(["111", "11111"])


def test_game_map_tiles():
    game_map = GameMap(GOOD)
    assert game_map.tile(3, 1) == "C"
    game_map.set_tile(3, 1, "0")
    assert game_map.tile(3, 1) == "0"
    assert game_map.count("C") == 1
    assert game_map.find("X") is None


def test_game_map_out_of_bounds():
    game_map = GameMap(GOOD)
    with pytest.raises(IndexError):
        game_map.tile(len(GOOD[0]), 0)
    with pytest.raises(IndexError):
        game_map.set_tile(0, -1, "0")


def test_game_map_lines_are_a_copy():
    game_map = GameMap(GOOD)
    lines = game_map.lines()
    lines[0] = "changed"
    assert game_map.lines() == GOOD


def test_load_map_round_trip(tmp_path):
    path = write(tmp_path, "level.ber", "\n".join(GOOD) + "\n")
    assert load_map(path).lines() == GOOD


def test_load_map_rejects_bad_name(tmp_path):
    path = write(tmp_path, "level.txt", "\n".join(GOOD) + "\n")
    with pytest.raises(MapError, match="Invalid path."):
        load_map(path)


def test_load_map_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_map(tmp_path / "nothing.ber")


def test_load_map_empty_file(tmp_path):
    path = write(tmp_path, "empty.ber", "")
    with pytest.raises(MapError, match="Failed to read map."):
        load_map(path)