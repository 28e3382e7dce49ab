"""Reading and validating ``.ber`` map files."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path

WALL = "1"
EMPTY = "0"
PLAYER = "P"
EXIT = "E"
COLLECTIBLE = "C"
ENEMY = "X"

VALID_TILES = frozenset({WALL, EMPTY, PLAYER, EXIT, COLLECTIBLE, ENEMY})

MAP_SUFFIX = ".ber"


class MapError(Exception):
    """Raised when a map file is missing, malformed or unplayable."""


class GameMap:
    """A mutable rectangular grid of single-character tiles."""

    def __init__(self, rows: Iterable[str]) -> None:
        self._grid = [list(row) for row in rows]

    @property
    def width(self) -> int:
        return len(self._grid[0]) if self._grid else 0

    @property
    def height(self) -> int:
        return len(self._grid)

    def tile(self, x: int, y: int) -> str:
        """Return the tile at column ``x`` and row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"position ({x}, {y}) is outside the map")
        return self._grid[y][x]

    def set_tile(self, x: int, y: int, tile: str) -> None:
        """Replace the tile at column ``x`` and row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"position ({x}, {y}) is outside the map")
        self._grid[y][x] = tile

    def _positions(self) -> Iterator[tuple[int, int, str]]:
        for y, row in enumerate(self._grid):
            for x, tile in enumerate(row):
                yield x, y, tile

    def find(self, tile: str) -> tuple[int, int] | None:
        """Return ``(x, y)`` of the first matching tile in reading order."""
        return next(((x, y) for x, y, t in self._positions() if t == tile), None)

    def count(self, tile: str) -> int:
        """Return how many cells hold ``tile``."""
        return sum(row.count(tile) for row in self._grid)

    def lines(self) -> list[str]:
        """Return the map as a list of row strings."""
        return ["".join(row) for row in self._grid]

    def __str__(self) -> str:
        return "\n".join(self.lines())


def check_path(filename: str) -> bool:
    """Tell whether ``filename`` names a ``.ber`` file with a non-empty stem."""
    name = str(filename)
    if len(name) <= len(MAP_SUFFIX) or not name.endswith(MAP_SUFFIX):
        return False
    return name[-len(MAP_SUFFIX) - 1] != "/"


def read_map(filename: str | Path) -> list[str]:
    """Read the rows of a map file, dropping each line's trailing newline."""
    with open(filename, encoding="utf-8", newline="") as handle:
        data = handle.read()
    if not data:
        return []
    rows = data.split("\n")
    if data.endswith("\n"):
        rows.pop()
    return rows


def is_rectangular(rows: list[str]) -> bool:
    """Tell whether there is at least one row and all rows share a length."""
    if not rows:
        return False
    return len({len(row) for row in rows}) == 1


def is_walled(rows: list[str]) -> bool:
    """Tell whether the outer border of the map is made entirely of walls."""
    if not rows or not rows[0]:
        return False
    width = len(rows[0])
    if any(row[:width] != WALL * width for row in (rows[0], rows[-1])):
        return False
    return all(row[:1] == WALL and row[width - 1 : width] == WALL for row in rows)


def has_required_tiles(rows: list[str]) -> bool:
    """Tell whether there is one player, one exit and at least one collectible."""
    text = "".join(rows)
    return (
        text.count(PLAYER) == 1
        and text.count(EXIT) == 1
        and text.count(COLLECTIBLE) > 0
    )


def has_only_valid_tiles(rows: list[str]) -> bool:
    """Tell whether every character is a known tile."""
    return all(set(row) <= VALID_TILES for row in rows)


def flood_fill(grid: list[list[str]], x: int, y: int) -> None:
    """Mark every cell reachable from ``(x, y)`` as a wall, in place.

    Walls stop the fill; an exit is marked but not passed through.
    """
    pending = [(x, y)]
    while pending:
        cx, cy = pending.pop()
        if cx <= 0 or cy <= 0 or cy >= len(grid) or cx >= len(grid[cy]):
            continue
        tile = grid[cy][cx]
        if tile == WALL:
            continue
        grid[cy][cx] = WALL
        if tile == EXIT:
            continue
        pending.extend(((cx + 1, cy), (cx - 1, cy), (cx, cy + 1), (cx, cy - 1)))


def path_is_valid(rows: list[str], x: int, y: int) -> bool:
    """Tell whether every collectible and the exit are reachable from ``(x, y)``."""
    grid = [list(row) for row in rows]
    flood_fill(grid, x, y)
    targets = {COLLECTIBLE, EXIT, PLAYER}
    return not any(tile in targets for row in grid for tile in row)


def validate_map(rows: list[str]) -> GameMap:
    """Check the rows in the order the game requires and build a map."""
    if not rows:
        raise MapError("Failed to read map.")
    if not is_rectangular(rows):
        raise MapError("Map is not rectangular.")
    if not has_required_tiles(rows):
        raise MapError("Map is not complete.")
    if not is_walled(rows):
        raise MapError("Wall is not complete.")
    game_map = GameMap(rows)
    start = game_map.find(PLAYER)
    if start is None or not path_is_valid(rows, *start):
        raise MapError("Map is not accessible.")
    if not has_only_valid_tiles(rows):
        raise MapError("Invalid Character in map")
    return game_map


def load_map(filename: str | Path) -> GameMap:
    """Read and validate a ``.ber`` map file.

    Raises MapError for a bad name or an unplayable map, OSError when the
    file cannot be read.
    """
    if not check_path(str(filename)):
        raise MapError("Invalid path.")
    return validate_map(read_map(filename))