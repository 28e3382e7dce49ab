"""Terminal front end: draws the map with curses and feeds keys to the game."""

from __future__ import annotations

import curses
import sys
from collections.abc import Sequence
from typing import Protocol

from solong.game import Direction, Game, GameOver, Outcome
from solong.mapfile import (
    COLLECTIBLE,
    EMPTY,
    ENEMY,
    EXIT,
    PLAYER,
    WALL,
    MapError,
)

ESC_KEY = 27
NO_KEY = -1

GLYPHS = {
    WALL: "#",
    EMPTY: " ",
    PLAYER: "@",
    COLLECTIBLE: "$",
    EXIT: "D",
    ENEMY: "X",
}
OPEN_EXIT_GLYPH = "O"
MOVES_LABEL = "Moves:"
USAGE = "Usage: solong map.ber"

_KEY_DIRECTIONS = {
    curses.KEY_UP: Direction.UP,
    curses.KEY_DOWN: Direction.DOWN,
    curses.KEY_LEFT: Direction.LEFT,
    curses.KEY_RIGHT: Direction.RIGHT,
}


class _Screen(Protocol):
    def keypad(self, flag: bool) -> None: ...
    def nodelay(self, flag: bool) -> None: ...
    def erase(self) -> None: ...
    def addstr(self, y: int, x: int, text: str) -> None: ...
    def refresh(self) -> None: ...
    def getch(self) -> int: ...


def render(game: Game) -> list[str]:
    """Return the screen lines for the current state of ``game``."""
    exit_glyph = OPEN_EXIT_GLYPH if game.no_collectibles_left() else GLYPHS[EXIT]
    lines = [
        "".join(exit_glyph if tile == EXIT else GLYPHS.get(tile, tile) for tile in row)
        for row in game.map.lines()
    ]
    moves = game.moves_text()
    if moves is not None:
        lines.append(f"{MOVES_LABEL} {moves}")
    return lines


def direction_for_key(key: int) -> Direction | None:
    """Map an arrow key code to a direction, or None for any other key."""
    return _KEY_DIRECTIONS.get(key)


def _draw(game: Game, screen: _Screen) -> None:
    screen.erase()
    for y, line in enumerate(render(game)):
        try:
            screen.addstr(y, 0, line)
        except curses.error:
            # The terminal is smaller than the map; show what fits.
            break
    screen.refresh()


def run(game: Game, screen: _Screen) -> Outcome:
    """Play ``game`` on ``screen`` until it ends and return how it ended."""
    screen.keypad(True)
    screen.nodelay(True)
    _draw(game, screen)
    try:
        while True:
            key = screen.getch()
            if key == ESC_KEY:
                game.quit()
            elif key != NO_KEY:
                direction = direction_for_key(key)
                if direction is not None:
                    game.press(direction)
                    _draw(game, screen)
            if game.tick():
                _draw(game, screen)
    except GameOver as over:
        return over.outcome


def main(argv: Sequence[str] | None = None) -> int:
    """Start the game on the map file named on the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print(USAGE)
        return 1
    try:
        game = Game.from_file(args[0])
    except MapError as err:
        print(f"Error: {err}")
        return 0
    except GameOver as over:
        print(over.message)
        return 0
    except OSError as err:
        print(f"solong: {err}", file=sys.stderr)
        return 1

    def _play(screen: _Screen) -> Outcome:
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        return run(game, screen)

    outcome = curses.wrapper(_play)
    if outcome.message:
        print(outcome.message)
    return 0


if __name__ == "__main__":
    sys.exit(main())