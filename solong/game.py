"""Game state and rules: player movement, collectibles, the exit and the enemy."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol

from solong.mapfile import (
    COLLECTIBLE,
    EMPTY,
    ENEMY,
    EXIT,
    PLAYER,
    WALL,
    GameMap,
    MapError,
    load_map,
)

TILE_SIZE = 64
PATROL_DELAY = 10000
REDRAW_INTERVAL = 100


class _RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


class Direction(Enum):
    """A step on the grid, as ``(dx, dy)``."""

    LEFT = (-1, 0)
    RIGHT = (1, 0)
    UP = (0, -1)
    DOWN = (0, 1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


# The enemy picks its step by drawing an index into this order.
_ENEMY_STEPS = (Direction.LEFT, Direction.RIGHT, Direction.UP, Direction.DOWN)


class Outcome(Enum):
    """Why a game ended."""

    WON = "won"
    QUIT = "quit"
    CAUGHT = "caught"
    ABSORBED = "absorbed"
    TOO_MANY_ENEMIES = "too_many_enemies"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    Outcome.WON: "You Won!",
    Outcome.QUIT: "Exiting the game...",
    Outcome.CAUGHT: "",
    Outcome.ABSORBED: "You've been absorbed by the Black Hole.",
    Outcome.TOO_MANY_ENEMIES: "Game Over! There are too many enemies.",
}


class GameOver(Exception):
    """Raised when the game ends, for any reason."""

    def __init__(self, outcome: Outcome) -> None:
        super().__init__(outcome.message)
        self.outcome = outcome

    @property
    def message(self) -> str:
        return self.outcome.message


@dataclass
class Enemy:
    """The single patrolling enemy."""

    x: int = 0
    y: int = 0
    direction: int = 0


class Game:
    """A running game on a validated map."""

    def __init__(self, game_map: GameMap, rng: _RandomSource | None = None) -> None:
        self.map = game_map
        self.rng: _RandomSource = rng if rng is not None else random.Random()
        start = game_map.find(PLAYER)
        if start is None:
            raise MapError("Map has no player.")
        self.player_x, self.player_y = start
        self.moves_count = 0
        self._moves_text: str | None = None
        self._patrol_counter = 0
        self._frame = 0

        self.enemy = Enemy()
        self.enemy_count = 0
        for y, row in enumerate(game_map.lines()):
            for x, tile in enumerate(row):
                if tile == ENEMY:
                    self.enemy.x, self.enemy.y = x, y
                    self.enemy_count += 1
        if self.enemy_count > 1:
            raise GameOver(Outcome.TOO_MANY_ENEMIES)

    @classmethod
    def from_file(
        cls, filename: str | Path, rng: _RandomSource | None = None
    ) -> Game:
        """Load and validate a map file and start a game on it."""
        return cls(load_map(filename), rng)

    def no_collectibles_left(self) -> bool:
        """Tell whether every collectible has been picked up."""
        return self.map.count(COLLECTIBLE) == 0

    def has_enemy(self) -> bool:
        """Tell whether an enemy is still on the map."""
        return self.map.find(ENEMY) is not None

    def moves_text(self) -> str | None:
        """Return the move counter as shown on screen, or None before any move."""
        return self._moves_text

    def press(self, direction: Direction) -> None:
        """Handle a movement key."""
        x, y = self.player_x, self.player_y
        target_x, target_y = x + direction.dx, y + direction.dy
        if self.map.tile(target_x, target_y) != WALL:
            x, y = target_x, target_y
            if self.map.tile(x, y) != EXIT:
                self.moves_count += 1
            self._moves_text = str(self.moves_count)
        self.move_player(x, y)

    def quit(self) -> None:
        """End the game at the player's request."""
        raise GameOver(Outcome.QUIT)

    def move_player(self, x: int, y: int) -> None:
        """Put the player on ``(x, y)`` if the tile allows it."""
        if not (0 <= x < self.map.width and 0 <= y < self.map.height):
            return
        tile = self.map.tile(x, y)
        if tile == ENEMY:
            raise GameOver(Outcome.CAUGHT)
        if tile == EXIT and self.no_collectibles_left():
            raise GameOver(Outcome.WON)
        if tile not in (WALL, EXIT):
            self.map.set_tile(self.player_x, self.player_y, EMPTY)
            self.player_x, self.player_y = x, y
            self.map.set_tile(x, y, PLAYER)

    def move_enemy(self) -> None:
        """Step the enemy in a random direction, trying up to four times."""
        enemy = self.enemy
        for _ in range(len(_ENEMY_STEPS)):
            enemy.direction = self.rng.randrange(len(_ENEMY_STEPS))
            step = _ENEMY_STEPS[enemy.direction]
            new_x, new_y = enemy.x + step.dx, enemy.y + step.dy
            tile = self.map.tile(new_x, new_y)
            if tile in (WALL, EXIT, COLLECTIBLE):
                continue
            if tile == PLAYER:
                raise GameOver(Outcome.ABSORBED)
            self.map.set_tile(enemy.x, enemy.y, EMPTY)
            enemy.x, enemy.y = new_x, new_y
            self.map.set_tile(new_x, new_y, ENEMY)
            return

    def enemy_patrol(self) -> bool:
        """Count one frame; move the enemy once the patrol delay has passed.

        Returns True when the enemy was given a turn to move.
        """
        if self._patrol_counter < PATROL_DELAY:
            self._patrol_counter += 1
            return False
        self._patrol_counter = 0
        self.move_enemy()
        return True

    def tick(self) -> bool:
        """Advance one frame. Returns True when the screen should be redrawn."""
        if self.has_enemy():
            self.enemy_patrol()
        self._frame += 1
        if self._frame == REDRAW_INTERVAL:
            self._frame = 0
            return True
        return False