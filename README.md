# solong

A small tile game played in the terminal. You walk the player across a map,
pick up every coin and then step onto the exit. If the map holds an enemy,
it wanders about at random, and running into it ends the game.

## Installing

    pip install .

The terminal front end uses Python's `curses` module, so it needs a
platform where `curses` is available, such as Linux or macOS.

## Playing

    solong maps/level.ber

Move with the arrow keys. Press Escape to quit. The map is drawn with
these characters:

| On screen | Meaning                                |
|-----------|----------------------------------------|
| `#`       | wall                                   |
| ` `       | empty floor                            |
| `@`       | player                                 |
| `$`       | coin                                   |
| `D`       | exit, closed while coins remain        |
| `O`       | exit, open once every coin is taken    |
| `X`       | enemy                                  |

After your first move, a `Moves: N` line appears under the map. A step
onto the exit does not add to the count. Stepping onto the open exit wins
the game. Walking into the enemy ends it. The enemy takes a random step
after every patrol delay has passed. If it moves onto the player, you are
absorbed by the black hole. The closing message is printed when curses
has released the terminal.

The command exits with status 1 when it is not given exactly one argument
(it then prints the usage line) and when the file cannot be read. A
rejected map prints `Error: ` followed by the reason.

## Map files

A map is a text file whose name ends in `.ber` and has a name in front of
the suffix. Each line is one row of tiles:

| Tile | Meaning      |
|------|--------------|
| `1`  | wall         |
| `0`  | empty floor  |
| `P`  | player start |
| `C`  | coin         |
| `E`  | exit         |
| `X`  | enemy        |

`solong.mapfile.load_map` accepts a map only when all of the following
hold. They are checked in this order:

- the file has at least one line;
- all lines are the same length;
- there is exactly one player, exactly one exit and at least one coin;
- the border is made entirely of walls;
- every coin and the exit can be reached from the player's start;
- no other characters are used.

A map can hold at most one enemy. `Game` refuses a map with more than one.

Example:

    1111111
    1P0C0E1
    10000X1
    1111111

## Using it from Python

```python
import random

from solong.game import Direction, Game, GameOver

game = Game.from_file("maps/level.ber", random.Random(0))
try:
    game.press(Direction.RIGHT)
    game.tick()
except GameOver as over:
    print(over.outcome, over.message)
print(game.moves_text())
```

- `solong.mapfile` reads and checks maps:
  - `read_map`, `validate_map` and `load_map` do the reading and checking.
  - `is_rectangular`, `is_walled`, `has_required_tiles`,
    `has_only_valid_tiles` and `path_is_valid` are the individual checks.
  - `GameMap` is the mutable tile grid.
  - `MapError` is raised with a description when a map is rejected.
- `solong.game` holds the rules:
  - `Game` offers `press`, `move_player`, `move_enemy`, `enemy_patrol`,
    `tick` and `quit`.
  - Every ending raises `GameOver`, whose `outcome` is an `Outcome` member:
    `WON`, `QUIT`, `CAUGHT`, `ABSORBED` or `TOO_MANY_ENEMIES`.
  - `Game.tick()` returns `True` every hundredth frame, which is when the
    screen should be redrawn.
- `solong.tui` is the terminal front end:
  - `render(game)` returns the screen lines.
  - `direction_for_key` maps a key code to a `Direction`.
  - `run(game, screen)` plays a game on a curses window.
  - `main` is the `solong` command.

## What it does not do

The game is drawn as characters in a terminal. It has no graphical window
and no image tiles or textures.