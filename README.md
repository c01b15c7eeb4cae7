# tankbattle

A small top-down tank battle arcade game. You drive a green tank around a
walled arena and shoot red enemy tanks. Each enemy destroyed is worth 100
points, and a new enemy appears on a random free tile. One enemy shot that
hits you ends the game.

## Installing

```
pip install .
```

pygame is installed along with the package. Text is drawn with the system
Arial font as pygame finds it, falling back to pygame's default font.

## Playing

```
tankbattle
```

`tankbattle --help` prints the usage; the command takes no other options.

A start screen comes up first. Press any key to reach the main menu, and then
choose **Start Game** or **Exit** with the Up/Down arrow keys and Enter.

| Key         | Action                                   |
|-------------|------------------------------------------|
| Arrow keys  | Turn and drive the tank while held       |
| Space       | Fire. The gun has a half-second cooldown |
| P           | Pause or resume                          |
| R           | Restart after Game Over                  |

While paused, a menu offers **Resume**, **Main Menu** and **Exit**, chosen
with the Up/Down arrow keys and Enter.

Bullets that reach a wall tile burst in a short explosion. Tanks that drive
into a wall are pushed back out and stopped.

Enemies turn to face you and, once facing you, move toward you. Every 1.5
seconds, any enemy lined up with you (within half a tile) in the direction it
faces fires a shot.

## Using it from code

The game rules can be driven without a window:

```python
import random
from tankbattle.game import Game, GameState

game = Game(random.Random(1))
game.start_game()
assert game.state is GameState.PLAYING
game.update(1 / 60)
print(game.score, len(game.enemies))
```

`Game.process_event(event)` applies a pygame event, `Game.render(surface)`
draws the current state onto a surface, and `Game.run()` opens a window and
runs the main loop. `tankbattle.game.main()` is the function behind the
`tankbattle` command.

The pieces are also usable on their own: `tankbattle.tank.Tank` and
`tankbattle.tank.Explosion`, `tankbattle.bullet.Bullet`,
`tankbattle.pause.PauseSystem`, and the title screen in
`tankbattle.screen` (`StartScreen` and `create_start_screen`).

## What it does not do

There is no saved high-score table, no sound, and no level editor: the arena
is always the same bordered 25 by 18 tile map with three fixed obstacles.

## Running the tests

```
pip install .[test]
pytest
```