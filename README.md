# Tarnished Quest

An endless side-scrolling platformer. The camera follows your knight as you run right
through a castle. Level parts are picked at random from a set of tile maps and joined onto
the end as the camera gets near it. Parts far behind are dropped. Skeletons patrol the
platforms. If you get close, they chase you and strike. Your soul is also starving. The
counter at the top of the screen counts down from 15 seconds, and killing a skeleton sets
it back to 15. If it reaches zero, you die. You also die if you fall off the bottom of the
map.

Your score is how many tiles you have run to the right. The best score is saved to a file
and kept between runs.

## Installing

```
pip install .
```

This needs Python 3.10 or later and pygame.

## Playing

```
tarnishedquest [--resources DIR] [--seed N]
```

- `--resources DIR` is the directory that holds the textures, sounds, font, maps and
  high-score file. The default is `res`.
- `--seed N` seeds the random choice of maps, so a run can be repeated.

Inside the resource directory the game expects:

- `texture/` with the sprite sheets `Tarnished.png`, `Skeleton.png`, `Bullet.png`,
  `Tileset.png`, `MenuBg.png` and `Button.png`, and the tile maps `map1.map` to
  `map14.map` and `map_spawn.map`. Every run starts on `map_spawn.map`.
- `sfx/` with `Vault in Tower Fortress Soundtrack.mp3` and the sound effects
  `sfx_sounds_impact12 (hit).wav`, `sfx_movement_jump1.wav`,
  `sfx_sounds_impact1 (landing).wav`, `sfx_wpn_laser7.wav`, `sfx_exp_short_hard16.wav`
  and `sfx_damage_hit2.wav`.
- `Pixel-UniCode.ttf` for the on-screen text.
- `highscore.txt` for the best score. It is created if it is missing.

If the resources cannot be loaded, or a map file is broken, the command prints the error
and exits with status 1.

A map file holds 336 whitespace-separated tile numbers: 16 rows of 21. Numbers from 0 to
84 are solid ground or wall. Numbers from 85 to 186 are scenery you can pass through. A
file that is too short, or holds a number outside 0–186, raises
`tarnishedquest.level.MapFormatError`.

### Controls

| Input        | Action                                   |
|--------------|------------------------------------------|
| `A` / `D`    | run left / right                         |
| `Space`      | jump; let go early for a shorter jump    |
| left click   | shoot in the direction you face          |
| `Esc`        | pause / resume                           |

From the main menu, choose **Play** or **Exit**. When you die, choose **Retry** to start a
fresh run or **Exit** to quit.

## Using the pieces

Most of the game logic can be used without opening a window:

- `tarnishedquest.timer.Timer` is a pausable millisecond stopwatch. It is driven by any
  clock function you pass in.
- `tarnishedquest.level.read_tile_types` reads a map file.
  `tarnishedquest.level.LevelPart` builds the grid of `Tile`s for one map file and can be
  moved with `move_to` and `place_after`.
- `tarnishedquest.collision.check_collision`, `touches_wall` and `ground_contact` do the
  rectangle and tile collision tests.
- `tarnishedquest.render.Renderer` draws onto any pygame surface.
- `tarnishedquest.game.Game` runs one frame of play each time you call `step()`.
  `tarnishedquest.app.run(game, events)` drives it frame by frame, taking one batch of
  input events per frame.

## What it does not include

The package holds no game assets. The sprite sheets, tile maps, font, music and sound
effects must be supplied in the resource directory described above. Without them the
`tarnishedquest` command stops with an error before the window shows anything.