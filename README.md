# leafstage

A small side-scrolling arcade game built on pygame. It is made of a few
playable pieces and the modules they are built from:

- a solo / split-screen stage with falling leaves, where one or two cameras
  scroll the same background;
- a main menu with options (music volume, full screen), save/load screens
  and player choice;
- a two-player duel with walking, running, jumping, crouching and attacks,
  a shared score and hearts;
- a minimap demo with pixel and bounding-box collision.

## Installing

```
pip install .
```

The programs load their images, fonts and music from an assets directory
(the current directory unless `--assets` says otherwise). The assets are not
part of this package; put your own files at the paths each program expects:

- `leafstage-split`: `feuille1.png`, `feuille2.png`, `stage finale.png`,
  and optionally `DejaVuSans.ttf` (pygame's default font is used otherwise).
- `leafstage-menu`: `menu/Bg_principale.png`, the main buttons
  (`jouer1.png`/`jouer2.png`, `option1.png`/`option2.png`, ...), and the
  folders `option/`, `Sauv&charg/`, `M_joueur/`, `meilleur_score/`;
  optionally `arial.ttf` and `SB.mp3`.
- `leafstage-duel`: `police.ttf`, `images/background.png`, the two sprite
  sets under `images/` and `images2/` (each with `droite/` and `gauche/`),
  and optionally `coeur.png`.
- `leafstage-minimap`: `background.png`, `background_collision.png`,
  `minimap_level1.png`, `red.jpg`.

## Playing

| Command             | What it starts                                              |
|---------------------|-------------------------------------------------------------|
| `leafstage-split`   | Solo and split-screen stage (1 solo, 2 multi, R back to solo) |
| `leafstage-menu`    | The main menu and its sub-menus                             |
| `leafstage-duel`    | Two-player duel; asks a name, appends the score to a file   |
| `leafstage-minimap` | Minimap and collision demo                                  |

Every command takes `--assets DIR`. `leafstage-menu` also takes
`--stage-dir DIR`, and `leafstage-duel` takes `--scores FILE`
(default `scores.txt`).

### Controls

- Split screen: arrow keys scroll the left (or only) camera, W/A/S/D the
  right one in multi mode.
- Duel, first player: Left/Right to move, Shift to run, Up to jump, Down to
  crouch, Ctrl to attack.
- Duel, second player: A/D to move, P to run, W to jump, S to crouch,
  F to attack.
- Minimap demo: arrow keys move the player, Escape quits.

## What it does not do

There is no command that runs a stage with a controllable player, stars and
coins: `leafstage.world` and `leafstage.player` provide those pieces, but no
program in this package puts them together. Choosing "validate" on the
menu's player screen runs an external `./prog` in the stage directory
(`--stage-dir`, default `../stage .1`); this package does not supply that
program.

## Using the pieces in code

```python
from leafstage.minimap import SaveState, boxes_collide, load_game, save_game

save_game(SaveState(x_player=100, y_player=200, score=3, lives=2), "save.txt")
restored = load_game("save.txt")
```

- `leafstage.world`: `Background` camera scrolling and clamping, `Leaf`
  and `spawn_leaves`, `Star` and `make_stars`, `Coin`, `coin_layout` and
  `visible_coins`.
- `leafstage.player`: `Player` input, gravity, ground collision and
  animation; `load_sprites` and `create_player`.
- `leafstage.fighter`: `Fighter` with configurable `Controls` for the duel.
- `leafstage.scoreboard`: `ScoreInfo`, `save_score`, `render_score` and
  hearts.
- `leafstage.menu`: `Menu`, `Button`, `is_hovered` and `NameEntry`.
- `leafstage.minimap`: `MiniMap`, `pixel_collision`, `boxes_collide`,
  `clamp_to_screen`, `SaveState`, `save_game` and `load_game`.

## Tests

```
pip install .[test]
pytest
```