# blockheat

A block-breaking arcade game. Bounce balls off your paddle into a field of
blocks. Some blocks take several hits, some spin and score more each time
they are struck, and some release extra balls. Balls bounce off one another,
and on stages with gravity turned on they pull on each other.

A stage editor comes with the game, so you can build your own stages.

## Installing

```
pip install .
```

This installs pygame as well.

## Playing

```
blockheat [--mode {0,1}] [--directory DIR]
```

`--mode 0` is the normal game and `--mode 1` the dodging game; without
`--mode` the game asks for one on the terminal. `--directory` names the
folder that holds the data files (the current directory by default):

- `block_stage_filename.dat`: the number of stages, then one stage file name
  per stage (names are cut to 15 characters).
- `block_rollspeed.dat`: the rotation speed of each block code 0 to 20.
- `block_normal_highscore.dat` or `block_tamayoke_highscore.dat`: the high
  score of the chosen mode, a single integer. The file must already exist.
- The stage files named in the list. A stage file that cannot be opened is
  treated as a stage with no blocks.

The font used on screen is built into the package.

The two modes:

- **Normal**: a wide paddle that follows the mouse sideways. Balls fall under
  a steady pull; keep them from dropping past the paddle.
- **Dodge**: a small ship that follows the mouse in the lower part of the
  field. The floor returns the balls, and a ball touching the ship ends the
  round.

Click to launch a ball; you have ten per round, and each ball lost costs a
life. During the fly-in at the start of a stage, holding the left button
speeds it up. When every block is gone the game moves on to the next stage,
and after the last stage it ends.

While you are ahead of the high score it follows your score. The high score
file is written when your paddle is destroyed while you hold a new record,
and when you clear the last stage holding a new record after having lost at
least one round.

## Editing stages

```
blockheat-edit [FILENAME]
```

With no file name, the editor asks for one. The editor starts with an empty
grid; click **Load** to read the file or **Save** to write it.

- The top strip of the window holds the parts 1 to 20: click one to pick it.
- Hold the left button over the grid to paint the chosen part, and hold the
  right button to erase.
- Hold the middle button to draw the grid's blocks solid instead of as
  outlines.

The command list on the right also shows "File Name", "Gravity", "Enemy" and
"Display"; these only display values and cannot be changed from the editor.
A stage's gravity and enemy settings are kept from the loaded file (0 for a
new stage); to change them, edit the file by hand.

## Stage files

A stage file is plain text: the 10 x 10 grid of block codes, one number per
line, row by row starting from the bottom row, then the gravity setting
(-1 down, 0 none, 1 up) and the enemy setting. The game reads the enemy
setting but does nothing with it.

| Code   | Block                                                              |
|--------|--------------------------------------------------------------------|
| 0      | empty                                                              |
| 1–10   | plain block; each hit lowers its code, and it goes at 0 or below   |
| 11     | wall cube that deflects balls and cannot be broken                 |
| 12     | breaks and launches one extra ball                                 |
| 13     | breaks and launches up to nine balls in a ring                     |
| 14–20  | spinning block that is never cleared; each hit scores (code − 13) × 10 times the hit count and raises its code, wrapping from 20 back to 17 |

A stage is cleared when no blocks of codes 1–10, 12 or 13 are left.

## Using it as a library

The pieces can be used without a window:

```python
from blockheat.stage import load_stage, save_stage, count_blocks
from blockheat.font import BitmapFont, format_number

stage = load_stage("mystage.dat")
print(count_blocks(stage.grid))
save_stage(stage, "copy.dat")

font = BitmapFont()
for row in font.render(format_number(1234)):
    print(row)
```

`blockheat.font` also reads and writes font files of hex bytes
(`load_font`, `save_font`, `BitmapFont.from_file`).

`blockheat.model.GameState` holds the state of a game, and
`blockheat.physics.move_balls` advances the balls by one frame.
`blockheat.game.Game` and `blockheat.editor.Editor` hold the game and editor
logic apart from drawing: feed them mouse events with `mouse_move` and
`mouse_button`, and call `update` once a frame.

## What it does not do

The playfield is drawn flat, seen from the front, rather than as a
three-dimensional scene with lighting and a moving camera. There is no
keyboard control, and the editor cannot rename the file or set a stage's
gravity or enemy values.

## Running the tests

```
pip install .[test]
pytest
```