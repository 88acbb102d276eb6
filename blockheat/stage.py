"""Stage, stage-list, rotation-speed and high-score files."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Sequence

GRID_SIZE = 10
ROLL_SPEED_COUNT = 21
MAX_NAME_LENGTH = 15

STAGE_LIST_FILE = "block_stage_filename.dat"
ROLL_SPEED_FILE = "block_rollspeed.dat"
HIGHSCORE_FILES = ("block_normal_highscore.dat", "block_tamayoke_highscore.dat")

Grid = list[list[int]]


def _empty_grid() -> Grid:
    return [[0] * GRID_SIZE for _ in range(GRID_SIZE)]


def _check_grid(grid: Sequence[Sequence[int]]) -> Grid:
    rows = [list(map(int, row)) for row in grid]
    if len(rows) != GRID_SIZE or any(len(row) != GRID_SIZE for row in rows):
        raise ValueError(f"stage grid must be {GRID_SIZE}x{GRID_SIZE}")
    return rows


def count_blocks(grid: Sequence[Sequence[int]]) -> int:
    """Count the cells that must be cleared: blocks 1..10, 12 and 13."""
    return sum(
        1
        for row in grid
        for block in row
        if 1 <= block <= 10 or block in (12, 13)
    )


@dataclass
class StageData:
    """One stage: a 10x10 block grid, gravity direction and enemy setting.

    Row 0 is the bottom row of the playfield; gravity is -1 (down),
    0 (none) or 1 (up).
    """

    grid: Grid = field(default_factory=_empty_grid)
    gravity: int = 0
    enemy: int = 0

    def __post_init__(self) -> None:
        self.grid = _check_grid(self.grid)

    @property
    def blocks(self) -> int:
        """Number of blocks left to clear."""
        return count_blocks(self.grid)


def _read_tokens(path: str | os.PathLike) -> list[str]:
    with open(path, "r", encoding="ascii") as fh:
        return fh.read().split()


def load_stage(path: str | os.PathLike) -> StageData:
    """Read a stage file: 100 cell values row by row, then gravity and enemy.

    Gravity and enemy default to 0 when the file ends before them.
    """
    tokens = _read_tokens(path)
    cells = GRID_SIZE * GRID_SIZE
    if len(tokens) < cells:
        raise ValueError(f"stage file holds {len(tokens)} values, need {cells}")
    values = [int(tok) for tok in tokens[:cells]]
    grid = [values[row:row + GRID_SIZE] for row in range(0, cells, GRID_SIZE)]
    extra = [int(tok) for tok in tokens[cells:cells + 2]]
    gravity = extra[0] if extra else 0
    enemy = extra[1] if len(extra) > 1 else 0
    return StageData(grid, gravity, enemy)


def save_stage(stage: StageData, path: str | os.PathLike) -> None:
    """Write a stage in the format load_stage reads, one value per line."""
    values = [block for row in _check_grid(stage.grid) for block in row]
    values += [stage.gravity, stage.enemy]
    with open(path, "w", encoding="ascii") as fh:
        fh.writelines(f"{value}\n" for value in values)


def load_stage_list(path: str | os.PathLike) -> list[str]:
    """Read the stage list: a count followed by that many file names.

    Names longer than 15 characters are cut to 15.
    """
    tokens = _read_tokens(path)
    if not tokens:
        raise ValueError("stage list is empty")
    count = int(tokens[0])
    if count < 0:
        raise ValueError(f"negative stage count {count}")
    names = tokens[1:1 + count]
    if len(names) < count:
        raise ValueError(f"stage list names {len(names)} files, expected {count}")
    return [name[:MAX_NAME_LENGTH] for name in names]


def load_roll_speeds(path: str | os.PathLike) -> list[float]:
    """Read the rotation speed of each block kind 0..20."""
    tokens = _read_tokens(path)
    if len(tokens) < ROLL_SPEED_COUNT:
        raise ValueError(
            f"roll speed file holds {len(tokens)} values, need {ROLL_SPEED_COUNT}"
        )
    return [float(tok) for tok in tokens[:ROLL_SPEED_COUNT]]


def highscore_filename(mode: int) -> str:
    """Return the high-score file name for game mode 0 (normal) or 1 (dodge)."""
    index = int(mode)
    if not 0 <= index < len(HIGHSCORE_FILES):
        raise ValueError(f"unknown game mode {mode!r}")
    return HIGHSCORE_FILES[index]


def load_highscore(path: str | os.PathLike) -> int:
    """Read a high score stored as a single integer."""
    tokens = _read_tokens(path)
    if not tokens:
        raise ValueError("high score file is empty")
    return int(tokens[0])


def save_highscore(path: str | os.PathLike, score: int) -> None:
    """Write a high score as a bare integer."""
    with open(path, "w", encoding="ascii") as fh:
        fh.write(f"{int(score)}")