"""Game state: the paddle, the balls, their floating score texts and the grid."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Sequence

from .stage import GRID_SIZE, ROLL_SPEED_COUNT, StageData

BALL_COUNT = 10
START_LIFE = 10
START_BALLS = 10
DEMO_FRAMES = 200
HIT_WIDTHS = (5.0, 1.0)
SPEED_LIMITS = (0.9, 0.5)
TEXT_RISE = 0.01
SHIP_START = (10.0, -10.0, 0.0)


class GameMode(IntEnum):
    """Normal breakout play, or the ball-dodging variant."""

    NORMAL = 0
    DODGE = 1


def _zero_vector() -> list[float]:
    return [0.0, 0.0, 0.0]


def _white() -> list[float]:
    return [1.0, 1.0, 1.0, 1.0]


def _ball_color(index: int) -> list[float]:
    return [0.1 * index, math.sin(0.314 * index), (10 - index) * 0.1, 1.0]


@dataclass
class Ball:
    """A ball, or a floating text marker that follows the same layout.

    ``flag`` is 0 when unused and 1 when moving; hit texts also use 2 for
    "returned by the paddle". ``contact[j]`` records that this ball is
    still touching ball ``j`` from an earlier collision.
    """

    position: list[float] = field(default_factory=_zero_vector)
    speed: list[float] = field(default_factory=_zero_vector)
    accel: list[float] = field(default_factory=_zero_vector)
    diffuse: list[float] = field(default_factory=_white)
    specular: list[float] = field(default_factory=_white)
    shininess: float = 40.0
    flag: int = 0
    hitcount: int = 0
    point: int = 0
    contact: list[bool] = field(default_factory=lambda: [False] * BALL_COUNT)
    time: int = 0

    @property
    def active(self) -> bool:
        """True while the ball is in play."""
        return self.flag == 1


@dataclass
class Ship:
    """The player's paddle and the player's running totals."""

    mode: GameMode = GameMode.NORMAL
    position: list[float] = field(default_factory=lambda: list(SHIP_START))
    speed: list[float] = field(default_factory=_zero_vector)
    life: int = START_LIFE
    balls: int = START_BALLS
    hit_width: float = field(init=False)
    hit_height: float = 1.0
    hit_depth: float = 0.5
    diffuse: list[float] = field(default_factory=lambda: [0.7, 1.0, 0.7, 1.0])
    specular: list[float] = field(default_factory=_white)
    shininess: float = 80.0
    score: int = 0
    highscore: int = 0
    dead_count: int = 0
    new_record: bool = False

    def __post_init__(self) -> None:
        self.mode = GameMode(self.mode)
        self.hit_width = HIT_WIDTHS[self.mode]


class GameState:
    """Everything the game logic reads and changes from frame to frame."""

    def __init__(self, mode: GameMode | int = GameMode.NORMAL) -> None:
        self.ship = Ship(GameMode(mode))
        self.balls = [Ball() for _ in range(BALL_COUNT)]
        self.hit_texts = [Ball() for _ in range(BALL_COUNT)]
        self.collision_texts = [Ball() for _ in range(BALL_COUNT)]
        self.grid = [[0] * GRID_SIZE for _ in range(GRID_SIZE)]
        self.roll = [[0.0] * GRID_SIZE for _ in range(GRID_SIZE)]
        self.roll_speeds = [0.0] * ROLL_SPEED_COUNT
        self.blocks = 0
        self.gravity = 0
        self.enemy = 0
        self.left = 0.0
        self.right = 20.0
        self.top = 15.0
        self.bottom = -10.0
        self.demotime = DEMO_FRAMES
        self.debug = False
        self.reset_character()

    @property
    def mode(self) -> GameMode:
        """The game mode, fixed for the whole game."""
        return self.ship.mode

    def reset_character(self) -> None:
        """Put the paddle and balls back to their starting state.

        Score, high score, death count and game mode are kept.
        """
        ship = self.ship
        ship.position = list(SHIP_START)
        ship.speed = _zero_vector()
        ship.life = START_LIFE
        ship.balls = START_BALLS
        ship.hit_height = 1.0
        ship.hit_depth = 0.5
        ship.diffuse = [0.7, 1.0, 0.7, 1.0]
        ship.specular = _white()
        ship.shininess = 80.0

        for index, ball in enumerate(self.balls):
            ball.diffuse = _ball_color(index)
            ball.specular = _white()
            ball.shininess = 40.0
            ball.flag = 0
            ball.contact = [False] * BALL_COUNT
            self.hit_texts[index].flag = 0
            self.collision_texts[index].flag = 0

        self.demotime = DEMO_FRAMES

    def load_grid(self, stage: StageData) -> None:
        """Set up the playfield from a stage."""
        self.left = 0.0
        self.right = 20.0
        self.top = 15.0
        self.bottom = -10.0
        self.grid = [list(row) for row in stage.grid]
        self.roll = [[0.0] * GRID_SIZE for _ in range(GRID_SIZE)]
        self.blocks = stage.blocks
        self.gravity = stage.gravity
        self.enemy = stage.enemy

    def vmax(self) -> float:
        """The largest speed a ball may have along either axis."""
        return SPEED_LIMITS[self.mode]

    def shoot(self, position: Sequence[float], velocity: Sequence[float]) -> bool:
        """Launch the first free ball; return whether one was free."""
        for ball in self.balls:
            if ball.flag == 0:
                x, y, z = (list(position) + [0.0, 0.0, 0.0])[:3]
                ball.contact = [True] * BALL_COUNT
                ball.time = 0
                ball.flag = 1
                ball.position = [float(x), float(y), float(z)]
                ball.speed = [float(velocity[0]), float(velocity[1]), 0.0]
                return True
        return False

    def clamp_speed(self, ball: Ball) -> None:
        """Limit a ball's horizontal and vertical speed to the mode's maximum."""
        limit = self.vmax()
        for axis in (0, 1):
            ball.speed[axis] = max(-limit, min(limit, ball.speed[axis]))

    def delete_block(self, x: int, y: int) -> None:
        """Remove the block at column x, row y."""
        if not (0 <= x < GRID_SIZE and 0 <= y < GRID_SIZE):
            raise IndexError(f"cell ({x}, {y}) is outside the grid")
        self.blocks -= 1
        self.grid[y][x] = 0

    def start_text(self, texts: list[Ball], index: int) -> None:
        """Start a floating text at ball ``index``, drifting slowly upward."""
        ball = self.balls[index]
        text = texts[index]
        text.flag = 1
        text.position = [ball.position[0], ball.position[1], 0.0]
        text.speed = [0.0, TEXT_RISE, 0.0]

    def score_hit(self, index: int, points: int) -> int:
        """Score a block hit by ball ``index``; return the points awarded."""
        ball = self.balls[index]
        ball.hitcount += 1
        ball.point = (ball.hitcount + index) * points
        self.ship.score += ball.point
        self.hit_texts[index].flag = 0
        self.start_text(self.hit_texts, index)
        return ball.point