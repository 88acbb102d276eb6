"""The breakout game: stage progression, input handling and the main loop."""

from __future__ import annotations

import argparse
import math
import os
import sys
from pathlib import Path
from typing import Sequence

import pygame

from .font import BitmapFont, format_number
from .model import DEMO_FRAMES, GameMode, GameState
from .physics import move_balls, start_explosion
from .stage import (
    GRID_SIZE,
    ROLL_SPEED_FILE,
    STAGE_LIST_FILE,
    highscore_filename,
    load_highscore,
    load_roll_speeds,
    load_stage,
    load_stage_list,
    save_highscore,
)

LEFT = 0
MIDDLE = 1
RIGHT = 2

FPS = 30
WINDOW_SIZE = 800
MOUSE_SCALE = 40.0
MOUSE_Y_OFFSET = 200.0
FAST_DEMO_STEP = 3
DEATH_LIMIT = -10
RESET_LIFE = -20


class Game:
    """One game session: the state, the stage list and the mouse."""

    def __init__(self, mode: GameMode | int = GameMode.NORMAL,
                 directory: str | os.PathLike = ".") -> None:
        self.directory = Path(directory)
        self.state = GameState(GameMode(mode))
        self.stage_names = load_stage_list(self.directory / STAGE_LIST_FILE)
        self.state.roll_speeds = load_roll_speeds(self.directory / ROLL_SPEED_FILE)
        self.now = 0
        self.mouse_x = 0
        self.mouse_y = 0
        self.left_down = False
        self.left_released = False
        self.finished = False
        self.state.ship.highscore = load_highscore(self.highscore_path)
        self.load_stage()

    @property
    def last(self) -> int:
        """Number of stages in the list; reaching it ends the game."""
        return len(self.stage_names)

    @property
    def stage_name(self) -> str:
        """File name of the current stage, or "" past the last one."""
        return self.stage_names[self.now] if self.now < self.last else ""

    @property
    def highscore_path(self) -> Path:
        """Where the high score of this game mode is kept."""
        return self.directory / highscore_filename(self.state.mode)

    def _save_highscore(self) -> None:
        save_highscore(self.highscore_path, self.state.ship.highscore)

    def load_stage(self) -> None:
        """Load the current stage; a missing file leaves no blocks to clear."""
        state = self.state
        state.blocks = 0
        state.left = 0.0
        state.right = 20.0
        state.top = 15.0
        state.bottom = -10.0
        state.gravity = 0
        state.enemy = 0
        name = self.stage_name
        try:
            if not name:
                raise FileNotFoundError(name)
            stage = load_stage(self.directory / name)
        except OSError:
            print(f"Can't open stage file {name}", file=sys.stderr)
            return
        state.load_grid(stage)

    def mouse_move(self, x: int, y: int) -> None:
        """Record the pointer position in window pixels."""
        self.mouse_x = x
        self.mouse_y = y

    def mouse_button(self, button: int, pressed: bool) -> None:
        """React to a button going down or up.

        Releasing the left button only records the release; every other
        button event fires a ball, skips the intro or ends a finished game.
        """
        if button == LEFT:
            self.left_down = bool(pressed)
            self.left_released = not pressed
            if not pressed:
                return

        state = self.state
        ship = state.ship
        if state.blocks and state.demotime == 0:
            muzzle_x = ship.position[0]
            muzzle_y = ship.position[1] + 1.0
            blocked = any(
                ball.flag
                and (muzzle_x - ball.position[0]) ** 2
                + (muzzle_y - ball.position[1]) ** 2 <= 1.0
                for ball in state.balls
            )
            if ship.balls > 0 and not blocked:
                position = list(ship.position)
                position[1] += 1.0
                ship.balls -= 1
                limit = state.vmax()
                state.shoot(position, (limit, limit))
        elif state.blocks and state.demotime > 0:
            self.left_down = True
        elif state.blocks == 0 and self.now != self.last:
            self.left_down = True
        elif state.blocks == 0 and self.now == self.last:
            self.finished = True

    def _follow_mouse(self) -> None:
        state = self.state
        ship = state.ship
        fx = self.mouse_x / MOUSE_SCALE
        fy = (self.mouse_y - MOUSE_Y_OFFSET) / MOUSE_SCALE
        ship.position[0] = fx
        if ship.mode == GameMode.DODGE:
            ship.position[1] = -fy

        low_x = ship.hit_width / 2.0 - 0.5
        high_x = 20.5 - ship.hit_width / 2.0
        if ship.position[0] < low_x:
            ship.position[0] = low_x
        elif ship.position[0] > high_x:
            ship.position[0] = high_x
        if ship.position[1] < state.bottom - 0.5:
            ship.position[1] = state.bottom - 0.5
        elif ship.position[1] > -1.0:
            ship.position[1] = -1.0

    def _demo_step(self) -> int:
        return 1 + FAST_DEMO_STEP * int(self.left_down)

    def _play_frame(self) -> None:
        state = self.state
        ship = state.ship
        move_balls(state)
        if DEATH_LIMIT < ship.life <= 0:
            ship.diffuse[0] = float(-ship.life)
            ship.life -= 1
            if ship.life == DEATH_LIMIT:
                start_explosion(state)
                ship.dead_count += 1
                if ship.new_record:
                    self._save_highscore()
        if ship.life == RESET_LIFE or (
            ship.life <= DEATH_LIMIT and ship.mode == GameMode.DODGE
        ):
            ship.score = 0
            ship.new_record = False
            state.reset_character()
            self.load_stage()

        if ship.new_record:
            ship.highscore = ship.score
        elif ship.score > ship.highscore:
            ship.new_record = True
            ship.highscore = ship.score

    def _advance_rolls(self) -> None:
        state = self.state
        speeds = state.roll_speeds
        for row, roll_row in zip(state.grid, state.roll):
            for col, block in enumerate(row):
                if block <= 0:
                    continue
                if block < len(speeds):
                    roll_row[col] += speeds[block]
                if roll_row[col] > 360.0:
                    roll_row[col] -= 360.0
                elif roll_row[col] < -360.0:
                    roll_row[col] += 360.0

    def _check_finished(self) -> None:
        state = self.state
        ship = state.ship
        if state.blocks == 0 and self.now == self.last:
            if ship.new_record and ship.dead_count:
                self._save_highscore()
            self.finished = True

    def update(self) -> None:
        """Advance the game by one frame."""
        state = self.state
        self._follow_mouse()
        if state.blocks and state.demotime == 0:
            self._play_frame()
        elif state.blocks > 0 and state.demotime > 0:
            state.demotime -= self._demo_step()
            if state.demotime <= 0:
                state.demotime = 0
        elif state.blocks == 0 and state.demotime < DEMO_FRAMES:
            state.demotime += self._demo_step()
            if state.demotime >= DEMO_FRAMES:
                state.demotime = DEMO_FRAMES
                self.now += 1
                state.reset_character()
                self.load_stage()
        self._advance_rolls()
        self._check_finished()

    def status_lines(self) -> list[str]:
        """The text shown on screen this frame."""
        state = self.state
        ship = state.ship
        lines = [
            format_number(ship.balls),
            f"Score {ship.score:7d}",
            f"High Score {ship.highscore:7d}",
            f"Life {ship.life:2d}",
        ]
        if state.demotime == 0:
            for ball, hit, collision in zip(
                state.balls, state.hit_texts, state.collision_texts
            ):
                if hit.flag == 1:
                    lines.append(f"{ball.hitcount:6d} HIT")
                elif hit.flag == 2 and ball.point:
                    lines.append(f"{ball.point:6d} Pts.")
                if collision.flag == 1:
                    lines.append(f"Collision! {ball.point:6d} Pts.")
            lines.append(f"Block {state.blocks:4d}")
            lines.append(f"Dead Count {ship.dead_count}")
        if state.blocks == 0 and self.now != self.last:
            lines.append(f'"{self.stage_name}" Clear!')
        return lines


_SCALE = 23.0
_ORIGIN_X = WINDOW_SIZE / 2 - 10.0 * _SCALE
_ORIGIN_Y = WINDOW_SIZE / 2 - _SCALE


def _to_screen(x: float, y: float) -> tuple[int, int]:
    return round(_ORIGIN_X + x * _SCALE), round(_ORIGIN_Y - y * _SCALE)


def _rect(cx: float, cy: float, width: float, height: float) -> pygame.Rect:
    left, top = _to_screen(cx - width / 2.0, cy + height / 2.0)
    return pygame.Rect(left, top, max(1, round(width * _SCALE)),
                       max(1, round(height * _SCALE)))


def _color(rgba: Sequence[float]) -> tuple[int, int, int]:
    return tuple(round(255 * max(0.0, min(1.0, c))) for c in rgba[:3])


def _rotated(cx: float, cy: float, points: Sequence[tuple[float, float]],
             angle: float) -> list[tuple[int, int]]:
    rad = math.radians(angle)
    cos, sin = math.cos(rad), math.sin(rad)
    return [
        _to_screen(cx + px * cos - py * sin, cy + px * sin + py * cos)
        for px, py in points
    ]


class _Renderer:
    """Draws the game seen from the front onto a pygame surface."""

    def __init__(self, screen: pygame.Surface) -> None:
        self.screen = screen
        self.font = BitmapFont()
        self._cache: dict[str, pygame.Surface] = {}

    def text(self, string: str) -> pygame.Surface:
        surface = self._cache.get(string)
        if surface is None:
            rows = self.font.render(string)
            width = max((len(row) for row in rows), default=0)
            surface = pygame.Surface((max(1, width), len(rows)), pygame.SRCALPHA)
            for y, row in enumerate(rows):
                for x, pixel in enumerate(row):
                    if pixel == "#":
                        surface.set_at((x, y), (255, 255, 255, 255))
            self._cache[string] = surface
        return surface

    def _block(self, game: Game, x: float, y: float, block: int, roll: float) -> None:
        color = _color((x / 10.0, y / 10.0, 1.0))
        screen = self.screen
        if block <= 10:
            pygame.draw.rect(screen, color, _rect(x, y, 1.8, 0.8))
        elif block == 11:
            half = 0.65
            square = [(-half, -half), (half, -half), (half, half), (-half, half)]
            pygame.draw.polygon(screen, color, _rotated(x, y, square, roll))
        elif block == 12:
            triangle = [(0.0, 0.6), (-0.52, -0.3), (0.52, -0.3)]
            pygame.draw.polygon(screen, color, _rotated(x, y, triangle, roll))
        elif block == 13:
            pygame.draw.circle(screen, color, _to_screen(x, y), round(_SCALE))
        if 14 <= block <= 20:
            angle = math.radians(51.4 * (block - 13) + roll)
            height = max(0.1, 0.8 * abs(math.cos(angle)) + 0.8 * abs(math.sin(angle)))
            pygame.draw.rect(screen, color, _rect(x, y, 1.8, height), 1)
            if game.state.demotime == 0:
                label = self.text(format_number((block - 13) * 10))
                screen.blit(label, label.get_rect(center=_to_screen(x, y)))

    def draw(self, game: Game) -> None:
        state = game.state
        ship = state.ship
        screen = self.screen
        screen.fill((0, 0, 0))

        for row in range(GRID_SIZE):
            for col in range(GRID_SIZE):
                block = state.grid[row][col]
                if block > 0:
                    self._block(game, col * 2 + 1.0, float(row), block,
                                state.roll[row][col])

        if ship.life > DEATH_LIMIT:
            pygame.draw.rect(screen, _color(ship.diffuse),
                             _rect(ship.position[0], ship.position[1],
                                   ship.hit_width, ship.hit_height))
            if ship.mode == GameMode.DODGE:
                pygame.draw.rect(screen, (255, 255, 255),
                                 _rect(state.right / 2.0, state.bottom - 1.5,
                                       state.right + 3.0, 1.0))

        for ball in state.balls:
            if ball.active:
                pygame.draw.circle(screen, _color(ball.diffuse),
                                   _to_screen(ball.position[0], ball.position[1]),
                                   round(_SCALE / 2))

        white = (255, 255, 255)
        pygame.draw.rect(screen, white, _rect(state.left - 1.0, 0.0, 1.0, 30.0))
        pygame.draw.rect(screen, white, _rect(state.right + 1.0, 0.0, 1.0, 30.0))
        pygame.draw.rect(screen, white,
                         _rect(state.right / 2.0, state.top, state.right + 3.0, 1.0))

        for line_no, line in enumerate(game.status_lines()):
            screen.blit(self.text(line), (8, 8 + line_no * 16))


def _ask_mode() -> GameMode:
    print("Select Game Mode")
    print("0.Normal Game")
    print("1.Tamayoke Game")
    while True:
        answer = input().strip()
        if answer in ("0", "1"):
            return GameMode(int(answer))


def main(argv: Sequence[str] | None = None) -> int:
    """Run the game in a window."""
    parser = argparse.ArgumentParser(prog="blockheat",
                                     description="Three-dimensional breakout.")
    parser.add_argument("--mode", type=int, choices=(0, 1),
                        help="0 for the normal game, 1 for the dodging game")
    parser.add_argument("--directory", default=".",
                        help="folder holding the stage and score files")
    args = parser.parse_args(argv)
    mode = GameMode(args.mode) if args.mode is not None else _ask_mode()
    game = Game(mode, args.directory)

    pygame.init()
    try:
        screen = pygame.display.set_mode((WINDOW_SIZE, WINDOW_SIZE))
        pygame.display.set_caption("Block")
        clock = pygame.time.Clock()
        renderer = _Renderer(screen)
        running = True
        while running and not game.finished:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.MOUSEMOTION:
                    game.mouse_move(*event.pos)
                elif (event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP)
                      and event.button in (1, 2, 3)):
                    game.mouse_button(event.button - 1,
                                      event.type == pygame.MOUSEBUTTONDOWN)
            if not running or game.finished:
                break
            game.update()
            renderer.draw(game)
            pygame.display.flip()
            clock.tick(FPS)
    finally:
        pygame.quit()
    return 0