"""Stage editor: paint blocks onto the 10x10 grid with the mouse and save them."""

from __future__ import annotations

import argparse
import os
from enum import IntEnum
from typing import Sequence

import pygame

from .font import BitmapFont, format_number
from .game import LEFT, MIDDLE, RIGHT, WINDOW_SIZE
from .stage import GRID_SIZE, StageData, load_stage, save_stage

FPS = 10
DEFAULT_FILENAME = "UnTitled"

PALETTE_HEIGHT = 70
PALETTE_SLOT = 40
PART_COUNT = 20

COMMAND_LEFT = 680
COMMAND_RIGHT = 780
COMMAND_TOP = 128
COMMAND_BOTTOM = 223
COMMAND_STEP = 35
COMMAND_LABELS = ("File Name", "Load", "Save", "Gravity", "Enemy", "Display")

SCREEN_X0 = 200.0
SCREEN_Y0 = 420.0
SCREEN_SCALE = 15.0
MAX_X = 18.5
START_POSITION = (10.0, -10.0)


class Command(IntEnum):
    """The clickable entries of the command menu."""

    FILE_NAME = 0
    LOAD = 1
    SAVE = 2


class Editor:
    """An editing session on one stage file."""

    def __init__(self, filename: str | os.PathLike = DEFAULT_FILENAME) -> None:
        self.filename = os.fspath(filename)
        self.stage = StageData()
        self.parts = 0
        self.command: Command | None = None
        self.buttons = [False, False, False]
        self.mouse_x = 0
        self.mouse_y = 0
        self.x, self.y = START_POSITION

    def load(self) -> None:
        """Replace the stage being edited with the one in the file."""
        self.stage = load_stage(self.filename)

    def save(self) -> None:
        """Write the stage being edited to the file."""
        save_stage(self.stage, self.filename)

    @property
    def cursor(self) -> tuple[int, int] | None:
        """The grid cell (column, row) under the pointer, or None outside the grid."""
        col = int(self.x / 2.0)
        row = int(self.y) - 1
        if 0 <= col < GRID_SIZE and 0 <= row < GRID_SIZE:
            return col, row
        return None

    def mouse_move(self, x: int, y: int) -> None:
        """Record the pointer position in window pixels."""
        self.mouse_x = x
        self.mouse_y = y

    def mouse_button(self, button: int, pressed: bool, x: int, y: int) -> None:
        """React to a button going down or up at window position (x, y).

        A left click in the top bar picks a part, in the command menu runs
        a command, and anywhere else starts painting.
        """
        self.mouse_move(x, y)
        if button == LEFT and pressed:
            if y < PALETTE_HEIGHT:
                self.parts = int(x / PALETTE_SLOT) + 1
            elif COMMAND_LEFT <= x <= COMMAND_RIGHT and COMMAND_TOP <= y <= COMMAND_BOTTOM:
                self.command = Command(int((y - COMMAND_TOP) / COMMAND_STEP))
                if self.command == Command.LOAD:
                    self.load()
                elif self.command == Command.SAVE:
                    self.save()
            else:
                self.buttons[LEFT] = True
        elif button in (LEFT, MIDDLE, RIGHT):
            self.buttons[button] = bool(pressed)

    def update(self) -> None:
        """Follow the pointer and paint or erase the cell under it."""
        self.x = min(max((self.mouse_x - SCREEN_X0) / SCREEN_SCALE, 0.0), MAX_X)
        self.y = (SCREEN_Y0 - self.mouse_y) / SCREEN_SCALE
        cell = self.cursor
        if cell is None:
            return
        col, row = cell
        if self.buttons[LEFT]:
            self.stage.grid[row][col] = self.parts
        elif self.buttons[RIGHT]:
            self.stage.grid[row][col] = 0


def _cell_rect(col: int, row: int) -> pygame.Rect:
    left = SCREEN_X0 + 2 * col * SCREEN_SCALE
    top = SCREEN_Y0 - (row + 2) * SCREEN_SCALE
    return pygame.Rect(round(left), round(top),
                       round(2 * SCREEN_SCALE), round(SCREEN_SCALE))


def _block_color(col: int, row: int) -> tuple[int, int, int]:
    x = col * 2.0 + 1.0
    y = float(row)
    return (round(255 * min(1.0, x / 10.0)), round(255 * min(1.0, y / 10.0)), 255)


class _Renderer:
    """Draws the editor onto a pygame surface."""

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

    def _block(self, rect: pygame.Rect, color: tuple[int, int, int],
               block: int, solid: bool) -> None:
        width = 0 if solid else 1
        if block <= 10:
            inner = rect.inflate(-2, -2)
            inner.height = max(1, round(inner.height * max(block, 1) / 10.0))
            inner.bottom = rect.bottom - 1
            pygame.draw.rect(self.screen, color, inner, width)
        elif block == 11:
            pygame.draw.rect(self.screen, color, rect.inflate(-8, -2), width)
        elif block == 12:
            points = [rect.midtop, rect.bottomleft, rect.bottomright]
            pygame.draw.polygon(self.screen, color, points, width)
        elif block == 13:
            pygame.draw.circle(self.screen, color, rect.center,
                               rect.height // 2, width)
        else:
            pygame.draw.rect(self.screen, color, rect, 1)
            label = self.text(format_number((block - 13) * 10))
            self.screen.blit(label, label.get_rect(center=rect.center))

    def draw(self, editor: Editor) -> None:
        screen = self.screen
        screen.fill((0, 0, 0))
        white = (255, 255, 255)

        cursor = editor.cursor
        middle = editor.buttons[MIDDLE]
        for row in range(GRID_SIZE):
            for col in range(GRID_SIZE):
                block = editor.stage.grid[row][col]
                if (col, row) == cursor or block > 20:
                    continue
                rect = _cell_rect(col, row)
                if block == 0:
                    pygame.draw.rect(screen, (40, 40, 60), rect, 1)
                else:
                    self._block(rect, _block_color(col, row), block, middle)
        if cursor is not None:
            col, row = cursor
            rect = _cell_rect(col, row)
            pygame.draw.rect(screen, white, rect, 1)
            block = editor.stage.grid[row][col]
            if block:
                self._block(rect, _block_color(col, row), block, True)

        border = _cell_rect(0, GRID_SIZE - 1).union(_cell_rect(GRID_SIZE - 1, 0))
        pygame.draw.rect(screen, white, border.inflate(8, 8), 2)

        for part in range(1, PART_COUNT + 1):
            slot = pygame.Rect((part - 1) * PALETTE_SLOT, 0, PALETTE_SLOT, PALETTE_HEIGHT)
            if part == editor.parts:
                pygame.draw.rect(screen, (90, 90, 90), slot)
            self._block(slot.inflate(-8, -40), (128, 200, 255), part, False)

        for index, label in enumerate(COMMAND_LABELS):
            screen.blit(self.text(label),
                        (COMMAND_LEFT, COMMAND_TOP + index * COMMAND_STEP + 10))
        screen.blit(self.text(editor.filename[:12]),
                    (COMMAND_LEFT, COMMAND_TOP + COMMAND_STEP * len(COMMAND_LABELS) + 10))
        screen.blit(self.text(f"{editor.stage.gravity}"),
                    (COMMAND_LEFT + 90, COMMAND_TOP + 3 * COMMAND_STEP + 10))
        screen.blit(self.text(f"{int(middle)}"),
                    (COMMAND_LEFT + 90, COMMAND_TOP + 5 * COMMAND_STEP + 10))

        lines = (
            f"x = {editor.mouse_x}",
            f"y = {editor.mouse_y}",
            f"Parts={editor.parts} Button={int(editor.buttons[LEFT])}",
        )
        for line_no, line in enumerate(lines):
            screen.blit(self.text(line), (8, WINDOW_SIZE - 60 + line_no * 16))


def _ask_filename() -> str:
    name = ""
    while not name:
        name = input("Input FileName ? ").strip()
    return name


def main(argv: Sequence[str] | None = None) -> int:
    """Run the stage editor in a window."""
    parser = argparse.ArgumentParser(prog="blockheat-edit",
                                     description="Edit a breakout stage file.")
    parser.add_argument("filename", nargs="?", default="",
                        help="stage file to load and save")
    args = parser.parse_args(argv)
    editor = Editor(args.filename or _ask_filename())

    pygame.init()
    try:
        screen = pygame.display.set_mode((WINDOW_SIZE, WINDOW_SIZE))
        pygame.display.set_caption("Block")
        clock = pygame.time.Clock()
        renderer = _Renderer(screen)
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.MOUSEMOTION:
                    editor.mouse_move(*event.pos)
                elif (event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP)
                      and event.button in (1, 2, 3)):
                    editor.mouse_button(event.button - 1,
                                        event.type == pygame.MOUSEBUTTONDOWN,
                                        *event.pos)
            if not running:
                break
            editor.update()
            renderer.draw(editor)
            pygame.display.flip()
            clock.tick(FPS)
    finally:
        pygame.quit()
    return 0