"""The 8x12 bitmap font covering the printable ASCII characters."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable, Sequence

FIRST_CHAR = 32
LAST_CHAR = 126
GLYPH_COUNT = LAST_CHAR - FIRST_CHAR + 1
GLYPH_HEIGHT = 12
GLYPH_WIDTH = 8
ADVANCE = 10

# One row of hex bytes per glyph, bottom pixel row first.
_DEFAULT_GLYPH_HEX = (
    "00 00 00 00 00 00 00 00 00 00 00 00",  # space
    "00 18 18 00 00 18 18 18 18 18 18 18",  # !
    "00 00 00 00 00 00 00 00 36 36 36 36",  # "
    "00 00 00 66 66 ff 66 66 ff 66 66 00",  # #
    "00 18 7e ff 1b 1f 1e f8 d8 ff 7e 18",  # $
    "00 0e 1b db 6e 30 18 0c 76 db d8 70",  # %
    "00 7f c6 cf d8 70 70 d8 cc cc 6c 38",  # &
    "00 00 00 00 00 00 00 00 00 00 00 00",  # '
    "00 0c 18 30 30 30 30 30 30 30 18 0c",  # (
    "00 30 18 0c 0c 0c 0c 0c 0c 0c 18 30",  # )
    "00 00 00 00 99 5a 3c ff 3c 5a 99 00",  # *
    "00 00 00 18 18 18 ff ff 18 18 18 00",  # +
    "00 00 30 18 1c 1c 00 00 00 00 00 00",  # ,
    "00 00 00 00 00 00 ff ff 00 00 00 00",  # -
    "00 00 00 38 38 00 00 00 00 00 00 00",  # .
    "60 60 30 30 18 18 0c 0c 06 06 03 03",  # /
    "00 3c 66 c3 e3 f3 db cf c7 c3 66 3c",  # 0
    "00 7e 18 18 18 18 18 18 18 78 38 18",  # 1
    "00 ff c0 c0 60 30 18 0c 06 03 e7 7e",  # 2
    "00 7e e7 03 03 07 7e 07 03 03 e7 7e",  # 3
    "00 0c 0c 0c 0c 0c ff cc 6c 3c 1c 0c",  # 4
    "00 7e e7 03 03 07 fe c0 c0 c0 c0 ff",  # 5
    "00 7e e7 c3 c3 c7 fe c0 c0 c0 e7 7e",  # 6
    "00 30 30 30 30 18 0c 06 03 03 03 ff",  # 7
    "00 7e e7 c3 c3 e7 7e e7 c3 c3 e7 7e",  # 8
    "00 7e e7 03 03 03 7f e7 c3 c3 e7 7e",  # 9
    "00 00 00 38 38 00 00 38 38 00 00 00",  # :
    "00 00 30 18 1c 1c 00 1c 1c 00 00 00",  # ;
    "00 06 0c 18 30 60 c0 60 30 18 0c 06",  # <
    "00 00 00 00 ff ff 00 ff ff 00 00 00",  # =
    "00 60 30 18 0c 06 03 06 0c 18 30 60",  # >
    "00 18 00 00 18 18 0c 06 03 c3 c3 7e",  # ?
    "00 00 3f 60 cf db d3 dd c3 7e 00 00",  # @
    "00 c3 c3 c3 c3 ff c3 c3 c3 66 3c 18",  # A
    "00 fe c7 c3 c3 c7 fe c7 c3 c3 c7 fe",  # B
    "00 7e e7 c0 c0 c0 c0 c0 c0 c0 e7 7e",  # C
    "00 fc ce c7 c3 c3 c3 c3 c3 c7 ce fc",  # D
    "00 ff c0 c0 c0 c0 fc c0 c0 c0 c0 ff",  # E
    "00 c0 c0 c0 c0 c0 c0 fc c0 c0 c0 ff",  # F
    "00 7e e7 c3 c3 cf c0 c0 c0 c0 e7 7e",  # G
    "00 c3 c3 c3 c3 c3 ff c3 c3 c3 c3 c3",  # H
    "00 7e 18 18 18 18 18 18 18 18 18 7e",  # I
    "00 7c ee c6 06 06 06 06 06 06 06 06",  # J
    "00 c3 c6 cc d8 f0 e0 f0 d8 cc c6 c3",  # K
    "00 ff c0 c0 c0 c0 c0 c0 c0 c0 c0 c0",  # L
    "00 c3 c3 c3 c3 c3 c3 db ff ff e7 c3",  # M
    "00 c7 c7 cf cf df db fb f3 f3 e3 e3",  # N
    "00 7e e7 c3 c3 c3 c3 c3 c3 c3 e7 7e",  # O
    "00 c0 c0 c0 c0 c0 fe c7 c3 c3 c7 fe",  # P
    "00 3f 6e df db c3 c3 c3 c3 c3 66 3c",  # Q
    "00 c3 c6 cc d8 f0 fe c7 c3 c3 c7 fe",  # R
    "00 7e e7 03 03 07 7e e0 c0 c0 e7 7e",  # S
    "00 18 18 18 18 18 18 18 18 18 18 ff",  # T
    "00 7e e7 c3 c3 c3 c3 c3 c3 c3 c3 c3",  # U
    "00 18 3c 3c 66 66 c3 c3 c3 c3 c3 c3",  # V
    "00 c3 e7 ff ff db db c3 c3 c3 c3 c3",  # W
    "00 c3 66 66 3c 3c 18 3c 3c 66 66 c3",  # X
    "00 18 18 18 18 18 18 3c 3c 66 66 c3",  # Y
    "00 ff c0 c0 60 30 7e 0c 06 03 03 ff",  # Z
    "00 3c 30 30 30 30 30 30 30 30 30 3c",  # [
    "03 03 06 06 0c 0c 18 18 30 30 60 60",  # backslash
    "00 3c 0c 0c 0c 0c 0c 0c 0c 0c 0c 3c",  # ]
    "00 00 00 00 00 00 00 00 c3 66 3c 18",  # ^
    "ff ff 00 00 00 00 00 00 00 00 00 00",  # _
    "00 00 00 00 00 00 00 00 18 38 30 70",  # `
    "00 7f c3 c3 7f 03 c3 7e 00 00 00 00",  # a
    "00 fe c3 c3 c3 c3 fe c0 c0 c0 c0 c0",  # b
    "00 7e c3 c0 c0 c0 c3 7e 00 00 00 00",  # c
    "00 7f c3 c3 c3 c3 7f 03 03 03 03 03",  # d
    "00 00 7f c0 c0 fe c3 c3 7e 00 00 00",  # e
    "00 30 30 30 30 30 fc 30 30 30 33 1e",  # f
    "7e c3 03 03 7f c3 c3 c3 7e 00 00 00",  # g
    "00 c3 c3 c3 c3 c3 c3 fe c0 c0 c0 c0",  # h
    "00 00 18 18 18 18 18 18 18 00 00 18",  # i
    "38 6c 0c 0c 0c 0c 0c 0c 0c 00 00 0c",  # j
    "00 c6 cc f8 f0 d8 cc c6 c0 c0 c0 c0",  # k
    "00 7e 18 18 18 18 18 18 18 18 18 78",  # l
    "00 00 db db db db db db fe 00 00 00",  # m
    "00 00 c6 c6 c6 c6 c6 c6 fc 00 00 00",  # n
    "00 00 7c c6 c6 c6 c6 c6 7c 00 00 00",  # o
    "c0 c0 c0 fe c3 c3 c3 c3 fe 00 00 00",  # p
    "03 03 03 7f c3 c3 c3 c3 7f 00 00 00",  # q
    "00 00 c0 c0 c0 c0 c0 e0 fe 00 00 00",  # r
    "00 00 fe 03 03 7e c0 c0 7f 00 00 00",  # s
    "00 00 1c 36 30 30 30 30 fc 30 30 30",  # t
    "00 00 7e c6 c6 c6 c6 c6 c6 00 00 00",  # u
    "00 00 18 3c 3c 66 66 c3 c3 00 00 00",  # v
    "00 00 c3 e7 ff db c3 c3 c3 00 00 00",  # w
    "00 00 c3 66 3c 18 3c 66 c3 00 00 00",  # x
    "c0 60 60 30 18 3c 66 66 c3 00 00 00",  # y
    "00 00 ff 60 30 18 0c 06 ff 00 00 00",  # z
    "00 0f 18 18 18 38 f0 38 18 18 18 0f",  # {
    "18 18 18 18 18 18 18 18 18 18 18 18",  # |
    "00 f0 18 18 18 1c 0f 1c 18 18 18 f0",  # }
    "00 00 00 00 00 00 06 8f f1 60 00 00",  # ~
)


def _validate(glyphs: Sequence[bytes]) -> tuple[bytes, ...]:
    result = tuple(bytes(g) for g in glyphs)
    if len(result) != GLYPH_COUNT:
        raise ValueError(f"expected {GLYPH_COUNT} glyphs, got {len(result)}")
    for code, glyph in enumerate(result, FIRST_CHAR):
        if len(glyph) != GLYPH_HEIGHT:
            raise ValueError(
                f"glyph {chr(code)!r} has {len(glyph)} rows, expected {GLYPH_HEIGHT}"
            )
    return result


def default_glyphs() -> list[bytes]:
    """Return the built-in glyph table, one 12-byte row set per character."""
    return [bytes.fromhex(row) for row in _DEFAULT_GLYPH_HEX]


def load_font(path: str | os.PathLike) -> list[bytes]:
    """Read a font file of whitespace-separated hex bytes (95 glyphs x 12 rows)."""
    with open(path, "r", encoding="ascii") as fh:
        tokens = fh.read().split()
    needed = GLYPH_COUNT * GLYPH_HEIGHT
    if len(tokens) < needed:
        raise ValueError(
            f"unexpected end of font data: {len(tokens)} values, need {needed}"
        )
    values = bytes(int(tok, 16) & 0xFF for tok in tokens[:needed])
    return [
        values[start:start + GLYPH_HEIGHT]
        for start in range(0, needed, GLYPH_HEIGHT)
    ]


def save_font(path: str | os.PathLike, glyphs: Iterable[bytes]) -> None:
    """Write glyphs as one lower-case hex byte per line."""
    checked = _validate(list(glyphs))
    with open(path, "w", encoding="ascii") as fh:
        fh.writelines(f"{value:x}\n" for glyph in checked for value in glyph)


def format_number(num: int) -> str:
    """Format a score the way the bitmap number display does.

    Zero shows as "0"; negative numbers show nothing.
    """
    if num == 0:
        return "0"
    if num < 0:
        return ""
    return str(num)


@dataclass(frozen=True)
class BitmapFont:
    """A fixed 8x12 font for characters 32..126, advancing 10 pixels each."""

    glyphs: tuple[bytes, ...] = tuple(default_glyphs())

    def __post_init__(self) -> None:
        object.__setattr__(self, "glyphs", _validate(self.glyphs))

    @classmethod
    def from_file(cls, path: str | os.PathLike) -> "BitmapFont":
        """Build a font from a hex font file."""
        return cls(tuple(load_font(path)))

    def glyph(self, char: str) -> bytes:
        """Return the 12 rows of a character, bottom row first."""
        if len(char) != 1:
            raise ValueError("expected a single character")
        code = ord(char)
        if not FIRST_CHAR <= code <= LAST_CHAR:
            raise KeyError(char)
        return self.glyphs[code - FIRST_CHAR]

    def render(self, text: str) -> list[str]:
        """Render text as rows of '#' and '.', top row first.

        Characters outside the font are skipped without advancing.
        """
        rows = [""] * GLYPH_HEIGHT
        pad = "." * (ADVANCE - GLYPH_WIDTH)
        for char in text:
            try:
                glyph = self.glyph(char)
            except KeyError:
                continue
            for line, value in enumerate(reversed(glyph)):
                bits = "".join(
                    "#" if value & (0x80 >> bit) else "." for bit in range(GLYPH_WIDTH)
                )
                rows[line] += bits + pad
        return rows