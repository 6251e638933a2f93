"""
Sprite sheet loading.

The sheet is a 128x128 grid of palette indices shared by every entity.
It can come from the ``__gfx__`` section of a ``.p8`` text cart, from a PNG
(colours snapped to the nearest palette entry), or from the built-in sheet
used by the demo cart.
"""

import string
from pathlib import Path
from typing import Iterable, Union

import numpy as np

from pixelcart.config import SHEET_HEIGHT, SHEET_WIDTH
from pixelcart.errors import SpriteSheetError
from pixelcart.logging import get_logger
from pixelcart.palette import nearest_index

log = get_logger('spritesheet')

GFX_HEADER = '__gfx__'


class SpriteSheet:
    """Immutable grid of palette indices.

    Pixel data is exposed as a read-only numpy view indexed ``[y, x]``.
    """

    def __init__(self, pixels: np.ndarray):
        if pixels.shape != (SHEET_HEIGHT, SHEET_WIDTH):
            raise SpriteSheetError(
                f"Sprite sheet must be {SHEET_WIDTH}x{SHEET_HEIGHT}, got "
                f"{pixels.shape[1]}x{pixels.shape[0]}"
            )
        self._pixels = pixels.astype(np.uint8, copy=True)
        self._pixels.setflags(write=False)

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    def get(self, x: int, y: int) -> int:
        """Colour index at (x, y), or 0 outside the sheet (like sget)."""
        if 0 <= x < self.width and 0 <= y < self.height:
            return int(self._pixels[y, x])
        return 0

    def region(self, sx: int, sy: int, w: int, h: int) -> np.ndarray:
        """Return the part of the (sx, sy, w, h) region that lies on the sheet."""
        x0, y0 = max(sx, 0), max(sy, 0)
        x1, y1 = min(sx + w, self.width), min(sy + h, self.height)
        if x1 <= x0 or y1 <= y0:
            return self._pixels[0:0, 0:0]
        return self._pixels[y0:y1, x0:x1]


def parse_gfx(lines: Union[str, Iterable[str]]) -> SpriteSheet:
    """Parse the hex rows of a ``__gfx__`` section.

    Each row holds one hex digit per pixel. Short rows and missing rows
    are filled with colour 0; extra rows and columns are ignored.

    Args:
        lines: Section body as a string or iterable of lines

    Raises:
        SpriteSheetError: If a row contains a non-hex character
    """
    if isinstance(lines, str):
        lines = lines.splitlines()

    pixels = np.zeros((SHEET_HEIGHT, SHEET_WIDTH), dtype=np.uint8)
    for row, line in enumerate(lines):
        if row >= SHEET_HEIGHT:
            break
        line = line.strip()[:SHEET_WIDTH]
        for col, char in enumerate(line):
            if char not in string.hexdigits:
                raise SpriteSheetError(
                    f"Invalid gfx digit {char!r} at row {row}, column {col}"
                )
            pixels[row, col] = int(char, 16)
    return SpriteSheet(pixels)


def _extract_section(text: str, header: str) -> list:
    """Return the lines between ``header`` and the next ``__section__``."""
    body = []
    inside = False
    for line in text.splitlines():
        stripped = line.strip()
        if stripped.startswith('__') and stripped.endswith('__'):
            if inside:
                break
            inside = stripped == header
            continue
        if inside:
            body.append(stripped)
    if not inside and not body:
        raise SpriteSheetError(f"No {header} section found")
    return body


def parse_p8(text: str) -> SpriteSheet:
    """Parse the sprite sheet out of a ``.p8`` text cart."""
    return parse_gfx(_extract_section(text, GFX_HEADER))


def _load_png(path: Path) -> SpriteSheet:
    import pygame

    try:
        surface = pygame.image.load(str(path))
    except pygame.error as e:
        raise SpriteSheetError(f"Cannot load image {path}: {e}") from e

    # surfarray is indexed [x, y]
    rgb = pygame.surfarray.array3d(surface).transpose(1, 0, 2)
    pixels = np.zeros((SHEET_HEIGHT, SHEET_WIDTH), dtype=np.uint8)
    h = min(rgb.shape[0], SHEET_HEIGHT)
    w = min(rgb.shape[1], SHEET_WIDTH)
    pixels[:h, :w] = nearest_index(rgb[:h, :w])
    return SpriteSheet(pixels)


def load_sprite_sheet(path: Union[str, Path]) -> SpriteSheet:
    """Load a sprite sheet from a ``.p8`` cart or an image file.

    Raises:
        SpriteSheetError: If the file is missing or malformed
    """
    path = Path(path)
    if not path.exists():
        raise SpriteSheetError(f"Sprite sheet not found: {path}")

    log.info("Loading sprite sheet %s", path)
    if path.suffix == '.p8':
        return parse_p8(path.read_text())
    return _load_png(path)


# Built-in art, one string per row, '.' = transparent key colour (11)
_PLAYER_ART = [
    "........7........",
    ".......767.......",
    ".......767.......",
    "......76667......",
    "......6c6c6......",
    ".....766c667.....",
    "..0..6666666..0..",
    ".060.6566656.060.",
    "06660666666606660",
    "06666655555666660",
    "0666650...0566660",
    ".000.08...80.000.",
    "......9...9......",
]

_ENEMY_ART = [
    "..8....8..",
    "...8..8...",
    "..888888..",
    ".88088088.",
    "8888888888",
    "8.888888.8",
    "8.8....8.8",
    "...88.88..",
    "..........",
]

_ART_KEY = 11


def _stamp(pixels: np.ndarray, art: list, sx: int, sy: int) -> None:
    for dy, row in enumerate(art):
        for dx, char in enumerate(row):
            pixels[sy + dy, sx + dx] = _ART_KEY if char == '.' else int(char, 16)


def default_sprite_sheet() -> SpriteSheet:
    """Sheet with the player ship at (8, 0) and the enemy at (25, 0)."""
    pixels = np.full((SHEET_HEIGHT, SHEET_WIDTH), _ART_KEY, dtype=np.uint8)
    _stamp(pixels, _PLAYER_ART, 8, 0)
    _stamp(pixels, _ENEMY_ART, 25, 0)
    return SpriteSheet(pixels)
