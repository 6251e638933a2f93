"""Indexed framebuffer renderer.

There is one Renderer per running cart. It owns the framebuffer, the shared
sprite sheet reference and the palette draw state. Entities draw through it;
the host presents its framebuffer once per frame.
"""

import math
from contextlib import contextmanager
from typing import Iterable, Iterator, Optional

import numpy as np

from pixelcart.config import SCREEN_HEIGHT, SCREEN_WIDTH
from pixelcart.logging import get_logger
from pixelcart.palette import PaletteState, check_index, rgb_lut
from pixelcart.spritesheet import SpriteSheet, default_sprite_sheet

log = get_logger('renderer')


class Renderer:
    """Framebuffer of palette indices plus the global palette state.

    Positions are floored to whole pixels; anything drawn off screen or read
    off the sheet is clipped.
    """

    def __init__(self, sheet: Optional[SpriteSheet] = None,
                 width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT):
        self._sheet = sheet if sheet is not None else default_sprite_sheet()
        self._framebuffer = np.zeros((height, width), dtype=np.uint8)
        self._palette = PaletteState()

    @property
    def sheet(self) -> SpriteSheet:
        return self._sheet

    @property
    def palette(self) -> PaletteState:
        return self._palette

    @property
    def framebuffer(self) -> np.ndarray:
        """Framebuffer indexed [y, x]."""
        return self._framebuffer

    @property
    def width(self) -> int:
        return self._framebuffer.shape[1]

    @property
    def height(self) -> int:
        return self._framebuffer.shape[0]

    # -- palette state -------------------------------------------------------

    def set_color_key(self, index: int, transparent: bool) -> None:
        """Mark a source colour index as transparent (or opaque) for blits."""
        self._palette.set_transparent(index, transparent)

    def pal(self, source: int, target: int) -> None:
        """Draw colour ``source`` as ``target`` until the next reset."""
        self._palette.set_remap(source, target)

    def reset_palette(self) -> None:
        """Restore default transparency and the identity draw palette."""
        self._palette.reset()

    @contextmanager
    def palette_override(self, opaque: Iterable[int] = (),
                         transparent: Iterable[int] = ()) -> Iterator['Renderer']:
        """Apply colour keys for the duration of the block.

        The palette is reset on exit, including when the block raises.

        Example:
            with renderer.palette_override(opaque=[0], transparent=[11]):
                renderer.blit(8, 0, 17, 13, x, y)
        """
        try:
            for index in opaque:
                self.set_color_key(index, False)
            for index in transparent:
                self.set_color_key(index, True)
            yield self
        finally:
            self.reset_palette()

    # -- drawing -------------------------------------------------------------

    def cls(self, color: int = 0) -> None:
        """Clear the framebuffer to a single colour."""
        self._framebuffer.fill(check_index(color))

    def pixel(self, x: int, y: int) -> int:
        """Colour index at (x, y), or 0 off screen."""
        if 0 <= x < self.width and 0 <= y < self.height:
            return int(self._framebuffer[y, x])
        return 0

    def blit(self, src_x: int, src_y: int, w: int, h: int,
             dst_x: float, dst_y: float) -> None:
        """Copy a ``w x h`` sheet region to the screen at (dst_x, dst_y).

        Source pixels whose index is transparent are skipped; the rest go
        through the draw palette remap.
        """
        sheet = self._sheet.pixels
        src_x, src_y, w, h = int(src_x), int(src_y), int(w), int(h)
        dst_x, dst_y = math.floor(dst_x), math.floor(dst_y)

        # Clip the source rectangle to the sheet
        x0, y0 = max(src_x, 0), max(src_y, 0)
        x1 = min(src_x + w, self._sheet.width)
        y1 = min(src_y + h, self._sheet.height)
        if x1 <= x0 or y1 <= y0:
            return
        tx, ty = dst_x + (x0 - src_x), dst_y + (y0 - src_y)

        # Clip the destination to the screen
        cx0, cy0 = max(tx, 0), max(ty, 0)
        cx1 = min(tx + (x1 - x0), self.width)
        cy1 = min(ty + (y1 - y0), self.height)
        if cx1 <= cx0 or cy1 <= cy0:
            return

        region = sheet[y0 + (cy0 - ty):y0 + (cy1 - ty),
                       x0 + (cx0 - tx):x0 + (cx1 - tx)]
        visible = ~self._palette.transparency_mask()[region]
        target = self._framebuffer[cy0:cy1, cx0:cx1]
        target[visible] = self._palette.remap_table()[region][visible]

    def to_rgb(self) -> np.ndarray:
        """Framebuffer as an (height, width, 3) uint8 RGB array."""
        return rgb_lut()[self._framebuffer]
