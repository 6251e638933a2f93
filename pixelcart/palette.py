"""
Console palette and draw-state management.

The console has a fixed 16 colour palette. Drawing goes through a small
piece of global state: which indices are transparent during a blit, and an
optional index remap (draw palette). Both are reset by ``pal()``.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, List, Set, Tuple

import numpy as np

from pixelcart.errors import PaletteError

# Type alias for RGB color
Color = Tuple[int, int, int]

PALETTE_SIZE = 16

CONSOLE_PALETTE: List[Color] = [
    (0, 0, 0),         # 0  black
    (29, 43, 83),      # 1  dark blue
    (126, 37, 83),     # 2  dark purple
    (0, 135, 81),      # 3  dark green
    (171, 82, 54),     # 4  brown
    (95, 87, 79),      # 5  dark grey
    (194, 195, 199),   # 6  light grey
    (255, 241, 232),   # 7  white
    (255, 0, 77),      # 8  red
    (255, 163, 0),     # 9  orange
    (255, 236, 39),    # 10 yellow
    (0, 228, 54),      # 11 green
    (41, 173, 255),    # 12 blue
    (131, 118, 156),   # 13 lavender
    (255, 119, 168),   # 14 pink
    (255, 204, 170),   # 15 peach
]

# Colour 0 is the only transparent index after reset
DEFAULT_TRANSPARENT: FrozenSet[int] = frozenset({0})


def check_index(index: int) -> int:
    """Return index unchanged, raising PaletteError if out of range."""
    if not 0 <= index < PALETTE_SIZE:
        raise PaletteError(index)
    return index


def _identity_remap() -> List[int]:
    return list(range(PALETTE_SIZE))


@dataclass
class PaletteState:
    """Transparency set and draw-palette remap used by every blit."""

    transparent: Set[int] = field(default_factory=lambda: set(DEFAULT_TRANSPARENT))
    remap: List[int] = field(default_factory=_identity_remap)

    def is_transparent(self, index: int) -> bool:
        """Check if a source colour index is skipped when blitting."""
        return index in self.transparent

    def set_transparent(self, index: int, transparent: bool) -> None:
        check_index(index)
        if transparent:
            self.transparent.add(index)
        else:
            self.transparent.discard(index)

    def set_remap(self, source: int, target: int) -> None:
        self.remap[check_index(source)] = check_index(target)

    @property
    def is_default(self) -> bool:
        """True when no override is active."""
        return self.transparent == DEFAULT_TRANSPARENT and self.remap == _identity_remap()

    def reset(self) -> None:
        """Restore default transparency and identity remap."""
        self.transparent = set(DEFAULT_TRANSPARENT)
        self.remap = _identity_remap()

    def copy(self) -> 'PaletteState':
        return PaletteState(transparent=set(self.transparent), remap=list(self.remap))

    def transparency_mask(self) -> np.ndarray:
        """Boolean lookup table: mask[i] is True if index i is transparent."""
        mask = np.zeros(PALETTE_SIZE, dtype=bool)
        for index in self.transparent:
            mask[index] = True
        return mask

    def remap_table(self) -> np.ndarray:
        return np.array(self.remap, dtype=np.uint8)


def rgb_lut() -> np.ndarray:
    """16x3 uint8 table mapping palette index to RGB."""
    return np.array(CONSOLE_PALETTE, dtype=np.uint8)


def nearest_index(colors: np.ndarray) -> np.ndarray:
    """
    Map an (..., 3) RGB array to the nearest palette indices.

    Args:
        colors: Array of RGB triples (any integer dtype)

    Returns:
        uint8 array of palette indices with the leading shape of ``colors``
    """
    lut = rgb_lut().astype(np.int32)
    diff = colors[..., np.newaxis, :].astype(np.int32) - lut
    distance = np.sum(diff * diff, axis=-1)
    return np.argmin(distance, axis=-1).astype(np.uint8)
