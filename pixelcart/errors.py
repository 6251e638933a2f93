"""Exceptions raised by pixelcart."""


class PixelCartError(Exception):
    """Base class for pixelcart errors."""
    pass


class CartLoadError(PixelCartError):
    """Raised when a cart definition file cannot be read or parsed."""
    pass


class SpriteSheetError(PixelCartError):
    """Raised when sprite sheet data is malformed or cannot be loaded."""
    pass


class PaletteError(PixelCartError):
    """Raised for palette indices outside the console palette."""

    def __init__(self, index: int):
        super().__init__(f"Palette index out of range 0-15: {index}")
        self.index = index
