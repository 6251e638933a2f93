"""Configuration for pixelcart.

Screen geometry is fixed by the console; window scale and frame rate can be
overridden from the environment or a .env file next to the package.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from package directory
_env_path = Path(__file__).parent / '.env'
load_dotenv(_env_path)


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    return int(os.getenv(key, str(default)))


# Console display (fixed)
SCREEN_WIDTH: int = 128
SCREEN_HEIGHT: int = 128

# Sprite sheet (fixed)
SHEET_WIDTH: int = 128
SHEET_HEIGHT: int = 128

# Host window
DEFAULT_SCALE: int = _get_int('PIXELCART_SCALE', 4)
FPS: int = _get_int('PIXELCART_FPS', 30)

WINDOW_TITLE: str = "pixelcart"
