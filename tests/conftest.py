"""Pytest fixtures for pixelcart tests."""
import os

# Headless pygame, quiet logs
os.environ['SDL_VIDEODRIVER'] = 'dummy'
os.environ.setdefault('PIXELCART_LOG_LEVEL', 'WARNING')

from pathlib import Path
from typing import List, Tuple

import pytest

from pixelcart import logging as cart_logging
from pixelcart.input import ScriptedInput
from pixelcart.palette import PaletteState
from pixelcart.renderer import Renderer

CARTS_DIR = Path(__file__).parent.parent / 'carts'


class RecordingRenderer(Renderer):
    """Renderer that remembers the palette state seen by each blit."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.blits: List[Tuple[tuple, PaletteState]] = []

    def blit(self, *args) -> None:
        self.blits.append((args, self.palette.copy()))
        super().blit(*args)


@pytest.fixture
def buttons():
    """Scripted buttons with nothing held."""
    return ScriptedInput()


@pytest.fixture
def renderer():
    """Renderer over the built-in sprite sheet."""
    return Renderer()


@pytest.fixture
def recording_renderer():
    return RecordingRenderer()


@pytest.fixture
def carts_dir():
    return CARTS_DIR


@pytest.fixture
def logging_config():
    """Snapshot and restore the global logging config."""
    saved = dict(cart_logging._config)
    saved['module_levels'] = dict(saved['module_levels'])
    yield
    cart_logging._config.clear()
    cart_logging._config.update(saved)
