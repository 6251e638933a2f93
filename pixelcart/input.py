"""
Button input sources.

The console exposes six digital buttons per player. Entities only ever ask
"is button N down right now?"; sources decide where the answer comes from.
"""
from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Dict, Iterable, Optional, Set

import pygame


class Button(IntEnum):
    """Console button IDs."""
    LEFT = 0
    RIGHT = 1
    UP = 2
    DOWN = 3
    O = 4
    X = 5


class ButtonInput(ABC):
    """Abstract base class for button state sources."""

    @abstractmethod
    def button_pressed(self, button_id: int) -> bool:
        """Return True while the button is held down.

        Unknown IDs read as not pressed.
        """
        pass

    def update(self) -> None:
        """Refresh held state. Called by the host once per frame."""
        pass


class KeyboardInput(ButtonInput):
    """Reads held buttons from the pygame keyboard state."""

    DEFAULT_KEYMAP: Dict[int, Iterable[int]] = {
        Button.LEFT: (pygame.K_LEFT,),
        Button.RIGHT: (pygame.K_RIGHT,),
        Button.UP: (pygame.K_UP,),
        Button.DOWN: (pygame.K_DOWN,),
        Button.O: (pygame.K_z, pygame.K_c),
        Button.X: (pygame.K_x, pygame.K_v),
    }

    def __init__(self, keymap: Optional[Dict[int, Iterable[int]]] = None):
        self._keymap = {int(b): tuple(keys) for b, keys in (keymap or self.DEFAULT_KEYMAP).items()}

    def button_pressed(self, button_id: int) -> bool:
        codes = self._keymap.get(button_id, ())
        if not codes:
            return False
        keys = pygame.key.get_pressed()
        return any(keys[code] for code in codes)


class ScriptedInput(ButtonInput):
    """Button state set directly by code, for tests and headless runs."""

    def __init__(self, pressed: Iterable[int] = ()):
        self._held: Set[int] = {int(b) for b in pressed}

    def press(self, *buttons: int) -> None:
        self._held.update(int(b) for b in buttons)

    def release(self, *buttons: int) -> None:
        self._held.difference_update(int(b) for b in buttons)

    def clear(self) -> None:
        self._held.clear()

    def button_pressed(self, button_id: int) -> bool:
        return button_id in self._held
