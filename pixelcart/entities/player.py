"""Player entity: moved by the four direction buttons."""

from typing import Optional

from pixelcart.entities.base import Entity, EntityOptions
from pixelcart.input import Button, ButtonInput, ScriptedInput


class Player(Entity):
    """Player ship.

    Each held direction moves ``speed`` pixels along its axis. Axes are
    independent, so a diagonal moves ``speed`` on both. There is no clamping
    to the screen.
    """

    W = 17
    H = 13
    SPEED = 2
    SPRITE_SX = 8
    SPRITE_SY = 0
    SPRITE_T = 11

    def __init__(self, options: EntityOptions, buttons: Optional[ButtonInput] = None):
        super().__init__(options)
        self._buttons = buttons if buttons is not None else ScriptedInput()

    @property
    def buttons(self) -> ButtonInput:
        return self._buttons

    def update(self) -> None:
        if self._buttons.button_pressed(Button.LEFT):
            self.x -= self.speed
        if self._buttons.button_pressed(Button.RIGHT):
            self.x += self.speed
        if self._buttons.button_pressed(Button.UP):
            self.y -= self.speed
        if self._buttons.button_pressed(Button.DOWN):
            self.y += self.speed
