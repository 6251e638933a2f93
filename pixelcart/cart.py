"""
Cart definition and the per-frame host loop.

A cart is a player plus a list of enemies, described in YAML:

    name: "classes demo"
    sprites: sprites.p8        # optional, relative to the cart file
    player:
      x: 56
      y: 100
      speed: 2
    enemies:
      - {x: 10, y: 16}
      - {x: 60, y: 40, speed: 0.5, axis: y, patrol_min: 30, patrol_max: 70}

Every frame runs an update phase (all entities, registration order) and then
a draw phase (same order). No entity is drawn before every entity has updated.
"""

from pathlib import Path
from typing import List, Optional, Union

import pygame
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pixelcart.config import DEFAULT_SCALE, FPS, WINDOW_TITLE
from pixelcart.entities import Enemy, EnemyOptions, Entity, EntityOptions, Player
from pixelcart.errors import CartLoadError
from pixelcart.input import ButtonInput, ScriptedInput
from pixelcart.logging import get_logger
from pixelcart.renderer import Renderer
from pixelcart.spritesheet import load_sprite_sheet

log = get_logger('cart')


class CartDefinition(BaseModel):
    """Entities to create at start-up, plus an optional sprite sheet."""
    model_config = ConfigDict(extra='forbid')

    name: str = "untitled"
    sprites: Optional[Path] = None
    background: int = Field(default=0, ge=0, le=15)
    player: EntityOptions = Field(default_factory=EntityOptions)
    enemies: List[EnemyOptions] = Field(default_factory=list)


DEMO_CART = CartDefinition(
    name="classes demo",
    player=EntityOptions(x=56, y=100),
    enemies=[
        EnemyOptions(x=10, y=16),
        EnemyOptions(x=60, y=30, speed=2, patrol_min=40, patrol_max=110),
        EnemyOptions(x=100, y=50, speed=0.5, axis='y', patrol_min=50, patrol_max=80),
    ],
)


def load_cart(path: Union[str, Path]) -> CartDefinition:
    """Load a cart definition from YAML.

    A relative ``sprites`` path is resolved against the cart file's directory.

    Raises:
        CartLoadError: If the file is missing, not YAML, or has invalid fields
    """
    path = Path(path)
    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise CartLoadError(f"Cannot read cart {path}: {e}") from e
    except yaml.YAMLError as e:
        raise CartLoadError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise CartLoadError(f"Cart {path} must be a mapping, got {type(data).__name__}")

    try:
        definition = CartDefinition.model_validate(data)
    except ValidationError as e:
        raise CartLoadError(f"Invalid cart {path}: {e}") from e

    if definition.sprites is not None and not definition.sprites.is_absolute():
        definition = definition.model_copy(update={'sprites': path.parent / definition.sprites})

    log.info("Loaded cart '%s' from %s (%d enemies)", definition.name, path, len(definition.enemies))
    return definition


class Cart:
    """Owns the entities and runs them once per frame.

    Attributes:
        definition: What to spawn on init()
        renderer: Shared rendering context
        buttons: Input source handed to the player
        entities: Registered entities, in update/draw order
    """

    def __init__(
        self,
        definition: Optional[CartDefinition] = None,
        buttons: Optional[ButtonInput] = None,
        renderer: Optional[Renderer] = None,
    ):
        self.definition = definition if definition is not None else DEMO_CART
        self.buttons = buttons if buttons is not None else ScriptedInput()
        if renderer is None:
            sheet = load_sprite_sheet(self.definition.sprites) if self.definition.sprites else None
            renderer = Renderer(sheet)
        self.renderer = renderer
        self.entities: List[Entity] = []
        self.player: Optional[Player] = None
        self.frame = 0

    def add(self, entity: Entity) -> Entity:
        """Register an entity at the end of the update/draw order."""
        self.entities.append(entity)
        return entity

    def init(self) -> None:
        """Create the player and enemies from the definition."""
        self.entities.clear()
        self.frame = 0
        self.renderer.reset_palette()
        self.player = self.add(Player.new(self.definition.player, buttons=self.buttons))
        for options in self.definition.enemies:
            self.add(Enemy.new(options))
        log.info("Cart '%s' initialised with %d entities", self.definition.name, len(self.entities))

    def update(self) -> None:
        """Update phase: every entity, in registration order."""
        self.buttons.update()
        for entity in self.entities:
            entity.update()

    def draw(self) -> None:
        """Draw phase: clear, then every entity in registration order."""
        self.renderer.cls(self.definition.background)
        for entity in self.entities:
            entity.draw(self.renderer)

    def step(self) -> None:
        """Run one full frame."""
        self.update()
        self.draw()
        self.frame += 1
        for entity in self.entities:
            log.frame(self.frame, "%r", entity)


def present(renderer: Renderer, window: pygame.Surface) -> None:
    """Scale the framebuffer onto the window."""
    # surfarray is indexed [x, y]
    surface = pygame.surfarray.make_surface(renderer.to_rgb().transpose(1, 0, 2))
    pygame.transform.scale(surface, window.get_size(), window)


def run(cart: Cart, scale: int = DEFAULT_SCALE, fps: int = FPS,
        max_frames: Optional[int] = None) -> int:
    """Open a window and run the cart until closed.

    Controls: arrows move, R restarts, F toggles fullscreen, ESC quits.

    Args:
        cart: Cart to run (init() is called here)
        scale: Window pixels per console pixel
        fps: Frame rate cap
        max_frames: Stop after this many frames (None = until closed)

    Returns:
        Number of frames run
    """
    pygame.init()
    window = pygame.display.set_mode((cart.renderer.width * scale, cart.renderer.height * scale))
    pygame.display.set_caption(f"{WINDOW_TITLE} - {cart.definition.name}")

    cart.init()
    clock = pygame.time.Clock()
    running = True

    try:
        while running:
            clock.tick(fps)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_f:
                        pygame.display.toggle_fullscreen()
                    elif event.key == pygame.K_r:
                        cart.init()
                        log.info("Restarted")

            cart.step()
            present(cart.renderer, window)
            pygame.display.flip()

            if max_frames is not None and cart.frame >= max_frames:
                running = False
    finally:
        pygame.quit()

    log.info("Stopped after %d frames", cart.frame)
    return cart.frame
