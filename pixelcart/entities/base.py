"""Entity base class and the options record shared by every kind.

Each kind is a subclass carrying its constants (size, default speed, sprite
location) as class attributes. Instances only hold what changes per entity:
position and speed, plus whatever extra state the kind needs.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Mapping, Optional, Tuple, Type, Union

from pydantic import BaseModel, ConfigDict

from pixelcart.logging import get_logger
from pixelcart.renderer import Renderer

log = get_logger('entities')


class EntityOptions(BaseModel):
    """Construction options common to all entity kinds.

    ``speed=None`` means "use the kind's SPEED". Unknown fields are ignored,
    and no range checks are applied: a negative speed simply moves backwards.
    """
    model_config = ConfigDict(extra='ignore', frozen=True)

    x: float = 0.0
    y: float = 0.0
    speed: Optional[float] = None


OptionsLike = Union[EntityOptions, Mapping[str, Any], None]


class Entity(ABC):
    """A sprite-backed object updated and drawn once per frame."""

    W: ClassVar[int]
    H: ClassVar[int]
    SPEED: ClassVar[float]
    SPRITE_SX: ClassVar[int]
    SPRITE_SY: ClassVar[int]
    SPRITE_T: ClassVar[int] = 11

    Options: ClassVar[Type[EntityOptions]] = EntityOptions

    def __init__(self, options: EntityOptions):
        self.x: float = options.x
        self.y: float = options.y
        self.speed: float = options.speed if options.speed is not None else type(self).SPEED

    @classmethod
    def parse_options(cls, options: OptionsLike = None) -> EntityOptions:
        """Coerce a mapping, another kind's options, or None into cls.Options."""
        if options is None:
            return cls.Options()
        if isinstance(options, cls.Options):
            return options
        if isinstance(options, BaseModel):
            options = options.model_dump(exclude_unset=True)
        return cls.Options.model_validate(options)

    @classmethod
    def new(cls, options: OptionsLike = None, **kwargs) -> 'Entity':
        """Create an instance from an options record.

        Args:
            options: EntityOptions (or subclass), a plain mapping, or None
            **kwargs: Collaborators the kind needs (e.g. ``buttons``)
        """
        entity = cls(cls.parse_options(options), **kwargs)
        log.debug("new %r", entity)
        return entity

    # Kind constants, read-only on instances

    @property
    def w(self) -> int:
        return type(self).W

    @property
    def h(self) -> int:
        return type(self).H

    @property
    def sx(self) -> int:
        return type(self).SPRITE_SX

    @property
    def sy(self) -> int:
        return type(self).SPRITE_SY

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def rect(self) -> Tuple[float, float, int, int]:
        """Bounding rectangle (x, y, width, height)."""
        return (self.x, self.y, self.w, self.h)

    @abstractmethod
    def update(self) -> None:
        """Advance one frame."""
        pass

    def draw(self, renderer: Renderer) -> None:
        """Blit this entity's sprite at its position.

        Black (0) is drawn opaque and the kind's key colour is skipped; the
        palette is back to default when this returns or raises.
        """
        with renderer.palette_override(opaque=(0,), transparent=(self.SPRITE_T,)):
            renderer.blit(self.sx, self.sy, self.w, self.h, self.x, self.y)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(x={self.x}, y={self.y}, speed={self.speed})"
