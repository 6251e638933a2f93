"""Enemy entity: patrols back and forth between two bounds on one axis."""

from enum import Enum
from typing import Literal, Optional

from pixelcart.entities.base import Entity, EntityOptions


class PatrolState(Enum):
    """Direction of travel along the patrol axis."""

    MOVING_FORWARD = "forward"    # Toward patrol_max
    MOVING_BACKWARD = "backward"  # Toward patrol_min


class EnemyOptions(EntityOptions):
    """Enemy construction options.

    Missing bounds are derived from the start position on ``axis``:
    ``[start, start + PATROL_RANGE]``. With only one bound given, the other
    is PATROL_RANGE away from it.
    """

    axis: Literal['x', 'y'] = 'x'
    patrol_min: Optional[float] = None
    patrol_max: Optional[float] = None
    heading: PatrolState = PatrolState.MOVING_FORWARD


class Enemy(Entity):
    """Enemy that walks its patrol range forever, ignoring input.

    Each update moves ``speed`` pixels toward the current bound. The step
    that would pass the bound stops exactly on it and turns around, so a
    full round trip ends where it started.
    """

    W = 10
    H = 9
    SPEED = 1
    SPRITE_SX = 25
    SPRITE_SY = 0
    SPRITE_T = 11

    PATROL_RANGE = 32

    Options = EnemyOptions

    def __init__(self, options: EnemyOptions):
        super().__init__(options)
        self._axis = options.axis
        self.heading = options.heading

        start = self._get_axis()
        lo, hi = options.patrol_min, options.patrol_max
        if lo is None and hi is None:
            lo, hi = start, start + self.PATROL_RANGE
        elif lo is None:
            lo = hi - self.PATROL_RANGE
        elif hi is None:
            hi = lo + self.PATROL_RANGE
        # Bounds given in either order describe the same range
        self._patrol_min = min(lo, hi)
        self._patrol_max = max(lo, hi)

    @property
    def axis(self) -> str:
        return self._axis

    @property
    def patrol_min(self) -> float:
        return self._patrol_min

    @property
    def patrol_max(self) -> float:
        return self._patrol_max

    def _get_axis(self) -> float:
        return self.x if self._axis == 'x' else self.y

    def _set_axis(self, value: float) -> None:
        if self._axis == 'x':
            self.x = value
        else:
            self.y = value

    def update(self) -> None:
        pos = self._get_axis()

        # Outside the range (or sitting on the far bound): turn toward it
        if self.heading is PatrolState.MOVING_FORWARD and pos >= self._patrol_max:
            self.heading = PatrolState.MOVING_BACKWARD
        elif self.heading is PatrolState.MOVING_BACKWARD and pos <= self._patrol_min:
            self.heading = PatrolState.MOVING_FORWARD

        if self.heading is PatrolState.MOVING_FORWARD:
            pos = min(pos + self.speed, self._patrol_max)
            if pos >= self._patrol_max:
                self.heading = PatrolState.MOVING_BACKWARD
        else:
            pos = max(pos - self.speed, self._patrol_min)
            if pos <= self._patrol_min:
                self.heading = PatrolState.MOVING_FORWARD

        self._set_axis(pos)

    def __repr__(self) -> str:
        return (f"Enemy(x={self.x}, y={self.y}, speed={self.speed}, "
                f"patrol={self._axis}[{self._patrol_min}, {self._patrol_max}], "
                f"heading={self.heading.value})")
