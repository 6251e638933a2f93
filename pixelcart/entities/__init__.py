"""pixelcart entities."""

from .base import Entity, EntityOptions
from .player import Player
from .enemy import Enemy, EnemyOptions, PatrolState

__all__ = [
    'Entity', 'EntityOptions',
    'Player',
    'Enemy', 'EnemyOptions', 'PatrolState',
]
