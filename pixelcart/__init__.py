"""
pixelcart: sprite entities for a fixed-function fantasy console.

Two entity kinds share one pattern: class-level constants and behaviour,
per-instance position and speed, created through ``Kind.new(options)`` and
driven once per frame by a host loop (update phase, then draw phase).
"""

from pixelcart.entities import Enemy, EnemyOptions, Entity, EntityOptions, PatrolState, Player
from pixelcart.input import Button, ButtonInput, ScriptedInput
from pixelcart.renderer import Renderer

__version__ = '0.1.0'

__all__ = [
    'Entity', 'EntityOptions',
    'Player',
    'Enemy', 'EnemyOptions', 'PatrolState',
    'Button', 'ButtonInput', 'ScriptedInput',
    'Renderer',
]
