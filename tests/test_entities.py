"""
Tests for the entity factory convention and the Player kind.

Tests cover:
- Option defaults and overrides for both kinds
- Kind constants are shared, per-instance state is private
- Player button movement (independent axes, no clamping)
"""

import pytest
from pydantic import ValidationError

from pixelcart.entities import Enemy, EnemyOptions, Entity, EntityOptions, Player
from pixelcart.input import Button, ScriptedInput


class TestFactoryOptions:
    """Test Kind.new() option handling."""

    @pytest.mark.parametrize('kind', [Player, Enemy])
    def test_explicit_options(self, kind):
        """x, y and speed are taken from the options record."""
        entity = kind.new({'x': 5, 'y': 7, 'speed': 3})
        assert entity.position == (5, 7)
        assert entity.speed == 3

    @pytest.mark.parametrize('kind', [Player, Enemy])
    def test_defaults_when_omitted(self, kind):
        """Missing fields fall back to the origin and the kind's SPEED."""
        entity = kind.new({})
        assert entity.position == (0, 0)
        assert entity.speed == kind.SPEED

    @pytest.mark.parametrize('kind', [Player, Enemy])
    def test_none_options_means_all_defaults(self, kind):
        entity = kind.new()
        assert entity.position == (0, 0)
        assert entity.speed == kind.SPEED

    def test_default_speeds(self):
        assert Player.new().speed == 2
        assert Enemy.new().speed == 1

    def test_unknown_fields_ignored(self):
        """Unrecognised keys do not raise and do not leak onto the instance."""
        player = Player.new({'x': 1, 'colour': 'red', 'w': 99})
        assert player.x == 1
        assert player.w == Player.W
        assert not hasattr(player, 'colour')

    def test_options_model_accepted(self):
        player = Player.new(EntityOptions(x=3, y=4, speed=1.5))
        assert player.position == (3, 4)
        assert player.speed == 1.5

    def test_enemy_options_passed_to_player(self):
        """Another kind's options are narrowed to the fields this kind knows."""
        player = Player.new(EnemyOptions(x=9, axis='y'))
        assert player.x == 9
        assert player.speed == Player.SPEED

    def test_no_range_validation(self):
        """Negative and zero speeds are accepted as given."""
        assert Player.new({'speed': -2}).speed == -2
        assert Enemy.new({'speed': 0}).speed == 0

    def test_malformed_field_rejected(self):
        with pytest.raises(ValidationError):
            Player.new({'x': 'left'})

    def test_options_are_frozen(self):
        options = EntityOptions(x=1)
        with pytest.raises(ValidationError):
            options.x = 2


class TestKindConstants:
    """Test class-level constants and read-only geometry."""

    def test_player_constants(self):
        player = Player.new({'x': 10})
        assert (player.w, player.h) == (17, 13)
        assert (player.sx, player.sy) == (8, 0)
        assert player.rect == (10, 0, 17, 13)

    def test_enemy_constants(self):
        enemy = Enemy.new()
        assert (enemy.w, enemy.h) == (10, 9)
        assert (enemy.sx, enemy.sy) == (Enemy.SPRITE_SX, Enemy.SPRITE_SY)

    def test_geometry_not_settable_on_instance(self):
        player = Player.new()
        with pytest.raises(AttributeError):
            player.w = 5

    def test_entity_is_abstract(self):
        with pytest.raises(TypeError):
            Entity(EntityOptions())  # type: ignore


class TestIsolation:
    """Instances of the same kind never share mutable state."""

    def test_player_update_does_not_touch_other_player(self):
        held = ScriptedInput([Button.RIGHT, Button.DOWN])
        a = Player.new({'x': 0, 'y': 0, 'speed': 2}, buttons=held)
        b = Player.new({'x': 50, 'y': 60, 'speed': 4}, buttons=ScriptedInput())

        a.update()

        assert a.position == (2, 2)
        assert b.position == (50, 60)
        assert b.speed == 4

    def test_enemy_update_does_not_touch_other_enemy(self):
        a = Enemy.new({'x': 0, 'speed': 1})
        b = Enemy.new({'x': 20, 'speed': 5})

        a.update()

        assert a.x == 1
        assert b.x == 20
        assert b.speed == 5
        assert b.patrol_min == 20

    def test_speed_change_is_per_instance(self):
        a = Player.new()
        b = Player.new()
        a.speed = 10
        assert b.speed == Player.SPEED
        assert Player.SPEED == 2


class TestPlayerMovement:
    """Test Player.update() button handling."""

    @pytest.mark.parametrize('button, expected', [
        (Button.LEFT, (7, 20)),
        (Button.RIGHT, (13, 20)),
        (Button.UP, (10, 17)),
        (Button.DOWN, (10, 23)),
    ])
    def test_single_direction(self, button, expected):
        player = Player.new({'x': 10, 'y': 20, 'speed': 3}, buttons=ScriptedInput([button]))
        player.update()
        assert player.position == expected

    def test_no_buttons_no_movement(self, buttons):
        player = Player.new({'x': 10, 'y': 20}, buttons=buttons)
        player.update()
        assert player.position == (10, 20)

    def test_diagonal_not_normalised(self):
        """Up + right moves a full speed step on both axes."""
        player = Player.new({'x': 10, 'y': 20, 'speed': 2},
                            buttons=ScriptedInput([Button.UP, Button.RIGHT]))
        player.update()
        assert player.position == (12, 18)

    def test_opposite_buttons_cancel(self):
        player = Player.new({'x': 10, 'y': 20},
                            buttons=ScriptedInput([Button.LEFT, Button.RIGHT]))
        player.update()
        assert player.position == (10, 20)

    def test_buttons_polled_each_update(self, buttons):
        player = Player.new({'speed': 1}, buttons=buttons)

        buttons.press(Button.RIGHT)
        player.update()
        buttons.release(Button.RIGHT)
        player.update()

        assert player.x == 1

    def test_no_clamping(self):
        """Position can go negative or off screen."""
        player = Player.new({'x': 0, 'y': 0, 'speed': 2},
                            buttons=ScriptedInput([Button.LEFT, Button.UP]))
        for _ in range(5):
            player.update()
        assert player.position == (-10, -10)

    def test_fractional_speed(self):
        player = Player.new({'speed': 0.5}, buttons=ScriptedInput([Button.RIGHT]))
        player.update()
        player.update()
        assert player.x == 1.0
