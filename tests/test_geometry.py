from __future__ import annotations

import math

import pytest
from pygame.math import Vector2

from blasteroids.constants import TAU
from blasteroids.geometry import (
    Viewport,
    anchor_to_center,
    bounding_radius,
    check_collision,
    normalize_angle,
    rotate,
    round_half_away,
    scale_outline,
    translate,
    wrap_position,
)

VIEWPORT = Viewport(1280, 840)


def test_round_half_away_from_zero():
    assert round_half_away(2.5) == 3
    assert round_half_away(-2.5) == -3
    assert round_half_away(1.49) == 1
    assert round_half_away(-0.2) == 0


def test_empty_outlines_stay_empty():
    assert rotate([], 1.0) == []
    assert translate([], (3, 4)) == []
    assert scale_outline([], 2.0) == []
    assert bounding_radius([]) == 0.0


def test_rotate_quarter_turn_is_clockwise_on_screen():
    assert rotate([(0, -10)], math.pi / 2) == [(10, 0)]
    assert rotate([(0, -10), (5, 5)], 0.0) == [(0, -10), (5, 5)]


def test_translate_adds_offset():
    assert translate([(1, 2), (-3, 4)], (10, -10)) == [(11, -8), (7, -6)]


def test_scale_outline_rounds_to_integers():
    assert scale_outline([(1, -3), (10, 12)], 1.5) == [(2, -5), (15, 18)]


def test_bounding_radius_is_farthest_point():
    assert bounding_radius([(3, 4), (0, -2), (-1, 1)]) == pytest.approx(5.0)


@pytest.mark.parametrize(
    "angle, expected",
    [
        (0.0, 0.0),
        (TAU, 0.0),
        (-0.07, TAU - 0.07),
        (TAU + 0.5, 0.5),
        (-1e-20, 0.0),
    ],
)
def test_normalize_angle(angle, expected):
    result = normalize_angle(angle)
    assert 0.0 <= result < TAU
    assert result == pytest.approx(expected)


def test_wrap_moves_to_opposite_edge_past_margin():
    pos = Vector2(-41, 100)
    wrap_position(pos, VIEWPORT, 40)
    assert pos == Vector2(1320, 100)

    pos = Vector2(1321, 500)
    wrap_position(pos, VIEWPORT, 40)
    assert pos == Vector2(-40, 500)

    pos = Vector2(500, 881)
    wrap_position(pos, VIEWPORT, 40)
    assert pos == Vector2(500, -40)


def test_wrap_leaves_positions_inside_margin_alone():
    pos = Vector2(-39.5, 879)
    wrap_position(pos, VIEWPORT, 40)
    assert pos == Vector2(-39.5, 879)


def test_wrap_with_zero_margin():
    pos = Vector2(-0.5, 840.5)
    wrap_position(pos, VIEWPORT, 0)
    assert pos == Vector2(1280, 0)


@pytest.mark.parametrize("margin", [0.0, 40.0])
def test_wrapped_positions_stay_within_margin(margin):
    for x in range(-60, 1350, 37):
        for y in range(-60, 910, 41):
            pos = Vector2(x, y)
            wrap_position(pos, VIEWPORT, margin)
            assert -margin <= pos.x <= VIEWPORT.width + margin
            assert -margin <= pos.y <= VIEWPORT.height + margin


def test_touching_circles_collide():
    assert check_collision(Vector2(0, 0), 3, Vector2(8, 0), 5)
    assert check_collision(Vector2(0, 0), 3, Vector2(0, -8), 5)
    assert not check_collision(Vector2(0, 0), 3, Vector2(8.01, 0), 5)


def test_collision_is_symmetric():
    cases = [
        (Vector2(10, 10), 4.0, Vector2(15, 13), 2.0),
        (Vector2(-3, 7), 1.0, Vector2(40, 40), 30.0),
        (Vector2(0, 0), 0.0, Vector2(0, 0), 0.0),
    ]
    for a_pos, a_r, b_pos, b_r in cases:
        assert check_collision(a_pos, a_r, b_pos, b_r) == check_collision(
            b_pos, b_r, a_pos, a_r
        )


def test_anchor_to_center_keeps_offset():
    old, new = Viewport(1280, 840), Viewport(640, 420)

    center = Vector2(640, 420)
    anchor_to_center(center, old, new)
    assert center == Vector2(320, 210)

    off_center = Vector2(700, 400)
    anchor_to_center(off_center, old, new)
    assert off_center == Vector2(380, 190)


def test_viewport_contains_is_inclusive():
    assert VIEWPORT.contains(Vector2(0, 0))
    assert VIEWPORT.contains(Vector2(1280, 840))
    assert not VIEWPORT.contains(Vector2(-0.1, 10))
    assert not VIEWPORT.contains(Vector2(10, 840.1))
    assert VIEWPORT.center == Vector2(640, 420)


def test_wrap_handles_both_axes_past_margin_at_once():
    pos = Vector2(1321, 900)
    wrap_position(pos, VIEWPORT, 40)
    assert pos == Vector2(-40, -40)
