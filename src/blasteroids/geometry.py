"""
Geometry helpers for outlines, wraparound and circle colliders.

Outlines are sequences of integer ``(x, y)`` offsets from an entity's
origin. Positions are ``pygame.math.Vector2`` instances.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from pygame.math import Vector2

from blasteroids.constants import TAU

Point = tuple[int, int]


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def rotate(points: Iterable[Point], angle: float) -> list[Point]:
    """
    Rotate a point set about the origin.

    :param points: Outline points
    :type points: Iterable[Point]

    :param angle: Angle in radians, clockwise on screen
    :type angle: float

    :return: list[Point]
    """
    sin_a = math.sin(angle)
    cos_a = math.cos(angle)
    return [
        (
            round_half_away(x * cos_a - y * sin_a),
            round_half_away(x * sin_a + y * cos_a),
        )
        for x, y in points
    ]


def translate(points: Iterable[Point], offset: Point) -> list[Point]:
    """Shift every point by ``offset``."""
    ox, oy = offset
    return [(x + ox, y + oy) for x, y in points]


def scale_outline(points: Iterable[Point], factor: float) -> list[Point]:
    """
    Scale a point set and snap it back to integer offsets.

    :param points: Outline points
    :type points: Iterable[Point]

    :param factor: Scale factor
    :type factor: float

    :return: list[Point]
    """
    return [
        (round_half_away(x * factor), round_half_away(y * factor))
        for x, y in points
    ]


def bounding_radius(points: Iterable[Point]) -> float:
    """Max distance from the origin over ``points`` (0.0 when empty)."""
    return max((math.hypot(x, y) for x, y in points), default=0.0)


def normalize_angle(angle: float) -> float:
    """Bring an angle into [0, 2π)."""
    angle %= TAU
    # -1e-17 % TAU rounds up to TAU itself
    if angle >= TAU:
        return 0.0
    return angle


@dataclass(frozen=True)
class Viewport:
    """
    Visible play area in pixels.
    """

    width: int
    height: int

    @property
    def center(self) -> Vector2:
        return Vector2(self.width / 2, self.height / 2)

    def contains(self, position: Vector2) -> bool:
        """Inclusive bounds check against the visible rectangle."""
        return (
            0.0 <= position.x <= self.width
            and 0.0 <= position.y <= self.height
        )

    def to_tuple(self) -> tuple[int, int]:
        return (self.width, self.height)


def wrap_position(position: Vector2, viewport: Viewport, margin: float) -> None:
    """
    Move ``position`` to the opposite edge once it passes ``margin``.

    Axes are handled independently. The vector is updated in place.

    :param position: Position to wrap
    :type position: Vector2

    :param viewport: Current viewport
    :type viewport: Viewport

    :param margin: Distance beyond the edge before wrapping
    :type margin: float
    """
    w, h = viewport.width, viewport.height

    if position.x < -margin:
        position.x = w + margin
    elif position.x > w + margin:
        position.x = -margin

    if position.y < -margin:
        position.y = h + margin
    elif position.y > h + margin:
        position.y = -margin


def check_collision(
    a_pos: Vector2, a_radius: float, b_pos: Vector2, b_radius: float
) -> bool:
    """Circle overlap test; touching circles collide."""
    dx = a_pos.x - b_pos.x
    dy = a_pos.y - b_pos.y
    reach = a_radius + b_radius
    return dx * dx + dy * dy <= reach * reach


def anchor_to_center(
    position: Vector2, old_viewport: Viewport, new_viewport: Viewport
) -> None:
    """Keep ``position``'s offset from the viewport center across a resize."""
    offset = position - old_viewport.center
    position.update(new_viewport.center + offset)
