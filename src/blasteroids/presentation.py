"""
Drawing of simulation snapshots with pygame.

Nothing in here touches the simulation; every drawable only reads a
:class:`~blasteroids.scenes.blasteroids.Snapshot`.
"""

from __future__ import annotations

import math
from typing import Sequence

import pygame
from mini_arcade_core.scenes.sim_scene import Drawable

from blasteroids.constants import (
    BACKGROUND_COLOR,
    BLINK_INTERVAL,
    FOREGROUND_COLOR,
    HUD_MARGIN,
    HUD_SPACING,
    OUTLINE_SCALE,
    PROJECTILE_OUTLINE,
    SCORE_MARGIN,
    SHIP_OUTLINE,
    SHIP_THRUST_OUTLINE,
)
from blasteroids.geometry import (
    Point,
    rotate,
    round_half_away,
    scale_outline,
    translate,
)
from blasteroids.scenes.blasteroids import Snapshot

SHIP_POINTS = scale_outline(SHIP_OUTLINE, OUTLINE_SCALE)
THRUST_POINTS = scale_outline(SHIP_THRUST_OUTLINE, OUTLINE_SCALE)
PROJECTILE_POINTS = scale_outline(PROJECTILE_OUTLINE, OUTLINE_SCALE)


def blink_visible(
    remaining: float,
    duration: float,
    interval: float = BLINK_INTERVAL,
) -> bool:
    """
    Whether the ship shows on this frame of the invulnerability blink.

    The ship is visible during every other ``interval`` counted from the
    hit, and always once the window is over.
    """
    if remaining <= 0.0:
        return True
    elapsed = duration - remaining
    return int(math.floor(elapsed / interval + 1e-9)) % 2 == 0


def screen_points(
    outline: Sequence[Point], angle: float, position: tuple[float, float]
) -> list[Point]:
    """Rotate an outline and move it to a world position."""
    x, y = position
    return translate(rotate(outline, angle), (round_half_away(x), round_half_away(y)))


def draw_outline(surface: pygame.Surface, points: Sequence[Point]) -> None:
    if len(points) < 2:
        return
    pygame.draw.lines(surface, FOREGROUND_COLOR, False, points)


class DrawAsteroids(Drawable):
    def draw(self, surface, snapshot):
        for asteroid in snapshot.asteroids:
            draw_outline(
                surface, screen_points(asteroid.outline, asteroid.angle, asteroid.position)
            )


class DrawProjectiles(Drawable):
    def draw(self, surface, snapshot):
        for projectile in snapshot.projectiles:
            draw_outline(
                surface,
                screen_points(PROJECTILE_POINTS, projectile.angle, projectile.position),
            )


class DrawShip(Drawable):
    """
    Drawable Ship, with the thrust flame and the damage blink
    """

    def draw(self, surface, snapshot):
        player = snapshot.player
        if not blink_visible(
            player.invulnerability_remaining, player.invulnerability_duration
        ):
            return

        draw_outline(surface, screen_points(SHIP_POINTS, player.angle, player.position))
        if player.thrusting:
            draw_outline(
                surface, screen_points(THRUST_POINTS, player.angle, player.position)
            )


class DrawLives(Drawable):
    """One upright ship outline per health point, top left."""

    def draw(self, surface, snapshot):
        for i in range(snapshot.player.health):
            x = HUD_MARGIN + i * HUD_SPACING
            draw_outline(surface, screen_points(SHIP_POINTS, 0.0, (x, HUD_MARGIN)))


class DrawScore(Drawable):
    """Score text, top right."""

    def __init__(self, font: pygame.font.Font):
        self._font = font

    def draw(self, surface, snapshot):
        text = self._font.render(str(snapshot.player.score), True, FOREGROUND_COLOR)
        x = snapshot.viewport[0] - text.get_width() - SCORE_MARGIN
        y = SCORE_MARGIN - 10
        surface.blit(text, (x, y))


class BlasteroidsRenderer:
    """
    Clears the frame and runs every drawable in order.

    :param font: Font for the score, or ``None`` to skip the score
    :type font: pygame.font.Font | None
    """

    def __init__(self, font: pygame.font.Font | None = None):
        self.drawables: list[Drawable] = [
            DrawAsteroids(),
            DrawProjectiles(),
            DrawShip(),
            DrawLives(),
        ]
        if font is not None:
            self.drawables.insert(0, DrawScore(font))

    def render(self, surface: pygame.Surface, snapshot: Snapshot) -> None:
        surface.fill(BACKGROUND_COLOR)
        for drawable in self.drawables:
            drawable.draw(surface, snapshot)
