"""
Spawn policy: where, how fast and how big new asteroids are.

Every function takes the random source explicitly so callers (and tests)
decide whether it is shared, seeded or scripted.
"""

from __future__ import annotations

import math
import random
from typing import Sequence

from mini_arcade_core.utils import logger
from pygame.math import Vector2

from blasteroids.constants import FRAGMENT_COUNT, TAU
from blasteroids.entities import Asteroid, AsteroidSize
from blasteroids.geometry import Point, Viewport, bounding_radius, scale_outline

Outline = Sequence[Point]


def pick_spawn_point(
    rng: random.Random, viewport: Viewport, margin: float
) -> Vector2:
    """
    Random point just outside one of the four viewport edges.

    :param rng: Random source
    :type rng: random.Random

    :param viewport: Current viewport
    :type viewport: Viewport

    :param margin: Distance outside the edge
    :type margin: float

    :return: Vector2
    """
    w, h = float(viewport.width), float(viewport.height)
    edge = rng.randrange(4)
    if edge == 0:
        return Vector2(-margin, rng.uniform(0.0, h))
    if edge == 1:
        return Vector2(w + margin, rng.uniform(0.0, h))
    if edge == 2:
        return Vector2(rng.uniform(0.0, w), -margin)
    return Vector2(rng.uniform(0.0, w), h + margin)


def pick_angle(rng: random.Random) -> float:
    """Uniform angle in [0, 2π)."""
    return rng.random() * TAU


def pick_random_velocity(
    rng: random.Random, speed_range: tuple[float, float]
) -> Vector2:
    """Random heading and speed; heading 0 points up the screen."""
    angle = pick_angle(rng)
    speed = rng.uniform(*speed_range)
    return Vector2(speed * math.sin(angle), -speed * math.cos(angle))


def pick_scale(rng: random.Random, size: AsteroidSize) -> float:
    low, high = size.scale_range
    return rng.uniform(low, high)


def spawn_asteroid(
    rng: random.Random,
    outline: Outline,
    size: AsteroidSize,
    position: Vector2,
    velocity: Vector2,
    angle: float,
) -> Asteroid:
    """
    Build an asteroid from a base outline scaled for its size class.

    :param rng: Random source for the scale
    :type rng: random.Random

    :param outline: Unscaled base outline
    :type outline: Outline

    :param size: Size class
    :type size: AsteroidSize

    :param position: Spawn position (copied)
    :type position: Vector2

    :param velocity: Velocity per tick
    :type velocity: Vector2

    :param angle: Initial rotation
    :type angle: float

    :return: Asteroid
    """
    shape = scale_outline(outline, pick_scale(rng, size))
    return Asteroid(
        position=Vector2(position),
        velocity=velocity,
        angle=angle,
        outline=shape,
        radius=bounding_radius(shape),
        size=size,
    )


def spawn_edge_asteroid(
    rng: random.Random,
    outlines: Sequence[Outline],
    viewport: Viewport,
    margin: float,
    speed_range: tuple[float, float],
) -> Asteroid:
    """Large asteroid entering from a random off-screen edge point."""
    asteroid = spawn_asteroid(
        rng,
        rng.choice(outlines),
        AsteroidSize.LARGE,
        pick_spawn_point(rng, viewport, margin),
        pick_random_velocity(rng, speed_range),
        pick_angle(rng),
    )
    logger.debug(f"Spawned asteroid at {tuple(asteroid.position)}")
    return asteroid


def split_asteroid(
    rng: random.Random,
    asteroid: Asteroid,
    outlines: Sequence[Outline],
    speed_range: tuple[float, float],
) -> list[Asteroid]:
    """
    Fragments left behind by a destroyed asteroid.

    Large asteroids break into two Medium ones at the parent's position,
    each with its own outline, velocity, angle and scale. Medium asteroids
    leave nothing.
    """
    next_size = asteroid.size.next
    if next_size is None:
        return []

    return [
        spawn_asteroid(
            rng,
            rng.choice(outlines),
            next_size,
            asteroid.position,
            pick_random_velocity(rng, speed_range),
            pick_angle(rng),
        )
        for _ in range(FRAGMENT_COUNT)
    ]
