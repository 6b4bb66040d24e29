"""
Blasteroids entities
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from pygame.math import Vector2

from blasteroids.constants import (
    IFRAME_DURATION,
    LARGE_SCALE_RANGE,
    MEDIUM_SCALE_RANGE,
    PROJECTILE_RADIUS,
    SHIP_RADIUS,
    START_HEALTH,
)
from blasteroids.geometry import Point, Viewport


class AsteroidSize(str, Enum):
    LARGE = "large"
    MEDIUM = "medium"

    @property
    def next(self) -> AsteroidSize | None:
        """Size of the fragments this asteroid breaks into, if any."""
        if self is AsteroidSize.LARGE:
            return AsteroidSize.MEDIUM
        return None

    @property
    def scale_range(self) -> tuple[float, float]:
        if self is AsteroidSize.LARGE:
            return LARGE_SCALE_RANGE
        return MEDIUM_SCALE_RANGE


@dataclass
class Asteroid:
    """
    Asteroid entity

    ``radius`` is taken from the scaled outline once, at spawn time.
    """

    position: Vector2
    velocity: Vector2
    angle: float
    outline: list[Point]
    radius: float
    size: AsteroidSize
    alive: bool = True


@dataclass
class Projectile:
    """
    Projectile entity
    """

    position: Vector2
    velocity: Vector2
    angle: float  # only used to orient the sprite
    radius: float = PROJECTILE_RADIUS
    alive: bool = True


class Vulnerability(str, Enum):
    VULNERABLE = "vulnerable"
    INVULNERABLE = "invulnerable"


@dataclass
class Invulnerability:
    """
    Damage cooldown after the player gets hit.

    Starts vulnerable. ``hit`` opens a window of ``duration`` seconds;
    ``advance`` closes it once the clock passes the deadline.
    """

    duration: float = IFRAME_DURATION
    state: Vulnerability = Vulnerability.VULNERABLE
    hit_at: float | None = None

    @property
    def deadline(self) -> float | None:
        if self.hit_at is None:
            return None
        return self.hit_at + self.duration

    def hit(self, now: float) -> None:
        self.state = Vulnerability.INVULNERABLE
        self.hit_at = now

    def advance(self, now: float) -> Vulnerability:
        if self.state is Vulnerability.INVULNERABLE and now >= self.deadline:
            self.state = Vulnerability.VULNERABLE
        return self.state

    def remaining(self, now: float) -> float:
        """Seconds left in the window, 0.0 when vulnerable."""
        if self.advance(now) is Vulnerability.VULNERABLE:
            return 0.0
        return self.deadline - now


@dataclass
class Player:
    """
    Player ship
    """

    position: Vector2
    velocity: Vector2 = field(default_factory=Vector2)
    angle: float = 0.0
    health: int = START_HEALTH
    score: int = 0
    thrusting: bool = False
    radius: float = SHIP_RADIUS
    invulnerability: Invulnerability = field(default_factory=Invulnerability)

    @classmethod
    def spawn(cls, viewport: Viewport) -> Player:
        """Fresh ship at the viewport center."""
        return cls(position=viewport.center)

    @property
    def facing(self) -> Vector2:
        """Unit vector for the facing angle; angle 0 points up."""
        return Vector2(math.sin(self.angle), -math.cos(self.angle))

    def take_hit(self, now: float) -> None:
        self.health = max(0, self.health - 1)
        self.invulnerability.hit(now)
