"""
Blasteroids Scene

The per-tick simulation. Each system owns one step of the tick and runs in
ascending ``order`` against a shared tick context.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Sequence

from mini_arcade_core.scenes.systems.base_system import BaseSystem
from mini_arcade_core.scenes.systems.system_pipeline import SystemPipeline
from mini_arcade_core.utils import logger
from pygame.math import Vector2

from blasteroids.constants import (
    ACCELERATION,
    ASTEROID_MARGIN,
    ASTEROID_OUTLINES,
    ASTEROID_SPEED_RANGE,
    ASTEROID_SPIN,
    DRAG,
    HIT_SCORE,
    IFRAME_DURATION,
    PROJECTILE_SPEED,
    SHIP_MARGIN,
    STARTING_ASTEROIDS,
    TURN_SPEED,
    WINDOW_SIZE,
)
from blasteroids.entities import (
    Asteroid,
    AsteroidSize,
    Player,
    Projectile,
    Vulnerability,
)
from blasteroids.geometry import (
    Point,
    Viewport,
    anchor_to_center,
    check_collision,
    normalize_angle,
    wrap_position,
)
from blasteroids.spawn import Outline, spawn_edge_asteroid, split_asteroid


class SoundEvent(str, Enum):
    FIRE = "fire"
    EXPLOSION = "explosion"
    HURT = "hurt"


@dataclass(frozen=True)
class BlasteroidsIntent:
    """
    Decoded player input for one tick.

    ``fire_pressed`` is only true on the tick the fire key went down.
    """

    thrust: bool = False
    turn_left: bool = False
    turn_right: bool = False
    fire_pressed: bool = False
    viewport_resized: tuple[int, int] | None = None
    quit_requested: bool = False


@dataclass
class BlasteroidsWorld:
    """
    Blasteroids World
    """

    viewport: Viewport
    player: Player
    asteroids: list[Asteroid] = field(default_factory=list)
    projectiles: list[Projectile] = field(default_factory=list)
    outlines: tuple[Outline, ...] = ASTEROID_OUTLINES


@dataclass
class BlasteroidsTickContext:
    """
    Blasteroids Tick Context
    """

    world: BlasteroidsWorld
    intent: BlasteroidsIntent
    now: float
    rng: random.Random
    events: list[SoundEvent] = field(default_factory=list)
    fragments: list[Asteroid] = field(default_factory=list)
    halted: bool = False


class BlasteroidsSystem(BaseSystem[BlasteroidsTickContext]):
    """
    Base for the per-tick systems. A halted tick skips every system that
    has not run yet.
    """

    def enabled(self, ctx: BlasteroidsTickContext) -> bool:
        return not ctx.halted


@dataclass
class ViewportSystem(BlasteroidsSystem):
    """Apply a window resize, keeping entities anchored to the center."""

    name: str = "blasteroids_viewport"
    order: int = 5

    def step(self, ctx: BlasteroidsTickContext):
        size = ctx.intent.viewport_resized
        if size is None:
            return

        w = ctx.world
        old_viewport = w.viewport
        new_viewport = Viewport(*size)
        if new_viewport == old_viewport:
            return

        anchor_to_center(w.player.position, old_viewport, new_viewport)
        for asteroid in w.asteroids:
            anchor_to_center(asteroid.position, old_viewport, new_viewport)
        for projectile in w.projectiles:
            anchor_to_center(projectile.position, old_viewport, new_viewport)

        w.viewport = new_viewport
        logger.debug(
            f"Viewport resized {old_viewport.to_tuple()} -> {new_viewport.to_tuple()}"
        )


@dataclass
class ProjectileSpawnSystem(BlasteroidsSystem):
    """Fire a projectile from the ship along its facing."""

    name: str = "blasteroids_projectile_spawn"
    order: int = 8

    speed: float = PROJECTILE_SPEED

    def step(self, ctx: BlasteroidsTickContext):
        if not ctx.intent.fire_pressed:
            return

        player = ctx.world.player
        ctx.world.projectiles.append(
            Projectile(
                position=Vector2(player.position),
                velocity=player.facing * self.speed,
                angle=player.angle,
            )
        )
        ctx.events.append(SoundEvent.FIRE)


@dataclass
class ProjectileMoveSystem(BlasteroidsSystem):
    """Projectiles fly straight; no drag and no wraparound."""

    name: str = "blasteroids_projectile_move"
    order: int = 10

    def step(self, ctx: BlasteroidsTickContext):
        for projectile in ctx.world.projectiles:
            projectile.position += projectile.velocity


@dataclass
class AsteroidMoveSystem(BlasteroidsSystem):
    name: str = "blasteroids_asteroid_move"
    order: int = 20

    spin: float = ASTEROID_SPIN
    margin: float = ASTEROID_MARGIN

    def step(self, ctx: BlasteroidsTickContext):
        viewport = ctx.world.viewport
        for asteroid in ctx.world.asteroids:
            asteroid.position += asteroid.velocity
            asteroid.angle = normalize_angle(asteroid.angle + self.spin)
            wrap_position(asteroid.position, viewport, self.margin)


@dataclass
class ShipSystem(BlasteroidsSystem):
    """
    Thrust, drag, turning and wraparound for the player ship.

    Without thrust the velocity decays by ``drag`` every tick.
    """

    name: str = "blasteroids_ship"
    order: int = 30

    acceleration: float = ACCELERATION
    drag: float = DRAG
    turn_speed: float = TURN_SPEED
    margin: float = SHIP_MARGIN

    def step(self, ctx: BlasteroidsTickContext):
        player = ctx.world.player
        intent = ctx.intent

        player.thrusting = intent.thrust
        if intent.thrust:
            player.velocity += player.facing * self.acceleration
        else:
            player.velocity *= self.drag

        if intent.turn_left:
            player.angle -= self.turn_speed
        if intent.turn_right:
            player.angle += self.turn_speed

        player.position += player.velocity
        wrap_position(player.position, ctx.world.viewport, self.margin)


@dataclass
class ShipAsteroidCollisionSystem(BlasteroidsSystem):
    """
    Damage the ship on contact with an asteroid.

    Every asteroid is checked against the shared invulnerability timer, so
    after the first hit the rest of the tick's overlaps do nothing.
    """

    name: str = "blasteroids_ship_asteroid_collision"
    order: int = 40

    def step(self, ctx: BlasteroidsTickContext):
        player = ctx.world.player
        timer = player.invulnerability

        for asteroid in ctx.world.asteroids:
            if timer.advance(ctx.now) is not Vulnerability.VULNERABLE:
                continue
            if check_collision(
                player.position, player.radius, asteroid.position, asteroid.radius
            ):
                player.take_hit(ctx.now)
                ctx.events.append(SoundEvent.HURT)
                logger.debug(f"Ship hit, health: {player.health}")


@dataclass
class ShipResetSystem(BlasteroidsSystem):
    """Start over once the ship runs out of health."""

    name: str = "blasteroids_ship_reset"
    order: int = 50

    def step(self, ctx: BlasteroidsTickContext):
        w = ctx.world
        if w.player.health > 0:
            return

        logger.info(f"Ship destroyed with score {w.player.score}, resetting")
        w.player = Player.spawn(w.viewport)
        w.asteroids.clear()
        w.projectiles.clear()
        ctx.halted = True


@dataclass
class ProjectileAsteroidCollisionSystem(BlasteroidsSystem):
    """
    Destroy the first asteroid found overlapping a projectile.

    Asteroids are scanned in order, and for each one the projectiles in
    order. The scan ends at the first overlapping pair, so at most one
    asteroid is destroyed per tick.
    """

    name: str = "blasteroids_projectile_asteroid_collision"
    order: int = 60

    score: int = HIT_SCORE
    speed_range: tuple[float, float] = ASTEROID_SPEED_RANGE

    def step(self, ctx: BlasteroidsTickContext):
        w = ctx.world
        for asteroid in w.asteroids:
            for projectile in w.projectiles:
                if not check_collision(
                    projectile.position,
                    projectile.radius,
                    asteroid.position,
                    asteroid.radius,
                ):
                    continue

                w.player.score += self.score
                asteroid.alive = False
                projectile.alive = False
                ctx.fragments.extend(
                    split_asteroid(ctx.rng, asteroid, w.outlines, self.speed_range)
                )
                ctx.events.append(SoundEvent.EXPLOSION)
                logger.debug(
                    f"{asteroid.size.value} asteroid destroyed, score: {w.player.score}"
                )
                return


@dataclass
class CleanupSystem(BlasteroidsSystem):
    """Drop dead entities and add this tick's fragments."""

    name: str = "blasteroids_cleanup"
    order: int = 70

    def step(self, ctx: BlasteroidsTickContext):
        w = ctx.world
        w.asteroids[:] = [a for a in w.asteroids if a.alive]
        w.projectiles[:] = [p for p in w.projectiles if p.alive]
        w.asteroids.extend(ctx.fragments)
        ctx.fragments.clear()


@dataclass
class AsteroidSpawnSystem(BlasteroidsSystem):
    """Top the field back up to ``floor`` asteroids."""

    name: str = "blasteroids_asteroid_spawn"
    order: int = 80

    floor: int = STARTING_ASTEROIDS
    margin: float = ASTEROID_MARGIN
    speed_range: tuple[float, float] = ASTEROID_SPEED_RANGE

    def step(self, ctx: BlasteroidsTickContext):
        self.fill(ctx.world, ctx.rng)

    def fill(self, world: BlasteroidsWorld, rng: random.Random) -> None:
        while len(world.asteroids) < self.floor:
            world.asteroids.append(
                spawn_edge_asteroid(
                    rng, world.outlines, world.viewport, self.margin, self.speed_range
                )
            )


@dataclass
class ProjectileCullSystem(BlasteroidsSystem):
    """Removes projectiles that left the viewport."""

    name: str = "blasteroids_projectile_cull"
    order: int = 90

    def step(self, ctx: BlasteroidsTickContext):
        viewport = ctx.world.viewport
        ctx.world.projectiles[:] = [
            p for p in ctx.world.projectiles if viewport.contains(p.position)
        ]


@dataclass
class HeadingSystem(BlasteroidsSystem):
    name: str = "blasteroids_heading"
    order: int = 100

    def step(self, ctx: BlasteroidsTickContext):
        player = ctx.world.player
        player.angle = normalize_angle(player.angle)


@dataclass(frozen=True)
class PlayerSnapshot:
    position: tuple[float, float]
    angle: float
    health: int
    score: int
    invulnerability_remaining: float
    thrusting: bool
    invulnerability_duration: float = IFRAME_DURATION


@dataclass(frozen=True)
class AsteroidSnapshot:
    position: tuple[float, float]
    angle: float
    outline: tuple[Point, ...]
    size: AsteroidSize


@dataclass(frozen=True)
class ProjectileSnapshot:
    position: tuple[float, float]
    angle: float


@dataclass(frozen=True)
class Snapshot:
    """
    Read-only copy of the world handed to presentation and audio.
    """

    player: PlayerSnapshot
    asteroids: tuple[AsteroidSnapshot, ...]
    projectiles: tuple[ProjectileSnapshot, ...]
    viewport: tuple[int, int]
    events: tuple[SoundEvent, ...] = ()


def default_systems() -> list[BlasteroidsSystem]:
    return [
        ViewportSystem(),
        ProjectileSpawnSystem(),
        ProjectileMoveSystem(),
        AsteroidMoveSystem(),
        ShipSystem(),
        ShipAsteroidCollisionSystem(),
        ShipResetSystem(),
        ProjectileAsteroidCollisionSystem(),
        CleanupSystem(),
        AsteroidSpawnSystem(),
        ProjectileCullSystem(),
        HeadingSystem(),
    ]


class BlasteroidsSimulation:
    """
    Owns the world and advances it one tick at a time.

    :param viewport: Initial viewport, defaults to the window size
    :param rng: Random source for spawns and fragments
    :param clock: Monotonic clock in seconds, used by the damage cooldown
    :param systems: Systems to run, defaults to :func:`default_systems`
    """

    def __init__(
        self,
        viewport: Viewport | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.monotonic,
        systems: Sequence[BlasteroidsSystem] | None = None,
    ):
        viewport = viewport or Viewport(*WINDOW_SIZE)
        self.rng = rng or random.Random()
        self.clock = clock
        self.pipeline = SystemPipeline[BlasteroidsTickContext]()
        self.pipeline.extend(systems if systems is not None else default_systems())
        self.world = BlasteroidsWorld(viewport=viewport, player=Player.spawn(viewport))

        for system in self.pipeline.systems:
            if isinstance(system, AsteroidSpawnSystem):
                system.fill(self.world, self.rng)
        logger.debug(f"Initial asteroids: {len(self.world.asteroids)}")

    def tick(self, intent: BlasteroidsIntent) -> Snapshot:
        """
        Run every system once and return the resulting snapshot.

        :param intent: Input for this tick
        :type intent: BlasteroidsIntent

        :return: Snapshot
        """
        ctx = BlasteroidsTickContext(
            world=self.world,
            intent=intent,
            now=self.clock(),
            rng=self.rng,
        )
        self.pipeline.step(ctx)

        return self.snapshot(ctx.now, ctx.events)

    def snapshot(
        self, now: float | None = None, events: Sequence[SoundEvent] = ()
    ) -> Snapshot:
        w = self.world
        player = w.player
        if now is None:
            now = self.clock()

        return Snapshot(
            player=PlayerSnapshot(
                position=(player.position.x, player.position.y),
                angle=player.angle,
                health=player.health,
                score=player.score,
                invulnerability_remaining=player.invulnerability.remaining(now),
                invulnerability_duration=player.invulnerability.duration,
                thrusting=player.thrusting,
            ),
            asteroids=tuple(
                AsteroidSnapshot(
                    position=(a.position.x, a.position.y),
                    angle=a.angle,
                    outline=tuple(a.outline),
                    size=a.size,
                )
                for a in w.asteroids
            ),
            projectiles=tuple(
                ProjectileSnapshot(position=(p.position.x, p.position.y), angle=p.angle)
                for p in w.projectiles
            ),
            viewport=w.viewport.to_tuple(),
            events=tuple(events),
        )
