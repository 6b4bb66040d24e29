"""
Constants for the game.
"""

from __future__ import annotations

import math

FPS = 60
WINDOW_SIZE = (1280, 840)
WINDOW_TITLE = "Blasteroids"

# Asteroids
STARTING_ASTEROIDS = 15
ASTEROID_SPEED_RANGE = (1.0, 3.0)
ASTEROID_MARGIN = 40.0
ASTEROID_SPIN = 0.01  # radians per tick
LARGE_SCALE_RANGE = (1.1, 1.5)
MEDIUM_SCALE_RANGE = (0.7, 1.0)
FRAGMENT_COUNT = 2

# Projectiles
PROJECTILE_SPEED = 9.0
PROJECTILE_RADIUS = 3.0

# Player
SHIP_RADIUS = 10.0
SHIP_MARGIN = 0.0
TURN_SPEED = 0.07  # radians per tick
ACCELERATION = 0.2
DRAG = 0.98  # smaller number -> stronger braking
START_HEALTH = 3
HIT_SCORE = 10
IFRAME_DURATION = 0.8  # seconds
BLINK_INTERVAL = 0.1  # seconds

TAU = math.tau

OUTLINE_SCALE = 1.5

ASTEROID_OUTLINES = (
    (
        (0, -34), (18, -30), (28, -16), (20, -6), (30, 4),
        (18, 18), (4, 12), (-4, 30), (-20, 18), (-30, 10),
        (-18, 0), (-32, -10), (-18, -24), (-6, -14), (0, -34),
    ),
    (
        (-4, -28), (16, -24), (24, -12), (12, -8), (30, -2),
        (22, 12), (8, 10), (10, 24), (-4, 26), (-12, 14),
        (-24, 26), (-20, 6), (-32, 0), (-22, -14), (-8, -18),
        (-4, -28),
    ),
    (
        (0, -30), (12, -22), (8, -12), (24, -8), (26, 2),
        (14, 8), (18, 22), (4, 18), (-2, 28), (-12, 14),
        (-26, 18), (-20, 4), (-30, -6), (-14, -22), (-4, -12),
        (0, -30),
    ),
)

SHIP_OUTLINE = ((0, -14), (10, 12), (0, 6), (-10, 12), (0, -14))
SHIP_THRUST_OUTLINE = ((-10, 12), (0, 6), (10, 12), (0, 26), (-10, 12))
PROJECTILE_OUTLINE = ((0, -5), (0, -12))

# HUD
HUD_MARGIN = 36.0
HUD_SPACING = 36.0
SCORE_MARGIN = 12
FONT_FILE = "upheavtt.ttf"
FONT_SIZE = 50

BACKGROUND_COLOR = (0, 0, 0)
FOREGROUND_COLOR = (255, 255, 255)

# Audio
SHOOT_SOUND = "shoot.wav"
EXPLOSION_SOUND = "explosion.wav"
HURT_SOUND = "hurt.wav"
AUDIO_FREQUENCY = 44_100
AUDIO_BUFFER = 1_024
AUDIO_CHANNELS = 16
