"""
Blasteroids utils
"""

from __future__ import annotations

from pathlib import Path

import pygame


def load_font(path: Path, size: int) -> pygame.font.Font:
    """
    Load a TrueType font

    :param path: Path to the font file
    :type path: Path

    :param size: Point size
    :type size: int

    :raise SystemExit: If the font cannot be loaded
    :return: pygame.font.Font
    """
    try:
        return pygame.font.Font(str(path), size)
    except (pygame.error, OSError) as message:
        raise SystemExit(f"Failed to load font {path}: {message}") from message


def load_sound(path: Path) -> pygame.mixer.Sound:
    """
    Load a sound effect

    :param path: Path to the sound file
    :type path: Path

    :raise SystemExit: If the sound cannot be loaded
    :return: pygame.mixer.Sound
    """
    try:
        return pygame.mixer.Sound(str(path))
    except (pygame.error, OSError) as message:
        raise SystemExit(f"Failed to load sound {path}: {message}") from message


def set_screen(caption: str, width: int, height: int) -> pygame.Surface:
    """
    Set the screen

    :param caption: Caption of the screen
    :type caption: str

    :param width: Width of the screen
    :type width: int

    :param height: Height of the screen
    :type height: int

    :return: pygame.Surface
    """
    screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
    pygame.display.set_caption(caption)

    return screen
