"""
Blasteroids game: window, audio, input and the fixed-cadence loop around
the simulation.
"""

from __future__ import annotations

from typing import Iterable

import pygame
from mini_arcade_core.utils import find_assets_root, logger

from blasteroids.constants import (
    AUDIO_BUFFER,
    AUDIO_CHANNELS,
    AUDIO_FREQUENCY,
    EXPLOSION_SOUND,
    FONT_FILE,
    FONT_SIZE,
    FPS,
    HURT_SOUND,
    SHOOT_SOUND,
    WINDOW_SIZE,
    WINDOW_TITLE,
)
from blasteroids.geometry import Viewport
from blasteroids.presentation import BlasteroidsRenderer
from blasteroids.scenes.blasteroids import (
    BlasteroidsIntent,
    BlasteroidsSimulation,
    Snapshot,
    SoundEvent,
)
from blasteroids.utils import load_font, load_sound, set_screen


class IntentMapper:
    """
    Turns pygame events into one :class:`BlasteroidsIntent` per tick.

    Thrust and turning follow the held state of their keys; fire only
    registers on the key-down event.
    """

    def __init__(self):
        self._thrust = False
        self._turn_left = False
        self._turn_right = False

    def process(self, events: Iterable[pygame.event.Event]) -> BlasteroidsIntent:
        """
        Consume this tick's events

        :param events: Events polled since the last tick
        :type events: Iterable[pygame.event.Event]

        :return: BlasteroidsIntent
        """
        fire_pressed = False
        quit_requested = False
        resized = None

        for event in events:
            if event.type == pygame.QUIT:
                quit_requested = True
            elif event.type == pygame.VIDEORESIZE:
                resized = (event.w, event.h)
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    quit_requested = True
                elif event.key == pygame.K_UP:
                    self._thrust = True
                elif event.key == pygame.K_LEFT:
                    self._turn_left = True
                elif event.key == pygame.K_RIGHT:
                    self._turn_right = True
                elif event.key == pygame.K_SPACE:
                    fire_pressed = True
            elif event.type == pygame.KEYUP:
                if event.key == pygame.K_UP:
                    self._thrust = False
                elif event.key == pygame.K_LEFT:
                    self._turn_left = False
                elif event.key == pygame.K_RIGHT:
                    self._turn_right = False

        return BlasteroidsIntent(
            thrust=self._thrust,
            turn_left=self._turn_left,
            turn_right=self._turn_right,
            fire_pressed=fire_pressed,
            viewport_resized=resized,
            quit_requested=quit_requested,
        )


class Blasteroids:
    """
    Blasteroids game

    :raise SystemExit: If the window, audio device or an asset cannot be set up
    """

    def __init__(self):
        logger.info(f"Initializing {WINDOW_TITLE}")
        pygame.mixer.pre_init(AUDIO_FREQUENCY, -16, 2, AUDIO_BUFFER)
        pygame.init()

        self._clock = pygame.time.Clock()
        self._carry_on = True

        w_width, w_height = WINDOW_SIZE
        try:
            self._screen = set_screen(WINDOW_TITLE, w_width, w_height)
        except pygame.error as e:
            logger.error(f"Failed to create window: {e}")
            raise SystemExit(f"Failed to create window: {e}") from e
        self._init_audio()

        try:
            assets = find_assets_root(__file__)
        except FileNotFoundError as e:
            logger.error(f"Failed to find assets: {e}")
            raise SystemExit(str(e)) from e

        self._sounds = {
            SoundEvent.FIRE: self._load_sound(assets / SHOOT_SOUND),
            SoundEvent.EXPLOSION: self._load_sound(assets / EXPLOSION_SOUND),
            SoundEvent.HURT: self._load_sound(assets / HURT_SOUND),
        }
        self._renderer = BlasteroidsRenderer(self._load_font(assets / FONT_FILE))

        self._intents = IntentMapper()
        self._simulation = BlasteroidsSimulation(Viewport(w_width, w_height))

    def _init_audio(self):
        logger.debug("Opening audio device")
        try:
            pygame.mixer.init()
        except pygame.error as e:
            logger.error(f"Failed to open audio device: {e}")
            raise SystemExit(f"Failed to open audio device: {e}") from e
        pygame.mixer.set_num_channels(AUDIO_CHANNELS)

    def _load_sound(self, path) -> pygame.mixer.Sound:
        logger.debug(f"Loading sound {path}")
        try:
            return load_sound(path)
        except SystemExit as e:
            logger.error(e)
            raise

    def _load_font(self, path) -> pygame.font.Font:
        logger.debug(f"Loading font {path}")
        try:
            return load_font(path, FONT_SIZE)
        except SystemExit as e:
            logger.error(e)
            raise

    def handle_events(self) -> BlasteroidsIntent:
        intent = self._intents.process(pygame.event.get())
        if intent.quit_requested:
            logger.debug("Quitting the game")
            self._carry_on = False
        return intent

    def play_sounds(self, events: Iterable[SoundEvent]):
        for event in events:
            self._sounds[event].play()

    def draw_stuff(self, snapshot: Snapshot):
        self._renderer.render(self._screen, snapshot)
        pygame.display.flip()

    def run(self):
        """
        Run the game
        """
        logger.info("Running the game")

        while self._carry_on:
            self._clock.tick(FPS)
            intent = self.handle_events()
            if not self._carry_on:
                break
            snapshot = self._simulation.tick(intent)
            self.play_sounds(snapshot.events)
            self.draw_stuff(snapshot)

        pygame.quit()
        logger.info("Bye")


def run():
    """
    Main entry point for Blasteroids.
    """
    game = Blasteroids()
    game.run()


if __name__ == "__main__":
    run()
