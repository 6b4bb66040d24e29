from __future__ import annotations

import pygame
import pytest

from blasteroids import app
from blasteroids.app import IntentMapper
from blasteroids.constants import AUDIO_BUFFER, AUDIO_FREQUENCY


def key_down(key):
    return pygame.event.Event(pygame.KEYDOWN, key=key)


def key_up(key):
    return pygame.event.Event(pygame.KEYUP, key=key)


def test_no_events_means_idle_intent():
    intent = IntentMapper().process([])
    assert not intent.thrust
    assert not intent.turn_left
    assert not intent.turn_right
    assert not intent.fire_pressed
    assert intent.viewport_resized is None
    assert not intent.quit_requested


def test_held_keys_persist_until_released():
    mapper = IntentMapper()

    intent = mapper.process([key_down(pygame.K_UP), key_down(pygame.K_LEFT)])
    assert intent.thrust and intent.turn_left

    intent = mapper.process([])
    assert intent.thrust and intent.turn_left

    intent = mapper.process([key_up(pygame.K_UP), key_down(pygame.K_RIGHT)])
    assert not intent.thrust
    assert intent.turn_left and intent.turn_right

    intent = mapper.process([key_up(pygame.K_LEFT), key_up(pygame.K_RIGHT)])
    assert not intent.turn_left and not intent.turn_right


def test_fire_only_on_key_down_tick():
    mapper = IntentMapper()

    assert mapper.process([key_down(pygame.K_SPACE)]).fire_pressed
    assert not mapper.process([]).fire_pressed
    assert not mapper.process([key_up(pygame.K_SPACE)]).fire_pressed


def test_resize_and_quit():
    mapper = IntentMapper()

    resize = pygame.event.Event(pygame.VIDEORESIZE, w=640, h=420, size=(640, 420))
    assert mapper.process([resize]).viewport_resized == (640, 420)

    assert mapper.process([pygame.event.Event(pygame.QUIT)]).quit_requested
    assert mapper.process([key_down(pygame.K_ESCAPE)]).quit_requested


def test_mixer_is_configured_before_pygame_starts(monkeypatch):
    calls = []
    monkeypatch.setattr(
        pygame.mixer, "pre_init", lambda *args: calls.append(("pre_init", args))
    )
    monkeypatch.setattr(pygame, "init", lambda: calls.append(("init", ())))
    monkeypatch.setattr(pygame.mixer, "init", lambda: calls.append(("mixer", ())))
    monkeypatch.setattr(pygame.mixer, "set_num_channels", lambda n: None)
    monkeypatch.setattr(app, "set_screen", lambda *args: pygame.Surface((10, 10)))

    def no_assets(anchor):
        raise FileNotFoundError("Could not locate 'assets' directory.")

    monkeypatch.setattr(app, "find_assets_root", no_assets)

    with pytest.raises(SystemExit):
        app.Blasteroids()

    assert [name for name, _ in calls] == ["pre_init", "init", "mixer"]
    assert calls[0][1] == (AUDIO_FREQUENCY, -16, 2, AUDIO_BUFFER)
