import pygame
import pytest

from truerpg.window import Window


@pytest.fixture
def window(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    created = Window(64, 48, "test")
    yield created
    created.destroy()


def test_window_has_requested_size(window):
    assert (window.width, window.height) == (64, 48)


def test_close_ends_main_loop(window):
    assert window.is_open()
    window.close()
    assert not window.is_open()


def test_handle_key_tracks_state_and_fires_event(window):
    records = []
    window.on_input += lambda key, pressed: records.append((key, pressed))
    window.handle_key(pygame.K_w, True)
    assert window.key_down(pygame.K_w)
    window.handle_key(pygame.K_w, False)
    assert not window.key_down(pygame.K_w)
    assert records == [(pygame.K_w, True), (pygame.K_w, False)]


def test_negative_key_is_ignored(window):
    records = []
    window.on_input += lambda key, pressed: records.append((key, pressed))
    window.handle_key(-1, True)
    assert records == []
    assert not window.key_down(-1)


def test_handle_resize_fires_event(window):
    sizes = []
    window.on_resize += lambda width, height: sizes.append((width, height))
    window.handle_resize(200, 100)
    assert sizes == [(200, 100)]


def test_poll_events_handles_quit(window):
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    window.poll_events()
    assert not window.is_open()


def test_poll_events_handles_key_presses(window):
    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_e))
    window.poll_events()
    assert window.key_down(pygame.K_e)
    pygame.event.post(pygame.event.Event(pygame.KEYUP, key=pygame.K_e))
    window.poll_events()
    assert not window.key_down(pygame.K_e)


def test_instance_returns_current_window(window):
    assert Window.instance() is window


def test_destroy_closes_and_releases_instance(window, monkeypatch):
    window.destroy()
    assert not window.is_open()
    replacement = Window(32, 32, "next")
    try:
        assert Window.instance() is replacement
    finally:
        replacement.destroy()