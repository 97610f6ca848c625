"""Tests for the pygame host helpers and key/event routing (no display is opened)."""

from unittest.mock import MagicMock, patch

import pygame
import pytest

from gridsnake.snake import Direction
from gridsnake.window import SnakeWindow, direction_for_key, fit_canvas


@pytest.fixture
def window():
    """A SnakeWindow shell with a mocked engine, skipping display setup."""
    win = SnakeWindow.__new__(SnakeWindow)
    win.game = MagicMock()
    win.game.dead = False
    win.sounds = MagicMock()
    win.full_screen = False
    win.cell_size = 32
    win.running = True
    return win


class TestFitCanvas:

    def test_default_window(self):
        rect = fit_canvas(557, 543, 50, 32)
        assert rect == pygame.Rect(6, 56, 544, 480)

    def test_exact_fit_has_no_margin(self):
        assert fit_canvas(640, 530, 50, 32) == pygame.Rect(0, 50, 640, 480)

    def test_full_screen_without_title_bar(self):
        rect = fit_canvas(1920, 1080, 0, 64)
        assert rect.size == (1920, 1024)
        assert rect.top == 28

    def test_tiny_window_clamps_to_empty(self):
        rect = fit_canvas(20, 40, 50, 32)
        assert rect.width == 0 and rect.height == 0


class TestKeys:

    @pytest.mark.parametrize("key,direction", [
        (pygame.K_w, Direction.UP),
        (pygame.K_UP, Direction.UP),
        (pygame.K_a, Direction.LEFT),
        (pygame.K_LEFT, Direction.LEFT),
        (pygame.K_s, Direction.DOWN),
        (pygame.K_DOWN, Direction.DOWN),
        (pygame.K_d, Direction.RIGHT),
        (pygame.K_RIGHT, Direction.RIGHT),
    ])
    def test_direction_keys(self, key, direction):
        assert direction_for_key(key) is direction

    def test_other_keys_have_no_direction(self):
        assert direction_for_key(pygame.K_q) is None

    def test_arrow_key_steers(self, window):
        window.handle_key(pygame.K_UP)
        window.game.set_direction.assert_called_once_with(Direction.UP)

    def test_space_resumes_live_game(self, window):
        window.handle_key(pygame.K_SPACE)
        window.game.resume_game.assert_called_once_with()
        window.game.restart_game.assert_not_called()

    def test_space_restarts_dead_game(self, window):
        window.game.dead = True
        window.handle_key(pygame.K_SPACE)
        window.game.restart_game.assert_called_once_with(32)

    def test_f11_toggles_full_screen(self, window):
        with patch.object(SnakeWindow, "toggle_full_screen") as toggle:
            window.handle_key(pygame.K_F11)
        toggle.assert_called_once_with()

    def test_escape_only_leaves_full_screen(self, window):
        with patch.object(SnakeWindow, "toggle_full_screen") as toggle:
            window.handle_key(pygame.K_ESCAPE)
            toggle.assert_not_called()
            window.full_screen = True
            window.handle_key(pygame.K_ESCAPE)
        toggle.assert_called_once_with()

    def test_m_toggles_mute(self, window):
        window.handle_key(pygame.K_m)
        window.sounds.toggle_mute.assert_called_once_with()


class TestEvents:

    def test_quit_stops_loop(self, window):
        window.handle_event(pygame.event.Event(pygame.QUIT))
        assert not window.running

    def test_focus_loss_pauses(self, window):
        window.handle_event(pygame.event.Event(pygame.WINDOWFOCUSLOST))
        window.game.stop_game.assert_called_once_with(paused=True)

    def test_resize_event_refits_canvas(self, window):
        with patch.object(SnakeWindow, "handle_resize") as resize:
            window.handle_event(pygame.event.Event(pygame.VIDEORESIZE, w=800, h=600))
        resize.assert_called_once_with(800, 600)

    def test_resize_ignored_in_full_screen(self, window):
        window.full_screen = True
        with patch.object(SnakeWindow, "handle_resize") as resize:
            window.handle_event(pygame.event.Event(pygame.VIDEORESIZE, w=800, h=600))
        resize.assert_not_called()

    def test_handle_resize_passes_fitted_size_to_engine(self, window):
        window.canvas = MagicMock()
        window.handle_resize(557, 543)
        window.game.resize.assert_called_once_with(544, 480)
        assert window.get_width() == 544
        assert window.get_height() == 480
