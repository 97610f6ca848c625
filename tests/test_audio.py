from unittest.mock import MagicMock

import numpy as np

from gridsnake.audio import SoundBoard, sine_wave
from gridsnake.events import Signal


def test_sine_wave_shape_and_dtype():
    wave = sine_wave(440, 0.1, 0.2, sample_rate=1000, channels=2)
    assert wave.shape == (100, 2)
    assert wave.dtype == np.int16


def test_sine_wave_mono_and_envelope():
    wave = sine_wave(440, 0.1, 0.5, sample_rate=8000, channels=1)
    assert wave.ndim == 1
    assert wave[0] == 0
    assert np.abs(wave).max() <= int(0.5 * (2**15 - 1))


def test_soundboard_follows_game_notifications():
    board = SoundBoard.__new__(SoundBoard)
    board.sounds = {name: MagicMock() for name in ("start", "eat", "die")}
    board.muted = False
    game = MagicMock()
    game.game_started = Signal("game_started")
    game.score_changed = Signal("score_changed")
    game.snake_dead = Signal("snake_dead")
    board.attach(game)

    game.score = 0
    game.score_changed.emit(game)
    board.sounds["eat"].play.assert_not_called()

    game.score = 1
    game.score_changed.emit(game)
    game.snake_dead.emit(game)
    board.sounds["eat"].play.assert_called_once_with()
    board.sounds["die"].play.assert_called_once_with()


def test_muted_soundboard_is_silent():
    board = SoundBoard.__new__(SoundBoard)
    board.sounds = {"start": MagicMock()}
    board.muted = False

    assert board.toggle_mute() is True
    board.play("start")
    board.sounds["start"].play.assert_not_called()
