import logging

import numpy as np
import pygame

from config import SOUND_DIE, SOUND_EAT, SOUND_START

logger = logging.getLogger(__name__)


def sine_wave(freq=440, duration=0.12, volume=0.2, sample_rate=44100, channels=2):
    """Samples of a short enveloped sine tone as an int16 array shaped (n, channels)."""
    t = np.linspace(0, duration, int(sample_rate * duration), False)
    wave = volume * np.sin(2 * np.pi * freq * t)
    # Quick attack and release so the tone does not click
    env = np.ones_like(wave)
    attack = min(int(0.01 * sample_rate), len(wave))
    release = min(int(0.03 * sample_rate), len(wave))
    env[:attack] = np.linspace(0, 1, attack)
    if release:
        env[-release:] = np.linspace(1, 0, release)
    wave = (wave * env * (2**15 - 1)).astype(np.int16)
    if channels == 1:
        return wave
    return np.column_stack([wave] * channels)


def make_sine_sound(freq=440, duration=0.12, volume=0.2):
    """Generate a pygame Sound matching the mixer's sample rate and channel count."""
    sample_rate, _, channels = pygame.mixer.get_init()
    return pygame.sndarray.make_sound(sine_wave(freq, duration, volume, sample_rate, channels))


class SoundBoard:
    """Plays short generated tones in reaction to engine notifications."""

    def __init__(self):
        self.sounds = {}
        self.muted = False
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
            self.sounds['start'] = make_sine_sound(*SOUND_START)
            self.sounds['eat'] = make_sine_sound(*SOUND_EAT)
            self.sounds['die'] = make_sine_sound(*SOUND_DIE)
        except pygame.error as exc:
            # No audio device; the game runs silent
            logger.warning("Sound disabled: %s", exc)
            self.sounds = {}

    def attach(self, game):
        game.game_started.connect(lambda g: self.play('start'))
        game.score_changed.connect(lambda g: self.play('eat') if g.score > 0 else None)
        game.snake_dead.connect(lambda g: self.play('die'))

    def toggle_mute(self):
        self.muted = not self.muted
        return self.muted

    def play(self, name):
        if self.muted or name not in self.sounds:
            return
        self.sounds[name].play()
