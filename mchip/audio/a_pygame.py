#!/usr/bin/env python3

"""
PyGame Audio Plugin

Loops a square wave through the PyGame / SDL mixer while the buzzer is on.
Changing the mixer's playback rate is slow, so a new pitch is handled by
rebuilding the looped sample at the fixed playback rate instead.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .a_null import Audio as AudioBase, square_wave

PLAYBACK_RATE = 44100
DEFAULT_VOLUME = 0.1
CYCLES_PER_SAMPLE = 32  # Longer loops hide rounding of the cycle length


class Audio(AudioBase):
    def __init__(self):
        self.sound = None
        pygame.mixer.pre_init(PLAYBACK_RATE, size=8, channels=1, buffer=512, allowedchanges=0)
        pygame.mixer.init()
        super().__init__()
        self._build_sound()

    def set_tone(self, tone):
        if tone != self.tone:
            super().set_tone(tone)
            self._build_sound()

    def enable_buzzer(self, enabled):
        # A sound which is already playing isn't restarted
        if enabled and not self.buzzer_enabled:
            self.sound.play(-1)
        elif not enabled and self.buzzer_enabled:
            self.sound.stop()

        super().enable_buzzer(enabled)

    def _build_sound(self):
        if self.sound is not None:
            self.sound.stop()

        self.sound = pygame.mixer.Sound(buffer=square_wave(self.tone, PLAYBACK_RATE) * CYCLES_PER_SAMPLE)
        self.sound.set_volume(DEFAULT_VOLUME)

        if self.buzzer_enabled:
            self.sound.play(-1)

    def shutdown(self):
        if self.sound is not None:
            self.sound.stop()

        pygame.mixer.quit()
        super().shutdown()
