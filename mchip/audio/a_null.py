#!/usr/bin/env python3

"""
Null Audio Plugin

Base class for the other Audio plugins, and usable by itself for silence.

The machine only has a buzzer.  It sounds a single fixed tone whenever the
sound timer is above zero, so a plugin only needs to know the pitch and
whether the buzzer is on.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from ..constants import BUZZER_TONE


def square_wave(tone, sample_rate, amplitude=0xFF):
    # One full cycle of unsigned 8-bit samples, high for the first half
    cycle_length = max(2, int(round(sample_rate / tone)))
    half_cycle = cycle_length // 2
    return bytes([amplitude] * half_cycle + [0] * (cycle_length - half_cycle))


class Audio:
    def __init__(self):
        self.buzzer_enabled = False
        self.tone = BUZZER_TONE

    def set_tone(self, tone):
        # Pitch in Hz
        self.tone = tone

    def enable_buzzer(self, enabled):
        self.buzzer_enabled = enabled

    def shutdown(self):
        pass
