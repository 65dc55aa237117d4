#!/usr/bin/env python3

"""
Curses Audio Plugin

Terminals can't play sampled sound, so the buzzer is a BEL (CTRL+G) sent as it
switches on.  The beep has a fixed length set by the terminal, and pitch is
ignored.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import curses
from .a_null import Audio as AudioBase


class Audio(AudioBase):
    def enable_buzzer(self, enabled):
        if enabled and not self.buzzer_enabled:
            curses.beep()

        super().enable_buzzer(enabled)
