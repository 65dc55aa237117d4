#!/usr/bin/env python3

"""
PyGame Input Plugin

PyGame reports real key down and key up events, so the keypad follows the host
keyboard exactly.  Closing the window or releasing ESC asks the interpreter to
quit, and the Renderer is expected to cope with PyGame shutting down after
that.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .i_null import Inputs as InputsBase


class Inputs(InputsBase):
    def __init__(self, keymap, renderer, keypad):
        super().__init__(keymap, renderer, keypad)

        self.event_handlers = {
            pygame.QUIT:    lambda event: True,
            pygame.KEYDOWN: self._key_down,
            pygame.KEYUP:   self._key_up
        }

    def process_messages(self):
        # Drain the whole queue, even once a quit has been seen
        quit_requested = False

        for event in pygame.event.get():
            handler = self.event_handlers.get(event.type)

            if handler is not None and handler(event):
                quit_requested = True

        return quit_requested

    def _key_down(self, event):
        self.host_key_changed(event.key, True)
        return False

    def _key_up(self, event):
        if event.key == pygame.K_ESCAPE:
            return True

        self.host_key_changed(event.key, False)
        return False
