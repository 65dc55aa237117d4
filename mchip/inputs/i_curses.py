#!/usr/bin/env python3

"""
Curses TTY Terminal Input Plugin

A terminal only delivers characters.  It has no idea when a key goes down or
comes back up, so holding a key is faked: every time a mapped character
arrives, its keypad key counts as held for a short while.  Keyboard auto-repeat
keeps refreshing that while the host key stays down, and once the characters
stop, the key is released.

Reading characters blocks, so it happens on a daemon thread which passes keypad
key numbers back through a queue.  ESC (27) or CTRL+C (3) asks the interpreter
to quit.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import queue
from threading import Event, Thread
from time import perf_counter
from ..constants import KEY_COUNT
from .i_null import Inputs as InputsBase

KEY_HOLD_TIME = 0.2  # Seconds a key stays down after its character was read
QUIT_CHARS = (27, 3)
QUIT_MESSAGE = None


class KeyReader(Thread):
    def __init__(self, curses_screen, keymap_dict):
        super().__init__(daemon=True)  # Dies with the interpreter, even if stuck in getch()
        self.curses_screen = curses_screen
        self.keymap_dict = keymap_dict
        self.key_queue = queue.Queue(KEY_COUNT)
        self.stop_event = Event()

    def run(self):
        while not self.stop_event.is_set():
            char = self.curses_screen.getch()

            if char < 0:
                continue

            if char in QUIT_CHARS:
                self.key_queue.put(QUIT_MESSAGE)
                return

            key_num = self.keymap_dict.get(ord(chr(char).lower()))

            if key_num is not None:
                try:
                    self.key_queue.put(key_num, block=False)
                except queue.Full:
                    pass  # The main thread is behind.  Auto-repeat will send the key again.

    def stop(self):
        self.stop_event.set()


class Inputs(InputsBase):
    def __init__(self, keymap, renderer, keypad):
        super().__init__(keymap, renderer, keypad, force_lowercase=True)
        self.held_until = [0.0] * KEY_COUNT
        self.reader = KeyReader(renderer.get_curses_screen(), self.keymap_dict)
        self.reader.start()

    def process_messages(self):
        now = perf_counter()

        while True:
            try:
                key_num = self.reader.key_queue.get(block=False)
            except queue.Empty:
                break

            if key_num is QUIT_MESSAGE:
                return True

            self.held_until[key_num] = now + KEY_HOLD_TIME

        for key_num, deadline in enumerate(self.held_until):
            self.keypad.set_key(key_num, deadline > now)

        return False

    def shutdown(self):
        # The reader only notices once getch() returns, so it isn't joined
        self.reader.stop()
        super().shutdown()
