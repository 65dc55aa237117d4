#!/usr/bin/env python3

"""
Keypad Emulator

The hex keypad has 16 keys, 0-F.  Input plugins write into this from the host
side whenever a key goes up or down, and the CPU only ever reads it.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import KEY_COUNT


class KeypadError(Exception):
    pass


class Keypad:
    def __init__(self):
        self.key_down = [False] * KEY_COUNT

    def _check_key(self, key):
        if not 0 <= key < KEY_COUNT:
            raise KeypadError("Key 0x{:02x} does not exist on the keypad".format(key))

    def set_key(self, key, pressed):
        self._check_key(key)
        self.key_down[key] = bool(pressed)

    def is_key_down(self, key):
        self._check_key(key)
        return self.key_down[key]

    def release_all(self):
        for key in range(KEY_COUNT):
            self.key_down[key] = False
