#!/usr/bin/env python3

"""
Null Input Plugin

Base class for the other Input plugins, and usable by itself when a program
needs no keys at all.

A keymap is a comma separated list of 16 decimal host codes.  Position n in
the list is the host code which drives keypad key n.  Host codes are keyscan
numbers for PyGame and character numbers for Curses.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from ..constants import KEY_COUNT


class InputsError(Exception):
    pass


def parse_keymap(keymap, force_lowercase=False):
    # Returns a dictionary of host code to keypad key
    host_codes = keymap.split(",")

    if len(host_codes) != KEY_COUNT:
        raise InputsError(
            "Keymap defines {} keys, but {} are required.  Use commas to split numbers".format(
                len(host_codes), KEY_COUNT
            )
        )

    keymap_dict = {}

    for key_num, host_code in enumerate(host_codes):
        try:
            host_code = int(host_code)
        except ValueError:
            raise InputsError("Keymap entry '{}' is not a decimal number".format(host_code.strip())) from None

        if force_lowercase:
            # Characters, not keyscan codes, so shifted letters should press the same key
            host_code = ord(chr(host_code).lower())

        if host_code in keymap_dict:
            raise InputsError("Host code {} is mapped to more than one key".format(host_code))

        keymap_dict[host_code] = key_num

    return keymap_dict


class Inputs:
    def __init__(self, keymap, renderer, keypad, force_lowercase=False):
        self.keymap_dict = parse_keymap(keymap, force_lowercase)
        self.renderer = renderer
        self.keypad = keypad

    def host_key_changed(self, host_code, pressed):
        # Host codes outside the keymap are ignored
        key_num = self.keymap_dict.get(host_code)

        if key_num is not None:
            self.keypad.set_key(key_num, pressed)

    def process_messages(self):
        return False  # Never asks to quit

    def shutdown(self):
        pass
