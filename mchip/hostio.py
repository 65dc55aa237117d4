#!/usr/bin/env python3

"""
Host I/O Functionality

Handles loading program images from the host filesystem, ready for writing
into RAM.  A program image is simply the raw bytes of the program, with no
header.  If no file is given, the built-in demo program is used instead.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .roms import DEMO_ROM


class Loader:
    def load_binary(self, filename):
        with open(filename, "rb") as f:
            return f.read()

    def load_program(self, filename=None):
        if filename is None:
            return DEMO_ROM

        return self.load_binary(filename)
