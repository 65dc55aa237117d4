#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# App identification
APP_NAME = "MiniChip Interpreter"
APP_VERSION = "1.0.0"
APP_COPYRIGHT = "Copyright (C) 2022 Gregory Maynard-Hoare, licensed under GNU Affero General Public License v3.0"
APP_INTRO = "{} V{} -- ".format(APP_NAME, APP_VERSION)

# Memory layout.  Everything below PROGRAM_START belongs to the interpreter.
MEM_SIZE = 0x1000
FONT_LOCATION = 0x000
FONT_GLYPH_SIZE = 5
PROGRAM_START = 0x200

# Register file and call stack
REGISTER_COUNT = 0x10
FLAG_REGISTER = 0xF
STACK_SIZE = 16
KEY_COUNT = 0x10

# Monochrome display
VID_WIDTH = 64
VID_HEIGHT = 32

# Clocks, in Hz.  The CPU clock and timer clock are independent of each other.
DEFAULT_CLOCK_SPEED = 240
TIMER_FREQ = 60.0
DISPLAY_FREQ = 60.0
BUZZER_TONE = 440.0

# Built-in hexadecimal font, 0-F, 4x5 pixels per glyph
SYSTEM_FONT = bytes((
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
))

# Default mappings for keys 0-F.  Note that the keyscans (on a UK QWERTY keyboard) and ASCII characters for these are
# the same code
DEFAULT_KEYMAP = "120,49,50,51,113,119,101,97,115,100,122,99,52,114,102,118"

# Background and foreground colours for the PyGame renderer (green LCD)
DEFAULT_PALETTE = "446B2C,88BA6A"

# CPU quirks (not including display wrapping)
CPU_QUIRKS = ["shift", "load"]
