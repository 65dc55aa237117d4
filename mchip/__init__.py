#!/usr/bin/env python3

"""
Main Startup Module

Call main(args) to start the interpreter, where args is a dictionary of
options.  This works the same whether started from the Terminal or a GUI.

Every option must be present.  Use None to pick the default.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import APP_INTRO, APP_COPYRIGHT, DEFAULT_CLOCK_SPEED, PROGRAM_START, STACK_SIZE, CPU_QUIRKS
from .cpu import CPU
from .debugger import Debugger
from .disassembler import disassemble_block
from .framebuffer import Framebuffer
from .hostio import Loader
from .keypad import Keypad
from .ram import RAM
from .scheduler import Scheduler
from .stack import Stack


class StartupError(Exception):
    pass


def list_program(program):
    for address, opcode, mnemonic in disassemble_block(program, PROGRAM_START):
        print("0x{:03x}: {:04x}  {}".format(address, opcode, mnemonic))


def select_plugins(renderer_name, mute):
    """
    Returns the (Renderer, Inputs, Audio) classes for a front end.

    With no name, PyGame is tried first, then Curses.  PyGame sounds the buzzer
    unless muted, while Curses stays quiet unless unmuted explicitly.
    """

    # pylint: disable=import-outside-toplevel, unused-import
    if renderer_name in (None, "pygame"):
        try:
            import pygame  # noqa: F401
        except ImportError:
            if renderer_name == "pygame":
                raise StartupError("PyGame does not appear to be installed.") from None
        else:
            from .renderers.r_pygame import Renderer
            from .inputs.i_pygame import Inputs

            if mute:
                from .audio.a_null import Audio
            else:
                from .audio.a_pygame import Audio

            return Renderer, Inputs, Audio

    if renderer_name in (None, "curses"):
        try:
            import curses  # noqa: F401
        except ImportError:
            if renderer_name is None:
                raise StartupError("Neither PyGame nor Curses (or Windows-Curses) appear to be installed.") from None

            raise StartupError("Curses (or Windows-Curses) does not appear to be installed.") from None

        from .renderers.r_curses import Renderer
        from .inputs.i_curses import Inputs

        if mute or mute is None:
            from .audio.a_null import Audio
        else:
            from .audio.a_curses import Audio

        return Renderer, Inputs, Audio

    if renderer_name == "null":
        from .renderers.r_null import Renderer
        from .inputs.i_null import Inputs
        from .audio.a_null import Audio
        return Renderer, Inputs, Audio

    raise StartupError("Unknown renderer '{}'.".format(renderer_name))


def main(args):
    program = Loader().load_program(args["filename"])

    if args["disassemble"]:
        list_program(program)
        return

    print("".join((APP_INTRO, APP_COPYRIGHT)))
    quirk_settings = {}

    for cpu_quirk in CPU_QUIRKS:
        quirk_label = "{}_quirks".format(cpu_quirk)
        quirk_settings[quirk_label] = bool(args[quirk_label])

    Renderer, Inputs, Audio = select_plugins(args["renderer"], args["mute"])

    # The framebuffer draws through the renderer, and the inputs may need the renderer's window or terminal
    renderer = Renderer(scale=args["scale"], palette=args["palette"], smoothing=args["smoothing"])
    framebuffer = Framebuffer(renderer, allow_wrapping=bool(args["screen_wrap_quirks"]))
    keypad = Keypad()
    inputs = Inputs(args["keymap"], renderer, keypad)
    audio = Audio()

    debugger = Debugger()
    debugger.set_live(args["debug"])
    clock_speed = DEFAULT_CLOCK_SPEED if args["clock_speed"] is None else args["clock_speed"]

    try:
        cpu = CPU(RAM(), Stack(STACK_SIZE), framebuffer, keypad, debugger, seed=args["seed"], **quirk_settings)
        cpu.load(program)
        Scheduler(cpu, framebuffer, inputs, audio, clock_speed=clock_speed).run()
    finally:
        # __del__ can't be relied upon to restore the host (e.g. under PyPy)
        audio.shutdown()
        inputs.shutdown()
        renderer.shutdown()
