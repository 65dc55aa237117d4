#!/usr/bin/env python3

"""
CPU Debugger

Produces a one-line snapshot of the machine for each instruction run while
live debugging is switched on:

    V  - all 16 registers, from Vf down to V0
    I  - index register
    DT - delay timer
    ST - sound timer
    PC - address the instruction was fetched from
    SP - number of return addresses on the stack
    OP - raw opcode
    IN - disassembled instruction

Crash reports use the verbose form, which appends the return addresses held on
the stack, oldest first.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

SNAPSHOT_FORMAT = "V: 0x{} I: 0x{:04x} DT: 0x{:02x} ST: 0x{:02x} PC: 0x{:03x} SP: {:d} OP: 0x{:04x} IN: {}"


def format_registers(registers):
    return "".join("{:02x}".format(value) for value in reversed(registers))


def format_stack(stack_items):
    if not stack_items:
        return "Stack: (Empty)"

    return "Stack: " + " ".join("0x{:03x}".format(address) for address in stack_items)


class Debugger:
    def __init__(self):
        self.live = False

    def debug(self, cpu, instruction, verbose=False):
        snapshot = SNAPSHOT_FORMAT.format(
            format_registers(cpu.v), cpu.i, cpu.dt, cpu.st, cpu.debug_pc, cpu.stack.pointer, cpu.opcode, instruction
        )

        if verbose:
            snapshot += "\n" + format_stack(cpu.stack.get_items())

        return snapshot

    def set_live(self, enabled):
        self.live = enabled

    def is_live(self):
        return self.live

    def output(self, cpu, instruction):
        print(self.debug(cpu, instruction))
