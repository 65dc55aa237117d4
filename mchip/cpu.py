#!/usr/bin/env python3

"""
CPU Emulator

Like a real computer, this is where most of the processing happens.  A CPU
object owns the entire machine state: RAM, the 16 [V] registers, the index
register, program counter, call stack, both countdown timers, the keypad and
the framebuffer.  Nothing is shared between instances, so several machines can
run side by side.

The CPU never drives itself.  A Scheduler (or a test) calls 'step' to run one
instruction, and 'tick_timers' at 60Hz to count the timers down.  Both take the
same lock, so a host is free to call them from different threads.

Opcodes outside the instruction set are skipped over as no-ops, and counted.
Reading or writing outside RAM, overflowing or underflowing the stack, or
testing a key that doesn't exist, halts the CPU.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from random import Random
from threading import Lock
from .constants import (
    APP_INTRO, MEM_SIZE, FONT_LOCATION, FONT_GLYPH_SIZE, PROGRAM_START, REGISTER_COUNT, FLAG_REGISTER, SYSTEM_FONT
)
from .debugger import Debugger
from .decoder import Instruction, decode, identify
from .disassembler import disassemble
from .keypad import KeypadError
from .ram import RAMError
from .stack import StackError

CPU_ENDIAN = "big"  # Opcodes are stored big-endian


class CPUError(Exception):
    pass


class OutOfRangeError(CPUError):
    pass


class LoadError(CPUError):
    pass


class CPU:
    def __init__(self, ram, stack, framebuffer, keypad, debugger=None, shift_quirks=False, load_quirks=False,
                 seed=None):

        self.ram = ram
        self.stack = stack
        self.framebuffer = framebuffer
        self.keypad = keypad
        self.debugger = Debugger() if debugger is None else debugger
        self.live_debug = self.debugger.is_live()
        self.random = Random(seed)
        self.lock = Lock()

        """
        Quirks
        ------

        - Shift quirks: 8xy6/8xyE shift Vx in place, ignoring Vy.
        - Load quirks : Fx55/Fx65 leave I pointing just past the last register transferred.
        """

        self.shift_quirks = shift_quirks
        self.load_quirks = load_quirks

        # Define instruction pointers.
        # n = Nibble
        # kk = Byte
        # nnn = address
        # x/y = register (0-15)
        self.instructions = {
            Instruction.CLS: self._00E0,
            Instruction.RET: self._00EE,
            Instruction.JP: self._1nnn,
            Instruction.CALL: self._2nnn,
            Instruction.SE_VX_BYTE: self._3xkk,
            Instruction.SNE_VX_BYTE: self._4xkk,
            Instruction.LD_VX_BYTE: self._6xkk,
            Instruction.ADD_VX_BYTE: self._7xkk,
            Instruction.LD_VX_VY: self._8xy0,
            Instruction.OR: self._8xy1,
            Instruction.AND: self._8xy2,
            Instruction.XOR: self._8xy3,
            Instruction.ADD_VX_VY: self._8xy4,
            Instruction.SUB: self._8xy5,
            Instruction.SHR: self._8xy6,
            Instruction.SHL: self._8xyE,
            Instruction.LD_I: self._Annn,
            Instruction.RND: self._Cxkk,
            Instruction.DRW: self._Dxyn,
            Instruction.SKP: self._Ex9E,
            Instruction.SKNP: self._ExA1,
            Instruction.LD_VX_DT: self._Fx07,
            Instruction.LD_DT_VX: self._Fx15,
            Instruction.LD_ST_VX: self._Fx18,
            Instruction.LD_F_VX: self._Fx29,
            Instruction.LD_B_VX: self._Fx33,
            Instruction.LD_MEM_VX: self._Fx55,
            Instruction.LD_VX_MEM: self._Fx65
        }

        missing = [instruction.name for instruction in Instruction if instruction not in self.instructions]

        if missing:
            raise CPUError("No handler for instruction(s): {}".format(", ".join(missing)))

        # Bytearrays are mutable, so this should be fast when a register is updated
        self.v = memoryview(bytearray(REGISTER_COUNT))
        self.reset()

    def reset(self):
        # Power-on state.  Clears RAM, so any program must be loaded afterwards.
        with self.lock:
            self.ram.resize(MEM_SIZE)
            self.ram.write_block(FONT_LOCATION, SYSTEM_FONT)
            self.stack.clear()
            self.framebuffer.clear()
            self.v[:] = bytes(REGISTER_COUNT)
            self.i = 0                  # Index register
            self.dt = 0                 # Delay timer
            self.st = 0                 # Sound timer
            self.pc = PROGRAM_START     # Program counter
            self.debug_pc = PROGRAM_START
            self.opcode = 0
            self.decoded = decode(0)
            self.ignored_opcodes = 0
            self.halted = None

    def load(self, program, base=PROGRAM_START):
        # All-or-nothing.  Programs may not overwrite the interpreter area below the program start.
        size = len(program)

        if base < PROGRAM_START or not self.ram.fits(base, size):
            raise LoadError(
                "Program of {} bytes does not fit in RAM at 0x{:03x} (0x{:03x}-0x{:03x} available)".format(
                    size, base, PROGRAM_START, self.ram.mem_top
                )
            )

        with self.lock:
            self.ram.write_block(base, program)

    def step(self):
        # Fetch, decode and execute a single instruction.  Nothing outside the CPU can see a half-run instruction.
        with self.lock:
            if self.halted is not None:
                raise CPUError("CPU halted: {}".format(self.halted))

            # Keep track of the program counter before altering it in any way for debugging purposes
            self.debug_pc = self.pc

            try:
                self.opcode = self.fetch()
                self.inc_pc()  # Program counter updates after fetch, but before execute
                self.decode_exec()
            except (RAMError, StackError, KeypadError) as err:
                self.halted = str(err)
                self._halt(err)

    def step_for(self, count):
        for _ in range(count):
            self.step()

    def tick_timers(self):
        with self.lock:
            if self.dt > 0:
                self.dt -= 1

            if self.st > 0:
                self.st -= 1

    def fetch(self):
        return int.from_bytes(self.ram.read_block(self.pc, 2), CPU_ENDIAN, signed=False)

    def decode_exec(self):
        opcode = self.opcode
        self.decoded = decode(opcode)
        instruction = identify(opcode)

        if instruction is None:
            self._opcode_ignored()
            return

        if self.live_debug:
            self.debug(disassemble(opcode))

        self.instructions[instruction]()

    def inc_pc(self):
        self.pc = (self.pc + 2) & 0xFFFF

    # Host-facing machine state

    def set_key(self, key, pressed):
        self.keypad.set_key(key, pressed)

    def get_pixel(self, x, y):
        return self.framebuffer.get_pixel(x, y)

    def is_sound_active(self):
        return self.st > 0

    # Operand fields are in the same opcode position throughout all instructions

    @property
    def vx(self):
        return self.decoded.reg_x

    @property
    def vy(self):
        return self.decoded.reg_y

    @property
    def addr(self):
        return self.decoded.addr12

    @property
    def byte(self):
        return self.decoded.imm8

    @property
    def nibble(self):
        return self.decoded.subop4

    def _opcode_ignored(self):
        # Unknown opcodes don't stop the program, but they are traced if debugging
        self.ignored_opcodes += 1

        if self.live_debug:
            self.debug("0x{:04x} (ignored)".format(self.opcode))

    def _halt(self, err):
        raise OutOfRangeError(
            (
                "Emulation halted.\n\n" +
                "{}Debug info:\n" +
                "{}\n\nOpcode 0x{:04x} at address 0x{:03x} failed: {}"
            ).format(
                APP_INTRO, self.debugger.debug(self, disassemble(self.opcode), verbose=True), self.opcode,
                self.debug_pc, err
            )
        ) from err

    def debug(self, instruction):
        self.debugger.output(self, instruction)

    def _00E0(self):  # CLS
        self.framebuffer.clear()

    def _00EE(self):  # RET
        self.pc = self.stack.pop()

    def _1nnn(self):  # JP addr
        self.pc = self.addr

    def _2nnn(self):  # CALL addr
        self.stack.push(self.pc)
        self.pc = self.addr

    def _post_skip(self):
        self.inc_pc()

    def _3xkk(self):  # SE Vx, byte
        if self.v[self.vx] == self.byte:
            self._post_skip()

    def _4xkk(self):  # SNE Vx, byte
        if self.v[self.vx] != self.byte:
            self._post_skip()

    def _6xkk(self):  # LD Vx, byte
        self.v[self.vx] = self.byte

    def _7xkk(self):  # ADD Vx, byte
        vx = self.vx
        self.v[vx] = (self.v[vx] + self.byte) & 0xFF  # No carry flag for this one

    def _8xy0(self):  # LD Vx, Vy
        self.v[self.vx] = self.v[self.vy]

    def _8xy1(self):  # OR Vx, Vy
        self.v[self.vx] |= self.v[self.vy]

    def _8xy2(self):  # AND Vx, Vy
        self.v[self.vx] &= self.v[self.vy]

    def _8xy3(self):  # XOR Vx, Vy
        self.v[self.vx] ^= self.v[self.vy]

    # For the arithmetic and shift instructions, Vf is always written AFTER Vx, as Vf may be one of the operands

    def _8xy4(self):  # ADD Vx, Vy
        val = self.v[self.vx] + self.v[self.vy]
        self.v[self.vx] = val & 0xFF
        self.v[FLAG_REGISTER] = int(val > 0xFF)  # Vf is set when carrying

    def _8xy5(self):  # SUB Vx, Vy
        val = self.v[self.vx] - self.v[self.vy]
        self.v[self.vx] = val & 0xFF
        self.v[FLAG_REGISTER] = int(val >= 0)  # Vf is set when NOT borrowing

    def _8xy6(self):  # SHR Vx, Vy
        val = self.v[self.vx if self.shift_quirks else self.vy]
        self.v[self.vx] = val >> 1
        self.v[FLAG_REGISTER] = val & 1

    def _8xyE(self):  # SHL Vx, Vy
        val = self.v[self.vx if self.shift_quirks else self.vy]
        self.v[self.vx] = (val << 1) & 0xFF
        self.v[FLAG_REGISTER] = val >> 7

    def _Annn(self):  # LD I, addr
        self.i = self.addr

    def _Cxkk(self):  # RND Vx, byte
        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.v[self.vx] = self.random.randint(0, 0xFF) & self.byte

    def _Dxyn(self):  # DRW Vx, Vy, nibble
        # Sprites are always 8 pixels wide, and 'nibble' rows tall, read from I onwards
        sprite = self.ram.read_block(self.i, self.nibble)
        self.v[FLAG_REGISTER] = self.framebuffer.draw_sprite(sprite, self.v[self.vx], self.v[self.vy])

    def _Ex9E(self):  # SKP Vx
        if self.keypad.is_key_down(self.v[self.vx]):
            self._post_skip()

    def _ExA1(self):  # SKNP Vx
        if not self.keypad.is_key_down(self.v[self.vx]):
            self._post_skip()

    def _Fx07(self):  # LD Vx, DT
        self.v[self.vx] = self.dt

    def _Fx15(self):  # LD DT, Vx
        self.dt = self.v[self.vx]

    def _Fx18(self):  # LD ST, Vx
        self.st = self.v[self.vx]

    def _Fx29(self):  # LD F, Vx
        self.i = (FONT_LOCATION + FONT_GLYPH_SIZE * self.v[self.vx]) & 0xFFFF

    def _Fx33(self):  # LD B, Vx
        val = self.v[self.vx]
        # Most-significant digit first.  Written as one block so a bad I changes nothing.
        self.ram.write_block(self.i, bytes((val // 100, (val // 10) % 10, val % 10)))

    def _post_Fx55_Fx65(self):
        if self.load_quirks:
            self.i = (self.i + self.vx + 1) & 0xFFFF

    def _Fx55(self):  # LD [I], Vx
        # Ensure with +1s that the final register is copied
        self.ram.write_block(self.i, self.v[:self.vx + 1])
        self._post_Fx55_Fx65()

    def _Fx65(self):  # LD Vx, [I]
        vx = self.vx
        self.v[:vx + 1] = self.ram.read_block(self.i, vx + 1)
        self._post_Fx55_Fx65()
