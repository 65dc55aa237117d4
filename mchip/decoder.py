#!/usr/bin/env python3

"""
Opcode Decoder

Every instruction is a 16-bit big-endian word.  The operand fields always sit
in the same place, whichever instruction is being decoded:

    opclass = bits 15-12  (instruction family)
    addr12  = bits 11-0   (nnn)
    imm8    = bits 7-0    (kk)
    subop4  = bits 3-0    (n)
    reg_x   = bits 11-8   (x)
    reg_y   = bits 7-4    (y)

Within a family, the instruction is picked out by masking the opcode with the
family's discriminator mask and looking the result up in the closed
'Instruction' enumeration.  Anything that doesn't match a member is unknown.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple
from enum import IntEnum

Opcode = namedtuple("Opcode", ["opclass", "addr12", "imm8", "subop4", "reg_x", "reg_y"])


class Instruction(IntEnum):
    # Values are the opcode with every operand field masked out
    CLS = 0x00E0          # 00E0
    RET = 0x00EE          # 00EE
    JP = 0x1000           # 1nnn
    CALL = 0x2000         # 2nnn
    SE_VX_BYTE = 0x3000   # 3xkk
    SNE_VX_BYTE = 0x4000  # 4xkk
    LD_VX_BYTE = 0x6000   # 6xkk
    ADD_VX_BYTE = 0x7000  # 7xkk
    LD_VX_VY = 0x8000     # 8xy0
    OR = 0x8001           # 8xy1
    AND = 0x8002          # 8xy2
    XOR = 0x8003          # 8xy3
    ADD_VX_VY = 0x8004    # 8xy4
    SUB = 0x8005          # 8xy5
    SHR = 0x8006          # 8xy6
    SHL = 0x800E          # 8xyE
    LD_I = 0xA000         # Annn
    RND = 0xC000          # Cxkk
    DRW = 0xD000          # Dxyn
    SKP = 0xE09E          # Ex9E
    SKNP = 0xE0A1         # ExA1
    LD_VX_DT = 0xF007     # Fx07
    LD_DT_VX = 0xF015     # Fx15
    LD_ST_VX = 0xF018     # Fx18
    LD_F_VX = 0xF029      # Fx29
    LD_B_VX = 0xF033      # Fx33
    LD_MEM_VX = 0xF055    # Fx55
    LD_VX_MEM = 0xF065    # Fx65


# Discriminator mask for each family, indexed by opclass
FAMILY_MASKS = (
    0xF0FF,  # 0x0: imm8
    0xF000,
    0xF000,
    0xF000,
    0xF000,
    0xF000,
    0xF000,
    0xF000,
    0xF00F,  # 0x8: subop4
    0xF000,
    0xF000,
    0xF000,
    0xF000,
    0xF000,
    0xF0FF,  # 0xE: imm8
    0xF0FF   # 0xF: imm8
)

_PATTERNS = {instruction.value: instruction for instruction in Instruction}


def decode(opcode):
    return Opcode(
        opclass=(opcode & 0xF000) >> 12,
        addr12=opcode & 0xFFF,
        imm8=opcode & 0xFF,
        subop4=opcode & 0xF,
        reg_x=(opcode & 0xF00) >> 8,
        reg_y=(opcode & 0xF0) >> 4
    )


def identify(opcode):
    # Returns the matching Instruction, or None if the opcode isn't part of the instruction set
    opcode &= 0xFFFF
    return _PATTERNS.get(opcode & FAMILY_MASKS[opcode >> 12])
