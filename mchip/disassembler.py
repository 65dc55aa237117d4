#!/usr/bin/env python3

"""
Disassembler

Turns opcodes into mnemonics for tracing and program listings.  This has no
effect on execution.  Opcodes outside the instruction set are shown as raw
hex words.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .decoder import Instruction, decode, identify

MNEMONICS = {
    Instruction.CLS: "CLS",
    Instruction.RET: "RET",
    Instruction.JP: "JP 0x{addr12:03x}",
    Instruction.CALL: "CALL 0x{addr12:03x}",
    Instruction.SE_VX_BYTE: "SE V{reg_x:01x}, 0x{imm8:02x}",
    Instruction.SNE_VX_BYTE: "SNE V{reg_x:01x}, 0x{imm8:02x}",
    Instruction.LD_VX_BYTE: "LD V{reg_x:01x}, 0x{imm8:02x}",
    Instruction.ADD_VX_BYTE: "ADD V{reg_x:01x}, 0x{imm8:02x}",
    Instruction.LD_VX_VY: "LD V{reg_x:01x}, V{reg_y:01x}",
    Instruction.OR: "OR V{reg_x:01x}, V{reg_y:01x}",
    Instruction.AND: "AND V{reg_x:01x}, V{reg_y:01x}",
    Instruction.XOR: "XOR V{reg_x:01x}, V{reg_y:01x}",
    Instruction.ADD_VX_VY: "ADD V{reg_x:01x}, V{reg_y:01x}",
    Instruction.SUB: "SUB V{reg_x:01x}, V{reg_y:01x}",
    Instruction.SHR: "SHR V{reg_x:01x}, V{reg_y:01x}",
    Instruction.SHL: "SHL V{reg_x:01x}, V{reg_y:01x}",
    Instruction.LD_I: "LD I, 0x{addr12:03x}",
    Instruction.RND: "RND V{reg_x:01x}, 0x{imm8:02x}",
    Instruction.DRW: "DRW V{reg_x:01x}, V{reg_y:01x}, 0x{subop4:01x}",
    Instruction.SKP: "SKP V{reg_x:01x}",
    Instruction.SKNP: "SKNP V{reg_x:01x}",
    Instruction.LD_VX_DT: "LD V{reg_x:01x}, DT",
    Instruction.LD_DT_VX: "LD DT, V{reg_x:01x}",
    Instruction.LD_ST_VX: "LD ST, V{reg_x:01x}",
    Instruction.LD_F_VX: "LD F, V{reg_x:01x}",
    Instruction.LD_B_VX: "LD B, V{reg_x:01x}",
    Instruction.LD_MEM_VX: "LD [I], V{reg_x:01x}",
    Instruction.LD_VX_MEM: "LD V{reg_x:01x}, [I]"
}


def disassemble(opcode):
    instruction = identify(opcode)

    if instruction is None:
        return "0x{:04x}".format(opcode)

    return MNEMONICS[instruction].format(**decode(opcode)._asdict())


def disassemble_block(data, start=0):
    # Yields (address, opcode, mnemonic) for each whole word.  A trailing odd byte is ignored.
    for offset in range(0, len(data) - 1, 2):
        opcode = (data[offset] << 8) | data[offset + 1]
        yield start + offset, opcode, disassemble(opcode)
