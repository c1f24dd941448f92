"""Human-readable mnemonics for CHIP-8 instruction words."""

from chip8vm.decode import decode

_ALU_MNEMONICS = {
    0x0: "LD", 0x1: "OR", 0x2: "AND", 0x3: "XOR", 0x4: "ADD",
    0x5: "SUB", 0x6: "SHR", 0x7: "SUBN", 0xE: "SHL",
}

_MISC_FORMATS = {
    0x07: "LD V{x:X}, DT",
    0x0A: "LD V{x:X}, K",
    0x15: "LD DT, V{x:X}",
    0x18: "LD ST, V{x:X}",
    0x1E: "ADD I, V{x:X}",
    0x29: "LD F, V{x:X}",
    0x33: "LD B, V{x:X}",
    0x55: "LD [I], V{x:X}",
    0x65: "LD V{x:X}, [I]",
}


def disassemble(instruction: int) -> str:
    """Return the mnemonic for a 16-bit instruction word.

    Words without an assigned meaning are rendered as ``NOP`` (the
    interpreter treats them as no-ops) followed by the raw word.
    """
    d = decode(int(instruction) & 0xFFFF)
    opcode, x, y, n, nn, nnn = d.opcode, d.x, d.y, d.n, d.nn, d.nnn

    if opcode == 0x0:
        if n == 0x0:
            return "CLS"
        if n == 0xE:
            return "RET"
    elif opcode == 0x1:
        return f"JP 0x{nnn:03X}"
    elif opcode == 0x2:
        return f"CALL 0x{nnn:03X}"
    elif opcode == 0x3:
        return f"SE V{x:X}, 0x{nn:02X}"
    elif opcode == 0x4:
        return f"SNE V{x:X}, 0x{nn:02X}"
    elif opcode == 0x5:
        return f"SE V{x:X}, V{y:X}"
    elif opcode == 0x6:
        return f"LD V{x:X}, 0x{nn:02X}"
    elif opcode == 0x7:
        return f"ADD V{x:X}, 0x{nn:02X}"
    elif opcode == 0x8:
        if n in _ALU_MNEMONICS:
            return f"{_ALU_MNEMONICS[n]} V{x:X}, V{y:X}"
    elif opcode == 0x9:
        return f"SNE V{x:X}, V{y:X}"
    elif opcode == 0xA:
        return f"LD I, 0x{nnn:03X}"
    elif opcode == 0xB:
        return f"JP V0, 0x{nnn:03X}"
    elif opcode == 0xC:
        return f"RND V{x:X}, 0x{nn:02X}"
    elif opcode == 0xD:
        return f"DRW V{x:X}, V{y:X}, {n}"
    elif opcode == 0xE:
        if n == 0xE:
            return f"SKP V{x:X}"
        if n == 0x1:
            return f"SKNP V{x:X}"
    elif opcode == 0xF:
        if nn in _MISC_FORMATS:
            return _MISC_FORMATS[nn].format(x=x)

    return f"NOP ; 0x{d.raw:04X}"


def disassemble_program(program: bytes, start: int = 0x200) -> list[str]:
    """Disassemble a ROM image into ``address: word  mnemonic`` lines.

    A trailing odd byte is ignored.
    """
    lines = []
    for offset in range(0, len(program) - 1, 2):
        word = (program[offset] << 8) | program[offset + 1]
        lines.append(f"{start + offset:03X}: {word:04X}  {disassemble(word)}")
    return lines
