"""CHIP-8 instruction decoding."""

from chex import dataclass


@dataclass(frozen=True)
class DecodedInstruction:
    """Instruction word split into its operand fields."""
    raw: int
    opcode: int  # bits 12-15, selects the instruction family
    x: int       # bits 8-11, first register index
    y: int       # bits 4-7, second register index
    n: int       # low nibble
    nn: int      # low byte
    nnn: int     # low 12 bits, an address


def decode(instruction: int) -> DecodedInstruction:
    """Decode 16-bit instruction into components."""
    return DecodedInstruction(
        raw=instruction,
        opcode=(instruction & 0xF000) >> 12,
        x=(instruction & 0x0F00) >> 8,
        y=(instruction & 0x00F0) >> 4,
        n=instruction & 0x000F,
        nn=instruction & 0x00FF,
        nnn=instruction & 0x0FFF
    )
