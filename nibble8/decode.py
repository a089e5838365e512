"""Instruction decoding."""

import enum

from chex import dataclass


class Opcode(enum.Enum):
    """Tag of a decoded instruction."""
    CLS = "CLS"
    RET = "RET"
    JP = "JP"
    CALL = "CALL"
    SE = "SE"
    SNE = "SNE"
    LD = "LD"
    ADD = "ADD"
    LDR = "LDR"
    AND = "AND"
    XOR = "XOR"
    ADDC = "ADDC"
    SUB = "SUB"
    LDI = "LDI"
    RND = "RND"
    DRW = "DRW"
    DTLD = "DTLD"
    LDDT = "LDDT"
    LDST = "LDST"
    ADDI = "ADDI"
    LDF = "LDF"
    LDB = "LDB"
    LDRM = "LDRM"
    LDV = "LDV"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class DecodedInstruction:
    """Decoded instruction with extracted operands."""
    op: Opcode
    high: int
    low: int
    x: int     # Low nibble of high byte (VX register)
    y: int     # High nibble of low byte (VY register)
    n: int     # Low nibble of low byte (4-bit immediate)
    kk: int    # Low byte (8-bit immediate)
    addr: int  # Last 12 bits (address)

    @property
    def raw(self) -> int:
        return (self.high << 8) | self.low

    def __str__(self) -> str:
        return f"{self.op.value}(x={self.x:X}, y={self.y:X}, n={self.n:X}, kk=0x{self.kk:02X}, addr=0x{self.addr:03X})"


_SYSTEM = {0xE0: Opcode.CLS, 0xEE: Opcode.RET}

_ALU = {
    0x0: Opcode.LDR,
    0x2: Opcode.AND,
    0x3: Opcode.XOR,
    0x4: Opcode.ADDC,
    0x5: Opcode.SUB,
}

_MISC = {
    0x07: Opcode.DTLD,
    0x15: Opcode.LDDT,
    0x18: Opcode.LDST,
    0x1E: Opcode.ADDI,
    0x29: Opcode.LDF,
    0x33: Opcode.LDB,
    0x55: Opcode.LDRM,
    0x65: Opcode.LDV,
}

_PRIMARY = {
    0x1: Opcode.JP,
    0x2: Opcode.CALL,
    0x3: Opcode.SE,
    0x4: Opcode.SNE,
    0x6: Opcode.LD,
    0x7: Opcode.ADD,
    0xA: Opcode.LDI,
    0xC: Opcode.RND,
    0xD: Opcode.DRW,
}


def _select(code: int, low: int) -> Opcode:
    if code == 0x0:
        return _SYSTEM.get(low, Opcode.UNKNOWN)
    if code == 0x8:
        return _ALU.get(low & 0xF, Opcode.UNKNOWN)
    if code == 0xF:
        return _MISC.get(low, Opcode.UNKNOWN)
    return _PRIMARY.get(code, Opcode.UNKNOWN)


def decode(high: int, low: int) -> DecodedInstruction:
    """Decode an instruction word given as its two bytes.

    Never fails: bit patterns outside the supported set decode to
    ``Opcode.UNKNOWN`` and are rejected at execution time.
    """
    high = int(high) & 0xFF
    low = int(low) & 0xFF
    return DecodedInstruction(
        op=_select(high >> 4, low),
        high=high,
        low=low,
        x=high & 0x0F,
        y=low >> 4,
        n=low & 0x0F,
        kk=low,
        addr=((high & 0x0F) << 8) | low,
    )


def decode_word(instruction: int) -> DecodedInstruction:
    """Decode a 16-bit instruction word."""
    instruction = int(instruction)
    return decode((instruction >> 8) & 0xFF, instruction & 0xFF)
