"""ALU operations (8XYN).

Each operation maps ``(vx, vy)`` to the values written back as ``(vx, vf)``,
with ``None`` for a register left untouched. Carry and borrow follow the
reference machine rather than the usual CHIP-8 convention:

* ADDC discards the sum on overflow and only raises VF.
* SUB only acts when VX > VY; otherwise nothing changes.
* The logical operations never touch VF.
"""

from typing import Optional

from nibble8.state import EmulatorState
from nibble8.decode import DecodedInstruction, Opcode
from nibble8.constants import FLAG_REGISTER

AluResult = tuple[Optional[int], Optional[int]]


def alu_set(vx: int, vy: int) -> AluResult:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_and(vx: int, vy: int) -> AluResult:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx: int, vy: int) -> AluResult:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx: int, vy: int) -> AluResult:
    """8XY4 - Add: VX += VY unless it overflows, in which case only VF = 1."""
    result = vx + vy
    if result > 0xFF:
        return None, 1
    return result, None


def alu_sub(vx: int, vy: int) -> AluResult:
    """8XY5 - Subtract: VX -= VY and VF = 1 when VX > VY, no-op otherwise."""
    if vx > vy:
        return vx - vy, 1
    return None, None


ALU_OPERATIONS = {
    Opcode.LDR: alu_set,
    Opcode.AND: alu_and,
    Opcode.XOR: alu_xor,
    Opcode.ADDC: alu_add,
    Opcode.SUB: alu_sub,
}


def execute_alu_operation(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XYN - ALU operations dispatcher."""
    vx = int(state.V[instruction.x])
    vy = int(state.V[instruction.y])

    result, flag = ALU_OPERATIONS[instruction.op](vx, vy)

    # VF is written before VX, so VX = VF keeps the result.
    new_V = state.V
    if flag is not None:
        new_V = new_V.at[FLAG_REGISTER].set(flag)
    if result is not None:
        new_V = new_V.at[instruction.x].set(result)
    return state.replace(V=new_V)
