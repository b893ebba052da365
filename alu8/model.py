"""
Cycle-level reference model of the ALU.

Mirrors the hardware in plain Python integers so that simulation results can be
checked against it. Each function corresponds to one of the hardware components.
"""

from dataclasses import asdict, dataclass
from typing import ClassVar

from .core.opcodes import (
    DATA_WIDTH,
    OPCODE_WIDTH,
    SHIFT_AMOUNT_BITS,
    Operation,
)

MASK = (1 << DATA_WIDTH) - 1
MSB = DATA_WIDTH - 1

_OPERATIONS = {op.value: op for op in Operation}


def bit_add(a: int, b: int, carry_in: int) -> tuple[int, int]:
    total = a ^ b ^ carry_in
    carry_out = (a & b) | (a & carry_in) | (b & carry_in)
    return total, carry_out


def byte_add(a: int, b: int, carry_in: int = 0) -> tuple[int, int]:
    """Ripple-carry addition, one bit at a time from the LSB"""
    total = 0
    carry = carry_in
    for i in range(DATA_WIDTH):
        bit, carry = bit_add((a >> i) & 1, (b >> i) & 1, carry)
        total |= bit << i
    return total, carry


def byte_subtract(a: int, b: int) -> tuple[int, int]:
    """a - b as a + ~b + 1. The carry out is 1 when there was no borrow."""
    return byte_add(a, ~b & MASK, 1)


def _bit(value: int, index: int) -> int:
    return (value >> index) & 1


def dispatch(a: int, b: int, op: int) -> tuple[int, int, int]:
    """Returns (result, carry, overflow) for opcode `op`."""
    if isinstance(op, Operation):
        op = op.value
    operation = _OPERATIONS.get(op)
    amount = b & ((1 << SHIFT_AMOUNT_BITS) - 1)

    if operation is Operation.ADD:
        result, carry = byte_add(a, b)
        same_sign = _bit(a, MSB) == _bit(b, MSB)
        return result, carry, int(same_sign and _bit(result, MSB) != _bit(a, MSB))
    if operation is Operation.SUB:
        result, carry = byte_subtract(a, b)
        signs_differ = _bit(a, MSB) != _bit(b, MSB)
        return result, carry, int(signs_differ and _bit(result, MSB) != _bit(a, MSB))

    if operation is Operation.AND:
        return a & b, 0, 0
    if operation is Operation.OR:
        return a | b, 0, 0
    if operation is Operation.XOR:
        return a ^ b, 0, 0
    if operation is Operation.NAND:
        return ~(a & b) & MASK, 0, 0
    if operation is Operation.NOR:
        return ~(a | b) & MASK, 0, 0
    if operation is Operation.XNOR:
        return ~(a ^ b) & MASK, 0, 0
    if operation is Operation.NOT:
        return ~a & MASK, 0, 0

    if operation is Operation.INC:
        return (a + 1) & MASK, int(a == MASK), int(a == MASK >> 1)
    if operation is Operation.DEC:
        return (a - 1) & MASK, int(a == 0), int(a == 1 << MSB)

    if operation is Operation.SLL:
        carry = _bit(a, DATA_WIDTH - amount) if amount else 0
        return (a << amount) & MASK, carry, 0
    if operation is Operation.SRL:
        carry = _bit(a, amount - 1) if amount else 0
        return a >> amount, carry, 0
    if operation is Operation.ROL:
        if not amount:
            return a, 0, 0
        result = ((a << amount) | (a >> (DATA_WIDTH - amount))) & MASK
        return result, _bit(a, DATA_WIDTH - amount), 0
    if operation is Operation.ROR:
        if not amount:
            return a, 0, 0
        result = ((a >> amount) | (a << (DATA_WIDTH - amount))) & MASK
        return result, _bit(a, amount - 1), 0

    # Undefined opcode
    return 0, 0, 0


def derive_flags(result: int) -> tuple[int, int, int]:
    """Returns (zero, sign, parity); parity is even parity."""
    zero = int(result == 0)
    sign = _bit(result, MSB)
    parity = int(bin(result).count("1") % 2 == 0)
    return zero, sign, parity


@dataclass(frozen=True)
class ALUState:
    result: int = 0
    carry: int = 0
    zero: int = 0
    sign: int = 0
    parity: int = 0
    overflow: int = 0

    RESET: ClassVar["ALUState"]


ALUState.RESET = ALUState()


def _check_range(name: str, value: int, bits: int) -> None:
    if not 0 <= value < (1 << bits):
        raise ValueError(f"{name}={value!r} does not fit in {bits} bit(s)")


@dataclass(frozen=True)
class ALUInputs:
    """Values presented to the ALU for one clock edge"""

    a: int = 0
    b: int = 0
    op: int = Operation.ADD.value
    reset: int = 0
    enable: int = 1

    def __post_init__(self) -> None:
        # Out-of-range values are a caller bug; never truncate them
        if isinstance(self.op, Operation):
            object.__setattr__(self, "op", self.op.value)
        _check_range("a", self.a, DATA_WIDTH)
        _check_range("b", self.b, DATA_WIDTH)
        _check_range("op", self.op, OPCODE_WIDTH)
        _check_range("reset", self.reset, 1)
        _check_range("enable", self.enable, 1)


def next_state(a: int, b: int, op: int) -> ALUState:
    """Combinational stage: the state that would be latched on an enabled edge"""
    result, carry, overflow = dispatch(a, b, op)
    zero, sign, parity = derive_flags(result)
    return ALUState(result, carry, zero, sign, parity, overflow)


def tick(state: ALUState, inputs: ALUInputs) -> ALUState:
    """
    One clock edge. Reset has priority over enable; a disabled edge returns the
    very same state object.
    """
    if inputs.reset:
        return ALUState.RESET
    if inputs.enable:
        return next_state(inputs.a, inputs.b, inputs.op)
    return state


class ALUModel:
    """Stateful wrapper around `tick`, driven like the hardware"""

    def __init__(self) -> None:
        self.state = ALUState.RESET

    def tick(self, **inputs) -> ALUState:
        self.state = tick(self.state, ALUInputs(**inputs))
        return self.state

    def peek(self) -> dict[str, int]:
        return asdict(self.state)
