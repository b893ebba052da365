import itertools

import pytest

from alu8 import model
from alu8.core.dispatcher import OperationDispatcher
from alu8.core.opcodes import UNDEFINED_OPCODE, Operation


def drive(ctx, dut, a, b, op):
    """Present operands, opcode and the matching adder results"""
    add_sum, add_carry = model.byte_add(a, b)
    sub_sum, sub_carry = model.byte_subtract(a, b)
    ctx.set(dut.a, a)
    ctx.set(dut.b, b)
    ctx.set(dut.op, op)
    ctx.set(dut.add_sum, add_sum)
    ctx.set(dut.add_carry, add_carry)
    ctx.set(dut.sub_sum, sub_sum)
    ctx.set(dut.sub_carry, sub_carry)
    return ctx.get(dut.result), ctx.get(dut.carry), ctx.get(dut.overflow)


@pytest.mark.parametrize("opcode", range(16))
def test_matches_reference_model(simulate, operands, opcode):
    dut = OperationDispatcher()
    # Every shift amount, plus amounts with the ignored upper bits of B set
    b_values = operands + list(range(8)) + [0xF8, 0xFB]

    async def testbench(ctx):
        for a, b in itertools.product(operands, b_values):
            expected = model.dispatch(a, b, opcode)
            assert drive(ctx, dut, a, b, opcode) == expected, (a, b)

    simulate(dut, testbench)


@pytest.mark.parametrize(
    "a, b, op, expected",
    [
        (0x0F, 0x01, Operation.ADD, (0x10, 0, 0)),
        (0x7F, 0x01, Operation.ADD, (0x80, 0, 1)),
        (0x80, 0x80, Operation.ADD, (0x00, 1, 1)),
        (0x50, 0x50, Operation.SUB, (0x00, 1, 0)),
        (0x00, 0x01, Operation.SUB, (0xFF, 0, 0)),
        (0x80, 0x01, Operation.SUB, (0x7F, 1, 1)),
        (0xF0, 0x3C, Operation.NAND, (0xCF, 0, 0)),
        (0xF0, 0x3C, Operation.XNOR, (0x33, 0, 0)),
        (0xFF, 0x00, Operation.INC, (0x00, 1, 0)),
        (0x7F, 0x00, Operation.INC, (0x80, 0, 1)),
        (0x00, 0x00, Operation.DEC, (0xFF, 1, 0)),
        (0x80, 0x00, Operation.DEC, (0x7F, 0, 1)),
        (0x81, 0x01, Operation.SLL, (0x02, 1, 0)),
        (0x81, 0x01, Operation.SRL, (0x40, 1, 0)),
        (0x40, 0x02, Operation.SLL, (0x00, 1, 0)),
        (0xAA, 0x03, Operation.ROL, (0x55, 1, 0)),
        (0x01, 0x01, Operation.ROR, (0x80, 1, 0)),
        (0x81, 0x00, Operation.SLL, (0x81, 0, 0)),
        (0x81, 0x08, Operation.ROL, (0x81, 0, 0)),
    ],
)
def test_known_results(simulate, a, b, op, expected):
    dut = OperationDispatcher()

    async def testbench(ctx):
        assert drive(ctx, dut, a, b, op.value) == expected

    simulate(dut, testbench)


def test_rotate_by_zero_is_identity(simulate):
    dut = OperationDispatcher()

    async def testbench(ctx):
        for a in range(256):
            for op in (Operation.ROL, Operation.ROR):
                assert drive(ctx, dut, a, 0, op.value) == (a, 0, 0)

    simulate(dut, testbench)


def test_not_twice_is_identity(simulate):
    dut = OperationDispatcher()

    async def testbench(ctx):
        for a in range(256):
            inverted, _, _ = drive(ctx, dut, a, 0, Operation.NOT.value)
            restored, _, _ = drive(ctx, dut, inverted, 0, Operation.NOT.value)
            assert restored == a

    simulate(dut, testbench)


def test_undefined_opcode_is_all_zero(simulate, operands):
    dut = OperationDispatcher()

    async def testbench(ctx):
        for a, b in itertools.product(operands, operands):
            assert drive(ctx, dut, a, b, UNDEFINED_OPCODE) == (0, 0, 0)

    simulate(dut, testbench)
