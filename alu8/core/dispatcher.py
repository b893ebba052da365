from amaranth import C, Cat, Module, Signal
from amaranth.lib import wiring
from amaranth.lib.wiring import In, Out

from .opcodes import DATA_WIDTH, OPCODE_WIDTH, SHIFT_AMOUNT_BITS, Operation

MSB = DATA_WIDTH - 1
MAX_POSITIVE = (1 << MSB) - 1  # 0x7F
MIN_NEGATIVE = 1 << MSB  # 0x80


class OperationDispatcher(wiring.Component):
    """
    Selects the next result, carry and overflow for the requested operation.

    The sums of both adders come in precomputed (A+B and A+~B+1); everything else
    is derived here from A and B. Unused opcodes produce zeros.
    """

    a: Signal
    b: Signal
    op: Signal
    add_sum: Signal
    add_carry: Signal
    sub_sum: Signal
    sub_carry: Signal
    result: Signal
    carry: Signal
    overflow: Signal

    def __init__(self) -> None:
        super().__init__(
            dict(
                a=In(DATA_WIDTH),
                b=In(DATA_WIDTH),
                op=In(OPCODE_WIDTH),
                add_sum=In(DATA_WIDTH),
                add_carry=In(1),
                sub_sum=In(DATA_WIDTH),
                sub_carry=In(1),
                result=Out(DATA_WIDTH),
                carry=Out(1),
                overflow=Out(1),
            )
        )

    def elaborate(self, platform) -> Module:
        m = Module()

        a, b = self.a, self.b
        amount = b[:SHIFT_AMOUNT_BITS]
        no_shift = amount == 0

        # Helpers for shifts and rotations. Shifting into a wider value keeps the
        # bit that falls off the edge, which is what the carry reports.
        shifted_left = a << amount  # bit DATA_WIDTH is the last bit out of the top
        shifted_right = Cat(C(0, DATA_WIDTH), a) >> amount  # bit MSB is the last out of the bottom
        doubled = Cat(a, a)
        rotated_left = (doubled << amount)[DATA_WIDTH : 2 * DATA_WIDTH]
        rotated_right = (doubled >> amount)[:DATA_WIDTH]

        # Nothing is produced by default, unless the operation overrides
        m.d.comb += [
            self.result.eq(0),
            self.carry.eq(0),
            self.overflow.eq(0),
        ]

        with m.Switch(self.op):
            with m.Case(Operation.ADD):
                r = self.add_sum[MSB]
                m.d.comb += [
                    self.result.eq(self.add_sum),
                    self.carry.eq(self.add_carry),
                    # Both operands have the same sign, and the result does not
                    self.overflow.eq((a[MSB] & b[MSB] & ~r) | (~a[MSB] & ~b[MSB] & r)),
                ]
            with m.Case(Operation.SUB):
                r = self.sub_sum[MSB]
                m.d.comb += [
                    self.result.eq(self.sub_sum),
                    self.carry.eq(self.sub_carry),  # carry set means "no borrow"
                    self.overflow.eq((a[MSB] & ~b[MSB] & ~r) | (~a[MSB] & b[MSB] & r)),
                ]

            with m.Case(Operation.AND):
                m.d.comb += self.result.eq(a & b)
            with m.Case(Operation.OR):
                m.d.comb += self.result.eq(a | b)
            with m.Case(Operation.XOR):
                m.d.comb += self.result.eq(a ^ b)
            with m.Case(Operation.NAND):
                m.d.comb += self.result.eq(~(a & b))
            with m.Case(Operation.NOR):
                m.d.comb += self.result.eq(~(a | b))
            with m.Case(Operation.XNOR):
                m.d.comb += self.result.eq(~(a ^ b))
            with m.Case(Operation.NOT):
                m.d.comb += self.result.eq(~a)

            with m.Case(Operation.INC):
                m.d.comb += [
                    Cat(self.result, self.carry).eq(a + 1),
                    self.overflow.eq(a == MAX_POSITIVE),
                ]
            with m.Case(Operation.DEC):
                m.d.comb += [
                    self.result.eq(a - 1),
                    self.carry.eq(a == 0),  # borrow
                    self.overflow.eq(a == MIN_NEGATIVE),
                ]

            with m.Case(Operation.SLL):
                m.d.comb += [
                    self.result.eq(shifted_left[:DATA_WIDTH]),
                    self.carry.eq(shifted_left[DATA_WIDTH]),
                ]
            with m.Case(Operation.SRL):
                m.d.comb += [
                    self.result.eq(shifted_right[DATA_WIDTH:]),
                    self.carry.eq(shifted_right[MSB]),
                ]
            with m.Case(Operation.ROL):
                m.d.comb += self.result.eq(rotated_left)
                # The bit leaving the top lands in bit 0
                with m.If(~no_shift):
                    m.d.comb += self.carry.eq(rotated_left[0])
            with m.Case(Operation.ROR):
                m.d.comb += self.result.eq(rotated_right)
                # The bit leaving the bottom lands in the MSB
                with m.If(~no_shift):
                    m.d.comb += self.carry.eq(rotated_right[MSB])

            with m.Default():
                m.d.comb += [
                    self.result.eq(0),
                    self.carry.eq(0),
                    self.overflow.eq(0),
                ]

        return m
