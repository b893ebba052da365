from amaranth import Cat, Module, Signal
from amaranth.lib import wiring
from amaranth.lib.wiring import In, Out


class BitAdder(wiring.Component):
    a: In(1)
    b: In(1)
    carry_in: In(1)

    sum: Out(1)
    carry_out: Out(1)

    def elaborate(self, platform) -> Module:
        m = Module()

        m.d.comb += [
            self.sum.eq(self.a ^ self.b ^ self.carry_in),
            # Majority of the three inputs
            self.carry_out.eq(
                (self.a & self.b) | (self.a & self.carry_in) | (self.b & self.carry_in)
            ),
        ]

        return m


class ByteAdder(wiring.Component):
    """
    Ripple-carry adder built from a chain of BitAdders.

    Subtraction is done by the caller: feed ~b and carry_in=1. In that case
    carry_out is the inverted borrow.
    """

    a: Signal
    b: Signal
    carry_in: Signal
    sum: Signal
    carry_out: Signal

    def __init__(self, width: int = 8) -> None:
        if width <= 0:
            raise ValueError(f"Invalid adder width {width}, must be > 0")
        self.width = width
        super().__init__(
            dict(
                a=In(width),
                b=In(width),
                carry_in=In(1),
                sum=Out(width),
                carry_out=Out(1),
            )
        )

    def elaborate(self, platform) -> Module:
        m = Module()

        carry = self.carry_in
        sum_bits = []
        for i in range(self.width):
            bit = m.submodules[f"bit{i}"] = BitAdder()
            m.d.comb += [
                bit.a.eq(self.a[i]),
                bit.b.eq(self.b[i]),
                bit.carry_in.eq(carry),
            ]
            sum_bits.append(bit.sum)
            carry = bit.carry_out

        m.d.comb += [
            self.sum.eq(Cat(*sum_bits)),
            self.carry_out.eq(carry),
        ]

        return m
