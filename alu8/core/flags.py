from amaranth import Module, Signal
from amaranth.lib import wiring
from amaranth.lib.wiring import In, Out

from .opcodes import DATA_WIDTH


class FlagDeriver(wiring.Component):
    value: Signal
    zero: Signal
    sign: Signal
    parity: Signal

    def __init__(self) -> None:
        super().__init__(
            dict(value=In(DATA_WIDTH), zero=Out(1), sign=Out(1), parity=Out(1))
        )

    def elaborate(self, platform) -> Module:
        m = Module()

        m.d.comb += [
            self.zero.eq(self.value == 0),
            self.sign.eq(self.value[-1]),
            # Even number of set bits (0x00 included)
            self.parity.eq(~self.value.xor()),
        ]

        return m
