from amaranth import Module, Signal
from amaranth.lib import wiring
from amaranth.lib.wiring import In, Out

from .adder import ByteAdder
from .dispatcher import OperationDispatcher
from .flags import FlagDeriver
from .opcodes import DATA_WIDTH, OPCODE_WIDTH
from .state_register import StateRegister


class ALU(wiring.Component):
    a: Signal
    b: Signal
    op: Signal
    reset: Signal
    enable: Signal
    result: Signal
    carry: Signal
    zero: Signal
    sign: Signal
    parity: Signal
    overflow: Signal

    def __init__(self) -> None:
        self.adder = ByteAdder(DATA_WIDTH)
        self.subtractor = ByteAdder(DATA_WIDTH)
        self.dispatcher = OperationDispatcher()
        self.flags = FlagDeriver()
        self.state = StateRegister()

        super().__init__(
            dict(
                a=In(DATA_WIDTH),
                b=In(DATA_WIDTH),
                op=In(OPCODE_WIDTH),
                reset=In(1),
                enable=In(1),
                result=Out(DATA_WIDTH),
                carry=Out(1),
                zero=Out(1),
                sign=Out(1),
                parity=Out(1),
                overflow=Out(1),
            )
        )

    def elaborate(self, platform) -> Module:
        m = Module()

        # Define submodules
        for component_name in ("adder", "subtractor", "dispatcher", "flags", "state"):
            m.submodules[component_name] = getattr(self, component_name)

        adder, subtractor = self.adder, self.subtractor
        dispatcher, flags, state = self.dispatcher, self.flags, self.state

        # A + B
        m.d.comb += [
            adder.a.eq(self.a),
            adder.b.eq(self.b),
            adder.carry_in.eq(0),
        ]
        # A - B == A + ~B + 1
        m.d.comb += [
            subtractor.a.eq(self.a),
            subtractor.b.eq(~self.b),
            subtractor.carry_in.eq(1),
        ]

        m.d.comb += [
            dispatcher.a.eq(self.a),
            dispatcher.b.eq(self.b),
            dispatcher.op.eq(self.op),
            dispatcher.add_sum.eq(adder.sum),
            dispatcher.add_carry.eq(adder.carry_out),
            dispatcher.sub_sum.eq(subtractor.sum),
            dispatcher.sub_carry.eq(subtractor.carry_out),
        ]

        m.d.comb += flags.value.eq(dispatcher.result)

        # Candidate next state into the register
        m.d.comb += [
            state.reset.eq(self.reset),
            state.enable.eq(self.enable),
            state.next_result.eq(dispatcher.result),
            state.next_carry.eq(dispatcher.carry),
            state.next_zero.eq(flags.zero),
            state.next_sign.eq(flags.sign),
            state.next_parity.eq(flags.parity),
            state.next_overflow.eq(dispatcher.overflow),
        ]

        # Connect outputs
        m.d.comb += [
            self.result.eq(state.result),
            self.carry.eq(state.carry),
            self.zero.eq(state.zero),
            self.sign.eq(state.sign),
            self.parity.eq(state.parity),
            self.overflow.eq(state.overflow),
        ]

        return m
