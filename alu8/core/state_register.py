from amaranth import Module, Mux, Signal
from amaranth.lib import wiring
from amaranth.lib.wiring import In, Out, Flow

from .opcodes import DATA_WIDTH

# Registered fields of the ALU state, with their widths
STATE_FIELDS = dict(
    result=DATA_WIDTH,
    carry=1,
    zero=1,
    sign=1,
    parity=1,
    overflow=1,
)


class StateRegister(wiring.Component):
    """
    Holds the visible ALU state (result + flags).

    On each clock edge the state is cleared when `reset` is asserted, otherwise it
    latches the `next_*` inputs when `enable` is asserted, and holds when it isn't.
    Reset also forces the outputs to zero straight away, without waiting for the
    edge.
    """

    reset: Signal
    enable: Signal

    def __init__(self) -> None:
        self.held = {
            name: Signal(width, name=f"held_{name}")
            for name, width in STATE_FIELDS.items()
        }
        super().__init__(self.get_ports())

    def get_ports(self) -> dict[str, Flow]:
        ports = dict(reset=In(1), enable=In(1))
        for name, width in STATE_FIELDS.items():
            ports[f"next_{name}"] = In(width)
            ports[name] = Out(width)
        return ports

    def elaborate(self, platform) -> Module:
        m = Module()

        # Update. Reset wins over enable; when disabled nothing is written
        with m.If(self.reset):
            m.d.sync += [held.eq(0) for held in self.held.values()]
        with m.Elif(self.enable):
            m.d.sync += [
                held.eq(getattr(self, f"next_{name}"))
                for name, held in self.held.items()
            ]

        # Read
        for name, held in self.held.items():
            m.d.comb += getattr(self, name).eq(Mux(self.reset, 0, held))

        return m
