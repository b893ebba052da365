import sys

from amaranth.cli import main
from amaranth.sim import Simulator

from .core.alu import ALU
from .core.opcodes import Operation

# (a, b, op, reset, enable) presented before each clock edge
DEMO_VECTORS = [
    (0x00, 0x00, Operation.ADD, 1, 0),  # reset
    (0x0F, 0x01, Operation.ADD, 0, 1),
    (0x7F, 0x01, Operation.ADD, 0, 1),  # signed overflow
    (0xAA, 0x03, Operation.ROL, 0, 1),
    (0x50, 0x50, Operation.SUB, 0, 1),  # zero, no borrow
    (0xFF, 0x00, Operation.INC, 0, 1),  # wraps around
    (0x12, 0x34, Operation.XOR, 0, 0),  # disabled: holds previous
    (0x81, 0x02, Operation.SRL, 0, 1),
    (0x55, 0x55, Operation.SUB, 1, 1),  # reset wins over enable
]

PERIOD = 1e-6


def run_demo(vcd_file: str = "alu8.vcd", gtkw_file: str = "alu8.gtkw") -> None:
    dut = ALU()

    async def testbench(ctx):
        for a, b, op, reset, enable in DEMO_VECTORS:
            ctx.set(dut.a, a)
            ctx.set(dut.b, b)
            ctx.set(dut.op, op.value)
            ctx.set(dut.reset, reset)
            ctx.set(dut.enable, enable)
            await ctx.tick()
            print(
                f"{op.name:4} a={a:02x} b={b:02x} rst={reset} en={enable} -> "
                f"result={ctx.get(dut.result):02x} "
                f"C={ctx.get(dut.carry)} Z={ctx.get(dut.zero)} "
                f"S={ctx.get(dut.sign)} P={ctx.get(dut.parity)} "
                f"V={ctx.get(dut.overflow)}"
            )

    sim = Simulator(dut)
    sim.add_clock(PERIOD)
    sim.add_testbench(testbench)
    with sim.write_vcd(
        vcd_file=vcd_file,
        gtkw_file=gtkw_file,
        traces=[
            dut.a,
            dut.b,
            dut.op,
            dut.reset,
            dut.enable,
            dut.result,
            dut.carry,
            dut.zero,
            dut.sign,
            dut.parity,
            dut.overflow,
        ],
    ):
        sim.run()


if __name__ == "__main__":

    if len(sys.argv) > 1 and sys.argv[1] == "demo":
        run_demo()
    else:
        main(ALU())
