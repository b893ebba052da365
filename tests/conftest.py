import pytest
from amaranth.sim import Simulator

PERIOD = 1e-6

# Operand values that cover sign boundaries, carries and all-ones/all-zeros
INTERESTING = [0x00, 0x01, 0x02, 0x0F, 0x10, 0x55, 0x7E, 0x7F, 0x80, 0x81, 0xAA, 0xF0, 0xFE, 0xFF]


def run_simulation(dut, testbench, clocked: bool = False) -> None:
    sim = Simulator(dut)
    if clocked:
        sim.add_clock(PERIOD)
    sim.add_testbench(testbench)
    sim.run()


@pytest.fixture
def simulate():
    return run_simulation


@pytest.fixture
def operands():
    return INTERESTING
