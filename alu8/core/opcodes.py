from amaranth.lib import enum

DATA_WIDTH = 8
OPCODE_WIDTH = 4
SHIFT_AMOUNT_BITS = 3  # shift/rotate amount comes from B[0:3]

assert (1 << SHIFT_AMOUNT_BITS) == DATA_WIDTH  # amounts wrap modulo the data width


class Operation(enum.Enum, shape=OPCODE_WIDTH):
    # Encoding is fixed; 0b1111 is left undefined and yields all zeros.
    ADD = 0
    SUB = 1
    AND = 2
    OR = 3
    XOR = 4
    NAND = 5
    NOR = 6
    XNOR = 7
    NOT = 8
    INC = 9
    DEC = 10
    SLL = 11
    SRL = 12
    ROL = 13
    ROR = 14


UNDEFINED_OPCODE = 0b1111
