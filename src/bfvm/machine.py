## bfvm — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# bfvm — Bytecode virtual machine operating on a fixed-length tape of byte cells.
#

import sys

from .types import OpCode, Instruction, Program, DEFAULT_TAPE_SIZE
from .errors import BfValueError, BfTapeError, BfInputError
from .formatting import show_machine


# Folded Add/Sub counts must stay below this at validation time, even though
# execution itself wraps modulo 256. Runs of 255+ identical `+`/`-` are rejected.
MAX_ARITHMETIC_OPERAND = 255


def _binary(stream):
    return getattr(stream, 'buffer', stream)


class Machine:
    """Owns one program, its tape and cursor; constructed once, run once.

    `stdin` and `stdout` must be binary streams (`read` returns bytes, `write` takes bytes);
    text streams are replaced by their `.buffer` when they have one.
    """

    def __init__(self, program: Program, tape_size: int = DEFAULT_TAPE_SIZE, stdin=None, stdout=None):
        if tape_size < 1:
            raise BfValueError(f"tape size must be at least 1 cell, got {tape_size}")

        self.program: Program = tuple(program)
        self.pc = 0
        self.tape = bytearray(tape_size)
        self.cursor = 0
        self.stdin = stdin
        self.stdout = stdout

        self.verify_program()

    def verify_program(self) -> None:
        for index, (op, data) in enumerate(self.program):
            if op in (OpCode.ADD, OpCode.SUB) and data >= MAX_ARITHMETIC_OPERAND:
                raise BfValueError(f"operand out of range: Add and Sub instructions must have data less than "
                                   f"{MAX_ARITHMETIC_OPERAND}, got {Instruction(op, data)!r} at index {index}")

    @property
    def tape_size(self) -> int:
        return len(self.tape)

    @property
    def cell(self) -> int:
        return self.tape[self.cursor]

    def add(self, amount: int) -> None:
        self.tape[self.cursor] = (self.tape[self.cursor] + amount) & 0xFF

    def sub(self, amount: int) -> None:
        self.tape[self.cursor] = (self.tape[self.cursor] - amount) & 0xFF

    def shift_left(self, amount: int) -> None:
        self.cursor = max(self.cursor - amount, 0)

    def shift_right(self, amount: int) -> None:
        cursor = self.cursor + amount
        if cursor >= len(self.tape):
            size, overflow = len(self.tape), cursor - len(self.tape)
            raise BfTapeError(f"memory overflowed: {size} cells => {overflow} cells",
                              tape_size=size, overflow=overflow)
        self.cursor = cursor

    def output(self, amount: int, stdout) -> None:
        stdout.write(bytes((self.tape[self.cursor],)) * amount)

    def input(self, _: int, stdin, stdout) -> None:
        # A folded Input still reads a single byte, its count is ignored.
        stdout.flush()
        try:
            data = stdin.read(1)
        except OSError as exc:
            raise BfInputError(f"failed to read input: {exc}") from exc
        if not data:
            raise BfInputError("unexpected end of input")
        if not isinstance(data, (bytes, bytearray)):
            raise BfInputError(f"input stream must be binary, read {type(data).__name__} instead of bytes")
        self.tape[self.cursor] = data[0]

    def run(self, verbosity: int = 0, stats: dict | None = None) -> "Machine":
        stdin = _binary(self.stdin if self.stdin is not None else sys.stdin)
        stdout = _binary(self.stdout if self.stdout is not None else sys.stdout)
        program, tape = self.program, self.tape

        step = 0
        try:
            while 0 <= self.pc < len(program):
                op, data = program[self.pc]
                if verbosity > 0:
                    show_machine(step, self, file=sys.stderr)
                step += 1

                match op:
                    case OpCode.ADD:
                        self.add(data)
                    case OpCode.SUB:
                        self.sub(data)
                    case OpCode.SHIFT_LEFT:
                        self.shift_left(data)
                    case OpCode.SHIFT_RIGHT:
                        self.shift_right(data)
                    case OpCode.JUMP_ZERO:
                        if tape[self.cursor] == 0: self.pc = data
                    case OpCode.JUMP_NOT_ZERO:
                        if tape[self.cursor] != 0: self.pc = data
                    case OpCode.OUTPUT:
                        self.output(data, stdout)
                    case OpCode.INPUT:
                        self.input(data, stdin, stdout)
                    case _:
                        raise NotImplementedError(f"unimplemented instruction: {op!r}")

                self.pc += 1
        finally:
            stdout.flush()
            if stats is not None:
                stats['steps'] = stats.get('steps', 0) + step

        return self
