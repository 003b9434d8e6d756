## bfvm — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import sys
from collections import namedtuple


DEFAULT_TAPE_SIZE = 30_000

# Operand of a JumpIfZero before its matching bracket has been seen.
UNRESOLVED = sys.maxsize


class Symbol:
    """Terminal names produced by the lexer, one per recognized source byte."""
    INCREMENT = 'INCREMENT'
    DECREMENT = 'DECREMENT'
    MOVE_LEFT = 'MOVE_LEFT'
    MOVE_RIGHT = 'MOVE_RIGHT'
    LOOP_START = 'LOOP_START'
    LOOP_END = 'LOOP_END'
    INPUT = 'INPUT'
    OUTPUT = 'OUTPUT'

    CHARS = {
        '+': INCREMENT, '-': DECREMENT,
        '<': MOVE_LEFT, '>': MOVE_RIGHT,
        '[': LOOP_START, ']': LOOP_END,
        ',': INPUT, '.': OUTPUT,
    }


# Position right after scanning a byte: line starts at 1, column at 0.
class Location(namedtuple('Location', ['line', 'column'])):
    __slots__ = ()

    def __str__(self):
        return f"{self.line}:{self.column}"


Token = tuple[str, Location]


class OpCode:
    ADD = 1
    SUB = 2
    SHIFT_LEFT = 3
    SHIFT_RIGHT = 4
    JUMP_ZERO = 5
    JUMP_NOT_ZERO = 6
    INPUT = 7
    OUTPUT = 8

    NAMES = {
        ADD: 'Add', SUB: 'Sub',
        SHIFT_LEFT: 'ShiftLeft', SHIFT_RIGHT: 'ShiftRight',
        JUMP_ZERO: 'JumpIfZero', JUMP_NOT_ZERO: 'JumpIfNonZero',
        INPUT: 'Input', OUTPUT: 'Output',
    }

    FROM_SYMBOL = {
        Symbol.INCREMENT: ADD, Symbol.DECREMENT: SUB,
        Symbol.MOVE_LEFT: SHIFT_LEFT, Symbol.MOVE_RIGHT: SHIFT_RIGHT,
        Symbol.LOOP_START: JUMP_ZERO, Symbol.LOOP_END: JUMP_NOT_ZERO,
        Symbol.INPUT: INPUT, Symbol.OUTPUT: OUTPUT,
    }


class Instruction(namedtuple('Instruction', ['op', 'data'])):
    """Single bytecode instruction; `data` is a repeat count, or a jump target for brackets."""
    __slots__ = ()

    @classmethod
    def from_symbol(cls, symbol: str, data: int) -> "Instruction":
        return cls(OpCode.FROM_SYMBOL[symbol], data)

    @property
    def name(self) -> str:
        return OpCode.NAMES[self.op]

    def __repr__(self):
        return f"{self.name}({self.data})"

    def __str__(self):
        return f"{self.name:14} {self.data}"


Program = tuple[Instruction, ...]
