## bfvm — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# bfvm — Single-pass compiler from tokens to bytecode for the virtual machine.
#

from .types import Symbol, Location, Token, Instruction, Program, UNRESOLVED
from .errors import BfParseError, BfIncompleteParse
from .lexer import tokenize


class Compiler:
    """Folds runs of identical symbols and resolves brackets into absolute jump targets."""

    def __init__(self, tokens: list[Token], filename: str | None = None):
        self.tokens = tokens
        self.filename = filename
        self.pos = 0
        self.open_loops: list[tuple[Location, int]] = []
        self.count = 0
        self.program: list[Instruction] = []

    def compile(self) -> Program:
        # Instructions must be appended one at a time; closing a loop patches an earlier one.
        while (instruction := self.emit_instruction()) is not None:
            self.program.append(instruction)
            self.count += 1
        return tuple(self.program)

    def next_token(self) -> Token | None:
        if self.pos >= len(self.tokens): return None
        self.pos += 1
        return self.tokens[self.pos - 1]

    def peek_symbol(self) -> str | None:
        return self.tokens[self.pos][0] if self.pos < len(self.tokens) else None

    def emit_instruction(self) -> Instruction | None:
        if (token := self.next_token()) is None:
            if self.open_loops:
                raise self._unclosed_error()
            return None

        symbol, location = token
        match symbol:
            case Symbol.LOOP_START:
                data = self.open_loop(location)
            case Symbol.LOOP_END:
                data = self.close_loop(location)
            case _:
                data = self.count_run(symbol)
        return Instruction.from_symbol(symbol, data)

    def count_run(self, symbol: str) -> int:
        counter = 1
        while self.peek_symbol() == symbol:
            counter += 1
            self.pos += 1
        return counter

    def open_loop(self, location: Location) -> int:
        self.open_loops.append((location, self.count))
        return UNRESOLVED

    def close_loop(self, location: Location) -> int:
        if not self.open_loops:
            raise BfParseError(f"unexpected closing delimiter ']' at {location}", filename=self.filename,
                               line=location.line, column=location.column, token=']')

        _, start = self.open_loops.pop()
        self.program[start] = self.program[start]._replace(data=self.count)
        return start

    def _unclosed_error(self) -> BfIncompleteParse:
        location, _ = self.open_loops[-1]
        remaining = len(self.open_loops)
        extra = f" There are {remaining} unclosed delimiters." if remaining > 1 else ""
        return BfIncompleteParse(f"unclosed delimiter '[' at {location}.{extra}", filename=self.filename,
                                 line=location.line, column=location.column, token='[', unclosed=remaining)


def compile_tokens(tokens: list[Token], filename: str | None = None) -> Program:
    return Compiler(tokens, filename=filename).compile()


def compile_source(source: str | bytes, filename: str | None = None) -> Program:
    return compile_tokens(tokenize(source), filename=filename)
