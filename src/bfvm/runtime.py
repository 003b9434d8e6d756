## bfvm — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .types import Token, Program, DEFAULT_TAPE_SIZE
from .lexer import tokenize
from .compiler import compile_tokens
from .machine import Machine
from .formatting import format_program


class Runtime:
    """Minimal runtime facade focused on embedding."""

    def __init__(self, tape_size: int = DEFAULT_TAPE_SIZE):
        self.tape_size = tape_size

    # Compilation ─────────────────────────────────────────────────────────────────────────────
    def tokenize(self, source: str | bytes) -> list[Token]:
        return tokenize(source)

    def compile(self, source: str | bytes, filename: str | None = None) -> Program:
        return compile_tokens(tokenize(source), filename=filename)

    def disassemble(self, source: str | bytes, filename: str | None = None) -> str:
        return format_program(self.compile(source, filename=filename))

    # Execution ───────────────────────────────────────────────────────────────────────────────
    def load(self, source: str | bytes, filename: str | None = None, stdin=None, stdout=None,
             tape_size: int | None = None) -> Machine:
        program = self.compile(source, filename=filename)
        return Machine(program, tape_size=self.tape_size if tape_size is None else tape_size, stdin=stdin, stdout=stdout)

    def run(self, source: str | bytes, filename: str | None = None, stdin=None, stdout=None,
            tape_size: int | None = None, verbosity: int = 0, stats: dict | None = None) -> Machine:
        machine = self.load(source, filename=filename, stdin=stdin, stdout=stdout, tape_size=tape_size)
        return machine.run(verbosity=verbosity, stats=stats)
