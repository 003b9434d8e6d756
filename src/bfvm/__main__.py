## bfvm — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# bfvm — A bytecode compiler and virtual machine for the eight-symbol tape language.
#

import sys
import time
from dataclasses import dataclass

import click

from .types import DEFAULT_TAPE_SIZE
from .errors import BfError, BfParseError
from .machine import Machine
from .runtime import Runtime
from .formatting import format_parse_error_context, format_program, format_statistics, write_without_ansi


@dataclass(frozen=True)
class RuntimeConfig:
    tape_size: int
    verbose: int
    stats: bool
    plain: bool
    disassemble: bool


class BfRunner:
    def __init__(self, config: RuntimeConfig):
        self.config = config
        self.runtime = Runtime(tape_size=config.tape_size)
        self.stats = {} if config.stats else None
        self.failure = False

        if config.plain:
            sys.stderr.write = write_without_ansi(sys.stderr.write)

    def _echo(self, text: str, err: bool = True) -> None:
        click.echo(text, err=err, color=False if self.config.plain else None)

    def _fatal_error(self, message: str, context: str = '') -> None:
        self._echo(f"\033[1;31merror:\033[0m {message}{context}")
        self.failure = True

    def _handle_exception(self, exc: BfError, filename: str, source: bytes) -> None:
        if isinstance(exc, BfParseError) and exc.line is not None:
            context = format_parse_error_context(filename, exc.line, exc.column, exc.token, source=source)
            self._fatal_error(str(exc), context)
        else:
            self._fatal_error(str(exc))

    def execute(self, source: bytes, filename: str) -> None:
        try:
            start = time.perf_counter()
            program = self.runtime.compile(source, filename=filename)
            if self.config.disassemble:
                self._echo(format_program(program), err=False)
                return

            machine = Machine(program, tape_size=self.config.tape_size)
            compiled = time.perf_counter()
            if self.stats is not None:
                self.stats.update({'instructions': len(program), 'compile': compiled - start})

            machine.run(verbosity=self.config.verbose, stats=self.stats)
            if self.stats is not None:
                self.stats['run'] = time.perf_counter() - compiled
        except BfError as exc:
            self._handle_exception(exc, filename, source)

    def finalize(self) -> int:
        if self.stats:
            self._echo(format_statistics(self.stats))
        return 1 if self.failure else 0


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.argument('script', type=click.File('rb'))
@click.option('--tape-size', '-t', default=DEFAULT_TAPE_SIZE, show_default=True, envvar='BFVM_TAPE_SIZE',
              type=click.IntRange(min=1), help='Number of byte cells on the tape.')
@click.option('--verbose', '-v', default=0, count=True, help='Trace every instruction to stderr.')
@click.option('--stats', is_flag=True, help='Display compile/run timings and number of steps.')
@click.option('--disassemble', '-d', is_flag=True, help='Print the compiled program instead of running it.')
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes from diagnostics.')
@click.pass_context
def cli(ctx: click.Context, script, tape_size: int, verbose: int, stats: bool, disassemble: bool, plain: bool) -> None:
    """Compile and run the program in SCRIPT, or `-` to read it from stdin."""
    config = RuntimeConfig(tape_size=tape_size, verbose=verbose, stats=stats, plain=plain, disassemble=disassemble)
    runner = BfRunner(config)
    runner.execute(script.read(), getattr(script, 'name', None) or '<STDIN>')
    ctx.exit(runner.finalize())


def main(argv: list[str] | None = None) -> None:
    cli.main(args=argv, prog_name='bfvm')


if __name__ == "__main__":
    main()
