## bfvm — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
import sys

from .types import Program


def format_program(program: Program) -> str:
    """Disassembly listing, one `index  name  data` row per instruction."""
    width = len(str(max(len(program) - 1, 0)))
    return ''.join(f"\033[90m{i:>{width}} :\033[0m  {inst}\n" for i, inst in enumerate(program))


def format_tape(tape: bytes, cursor: int, radius: int = 4) -> str:
    start, finish = max(0, cursor - radius), min(len(tape), cursor + radius + 1)
    cells = [f"\033[1;97m[{tape[i]}]\033[0m" if i == cursor else str(tape[i]) for i in range(start, finish)]
    lhs = '… ' if start > 0 else ''
    rhs = ' …' if finish < len(tape) else ''
    return lhs + ' '.join(cells) + rhs


def show_machine(step: int, machine, file=sys.stderr) -> None:
    inst = machine.program[machine.pc]
    print(f"\033[90m{step:>5} :\033[0m  {machine.pc:>5}  {inst!r:<20} "
          f"\033[90m@{machine.cursor}\033[0m  {format_tape(machine.tape, machine.cursor)}", file=file)


def format_parse_error_context(filename: str, line: int, column: int, token: str, source: str | bytes) -> str:
    """Show up to two lines either side of `line`, with the byte at `column` highlighted."""
    if isinstance(source, bytes):
        source = source.decode('latin-1')
    lines = [text.rstrip('\r') for text in source.split('\n')]
    first, last = max(1, line - 2), min(len(lines), line + 2)
    result = [f"\033[97m  File \"{filename}\", line {line}\033[0m"]

    for number in range(first, last + 1):
        text = lines[number - 1]
        if number != line:
            result.append(f"\033[90m{number:>5} |\033[0m {text}")
            continue
        if 0 < column <= len(text):
            start, finish = column - 1, column - 1 + len(token)
            text = f"{text[:start]}\033[48;5;30m\033[1;97m{text[start:finish]}\033[0m{text[finish:]}"
        result.append(f"\033[97m{number:>5} |\033[0m {text}")
    return '\n' + '\n'.join(result) + '\n'


def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))


def format_statistics(stats: dict) -> str:
    rows = [f"\n\033[97m\033[48;5;30m STATISTICS. \033[0m"]
    for key, value in stats.items():
        text = f"{value:.3f}s" if isinstance(value, float) else f"{value:,}"
        rows.append(f"{key:<14}\033[97m{text}\033[0m")
    return '\n'.join(rows)
