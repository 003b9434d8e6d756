## bfvm — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import lark

from .types import Symbol, Location, Token


GRAMMAR = r"""start: symbol*
?symbol: INCREMENT | DECREMENT | MOVE_LEFT | MOVE_RIGHT | LOOP_START | LOOP_END | INPUT | OUTPUT

// TOKENS
INCREMENT: "+"
DECREMENT: "-"
MOVE_LEFT: "<"
MOVE_RIGHT: ">"
LOOP_START: "["
LOOP_END: "]"
INPUT: ","
OUTPUT: "."

// COMMENTS, any other byte including newlines.
COMMENT: /[^+\-<>\[\],.]+/
%ignore COMMENT
"""

_LEXER = lark.Lark(GRAMMAR, parser="lalr", lexer="basic")


def _as_byte_text(source: str | bytes) -> str:
    # One character per source byte, so that columns count bytes.
    if isinstance(source, str):
        source = source.encode('utf-8')
    return bytes(source).decode('latin-1')


def tokenize(source: str | bytes) -> list[Token]:
    """Scan source into (symbol, location) pairs; every other byte is a comment."""
    return [(tok.type, Location(tok.line, tok.column)) for tok in _LEXER.lex(_as_byte_text(source))]


def symbols(source: str | bytes) -> str:
    """Keep only the recognized symbol characters of the source, in order."""
    return ''.join(ch for ch in _as_byte_text(source) if ch in Symbol.CHARS)
