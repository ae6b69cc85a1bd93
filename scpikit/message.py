"""Detection of program message units and their program data."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Tuple

from .lexer import Lexer, Token, TokenType


class Termination(Enum):
    """What ended a program message unit."""

    NONE = auto()
    SEMICOLON = auto()
    NL = auto()


@dataclass(frozen=True)
class MessageUnit:
    """One program message unit found at the start of a buffer.

    ``header`` and ``data`` hold positions relative to the buffer that was
    scanned; ``consumed`` is the number of characters the unit takes up,
    including its terminator.
    """

    header: Token
    data: Token
    parameter_count: int
    termination: Termination
    consumed: int


def parse_program_data(lexer: Lexer) -> Token:
    """Read one parameter with the whitespace around it and return its token.

    The kind of data is detected in this order: nondecimal number, character
    data, decimal number with an optional suffix, string, arbitrary block and
    expression. An UNKNOWN token is returned when none of them fits.
    """
    lexer.whitespace()

    token = lexer.nondecimal_numeric_data()
    if not token:
        token = lexer.character_program_data()
    if not token:
        token = lexer.decimal_numeric_program_data()
        if token:
            gap = lexer.whitespace()
            suffix = lexer.suffix_program_data()
            if suffix:
                token = Token(
                    TokenType.DECIMAL_NUMERIC_PROGRAM_DATA_WITH_SUFFIX,
                    token.start,
                    token.text + gap.text + suffix.text,
                )
    if not token:
        token = lexer.string_program_data()
    if not token:
        token = lexer.arbitrary_block_program_data()
    if not token:
        token = lexer.program_expression()

    lexer.whitespace()
    return token


def parse_all_program_data(lexer: Lexer) -> Tuple[Token, int]:
    """Skip every comma separated parameter of a command.

    Returns an ALL_PROGRAM_DATA token spanning the parameters and their count.
    When a parameter cannot be read the token is UNKNOWN and the count is -1.
    """
    start = lexer.pos
    count = 0
    while True:
        parameter = parse_program_data(lexer)
        if not parameter:
            return Token(TokenType.UNKNOWN, start), -1
        count += 1
        if not lexer.comma():
            break
    return Token(TokenType.ALL_PROGRAM_DATA, start, lexer.buffer[start:lexer.pos]), count


def detect_program_message_unit(buffer: str) -> MessageUnit:
    """Find the program header, its data and the terminator at the start of ``buffer``.

    A character that cannot start or end a unit is consumed alone and reported
    as an INVALID header of length one.
    """
    lexer = Lexer(buffer)
    parameter_count = 0

    lexer.whitespace()

    header = lexer.program_header()
    if lexer.whitespace():
        data, parameter_count = parse_all_program_data(lexer)
    else:
        data = Token(TokenType.UNKNOWN, lexer.pos)

    terminator = lexer.new_line()
    if not terminator:
        terminator = lexer.semicolon()

    if not lexer.is_eos() and not terminator:
        lexer.pos += 1
        header = Token(
            TokenType.INVALID,
            header.start,
            buffer[header.start:header.start + 1],
        )
        data = Token(TokenType.UNKNOWN, 0)

    if terminator.type is TokenType.SEMICOLON:
        termination = Termination.SEMICOLON
    elif terminator.type is TokenType.NL:
        termination = Termination.NL
    else:
        termination = Termination.NONE

    return MessageUnit(header, data, parameter_count, termination, lexer.pos)