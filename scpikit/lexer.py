"""Tokenizer for SCPI program messages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable

_WHITESPACE = " \t"
_DIGITS = "0123456789"
_HEX_DIGITS = "0123456789abcdefABCDEF"
_OCT_DIGITS = "01234567"
_BIN_DIGITS = "01"
_EXPRESSION_EXCLUDED = "\"#'();"

# Results of the internal skip helpers.
_SKIP_NONE = 0
_SKIP_OK = 1
_SKIP_INCOMPLETE = -1


def _is_alpha(char: str) -> bool:
    return char.isascii() and char.isalpha()


def _is_digit(char: str) -> bool:
    return char != "" and char in _DIGITS


def _is_alnum(char: str) -> bool:
    return char.isascii() and char.isalnum()


def _is_ascii7(char: str) -> bool:
    return ord(char) <= 0x7F


def _is_expression_char(char: str) -> bool:
    return 0x20 <= ord(char) <= 0x7E and char not in _EXPRESSION_EXCLUDED


class TokenType(Enum):
    """Kinds of token the lexer and parser produce."""

    COMMA = auto()
    SEMICOLON = auto()
    COLON = auto()
    SPECIFIC_CHARACTER = auto()
    NL = auto()
    HEXNUM = auto()
    OCTNUM = auto()
    BINNUM = auto()
    PROGRAM_MNEMONIC = auto()
    DECIMAL_NUMERIC_PROGRAM_DATA = auto()
    DECIMAL_NUMERIC_PROGRAM_DATA_WITH_SUFFIX = auto()
    SUFFIX_PROGRAM_DATA = auto()
    ARBITRARY_BLOCK_PROGRAM_DATA = auto()
    SINGLE_QUOTE_PROGRAM_DATA = auto()
    DOUBLE_QUOTE_PROGRAM_DATA = auto()
    PROGRAM_EXPRESSION = auto()
    COMPOUND_PROGRAM_HEADER = auto()
    INCOMPLETE_COMPOUND_PROGRAM_HEADER = auto()
    COMMON_PROGRAM_HEADER = auto()
    INCOMPLETE_COMMON_PROGRAM_HEADER = auto()
    COMPOUND_QUERY_PROGRAM_HEADER = auto()
    COMMON_QUERY_PROGRAM_HEADER = auto()
    WS = auto()
    ALL_PROGRAM_DATA = auto()
    INVALID = auto()
    UNKNOWN = auto()


@dataclass(frozen=True)
class Token:
    """A token: its kind, where it starts in the buffer and its text."""

    type: TokenType
    start: int
    text: str = ""

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def end(self) -> int:
        """Index just past the token in the buffer."""
        return self.start + len(self.text)

    def __bool__(self) -> bool:
        return self.type is not TokenType.UNKNOWN


class Lexer:
    """Scans a buffer; each method reads one kind of token at the current position.

    A method that finds nothing returns an UNKNOWN token of length zero and,
    unless noted, leaves the position where it was.
    """

    def __init__(self, buffer: str) -> None:
        self.buffer = buffer
        self.pos = 0

    # -- helpers -----------------------------------------------------------

    def is_eos(self) -> bool:
        """True when the whole buffer has been consumed."""
        return self.pos >= len(self.buffer)

    def _peek(self) -> str:
        return "" if self.is_eos() else self.buffer[self.pos]

    def _is_chr(self, char: str) -> bool:
        return not self.is_eos() and self.buffer[self.pos] == char

    def _skip_chr(self, char: str) -> int:
        if self._is_chr(char):
            self.pos += 1
            return _SKIP_OK
        return _SKIP_NONE

    def _skip_while(self, predicate: Callable[[str], bool]) -> int:
        start = self.pos
        while not self.is_eos() and predicate(self.buffer[self.pos]):
            self.pos += 1
        return self.pos - start

    def _skip_one(self, predicate: Callable[[str], bool]) -> int:
        if not self.is_eos() and predicate(self.buffer[self.pos]):
            self.pos += 1
            return _SKIP_OK
        return _SKIP_NONE

    def _skip_ws(self) -> int:
        return self._skip_while(lambda c: c in _WHITESPACE)

    def _skip_numbers(self) -> int:
        return self._skip_while(_is_digit)

    def _skip_plusmn(self) -> int:
        return self._skip_one(lambda c: c in "+-")

    def _skip_mnemonic_tail(self) -> None:
        self._skip_while(lambda c: _is_alnum(c) or c == "_")

    def _skip_program_mnemonic(self) -> int:
        """Skip ``[a-z][a-z0-9_]*``; the count is negative when the buffer ran out."""
        start = self.pos
        if _is_alpha(self._peek()):
            self.pos += 1
            self._skip_mnemonic_tail()
        count = self.pos - start
        return -count if self.is_eos() else count

    def _make(self, token_type: TokenType, start: int) -> Token:
        return Token(token_type, start, self.buffer[start:self.pos])

    def _fail(self, start: int) -> Token:
        self.pos = start
        return Token(TokenType.UNKNOWN, start)

    # -- whitespace --------------------------------------------------------

    def whitespace(self) -> Token:
        """Spaces and tabs."""
        start = self.pos
        if self._skip_ws():
            return self._make(TokenType.WS, start)
        return Token(TokenType.UNKNOWN, start)

    # -- program header ----------------------------------------------------

    def _skip_common_program_header(self) -> int:
        if self._skip_chr("*"):
            if self._skip_program_mnemonic() == 0:
                return _SKIP_INCOMPLETE
            return _SKIP_OK
        return _SKIP_NONE

    def _skip_compound_program_header(self) -> int:
        first_colon = self._skip_chr(":")
        res = self._skip_program_mnemonic()
        if res >= _SKIP_OK:
            while self._skip_chr(":"):
                res = self._skip_program_mnemonic()
                if res <= _SKIP_INCOMPLETE:
                    return _SKIP_OK
                if res == _SKIP_NONE:
                    return _SKIP_INCOMPLETE
            return _SKIP_OK
        if res <= _SKIP_INCOMPLETE:
            return _SKIP_OK
        if first_colon:
            return _SKIP_INCOMPLETE
        return _SKIP_NONE

    def program_header(self) -> Token:
        """Common (``*IDN?``) or compound (``:MEAS:VOLT?``) program header."""
        start = self.pos
        token_type = TokenType.UNKNOWN

        res = self._skip_common_program_header()
        if res >= _SKIP_OK:
            if self._skip_chr("?"):
                token_type = TokenType.COMMON_QUERY_PROGRAM_HEADER
            else:
                token_type = TokenType.COMMON_PROGRAM_HEADER
        elif res <= _SKIP_INCOMPLETE:
            token_type = TokenType.INCOMPLETE_COMMON_PROGRAM_HEADER
        else:
            res = self._skip_compound_program_header()
            if res >= _SKIP_OK:
                if self._skip_chr("?"):
                    token_type = TokenType.COMPOUND_QUERY_PROGRAM_HEADER
                else:
                    token_type = TokenType.COMPOUND_PROGRAM_HEADER
            elif res <= _SKIP_INCOMPLETE:
                token_type = TokenType.INCOMPLETE_COMPOUND_PROGRAM_HEADER

        if token_type is TokenType.UNKNOWN:
            return self._fail(start)
        return self._make(token_type, start)

    # -- program data ------------------------------------------------------

    def character_program_data(self) -> Token:
        """Mnemonic data such as ``MAXimum`` or ``ON``."""
        start = self.pos
        if _is_alpha(self._peek()):
            self.pos += 1
            self._skip_mnemonic_tail()
        if self.pos > start:
            return self._make(TokenType.PROGRAM_MNEMONIC, start)
        return Token(TokenType.UNKNOWN, start)

    def _skip_mantissa(self) -> int:
        self._skip_plusmn()
        count = self._skip_numbers()
        if self._skip_chr("."):
            count += self._skip_numbers()
        return count

    def _skip_exponent(self) -> int:
        if self._peek() in ("e", "E") and not self.is_eos():
            self.pos += 1
            self._skip_ws()
            self._skip_plusmn()
            return self._skip_numbers()
        return 0

    def decimal_numeric_program_data(self) -> Token:
        """Decimal number with optional fraction and exponent."""
        start = self.pos
        if self._skip_mantissa():
            rollback = self.pos
            self._skip_ws()
            if not self._skip_exponent():
                self.pos = rollback
        else:
            self.pos = start
        if self.pos > start:
            return self._make(TokenType.DECIMAL_NUMERIC_PROGRAM_DATA, start)
        return Token(TokenType.UNKNOWN, start)

    def _skip_suffix_element(self) -> None:
        self._skip_chr("-")
        self._skip_one(_is_digit)

    def suffix_program_data(self) -> Token:
        """Unit suffix such as ``mV`` or ``m/s``."""
        start = self.pos
        self._skip_chr("/")
        if self._skip_while(_is_alpha):
            self._skip_suffix_element()
            while self._skip_one(lambda c: c in "/."):
                self._skip_while(_is_alpha)
                self._skip_suffix_element()
        if self.pos > start:
            return self._make(TokenType.SUFFIX_PROGRAM_DATA, start)
        return self._fail(start)

    def nondecimal_numeric_data(self) -> Token:
        """``#H``, ``#Q`` or ``#B`` number; the token text holds only the digits."""
        start = self.pos
        count = 0
        token_type = TokenType.UNKNOWN
        if self._skip_chr("#") and not self.is_eos():
            marker = self.buffer[self.pos].upper()
            kinds = {
                "H": (_HEX_DIGITS, TokenType.HEXNUM),
                "Q": (_OCT_DIGITS, TokenType.OCTNUM),
                "B": (_BIN_DIGITS, TokenType.BINNUM),
            }
            if marker in kinds:
                digits, token_type = kinds[marker]
                self.pos += 1
                count = self._skip_while(lambda c: c in digits)
        if count:
            return self._make(token_type, start + 2)
        return self._fail(start)

    def _skip_quoted(self, quote: str) -> None:
        while not self.is_eos():
            char = self.buffer[self.pos]
            if _is_ascii7(char) and char != quote:
                self.pos += 1
            elif char == quote:
                self.pos += 1
                if self._is_chr(quote):
                    self.pos += 1
                else:
                    self.pos -= 1
                    break
            else:
                break

    def string_program_data(self) -> Token:
        """Quoted string; the token text keeps the quotes and doubled quotes."""
        start = self.pos
        kinds = {
            '"': TokenType.DOUBLE_QUOTE_PROGRAM_DATA,
            "'": TokenType.SINGLE_QUOTE_PROGRAM_DATA,
        }
        quote = self._peek()
        if quote in kinds and quote:
            self.pos += 1
            self._skip_quoted(quote)
            if self._is_chr(quote):
                self.pos += 1
                return self._make(kinds[quote], start)
        return self._fail(start)

    def arbitrary_block_program_data(self) -> Token:
        """Definite length block ``#<n><length><data>``; the token text is the data.

        An incomplete block consumes the rest of the buffer and yields UNKNOWN;
        an invalid one leaves the position unchanged.
        """
        start = self.pos
        valid = -1
        block_start = start
        block_length = 0

        if self._skip_chr("#"):
            char = self._peek()
            if _is_digit(char) and char != "0":
                remaining = int(char)
                self.pos += 1
                while remaining > 0 and _is_digit(self._peek()):
                    block_length = block_length * 10 + int(self.buffer[self.pos])
                    self.pos += 1
                    remaining -= 1
                if remaining == 0:
                    block_start = self.pos
                    self.pos += block_length
                    valid = 1 if self.pos <= len(self.buffer) else 0
                elif self.is_eos():
                    valid = 0
            elif self.is_eos():
                valid = 0

        if valid == 1:
            return self._make(TokenType.ARBITRARY_BLOCK_PROGRAM_DATA, block_start)
        if valid == 0:
            self.pos = len(self.buffer)
            return Token(TokenType.UNKNOWN, start)
        return self._fail(start)

    def program_expression(self) -> Token:
        """Parenthesised expression such as ``(@1:3)``."""
        start = self.pos
        if self._skip_chr("("):
            self._skip_while(_is_expression_char)
            if self._skip_chr(")"):
                return self._make(TokenType.PROGRAM_EXPRESSION, start)
        return self._fail(start)

    # -- separators --------------------------------------------------------

    def _single(self, char: str, token_type: TokenType) -> Token:
        start = self.pos
        if self._skip_chr(char):
            return self._make(token_type, start)
        return Token(TokenType.UNKNOWN, start)

    def comma(self) -> Token:
        return self._single(",", TokenType.COMMA)

    def semicolon(self) -> Token:
        return self._single(";", TokenType.SEMICOLON)

    def colon(self) -> Token:
        return self._single(":", TokenType.COLON)

    def specific_character(self, char: str) -> Token:
        """Exactly the character ``char``."""
        return self._single(char, TokenType.SPECIFIC_CHARACTER)

    def new_line(self) -> Token:
        """``\\r``, ``\\n`` or ``\\r\\n``."""
        start = self.pos
        self._skip_chr("\r")
        self._skip_chr("\n")
        if self.pos > start:
            return self._make(TokenType.NL, start)
        return self._fail(start)