"""Matching of command headers against patterns such as ``[:MEASure]:VOLTage:DC?``."""

from __future__ import annotations

import string
from typing import List, Optional, Tuple

from .convert import str_to_int

_C_WHITESPACE = " \t\n\v\f\r"
_DIGITS = "0123456789"
_PATTERN_SEPARATORS = "?:[]"
_COMMAND_SEPARATORS = ":?"
_FOLD = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def _fold(text: str) -> str:
    """Lower-case ASCII letters only."""
    return text.translate(_FOLD)


def _until_nul(text: str) -> str:
    return text.split("\0", 1)[0]


def _first_of(text: str, chars: str) -> int:
    """Index of the first character of ``text`` found in ``chars``, or its length."""
    return next((i for i, c in enumerate(text) if c in chars), len(text))


def _short_form_length(pattern: str) -> int:
    """Length of the upper-case short form of a mnemonic pattern."""
    return next(
        (i for i, c in enumerate(pattern) if c.isascii() and c.islower()),
        len(pattern),
    )


def compare_str(first: str, second: str) -> bool:
    """True when both strings have the same length and match ignoring ASCII case."""
    return len(first) == len(second) and _fold(first) == _fold(second)


def compare_str_and_num(
    pattern: str, text: str, want_number: bool = False
) -> Tuple[bool, Optional[int]]:
    """Match ``text`` against ``pattern`` followed by an optional number.

    Returns whether it matched and the number. Without ``want_number`` only
    plain digits may follow and no number is returned. With it, the rest is
    read as a signed 32 bit integer; the number is None when nothing follows.
    """
    length = len(pattern)
    if len(text) < length or _fold(text[:length]) != _fold(pattern):
        return False, None

    rest = text[length:]
    if not want_number:
        return all(c in _DIGITS for c in rest), None
    if not rest:
        return True, None
    try:
        value, used = str_to_int(rest, 10, True, 32)
    except ValueError:
        return False, None
    if used != len(rest):
        return False, None
    return True, value


def skip_whitespace(text: str) -> int:
    """Number of whitespace characters at the start of ``text``."""
    return next((i for i, c in enumerate(text) if c not in _C_WHITESPACE), len(text))


def _match_pattern(
    pattern: str, text: str, want_number: bool
) -> Tuple[bool, Optional[int]]:
    if pattern.endswith("#"):
        base = pattern[:-1]
        matched, number = compare_str_and_num(base, text, want_number)
        if matched:
            return matched, number
        return compare_str_and_num(base[:_short_form_length(base)], text, want_number)
    short = pattern[:_short_form_length(pattern)]
    return compare_str(pattern, text) or compare_str(short, text), None


def match_pattern(pattern: str, text: str) -> bool:
    """Match one mnemonic in long or short form, e.g. ``MEASure`` or ``CHANnel#``."""
    return _match_pattern(pattern, text, False)[0]


def match_command(
    pattern: str, command: str, numbers_len: int = 0, default: int = 0
) -> Optional[List[int]]:
    """Match a whole command header against a pattern.

    Returns None when the command does not match. On a match returns a list of
    ``numbers_len`` integers: the numeric suffixes of the ``#`` mnemonics in
    pattern order, ``default`` where a suffix is absent or not present at all.
    An empty list still means a match; test the result with ``is not None``.
    """
    numbers = [default] * max(numbers_len, 0)
    pattern = _until_nul(pattern)
    cmd = _until_nul(command)

    if pattern.endswith("?"):
        if not cmd.endswith("?"):
            return None
        pattern = pattern[:-1]
        cmd = cmd[:-1]

    brackets = 0
    if pattern.startswith("["):
        pattern = pattern[1:]
        brackets += 1
    if pattern.startswith(":"):
        pattern = pattern[1:]

    if cmd.startswith(":") and len(cmd) >= 2:
        if cmd[1] == "*":
            return None
        cmd = cmd[1:]

    number_index = 0
    while True:
        pattern_sep = _first_of(pattern, _PATTERN_SEPARATORS)
        cmd_sep = _first_of(cmd, _COMMAND_SEPARATORS)

        slot: Optional[int] = None
        if pattern_sep > 0 and pattern[pattern_sep - 1] == "#":
            if number_index < len(numbers):
                slot = number_index
            number_index += 1

        matched, number = _match_pattern(
            pattern[:pattern_sep], cmd[:cmd_sep], slot is not None
        )
        if matched:
            if slot is not None and number is not None:
                numbers[slot] = number
            pattern = pattern[pattern_sep:]
            cmd = cmd[cmd_sep:]

            if not pattern:
                return numbers if not cmd else None

            if not cmd:
                # Everything left in the pattern has to be optional.
                while pattern:
                    pattern_sep = _first_of(pattern, _PATTERN_SEPARATORS)
                    separator = pattern[pattern_sep] if pattern_sep < len(pattern) else ""
                    if separator == "[":
                        brackets += 1
                    elif separator == "]":
                        brackets -= 1
                    pattern = pattern[pattern_sep + 1:]
                    if brackets == 0 and not pattern.startswith("["):
                        break
                return numbers if not pattern else None

            if pattern[0] == ":" and cmd[0] == ":":
                pattern = pattern[1:]
                cmd = cmd[1:]
            elif cmd[0] == ":" and pattern.startswith("[:"):
                pattern = pattern[2:]
                cmd = cmd[1:]
                brackets += 1
            elif cmd[0] == ":" and pattern.startswith("]:"):
                pattern = pattern[2:]
                cmd = cmd[1:]
                brackets -= 1
            elif cmd[0] == ":" and pattern.startswith("][:"):
                pattern = pattern[3:]
                cmd = cmd[1:]
            else:
                return None
        else:
            pattern = pattern[pattern_sep:]
            if pattern.startswith("]:"):
                pattern = pattern[2:]
                brackets -= 1
            elif pattern.startswith("][:"):
                pattern = pattern[3:]
            else:
                return None


def compose_compound_command(prev: str, current: str) -> str:
    """Prefix ``current`` with the path of the previous command in the same message.

    ``MEAS:VOLT:DC?`` followed by ``AC?`` gives ``MEAS:VOLT:AC?``. Common
    commands, rooted commands and a previous command without a path are left
    alone. Raises ValueError when ``current`` is empty.
    """
    if not current:
        raise ValueError("current command is empty")
    if not prev:
        return current
    if current[0] in "*:":
        return current
    if prev[0] == "*":
        return current
    cut = prev.rfind(":") + 1
    if cut == 0:
        return current
    return prev[:cut] + current