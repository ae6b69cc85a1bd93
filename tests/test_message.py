import pytest

from scpikit.lexer import Lexer, TokenType
from scpikit.message import (
    MessageUnit,
    Termination,
    detect_program_message_unit,
    parse_all_program_data,
    parse_program_data,
)


@pytest.mark.parametrize(
    "text, token_type, token_text",
    [
        ("#H1F", TokenType.HEXNUM, "1F"),
        ("#Q17", TokenType.OCTNUM, "17"),
        ("#B101", TokenType.BINNUM, "101"),
        ("ON", TokenType.PROGRAM_MNEMONIC, "ON"),
        ("1.5e3", TokenType.DECIMAL_NUMERIC_PROGRAM_DATA, "1.5e3"),
        ("'ab''c'", TokenType.SINGLE_QUOTE_PROGRAM_DATA, "'ab''c'"),
        ('"xy"', TokenType.DOUBLE_QUOTE_PROGRAM_DATA, '"xy"'),
        ("#15hello", TokenType.ARBITRARY_BLOCK_PROGRAM_DATA, "hello"),
        ("(@1:3)", TokenType.PROGRAM_EXPRESSION, "(@1:3)"),
    ],
)
def test_parse_program_data_kinds(text, token_type, token_text):
    lexer = Lexer(text)
    token = parse_program_data(lexer)
    assert token.type is token_type
    assert token.text == token_text
    assert lexer.is_eos()


def test_parse_program_data_with_suffix_and_whitespace():
    text = " 10 mV "
    lexer = Lexer(text)
    token = parse_program_data(lexer)
    assert token.type is TokenType.DECIMAL_NUMERIC_PROGRAM_DATA_WITH_SUFFIX
    assert token.text == "10 mV"
    assert lexer.pos == len(text)


def test_parse_program_data_unknown():
    lexer = Lexer(",")
    token = parse_program_data(lexer)
    assert token.type is TokenType.UNKNOWN
    assert lexer.pos == 0


def test_parse_all_program_data_counts_parameters():
    text = "1, ON ,'x'"
    lexer = Lexer(text)
    token, count = parse_all_program_data(lexer)
    assert token.type is TokenType.ALL_PROGRAM_DATA
    assert token.text == text
    assert count == 3


def test_parse_all_program_data_stops_at_semicolon():
    lexer = Lexer("1,2;NEXT")
    token, count = parse_all_program_data(lexer)
    assert token.text == "1,2"
    assert count == 2
    assert lexer.buffer[lexer.pos] == ";"


def test_parse_all_program_data_trailing_comma_is_error():
    lexer = Lexer("1,")
    token, count = parse_all_program_data(lexer)
    assert token.type is TokenType.UNKNOWN
    assert token.text == ""
    assert count == -1


def test_detect_common_query():
    text = "*IDN?\n"
    unit = detect_program_message_unit(text)
    assert isinstance(unit, MessageUnit)
    assert unit.header.type is TokenType.COMMON_QUERY_PROGRAM_HEADER
    assert unit.header.text == "*IDN?"
    assert unit.data.type is TokenType.UNKNOWN
    assert unit.parameter_count == 0
    assert unit.termination is Termination.NL
    assert unit.consumed == len(text)


def test_detect_compound_query_crlf():
    text = "MEAS:VOLT?\r\n"
    unit = detect_program_message_unit(text)
    assert unit.header.type is TokenType.COMPOUND_QUERY_PROGRAM_HEADER
    assert unit.header.text == "MEAS:VOLT?"
    assert unit.termination is Termination.NL
    assert unit.consumed == len(text)


def test_detect_command_with_parameters_and_semicolon():
    first = "VOLT 1,2;"
    unit = detect_program_message_unit(first + "CURR 3\n")
    assert unit.header.type is TokenType.COMPOUND_PROGRAM_HEADER
    assert unit.header.text == "VOLT"
    assert unit.data.text == "1,2"
    assert unit.parameter_count == 2
    assert unit.termination is Termination.SEMICOLON
    assert unit.consumed == len(first)


def test_detect_units_cover_whole_message():
    message = "SYST:ERR?;:VOLT 5 V;*RST\n"
    headers = []
    rest = message
    while rest:
        unit = detect_program_message_unit(rest)
        assert unit.consumed > 0
        headers.append(unit.header.text)
        rest = rest[unit.consumed:]
    assert headers == ["SYST:ERR?", ":VOLT", "*RST"]


def test_detect_leading_whitespace_skipped():
    unit = detect_program_message_unit("  *RST")
    assert unit.header.text == "*RST"
    assert unit.header.start == 2
    assert unit.termination is Termination.NONE


def test_detect_invalid_character():
    unit = detect_program_message_unit("\x01abc")
    assert unit.header.type is TokenType.INVALID
    assert unit.header.length == 1
    assert unit.data.type is TokenType.UNKNOWN
    assert unit.consumed == 1
    assert unit.termination is Termination.NONE


def test_detect_empty_buffer():
    unit = detect_program_message_unit("")
    assert unit.header.type is TokenType.UNKNOWN
    assert unit.termination is Termination.NONE
    assert unit.consumed == 0


def test_detect_incomplete_common_header():
    unit = detect_program_message_unit("*")
    assert unit.header.type is TokenType.INCOMPLETE_COMMON_PROGRAM_HEADER
    assert unit.termination is Termination.NONE
    assert unit.consumed == 1


def test_detect_bad_parameter_list():
    text = "VOLT 1,"
    unit = detect_program_message_unit(text)
    assert unit.header.text == "VOLT"
    assert unit.data.type is TokenType.UNKNOWN
    assert unit.parameter_count == -1
    assert unit.consumed == len(text)
    assert unit.termination is Termination.NONE


def test_detect_arbitrary_block_with_newline_inside():
    text = "DATA #13a\nb\n"
    unit = detect_program_message_unit(text)
    assert unit.header.text == "DATA"
    assert unit.data.text == "#13a\nb"
    assert unit.parameter_count == 1
    assert unit.termination is Termination.NL
    assert unit.consumed == len(text)