import pytest

from scpikit.matching import (
    compare_str,
    compare_str_and_num,
    compose_compound_command,
    match_command,
    match_pattern,
    skip_whitespace,
)


@pytest.mark.parametrize(
    "first, second, expected",
    [
        ("abc", "ABC", True),
        ("MEAS", "meas", True),
        ("abc", "abcd", False),
        ("abc", "abd", False),
        ("", "", True),
    ],
)
def test_compare_str(first, second, expected):
    assert compare_str(first, second) is expected


def test_compare_str_is_symmetric():
    pairs = [("Volt", "VOLT"), ("a", "b"), ("xy", "x")]
    for a, b in pairs:
        assert compare_str(a, b) == compare_str(b, a)


def test_compare_str_and_num_reads_number():
    assert compare_str_and_num("CHAN", "chan12", True) == (True, 12)


def test_compare_str_and_num_without_suffix_gives_no_number():
    assert compare_str_and_num("CHAN", "chan", True) == (True, None)


def test_compare_str_and_num_signed_suffix():
    assert compare_str_and_num("CHAN", "CHAN-5", True) == (True, -5)
    assert compare_str_and_num("CHAN", "CHAN-5", False) == (False, None)


def test_compare_str_and_num_digits_only_mode():
    assert compare_str_and_num("CHAN", "chan12", False) == (True, None)
    assert compare_str_and_num("CHAN", "chan1a", False) == (False, None)


def test_compare_str_and_num_rejects_garbage_and_short_text():
    assert compare_str_and_num("CHAN", "chanx", True) == (False, None)
    assert compare_str_and_num("CHANNEL", "CHAN", False) == (False, None)
    assert compare_str_and_num("CHAN", "OUTP1", True) == (False, None)


def test_skip_whitespace():
    assert skip_whitespace("  \t x") == 4
    assert skip_whitespace("") == 0
    assert skip_whitespace("   ") == 3
    assert skip_whitespace("abc ") == 0


@pytest.mark.parametrize(
    "pattern, text, expected",
    [
        ("MEASure", "MEAS", True),
        ("MEASure", "measure", True),
        ("MEASure", "MEASU", False),
        ("MEASure", "MEA", False),
        ("CHANnel#", "CHAN5", True),
        ("CHANnel#", "channel12", True),
        ("CHANnel#", "CHAN", True),
        ("CHANnel#", "CH5", False),
    ],
)
def test_match_pattern(pattern, text, expected):
    assert match_pattern(pattern, text) is expected


@pytest.mark.parametrize(
    "command",
    ["MEAS:VOLT:DC?", "VOLT:DC?", ":MEAS:VOLT:DC?", "measure:voltage:dc?"],
)
def test_match_command_optional_first_keyword(command):
    assert match_command("[:MEASure]:VOLTage:DC?", command) == []


@pytest.mark.parametrize("command", ["MEAS:VOLT:DC", "MEAS:VOLT?", "MEAS:CURR:DC?"])
def test_match_command_rejects(command):
    assert match_command("[:MEASure]:VOLTage:DC?", command) is None


def test_match_command_common_commands():
    assert match_command("*IDN?", "*idn?") == []
    assert match_command("*IDN?", ":*IDN?") is None
    assert match_command("*IDN?", "*IDN") is None


def test_match_command_optional_last_keyword():
    pattern = "SYSTem:ERRor[:NEXT]?"
    assert match_command(pattern, "SYST:ERR?") == []
    assert match_command(pattern, "SYST:ERR:NEXT?") == []
    assert match_command(pattern, "SYST:ERR:COUN?") is None


def test_match_command_extra_command_part_fails():
    assert match_command("ABC:DEF[:GHI]", "ABC:DEF:GHI:JKL") is None


def test_match_command_numbers():
    assert match_command("OUTPut#:CHANnel#", "OUTP3:CHAN2", 2) == [3, 2]


def test_match_command_numbers_default_and_length():
    assert match_command("OUTPut#:CHANnel#", "OUTP:CHAN2", 2, 1) == [1, 2]
    assert match_command("OUTPut#:CHANnel#", "OUTP3:CHAN2", 1) == [3]
    assert match_command("OUTPut#:CHANnel#", "OUTP3:CHAN2", 3, -1) == [3, 2, -1]


def test_match_command_numbered_mismatch():
    assert match_command("OUTPut#:CHANnel#", "OUTP3:CHAN2X", 2) is None


def test_compose_compound_command():
    assert compose_compound_command("MEAS:VOLT:DC?", "AC?") == "MEAS:VOLT:AC?"


def test_compose_leaves_rooted_and_common_commands():
    assert compose_compound_command("MEAS:VOLT:DC?", ":VOLT") == ":VOLT"
    assert compose_compound_command("MEAS:VOLT:DC?", "*RST") == "*RST"
    assert compose_compound_command("*IDN?", "VOLT") == "VOLT"
    assert compose_compound_command("", "VOLT") == "VOLT"
    assert compose_compound_command("VOLT", "CURR") == "CURR"


def test_compose_rejects_empty_current():
    with pytest.raises(ValueError):
        compose_compound_command("MEAS:VOLT", "")


def test_composed_command_matches_pattern():
    composed = compose_compound_command("MEAS:VOLT:DC?", "AC?")
    assert match_command("[:MEASure]:VOLTage:AC?", composed) == []