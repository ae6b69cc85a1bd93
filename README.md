# scpikit

Building blocks for reading SCPI (Standard Commands for Programmable
Instruments) messages in pure Python: a tokenizer for program messages, a
splitter that finds program message units and their parameters, matching of
command headers against patterns such as `[:MEASure]:VOLTage:DC?`, and the
number conversions SCPI text uses.

## Installation

```
pip install scpikit
```

To run the tests:

```
pip install "scpikit[test]"
pytest
```

## Modules

- `scpikit.lexer` – `Lexer`, which reads one kind of token at its current
  position (`program_header`, `decimal_numeric_program_data`,
  `suffix_program_data`, `nondecimal_numeric_data`, `string_program_data`,
  `arbitrary_block_program_data`, `program_expression`, separators and
  newlines), producing `Token` values tagged with a `TokenType`. A method that
  finds nothing returns an `UNKNOWN` token, which is falsy.
- `scpikit.message` – `detect_program_message_unit` finds the header, the
  parameters and the terminator at the start of a buffer and returns a
  `MessageUnit`; `parse_program_data` and `parse_all_program_data` read
  parameters from a `Lexer`. `Termination` tells whether a unit ended with a
  semicolon, a newline or neither.
- `scpikit.matching` – `match_pattern` for one mnemonic in long or short
  form, `match_command` for whole headers with optional `[...]` parts and
  numeric `#` suffixes, `compose_compound_command` for headers that continue
  the path of the previous command, plus `compare_str`,
  `compare_str_and_num` and `skip_whitespace`.
- `scpikit.convert` – `int_to_str` and `str_to_int` for 2, 8, 10 and 16 based
  integers of a given bit width, `str_to_float`, `dtostre` for floats with a
  fixed number of significant digits (`DtostreFlags`), and byte order helpers
  `swap16`, `swap32`, `swap64`, `native_format` (`ArrayFormat`).

## Examples

Tokenizing:

```python
from scpikit.lexer import Lexer, TokenType

token = Lexer("*IDN?").program_header()
assert token.type is TokenType.COMMON_QUERY_PROGRAM_HEADER
assert token.text == "*IDN?"
```

Splitting a message:

```python
from scpikit.message import Termination, detect_program_message_unit

unit = detect_program_message_unit("VOLT 1.5 V;CURR 2\n")
unit.header.text        # "VOLT"
unit.data.text          # "1.5 V"
unit.parameter_count    # 1
unit.termination        # Termination.SEMICOLON
unit.consumed           # 11, so the next unit starts at buffer[11:]
```

Matching headers:

```python
from scpikit.matching import compose_compound_command, match_command

match_command("[:MEASure]:VOLTage:DC?", "MEAS:VOLT:DC?")   # [] (a match)
match_command("[:MEASure]:VOLTage:DC?", "VOLTAGE:DC?")     # [] (a match)
match_command("[:MEASure]:VOLTage:DC?", "MEAS:CURR:DC?")   # None
match_command("OUTPut#:STATe", "OUTP2:STAT", 1)            # [2]

compose_compound_command("MEAS:VOLT:DC?", "AC?")           # "MEAS:VOLT:AC?"
```

`match_command` returns `None` when the header does not match and a list of
the numeric suffixes otherwise, so test the result with `is not None`.

Numbers:

```python
from scpikit.convert import int_to_str, str_to_int, swap16

int_to_str(255, 16)        # "FF"
int_to_str(-5)             # "-5"
str_to_int("12abc")        # (12, 2): value and characters used
swap16(0x1234)             # 0x3412
```

## What it does not do

scpikit reads and recognises messages; it does not run an instrument. There
is no command table that dispatches matched headers to handlers, no input
buffering that collects partial messages until a newline arrives, no error
queue, no reader that turns parameters into typed values with SCPI error
reporting, and no writer that assembles responses (separators, quoted text,
arbitrary blocks, line endings). An application puts those together from the
lexer, message and matching functions above.