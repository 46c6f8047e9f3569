# sfex

The runtime value model and a set of standard-library helpers for SFX, a
small scripting language. SFX numbers are exact decimals, its lists and
strings count from 1, and its text is measured in user-perceived characters
(grapheme clusters).

## Installation

```
pip install sfex
```

It depends on `regex` (grapheme clusters) and `beautifulsoup4` (HTML
selection). To run the tests, install the `test` extra and run `pytest`.

## Values

`sfex.value` maps SFX values onto Python types:

| SFX value      | Python type         |
|----------------|---------------------|
| Number         | `decimal.Decimal`   |
| FastNumber     | `float`             |
| String         | `str`               |
| Boolean        | `bool`              |
| List           | `SfxList`           |
| Map            | `SfxMap`            |
| Vector         | `Vector`            |
| Option         | `Maybe`             |
| WeakRef        | `WeakRef`           |
| Error          | `ErrorInfo`         |
| NativeFunction | any callable        |

Helpers in the same module: `from_number_string`, `format_number`,
`type_name`, `is_truthy`, `index`, `length`, `clone_deep`,
`to_display_string`, `to_debug_string` and `to_weak_ref`. `Maybe` has
`is_some`, `is_none`, `unwrap` and `unwrap_or`; `WeakRef` has `is_valid` and
`get`. Failures raise `SfxValueError`.

`sfex.ops` holds arithmetic and comparison: `add`, `subtract`, `multiply`,
`divide`, `modulo`, `equals` and `compare` (which returns -1, 0 or 1). Two
Numbers combine exactly; a Number mixed with a FastNumber gives a FastNumber.
`add` also joins strings with numbers, booleans, options and weak references,
concatenates lists and adds vectors of equal length.

```python
from sfex.value import from_number_string, index, length, to_display_string, SfxList
from sfex.ops import add, equals

total = add(from_number_string("0.1"), from_number_string("0.2"))
assert equals(total, from_number_string("0.3"))

items = SfxList([from_number_string("10"), from_number_string("20")])
index(items, from_number_string("1"))   # Decimal('10'); index 0 raises SfxValueError

length("🇲🇳")                            # 1: a flag counts as one character
to_display_string(add("Age: ", from_number_string("34")))  # "Age: 34"
```

## Standard library modules

- `sfex.errors`: structured error values. `error_constructor(category,
  subtype)` returns a builder; `make_error(category, subtype, *args)` checks
  the pair against `CATEGORIES` (System, Logic, Lookup, Validation, Panic)
  first. `is_error`, `get_message`, `get_category` and `get_subtype` inspect
  an `ErrorInfo`.
- `sfex.channel`: bounded FIFO channels between threads. `create_channel()`
  makes one with a buffer of 10, or of the size given. `Channel.send` waits
  for room, `Channel.receive` waits for a value, `Channel.try_receive(timeout)`
  returns a `Maybe`, and `Channel.close` stops further sends. Sending on, or
  receiving from a drained, closed channel raises `ChannelClosed`. A channel
  can be iterated until closed and used as a context manager that closes it.
- `sfex.envvars`: `get(key, default)`, `has(key)`, `all_vars()` and
  `load(filepath)`, which sets variables from a `KEY=value` file (skipping
  blank lines and `#` comments, stripping matching quotes) and returns how
  many it set.
- `sfex.csvdata`: `parse_csv(text)` turns CSV with a header line into a list
  of maps; fields that read as numbers become `Decimal`. `read_rows(filepath,
  start_row, count)` reads a slice of data rows from a file.
- `sfex.htmlpage`: `parse_html(content)` returns a `Page`;
  `Page.select_text(selector)` and `Page.select_attr(selector, attribute)`
  take CSS selectors.
- `sfex.files`: `read` (an empty string if the file cannot be read), `write`,
  `exists`, `list_files(directory, pattern)` (patterns `*.ext`,
  `prefix*suffix` or an exact name), `read_lines(path, start_line, count)`
  and `count_lines`.
- `sfex.data`: `detect`, `detect_from_string`, `describe`, `structure`,
  `guess_format_priority`, `media_type_for_format` and `sanitize_content`.
  Detection looks at the file extension, a few leading magic bytes and the
  shape of the text.

```python
from sfex.csvdata import parse_csv
from sfex.data import detect_from_string

rows = parse_csv("name,age\nAda,36\n")     # [{'name': 'Ada', 'age': Decimal('36')}]
detect_from_string('{"a": 1}')["Format"]   # "JSON"
```

Row and line numbers given to `read_rows` and `read_lines` start at 1.

## What this package does not do

- It has no lexer, parser or interpreter for SFX source, and no command to
  run SFX scripts. It provides the values and library functions such a
  runtime works with.
- `sfex.data` detects and describes formats but does not parse JSON, TOML or
  XML; of the formats it names, only CSV (`sfex.csvdata`) and HTML
  (`sfex.htmlpage`) have parsers here.
- `sfex.files` reads whole files or line ranges; it offers no line-by-line
  stream object.