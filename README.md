# ionbinary

Building blocks for the binary Ion data format: an arbitrary-precision
`Decimal`, the fixed- and variable-length integer and tag encodings, a
buffered tree for emitting length-prefixed containers, and a `Bitstream`
that walks the raw items of a binary Ion stream one by one.

## Installation

```
pip install ionbinary
```

## Decimals

`ionbinary.decimals.Decimal` holds a value `coefficient * 10**exponent`.

```python
from ionbinary.decimals import Decimal

d = Decimal.parse("1.23d-1")
print(str(d))                                   # 1.23d-1
print(d.coex())                                 # (123, -3)
print(d.add(Decimal.parse("0.06")))
print(Decimal.parse("1.5").round_int())         # 2
print(Decimal.parse("-1.01").trunc())           # -1
print(Decimal.parse("1999").truncate(1))        # 1d3
print(Decimal.parse("1d2") == Decimal.parse("100"))  # True
```

Other methods: `from_int`, `abs`, `sub`, `neg`, `mul`, `shift_left`,
`shift_right`, `sign`, `cmp` and `upscale`; `+`, `-`, `*`, unary `-`,
`abs()` and the comparison operators work too. Comparisons ignore
precision. `Decimal.parse` raises `DecimalParseError` for text it cannot
read.

## Encodings

`ionbinary.bits` encodes the integer fields of binary Ion, each with a
matching length function (`uint_len`, `int_len`, `var_uint_len`,
`var_int_len`, `tag_len`):

```python
from ionbinary.bits import encode_int, encode_var_uint, encode_var_int, encode_tag

encode_int(-0xFF)           # b"\x80\xff"
encode_var_uint(0x7FFF)     # b"\x01\x7f\xff"
encode_var_int(-0x7F)       # b"\x40\xff"
encode_tag(0x40, 0x0E)      # b"\x4e\x8e"
```

## Buffered containers

`Atom`, `Datagram` and `Container` (from `ionbinary.buf`) build a tree of
partly serialized values whose lengths are known only when the tree is
emitted with `emit_to(out)` on any object with a `write` method.
`BufStack` keeps the sequences currently being written.

```python
import io
from ionbinary.buf import Atom, Container

lst = Container(0xB0)
lst.append(Atom(b"\x21\x01"))
out = io.BytesIO()
lst.emit_to(out)
out.getvalue()              # b"\xb2\x21\x01"
```

## Reading binary Ion

```python
from ionbinary.bitstream import Bitstream
from ionbinary.bitcodes import Bitcode

bs = Bitstream.from_bytes(bytes([0xE0, 0x01, 0x00, 0xEA, 0x21, 0x05]))
bs.next()
assert bs.code is Bitcode.BVM
print(bs.read_bvm())        # (1, 0)
bs.next()
print(bs.read_int())        # 5
```

`next()` returns the `Bitcode` of the next item; `step_in()` and
`step_out()` move into and out of lists, s-expressions and structs. The
value readers are `read_bvm`, `read_field_id`, `read_annotation_ids`,
`read_int`, `read_float`, `read_decimal`, `read_symbol_id`, `read_string`
and `read_bytes`. Calling `next()` without reading skips the current item.

`ionbinary.context` provides `Context` and `ContextStack` for tracking
container nesting.

Malformed input raises the errors in `ionbinary.errors`, all subclasses of
`IonError`, such as `IonSyntaxError`, `InvalidTagByteError` and
`UnexpectedEOFError`.

## What this package does not do

It has no high-level reader or writer, no text Ion, and no command-line
tool. It keeps no symbol tables: field names, annotations and symbols are
returned as numeric symbol IDs, not resolved to text. Timestamps are
recognised as `Bitcode.TIMESTAMP` but there is no method to decode them.

## Running the tests

```
pip install ionbinary[test]
pytest
```