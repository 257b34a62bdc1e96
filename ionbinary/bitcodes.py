"""Type codes seen while parsing binary Ion, and the container stack."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Bitcode(enum.IntEnum):
    """The kind of item a binary stream is positioned on."""

    NONE = 0
    EOF = 1
    BVM = 2
    NULL = 3
    FALSE = 4
    TRUE = 5
    INT = 6
    NEG_INT = 7
    FLOAT = 8
    DECIMAL = 9
    TIMESTAMP = 10
    SYMBOL = 11
    STRING = 12
    CLOB = 13
    BLOB = 14
    LIST = 15
    SEXP = 16
    STRUCT = 17
    FIELD_ID = 18
    ANNOTATION = 19

    def __str__(self) -> str:
        return _NAMES[self]


_NAMES = {
    Bitcode.NONE: "none",
    Bitcode.EOF: "eof",
    Bitcode.BVM: "bvm",
    Bitcode.NULL: "null",
    Bitcode.FALSE: "false",
    Bitcode.TRUE: "true",
    Bitcode.INT: "int",
    Bitcode.NEG_INT: "negint",
    Bitcode.FLOAT: "float",
    Bitcode.DECIMAL: "decimal",
    Bitcode.TIMESTAMP: "timestamp",
    Bitcode.SYMBOL: "symbol",
    Bitcode.STRING: "string",
    Bitcode.CLOB: "clob",
    Bitcode.BLOB: "blob",
    Bitcode.LIST: "list",
    Bitcode.SEXP: "sexp",
    Bitcode.STRUCT: "struct",
    Bitcode.FIELD_ID: "fieldid",
    Bitcode.ANNOTATION: "annotation",
}

# Indexed by the high nibble of a tag byte.
_TAG_CODES = (
    Bitcode.NULL,        # 0x00
    Bitcode.FALSE,       # 0x10
    Bitcode.INT,         # 0x20
    Bitcode.NEG_INT,     # 0x30
    Bitcode.FLOAT,       # 0x40
    Bitcode.DECIMAL,     # 0x50
    Bitcode.TIMESTAMP,   # 0x60
    Bitcode.SYMBOL,      # 0x70
    Bitcode.STRING,      # 0x80
    Bitcode.CLOB,        # 0x90
    Bitcode.BLOB,        # 0xA0
    Bitcode.LIST,        # 0xB0
    Bitcode.SEXP,        # 0xC0
    Bitcode.STRUCT,      # 0xD0
    Bitcode.ANNOTATION,  # 0xE0
)


def parse_tag(c: int) -> tuple[Bitcode, int]:
    """Split a tag byte into its type code and its length nibble."""
    high = (c >> 4) & 0x0F
    low = c & 0x0F
    code = _TAG_CODES[high] if high < len(_TAG_CODES) else Bitcode.NONE
    return code, low


@dataclass(frozen=True)
class BitNode:
    """A container being read: its type code and the offset where it ends."""

    code: Bitcode = Bitcode.NONE
    end: int = 0


class BitStack:
    """The containers a binary stream is currently stepped in to."""

    def __init__(self) -> None:
        self._items: list[BitNode] = []

    def __len__(self) -> int:
        return len(self._items)

    def peek(self) -> BitNode:
        """Return the innermost container, or an empty node at top level."""
        return self._items[-1] if self._items else BitNode()

    def push(self, code: Bitcode, end: int) -> None:
        self._items.append(BitNode(code, end))

    def pop(self) -> BitNode:
        """Remove and return the innermost container."""
        if not self._items:
            raise IndexError("pop called on empty bitstack")
        return self._items.pop()