"""A low-level parser for binary Ion values."""

from __future__ import annotations

import enum
import io
import struct
from typing import BinaryIO

from .bitcodes import BitStack, Bitcode, parse_tag
from .decimals import Decimal
from .errors import (
    InvalidTagByteError,
    IonIOError,
    IonSyntaxError,
    UnexpectedEOFError,
    UnexpectedTokenError,
    UsageError,
)

_UNBOUNDED = 2**64 - 1
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_SKIP_CHUNK = 1 << 16


class _State(enum.Enum):
    BEFORE_VALUE = enum.auto()
    ON_VALUE = enum.auto()
    BEFORE_FIELD_ID = enum.auto()
    ON_FIELD_ID = enum.auto()


class Bitstream:
    """Walks the raw items of a binary Ion stream.

    Call :meth:`next` to move to the next item and then one of the
    ``read_*`` methods to consume it, or :meth:`next` again to skip it.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self._in = stream
        self._lookahead = bytearray()
        self._pos = 0
        self._state = _State.BEFORE_VALUE
        self._stack = BitStack()
        self._code = Bitcode.NONE
        self._null = False
        self._len = 0

    @classmethod
    def from_bytes(cls, data: bytes) -> "Bitstream":
        """Create a stream reading from an in-memory byte string."""
        return cls(io.BytesIO(bytes(data)))

    @property
    def code(self) -> Bitcode:
        """The type code of the current item."""
        return self._code

    @property
    def is_null(self) -> bool:
        """Whether the current value is a null."""
        return self._null

    @property
    def pos(self) -> int:
        """The number of bytes consumed so far."""
        return self._pos

    @property
    def length(self) -> int:
        """The length in bytes of the current value's body."""
        return self._len

    # -- navigation ---------------------------------------------------------

    def next(self) -> Bitcode:
        """Advance to the next item and return its type code."""
        if self._state in (_State.ON_VALUE, _State.ON_FIELD_ID):
            self.skip_value()

        if len(self._stack) and self._pos == self._stack.peek().end:
            self._code = Bitcode.EOF
            return self._code

        if self._state is _State.BEFORE_FIELD_ID:
            self._code = Bitcode.FIELD_ID
            self._state = _State.ON_FIELD_ID
            return self._code

        c = self._read()
        if c is None:
            self._code = Bitcode.EOF
            return self._code

        code, length = parse_tag(c)
        tag_pos = self._pos - 1

        if code == Bitcode.NONE:
            raise InvalidTagByteError(c, tag_pos)

        if code == Bitcode.STRUCT and length == 1:
            # Ordered struct: the length always follows as a VarUInt.
            rem = self._remaining()
            length, _ = self._read_var_uint_len(rem)
            if length == 0:
                raise IonSyntaxError("ordered structs cannot be empty", tag_pos)
            self._state = _State.ON_VALUE
            self._finish_tag(code, length, self._remaining(), tag_pos)
            return self._code

        self._state = _State.ON_VALUE

        if code == Bitcode.ANNOTATION:
            if length == 0:
                if len(self._stack):
                    raise IonSyntaxError("invalid BVM in a container", tag_pos)
                self._code = Bitcode.BVM
                self._len = 3
                return self._code
            if length == 0x0F:
                raise InvalidTagByteError(c, tag_pos)

        if code == Bitcode.FALSE:
            if length == 1:
                code = Bitcode.TRUE
                length = 0
            elif length not in (0, 0x0F):
                raise InvalidTagByteError(c, tag_pos)

        if length == 0x0F:
            self._code = code
            self._null = True
            return self._code

        rem = self._remaining()
        if length == 0x0E:
            length, used = self._read_var_uint_len(rem)
            rem -= used

        self._finish_tag(code, length, rem, tag_pos)
        return self._code

    def _finish_tag(self, code: Bitcode, length: int, rem: int, tag_pos: int) -> None:
        if length > rem:
            raise IonSyntaxError(
                f"value overruns its container: {length} vs {rem}", tag_pos
            )
        self._code = code
        self._len = length

    def skip_value(self) -> None:
        """Skip over the current item, if there is one."""
        if self._state in (_State.BEFORE_FIELD_ID, _State.BEFORE_VALUE):
            return
        if self._state is _State.ON_FIELD_ID:
            self._skip_var_uint_len(self._remaining())
            self._state = _State.BEFORE_VALUE
        else:
            if self._len > 0:
                self._skip(self._len)
            self._state = self._state_after_value()
        self._clear()

    def step_in(self) -> None:
        """Step in to the current list, s-expression or struct."""
        if self._code == Bitcode.STRUCT:
            self._state = _State.BEFORE_FIELD_ID
        elif self._code in (Bitcode.LIST, Bitcode.SEXP):
            self._state = _State.BEFORE_VALUE
        else:
            raise UsageError("Bitstream.step_in", f"cannot step in to a {self._code}")
        self._stack.push(self._code, self._pos + self._len)
        self._clear()

    def step_out(self) -> None:
        """Step out of the current container, skipping whatever is left in it."""
        if not len(self._stack):
            raise UsageError("Bitstream.step_out", "cannot step out of the top level")
        cur = self._stack.pop()
        if cur.end < self._pos:
            raise IonSyntaxError(
                f"end ({cur.end}) is before the current position ({self._pos})",
                self._pos,
            )
        diff = cur.end - self._pos
        if diff > 0:
            self._skip(diff)
        self._state = self._state_after_value()
        self._clear()

    # -- readers ------------------------------------------------------------

    def _expect(self, api: str, *codes: Bitcode) -> None:
        if self._code not in codes:
            names = " or ".join(str(c) for c in codes)
            raise UsageError(api, f"current item is a {self._code}, not a {names}")

    def read_bvm(self) -> tuple[int, int]:
        """Read a binary version marker, returning its major and minor version."""
        self._expect("Bitstream.read_bvm", Bitcode.BVM)
        major = self._read1()
        minor = self._read1()
        end = self._read1()
        if end != 0xEA:
            raise IonSyntaxError(
                f"invalid BVM: 0xE0 0x{major:02X} 0x{minor:02X} 0x{end:02X}",
                self._pos - 4,
            )
        self._state = _State.BEFORE_VALUE
        self._clear()
        return major, minor

    def read_field_id(self) -> int:
        """Read a struct field's symbol ID."""
        self._expect("Bitstream.read_field_id", Bitcode.FIELD_ID)
        sid, _ = self._read_var_uint_len(self._remaining())
        self._state = _State.BEFORE_VALUE
        self._code = Bitcode.NONE
        return sid

    def read_annotation_ids(self) -> list[int]:
        """Read the symbol IDs of an annotation wrapper; the wrapped value follows."""
        self._expect("Bitstream.read_annotation_ids", Bitcode.ANNOTATION)
        annot_len, used = self._read_var_uint_len(self._len)
        if annot_len == 0:
            raise IonSyntaxError(
                "malformed annotation: at least one annotation must be specified",
                self._pos - used,
            )
        remaining = self._len - used - annot_len
        if remaining <= 0:
            raise IonSyntaxError("malformed annotation", self._pos - used)

        ids: list[int] = []
        while annot_len > 0:
            sid, idlen = self._read_var_uint_len(annot_len)
            ids.append(sid)
            annot_len -= idlen

        self._validate_annotated_value(remaining)
        self._state = _State.BEFORE_VALUE
        self._clear()
        return ids

    def _validate_annotated_value(self, remaining: int) -> None:
        tag = self._peek_at(0)
        code, length = parse_tag(tag)

        if length == 0x0F:
            # A null takes exactly one byte.
            if remaining != 1:
                raise InvalidTagByteError(tag, self._pos)
            return
        if code == Bitcode.NULL:
            raise IonSyntaxError("an annotation cannot wrap a NOP Pad", self._pos)
        if code == Bitcode.ANNOTATION:
            raise IonSyntaxError(
                "an annotation cannot be the enclosed value of another annotation",
                self._pos,
            )
        if code == Bitcode.FALSE:
            # Booleans keep their value, not their length, in the low nibble.
            length = 0

        remaining -= 1
        if length == 0x0E or (code == Bitcode.STRUCT and length == 1):
            val = 0
            offset = 1
            while True:
                c = self._peek_at(offset)
                offset += 1
                remaining -= 1
                val = (val << 7) | (c & 0x7F)
                if c & 0x80:
                    length = val
                    break

        if length != remaining:
            raise IonSyntaxError(
                "annotation wrapper indicates the enclosed value's length to be "
                f"{remaining} but the enclosed value claims to have length {length}",
                self._pos,
            )

    def read_int(self) -> int:
        """Read an integer value."""
        self._expect("Bitstream.read_int", Bitcode.INT, Bitcode.NEG_INT)
        data = self._read_n(self._len)
        value = int.from_bytes(data, "big")
        if self._code == Bitcode.NEG_INT:
            if value == 0:
                raise IonSyntaxError(
                    "integer zero cannot be negative", self._pos - self._len
                )
            value = -value
        self._state = self._state_after_value()
        self._clear()
        return value

    def read_float(self) -> float:
        """Read a 0-, 4- or 8-byte float value."""
        self._expect("Bitstream.read_float", Bitcode.FLOAT)
        data = self._read_n(self._len)
        if len(data) == 0:
            value = 0.0
        elif len(data) == 4:
            (value,) = struct.unpack(">f", data)
        elif len(data) == 8:
            (value,) = struct.unpack(">d", data)
        else:
            raise IonSyntaxError("invalid float size", self._pos - self._len)
        self._state = self._state_after_value()
        self._clear()
        return value

    def read_decimal(self) -> Decimal:
        """Read a decimal value."""
        self._expect("Bitstream.read_decimal", Bitcode.DECIMAL)
        value = self._read_decimal(self._len)
        self._state = self._state_after_value()
        self._clear()
        return value

    def _read_decimal(self, length: int) -> Decimal:
        exponent = 0
        coefficient = 0
        neg_zero = False

        if length > 0:
            val, _, used = self._read_var_int_len(length)
            if val < _INT32_MIN or val > _INT32_MAX:
                raise IonSyntaxError(
                    f"decimal exponent out of range: {val}", self._pos - used
                )
            exponent = val
            length -= used

        if length > 0:
            coefficient, negative = self._read_signed_int(length)
            neg_zero = coefficient == 0 and negative

        return Decimal(coefficient, exponent, neg_zero)

    def read_symbol_id(self) -> int:
        """Read a symbol value's ID."""
        self._expect("Bitstream.read_symbol_id", Bitcode.SYMBOL)
        if self._len > 8:
            raise IonSyntaxError("symbol id too large", self._pos)
        data = self._read_n(self._len)
        self._state = self._state_after_value()
        self._clear()
        return int.from_bytes(data, "big")

    def read_string(self) -> str:
        """Read a UTF-8 string value."""
        self._expect("Bitstream.read_string", Bitcode.STRING)
        data = self._read_n(self._len)
        self._state = self._state_after_value()
        self._clear()
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError:
            raise UnexpectedTokenError(
                "string value contains non-UTF-8 runes", self._pos
            ) from None

    def read_bytes(self) -> bytes:
        """Read the contents of a blob or clob."""
        self._expect("Bitstream.read_bytes", Bitcode.CLOB, Bitcode.BLOB)
        data = self._read_n(self._len)
        self._state = self._state_after_value()
        self._clear()
        return data

    # -- helpers ------------------------------------------------------------

    def _clear(self) -> None:
        self._code = Bitcode.NONE
        self._null = False
        self._len = 0

    def _state_after_value(self) -> _State:
        if self._stack.peek().code == Bitcode.STRUCT:
            return _State.BEFORE_FIELD_ID
        return _State.BEFORE_VALUE

    def _remaining(self) -> int:
        if not len(self._stack):
            return _UNBOUNDED
        end = self._stack.peek().end
        if self._pos > end:
            raise IonSyntaxError(f"pos ({self._pos}) > end ({end})", self._pos)
        return end - self._pos

    def _read_signed_int(self, length: int) -> tuple[int, bool]:
        data = bytearray(self._read_n(length))
        negative = bool(data[0] & 0x80)
        data[0] &= 0x7F
        mag = int.from_bytes(data, "big")
        return (-mag if negative else mag), negative

    def _read_var_uint_len(self, limit: int) -> tuple[int, int]:
        limit = min(limit, 10)
        val = 0
        length = 0
        while True:
            if length >= limit:
                raise IonSyntaxError("varuint too large", self._pos)
            c = self._read1()
            val = (val << 7) | (c & 0x7F)
            length += 1
            if c & 0x80:
                return val, length

    def _skip_var_uint_len(self, limit: int) -> int:
        limit = min(limit, 10)
        length = 0
        while True:
            if length >= limit:
                raise IonSyntaxError("varuint too large", self._pos - length)
            c = self._read1()
            length += 1
            if c & 0x80:
                return length

    def _read_var_int_len(self, limit: int) -> tuple[int, int, int]:
        """Read a VarInt, returning its value, its sign and its length."""
        if limit == 0:
            raise IonSyntaxError("varint too large", self._pos)
        limit = min(limit, 10)

        c = self._read1()
        sign = -1 if c & 0x40 else 1
        val = c & 0x3F
        length = 1
        if c & 0x80:
            return val * sign, sign, length

        while True:
            if length >= limit:
                raise IonSyntaxError("varint too large", self._pos - length)
            c = self._read1()
            val = (val << 7) | (c & 0x7F)
            length += 1
            if c & 0x80:
                return val * sign, sign, length

    def _fill(self, n: int) -> int:
        while len(self._lookahead) < n:
            try:
                chunk = self._in.read(n - len(self._lookahead))
            except OSError as exc:
                raise IonIOError(exc) from exc
            if not chunk:
                break
            self._lookahead += chunk
        return len(self._lookahead)

    def _take(self, n: int) -> bytes:
        self._fill(n)
        data = bytes(self._lookahead[:n])
        del self._lookahead[:n]
        self._pos += len(data)
        return data

    def _read(self) -> int | None:
        data = self._take(1)
        return data[0] if data else None

    def _read1(self) -> int:
        c = self._read()
        if c is None:
            raise UnexpectedEOFError(self._pos)
        return c

    def _read_n(self, n: int) -> bytes:
        if n == 0:
            return b""
        data = self._take(n)
        if len(data) < n:
            raise UnexpectedEOFError(self._pos)
        return data

    def _skip(self, n: int) -> None:
        while n > 0:
            got = len(self._take(min(n, _SKIP_CHUNK)))
            if got == 0:
                return
            n -= got

    def _peek_at(self, offset: int) -> int:
        if self._fill(offset + 1) <= offset:
            raise UnexpectedEOFError(self._pos)
        return self._lookahead[offset]