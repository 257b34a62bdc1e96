"""Low-level encoders for the fixed- and variable-length integers of binary Ion."""

from __future__ import annotations


def _check_unsigned(v: int) -> None:
    if v < 0:
        raise ValueError(f"unsigned value cannot be negative: {v}")


def uint_len(v: int) -> int:
    """Return the number of bytes :func:`encode_uint` uses for ``v``."""
    _check_unsigned(v)
    return max(1, (v.bit_length() + 7) // 8)


def encode_uint(v: int) -> bytes:
    """Encode an unsigned integer big-endian in as few bytes as possible (at least one)."""
    return v.to_bytes(uint_len(v), "big")


def int_len(n: int) -> int:
    """Return the number of bytes :func:`encode_int` uses for ``n``."""
    if n == 0:
        return 0
    mag = abs(n)
    length = uint_len(mag)
    # A set high bit leaves no room for the sign, so one more byte is needed.
    if (mag >> ((length - 1) * 8)) & 0x80:
        length += 1
    return length


def encode_int(n: int) -> bytes:
    """Encode a signed integer as a sign-and-magnitude Int field.

    Zero encodes as no bytes at all.
    """
    if n == 0:
        return b""
    negative = n < 0
    bits = bytearray(encode_uint(abs(n)))
    if bits[0] & 0x80 == 0:
        if negative:
            bits[0] |= 0x80
        return bytes(bits)
    return bytes([0x80 if negative else 0x00]) + bytes(bits)


def var_uint_len(v: int) -> int:
    """Return the number of bytes :func:`encode_var_uint` uses for ``v``."""
    _check_unsigned(v)
    length = 1
    v >>= 7
    while v > 0:
        length += 1
        v >>= 7
    return length


def encode_var_uint(v: int) -> bytes:
    """Encode a VarUInt: seven bits per byte, high bit marking the last byte."""
    _check_unsigned(v)
    out = [0x80 | (v & 0x7F)]
    v >>= 7
    while v > 0:
        out.append(v & 0x7F)
        v >>= 7
    return bytes(reversed(out))


def var_int_len(v: int) -> int:
    """Return the number of bytes :func:`encode_var_int` uses for ``v``."""
    mag = abs(v) >> 6  # the first byte also holds the sign bit
    length = 1
    while mag > 0:
        length += 1
        mag >>= 7
    return length


def encode_var_int(v: int) -> bytes:
    """Encode a VarInt: like a VarUInt, with a sign bit in the first byte."""
    sign = 0x40 if v < 0 else 0x00
    mag = abs(v)
    if mag >> 6 == 0:
        return bytes([0x80 | sign | (mag & 0x3F)])

    out = [0x80 | (mag & 0x7F)]
    mag >>= 7
    while mag >> 6 > 0:
        out.append(mag & 0x7F)
        mag >>= 7
    out.append(sign | (mag & 0x3F))
    return bytes(reversed(out))


def tag_len(length: int) -> int:
    """Return the number of bytes of a type descriptor for a value of ``length`` bytes."""
    if length < 0x0E:
        return 1
    return 1 + var_uint_len(length)


def encode_tag(code: int, length: int) -> bytes:
    """Encode a type code and value length as a type descriptor."""
    if length < 0x0E:
        return bytes([code | length])
    return bytes([code | 0x0E]) + encode_var_uint(length)