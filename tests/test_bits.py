import pytest

from ionbinary.bits import (
    encode_int,
    encode_tag,
    encode_uint,
    encode_var_int,
    encode_var_uint,
    int_len,
    tag_len,
    uint_len,
    var_int_len,
    var_uint_len,
)

MAX_INT64 = 2**63 - 1
MIN_INT64 = -(2**63)
MAX_UINT64 = 2**64 - 1


@pytest.mark.parametrize(
    "val, length, expected",
    [
        (0, 1, bytes([0])),
        (0xFF, 1, bytes([0xFF])),
        (0x1FF, 2, bytes([0x01, 0xFF])),
        (MAX_UINT64, 8, bytes([0xFF] * 8)),
    ],
)
def test_uint(val, length, expected):
    assert uint_len(val) == length
    assert encode_uint(val) == expected


@pytest.mark.parametrize(
    "val, length, expected",
    [
        (0, 0, b""),
        (0x7F, 1, bytes([0x7F])),
        (-0x7F, 1, bytes([0xFF])),
        (0xFF, 2, bytes([0x00, 0xFF])),
        (-0xFF, 2, bytes([0x80, 0xFF])),
        (0x7FFF, 2, bytes([0x7F, 0xFF])),
        (-0x7FFF, 2, bytes([0xFF, 0xFF])),
        (MAX_INT64, 8, bytes([0x7F] + [0xFF] * 7)),
        (-MAX_INT64, 8, bytes([0xFF] * 8)),
        (MIN_INT64, 9, bytes([0x80, 0x80] + [0x00] * 7)),
    ],
)
def test_int(val, length, expected):
    assert int_len(val) == length
    assert encode_int(val) == expected


@pytest.mark.parametrize(
    "val, length, expected",
    [
        (0, 0, b""),
        (0x7F, 1, bytes([0x7F])),
        (-0x7F, 1, bytes([0xFF])),
        (0xFF, 2, bytes([0x00, 0xFF])),
        (-0xFF, 2, bytes([0x80, 0xFF])),
        (0x7FFF, 2, bytes([0x7F, 0xFF])),
        (-0x7FFF, 2, bytes([0xFF, 0xFF])),
    ],
)
def test_big_int_cases(val, length, expected):
    assert int_len(val) == length
    assert encode_int(val) == expected


def test_int_length_matches_encoding_for_huge_values():
    val = 1 << 1023
    assert len(encode_int(val)) == int_len(val) == 129
    assert encode_int(val)[0] == 0x00
    assert encode_int(-val)[0] == 0x80


@pytest.mark.parametrize(
    "val, length, expected",
    [
        (0, 1, bytes([0x80])),
        (0x7F, 1, bytes([0xFF])),
        (0xFF, 2, bytes([0x01, 0xFF])),
        (0x1FF, 2, bytes([0x03, 0xFF])),
        (0x3FFF, 2, bytes([0x7F, 0xFF])),
        (0x7FFF, 3, bytes([0x01, 0x7F, 0xFF])),
        (0x7FFFFFFFFFFFFFFF, 9, bytes([0x7F] * 8 + [0xFF])),
        (0xFFFFFFFFFFFFFFFF, 10, bytes([0x01] + [0x7F] * 8 + [0xFF])),
    ],
)
def test_var_uint(val, length, expected):
    assert var_uint_len(val) == length
    assert encode_var_uint(val) == expected


@pytest.mark.parametrize(
    "val, length, expected",
    [
        (0, 1, bytes([0x80])),
        (0x3F, 1, bytes([0xBF])),
        (-0x3F, 1, bytes([0xFF])),
        (0x7F, 2, bytes([0x00, 0xFF])),
        (-0x7F, 2, bytes([0x40, 0xFF])),
        (0x1FFF, 2, bytes([0x3F, 0xFF])),
        (-0x1FFF, 2, bytes([0x7F, 0xFF])),
        (0x3FFF, 3, bytes([0x00, 0x7F, 0xFF])),
        (-0x3FFF, 3, bytes([0x40, 0x7F, 0xFF])),
        (0x3FFFFFFFFFFFFFFF, 9, bytes([0x3F] + [0x7F] * 7 + [0xFF])),
        (-0x3FFFFFFFFFFFFFFF, 9, bytes([0x7F] + [0x7F] * 7 + [0xFF])),
        (MAX_INT64, 10, bytes([0x00] + [0x7F] * 8 + [0xFF])),
        (-MAX_INT64, 10, bytes([0x40] + [0x7F] * 8 + [0xFF])),
        (MIN_INT64, 10, bytes([0x41] + [0x00] * 8 + [0x80])),
    ],
)
def test_var_int(val, length, expected):
    assert var_int_len(val) == length
    assert encode_var_int(val) == expected


@pytest.mark.parametrize(
    "code, vlen, length, expected",
    [
        (0x20, 1, 1, bytes([0x21])),
        (0x30, 0x0D, 1, bytes([0x3D])),
        (0x40, 0x0E, 2, bytes([0x4E, 0x8E])),
        (0x50, MAX_INT64, 10, bytes([0x5E] + [0x7F] * 8 + [0xFF])),
    ],
)
def test_tag(code, vlen, length, expected):
    assert tag_len(vlen) == length
    assert encode_tag(code, vlen) == expected


@pytest.mark.parametrize("func", [uint_len, encode_uint, var_uint_len, encode_var_uint])
def test_unsigned_rejects_negative(func):
    with pytest.raises(ValueError):
        func(-1)