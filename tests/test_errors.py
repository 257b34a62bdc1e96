import pytest

from ionbinary.errors import (
    InvalidTagByteError,
    IonError,
    IonIOError,
    IonSyntaxError,
    UnexpectedEOFError,
    UnexpectedRuneError,
    UnexpectedTokenError,
    UnsupportedVersionError,
    UsageError,
)


def test_usage_error_message():
    err = UsageError("Writer.Finish", "not at top level")
    assert str(err) == "ion: usage error in Writer.Finish: not at top level"
    assert err.api == "Writer.Finish"
    assert err.msg == "not at top level"


def test_syntax_error_message():
    err = IonSyntaxError("varuint too large", 12)
    assert str(err) == "ion: syntax error: varuint too large (offset 12)"
    assert err.offset == 12


def test_invalid_tag_byte_formats_hex():
    err = InvalidTagByteError(0x3F, 7)
    assert str(err) == "ion: invalid tag byte 0x3F (offset 7)"
    assert err.byte == 0x3F


def test_unsupported_version_attributes():
    err = UnsupportedVersionError(2, 0, 4)
    assert (err.major, err.minor, err.offset) == (2, 0, 4)
    assert "2.0" in str(err)
    assert str(err).startswith("ion: unsupported version")


def test_unexpected_eof_carries_offset():
    err = UnexpectedEOFError(99)
    assert err.offset == 99
    assert str(err).startswith("ion: unexpected end of input")
    assert "99" in str(err)


def test_io_error_wraps_cause():
    cause = OSError("disk gone")
    err = IonIOError(cause)
    assert err.err is cause
    assert "disk gone" in str(err)


def test_unexpected_token_and_rune():
    tok = UnexpectedTokenError("string value contains non-UTF-8 runes", 3)
    assert tok.token == "string value contains non-UTF-8 runes"
    assert "non-UTF-8" in str(tok)
    rune = UnexpectedRuneError("x", 5)
    assert rune.rune == "x"
    assert "'x'" in str(rune)


@pytest.mark.parametrize(
    "err",
    [
        UsageError("a", "b"),
        IonIOError(OSError("x")),
        IonSyntaxError("m", 1),
        UnexpectedEOFError(1),
        UnsupportedVersionError(1, 1, 1),
        InvalidTagByteError(0, 1),
        UnexpectedRuneError("r", 1),
        UnexpectedTokenError("t", 1),
    ],
)
def test_all_errors_catchable_as_ion_error(err):
    with pytest.raises(IonError) as info:
        raise err
    assert info.value is err