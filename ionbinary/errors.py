"""Exceptions raised while reading or writing Ion data."""

from __future__ import annotations


class IonError(Exception):
    """Base class for every error raised by this package."""


class UsageError(IonError):
    """A reader or writer was used in an inappropriate way."""

    def __init__(self, api: str, msg: str) -> None:
        self.api = api
        self.msg = msg
        super().__init__(f"ion: usage error in {api}: {msg}")


class IonIOError(IonError):
    """Reading from or writing to an underlying stream failed."""

    def __init__(self, err: BaseException) -> None:
        self.err = err
        super().__init__(f"ion: i/o error: {err}")


class IonSyntaxError(IonError):
    """Invalid input for which no more specific error exists."""

    def __init__(self, msg: str, offset: int) -> None:
        self.msg = msg
        self.offset = offset
        super().__init__(f"ion: syntax error: {msg} (offset {offset})")


class UnexpectedEOFError(IonError):
    """The input ended in the middle of a value."""

    def __init__(self, offset: int) -> None:
        self.offset = offset
        super().__init__(f"ion: unexpected end of input (offset {offset})")


class UnsupportedVersionError(IonError):
    """A binary version marker names a version that is not understood."""

    def __init__(self, major: int, minor: int, offset: int) -> None:
        self.major = major
        self.minor = minor
        self.offset = offset
        super().__init__(
            f"ion: unsupported version {major}.{minor} (offset {offset})"
        )


class InvalidTagByteError(IonError):
    """A binary reader met a tag byte that is not valid."""

    def __init__(self, byte: int, offset: int) -> None:
        self.byte = byte
        self.offset = offset
        super().__init__(f"ion: invalid tag byte 0x{byte:02X} (offset {offset})")


class UnexpectedRuneError(IonError):
    """A text reader met a character it did not expect."""

    def __init__(self, rune: str, offset: int) -> None:
        self.rune = rune
        self.offset = offset
        super().__init__(f"ion: unexpected rune {rune!r} (offset {offset})")


class UnexpectedTokenError(IonError):
    """A reader met a token it did not expect."""

    def __init__(self, token: str, offset: int) -> None:
        self.token = token
        self.offset = offset
        super().__init__(f"ion: unexpected token '{token}' (offset {offset})")