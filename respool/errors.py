"""
Decode errors raised by the respool parsers.

All of them derive from ValueError so callers that already treat malformed
binary data as a ValueError keep working.
"""

from typing import Optional


class ParseError(ValueError):
    """Base class for every string pool decode failure."""


class ReadError(ParseError):
    """The stream could not supply the requested bytes."""

    def __init__(self, offset: int, expected: int, actual: int):
        self.offset = offset
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Short read at offset {offset}: expected {expected} bytes, got {actual}"
        )


class UnsupportedStyleSpans(ParseError):
    """String pool declares style spans, which are not decoded."""

    def __init__(self, style_count: int):
        self.style_count = style_count
        super().__init__(f"Style spans are not supported (style_count={style_count})")


class UnsupportedExtendedLength(ParseError):
    """A string length prefix uses the extended (high bit) form."""

    def __init__(self, encoding: str, length: int, index: Optional[int] = None):
        self.encoding = encoding
        self.length = length
        self.index = index
        where = f" for string {index}" if index is not None else ""
        super().__init__(
            f"Extended {encoding} length 0x{length:X}{where} is not supported"
        )


class StringDecodeError(ParseError):
    """String payload is not valid text in the pool's encoding."""

    def __init__(self, encoding: str, reason: str, index: Optional[int] = None):
        self.encoding = encoding
        self.reason = reason
        self.index = index
        where = f" string {index}" if index is not None else " string"
        super().__init__(f"Invalid {encoding}{where}: {reason}")
