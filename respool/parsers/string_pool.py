"""
String Pool Chunk Parser

Parses the string pool chunk (type 0x0001) of compiled resource containers.
Every other chunk refers to text by index into one of these pools.

Chunk format (after the 8-byte generic chunk header):
- Header (20 bytes):
  - u32 string_count
  - u32 style_count (must be 0, style spans are not decoded)
  - u32 flags (bit 8 set: UTF-8 pool, clear: UTF-16 pool)
  - u32 string_start (relative to the start of this header)
  - u32 style_start (relative to the start of this header)
- Offset table:
  - u32 offset per string, relative to the string data region
- String data:
  - UTF-8:  u8 (unused), u8 length, [length bytes], u8 0
  - UTF-16: u16 length, [length u16 code units], u16 0

The chunk's declared size is authoritative: after decoding, the stream is
left at the end of the chunk regardless of padding or unused bytes.
"""

import io
import struct
from pathlib import Path
from typing import BinaryIO, Iterator, List, Optional, Sequence, Tuple, Union
from dataclasses import dataclass

import numpy as np

from .base import ChunkHeader, ChunkReader, read_chunk_header
from ..constants import (
    RES_STRING_POOL_TYPE,
    STRING_POOL_HEADER_SIZE,
    SORTED_FLAG,
    UTF8_FLAG,
    NO_ENTRY,
)
from ..errors import ParseError, StringDecodeError, UnsupportedExtendedLength, UnsupportedStyleSpans
from ..utils.binary import read_exact, read_u8, read_u16, seek_relative
from ..utils.logging import logDebug


@dataclass(frozen=True)
class StringPoolHeader:
    """String pool header data."""
    chunk_header: ChunkHeader
    string_count: int
    style_count: int
    flags: int
    string_start: int
    style_start: int

    @classmethod
    def read(cls, stream: BinaryIO, chunk_header: ChunkHeader) -> 'StringPoolHeader':
        """
        Read the header record from the current stream position.

        No validation is done here. The stream is left at the start of the
        offset table.

        Args:
            stream: Binary stream positioned just after the generic chunk header
            chunk_header: The generic header of this chunk

        Returns:
            StringPoolHeader instance

        Raises:
            ReadError: If the 20 header bytes cannot be read
        """
        (string_count, style_count, flags,
         string_start, style_start) = struct.unpack('<5I', read_exact(stream, STRING_POOL_HEADER_SIZE))

        return cls(
            chunk_header=chunk_header,
            string_count=string_count,
            style_count=style_count,
            flags=flags,
            string_start=string_start,
            style_start=style_start
        )

    @property
    def is_utf8(self) -> bool:
        """True if every string in the pool is UTF-8 encoded."""
        return bool(self.flags & UTF8_FLAG)

    @property
    def is_sorted(self) -> bool:
        return bool(self.flags & SORTED_FLAG)

    @property
    def encoding(self) -> str:
        return 'utf-8' if self.is_utf8 else 'utf-16'


class StringPool:
    """
    Decoded string pool chunk.

    Strings are plain immutable str objects; every lookup hands out the same
    object, so resources that reference one entry share a single copy.

    Usage:
        header = read_chunk_header(stream)
        pool = StringPool.read(stream, header)
        name = pool.get(42)
    """

    HEADER_SIZE = STRING_POOL_HEADER_SIZE

    def __init__(self, header: StringPoolHeader, strings: Sequence[str],
                 offsets: Optional[Sequence[int]] = None):
        """
        Args:
            header: Parsed string pool header
            strings: Decoded strings, one per header.string_count
            offsets: Offset of each string inside the string data region
        """
        if len(strings) != header.string_count:
            raise ValueError(
                f"String count mismatch: {len(strings)} vs header's {header.string_count}"
            )
        self.header = header
        self._strings: Tuple[str, ...] = tuple(strings)
        self.offsets: Tuple[int, ...] = tuple(offsets) if offsets is not None else ()

    @classmethod
    def read(cls, stream: BinaryIO, chunk_header: ChunkHeader) -> 'StringPool':
        """
        Decode a string pool chunk.

        Args:
            stream: Seekable stream positioned at the chunk body
                (just after the generic chunk header)
            chunk_header: The generic header of this chunk

        Returns:
            StringPool instance; the stream is left at the end of the chunk

        Raises:
            ReadError: If the stream ends early
            UnsupportedStyleSpans: If the pool declares style spans
            UnsupportedExtendedLength: If a string uses the extended length form
            StringDecodeError: If a string is not valid text
        """
        header = StringPoolHeader.read(stream, chunk_header)
        if header.style_count != 0:
            raise UnsupportedStyleSpans(header.style_count)

        # Anchor for all offset arithmetic: just past the 20 header bytes
        data_start = stream.tell()

        offsets = cls._read_offsets(stream, header.string_count)

        # string_start counts from the start of the header record
        string_data_start = seek_relative(stream, data_start, header.string_start - cls.HEADER_SIZE)

        logDebug(f"String pool at 0x{data_start - cls.HEADER_SIZE:X}: {header.string_count} strings, "
                 f"{header.encoding}, data at 0x{string_data_start:X}, size {chunk_header.size}")

        decode = _decode_utf8_string if header.is_utf8 else _decode_utf16_string
        strings: List[str] = []
        for index, offset in enumerate(offsets):
            seek_relative(stream, string_data_start, offset)
            strings.append(decode(stream, index))

        seek_relative(stream, data_start, chunk_header.size - cls.HEADER_SIZE)

        return cls(header, strings, offsets)

    @staticmethod
    def _read_offsets(stream: BinaryIO, count: int) -> List[int]:
        """Read the u32 offset table using numpy for efficiency."""
        if count == 0:
            return []
        data = read_exact(stream, count * 4)
        return np.frombuffer(data, dtype='<u4').tolist()

    @classmethod
    def from_bytes(cls, data: bytes) -> 'StringPool':
        """
        Decode a string pool from bytes starting with its generic chunk header.
        """
        return cls._read_first_chunk(io.BytesIO(data), "<bytes>")

    @classmethod
    def from_file(cls, filepath: Union[str, Path]) -> 'StringPool':
        """
        Decode a file whose first chunk is a string pool.

        Args:
            filepath: Path to the file

        Returns:
            StringPool instance
        """
        filepath = Path(filepath)
        with open(filepath, 'rb') as f:
            return cls._read_first_chunk(f, str(filepath))

    @classmethod
    def _read_first_chunk(cls, stream: BinaryIO, source: str) -> 'StringPool':
        chunk_header = read_chunk_header(stream)
        if chunk_header.chunk_type != RES_STRING_POOL_TYPE:
            raise ParseError(
                f"Expected string pool chunk (0x{RES_STRING_POOL_TYPE:04X}) in {source}, "
                f"found 0x{chunk_header.chunk_type:04X}"
            )
        return cls.read(stream, chunk_header)

    @property
    def strings(self) -> Tuple[str, ...]:
        """All decoded strings in offset-table order."""
        return self._strings

    @property
    def is_utf8(self) -> bool:
        return self.header.is_utf8

    def get(self, index: int) -> Optional[str]:
        """
        Look up a string by index.

        Args:
            index: String index, or NO_ENTRY (0xFFFFFFFF) for "no string"

        Returns:
            The string, or None for NO_ENTRY

        Raises:
            IndexError: If index is neither NO_ENTRY nor a valid position
        """
        if index == NO_ENTRY:
            return None
        if index < 0 or index >= len(self._strings):
            raise IndexError(f"String index {index} out of range [0, {len(self._strings)})")
        return self._strings[index]

    def __getitem__(self, index: int) -> str:
        return self._strings[index]

    def __len__(self) -> int:
        return len(self._strings)

    def __iter__(self) -> Iterator[str]:
        return iter(self._strings)

    def __repr__(self) -> str:
        return (f"StringPool(string_count={self.header.string_count}, "
                f"encoding={self.header.encoding!r})")


def _decode_utf8_string(stream: BinaryIO, index: int) -> str:
    """Decode one UTF-8 pool entry at the current stream position."""
    # First byte is the UTF-16 length, unused here
    read_u8(stream)
    length = read_u8(stream)

    if length & 0x80:
        raise UnsupportedExtendedLength('utf-8', length, index)

    raw = read_exact(stream, length)
    try:
        text = raw.decode('utf-8')
    except UnicodeDecodeError as e:
        raise StringDecodeError('utf-8', str(e), index) from e

    # Terminator is not counted in length
    read_u8(stream)
    return text


def _decode_utf16_string(stream: BinaryIO, index: int) -> str:
    """Decode one UTF-16 pool entry at the current stream position."""
    length = read_u16(stream)

    if length & 0x8000:
        raise UnsupportedExtendedLength('utf-16', length, index)

    raw = read_exact(stream, length * 2)
    try:
        text = raw.decode('utf-16-le')
    except UnicodeDecodeError as e:
        raise StringDecodeError('utf-16', str(e), index) from e

    read_u16(stream)
    return text


def find_string_pools(stream: BinaryIO, reader: Optional[ChunkReader] = None) -> List[StringPool]:
    """
    Decode every string pool in a chunk stream.

    Walks sibling chunks from the current position and descends into
    resource table and XML document containers.

    Args:
        stream: Seekable binary stream positioned at the first chunk
        reader: Reader over a sub-region (used when descending)

    Returns:
        String pools in the order they appear
    """
    if reader is None:
        reader = ChunkReader(stream)

    pools: List[StringPool] = []
    for chunk_header in reader:
        if chunk_header.chunk_type == RES_STRING_POOL_TYPE:
            pools.append(StringPool.read(stream, chunk_header))
        elif chunk_header.is_container:
            pools.extend(find_string_pools(stream, reader.children(chunk_header)))
        else:
            logDebug(f"Skipping chunk 0x{chunk_header.chunk_type:04X} at 0x{chunk_header.offset:X}")
    return pools
