"""
Base utilities for resource container chunk parsing.

This module provides shared utilities used by all parser classes:
- ChunkHeader: The generic header that prefixes every chunk
- read_chunk_header: Read a ChunkHeader from a stream
- ChunkReader: Iterator over sibling chunks in a region of a stream
"""

import io
import struct
from typing import BinaryIO, Iterator, Optional
from dataclasses import dataclass

from ..constants import CHUNK_HEADER_SIZE, CONTAINER_CHUNK_TYPES
from ..utils.binary import read_exact


@dataclass(frozen=True)
class ChunkHeader:
    """
    Generic chunk header.

    Layout:
    - u16 chunk_type
    - u16 header_size (size of the type-specific header that starts the body)
    - u32 size (bytes of chunk body following this 8-byte header)

    The size excludes the 8 generic header bytes. Compiled Android
    containers (resources.arsc, binary XML) count those bytes in the size
    and measure string_start from the chunk start, so their files are not
    read by this layout.
    """
    chunk_type: int
    header_size: int
    size: int
    offset: int = 0  # Stream position where this header starts

    @property
    def body_offset(self) -> int:
        """Position of the first byte after the generic header."""
        return self.offset + CHUNK_HEADER_SIZE

    @property
    def end_offset(self) -> int:
        """Position of the first byte after the whole chunk."""
        return self.body_offset + self.size

    @property
    def is_container(self) -> bool:
        return self.chunk_type in CONTAINER_CHUNK_TYPES


def read_chunk_header(stream: BinaryIO) -> ChunkHeader:
    """
    Read a chunk header from the current stream position.

    Args:
        stream: Seekable binary stream

    Returns:
        ChunkHeader; the stream is left at the chunk body

    Raises:
        ReadError: If fewer than 8 bytes remain
    """
    offset = stream.tell()
    chunk_type, header_size, size = struct.unpack('<HHI', read_exact(stream, CHUNK_HEADER_SIZE))
    return ChunkHeader(chunk_type=chunk_type, header_size=header_size, size=size, offset=offset)


class ChunkReader:
    """
    Iterator over sibling chunks stored back to back in a stream region.

    Each iteration reads one generic header and leaves the stream positioned
    at that chunk's body, so the caller can hand the header and the stream to
    a type-specific decoder. The next iteration seeks past the chunk using its
    declared size, no matter how much of the body the caller consumed.

    Usage:
        reader = ChunkReader(stream)
        for header in reader:
            if header.chunk_type == RES_STRING_POOL_TYPE:
                pool = StringPool.read(stream, header)
    """

    def __init__(self, stream: BinaryIO, start: Optional[int] = None, end: Optional[int] = None):
        """
        Initialize chunk reader.

        Args:
            stream: Seekable binary stream containing chunks
            start: Position of the first chunk (default: current position)
            end: Position where the region ends (default: end of stream)
        """
        self.stream = stream
        self.offset = stream.tell() if start is None else start
        if end is None:
            current = stream.tell()
            end = stream.seek(0, io.SEEK_END)
            stream.seek(current)
        self.end = end

    def __iter__(self) -> Iterator[ChunkHeader]:
        """Iterate over all chunks in the region."""
        return self

    def __next__(self) -> ChunkHeader:
        """Read the next chunk header."""
        if not self.has_more:
            raise StopIteration

        self.stream.seek(self.offset)
        header = read_chunk_header(self.stream)

        if header.end_offset > self.end:
            # Truncated chunk, stop at the last complete one
            self.offset = self.end
            raise StopIteration

        self.offset = header.end_offset
        return header

    def children(self, header: ChunkHeader) -> 'ChunkReader':
        """
        Create a reader over the chunks nested inside a container chunk.

        Nested chunks start after the container's own type-specific header.
        """
        start = header.body_offset + header.header_size
        return ChunkReader(self.stream, start=start, end=header.end_offset)

    @property
    def has_more(self) -> bool:
        """Check if there is room for another chunk header."""
        return self.offset + CHUNK_HEADER_SIZE <= self.end
