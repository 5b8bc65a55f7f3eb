"""
Binary Stream Utilities

Primitive readers and writers for the little-endian integers used by the
resource chunk formats.
"""

import struct
import io
from typing import BinaryIO, Union

from ..errors import ReadError

READ_BLOCK_SIZE = 64 * 1024


def read_exact(stream: BinaryIO, size: int) -> bytes:
    """
    Read exactly `size` bytes from a stream.

    Args:
        stream: Readable binary stream
        size: Number of bytes to read

    Returns:
        The bytes read

    Raises:
        ReadError: If the stream ends before `size` bytes are available
    """
    offset = stream.tell()
    if size <= READ_BLOCK_SIZE:
        data = stream.read(size)
    else:
        # Buffered readers allocate the full request size up front
        parts = []
        remaining = size
        while remaining:
            part = stream.read(min(remaining, READ_BLOCK_SIZE))
            if not part:
                break
            parts.append(part)
            remaining -= len(part)
        data = b''.join(parts)
    if len(data) != size:
        raise ReadError(offset, size, len(data))
    return data


def read_u8(stream: BinaryIO) -> int:
    """Read an unsigned 8-bit integer."""
    return read_exact(stream, 1)[0]


def read_u16(stream: BinaryIO) -> int:
    """Read a little-endian unsigned 16-bit integer."""
    return struct.unpack('<H', read_exact(stream, 2))[0]


def read_u32(stream: BinaryIO) -> int:
    """Read a little-endian unsigned 32-bit integer."""
    return struct.unpack('<I', read_exact(stream, 4))[0]


def seek_relative(stream: BinaryIO, anchor: int, offset: int) -> int:
    """
    Seek to a position expressed as region base + relative offset.

    Args:
        stream: Seekable binary stream
        anchor: Absolute position of the region start
        offset: Byte offset inside the region (may be negative)

    Returns:
        The new absolute stream position
    """
    target = anchor + offset
    if target < 0:
        raise ValueError(f"Seek before start of stream: anchor {anchor} + offset {offset}")
    return stream.seek(target, io.SEEK_SET)


def write_chunk_header(buffer: Union[BinaryIO, io.BytesIO], chunk_type: int,
                       header_size: int, size: int):
    """
    Write a generic chunk header.

    Chunk header format:
    - u16 chunk_type
    - u16 header_size
    - u32 size (bytes of chunk body following this header)

    Args:
        buffer: Output buffer
        chunk_type: Chunk type ID
        header_size: Size of the chunk's type-specific header
        size: Size of data that will follow
    """
    buffer.write(struct.pack('<HHI', chunk_type, header_size, size))
