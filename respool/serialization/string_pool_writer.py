"""
String Pool Builder

Creates string pool chunks (type 0x0001) and wraps chunks into containers.
The output is what StringPool.read() decodes.
"""

import struct
import io
from typing import Dict, List, Sequence

from ..constants import (
    RES_STRING_POOL_TYPE,
    STRING_POOL_HEADER_SIZE,
    SORTED_FLAG,
    UTF8_FLAG,
    MAX_UTF8_SHORT_LENGTH,
    MAX_UTF16_SHORT_LENGTH,
)
from ..utils.binary import write_chunk_header


def encode_utf8_entry(text: str) -> bytes:
    """
    Encode one UTF-8 pool entry.

    Structure:
    - u8 UTF-16 length of the string
    - u8 UTF-8 byte length
    - [bytes]
    - u8 0
    """
    data = text.encode('utf-8')
    if len(data) > MAX_UTF8_SHORT_LENGTH:
        raise ValueError(
            f"UTF-8 string of {len(data)} bytes exceeds short length form "
            f"({MAX_UTF8_SHORT_LENGTH}): {text[:20]!r}..."
        )
    utf16_length = len(text.encode('utf-16-le')) // 2
    return bytes([utf16_length, len(data)]) + data + b'\x00'


def encode_utf16_entry(text: str) -> bytes:
    """
    Encode one UTF-16 pool entry.

    Structure:
    - u16 length in code units
    - [code units]
    - u16 0
    """
    data = text.encode('utf-16-le')
    length = len(data) // 2
    if length > MAX_UTF16_SHORT_LENGTH:
        raise ValueError(
            f"UTF-16 string of {length} code units exceeds short length form "
            f"({MAX_UTF16_SHORT_LENGTH})"
        )
    return struct.pack('<H', length) + data + b'\x00\x00'


def build_string_pool(strings: Sequence[str], utf8: bool = True, sorted_flag: bool = False,
                      deduplicate: bool = False, padding: int = 0) -> bytes:
    """
    Create a complete string pool chunk, generic header included.

    Args:
        strings: Strings in index order
        utf8: Encode as UTF-8 (True) or UTF-16 (False)
        sorted_flag: Set the sorted flag in the header
        deduplicate: Store identical strings once and share their offset
        padding: Extra zero bytes appended after the string data

    Returns:
        Chunk bytes

    Raises:
        ValueError: If a string does not fit the short length form
    """
    encode = encode_utf8_entry if utf8 else encode_utf16_entry

    data = io.BytesIO()
    offsets: List[int] = []
    seen: Dict[str, int] = {}
    for text in strings:
        if deduplicate and text in seen:
            offsets.append(seen[text])
            continue
        offset = data.tell()
        data.write(encode(text))
        seen[text] = offset
        offsets.append(offset)

    # String data is 4-byte aligned
    remainder = data.tell() % 4
    if remainder:
        data.write(b'\x00' * (4 - remainder))

    flags = 0
    if utf8:
        flags |= UTF8_FLAG
    if sorted_flag:
        flags |= SORTED_FLAG

    string_start = STRING_POOL_HEADER_SIZE + 4 * len(offsets)
    body_size = string_start + data.tell() + padding

    buffer = io.BytesIO()
    write_chunk_header(buffer, RES_STRING_POOL_TYPE, STRING_POOL_HEADER_SIZE, body_size)

    # string_count, style_count, flags, string_start, style_start
    buffer.write(struct.pack('<5I', len(offsets), 0, flags, string_start, 0))

    # Offset table
    for offset in offsets:
        buffer.write(struct.pack('<I', offset))

    buffer.write(data.getvalue())
    buffer.write(b'\x00' * padding)

    return buffer.getvalue()


def build_chunk(chunk_type: int, header: bytes, children: Sequence[bytes] = ()) -> bytes:
    """
    Create a chunk from its type-specific header and nested chunks.

    Used for container chunks (resource table, XML document) that hold other
    chunks after their own header.

    Args:
        chunk_type: Chunk type ID
        header: Type-specific header bytes
        children: Complete nested chunks, generic headers included

    Returns:
        Chunk bytes
    """
    body = b''.join(children)
    buffer = io.BytesIO()
    write_chunk_header(buffer, chunk_type, len(header), len(header) + len(body))
    buffer.write(header)
    buffer.write(body)
    return buffer.getvalue()
