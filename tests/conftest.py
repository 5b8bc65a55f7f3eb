"""
Shared fixtures for respool tests.
"""

import io
import struct

import pytest

from respool.constants import RES_STRING_POOL_TYPE, STRING_POOL_HEADER_SIZE
from respool.parsers import read_chunk_header
from respool.utils import close_logging


@pytest.fixture(autouse=True)
def isolated_logging(tmp_path, monkeypatch):
    """Keep log files out of the source tree and reset logger state."""
    monkeypatch.chdir(tmp_path)
    yield
    close_logging()


def pool_body(string_count, flags, string_start, offsets, data, style_count=0, style_start=0):
    """Raw string pool body: 20-byte header, offset table, string data."""
    header = struct.pack('<5I', string_count, style_count, flags, string_start, style_start)
    table = b''.join(struct.pack('<I', offset) for offset in offsets)
    return header + table + data


def pool_chunk(body, size=None):
    """Prefix a body with a string pool generic chunk header."""
    if size is None:
        size = len(body)
    return struct.pack('<HHI', RES_STRING_POOL_TYPE, STRING_POOL_HEADER_SIZE, size) + body


def open_chunk(data, start=0):
    """Return (stream, chunk_header) with the stream at the chunk body."""
    stream = io.BytesIO(data)
    stream.seek(start)
    return stream, read_chunk_header(stream)
