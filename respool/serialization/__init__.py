"""
Serialization Package

Builds binary chunks in the compiled resource container format:
- String pool chunks (string_pool_writer)
- Generic container chunks wrapping nested chunks
"""

from .string_pool_writer import (
    build_string_pool,
    build_chunk,
    encode_utf8_entry,
    encode_utf16_entry,
)
