"""
Resource Container Chunk Parsers

This package provides parser classes for compiled resource container chunks:

- base: Shared utilities (ChunkHeader, read_chunk_header, ChunkReader)
- string_pool: StringPool for string pool chunks (type 0x0001)

Usage:
    from respool.parsers import StringPool, read_chunk_header, find_string_pools

    # Single string pool chunk
    pool = StringPool.from_file("strings.bin")
    print(pool.get(0))

    # All string pools in a container
    with open("resources.bin", "rb") as f:
        for pool in find_string_pools(f):
            print(len(pool), "strings")
"""

# Base utilities
from .base import (
    ChunkHeader,
    ChunkReader,
    read_chunk_header,
)

# String pool parser
from .string_pool import (
    StringPool,
    StringPoolHeader,
    find_string_pools,
)

__all__ = [
    # Base
    'ChunkHeader',
    'ChunkReader',
    'read_chunk_header',
    # String pool
    'StringPool',
    'StringPoolHeader',
    'find_string_pools',
]
