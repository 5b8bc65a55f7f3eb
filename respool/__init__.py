"""
respool: decoder for string pool chunks of compiled resource containers.
"""

from .errors import (
    ParseError,
    ReadError,
    StringDecodeError,
    UnsupportedExtendedLength,
    UnsupportedStyleSpans,
)
from .parsers import (
    ChunkHeader,
    ChunkReader,
    StringPool,
    StringPoolHeader,
    find_string_pools,
    read_chunk_header,
)

__version__ = "0.1.0"
