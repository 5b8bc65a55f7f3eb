"""
Constants used across the respool modules.

Consolidates chunk type IDs, header sizes and flag bits of the compiled
resource container format.
"""

# Chunk types (u16 in the generic chunk header)
RES_STRING_POOL_TYPE = 0x0001
RES_TABLE_TYPE = 0x0002
RES_XML_TYPE = 0x0003

# Chunk types that hold nested chunks after their own header
CONTAINER_CHUNK_TYPES = (RES_TABLE_TYPE, RES_XML_TYPE)

# u16 type + u16 header_size + u32 size
CHUNK_HEADER_SIZE = 8

# string_count, style_count, flags, string_start, style_start (5 x u32)
STRING_POOL_HEADER_SIZE = 20

# String pool flags
SORTED_FLAG = 1 << 0
UTF8_FLAG = 1 << 8

# Reserved string reference meaning "no string"
NO_ENTRY = 0xFFFFFFFF

# Longest lengths representable without the extended (high bit) form
MAX_UTF8_SHORT_LENGTH = 0x7F
MAX_UTF16_SHORT_LENGTH = 0x7FFF
