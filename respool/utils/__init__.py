# respool utilities
from .logging import (
    log, logWarning, logError, logDebug, init_logging, close_logging,
    print_summary, record_pool,
)
from .binary import read_exact, read_u8, read_u16, read_u32, seek_relative, write_chunk_header
