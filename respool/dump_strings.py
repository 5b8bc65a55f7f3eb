#!/usr/bin/env python3
"""
Dump String Pools

Prints every string pool found in a resource container (or in a file
holding a bare string pool chunk).

Chunk sizes are read as the body length after the 8-byte chunk header, and
string_start is measured from the string pool header. Compiled Android
resources.arsc and binary XML files include the chunk header in both, so
they are not read by this tool.

Usage:
    respool-dump resources.bin
    respool-dump resources.bin --json strings.json
    respool-dump resources.bin --config respool.ini --show-offsets
"""

import sys
import argparse
import json
from dataclasses import replace
from pathlib import Path
from typing import Dict, List, Optional

from .config import DumpConfig, OUTPUT_FORMATS
from .errors import ParseError
from .parsers import StringPool, find_string_pools
from .utils import log, logWarning, logError, init_logging, close_logging, print_summary, record_pool


def load_string_pools(input_path: Path) -> List[StringPool]:
    """
    Decode all string pools in a file.

    Args:
        input_path: Path to the container file

    Returns:
        Decoded pools in file order
    """
    with open(input_path, 'rb') as f:
        return find_string_pools(f)


def pool_to_dict(pool: StringPool, config: DumpConfig) -> Dict:
    """Convert a pool to a JSON-serializable dict."""
    result = {
        'string_count': pool.header.string_count,
        'encoding': pool.header.encoding,
        'sorted': pool.header.is_sorted,
        'strings': [config.truncate(s) for s in pool.strings],
    }
    if config.show_offsets:
        result['offsets'] = list(pool.offsets)
    return result


def print_pools(pools: List[StringPool], config: DumpConfig):
    """Print pools as text through the log."""
    for pool_index, pool in enumerate(pools):
        header = pool.header
        sorted_note = ", sorted" if header.is_sorted else ""
        log(f"String pool {pool_index}: {header.string_count} strings ({header.encoding}{sorted_note})")

        for index, text in enumerate(pool.strings):
            if config.show_offsets:
                log(f"  [{index}] @0x{pool.offsets[index]:X} {config.truncate(text)!r}")
            else:
                log(f"  [{index}] {config.truncate(text)!r}")
        log()


def dump(input_path: Path, config: DumpConfig, json_path: Optional[Path] = None) -> bool:
    """
    Decode and output string pools.

    Returns:
        True if the file was decoded
    """
    try:
        pools = load_string_pools(input_path)
    except ParseError as e:
        logError(f"{input_path}: {e}")
        return False

    for pool in pools:
        record_pool(len(pool))

    if not pools:
        logWarning(f"No string pools found in {input_path}")

    if json_path is not None:
        data = [pool_to_dict(pool, config) for pool in pools]
        json_path.parent.mkdir(parents=True, exist_ok=True)
        with open(json_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        log(f"Wrote {len(pools)} string pool(s) to {json_path}")
    elif config.format == 'json':
        data = [pool_to_dict(pool, config) for pool in pools]
        log(json.dumps(data, indent=2, ensure_ascii=False))
    else:
        print_pools(pools, config)

    return True


def main(argv: Optional[List[str]] = None) -> int:
    """Dump string pools from the command line; returns the exit code."""
    parser = argparse.ArgumentParser(
        description='Dump string pools from a resource container',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example:
    respool-dump resources.bin

    # Write JSON instead of printing:
    respool-dump resources.bin --json strings.json

    # Settings from an INI file, overridden by flags:
    respool-dump resources.bin --config respool.ini --max-length 40

Note: chunk sizes exclude the 8-byte chunk header. Compiled Android
resources.arsc files count it, so they are not supported.
        """
    )

    parser.add_argument('input',
                        help='Container or string pool file to read')
    parser.add_argument('--config', default=None,
                        help='Path to INI configuration file')
    parser.add_argument('--json', default=None,
                        help='Write pools as JSON to this path')
    parser.add_argument('--format', choices=OUTPUT_FORMATS, default=None,
                        help='Console output format')
    parser.add_argument('--show-offsets', action='store_true', default=None,
                        help="Show each string's offset in the string data region")
    parser.add_argument('--max-length', type=int, default=None,
                        help='Truncate displayed strings to this many characters')
    parser.add_argument('--log-file', default=None,
                        help='Path to log file (default: respool.log)')
    args = parser.parse_args(argv)

    try:
        config = DumpConfig.from_file(args.config) if args.config else DumpConfig()

        # Flags override file settings
        overrides = {}
        if args.format is not None:
            overrides['format'] = args.format
        if args.show_offsets:
            overrides['show_offsets'] = True
        if args.max_length is not None:
            overrides['max_length'] = args.max_length
        if args.log_file is not None:
            overrides['log_file'] = args.log_file
        config = replace(config, **overrides)
    except (FileNotFoundError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    init_logging(Path(config.log_file) if config.log_file else None)

    try:
        input_path = Path(args.input)
        if not input_path.exists():
            logError(f"Input file not found: {input_path}")
            decoded = False
        else:
            decoded = dump(input_path, config, Path(args.json) if args.json else None)

        print_summary()
        return 0 if decoded else 1
    finally:
        close_logging()


if __name__ == '__main__':
    sys.exit(main())
