"""
Run logging for respool.

Messages go to the console (coloured) and to a plain-text log file. The
module also keeps a tally of the current run: pools and strings decoded,
warnings and errors, reported by print_summary() at the end.

Usage:
    from respool.utils import log, logWarning, logError, logDebug, init_logging, print_summary

    init_logging("dump.log")
    log("String pool 0: 12 strings (utf-8)")
    logWarning("No string pools found in empty.bin")
    logError("bad.bin: Extended utf-8 length 0x85 for string 0 is not supported")
    logDebug("String pool at 0x8: 12 strings")   # log file only
    record_pool(12)
    print_summary()
"""

import sys
import atexit
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, TextIO

# ANSI color codes
class Colors:
    YELLOW = '\033[93m'
    RED = '\033[91m'
    GREEN = '\033[92m'
    BOLD = '\033[1m'
    RESET = '\033[0m'


DEFAULT_LOG_NAME = "respool.log"


@dataclass
class RunStats:
    """What the current run has decoded and reported."""
    pools: int = 0
    strings: int = 0
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


# Module state
_stats = RunStats()
_log_file: Optional[TextIO] = None
_initialized = False
_atexit_registered = False


def _timestamp() -> str:
    return datetime.now().strftime('%Y-%m-%d %H:%M:%S')


def init_logging(log_path: Path = None):
    """
    Start a run: reset the tally and open the log file.

    Args:
        log_path: Path to log file. Defaults to respool.log in the working directory
    """
    global _log_file, _initialized, _atexit_registered, _stats

    if _initialized:
        return
    _initialized = True
    _stats = RunStats()

    log_path = Path(log_path) if log_path is not None else Path.cwd() / DEFAULT_LOG_NAME
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        _log_file = open(log_path, 'w', encoding='utf-8')
    except OSError as e:
        print(f"Warning: Could not open log file {log_path}: {e}", file=sys.stderr)
        return

    _log_file.write(f"respool run started: {_timestamp()}\n\n")
    _log_file.flush()

    if not _atexit_registered:
        atexit.register(close_logging)
        _atexit_registered = True


def close_logging():
    """Close the log file and end the run."""
    global _log_file, _initialized

    if _log_file is not None:
        try:
            _log_file.write(f"\nrespool run finished: {_timestamp()}\n")
            _log_file.close()
        except (OSError, ValueError):
            pass
        _log_file = None

    _initialized = False


def _write_to_file(msg: str, end: str = "\n"):
    if _log_file is not None:
        try:
            _log_file.write(msg + end)
            _log_file.flush()
        except (OSError, ValueError):
            pass


def _emit(plain: str, console: str = None, stderr: bool = False, end: str = "\n"):
    """Print to the console (coloured if given) and write plain text to the file."""
    if not _initialized:
        init_logging()

    print(console if console is not None else plain, end=end,
          file=sys.stderr if stderr else sys.stdout)
    _write_to_file(plain, end)


def log(msg: str = "", end: str = "\n"):
    """Log an info message to both console and file."""
    _emit(msg, end=end)


def logWarning(msg: str, end: str = "\n"):
    """
    Log a warning: the output may be incomplete (e.g. a file held no pools).
    Displayed in yellow and listed in the summary.
    """
    formatted = f"Warning: {msg}"
    _emit(formatted, f"{Colors.YELLOW}{formatted}{Colors.RESET}", end=end)
    _stats.warnings.append(msg)


def logError(msg: str, end: str = "\n"):
    """
    Log an error: a file could not be decoded.
    Displayed in red on stderr and listed in the summary.
    """
    formatted = f"ERROR: {msg}"
    _emit(formatted, f"{Colors.RED}{formatted}{Colors.RESET}", stderr=True, end=end)
    _stats.errors.append(msg)


def logDebug(msg: str, end: str = "\n"):
    """
    Log a debug message to the log file only.
    Does nothing until init_logging() has opened a file.
    """
    _write_to_file(f"[DEBUG] {msg}", end)


def record_pool(string_count: int):
    """Count one decoded string pool for the summary."""
    _stats.pools += 1
    _stats.strings += string_count


def print_summary():
    """Print what the run decoded, then its errors and warnings."""
    log("=" * 70)
    log(f"Decoded {_stats.pools} string pool(s), {_stats.strings} string(s)")

    for title, messages, color in (("Errors", _stats.errors, Colors.RED),
                                   ("Warnings", _stats.warnings, Colors.YELLOW)):
        if not messages:
            continue
        heading = f"{title} ({len(messages)}):"
        _emit(heading, f"{color}{Colors.BOLD}{heading}{Colors.RESET}")
        for message in messages:
            _emit(f"  - {message}", f"  {color}- {message}{Colors.RESET}")

    errors = f"{len(_stats.errors)} Error(s)"
    warnings = f"{len(_stats.warnings)} Warning(s)"
    error_color = f"{Colors.RED}{Colors.BOLD}" if _stats.errors else Colors.GREEN
    warning_color = f"{Colors.YELLOW}{Colors.BOLD}" if _stats.warnings else Colors.GREEN
    _emit(f"{errors} | {warnings}",
          f"{error_color}{errors}{Colors.RESET} | {warning_color}{warnings}{Colors.RESET}")
