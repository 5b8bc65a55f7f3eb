#!/usr/bin/env python3
"""
Dump Configuration

Parser for the INI file that controls how respool-dump prints string pools.

INI Format:
    [output]
    format = text          ; text or json
    show_offsets = false   ; print each string's offset in the data region
    max_length = 0         ; truncate displayed strings, 0 = no limit

    [logging]
    log_file = respool.log

Every key is optional.
"""

import configparser
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

OUTPUT_FORMATS = ('text', 'json')


@dataclass
class DumpConfig:
    """Settings for dumping string pools"""
    format: str = 'text'
    show_offsets: bool = False
    max_length: int = 0  # 0 = no truncation
    log_file: Optional[str] = None  # None = respool.log in working directory

    def __post_init__(self):
        """Validate configuration"""
        if self.format not in OUTPUT_FORMATS:
            raise ValueError(f"Unknown output format '{self.format}' (expected one of {', '.join(OUTPUT_FORMATS)})")

        if self.max_length < 0:
            raise ValueError(f"max_length must be >= 0, got {self.max_length}")

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> 'DumpConfig':
        """
        Load configuration from an INI file.

        Args:
            config_path: Path to the INI file

        Returns:
            DumpConfig instance
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        config = configparser.ConfigParser(inline_comment_prefixes=(';', '#'))
        config.read(config_path, encoding='utf-8')

        kwargs = {}
        if config.has_section('output'):
            output = config['output']
            if 'format' in output:
                kwargs['format'] = output.get('format').strip().lower()
            if 'show_offsets' in output:
                kwargs['show_offsets'] = output.getboolean('show_offsets')
            if 'max_length' in output:
                kwargs['max_length'] = output.getint('max_length')

        if config.has_section('logging'):
            log_file = config['logging'].get('log_file', '').strip()
            if log_file:
                kwargs['log_file'] = log_file

        return cls(**kwargs)

    def truncate(self, text: str) -> str:
        """Shorten text for display according to max_length."""
        if self.max_length and len(text) > self.max_length:
            return text[:self.max_length] + '...'
        return text
