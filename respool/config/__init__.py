#!/usr/bin/env python3
"""
Config module for dump tool configuration handling.
"""

from .dump_config import DumpConfig, OUTPUT_FORMATS

__all__ = ['DumpConfig', 'OUTPUT_FORMATS']
