"""Shared file I/O helpers."""

from .files import read_source_text
from .json_io import load_json_file, write_json_atomic

__all__ = ["load_json_file", "read_source_text", "write_json_atomic"]
