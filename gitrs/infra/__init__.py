"""
Infrastructure layer for gitrs.

Contains the pieces that touch durable storage:
- upsert_file / read_file: compressed content in the control directory
- write_seed_file: plain-text seed files written at init time
"""

from .file_store import (
    DEFAULT_COMPRESSION_LEVEL,
    read_file,
    upsert_file,
    write_seed_file,
)

__all__ = [
    'DEFAULT_COMPRESSION_LEVEL',
    'read_file',
    'upsert_file',
    'write_seed_file',
]
