"""
File store infrastructure for gitrs.

Persists payloads inside a control directory:
- zlib (deflate) compression, no header, checksum or type tag of our own
- Atomic overwrites (write to temp, then rename)
- Automatic parent directory creation

There is no locking. Concurrent writers to the same control directory must
be serialized by the caller.
"""

import logging
import os
import tempfile
import zlib
from pathlib import Path
from typing import Optional, Sequence

from ..domain.repository import Repository
from ..exit_codes import ReadError, WriteError
from ..paths import get_path_to_file, repo_file, repo_path

logger = logging.getLogger(__name__)

DEFAULT_COMPRESSION_LEVEL = zlib.Z_DEFAULT_COMPRESSION


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def _write_atomic(path: Path, data: bytes) -> None:
    """Write data atomically using temp file and rename."""
    # Write to temp file in same directory
    fd, temp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp"
    )

    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(data)

        # mkstemp creates 0600; give the file the mode a plain open() would
        os.chmod(temp_path, 0o666 & ~_current_umask())

        # Atomic rename
        os.replace(temp_path, path)

    except BaseException:
        # Clean up temp file on error
        try:
            os.unlink(temp_path)
        except FileNotFoundError:
            pass
        raise


def write_seed_file(path: Path, text: str) -> None:
    """
    Write plain UTF-8 text to ``path``, replacing any previous content.

    Args:
        path: Target file; its parent directory must exist
        text: Content to store uncompressed
    """
    try:
        _write_atomic(Path(path), text.encode('utf-8'))
    except OSError as e:
        raise WriteError(f"Could not write to file {path}: {e}", path) from e


def upsert_file(repo: Repository, segments: Sequence[str], payload: bytes,
                level: Optional[int] = None) -> Path:
    """
    Compress ``payload`` and store it at ``segments`` under the control root.

    Missing parent directories are created. Existing content is replaced
    wholesale; nothing is appended or merged.

    Args:
        repo: Repository handle
        segments: Path components of the target file
        payload: Bytes to compress and store
        level: zlib compression level (-1 for the zlib default, 0-9)

    Returns:
        Path of the written file

    Raises:
        NotADirError: The immediate parent directory exists as a file
        PathResolutionError: Parent directories could not be created,
            including when a file sits further up the chain
        WriteError: payload is not bytes-like, or compression or the
            write itself failed
    """
    if level is None:
        level = DEFAULT_COMPRESSION_LEVEL

    target = repo_path(repo, segments)
    try:
        data = memoryview(payload)
    except TypeError as e:
        raise WriteError(f"Payload for {target} must be bytes-like: {e}", target) from e

    try:
        compressed = zlib.compress(data, level)
    except zlib.error as e:
        raise WriteError(f"Could not compress data for {target}: {e}", target) from e

    path = repo_file(repo, segments, mkdir=True)

    try:
        _write_atomic(path, compressed)
    except OSError as e:
        raise WriteError(f"Could not write compressed data to {path}: {e}", path) from e

    logger.debug(f"Wrote {data.nbytes} bytes ({len(compressed)} compressed) to {path}")
    return path


def read_file(repo: Repository, segments: Sequence[str]) -> Optional[bytes]:
    """
    Read and decompress the file at ``segments``.

    Returns:
        Original payload, or None if the file does not exist

    Raises:
        ReadError: The file could not be read or is not valid zlib data
    """
    path = get_path_to_file(repo, segments)
    if path is None:
        return None

    try:
        compressed = path.read_bytes()
    except OSError as e:
        raise ReadError(f"Could not read {path}: {e}", path) from e

    try:
        return zlib.decompress(compressed)
    except zlib.error as e:
        raise ReadError(f"Could not decompress {path}: {e}", path) from e
