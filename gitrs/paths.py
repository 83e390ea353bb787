"""
Path resolution under a repository's control directory.

Three modes, all relative to ``Repository.control_root``:
- repo_path: pure join, never touches the disk
- repo_dir: look up a directory, optionally creating the chain
- repo_file: resolve the parent directory, then append the file name

Read-only lookups pass ``mkdir=False`` and never mutate the filesystem.
"""

import logging
from pathlib import Path, PurePath
from typing import Optional, Sequence

from .domain.repository import Repository, Resolution, ResolveStatus
from .exit_codes import NotADirError, PathResolutionError

logger = logging.getLogger(__name__)


def _check_segment(segment: str) -> None:
    parts = PurePath(segment)
    if parts.is_absolute() or '..' in parts.parts:
        raise ValueError(f"Path segment must stay under the control directory: {segment!r}")


def repo_path(repo: Repository, segments: Sequence[str]) -> Path:
    """
    Join ``segments`` onto the control root.

    An empty sequence yields the control root itself.
    """
    path = repo.control_root
    for segment in segments:
        _check_segment(segment)
        path = path / segment
    return path


def repo_dir(repo: Repository, segments: Sequence[str], mkdir: bool = False) -> Resolution:
    """
    Resolve a directory under the control root.

    Args:
        repo: Repository handle
        segments: Path components relative to the control root
        mkdir: Create the directory chain when it is missing

    Returns:
        Resolution with status PRESENT, CREATED or ABSENT

    Raises:
        NotADirError: The path exists and is not a directory
        PathResolutionError: Creating the chain failed
    """
    path = repo_path(repo, segments)
    if path.exists():
        if not path.is_dir():
            raise NotADirError(f"Expected a directory at {path}", path)
        return Resolution(path, ResolveStatus.PRESENT)

    if not mkdir:
        return Resolution(path, ResolveStatus.ABSENT)

    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise PathResolutionError(f"Failed to create the path {path}: {e}", path) from e
    logger.debug(f"Created directory {path}")
    return Resolution(path, ResolveStatus.CREATED)


def repo_file(repo: Repository, segments: Sequence[str], mkdir: bool = False) -> Optional[Path]:
    """
    Resolve a file path, optionally creating its parent directories.

    The file itself is never created. Returns None when the parent directory
    is missing and ``mkdir`` is false.
    """
    if not segments:
        raise ValueError("A file path needs at least one segment")
    segments = list(segments)
    if not repo_dir(repo, segments[:-1], mkdir=mkdir):
        return None
    return repo_path(repo, segments)


def get_path_to_dir(repo: Repository, segments: Sequence[str]) -> Optional[Path]:
    """Path of an existing directory under the control root, or None."""
    resolution = repo_dir(repo, segments)
    return resolution.path if resolution else None


def get_path_to_file(repo: Repository, segments: Sequence[str]) -> Optional[Path]:
    """Path of an existing file under the control root, or None."""
    path = repo_file(repo, segments)
    if path is None or not path.exists():
        return None
    if path.is_dir():
        raise NotADirError(f"Expected a file at {path}, found a directory", path)
    return path
