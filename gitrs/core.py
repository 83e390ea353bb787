"""
Core repository operations for gitrs.

init_repository materializes a new control directory; find_repository walks
up from a starting directory to the nearest enclosing repository. Both hand
back a Repository built with Repository.new.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from .domain.layout import DESCRIPTION_FILE, HEAD_FILE, RepositoryLayout
from .domain.repository import Repository
from .exit_codes import (
    InitializationError,
    NotADirError,
    PathResolutionError,
    RepositoryError,
    RepositoryExistsError,
)
from .infra.file_store import write_seed_file
from .paths import repo_dir, repo_file

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def is_empty_dir(path: Path) -> bool:
    """True if ``path`` is a directory with no entries."""
    if not path.is_dir():
        return False
    with os.scandir(path) as entries:
        return next(entries, None) is None


def init_repository(worktree: PathLike, layout: Optional[RepositoryLayout] = None) -> Repository:
    """
    Create a new repository rooted at ``worktree``.

    The worktree is created if missing. An existing but empty control
    directory is reused.

    Args:
        worktree: Working tree root
        layout: Skeleton to create (default layout if None)

    Returns:
        Handle on the new repository

    Raises:
        NotADirError: worktree or the control directory exists as a file
        RepositoryExistsError: control directory exists and is not empty
        InitializationError: creating the skeleton failed; partial trees are
            left on disk
    """
    layout = layout or RepositoryLayout()
    worktree = Path(worktree)
    control_root = worktree / layout.control_dir_name

    if worktree.exists() and not worktree.is_dir():
        raise NotADirError(f"Expected a directory at: {worktree}", worktree)

    if control_root.exists():
        if not control_root.is_dir():
            raise NotADirError(f"Expected a directory at: {control_root}", control_root)
        try:
            empty = is_empty_dir(control_root)
        except OSError as e:
            raise InitializationError(f"Could not inspect {control_root}: {e}", control_root) from e
        if not empty:
            raise RepositoryExistsError(
                f"Repository already exists at: {control_root}", control_root
            )

    try:
        control_root.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise InitializationError(f"Failed to create the path {control_root}: {e}", control_root) from e

    repo = Repository.new(worktree, layout.control_dir_name)

    try:
        for segments in layout.directories:
            repo_dir(repo, segments, mkdir=True)

        write_seed_file(repo_file(repo, [DESCRIPTION_FILE]), layout.description)
        write_seed_file(repo_file(repo, [HEAD_FILE]), layout.head_content)
    except RepositoryError as e:
        raise InitializationError(
            f"An error occurred when initializing the repository at {repo.worktree}: {e}",
            repo.control_root,
        ) from e

    logger.info(f"Initialized empty repository in {repo.control_root}")
    return repo


def find_repository(start_path: PathLike, layout: Optional[RepositoryLayout] = None) -> Optional[Repository]:
    """
    Find the nearest repository enclosing ``start_path``.

    Walks strictly upward from the canonical form of ``start_path``; the
    first directory holding a control directory wins.

    Args:
        start_path: Directory to start from
        layout: Supplies the control directory name (default layout if None)

    Returns:
        Repository rooted at the enclosing directory, or None if the
        filesystem root is reached without a match

    Raises:
        PathResolutionError: start_path cannot be canonicalized (missing,
            broken link, symlink loop, permission denied)
    """
    name = (layout or RepositoryLayout()).control_dir_name

    try:
        current = Path(start_path).resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise PathResolutionError(f"Could not resolve {start_path}: {e}", start_path) from e

    while True:
        if (current / name).exists():
            logger.debug(f"Found repository at {current}")
            return Repository.new(current, name)
        parent = current.parent
        if parent == current:
            logger.debug(f"No repository found above {start_path}")
            return None
        current = parent
