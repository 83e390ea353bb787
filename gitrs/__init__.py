"""
gitrs - Control-directory storage for a small version-control system.

gitrs manages the on-disk layout of a repository's control directory:
finding the repository that encloses a working directory, creating the
standard skeleton, and persisting compressed content inside it.

Quick Start:
    import gitrs

    # Create a repository (worktree is created if missing)
    repo = gitrs.init_repository("/tmp/proj")

    # Locate it again from anywhere below the worktree
    repo = gitrs.find_repository("/tmp/proj/src/pkg")

    # Store and read back compressed content
    repo.upsert_file(["objects", "ab", "cdef"], b"payload")
    repo.read_file(["objects", "ab", "cdef"])  # b"payload"

Layout created by init_repository:
    .gitrs/
      branches/  objects/  refs/tags/  refs/heads/
      description
      HEAD              ref: refs/heads/master

Absence is never an error: find_repository, get_path_to_dir,
get_path_to_file and read_file return None when nothing is there.
Failures raise subclasses of RepositoryError (see gitrs.exit_codes).
"""

__version__ = "0.1.0"

# Domain objects
from .domain import Repository, RepositoryLayout, Resolution, ResolveStatus

# Operations
from .core import init_repository, find_repository
from .paths import repo_path, repo_dir, repo_file, get_path_to_dir, get_path_to_file
from .infra import upsert_file, read_file

# Errors
from .exit_codes import (
    CommandError,
    RepositoryError,
    NotADirError,
    RepositoryExistsError,
    InitializationError,
    PathResolutionError,
    WriteError,
    ReadError,
    ConfigError,
)

# Configuration
from .config import load_config, save_config

__all__ = [
    # Version
    "__version__",
    # Domain objects
    "Repository",
    "RepositoryLayout",
    "Resolution",
    "ResolveStatus",
    # Operations
    "init_repository",
    "find_repository",
    "repo_path",
    "repo_dir",
    "repo_file",
    "get_path_to_dir",
    "get_path_to_file",
    "upsert_file",
    "read_file",
    # Errors
    "CommandError",
    "RepositoryError",
    "NotADirError",
    "RepositoryExistsError",
    "InitializationError",
    "PathResolutionError",
    "WriteError",
    "ReadError",
    "ConfigError",
    # Configuration
    "load_config",
    "save_config",
]
