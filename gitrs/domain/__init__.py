"""
Domain layer for gitrs.

Contains pure value objects with no I/O on construction:
- Repository: Handle binding a worktree to its control directory
- RepositoryLayout: Skeleton directories and seed file contents
- Resolution: Tri-state result of a directory lookup
"""

from .layout import RepositoryLayout
from .repository import Repository, Resolution, ResolveStatus

__all__ = [
    'Repository',
    'RepositoryLayout',
    'Resolution',
    'ResolveStatus',
]
