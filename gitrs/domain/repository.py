"""
Repository handle for gitrs.

A Repository binds a working tree to its control directory. It is immutable
and does no I/O on construction; the methods below delegate to the path
resolver and the file store.
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

from .layout import DEFAULT_CONTROL_DIR

PathLike = Union[str, Path]


class ResolveStatus(Enum):
    """Outcome of resolving a directory under the control root."""
    ABSENT = "absent"
    PRESENT = "present"
    CREATED = "created"


@dataclass(frozen=True)
class Resolution:
    """A resolved path together with what the resolver found or did."""
    path: Path
    status: ResolveStatus

    @property
    def exists(self) -> bool:
        return self.status is not ResolveStatus.ABSENT

    @property
    def created(self) -> bool:
        return self.status is ResolveStatus.CREATED

    def __bool__(self) -> bool:
        return self.exists


@dataclass(frozen=True)
class Repository:
    """
    Immutable handle on a gitrs repository.

    ``control_root`` is always ``worktree / <control dir name>``. Build
    instances with ``Repository.new`` (or get one from ``find_repository``
    / ``init_repository``, which both go through it).

    Example:
        repo = Repository.new("/tmp/proj")
        repo.control_root  # PosixPath('/tmp/proj/.gitrs')
    """

    worktree: Path
    control_root: Path

    @classmethod
    def new(cls, worktree: PathLike, control_dir_name: str = DEFAULT_CONTROL_DIR) -> 'Repository':
        """
        Create a handle for ``worktree`` without touching the disk.

        Args:
            worktree: Working tree root; made absolute, symlinks are kept
            control_dir_name: Name of the control directory inside it

        Returns:
            Repository handle
        """
        root = Path(os.path.abspath(worktree))
        return cls(worktree=root, control_root=root / control_dir_name)

    @property
    def control_dir_name(self) -> str:
        return self.control_root.name

    # Path resolution

    def path(self, *segments: str) -> Path:
        """Join segments onto the control root (pure)."""
        from ..paths import repo_path
        return repo_path(self, segments)

    def dir(self, segments: Sequence[str], mkdir: bool = False) -> Resolution:
        from ..paths import repo_dir
        return repo_dir(self, segments, mkdir=mkdir)

    def file(self, segments: Sequence[str], mkdir: bool = False) -> Optional[Path]:
        from ..paths import repo_file
        return repo_file(self, segments, mkdir=mkdir)

    def get_path_to_dir(self, segments: Sequence[str]) -> Optional[Path]:
        from ..paths import get_path_to_dir
        return get_path_to_dir(self, segments)

    def get_path_to_file(self, segments: Sequence[str]) -> Optional[Path]:
        from ..paths import get_path_to_file
        return get_path_to_file(self, segments)

    # Content

    def upsert_file(self, segments: Sequence[str], payload: bytes,
                    level: Optional[int] = None) -> Path:
        """Compress ``payload`` and overwrite the file at ``segments``."""
        from ..infra.file_store import upsert_file
        return upsert_file(self, segments, payload, level=level)

    def read_file(self, segments: Sequence[str]) -> Optional[bytes]:
        """Return the decompressed content at ``segments``, or None if absent."""
        from ..infra.file_store import read_file
        return read_file(self, segments)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'worktree': str(self.worktree),
            'control_root': str(self.control_root),
        }

    def to_jsonl(self) -> str:
        """Convert to single-line JSON for streaming output."""
        import json
        return json.dumps(self.to_dict(), ensure_ascii=False)

    def __str__(self) -> str:
        return f"{self.worktree} ({self.control_dir_name})"

    def __repr__(self) -> str:
        return f"Repository(worktree={str(self.worktree)!r}, control_root={str(self.control_root)!r})"
