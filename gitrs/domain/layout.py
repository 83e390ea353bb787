"""
Skeleton layout of a gitrs control directory.

RepositoryLayout names the control directory, the directories every new
repository gets, and the contents of its seed files. The defaults reproduce
the standard layout; a loaded configuration can override any of them.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

DEFAULT_CONTROL_DIR = ".gitrs"
DEFAULT_BRANCH = "master"
DEFAULT_DESCRIPTION = (
    "Unnamed repository; edit this file 'description' to name the repository.\n"
)
DEFAULT_DIRECTORIES: Tuple[Tuple[str, ...], ...] = (
    ("branches",),
    ("objects",),
    ("refs", "tags"),
    ("refs", "heads"),
)

DESCRIPTION_FILE = "description"
HEAD_FILE = "HEAD"


@dataclass(frozen=True)
class RepositoryLayout:
    """
    Fixed skeleton created by ``init_repository``.

    Example:
        layout = RepositoryLayout(default_branch="main")
        layout.head_content  # 'ref: refs/heads/main\\n'
    """
    control_dir_name: str = DEFAULT_CONTROL_DIR
    default_branch: str = DEFAULT_BRANCH
    description: str = DEFAULT_DESCRIPTION
    directories: Tuple[Tuple[str, ...], ...] = DEFAULT_DIRECTORIES

    def __post_init__(self):
        name = self.control_dir_name
        if not name or name in ('.', '..') or '/' in name or '\\' in name:
            raise ValueError(f"Invalid control directory name: {name!r}")
        if not self.default_branch or self.default_branch.startswith('/'):
            raise ValueError(f"Invalid default branch: {self.default_branch!r}")

    @property
    def head_content(self) -> str:
        """Symbolic reference written to HEAD."""
        return f"ref: refs/heads/{self.default_branch}\n"

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'RepositoryLayout':
        """
        Build a layout from the ``repository`` section of a loaded config.

        Missing keys fall back to the defaults.
        """
        from ..exit_codes import ConfigError

        section = config.get('repository', {}) or {}
        try:
            return cls(
                control_dir_name=str(section.get('control_dir_name', DEFAULT_CONTROL_DIR)),
                default_branch=str(section.get('default_branch', DEFAULT_BRANCH)),
                description=str(section.get('description', DEFAULT_DESCRIPTION)),
            )
        except ValueError as e:
            raise ConfigError(f"Invalid repository configuration: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        return {
            'control_dir_name': self.control_dir_name,
            'default_branch': self.default_branch,
            'description': self.description,
            'directories': ['/'.join(d) for d in self.directories],
        }
