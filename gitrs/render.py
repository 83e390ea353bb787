"""
Rendering functions for gitrs output.

Core functions return data; this module makes it human-readable.
"""

from rich.table import Table
from rich.console import Console
from rich import box

from .domain.repository import Repository

console = Console()


def render_repository(repo: Repository, title: str = "Repository") -> None:
    """
    Render a repository handle and its skeleton as a table.

    Args:
        repo: Repository handle to display
        title: Table title
    """
    table = Table(
        title=title,
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta"
    )
    table.add_column("Entry", style="cyan")
    table.add_column("Path", style="dim")
    table.add_column("Kind", style="green")

    table.add_row("worktree", str(repo.worktree), "directory")
    table.add_row("control root", str(repo.control_root), "directory")

    if repo.control_root.is_dir():
        for entry in sorted(repo.control_root.iterdir()):
            kind = "directory" if entry.is_dir() else "file"
            table.add_row(entry.name, str(entry), kind)

    console.print(table)
