"""Tests for repository initialization and discovery."""

import os

import pytest

from gitrs import core
from gitrs.core import find_repository, init_repository, is_empty_dir
from gitrs.domain import Repository, RepositoryLayout
from gitrs.exit_codes import (
    InitializationError,
    NotADirError,
    PathResolutionError,
    RepositoryExistsError,
)

DESCRIPTION = "Unnamed repository; edit this file 'description' to name the repository.\n"
SKELETON_DIRS = ["branches", "objects", "refs/tags", "refs/heads"]

# A control directory name nobody has above the pytest temp dir
ABSENT_LAYOUT = RepositoryLayout(control_dir_name=".gitrs-test-absent")


class TestInitRepository:
    """Tests for init_repository."""

    def test_creates_missing_worktree(self, tmp_path):
        worktree = tmp_path / "proj"
        repo = init_repository(worktree)

        assert repo.worktree == worktree
        assert repo.control_root == worktree / ".gitrs"
        assert repo.control_root.is_dir()

    def test_skeleton_is_complete(self, tmp_path):
        repo = init_repository(tmp_path / "proj")

        for rel in SKELETON_DIRS:
            assert (repo.control_root / rel).is_dir(), rel
        assert sorted(p.name for p in repo.control_root.iterdir()) == [
            "HEAD", "branches", "description", "objects", "refs",
        ]
        assert sorted(p.name for p in (repo.control_root / "refs").iterdir()) == ["heads", "tags"]
        assert (repo.control_root / "description").read_text() == DESCRIPTION
        assert (repo.control_root / "HEAD").read_text() == "ref: refs/heads/master\n"

    def test_skeleton_leaf_directories_empty(self, tmp_path):
        repo = init_repository(tmp_path)
        for rel in SKELETON_DIRS:
            assert is_empty_dir(repo.control_root / rel)

    def test_seed_files_are_plain_text(self, tmp_path):
        repo = init_repository(tmp_path)
        assert (repo.control_root / "HEAD").read_bytes() == b"ref: refs/heads/master\n"

    def test_existing_empty_worktree(self, tmp_path):
        repo = init_repository(tmp_path)
        assert repo.worktree == tmp_path
        assert (tmp_path / ".gitrs" / "HEAD").is_file()

    def test_existing_empty_control_dir_is_reused(self, tmp_path):
        (tmp_path / ".gitrs").mkdir()
        repo = init_repository(tmp_path)
        assert (repo.control_root / "objects").is_dir()

    def test_reinit_is_refused_and_non_destructive(self, tmp_path):
        repo = init_repository(tmp_path)
        head = repo.control_root / "HEAD"
        head.write_text("ref: refs/heads/feature\n")
        (repo.control_root / "objects" / "keep").write_bytes(b"data")

        with pytest.raises(RepositoryExistsError) as exc_info:
            init_repository(tmp_path)

        assert exc_info.value.path == repo.control_root
        assert head.read_text() == "ref: refs/heads/feature\n"
        assert (repo.control_root / "objects" / "keep").read_bytes() == b"data"

    def test_worktree_is_a_file(self, tmp_path):
        target = tmp_path / "file.txt"
        target.write_text("hello")
        with pytest.raises(NotADirError):
            init_repository(target)
        assert target.read_text() == "hello"

    def test_control_dir_is_a_file(self, tmp_path):
        (tmp_path / ".gitrs").write_text("gitdir: elsewhere")
        with pytest.raises(NotADirError):
            init_repository(tmp_path)

    def test_custom_layout(self, tmp_path):
        layout = RepositoryLayout(control_dir_name=".vcs", default_branch="main",
                                  description="demo\n")
        repo = init_repository(tmp_path, layout)

        assert repo.control_root == tmp_path / ".vcs"
        assert (tmp_path / ".vcs" / "HEAD").read_text() == "ref: refs/heads/main\n"
        assert (tmp_path / ".vcs" / "description").read_text() == "demo\n"
        assert not (tmp_path / ".gitrs").exists()

    def test_skeleton_failure_is_initialization_error(self, tmp_path, monkeypatch):
        def failing_repo_dir(repo, segments, mkdir=False):
            raise PathResolutionError("disk full", repo.control_root)

        monkeypatch.setattr(core, "repo_dir", failing_repo_dir)

        with pytest.raises(InitializationError) as exc_info:
            init_repository(tmp_path)
        assert isinstance(exc_info.value.__cause__, PathResolutionError)

    def test_worktree_creation_failure(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        with pytest.raises(InitializationError):
            init_repository(blocker / "proj")

    def test_example_scenario(self, tmp_path):
        proj = tmp_path / "proj"
        repo = init_repository(proj)
        assert repo.worktree == proj
        assert repo.control_root == proj / ".gitrs"
        assert (proj / ".gitrs" / "HEAD").read_text() == "ref: refs/heads/master\n"

        (proj / "sub" / "dir").mkdir(parents=True)
        found = find_repository(proj / "sub" / "dir")
        assert found.worktree == proj.resolve()


class TestFindRepository:
    """Tests for find_repository."""

    def test_finds_repository_at_start(self, tmp_path):
        init_repository(tmp_path)
        repo = find_repository(tmp_path)
        assert repo == Repository.new(tmp_path.resolve())

    @pytest.mark.parametrize("depth", [1, 3, 8])
    def test_finds_repository_from_nested_directory(self, tmp_path, depth):
        init_repository(tmp_path)
        nested = tmp_path.joinpath(*[f"d{i}" for i in range(depth)])
        nested.mkdir(parents=True)

        repo = find_repository(nested)
        assert repo.worktree == tmp_path.resolve()
        assert repo.control_root == tmp_path.resolve() / ".gitrs"

    def test_no_repository_returns_none(self, tmp_path):
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_repository(nested, ABSENT_LAYOUT) is None

    def test_nearest_repository_wins(self, tmp_path):
        init_repository(tmp_path)
        inner = tmp_path / "vendor" / "lib"
        init_repository(inner)
        (inner / "src").mkdir()

        assert find_repository(inner / "src").worktree == inner.resolve()
        assert find_repository(tmp_path / "vendor").worktree == tmp_path.resolve()

    def test_does_not_search_downward(self, tmp_path):
        init_repository(tmp_path / "child", ABSENT_LAYOUT)
        assert find_repository(tmp_path, ABSENT_LAYOUT) is None

    def test_missing_start_path(self, tmp_path):
        with pytest.raises(PathResolutionError):
            find_repository(tmp_path / "missing")

    def test_broken_symlink(self, tmp_path):
        link = tmp_path / "dangling"
        os.symlink(tmp_path / "nowhere", link)
        with pytest.raises(PathResolutionError):
            find_repository(link)

    def test_symlinked_start_is_canonicalized(self, tmp_path):
        real = tmp_path / "real"
        init_repository(real)
        (real / "src").mkdir()
        link = tmp_path / "link"
        os.symlink(real / "src", link)

        assert find_repository(link).worktree == real.resolve()

    def test_custom_control_dir_name(self, tmp_path):
        layout = RepositoryLayout(control_dir_name=".vcs")
        init_repository(tmp_path, layout)
        (tmp_path / "src").mkdir()

        repo = find_repository(tmp_path / "src", layout)
        assert repo.control_root == tmp_path.resolve() / ".vcs"
