"""Pytest configuration and fixtures."""

import itertools
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import pytest

from ghpages.config import DEFAULT_AUTHOR, DEFAULT_COMMITTER, DEFAULT_COMMIT_MESSAGE
from ghpages.core.exceptions import GitCommandError
from ghpages.models.deployment import DeploymentConfig, RemoteCredentials

_commit_ids = itertools.count(1)


@dataclass
class FakeCommit:
    """A commit in the in-memory repository model."""

    tree: dict[str, bytes]
    parent: "FakeCommit | None" = None
    author: str = ""
    message: str = ""
    id: int = field(default_factory=lambda: next(_commit_ids))

    def history(self) -> list["FakeCommit"]:
        commits = []
        commit: FakeCommit | None = self
        while commit is not None:
            commits.append(commit)
            commit = commit.parent
        return commits


@dataclass
class FakeRepo:
    """State of one local working tree."""

    branch: str | None = None
    head: FakeCommit | None = None
    index: dict[str, bytes] | None = None
    config: dict[str, str] = field(default_factory=dict)


def snapshot(root: Path) -> dict[str, bytes]:
    """Map every file under ``root`` (outside .git) to its content."""
    files: dict[str, bytes] = {}
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if d != ".git"]
        for name in dirnames + filenames:
            path = Path(dirpath) / name
            rel = path.relative_to(root).as_posix()
            if path.is_symlink():
                files[rel] = b"symlink:" + os.readlink(path).encode()
            elif name in filenames:
                files[rel] = path.read_bytes()
    return files


class FakeGit:
    """In-memory GitClient with a single fake remote.

    Commits are full tree snapshots. Pushing without force is rejected unless
    the remote tip is an ancestor of the local head.
    """

    def __init__(self):
        self.remote: dict[str, FakeCommit] = {}
        self.repos: dict[Path, FakeRepo] = {}
        self.calls: list[tuple] = []

    def seed(self, branch: str, files: dict[str, str]) -> FakeCommit:
        """Push a commit with ``files`` on top of ``branch``."""
        tree = {name: content.encode() for name, content in files.items()}
        commit = FakeCommit(tree=tree, parent=self.remote.get(branch), message="seed")
        self.remote[branch] = commit
        return commit

    def called(self, name: str) -> bool:
        return any(call[0] == name for call in self.calls)

    def _repo(self, repo_dir: Path) -> FakeRepo:
        return self.repos[Path(repo_dir)]

    def _head_tree(self, repo_dir: Path) -> dict[str, bytes]:
        head = self._repo(repo_dir).head
        return head.tree if head else {}

    async def remote_branch_exists(self, remote_url: str, branch: str) -> bool:
        self.calls.append(("remote_branch_exists", remote_url, branch))
        return branch in self.remote

    async def clone(self, remote_url: str, branch: str, dest: Path) -> None:
        self.calls.append(("clone", remote_url, branch, dest))
        if branch not in self.remote:
            raise GitCommandError(f"git clone {remote_url}", 128, "Remote branch not found")
        dest.mkdir(parents=True, exist_ok=True)
        (dest / ".git").mkdir()
        head = self.remote[branch]
        for name, content in head.tree.items():
            path = dest / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        self.repos[Path(dest)] = FakeRepo(branch=branch, head=head)

    async def init(self, dest: Path) -> None:
        self.calls.append(("init", dest))
        dest.mkdir(parents=True, exist_ok=True)
        (dest / ".git").mkdir()
        self.repos[Path(dest)] = FakeRepo(branch="master")

    async def checkout(self, repo_dir: Path, branch: str) -> None:
        self.calls.append(("checkout", repo_dir, branch))
        repo = self._repo(repo_dir)
        repo.branch = branch
        repo.head = None

    async def set_config(self, repo_dir: Path, key: str, value: str) -> None:
        self.calls.append(("set_config", repo_dir, key, value))
        self._repo(repo_dir).config[key] = value

    async def is_dirty(self, repo_dir: Path) -> bool:
        self.calls.append(("is_dirty", repo_dir))
        return snapshot(repo_dir) != self._head_tree(repo_dir)

    async def has_changes(self, repo_dir: Path) -> bool:
        self.calls.append(("has_changes", repo_dir))
        return snapshot(repo_dir) != self._head_tree(repo_dir)

    async def add(self, repo_dir: Path, pattern: str = ".", verbose: bool = False) -> None:
        self.calls.append(("add", repo_dir, pattern))
        self._repo(repo_dir).index = snapshot(repo_dir)

    async def commit(
        self,
        repo_dir: Path,
        allow_empty: bool,
        author: str,
        message: str,
    ) -> None:
        self.calls.append(("commit", repo_dir, allow_empty, author, message))
        repo = self._repo(repo_dir)
        tree = repo.index if repo.index is not None else self._head_tree(repo_dir)
        if tree == self._head_tree(repo_dir) and not allow_empty:
            raise GitCommandError("git commit", 1, "nothing to commit, working tree clean")
        repo.head = FakeCommit(tree=dict(tree), parent=repo.head, author=author, message=message)

    async def show_stat(self, repo_dir: Path) -> str:
        self.calls.append(("show_stat", repo_dir))
        head = self._repo(repo_dir).head
        before = head.parent.tree if head.parent else {}
        changed = sorted(
            name
            for name in set(before) | set(head.tree)
            if before.get(name) != head.tree.get(name)
        )
        lines = [f"commit {head.id}", f"Author: {head.author}", ""]
        lines.extend(f" {name} | 1 +" for name in changed)
        lines.append(f" {len(changed)} file(s) changed")
        return "\n".join(lines)

    async def push(
        self,
        repo_dir: Path,
        remote_url: str,
        branch: str,
        force: bool,
    ) -> None:
        self.calls.append(("push", repo_dir, remote_url, branch, force))
        head = self._repo(repo_dir).head
        tip = self.remote.get(branch)
        if not force and tip is not None and tip not in head.history():
            raise GitCommandError(f"git push {remote_url} {branch}", 1, "rejected (non-fast-forward)")
        self.remote[branch] = head


@pytest.fixture
def fake_git() -> FakeGit:
    """Create a fresh in-memory git."""
    return FakeGit()


@pytest.fixture
def credentials() -> RemoteCredentials:
    return RemoteCredentials(token="ghs_testtoken", source="GITHUB_TOKEN")


@pytest.fixture
def write_tree() -> Callable[[Path, dict[str, str]], Path]:
    """Write ``{relative path: text}`` under a directory."""

    def _write(root: Path, files: dict[str, str]) -> Path:
        root.mkdir(parents=True, exist_ok=True)
        for name, content in files.items():
            path = root / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root

    return _write


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., DeploymentConfig]:
    """Build a DeploymentConfig pointing at ``tmp_path / "build"`` by default."""

    def _make(**overrides) -> DeploymentConfig:
        values = {
            "repo": "owner/site",
            "build_dir": str(tmp_path / "build"),
            "absolute_build_dir": True,
            "committer": DEFAULT_COMMITTER,
            "author": DEFAULT_AUTHOR,
            "commit_message": DEFAULT_COMMIT_MESSAGE,
        }
        values.update(overrides)
        return DeploymentConfig(**values)

    return _make
