"""GitClient Protocol - the version-control operations the engine relies on.

The engine never shells out itself. Everything it needs from git goes through
this interface so the decision logic can run against an in-memory fake.
"""

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class GitClient(Protocol):
    """Interface for the git primitives used by a deployment run.

    Implementations:
        - GitCli: drives the ``git`` binary through asyncio subprocesses
    """

    async def remote_branch_exists(self, remote_url: str, branch: str) -> bool:
        """Return True if ``branch`` exists on the remote."""
        ...

    async def clone(self, remote_url: str, branch: str, dest: Path) -> None:
        """Shallow-clone ``branch`` into the empty directory ``dest``."""
        ...

    async def init(self, dest: Path) -> None:
        """Create an empty repository in ``dest``."""
        ...

    async def checkout(self, repo_dir: Path, branch: str) -> None:
        """Switch to a new branch with no parent history."""
        ...

    async def set_config(self, repo_dir: Path, key: str, value: str) -> None:
        ...

    async def is_dirty(self, repo_dir: Path) -> bool:
        """Return True if the working tree differs from HEAD."""
        ...

    async def has_changes(self, repo_dir: Path) -> bool:
        """Return True if anything (tracked or untracked) would be committed."""
        ...

    async def add(self, repo_dir: Path, pattern: str = ".", verbose: bool = False) -> None:
        ...

    async def commit(
        self,
        repo_dir: Path,
        allow_empty: bool,
        author: str,
        message: str,
    ) -> None:
        ...

    async def show_stat(self, repo_dir: Path) -> str:
        """Return a human-readable diff stat of HEAD."""
        ...

    async def push(
        self,
        repo_dir: Path,
        remote_url: str,
        branch: str,
        force: bool,
    ) -> None:
        ...
