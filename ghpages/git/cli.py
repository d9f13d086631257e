"""GitCli - GitClient backed by the ``git`` executable."""

import asyncio
import os
from dataclasses import dataclass
from pathlib import Path

from ghpages.core.exceptions import GitCommandError
from ghpages.utils.logging import get_logger


@dataclass
class GitOutput:
    """Captured result of one git invocation."""

    returncode: int
    stdout: str
    stderr: str


class GitCli:
    """Runs git commands as asyncio subprocesses.

    Every secret passed at construction is replaced with ``***`` before a
    command line or its stderr reaches a log line or an exception.
    """

    def __init__(self, git_bin: str = "git", secrets: list[str] | None = None):
        self.git_bin = git_bin
        self.secrets = [secret for secret in (secrets or []) if secret]
        self.logger = get_logger("git")

    def _mask(self, text: str) -> str:
        for secret in self.secrets:
            text = text.replace(secret, "***")
        return text

    async def _run(
        self,
        args: list[str],
        cwd: Path | None = None,
        check: bool = True,
    ) -> GitOutput:
        cmd_display = self._mask(" ".join([self.git_bin, *args]))
        self.logger.debug("git.exec", cmd=cmd_display, cwd=str(cwd) if cwd else None)

        env = os.environ.copy()
        env.setdefault("GIT_TERMINAL_PROMPT", "0")

        process = await asyncio.create_subprocess_exec(
            self.git_bin,
            *args,
            cwd=str(cwd) if cwd else None,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=env,
        )
        stdout, stderr = await process.communicate()

        output = GitOutput(
            returncode=process.returncode,
            stdout=stdout.decode(errors="replace") if stdout else "",
            stderr=stderr.decode(errors="replace") if stderr else "",
        )

        if check and output.returncode != 0:
            raise GitCommandError(
                cmd_display,
                output.returncode,
                self._mask(output.stderr.strip()),
            )
        return output

    async def remote_branch_exists(self, remote_url: str, branch: str) -> bool:
        ref = f"refs/heads/{branch}"
        output = await self._run(["ls-remote", "--heads", remote_url, ref])
        # patterns match trailing path components; only the exact ref counts
        return any(
            line.split("\t", 1)[-1].strip() == ref for line in output.stdout.splitlines()
        )

    async def clone(self, remote_url: str, branch: str, dest: Path) -> None:
        await self._run(
            ["clone", "--quiet", f"--branch={branch}", "--depth=1", remote_url, str(dest)]
        )

    async def init(self, dest: Path) -> None:
        await self._run(["init", "--quiet", str(dest)])

    async def checkout(self, repo_dir: Path, branch: str) -> None:
        await self._run(["checkout", "--orphan", branch], cwd=repo_dir)

    async def set_config(self, repo_dir: Path, key: str, value: str) -> None:
        await self._run(["config", key, value], cwd=repo_dir)

    async def is_dirty(self, repo_dir: Path) -> bool:
        output = await self._run(["status", "--short"], cwd=repo_dir)
        return len(output.stdout.strip()) > 0

    async def has_changes(self, repo_dir: Path) -> bool:
        output = await self._run(["status", "--porcelain"], cwd=repo_dir)
        return len(output.stdout.strip()) > 0

    async def add(self, repo_dir: Path, pattern: str = ".", verbose: bool = False) -> None:
        args = ["add"]
        if verbose:
            args.append("--verbose")
        args.extend(["--all", pattern])
        output = await self._run(args, cwd=repo_dir)
        if verbose and output.stdout:
            self.logger.info("git.add", output=output.stdout.rstrip())

    async def commit(
        self,
        repo_dir: Path,
        allow_empty: bool,
        author: str,
        message: str,
    ) -> None:
        args = ["commit"]
        if allow_empty:
            args.append("--allow-empty")
        if author:
            args.extend(["--author", author])
        args.extend(["--message", message])
        await self._run(args, cwd=repo_dir)

    async def show_stat(self, repo_dir: Path) -> str:
        output = await self._run(["show", "--stat-count=1000", "HEAD"], cwd=repo_dir)
        return output.stdout.strip()

    async def push(
        self,
        repo_dir: Path,
        remote_url: str,
        branch: str,
        force: bool,
    ) -> None:
        args = ["push", "--quiet"]
        if force:
            args.append("--force")
        args.extend([remote_url, branch])
        await self._run(args, cwd=repo_dir)
