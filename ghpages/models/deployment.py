"""Deployment data models."""

import os
from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict


class DeploymentOutcome(str, Enum):
    """Terminal state of a deployment run."""

    PUSHED = "pushed"
    SKIPPED_NO_CHANGES = "skipped_no_changes"
    SKIPPED_DRY_RUN = "skipped_dry_run"
    FAILED = "failed"


class DeploymentConfig(BaseModel):
    """Immutable configuration for one deployment run."""

    model_config = ConfigDict(frozen=True)

    domain: str = "github.com"
    repo: str
    target_branch: str = "gh-pages"
    build_dir: str
    absolute_build_dir: bool = False

    keep_history: bool = False
    multiple_sites: bool = False
    allow_empty_commit: bool = False
    follow_symlinks: bool = False
    dry_run: bool = False
    verbose: bool = False

    fqdn: str | None = None
    jekyll: bool = True

    committer: str
    author: str
    commit_message: str

    @property
    def jekyll_disabled(self) -> bool:
        """Whether a .nojekyll marker must be written."""
        return not self.jekyll

    def build_path(self, cwd: Path) -> Path:
        """Resolve the build directory against the invocation directory."""
        if self.absolute_build_dir:
            return Path(self.build_dir)
        return Path(os.path.join(cwd, self.build_dir))


class Identity(BaseModel):
    """A parsed ``Name <email>`` mailbox."""

    model_config = ConfigDict(frozen=True)

    name: str
    email: str

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


class RemoteCredentials(BaseModel):
    """Token used to authenticate clone and push."""

    model_config = ConfigDict(frozen=True)

    token: str
    source: Literal["GH_PAT", "GITHUB_TOKEN"]

    @property
    def userinfo(self) -> str:
        """The ``user[:password]`` part embedded in the remote URL."""
        if self.source == "GITHUB_TOKEN":
            return f"x-access-token:{self.token}"
        return self.token


class DeploymentResult(BaseModel):
    """Result of a deployment run."""

    outcome: DeploymentOutcome
    message: str = ""
    error: str | None = None

    cloned: bool = False
    commit_stat: str | None = None

    entries_visited: int = 0
    entries_copied: int = 0
    entries_skipped: int = 0
    entries_failed: int = 0

    duration_ms: int = 0

    @property
    def success(self) -> bool:
        return self.outcome != DeploymentOutcome.FAILED
