"""Application configuration using pydantic-settings."""

import os
from functools import lru_cache
from typing import Any, Literal

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ghpages.core.exceptions import ConfigurationError
from ghpages.models.deployment import DeploymentConfig

# Load .env file without clobbering values already set by the runner
load_dotenv()

DEFAULT_DOMAIN = "github.com"
DEFAULT_TARGET_BRANCH = "gh-pages"
DEFAULT_COMMITTER = "GitHub <noreply@github.com>"
DEFAULT_AUTHOR = (
    "github-actions[bot] <41898282+github-actions[bot]@users.noreply.github.com>"
)
DEFAULT_COMMIT_MESSAGE = "Deploy to GitHub pages"


class Settings(BaseSettings):
    """Process-level settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Credentials, in order of preference
    gh_pat: str = Field(default="")
    github_token: str = Field(default="")

    # Ambient CI metadata
    github_repository: str = ""
    runner_debug: bool = False

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["console", "json"] = "console"
    log_file: str | None = None

    @property
    def effective_log_level(self) -> str:
        """Debug logging is forced on when the runner asks for it."""
        return "DEBUG" if self.runner_debug else self.log_level


class ActionInputs(BaseSettings):
    """Deployment inputs as exposed by the Actions runner (``INPUT_*``)."""

    model_config = SettingsConfigDict(
        env_prefix="INPUT_",
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
    )

    domain: str = DEFAULT_DOMAIN
    repo: str = ""
    target_branch: str = DEFAULT_TARGET_BRANCH
    keep_history: bool = False
    multiple_sites: bool = False
    allow_empty_commit: bool = False
    build_dir: str = ""
    absolute_build_dir: bool = False
    follow_symlinks: bool = False
    committer: str = DEFAULT_COMMITTER
    author: str = DEFAULT_AUTHOR
    commit_message: str = DEFAULT_COMMIT_MESSAGE
    fqdn: str = ""
    jekyll: bool = True
    dry_run: bool = False
    verbose: bool = False


def load_deployment_config(
    settings: Settings,
    inputs: ActionInputs | None = None,
    **overrides: Any,
) -> DeploymentConfig:
    """Merge action inputs with explicit overrides into a DeploymentConfig.

    Overrides whose value is ``None`` are ignored so that unset CLI flags fall
    through to the ``INPUT_*`` environment.
    """
    inputs = inputs or ActionInputs()
    data = inputs.model_dump()
    data.update({key: value for key, value in overrides.items() if value is not None})

    if not data["build_dir"]:
        raise ConfigurationError("Input required and not supplied: build_dir")

    data["repo"] = data["repo"] or settings.github_repository
    data["fqdn"] = data["fqdn"].strip() or None

    return DeploymentConfig(**data)


def in_actions() -> bool:
    """Whether the process runs inside a GitHub Actions job.

    Independent of Settings, so it answers even when Settings is invalid.
    """
    return os.environ.get("GITHUB_ACTIONS", "").lower() == "true"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
