"""Unit tests for configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from ghpages.config import (
    DEFAULT_AUTHOR,
    DEFAULT_COMMITTER,
    ActionInputs,
    Settings,
    in_actions,
    load_deployment_config,
)
from ghpages.core.exceptions import ConfigurationError
from ghpages.models.deployment import DeploymentConfig


class TestActionInputs:
    """Tests for INPUT_* parsing."""

    def test_defaults(self, monkeypatch):
        monkeypatch.setenv("INPUT_BUILD_DIR", "public")

        inputs = ActionInputs()

        assert inputs.domain == "github.com"
        assert inputs.target_branch == "gh-pages"
        assert inputs.committer == DEFAULT_COMMITTER
        assert inputs.author == DEFAULT_AUTHOR
        assert inputs.jekyll is True
        assert inputs.keep_history is False

    def test_empty_inputs_fall_back_to_defaults(self, monkeypatch):
        """Test the runner's empty strings for unset inputs are ignored."""
        monkeypatch.setenv("INPUT_TARGET_BRANCH", "")
        monkeypatch.setenv("INPUT_KEEP_HISTORY", "")
        monkeypatch.setenv("INPUT_JEKYLL", "")

        inputs = ActionInputs()

        assert inputs.target_branch == "gh-pages"
        assert inputs.keep_history is False
        assert inputs.jekyll is True

    def test_boolean_inputs(self, monkeypatch):
        monkeypatch.setenv("INPUT_KEEP_HISTORY", "TRUE")
        monkeypatch.setenv("INPUT_JEKYLL", "false")
        monkeypatch.setenv("INPUT_DRY_RUN", "true")

        inputs = ActionInputs()

        assert inputs.keep_history is True
        assert inputs.jekyll is False
        assert inputs.dry_run is True

    def test_invalid_boolean_rejected(self, monkeypatch):
        monkeypatch.setenv("INPUT_VERBOSE", "sometimes")

        with pytest.raises(ValidationError):
            ActionInputs()


class TestLoadDeploymentConfig:
    """Tests for load_deployment_config."""

    def test_repo_defaults_to_github_repository(self):
        settings = Settings(github_repository="owner/site")
        inputs = ActionInputs(build_dir="public")

        config = load_deployment_config(settings, inputs)

        assert config.repo == "owner/site"
        assert config.build_dir == "public"
        assert config.fqdn is None
        assert config.jekyll_disabled is False

    def test_overrides_win_and_none_is_ignored(self):
        settings = Settings(github_repository="owner/site")
        inputs = ActionInputs(build_dir="public", target_branch="pages", fqdn=" docs.example.com ")

        config = load_deployment_config(
            settings,
            inputs,
            build_dir="dist",
            target_branch=None,
            jekyll=False,
            repo="other/repo",
        )

        assert config.build_dir == "dist"
        assert config.target_branch == "pages"
        assert config.repo == "other/repo"
        assert config.fqdn == "docs.example.com"
        assert config.jekyll_disabled is True

    def test_build_dir_required(self):
        with pytest.raises(ConfigurationError, match="build_dir"):
            load_deployment_config(Settings(), ActionInputs())

    def test_config_is_frozen(self):
        config = load_deployment_config(
            Settings(github_repository="owner/site"), ActionInputs(build_dir="public")
        )
        with pytest.raises(ValidationError):
            config.keep_history = True


class TestBuildPath:
    """Tests for DeploymentConfig.build_path."""

    def _config(self, **overrides) -> DeploymentConfig:
        values = {
            "repo": "owner/site",
            "build_dir": "public",
            "committer": DEFAULT_COMMITTER,
            "author": DEFAULT_AUTHOR,
            "commit_message": "Deploy",
        }
        values.update(overrides)
        return DeploymentConfig(**values)

    def test_relative_to_invocation_directory(self, tmp_path: Path):
        assert self._config().build_path(tmp_path) == tmp_path / "public"

    def test_absolute(self, tmp_path: Path):
        config = self._config(build_dir=str(tmp_path / "site"), absolute_build_dir=True)
        assert config.build_path(Path("/elsewhere")) == tmp_path / "site"


class TestSettings:
    """Tests for Settings."""

    def test_runner_debug_forces_debug_level(self, monkeypatch):
        monkeypatch.delenv("RUNNER_DEBUG", raising=False)
        assert Settings(runner_debug=True, log_level="WARNING").effective_log_level == "DEBUG"
        assert Settings(log_level="WARNING").effective_log_level == "WARNING"

    def test_actions_detection_ignores_invalid_settings(self, monkeypatch):
        """Test the runner is detected even when other settings are invalid."""
        monkeypatch.setenv("GITHUB_ACTIONS", "true")
        monkeypatch.setenv("LOG_FORMAT", "xml")

        assert in_actions() is True
        with pytest.raises(ValidationError):
            Settings()

        monkeypatch.setenv("GITHUB_ACTIONS", "false")
        assert in_actions() is False
