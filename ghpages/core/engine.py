"""Deployment Engine.

Publishes a build directory to the target branch of a remote repository.

Run phases:
1. preconditions - build dir, credentials, repo and identities
2. tree - clone the existing branch or start an orphan branch
3. content - isolate sibling sites, copy the build, write metadata
4. commit - skip when nothing changed, otherwise configure identity and commit
5. push - unless dry run; forced when history is not kept
"""

import asyncio
import tempfile
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from ghpages.core.exceptions import (
    BuildDirNotFoundError,
    ConfigurationError,
    CredentialsError,
    GhPagesError,
)
from ghpages.core.planner import TreePlan, plan_tree
from ghpages.git import GitCli, GitClient
from ghpages.models.deployment import (
    DeploymentConfig,
    DeploymentOutcome,
    DeploymentResult,
    Identity,
    RemoteCredentials,
)
from ghpages.services.address import parse_address
from ghpages.services.credentials import build_remote_url
from ghpages.services.isolator import isolate_directories
from ghpages.services.materializer import CopyProgress, CopySummary, materialize
from ghpages.services.metadata import write_metadata
from ghpages.utils import workflow
from ghpages.utils.logging import get_logger

WORKTREE_PREFIX = "github-pages-"


class DeploymentEngine:
    """Runs one deployment of a build directory to a pages branch.

    The working tree path is passed explicitly to every step; the process
    working directory is never changed.
    """

    def __init__(
        self,
        config: DeploymentConfig,
        credentials: RemoteCredentials | None = None,
        git: GitClient | None = None,
        cwd: Path | None = None,
    ):
        self.config = config
        self.credentials = credentials
        secrets = [credentials.token] if credentials else []
        self.git = git or GitCli(secrets=secrets)
        self.cwd = cwd or Path.cwd()
        self.logger = get_logger("engine")

    @property
    def remote_url(self) -> str:
        return build_remote_url(self.config.domain, self.config.repo, self.credentials)

    async def run(self, workdir: Path | None = None) -> DeploymentResult:
        """Run the deployment and report its terminal outcome.

        Never raises: every error becomes a FAILED result.

        Args:
            workdir: Empty directory to use as the working tree. It is left in
                place afterwards. When omitted a temporary directory is
                created and removed at the end of the run.
        """
        start_time = time.time()
        self.logger.info(
            "engine.started",
            repo=self.config.repo,
            branch=self.config.target_branch,
            build_dir=self.config.build_dir,
        )

        try:
            result = await self._run(workdir)
        except GhPagesError as e:
            self.logger.error("engine.failed", error=e.message, **e.details)
            result = DeploymentResult(
                outcome=DeploymentOutcome.FAILED,
                message=e.message,
                error=e.message,
            )
        except Exception as e:
            self.logger.exception("engine.unexpected_error")
            result = DeploymentResult(
                outcome=DeploymentOutcome.FAILED,
                message=str(e),
                error=str(e),
            )

        result.duration_ms = int((time.time() - start_time) * 1000)
        self.logger.info(
            "engine.completed",
            outcome=result.outcome.value,
            duration_ms=result.duration_ms,
        )
        return result

    def _check_preconditions(self) -> tuple[Path, Identity, Identity]:
        """Validate everything that can be checked without side effects."""
        build_path = self.config.build_path(self.cwd)
        if not build_path.exists():
            raise BuildDirNotFoundError(str(build_path))

        if self.credentials is None:
            if not self.config.dry_run:
                raise CredentialsError()
            self.logger.debug("engine.no_credentials", reason="dry_run")

        if not self.config.repo:
            raise ConfigurationError("Input required and not supplied: repo")

        committer = parse_address(self.config.committer)
        author = parse_address(self.config.author)
        return build_path, committer, author

    @contextmanager
    def _working_tree(self, workdir: Path | None) -> Iterator[Path]:
        if workdir is not None:
            workdir.mkdir(parents=True, exist_ok=True)
            yield workdir
            return
        with tempfile.TemporaryDirectory(prefix=WORKTREE_PREFIX) as tmpdir:
            yield Path(tmpdir)

    async def _run(self, workdir: Path | None) -> DeploymentResult:
        config = self.config
        build_path, committer, author = self._check_preconditions()
        remote_url = self.remote_url

        branch_exists = await self.git.remote_branch_exists(remote_url, config.target_branch)
        self.logger.debug("engine.remote_branch", exists=branch_exists)

        plan = plan_tree(config.keep_history, config.multiple_sites, branch_exists)
        self.logger.debug(
            "engine.plan",
            clone=plan.clone,
            isolate=plan.isolate,
            force_push=plan.force_push,
        )

        with self._working_tree(workdir) as tree:
            self.logger.debug("engine.working_tree", path=str(tree))
            await self._establish_tree(tree, plan, remote_url)

            if plan.isolate:
                isolate_directories(tree, build_path, verbose=config.verbose)

            summary = await self._copy_content(build_path, tree)
            write_metadata(tree, fqdn=config.fqdn, nojekyll=config.jekyll_disabled)

            result = DeploymentResult(
                outcome=DeploymentOutcome.SKIPPED_NO_CHANGES,
                cloned=plan.clone,
                entries_visited=summary.visited,
                entries_copied=summary.copied,
                entries_skipped=summary.skipped,
                entries_failed=summary.failed,
            )

            if plan.check_dirty and not config.allow_empty_commit:
                is_dirty = await self.git.is_dirty(tree)
                self.logger.debug("engine.dirty", is_dirty=is_dirty)
                if not is_dirty:
                    self.logger.info("No changes to commit")
                    result.message = "No changes to commit"
                    return result

            with workflow.group("Configuring git committer"):
                await self.git.set_config(tree, "user.name", committer.name)
                await self.git.set_config(tree, "user.email", committer.email)

            if not config.allow_empty_commit and not await self.git.has_changes(tree):
                self.logger.info("Nothing to deploy")
                result.message = "Nothing to deploy"
                return result

            with workflow.group("Updating index of working tree"):
                await self.git.add(tree, ".", verbose=config.verbose)

            with workflow.group("Committing changes"):
                await self.git.commit(
                    tree,
                    allow_empty=config.allow_empty_commit,
                    author=str(author),
                    message=config.commit_message,
                )
                result.commit_stat = await self.git.show_stat(tree)
                self.logger.info(result.commit_stat)

            if config.dry_run:
                workflow.warning("Push disabled (dry run)")
                result.outcome = DeploymentOutcome.SKIPPED_DRY_RUN
                result.message = "Push disabled (dry run)"
                return result

            await self._push(tree, plan, remote_url)

        result.outcome = DeploymentOutcome.PUSHED
        result.message = f"Content of {config.build_dir} has been deployed to GitHub Pages!"
        self.logger.info(result.message)
        return result

    async def _establish_tree(self, tree: Path, plan: TreePlan, remote_url: str) -> None:
        if plan.clone:
            with workflow.group(f"Cloning {self.config.repo}"):
                await self.git.clone(remote_url, self.config.target_branch, tree)
        else:
            with workflow.group("Initializing local git repo"):
                await self.git.init(tree)
                await self.git.checkout(tree, self.config.target_branch)

    async def _copy_content(self, build_path: Path, tree: Path) -> CopySummary:
        progress = CopyProgress(verbose=self.config.verbose)
        with workflow.group(f"Copying {build_path} to {tree}"):
            summary = await asyncio.to_thread(
                materialize,
                build_path,
                tree,
                self.config.follow_symlinks,
                progress,
            )
            progress.finish()
            self.logger.info(f"{summary.visited} file(s) copied.")
            if summary.failed:
                self.logger.warning("engine.copy_incomplete", failed=summary.failed)
        return summary

    async def _push(self, tree: Path, plan: TreePlan, remote_url: str) -> None:
        config = self.config
        with workflow.group(
            f"Pushing {config.build_dir} directory to {config.target_branch} branch on {config.repo} repo"
        ):
            if plan.force_push:
                self.logger.debug("Force push")
            await self.git.push(tree, remote_url, config.target_branch, force=plan.force_push)
