"""Command line entry point.

Every option falls back to the matching ``INPUT_*`` environment variable, so
the same command works as a GitHub Actions step and from a terminal.
"""

import argparse
import asyncio
import sys

from pydantic import ValidationError

from ghpages import __version__
from ghpages.config import ActionInputs, Settings, load_deployment_config
from ghpages.core.engine import DeploymentEngine
from ghpages.core.exceptions import ConfigurationError
from ghpages.services.credentials import resolve_credentials
from ghpages.utils import workflow
from ghpages.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

_FLAGS = (
    ("keep_history", "Preserve the existing branch history instead of orphaning it"),
    ("multiple_sites", "Keep sibling top-level directories of other sites"),
    ("allow_empty_commit", "Commit even when nothing changed"),
    ("absolute_build_dir", "Treat --build-dir as absolute"),
    ("follow_symlinks", "Copy symlink targets instead of the links"),
    ("dry_run", "Do everything except the push"),
    ("verbose", "Log every copied file"),
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ghpages-deploy",
        description="Deploy a static site directory to a GitHub Pages branch",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  ghpages-deploy --build-dir public                       # orphan gh-pages with public/
  ghpages-deploy --build-dir public --keep-history        # add a commit on top
  ghpages-deploy --build-dir dist --multiple-sites        # only replace dist/'s subdirs
  ghpages-deploy --build-dir public --dry-run             # commit locally, no push

Credentials are read from GH_PAT or GITHUB_TOKEN.
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--build-dir", dest="build_dir", help="Path of the built site")
    parser.add_argument("--domain", help="Git server host (default: github.com)")
    parser.add_argument("--repo", help="owner/name (default: $GITHUB_REPOSITORY)")
    parser.add_argument("--target-branch", dest="target_branch", help="Branch to publish to")
    parser.add_argument("--committer", help='Committer mailbox, "Name <email>"')
    parser.add_argument("--author", help='Author mailbox, "Name <email>"')
    parser.add_argument("--commit-message", dest="commit_message", help="Commit message")
    parser.add_argument("--fqdn", help="Custom domain written to CNAME")
    parser.add_argument(
        "--no-jekyll",
        dest="jekyll",
        action="store_false",
        default=None,
        help="Write a .nojekyll file",
    )
    for name, help_text in _FLAGS:
        parser.add_argument(
            f"--{name.replace('_', '-')}",
            dest=name,
            action="store_true",
            default=None,
            help=help_text,
        )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = Settings()
        configure_logging(settings)
        config = load_deployment_config(settings, ActionInputs(), **vars(args))
    except (ConfigurationError, ValidationError, OSError) as e:
        workflow.set_failed(str(e))
        return 1

    credentials = resolve_credentials(settings)
    if credentials:
        workflow.add_mask(credentials.token)

    engine = DeploymentEngine(config, credentials)
    result = asyncio.run(engine.run())

    if not result.success:
        workflow.set_failed(result.error or "Deployment failed")
        return 1
    logger.info("cli.finished", outcome=result.outcome.value)
    return 0


if __name__ == "__main__":
    sys.exit(main())
