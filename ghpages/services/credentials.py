"""Remote credentials and URL construction."""

from ghpages.config import Settings
from ghpages.models.deployment import RemoteCredentials
from ghpages.utils.logging import get_logger

logger = get_logger(__name__)


def resolve_credentials(settings: Settings) -> RemoteCredentials | None:
    """Pick the push token from the environment.

    ``GH_PAT`` wins over ``GITHUB_TOKEN``. Returns None when neither is set;
    whether that is fatal depends on the run being a dry run.
    """
    if settings.gh_pat.strip():
        logger.debug("credentials.resolved", source="GH_PAT")
        return RemoteCredentials(token=settings.gh_pat.strip(), source="GH_PAT")
    if settings.github_token.strip():
        logger.debug("credentials.resolved", source="GITHUB_TOKEN")
        return RemoteCredentials(token=settings.github_token.strip(), source="GITHUB_TOKEN")
    return None


def build_remote_url(
    domain: str,
    repo: str,
    credentials: RemoteCredentials | None = None,
) -> str:
    """Return ``https://<credential>@<domain>/<repo>.git``."""
    userinfo = f"{credentials.userinfo}@" if credentials else ""
    return f"https://{userinfo}{domain}/{repo}.git"
