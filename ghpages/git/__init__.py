"""Version-control adapter.

Public API:
    - GitClient: Protocol the engine talks to
    - GitCli: implementation driving the git executable
"""

from ghpages.git.base import GitClient
from ghpages.git.cli import GitCli, GitOutput

__all__ = [
    "GitClient",
    "GitCli",
    "GitOutput",
]
