"""Multi-site isolation.

Several sites can share one pages branch, each in its own top-level
directory. Before a build is copied in, the directories it is about to
replace are emptied so stale files disappear, while every other top-level
entry inherited from the clone stays untouched.
"""

import os
import shutil
from pathlib import Path

from ghpages.utils.logging import get_logger

logger = get_logger(__name__)


def empty_directory(path: Path) -> None:
    """Remove everything inside ``path`` but keep ``path`` itself."""
    for child in path.iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()


def isolate_directories(tree_root: Path, build_root: Path, verbose: bool = False) -> list[str]:
    """Empty each directory of ``tree_root`` whose name is a top-level build entry.

    Returns:
        The names of the directories that were emptied
    """
    if verbose:
        logger.info("isolator.checking", tree=str(tree_root))

    emptied: list[str] = []
    for name in sorted(os.listdir(build_root)):
        target = tree_root / name
        if verbose:
            logger.info("isolator.check", path=str(target))

        if not os.path.lexists(target):
            if verbose:
                logger.info("isolator.no_history", name=name)
            continue

        # lstat semantics: a symlink to a directory is not emptied
        if target.is_dir() and not target.is_symlink():
            if verbose:
                logger.info("isolator.emptying", name=name)
            empty_directory(target)
            logger.debug("isolator.emptied", path=str(target))
            emptied.append(name)
        elif verbose:
            logger.info("isolator.not_a_directory", path=str(target))

    return emptied
