"""Pages metadata files written at the root of the published tree."""

from pathlib import Path

from ghpages.utils.logging import get_logger

logger = get_logger(__name__)

CNAME_FILE = "CNAME"
NOJEKYLL_FILE = ".nojekyll"


def write_metadata(tree_root: Path, fqdn: str | None = None, nojekyll: bool = False) -> list[Path]:
    """Write ``CNAME`` and ``.nojekyll`` as configured.

    Returns:
        The files that were written
    """
    written: list[Path] = []

    domain = fqdn.strip() if fqdn else ""
    if domain:
        cname = tree_root / CNAME_FILE
        logger.info(f"Writing {domain} domain name to {cname}")
        cname.write_text(domain, encoding="utf-8")
        written.append(cname)

    if nojekyll:
        marker = tree_root / NOJEKYLL_FILE
        logger.info(f"Disabling Jekyll support via {marker}")
        marker.write_text("", encoding="utf-8")
        written.append(marker)

    return written
