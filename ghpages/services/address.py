"""Mailbox parsing for committer and author strings."""

import re

from ghpages.core.exceptions import AddressParseError
from ghpages.models.deployment import Identity

# "Name <addr>", "\"Quoted, Name\" <addr>", "<addr>" or a bare "addr".
# Display names may carry brackets, e.g. "github-actions[bot]", which the
# stdlib email parser treats as a domain literal.
_MAILBOX_RE = re.compile(
    r"""
    \s*
    (?:
        (?:"(?P<quoted>[^"]*)"|(?P<name>[^<>",]*?))\s*<(?P<angle>[^<>\s]+)>
      |
        (?P<bare>[^\s<>",]+)
    )
    \s*(?:,|$)
    """,
    re.VERBOSE,
)


def _valid_address(address: str) -> bool:
    local, sep, domain = address.rpartition("@")
    return bool(sep and local and domain)


def parse_address(value: str) -> Identity:
    """Parse the first mailbox of ``value`` into an Identity.

    A bare address uses its local part as the display name.

    Raises:
        AddressParseError: If no valid mailbox starts ``value``
    """
    if not value or not value.strip():
        raise AddressParseError(value)

    match = _MAILBOX_RE.match(value)
    if not match:
        raise AddressParseError(value)

    address = match.group("angle") or match.group("bare")
    if not _valid_address(address):
        raise AddressParseError(value)

    name = match.group("quoted")
    if name is None:
        name = match.group("name") or ""
    name = name.strip() or address.rpartition("@")[0]

    return Identity(name=name, email=address)
