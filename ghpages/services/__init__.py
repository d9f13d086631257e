"""Filesystem and identity services used by the deployment engine."""

from ghpages.services.address import parse_address
from ghpages.services.credentials import build_remote_url, resolve_credentials
from ghpages.services.isolator import empty_directory, isolate_directories
from ghpages.services.materializer import (
    CopyEntry,
    CopyProgress,
    CopyStatus,
    CopySummary,
    materialize,
)
from ghpages.services.metadata import write_metadata

__all__ = [
    "parse_address",
    "build_remote_url",
    "resolve_credentials",
    "empty_directory",
    "isolate_directories",
    "CopyEntry",
    "CopyProgress",
    "CopyStatus",
    "CopySummary",
    "materialize",
    "write_metadata",
]
