"""Core functionality for ghpages."""

from ghpages.core.exceptions import (
    AddressParseError,
    BuildDirNotFoundError,
    ConfigurationError,
    CopyError,
    CredentialsError,
    GhPagesError,
    GitCommandError,
)
from ghpages.core.planner import DECISION_TABLE, TreePlan, plan_tree

__all__ = [
    "AddressParseError",
    "BuildDirNotFoundError",
    "ConfigurationError",
    "CopyError",
    "CredentialsError",
    "GhPagesError",
    "GitCommandError",
    "DECISION_TABLE",
    "TreePlan",
    "plan_tree",
]
