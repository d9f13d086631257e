"""Custom exceptions for ghpages."""

from typing import Any


class GhPagesError(Exception):
    """Base exception for ghpages."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(GhPagesError):
    """Invalid or missing configuration, detected before any mutation."""

    pass


class BuildDirNotFoundError(ConfigurationError):
    """The build output directory does not exist."""

    def __init__(self, path: str):
        super().__init__("Build dir does not exist", {"build_dir": path})


class CredentialsError(ConfigurationError):
    """No push credentials were found in the environment."""

    def __init__(self):
        super().__init__("You have to provide a GITHUB_TOKEN or GH_PAT")


class AddressParseError(ConfigurationError):
    """A committer or author string is not a valid mailbox."""

    def __init__(self, value: str):
        super().__init__(
            f"Cannot parse mailbox: {value!r}",
            {"value": value},
        )


class GitCommandError(GhPagesError):
    """A git command exited with a non-zero status."""

    def __init__(self, command: str, returncode: int, stderr: str = ""):
        message = f"git command failed ({returncode}): {command}"
        if stderr:
            message = f"{message}\n{stderr}"
        super().__init__(
            message,
            {"command": command, "returncode": returncode, "stderr": stderr},
        )
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class CopyError(GhPagesError):
    """The build output could not be traversed."""

    def __init__(self, message: str, source: str):
        super().__init__(message, {"source": source})
