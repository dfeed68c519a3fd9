"""Exception hierarchy for git-source."""

from typing import Any


class GitSourceError(Exception):
    """Base exception for all git-source errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(GitSourceError):
    """Invalid source configuration: missing field, bad pattern, bad remote."""


class SyncConflictError(GitSourceError):
    """The existing working copy tracks a different remote."""


class TransportError(GitSourceError):
    """A git operation against the working copy or remote failed."""


class GitCommandError(TransportError):
    """A git subprocess exited with a non-zero status."""

    def __init__(
        self,
        command: list[str],
        returncode: int,
        stderr: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr.strip()
        message = f"git {' '.join(command)} failed with exit code {returncode}"
        if self.stderr:
            message += f": {self.stderr}"
        super().__init__(
            message,
            details={
                "command": command,
                "returncode": returncode,
                "stderr": self.stderr,
                **(details or {}),
            },
        )


class DiscoveryError(GitSourceError):
    """Glob expansion or file inspection failed."""


class NodeValidationError(GitSourceError):
    """A record is missing a required field before emission."""


class EmissionError(GitSourceError):
    """The node store rejected the batch; nothing from the run was stored."""
