"""Core domain models and interfaces for git-source."""

from git_source.core.exceptions import (
    ConfigurationError,
    DiscoveryError,
    EmissionError,
    GitCommandError,
    GitSourceError,
    NodeValidationError,
    SyncConflictError,
    TransportError,
)
from git_source.core.models import (
    DiscoveredFile,
    FileNode,
    GitRemoteNode,
    PatternEntry,
    SourceConfig,
    SyncTarget,
)

__all__ = [
    # Models
    "SourceConfig",
    "SyncTarget",
    "PatternEntry",
    "DiscoveredFile",
    "GitRemoteNode",
    "FileNode",
    # Exceptions
    "GitSourceError",
    "ConfigurationError",
    "SyncConflictError",
    "TransportError",
    "GitCommandError",
    "DiscoveryError",
    "EmissionError",
    "NodeValidationError",
]
