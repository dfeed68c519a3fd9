"""Domain models for git-source."""

from git_source.core.models.node import (
    FILE_TYPE,
    GIT_REMOTE_LINK_FIELD,
    GIT_REMOTE_TYPE,
    BaseNode,
    FileNode,
    GitRemoteNode,
    NodeInternal,
)
from git_source.core.models.source import (
    DiscoveredFile,
    PatternEntry,
    SourceConfig,
    SyncTarget,
)

__all__ = [
    "SourceConfig",
    "SyncTarget",
    "PatternEntry",
    "DiscoveredFile",
    "BaseNode",
    "NodeInternal",
    "GitRemoteNode",
    "FileNode",
    "GIT_REMOTE_TYPE",
    "FILE_TYPE",
    "GIT_REMOTE_LINK_FIELD",
]
