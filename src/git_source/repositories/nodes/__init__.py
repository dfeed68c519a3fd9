"""Node store implementations."""

from git_source.repositories.nodes.base import NodeStore
from git_source.repositories.nodes.memory import InMemoryNodeStore
from git_source.repositories.nodes.sqlite import SQLiteNodeStore

__all__ = ["NodeStore", "InMemoryNodeStore", "SQLiteNodeStore"]
