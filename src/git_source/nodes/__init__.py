"""Node construction helpers."""

from git_source.nodes.file_node import build_file_node, create_file_node

__all__ = ["build_file_node", "create_file_node"]
