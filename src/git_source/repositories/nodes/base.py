"""Node store interface."""

from collections.abc import Sequence
from typing import Protocol

from git_source.core.models.node import BaseNode


class NodeStore(Protocol):
    async def create_node(self, node: BaseNode, owner: str | None = None) -> BaseNode: ...

    async def create_nodes(self, nodes: Sequence[BaseNode]) -> list[BaseNode]:
        """Store a batch in order. Either every node is stored or none is."""
        ...


def stamp_owner(node: BaseNode, owner: str | None) -> BaseNode:
    """Record which plugin owns the node, as the host store does."""
    if owner is None:
        return node
    internal = node.internal.model_copy(update={"owner": owner})
    return node.model_copy(update={"internal": internal})
