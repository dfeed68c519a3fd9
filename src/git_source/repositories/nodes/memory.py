"""In-memory node store."""

from collections.abc import Sequence

from git_source.core.models.node import BaseNode
from git_source.repositories.nodes.base import stamp_owner


class InMemoryNodeStore:
    """Keeps nodes in a dict keyed by id, preserving emission order."""

    def __init__(self) -> None:
        self.nodes: dict[str, BaseNode] = {}

    async def create_node(self, node: BaseNode, owner: str | None = None) -> BaseNode:
        node = stamp_owner(node, owner)
        self.nodes[node.id] = node
        return node

    async def create_nodes(self, nodes: Sequence[BaseNode]) -> list[BaseNode]:
        self.nodes.update((node.id, node) for node in nodes)
        return list(nodes)

    def of_type(self, node_type: str) -> list[BaseNode]:
        return [n for n in self.nodes.values() if n.internal.type == node_type]
