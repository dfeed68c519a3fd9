"""SQLite implementation of the node store."""

import json
from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path

import aiosqlite
import structlog

from git_source.core.models.node import BaseNode
from git_source.repositories.nodes.base import stamp_owner

logger = structlog.get_logger(__name__)

CREATE_NODE_TABLES_SQL = """
CREATE TABLE IF NOT EXISTS nodes (
    id TEXT PRIMARY KEY,
    node_type TEXT NOT NULL,
    owner TEXT,
    parent TEXT,
    source_instance_name TEXT,
    git_remote_id TEXT,
    content_digest TEXT NOT NULL,
    record TEXT NOT NULL,
    updated_at TEXT
);

CREATE INDEX IF NOT EXISTS idx_nodes_type ON nodes(node_type);
CREATE INDEX IF NOT EXISTS idx_nodes_source ON nodes(source_instance_name);
CREATE INDEX IF NOT EXISTS idx_nodes_git_remote ON nodes(git_remote_id);
"""

INSERT_NODE_SQL = """INSERT OR REPLACE INTO nodes
(id, node_type, owner, parent, source_instance_name,
 git_remote_id, content_digest, record, updated_at)
VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)"""


def _node_row(node: BaseNode) -> tuple:
    return (
        node.id,
        node.internal.type,
        node.internal.owner,
        node.parent,
        getattr(node, "source_instance_name", None),
        getattr(node, "git_remote_id", None),
        node.internal.content_digest,
        json.dumps(node.to_record()),
        datetime.now(timezone.utc).isoformat(),
    )


class SQLiteNodeStore:
    """Persists emitted nodes as JSON records in SQLite.

    Re-emitting a node with the same id replaces the stored record.
    """

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._db: aiosqlite.Connection | None = None

    async def initialize(self) -> None:
        """Create the node tables if needed."""
        Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)
        self._db = await aiosqlite.connect(self._db_path)
        self._db.row_factory = aiosqlite.Row
        await self._db.executescript(CREATE_NODE_TABLES_SQL)
        await self._db.commit()
        logger.info("SQLite node store initialized", db_path=self._db_path)

    async def _ensure_connected(self) -> aiosqlite.Connection:
        if self._db is None:
            await self.initialize()
        assert self._db is not None
        return self._db

    async def close(self) -> None:
        if self._db:
            await self._db.close()
            self._db = None

    async def create_node(self, node: BaseNode, owner: str | None = None) -> BaseNode:
        db = await self._ensure_connected()
        node = stamp_owner(node, owner)
        await db.execute(INSERT_NODE_SQL, _node_row(node))
        await db.commit()
        return node

    async def create_nodes(self, nodes: Sequence[BaseNode]) -> list[BaseNode]:
        """Store a batch in one transaction; a failure rolls all of it back."""
        db = await self._ensure_connected()
        try:
            for node in nodes:
                await db.execute(INSERT_NODE_SQL, _node_row(node))
        except Exception:
            await db.rollback()
            raise
        await db.commit()
        return list(nodes)

    async def get_node(self, node_id: str) -> dict | None:
        """Return the stored record for ``node_id``."""
        db = await self._ensure_connected()
        cursor = await db.execute("SELECT record FROM nodes WHERE id = ?", (node_id,))
        row = await cursor.fetchone()
        if row is None:
            return None
        return json.loads(row["record"])

    async def find_nodes(
        self,
        node_type: str | None = None,
        source_instance_name: str | None = None,
        git_remote_id: str | None = None,
        limit: int = 1000,
    ) -> list[dict]:
        db = await self._ensure_connected()
        query = "SELECT record FROM nodes"
        params: list = []
        conditions: list[str] = []

        if node_type:
            conditions.append("node_type = ?")
            params.append(node_type)
        if source_instance_name:
            conditions.append("source_instance_name = ?")
            params.append(source_instance_name)
        if git_remote_id:
            conditions.append("git_remote_id = ?")
            params.append(git_remote_id)

        if conditions:
            query += " WHERE " + " AND ".join(conditions)
        query += " LIMIT ?"
        params.append(limit)

        cursor = await db.execute(query, params)
        rows = await cursor.fetchall()
        return [json.loads(row["record"]) for row in rows]

    async def count_by_type(self) -> dict[str, int]:
        db = await self._ensure_connected()
        cursor = await db.execute(
            "SELECT node_type, COUNT(*) AS n FROM nodes GROUP BY node_type"
        )
        rows = await cursor.fetchall()
        return {row["node_type"]: row["n"] for row in rows}
