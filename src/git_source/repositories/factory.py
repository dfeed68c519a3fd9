"""Factory for creating the configured node store."""

from typing import TYPE_CHECKING

import structlog

from git_source.core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from git_source.config.settings import Settings

logger = structlog.get_logger(__name__)


class RepositoryFactory:
    """Creates the node store selected by settings (memory or sqlite)."""

    def __init__(self, settings: "Settings") -> None:
        self._settings = settings
        self._nodes = None

    async def get_node_store(self):
        """Get or create the node store."""
        if self._nodes is None:
            store = self._settings.node_store.lower()

            if store == "memory":
                from git_source.repositories.nodes.memory import InMemoryNodeStore

                self._nodes = InMemoryNodeStore()
            elif store == "sqlite":
                from git_source.repositories.nodes.sqlite import SQLiteNodeStore

                self._nodes = SQLiteNodeStore(db_path=self._settings.sqlite_path)
                await self._nodes.initialize()
            else:
                raise ConfigurationError(
                    f"Unknown node store: {store}", details={"node_store": store}
                )

            logger.info("Node store created", store=store)

        return self._nodes

    async def close(self) -> None:
        """Close open store connections."""
        if hasattr(self._nodes, "close"):
            await self._nodes.close()
        self._nodes = None
