"""Main ingestion pipeline."""

import asyncio
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog

from git_source.core.exceptions import EmissionError, GitSourceError
from git_source.core.models.node import GIT_REMOTE_TYPE, FileNode, GitRemoteNode, NodeInternal
from git_source.core.models.source import SourceConfig, SyncTarget
from git_source.core.reporting import LogReporter, Reporter
from git_source.discovery.patterns import resolve_patterns
from git_source.discovery.scanner import FileDiscovery
from git_source.git.remote import RemoteMetadata
from git_source.git.runner import GitCLI, GitRunner
from git_source.git.sync import RepoSync, SyncOutcome
from git_source.git.url_parser import parse_git_url
from git_source.nodes.file_node import create_file_node
from git_source.repositories.nodes.base import NodeStore, stamp_owner
from git_source.utils.hashing import create_content_digest, create_node_id

logger = structlog.get_logger(__name__)

CACHE_NAMESPACE = "gatsby-source-git"
FILE_NODE_OWNER = "gatsby-source-filesystem"


@dataclass
class IngestionResult:
    """What a pipeline run produced."""

    name: str
    local_path: Path
    outcome: SyncOutcome | None = None
    remote: GitRemoteNode | None = None
    files: list[FileNode] = field(default_factory=list)
    error: Exception | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.remote is not None


def working_copy_path(cache_dir: Path, name: str) -> Path:
    """Deterministic working-copy location for a source name."""
    return Path(cache_dir) / CACHE_NAMESPACE / name


class IngestionPipeline:
    """Mirrors a git remote and emits its files as nodes.

    Orchestrates one run:
    1. Resolve patterns (configuration errors raise before any I/O)
    2. Sync the working copy (clone, or fetch + hard reset)
    3. Describe the remote
    4. Discover files and build file nodes linked to the remote
    5. Emit the remote node, then every file node, as one batch

    Nothing is stored unless every step succeeds. Failures are reported
    through the reporter and returned on the result.
    """

    def __init__(
        self,
        node_store: NodeStore,
        cache_dir: Path,
        git: GitRunner | None = None,
        reporter: Reporter | None = None,
        discovery: FileDiscovery | None = None,
    ) -> None:
        self._nodes = node_store
        self._cache_dir = Path(cache_dir).absolute()
        self._git = git or GitCLI()
        self._reporter = reporter or LogReporter()
        self._sync = RepoSync(self._git)
        self._metadata = RemoteMetadata(self._git)
        self._discovery = discovery or FileDiscovery()

    def _build_remote_node(self, name: str, data: dict[str, Any]) -> GitRemoteNode:
        return GitRemoteNode(
            id=create_node_id(f"git-remote-{name}"),
            source_instance_name=name,
            internal=NodeInternal(
                type=GIT_REMOTE_TYPE,
                content=json.dumps(data, sort_keys=True),
                content_digest=create_content_digest(data),
            ),
            **data,
        )

    async def run(self, config: SourceConfig | dict[str, Any]) -> IngestionResult:
        """Run the pipeline for one source configuration."""
        if not isinstance(config, SourceConfig):
            config = SourceConfig.parse(config)
        entries = resolve_patterns(config.patterns, config.name)
        parse_git_url(config.remote)

        target = SyncTarget(
            local_path=working_copy_path(self._cache_dir, config.name),
            remote_url=config.remote,
            branch=config.branch,
        )
        result = IngestionResult(name=config.name, local_path=target.local_path)
        log = logger.bind(source=config.name, path=str(target.local_path))

        try:
            result.outcome = await self._sync.sync(target)
            data = await self._metadata.describe(target.local_path, config.remote)
            remote = self._build_remote_node(config.name, data)

            discovered = await self._discovery.discover(target.local_path, entries)
            files = await asyncio.gather(
                *(
                    create_file_node(item.path, target.local_path, item.name)
                    for item in discovered
                )
            )
            files = [node.link_remote(remote.id) for node in files]
            await self._emit(remote, files)
        except GitSourceError as e:
            log.warning("Source run halted", error_type=type(e).__name__)
            self._reporter.error(e)
            result.error = e
            return result

        result.remote = remote
        result.files = files
        log.info(
            "Source ingested",
            outcome=result.outcome.value,
            ref=remote.ref,
            files=len(files),
        )
        return result

    async def _emit(self, remote: GitRemoteNode, files: list[FileNode]) -> None:
        for node in files:
            node.ensure_linked()
        # The remote goes first so file nodes can resolve their link to it.
        batch = [remote, *(stamp_owner(node, FILE_NODE_OWNER) for node in files)]
        try:
            await self._nodes.create_nodes(batch)
        except Exception as e:
            raise EmissionError(
                f"Failed to emit nodes: {e}",
                details={"source": remote.source_instance_name, "nodes": len(batch)},
            ) from e
