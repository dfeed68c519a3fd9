"""Build file nodes from paths in a working copy."""

import asyncio
import mimetypes
import os
from datetime import datetime, timezone
from pathlib import Path

from git_source.core.exceptions import DiscoveryError
from git_source.core.models.node import FILE_TYPE, FileNode, NodeInternal
from git_source.utils.hashing import compute_file_digest, create_node_id

DEFAULT_MEDIA_TYPE = "application/octet-stream"


def _timestamp(seconds: float) -> datetime:
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def build_file_node(path: Path, root: Path, source_instance_name: str) -> FileNode:
    """Stat and hash ``path`` into an unlinked FileNode. Blocking."""
    path = Path(path).absolute()
    root = Path(root).absolute()
    try:
        stat = path.stat()
        digest = compute_file_digest(path)
    except OSError as e:
        raise DiscoveryError(
            f"Cannot read discovered file: {path}", details={"path": str(path)}
        ) from e

    relative = Path(os.path.relpath(path, root))
    media_type, _ = mimetypes.guess_type(path.name)

    return FileNode(
        id=create_node_id(f"{source_instance_name}:{path.as_posix()}"),
        internal=NodeInternal(
            type=FILE_TYPE,
            content_digest=digest,
            media_type=media_type or DEFAULT_MEDIA_TYPE,
        ),
        source_instance_name=source_instance_name,
        absolute_path=path.as_posix(),
        relative_path=relative.as_posix(),
        relative_directory="" if relative.parent == Path(".") else relative.parent.as_posix(),
        root=path.anchor,
        dir=path.parent.as_posix(),
        base=path.name,
        name=path.stem,
        ext=path.suffix,
        extension=path.suffix[1:].lower(),
        size=stat.st_size,
        mode=stat.st_mode,
        ino=stat.st_ino,
        modified_time=_timestamp(stat.st_mtime),
        access_time=_timestamp(stat.st_atime),
        change_time=_timestamp(stat.st_ctime),
        birth_time=_timestamp(getattr(stat, "st_birthtime", stat.st_ctime)),
    )


async def create_file_node(path: Path, root: Path, source_instance_name: str) -> FileNode:
    """Async wrapper around :func:`build_file_node`."""
    return await asyncio.to_thread(build_file_node, path, root, source_instance_name)
