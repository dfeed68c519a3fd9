"""Content digests and node identifiers."""

import hashlib
import json
from pathlib import Path
from typing import Any
from uuid import NAMESPACE_URL, UUID, uuid5

NODE_ID_NAMESPACE = uuid5(NAMESPACE_URL, "git-source")


def create_content_digest(data: Any) -> str:
    """Stable md5 digest of arbitrary JSON-serializable data.

    Strings are hashed as-is; everything else is hashed through canonical
    JSON so key order does not matter.
    """
    if isinstance(data, str):
        payload = data
    else:
        payload = json.dumps(data, sort_keys=True, default=str, separators=(",", ":"))
    return hashlib.md5(payload.encode("utf-8")).hexdigest()


def compute_file_digest(path: Path, chunk_size: int = 64 * 1024) -> str:
    """md5 of a file's bytes."""
    digest = hashlib.md5()
    with open(path, "rb") as fh:
        for chunk in iter(lambda: fh.read(chunk_size), b""):
            digest.update(chunk)
    return digest.hexdigest()


def create_node_id(seed: str, namespace: UUID = NODE_ID_NAMESPACE) -> str:
    """Deterministic node id for a seed string."""
    return str(uuid5(namespace, seed))
