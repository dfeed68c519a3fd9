"""Glob-based file discovery over a working copy."""

import asyncio
from collections.abc import Sequence
from pathlib import Path, PurePosixPath

import structlog
from wcmatch import glob as wcglob

from git_source.core.exceptions import DiscoveryError
from git_source.core.models.source import DiscoveredFile, PatternEntry

logger = structlog.get_logger(__name__)

# fast-glob style matching. A pattern that only excludes ("!drafts/**")
# matches every other file.
GLOB_FLAGS = (
    wcglob.GLOBSTAR
    | wcglob.BRACE
    | wcglob.EXTGLOB
    | wcglob.NEGATE
    | wcglob.NEGATEALL
    | wcglob.FOLLOW
)


class FileDiscovery:
    """Expands pattern groups against a root directory.

    Each group is expanded independently, so a file matched by two groups
    is returned twice, once per group name. Wildcards skip dot-prefixed
    entries, which keeps ``.git`` out of ``**``.
    """

    def __init__(self, flags: int = GLOB_FLAGS) -> None:
        self._flags = flags

    @staticmethod
    def _check_pattern(pattern: str) -> None:
        raw = pattern.removeprefix("!")
        posix = PurePosixPath(raw.replace("\\", "/"))
        if posix.is_absolute() or Path(raw).is_absolute():
            raise DiscoveryError(
                f"Pattern must be relative to the working copy: {pattern}",
                details={"pattern": pattern},
            )
        if ".." in posix.parts:
            raise DiscoveryError(
                f"Pattern must not leave the working copy: {pattern}",
                details={"pattern": pattern},
            )

    def expand(self, root: Path, entry: PatternEntry) -> list[DiscoveredFile]:
        """Expand one pattern group. Blocking."""
        self._check_pattern(entry.pattern)
        try:
            matches = wcglob.glob(entry.pattern, flags=self._flags, root_dir=root)
        except (OSError, ValueError) as e:
            raise DiscoveryError(
                f"Failed to expand pattern {entry.pattern!r}: {e}",
                details={"pattern": entry.pattern, "group": entry.name},
            ) from e

        files = []
        for match in matches:
            path = (root / match).absolute()
            if path.is_file():
                files.append(DiscoveredFile(path=path, name=entry.name))
        return files

    async def discover(
        self, root: Path, entries: Sequence[PatternEntry]
    ) -> list[DiscoveredFile]:
        """Expand every group concurrently; results keep group order."""
        root = Path(root).absolute()
        if not root.is_dir():
            raise DiscoveryError(
                f"Working copy does not exist: {root}", details={"root": str(root)}
            )

        groups = await asyncio.gather(
            *(asyncio.to_thread(self.expand, root, entry) for entry in entries)
        )

        discovered = [file for group in groups for file in group]
        logger.debug(
            "Files discovered",
            root=str(root),
            groups=len(entries),
            files=len(discovered),
        )
        return discovered
