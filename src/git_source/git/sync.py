"""Working-copy synchronization.

Keeps a local shallow clone in step with a remote branch:

- missing or empty directory: shallow clone
- repository whose origin matches the remote: fetch depth 1, hard reset
  (a configured branch is checked out first, so HEAD names it)
- anything else: SyncConflictError, the directory is left untouched

Concurrent syncs of the same path are unsafe; callers serialize them.
"""

from enum import Enum
from pathlib import Path

import structlog

from git_source.core.exceptions import GitCommandError, SyncConflictError, TransportError
from git_source.core.models.source import SyncTarget
from git_source.git.runner import GitRunner

logger = structlog.get_logger(__name__)

DEFAULT_HEAD_REF = "refs/remotes/origin/HEAD"


class WorkingCopyState(str, Enum):
    """Observed state of the directory before syncing."""

    ABSENT = "absent"
    PRESENT_MATCHING = "present_matching"
    PRESENT_MISMATCHED = "present_mismatched"


class SyncOutcome(str, Enum):
    CLONED = "cloned"
    UPDATED = "updated"


def _is_empty_dir(path: Path) -> bool:
    return not any(path.iterdir())


class RepoSync:
    """State machine converging a working copy onto a remote branch."""

    def __init__(self, git: GitRunner) -> None:
        self._git = git

    async def inspect(self, target: SyncTarget) -> WorkingCopyState:
        """Classify the working copy without mutating it."""
        path = target.local_path
        if not path.exists() or (path.is_dir() and _is_empty_dir(path)):
            return WorkingCopyState.ABSENT

        # Only ask git about real repositories; a plain directory nested in
        # another checkout would otherwise report the outer origin.
        if not (path / ".git").exists():
            return WorkingCopyState.PRESENT_MISMATCHED

        try:
            existing = await self._git.get_remote_url(path)
        except GitCommandError:
            return WorkingCopyState.PRESENT_MISMATCHED

        if existing.strip() == target.remote_url.strip():
            return WorkingCopyState.PRESENT_MATCHING
        return WorkingCopyState.PRESENT_MISMATCHED

    async def target_ref(self, target: SyncTarget) -> str:
        """Ref the working copy is reset to after fetching."""
        if target.branch is not None:
            return f"origin/{target.branch}"
        ref = await self._git.symbolic_ref(target.local_path, DEFAULT_HEAD_REF)
        return ref.strip()

    async def sync(self, target: SyncTarget) -> SyncOutcome:
        """Bring the working copy at ``target.local_path`` up to date."""
        state = await self.inspect(target)
        log = logger.bind(path=str(target.local_path), remote=target.remote_url)

        if state is WorkingCopyState.ABSENT:
            log.info("Cloning repository", branch=target.branch)
            target.local_path.parent.mkdir(parents=True, exist_ok=True)
            try:
                await self._git.clone(target.remote_url, target.local_path, target.branch)
            except TransportError as e:
                e.details.setdefault("branch", target.branch)
                raise
            return SyncOutcome.CLONED

        if state is WorkingCopyState.PRESENT_MATCHING:
            try:
                ref = await self.target_ref(target)
                refspec = None
                if target.branch is not None:
                    refspec = f"+refs/heads/{target.branch}:refs/remotes/{ref}"
                await self._git.fetch(target.local_path, refspec)
                if target.branch is not None:
                    # Point the local branch at the target so HEAD names it.
                    await self._git.checkout(target.local_path, target.branch, ref)
                await self._git.reset_hard(target.local_path, ref)
            except TransportError as e:
                e.details.setdefault("branch", target.branch)
                raise
            log.info("Working copy updated", ref=ref)
            return SyncOutcome.UPDATED

        raise SyncConflictError(
            f"Can't clone to target destination: {target.local_path}",
            details={"path": str(target.local_path), "remote": target.remote_url},
        )
