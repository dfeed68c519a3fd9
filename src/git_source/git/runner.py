"""Git command execution.

``GitRunner`` is the narrow interface the sync state machine talks to.
``GitCLI`` implements it with asyncio subprocesses and the git binary
(no gitpython dependency).
"""

import asyncio
import os
from pathlib import Path
from typing import Protocol

import structlog

from git_source.core.exceptions import GitCommandError, TransportError

logger = structlog.get_logger(__name__)


class GitRunner(Protocol):
    async def clone(self, remote: str, path: Path, branch: str | None = None) -> None: ...

    async def get_remote_url(self, path: Path) -> str: ...

    async def symbolic_ref(self, path: Path, ref: str) -> str: ...

    async def fetch(self, path: Path, refspec: str | None = None) -> None: ...

    async def checkout(self, path: Path, branch: str, start_point: str) -> None: ...

    async def reset_hard(self, path: Path, target: str) -> None: ...

    async def current_ref(self, path: Path) -> str: ...


class GitCLI:
    """Runs git as an external process."""

    def __init__(self, binary: str = "git", depth: int = 1) -> None:
        self._binary = binary
        self._depth = depth

    async def _run_git(self, *args: str, cwd: Path | None = None) -> str:
        """Run a git command and return stripped stdout."""
        command = list(args)
        logger.debug("Running git", command=command, cwd=str(cwd) if cwd else None)
        try:
            process = await asyncio.create_subprocess_exec(
                self._binary,
                *command,
                cwd=cwd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env={**os.environ, "GIT_TERMINAL_PROMPT": "0"},
            )
        except (FileNotFoundError, NotADirectoryError) as e:
            raise TransportError(
                f"Cannot run {self._binary}: {e}",
                details={"command": command, "cwd": str(cwd) if cwd else None},
            ) from e

        stdout, stderr = await process.communicate()
        if process.returncode != 0:
            raise GitCommandError(
                command,
                process.returncode,
                stderr.decode("utf-8", errors="replace"),
            )
        return stdout.decode("utf-8", errors="replace").strip()

    async def clone(self, remote: str, path: Path, branch: str | None = None) -> None:
        args = ["clone", "--depth", str(self._depth)]
        if branch is not None:
            args += ["--branch", branch]
        await self._run_git(*args, remote, str(path))

    async def get_remote_url(self, path: Path) -> str:
        return await self._run_git("ls-remote", "--get-url", cwd=path)

    async def symbolic_ref(self, path: Path, ref: str) -> str:
        return await self._run_git("symbolic-ref", "--short", ref, cwd=path)

    async def fetch(self, path: Path, refspec: str | None = None) -> None:
        args = ["fetch", "--depth", str(self._depth), "origin"]
        if refspec is not None:
            args.append(refspec)
        await self._run_git(*args, cwd=path)

    async def checkout(self, path: Path, branch: str, start_point: str) -> None:
        await self._run_git("checkout", "--force", "-B", branch, start_point, cwd=path)

    async def reset_hard(self, path: Path, target: str) -> None:
        await self._run_git("reset", "--hard", target, cwd=path)

    async def current_ref(self, path: Path) -> str:
        return await self._run_git("rev-parse", "--abbrev-ref", "HEAD", cwd=path)
