"""Descriptive metadata for a synchronized remote."""

from pathlib import Path

from git_source.git.runner import GitRunner
from git_source.git.url_parser import parse_git_url


class RemoteMetadata:
    """Reads what the remote descriptor needs from a working copy."""

    def __init__(self, git: GitRunner) -> None:
        self._git = git

    async def describe(self, local_path: Path, remote_url: str) -> dict:
        """Return parsed URL components plus ``web_link`` and ``ref``.

        Read only: nothing in the working copy is modified.
        """
        url = parse_git_url(remote_url)
        data = url.components()
        data["web_link"] = url.web_link
        data["ref"] = (await self._git.current_ref(local_path)).strip()
        return data
