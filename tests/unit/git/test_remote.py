"""Tests for remote metadata."""

from pathlib import Path

import pytest

from conftest import REMOTE_URL, FakeGit
from git_source.git.remote import RemoteMetadata


@pytest.mark.unit
class TestRemoteMetadata:
    """Tests for RemoteMetadata.describe."""

    async def test_describe(self, fake_git: FakeGit, tmp_path: Path) -> None:
        path = tmp_path / "copy"
        await fake_git.clone(REMOTE_URL, path)

        data = await RemoteMetadata(fake_git).describe(path, REMOTE_URL)

        assert data["web_link"] == "https://example.com/org/repo"
        assert data["ref"] == "main"
        assert data["full_name"] == "org/repo"
        assert data["resource"] == "example.com"
        assert data["protocol"] == "https"

    async def test_describe_reports_checked_out_branch(
        self, fake_git: FakeGit, tmp_path: Path
    ) -> None:
        path = tmp_path / "copy"
        await fake_git.clone(REMOTE_URL, path, branch="gh-pages")
        data = await RemoteMetadata(fake_git).describe(path, REMOTE_URL)
        assert data["ref"] == "gh-pages"

    async def test_describe_does_not_mutate(self, fake_git: FakeGit, tmp_path: Path) -> None:
        path = tmp_path / "copy"
        await fake_git.clone(REMOTE_URL, path)
        fake_git.calls.clear()
        await RemoteMetadata(fake_git).describe(path, REMOTE_URL)
        assert fake_git.commands() == ["current_ref"]
