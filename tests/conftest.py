"""Pytest configuration and fixtures."""

import shutil
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from git_source.core.exceptions import GitCommandError
from git_source.core.reporting import CollectingReporter
from git_source.repositories.nodes.memory import InMemoryNodeStore

REMOTE_URL = "https://example.com/org/repo.git"


@dataclass
class FakeRemote:
    """A remote repository: branch name -> {relative path: content}."""

    branches: dict[str, dict[str, str]]
    default_branch: str = "main"


@dataclass
class FakeGit:
    """GitRunner double that materializes branches as plain files.

    Working copies get a ``.git`` directory holding ``origin`` and ``HEAD``
    files so tests can fabricate pre-existing copies.
    """

    remotes: dict[str, FakeRemote] = field(default_factory=dict)
    calls: list[tuple] = field(default_factory=list)

    def _remote(self, url: str, command: list[str]) -> FakeRemote:
        remote = self.remotes.get(url.strip())
        if remote is None:
            raise GitCommandError(command, 128, f"repository '{url}' not found")
        return remote

    @staticmethod
    def _checkout(path: Path, files: dict[str, str]) -> None:
        for child in path.iterdir():
            if child.name == ".git":
                continue
            if child.is_dir():
                shutil.rmtree(child)
            else:
                child.unlink()
        for relative, content in files.items():
            target = path / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)

    async def clone(self, remote: str, path: Path, branch: str | None = None) -> None:
        command = ["clone", "--depth", "1", remote, str(path)]
        self.calls.append(("clone", remote, path, branch))
        fake = self._remote(remote, command)
        name = branch or fake.default_branch
        if name not in fake.branches:
            raise GitCommandError(command, 128, f"Remote branch {name} not found in upstream origin")
        path.mkdir(parents=True, exist_ok=True)
        (path / ".git").mkdir()
        (path / ".git" / "origin").write_text(remote)
        (path / ".git" / "HEAD").write_text(name)
        self._checkout(path, fake.branches[name])

    @staticmethod
    def _origin(path: Path) -> str:
        origin = path / ".git" / "origin"
        if not origin.exists():
            raise GitCommandError(["ls-remote", "--get-url"], 128, "not a git repository")
        return origin.read_text()

    async def get_remote_url(self, path: Path) -> str:
        self.calls.append(("get_remote_url", path))
        return self._origin(path) + "\n"

    async def symbolic_ref(self, path: Path, ref: str) -> str:
        self.calls.append(("symbolic_ref", path, ref))
        fake = self._remote(self._origin(path), ["symbolic-ref", ref])
        return f"origin/{fake.default_branch}\n"

    async def fetch(self, path: Path, refspec: str | None = None) -> None:
        self.calls.append(("fetch", path, refspec))
        self._remote(self._origin(path), ["fetch", "--depth", "1", "origin"])

    async def checkout(self, path: Path, branch: str, start_point: str) -> None:
        command = ["checkout", "--force", "-B", branch, start_point]
        self.calls.append(("checkout", path, branch, start_point))
        fake = self._remote(self._origin(path), command)
        if start_point.removeprefix("origin/") not in fake.branches:
            raise GitCommandError(command, 128, f"'{start_point}' is not a commit")
        (path / ".git" / "HEAD").write_text(branch)
        self._checkout(path, fake.branches[start_point.removeprefix("origin/")])

    async def reset_hard(self, path: Path, target: str) -> None:
        command = ["reset", "--hard", target]
        self.calls.append(("reset_hard", path, target))
        fake = self._remote(self._origin(path), command)
        branch = target.removeprefix("origin/")
        if branch not in fake.branches:
            raise GitCommandError(command, 128, f"ambiguous argument '{target}'")
        self._checkout(path, fake.branches[branch])

    async def current_ref(self, path: Path) -> str:
        self.calls.append(("current_ref", path))
        return (path / ".git" / "HEAD").read_text() + "\n"

    def commands(self) -> list[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def fake_remote() -> FakeRemote:
    """A remote with markdown, javascript and an unrelated file."""
    return FakeRemote(
        branches={
            "main": {
                "README.md": "# Repo\n",
                "posts/first.md": "# First post\n",
                "posts/second.md": "# Second post\n",
                "src/app.js": "console.log('hi')\n",
                "src/lib/util.js": "export const x = 1\n",
                "LICENSE": "MIT\n",
            },
            "gh-pages": {
                "index.html": "<html></html>\n",
            },
        },
        default_branch="main",
    )


@pytest.fixture
def fake_git(fake_remote: FakeRemote) -> FakeGit:
    return FakeGit(remotes={REMOTE_URL: fake_remote})


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    path = tmp_path / "cache"
    path.mkdir()
    return path


@pytest.fixture
def node_store() -> InMemoryNodeStore:
    return InMemoryNodeStore()


@pytest.fixture
def reporter() -> CollectingReporter:
    return CollectingReporter()
