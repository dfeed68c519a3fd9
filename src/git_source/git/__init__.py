"""Git integration module for git-source."""

from git_source.git.remote import RemoteMetadata
from git_source.git.runner import GitCLI, GitRunner
from git_source.git.sync import RepoSync, SyncOutcome, WorkingCopyState
from git_source.git.url_parser import GitURL, parse_git_url

__all__ = [
    "GitCLI",
    "GitRunner",
    "RepoSync",
    "SyncOutcome",
    "WorkingCopyState",
    "RemoteMetadata",
    "GitURL",
    "parse_git_url",
]
