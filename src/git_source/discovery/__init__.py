"""Pattern resolution and file discovery."""

from git_source.discovery.patterns import resolve_patterns
from git_source.discovery.scanner import FileDiscovery

__all__ = ["FileDiscovery", "resolve_patterns"]
