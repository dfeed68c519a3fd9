"""git-source: mirror git remotes and emit file nodes for indexing."""

__version__ = "0.1.0"
