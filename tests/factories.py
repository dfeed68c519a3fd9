"""Test factories using factory_boy."""

import factory

from git_source.core.models.node import GIT_REMOTE_TYPE, GitRemoteNode, NodeInternal
from git_source.core.models.source import PatternEntry, SourceConfig


class SourceConfigFactory(factory.Factory):
    """Factory for creating SourceConfig instances."""

    class Meta:
        model = SourceConfig

    name = factory.Sequence(lambda n: f"source-{n}")
    remote = "https://example.com/org/repo.git"
    branch = None
    patterns = "**"


class PatternEntryFactory(factory.Factory):
    """Factory for creating PatternEntry instances."""

    class Meta:
        model = PatternEntry

    name = factory.Sequence(lambda n: f"group-{n}")
    pattern = "**/*.md"


class NodeInternalFactory(factory.Factory):
    class Meta:
        model = NodeInternal

    type = GIT_REMOTE_TYPE
    content_digest = factory.Faker("md5")


class GitRemoteNodeFactory(factory.Factory):
    """Factory for creating GitRemoteNode instances."""

    class Meta:
        model = GitRemoteNode

    id = factory.Faker("uuid4")
    source_instance_name = factory.Sequence(lambda n: f"source-{n}")
    web_link = "https://example.com/org/repo"
    ref = "main"
    protocol = "https"
    protocols = factory.LazyFunction(lambda: ["https"])
    resource = "example.com"
    pathname = "/org/repo.git"
    owner = "org"
    name = "repo"
    full_name = "org/repo"
    href = "https://example.com/org/repo.git"
    internal = factory.SubFactory(NodeInternalFactory)
