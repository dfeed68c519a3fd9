"""Graph node models emitted to the node store.

Field names are snake_case in Python and serialize to the camelCase names
the host graph store expects (``sourceInstanceName``, ``contentDigest``...).
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from git_source.core.exceptions import NodeValidationError

GIT_REMOTE_TYPE = "GitRemote"
FILE_TYPE = "File"

# Host convention for a foreign-key field resolved to another node by id.
GIT_REMOTE_LINK_FIELD = "gitRemote___NODE"


class NodeInternal(BaseModel):
    """Bookkeeping block every node carries."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    type: str
    content_digest: str
    content: str | None = None
    media_type: str | None = None
    owner: str | None = None


class BaseNode(BaseModel):
    """Fields required by the node store for any record."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    parent: str | None = None
    children: list[str] = Field(default_factory=list)
    internal: NodeInternal

    def to_record(self) -> dict:
        """Serialize to the host record shape."""
        return self.model_dump(mode="json", by_alias=True)


class GitRemoteNode(BaseNode):
    """Descriptor for one synchronized git remote.

    Parent of every file node sourced from the same run.
    """

    source_instance_name: str
    web_link: str
    ref: str

    # Parsed remote URL components
    protocol: str
    protocols: list[str] = Field(default_factory=list)
    resource: str = ""
    user: str = ""
    port: int | None = None
    pathname: str = ""
    owner: str = ""
    name: str = ""
    full_name: str = ""
    href: str = ""


class FileNode(BaseNode):
    """A file from the working copy, linked back to its git remote."""

    source_instance_name: str
    absolute_path: str
    relative_path: str
    relative_directory: str
    root: str
    dir: str
    base: str
    name: str
    ext: str
    extension: str
    size: int
    mode: int
    ino: int
    modified_time: datetime
    access_time: datetime
    change_time: datetime
    birth_time: datetime

    git_remote_id: str | None = Field(default=None, alias=GIT_REMOTE_LINK_FIELD)

    def link_remote(self, remote_id: str) -> "FileNode":
        """Return a copy pointing back at the given remote node."""
        if not remote_id:
            raise NodeValidationError(
                "Remote id must not be empty",
                details={"path": self.absolute_path},
            )
        return self.model_copy(update={"git_remote_id": remote_id})

    def ensure_linked(self) -> None:
        if not self.git_remote_id:
            raise NodeValidationError(
                f"File node is not linked to a git remote: {self.relative_path}",
                details={"id": self.id, "path": self.absolute_path},
            )
