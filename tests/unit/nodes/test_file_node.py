"""Tests for file node construction."""

import hashlib
from pathlib import Path

import pytest

from git_source.core.exceptions import DiscoveryError, NodeValidationError
from git_source.core.models.node import FILE_TYPE, GIT_REMOTE_LINK_FIELD
from git_source.nodes.file_node import build_file_node, create_file_node


@pytest.fixture
def root(tmp_path: Path) -> Path:
    root = tmp_path / "copy"
    (root / "posts" / "2024").mkdir(parents=True)
    (root / "posts" / "2024" / "Hello.MD").write_text("# Hello\n")
    (root / "README.md").write_text("# Readme\n")
    return root


@pytest.mark.unit
class TestBuildFileNode:
    """Tests for build_file_node."""

    def test_path_fields(self, root: Path) -> None:
        node = build_file_node(root / "posts" / "2024" / "Hello.MD", root, "posts")
        assert node.relative_path == "posts/2024/Hello.MD"
        assert node.relative_directory == "posts/2024"
        assert node.base == "Hello.MD"
        assert node.name == "Hello"
        assert node.ext == ".MD"
        assert node.extension == "md"
        assert node.dir == (root / "posts" / "2024").as_posix()
        assert node.absolute_path == (root / "posts" / "2024" / "Hello.MD").as_posix()
        assert node.source_instance_name == "posts"

    def test_root_file_has_empty_relative_directory(self, root: Path) -> None:
        node = build_file_node(root / "README.md", root, "docs")
        assert node.relative_directory == ""

    def test_internal_block(self, root: Path) -> None:
        node = build_file_node(root / "README.md", root, "docs")
        assert node.internal.type == FILE_TYPE
        assert node.internal.content_digest == hashlib.md5(b"# Readme\n").hexdigest()
        assert node.size == len("# Readme\n")

    def test_media_type(self, root: Path) -> None:
        (root / "page.html").write_text("<html></html>\n")
        node = build_file_node(root / "page.html", root, "pages")
        assert node.internal.media_type == "text/html"

    def test_unknown_media_type(self, root: Path) -> None:
        (root / "blob.zzz-unknown").write_bytes(b"\x00\x01")
        node = build_file_node(root / "blob.zzz-unknown", root, "x")
        assert node.internal.media_type == "application/octet-stream"

    def test_id_depends_on_group_and_path(self, root: Path) -> None:
        a = build_file_node(root / "README.md", root, "docs")
        b = build_file_node(root / "README.md", root, "docs")
        c = build_file_node(root / "README.md", root, "pages")
        assert a.id == b.id
        assert a.id != c.id

    def test_missing_file(self, root: Path) -> None:
        with pytest.raises(DiscoveryError):
            build_file_node(root / "gone.md", root, "docs")

    async def test_async_wrapper(self, root: Path) -> None:
        node = await create_file_node(root / "README.md", root, "docs")
        assert node.base == "README.md"


@pytest.mark.unit
class TestRemoteLink:
    """Tests for the git remote back-reference."""

    def test_unlinked_node_fails_validation(self, root: Path) -> None:
        node = build_file_node(root / "README.md", root, "docs")
        assert node.git_remote_id is None
        with pytest.raises(NodeValidationError):
            node.ensure_linked()

    def test_link_remote(self, root: Path) -> None:
        node = build_file_node(root / "README.md", root, "docs")
        linked = node.link_remote("remote-id")
        assert linked.git_remote_id == "remote-id"
        assert node.git_remote_id is None
        linked.ensure_linked()

    def test_link_requires_id(self, root: Path) -> None:
        node = build_file_node(root / "README.md", root, "docs")
        with pytest.raises(NodeValidationError):
            node.link_remote("")

    def test_record_uses_host_field_names(self, root: Path) -> None:
        record = build_file_node(root / "README.md", root, "docs").link_remote("rid").to_record()
        assert record[GIT_REMOTE_LINK_FIELD] == "rid"
        assert record["sourceInstanceName"] == "docs"
        assert record["relativePath"] == "README.md"
        assert record["internal"]["contentDigest"]
        assert record["parent"] is None
        assert record["children"] == []
