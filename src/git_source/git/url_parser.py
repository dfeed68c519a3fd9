"""Git remote URL parsing.

Handles:
- https://github.com/org/repo.git
- ssh://git@github.com:2222/org/repo.git, git+ssh://, git://, file://
- git@github.com:org/repo.git (scp-like)
"""

import re
from dataclasses import dataclass, field

from git_source.core.exceptions import ConfigurationError

_SCHEME_RE = re.compile(
    r"^(?P<protocol>[a-z][a-z0-9+.-]*)://"
    r"(?:(?P<user>[^@/]+)@)?"
    r"(?P<resource>[^/:]*)"
    r"(?::(?P<port>\d+))?"
    r"(?P<pathname>/.*)?$",
    re.IGNORECASE,
)
_SCP_RE = re.compile(r"^(?:(?P<user>[^@/]+)@)?(?P<resource>[^:/]+):(?P<pathname>[^/].*)$")


@dataclass(frozen=True)
class GitURL:
    """Structured view of a git remote URL."""

    href: str
    protocol: str
    protocols: list[str] = field(default_factory=list)
    resource: str = ""
    user: str = ""
    port: int | None = None
    pathname: str = ""
    owner: str = ""
    name: str = ""
    full_name: str = ""

    @property
    def web_link(self) -> str:
        """HTTPS URL for viewing the repository in a browser."""
        if self.protocol == "file":
            return f"file://{self.pathname}"
        host = self.resource
        if self.port is not None:
            host = f"{host}:{self.port}"
        return f"https://{host}/{self.full_name}"

    def components(self) -> dict:
        return {
            "href": self.href,
            "protocol": self.protocol,
            "protocols": list(self.protocols),
            "resource": self.resource,
            "user": self.user,
            "port": self.port,
            "pathname": self.pathname,
            "owner": self.owner,
            "name": self.name,
            "full_name": self.full_name,
        }


def _split_path(pathname: str) -> tuple[str, str, str]:
    """Return (owner, name, full_name) for a repository path."""
    path = pathname.strip("/")
    path = re.sub(r"\.git/?$", "", path)
    segments = [s for s in path.split("/") if s]
    if not segments:
        return "", "", ""
    return "/".join(segments[:-1]), segments[-1], "/".join(segments)


def parse_git_url(url: str) -> GitURL:
    """Parse a git remote URL into its components."""
    href = url.strip()
    if not href:
        raise ConfigurationError("Remote URL must not be empty")

    match = _SCHEME_RE.match(href)
    if match:
        protocol_spec = match.group("protocol").lower()
        protocols = protocol_spec.split("+") if "+" in protocol_spec else [protocol_spec]
        # git+ssh:// and ssh+git:// both count as ssh
        protocol = "ssh" if "ssh" in protocols else protocols[0]
        resource = match.group("resource") or ""
        if protocol != "file" and not resource:
            raise ConfigurationError(
                f"Remote URL has no host: {href}", details={"remote": href}
            )
        pathname = match.group("pathname") or ""
        port = match.group("port")
        user = match.group("user") or ""
    else:
        match = _SCP_RE.match(href)
        if not match:
            raise ConfigurationError(
                f"Unrecognized git remote URL: {href}", details={"remote": href}
            )
        protocol = "ssh"
        protocols = []
        resource = match.group("resource")
        pathname = "/" + match.group("pathname")
        port = None
        user = match.group("user") or ""

    owner, name, full_name = _split_path(pathname)
    if not name:
        raise ConfigurationError(
            f"Remote URL has no repository path: {href}", details={"remote": href}
        )

    return GitURL(
        href=href,
        protocol=protocol,
        protocols=protocols,
        resource=resource,
        user=user,
        port=int(port) if port else None,
        pathname=pathname,
        owner=owner,
        name=name,
        full_name=full_name,
    )
