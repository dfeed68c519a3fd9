"""Source configuration models."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from git_source.core.exceptions import ConfigurationError

PatternSpec = str | list[Any] | dict[str, Any]


class SourceConfig(BaseModel):
    """Configuration for one git remote to mirror and scan.

    ``name`` doubles as the working-copy directory name and as the default
    pattern group, so it has to be a single path segment.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    remote: str
    branch: str | None = None
    patterns: PatternSpec = "**"

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be empty")
        if "/" in value or "\\" in value or value in {".", ".."}:
            raise ValueError(f"name must be a single path segment: {value!r}")
        return value

    @field_validator("remote")
    @classmethod
    def _check_remote(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("remote must not be empty")
        return value

    @field_validator("branch")
    @classmethod
    def _check_branch(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value

    @classmethod
    def parse(cls, data: dict[str, Any]) -> "SourceConfig":
        """Build a config from plain options, raising ConfigurationError."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid source configuration: {e.error_count()} error(s)",
                details={
                    "errors": [
                        {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
                        for err in e.errors()
                    ]
                },
            ) from e


class SyncTarget(BaseModel):
    """Where a working copy lives and what it should mirror."""

    model_config = ConfigDict(frozen=True)

    local_path: Path
    remote_url: str
    branch: str | None = None  # None follows the remote default branch


class PatternEntry(BaseModel):
    """A glob pattern with the logical group it feeds."""

    model_config = ConfigDict(frozen=True)

    name: str
    pattern: str


class DiscoveredFile(BaseModel):
    """An absolute file path matched by a pattern group."""

    model_config = ConfigDict(frozen=True)

    path: Path
    name: str = Field(description="Pattern group name")
