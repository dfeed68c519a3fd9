"""Pattern configuration normalization."""

from collections.abc import Mapping
from typing import Any

from git_source.core.exceptions import ConfigurationError
from git_source.core.models.source import PatternEntry


def _resolve(patterns: Any, default_name: str, nested: bool) -> list[PatternEntry]:
    if isinstance(patterns, str):
        if not patterns.strip():
            if nested:
                return []
            raise ConfigurationError("Pattern must not be empty")
        return [PatternEntry(name=default_name, pattern=patterns)]

    if isinstance(patterns, Mapping):
        entries = []
        for name, pattern in patterns.items():
            if not isinstance(name, str) or not isinstance(pattern, str) or not pattern.strip():
                raise ConfigurationError(
                    f"Pattern group {name!r} must map a name to a glob string",
                    details={"group": str(name), "pattern": repr(pattern)},
                )
            entries.append(PatternEntry(name=name, pattern=pattern))
        return entries

    if isinstance(patterns, (list, tuple)):
        entries = []
        for item in patterns:
            if item is None:
                continue
            entries.extend(_resolve(item, default_name, nested=True))
        return entries

    raise ConfigurationError(
        f"Unsupported pattern specification of type {type(patterns).__name__}",
        details={"patterns": repr(patterns)},
    )


def resolve_patterns(patterns: Any, default_name: str) -> tuple[PatternEntry, ...]:
    """Normalize a pattern spec into ordered ``(name, pattern)`` entries.

    Accepts a glob string (grouped under ``default_name``), a mapping of
    group name to glob, or a list mixing both. Order is preserved.

    Raises:
        ConfigurationError: for unsupported types or when nothing remains.
    """
    entries = tuple(_resolve(patterns, default_name, nested=False))
    if not entries:
        raise ConfigurationError(
            "No patterns configured", details={"patterns": repr(patterns)}
        )
    return entries
