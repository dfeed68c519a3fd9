"""CLI for git-source."""

import asyncio
import json
import sys
from pathlib import Path

import click
import structlog

from git_source.config.logging import configure_logging
from git_source.core.exceptions import ConfigurationError

logger = structlog.get_logger(__name__)


def run_async(coro):
    """Run an async function synchronously."""
    return asyncio.run(coro)


def parse_pattern_options(values: tuple[str, ...]):
    """Turn ``--pattern`` values into a pattern spec.

    ``group=glob`` entries become named groups; bare globs use the source
    name as their group.
    """
    if not values:
        return "**"
    spec: list = []
    for value in values:
        group, sep, pattern = value.partition("=")
        if sep and group and "*" not in group:
            spec.append({group: pattern})
        else:
            spec.append(value)
    return spec


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose: bool) -> None:
    """git-source: mirror git remotes and emit file nodes."""
    from git_source.config.settings import get_settings

    settings = get_settings()
    log_level = "DEBUG" if verbose else settings.log_level
    configure_logging(log_level=log_level, json_logs=settings.is_production)


@cli.command()
@click.option("--name", "-n", required=True, help="Unique source name")
@click.option("--remote", "-r", required=True, help="Git remote URL")
@click.option("--branch", "-b", default=None, help="Branch to track (default: remote HEAD)")
@click.option(
    "--pattern",
    "-p",
    multiple=True,
    help="Glob pattern, optionally as group=glob (default: **)",
)
@click.option("--cache-dir", type=click.Path(file_okay=False), default=None, help="Cache directory")
@click.option("--json", "as_json", is_flag=True, help="Print emitted nodes as JSON lines")
def sync(
    name: str,
    remote: str,
    branch: str | None,
    pattern: tuple[str, ...],
    cache_dir: str | None,
    as_json: bool,
) -> None:
    """Sync a remote into the cache and emit its files."""

    async def _sync() -> bool:
        from git_source.config.settings import get_settings
        from git_source.git.runner import GitCLI
        from git_source.pipelines.ingestion import IngestionPipeline
        from git_source.repositories.factory import RepositoryFactory

        settings = get_settings()
        factory = RepositoryFactory(settings)
        try:
            pipeline = IngestionPipeline(
                node_store=await factory.get_node_store(),
                cache_dir=Path(cache_dir or settings.cache_dir),
                git=GitCLI(binary=settings.git_binary, depth=settings.clone_depth),
            )
            result = await pipeline.run(
                {
                    "name": name,
                    "remote": remote,
                    "branch": branch,
                    "patterns": parse_pattern_options(pattern),
                }
            )
        finally:
            await factory.close()

        if not result.succeeded:
            click.echo(f"Error: {result.error}", err=True)
            return False

        if as_json:
            click.echo(json.dumps(result.remote.to_record()))
            for node in result.files:
                click.echo(json.dumps(node.to_record()))
        else:
            click.echo(
                f"{result.outcome.value.capitalize()} {name} at {result.remote.ref} "
                f"({result.remote.web_link})"
            )
            click.echo(f"Emitted {len(result.files)} files")
            for node in result.files:
                click.echo(f"  [{node.source_instance_name}] {node.relative_path}")
        return True

    try:
        ok = run_async(_sync())
    except ConfigurationError as e:
        raise click.UsageError(str(e)) from e
    if not ok:
        sys.exit(1)


@cli.command()
@click.option("--cache-dir", type=click.Path(file_okay=False), default=None, help="Cache directory")
def status(cache_dir: str | None) -> None:
    """Show cached working copies and stored nodes."""

    async def _status():
        from git_source.config.settings import get_settings
        from git_source.pipelines.ingestion import CACHE_NAMESPACE
        from git_source.repositories.factory import RepositoryFactory

        settings = get_settings()
        root = Path(cache_dir or settings.cache_dir) / CACHE_NAMESPACE

        click.echo("git-source status")
        click.echo(f"  Cache:      {root}")
        click.echo(f"  Node store: {settings.node_store}")

        copies = sorted(p.name for p in root.iterdir() if p.is_dir()) if root.is_dir() else []
        click.echo(f"  Sources:    {len(copies)}")
        for copy_name in copies:
            click.echo(f"    - {copy_name}")

        if settings.node_store.lower() == "sqlite":
            factory = RepositoryFactory(settings)
            try:
                store = await factory.get_node_store()
                counts = await store.count_by_type()
            finally:
                await factory.close()
            for node_type, count in sorted(counts.items()):
                click.echo(f"  {node_type + ':':<11} {count}")

    run_async(_status())


if __name__ == "__main__":
    cli()
