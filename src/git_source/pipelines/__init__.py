"""Processing pipelines for git-source."""

from git_source.pipelines.ingestion import IngestionPipeline, IngestionResult

__all__ = ["IngestionPipeline", "IngestionResult"]
