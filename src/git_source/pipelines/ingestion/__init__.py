"""Ingestion pipeline."""

from git_source.pipelines.ingestion.pipeline import (
    CACHE_NAMESPACE,
    IngestionPipeline,
    IngestionResult,
    working_copy_path,
)

__all__ = ["IngestionPipeline", "IngestionResult", "CACHE_NAMESPACE", "working_copy_path"]
