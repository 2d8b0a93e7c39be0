"""
Ingestion pipeline orchestration.
"""

from .ingest_pipeline import IngestPipeline
from .runner import run_ingest

__all__ = ["IngestPipeline", "run_ingest"]
