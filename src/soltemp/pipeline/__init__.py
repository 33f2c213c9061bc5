"""Ingestion and orchestration of the soltemp pipeline."""

from soltemp.pipeline.ingest import IngestionPipeline, parse_line, records_to_dataframe
from soltemp.pipeline.processor import SourceProcessor
from soltemp.pipeline.orchestrator import PipelineOrchestrator, PipelineResults, IngestionCounts

__all__ = [
    "IngestionPipeline",
    "parse_line",
    "records_to_dataframe",
    "SourceProcessor",
    "PipelineOrchestrator",
    "PipelineResults",
    "IngestionCounts",
]
