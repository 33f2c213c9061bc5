"""Command-line interface for soltemp pipeline execution."""

from soltemp.cli.run_correction import run_correction_pipeline

__all__ = ['run_correction_pipeline']
