"""Batch pipeline orchestration.

Discovers input files, ingests them with a pool of worker threads, then runs
the whole-dataset stages (normalization, aggregation, periodicity) and
persists the resulting tables.
"""

import logging
import queue
import threading
import time
from pathlib import Path
from typing import Dict, List, NamedTuple, Optional, TYPE_CHECKING

import pandas as pd
import xarray as xr

from soltemp.analysis import DayOfYearNormalizer, MonthlyAggregator, PeriodicityAnalyzer
from soltemp.contracts import (
    assert_adjusted,
    assert_monthly,
    assert_normalized,
    assert_spectrum,
)
from soltemp.pipeline.ingest import records_to_dataframe
from soltemp.pipeline.processor import SourceProcessor
from soltemp.setup_directories import get_analysis_path, get_log_path

if TYPE_CHECKING:
    from soltemp.schemas import InternalConfig

__all__ = ['PipelineOrchestrator', 'PipelineResults', 'IngestionCounts']

logger = logging.getLogger(__name__)


class IngestionCounts(NamedTuple):
    """Ingestion counters summed over all workers."""
    files: int
    failed_files: int
    total_lines: int
    bad_lines: int
    rejected_records: int
    produced_records: int


class PipelineResults(NamedTuple):
    """Artifacts of one pipeline run."""
    adjusted: pd.DataFrame
    normalized: pd.DataFrame
    monthly: pd.DataFrame
    series: pd.DataFrame
    spectrum: xr.Dataset
    dominant_periods: pd.DataFrame
    counts: IngestionCounts


class PipelineOrchestrator:
    """Runs the soltemp pipeline over a directory of input files.

    **Stages:**

    1. **Ingestion** (parallel): each input file is parsed and corrected by
       a ``SourceProcessor`` thread. All workers are joined before stage 2.
    2. **Normalization**: day-of-year statistics over the complete table,
       then per-row normalization.
    3. **Aggregation**: monthly means and the normalized monthly series.
    4. **Periodicity**: monthly grid, spectrum and periodogram.

    A contract check runs at every stage boundary. Tables are written to
    ``output_dirs['analysis']`` when output directories are given.

    Parameters
    ----------
    config : InternalConfig
        Fully resolved runtime configuration.
    output_dirs : dict, optional
        From ``setup_output_directories()``. When None, nothing is written
        and logging is left as configured by the caller.

    Examples
    --------
    ::

        config = resolve_config(ParamConfig(), UserConfig(INPUT_DIR="data/"))
        orch = PipelineOrchestrator(config, setup_output_directories("out/"))
        results = orch.run()
        results.dominant_periods
    """

    def __init__(self, config: "InternalConfig", output_dirs: Optional[Dict[str, Path]] = None):
        self.config = config
        self.output_dirs = output_dirs

        self.input_queue: queue.Queue = queue.Queue()
        self.workers: List[SourceProcessor] = []

        self._records = []
        self._records_lock = threading.Lock()
        self._stopped = False
        self._start_time = None

    def _setup_logging(self):
        """Configure root logger with console and (if output dirs given) file handlers."""
        log_level = getattr(logging, self.config.logging.level.upper(), logging.INFO)

        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        root = logging.getLogger()
        root.setLevel(log_level)
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()

        log_path = None
        if self.output_dirs:
            log_path = get_log_path(self.output_dirs)
            fh = logging.FileHandler(log_path)
            fh.setLevel(log_level)
            fh.setFormatter(formatter)
            root.addHandler(fh)

        ch = logging.StreamHandler()
        ch.setLevel(log_level)
        ch.setFormatter(formatter)
        root.addHandler(ch)

        logger.info("Logging: level=%s, file=%s", logging.getLevelName(log_level), log_path)

    # ------------------------------------------------------------------
    # Stage 1: ingestion
    # ------------------------------------------------------------------

    def discover_sources(self) -> List[Path]:
        """Sorted list of input files matching the reader pattern.

        Raises
        ------
        ValueError
            If no input directory is configured.
        FileNotFoundError
            If the input directory does not exist.
        """
        input_dir = self.config.reader.input_dir
        if input_dir is None:
            raise ValueError("No input directory configured (set INPUT_DIR or --input-dir)")

        input_dir = Path(input_dir).expanduser()
        if not input_dir.is_dir():
            raise FileNotFoundError(f"Input directory not found: {input_dir}")

        paths = sorted(p for p in input_dir.glob(self.config.reader.file_pattern) if p.is_file())
        logger.info("Found %d input files in %s (%s)", len(paths), input_dir,
                    self.config.reader.file_pattern)
        return paths

    def ingest(self, paths: List[Path]):
        """Ingest files in parallel and return the adjusted table and counts.

        Blocks until every queued file has been processed.
        """
        n_workers = max(1, min(self.config.processor.n_workers, len(paths)))

        for path in paths:
            self.input_queue.put(path)

        self.workers = [
            SourceProcessor(
                input_queue=self.input_queue,
                config=self.config,
                output=self._records,
                output_lock=self._records_lock,
                name=f"SourceProcessor-{i}",
            )
            for i in range(n_workers)
        ]
        for worker in self.workers:
            worker.start()
        logger.info("Started %d ingestion workers", n_workers)

        # Barrier: whole-dataset stages need every record
        self.input_queue.join()
        self._stop_workers()

        counts = IngestionCounts(
            files=sum(w.files_processed for w in self.workers),
            failed_files=sum(w.files_failed for w in self.workers),
            total_lines=sum(w.pipeline.total_lines for w in self.workers),
            bad_lines=sum(w.pipeline.bad_lines for w in self.workers),
            rejected_records=sum(w.pipeline.rejected_records for w in self.workers),
            produced_records=sum(w.pipeline.produced_records for w in self.workers),
        )
        logger.info(
            "Ingestion: files=%d (failed %d), lines=%d, bad=%d, rejected=%d, produced=%d",
            counts.files, counts.failed_files, counts.total_lines,
            counts.bad_lines, counts.rejected_records, counts.produced_records,
        )

        with self._records_lock:
            adjusted = records_to_dataframe(self._records)
        return adjusted, counts

    def _stop_workers(self):
        for worker in self.workers:
            if worker.is_alive():
                worker.stop()
                worker.join(timeout=5)
                if worker.is_alive():
                    logger.warning("%s did not stop cleanly", worker.name)

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    def run(self) -> PipelineResults:
        """Run every stage and return the results.

        Raises
        ------
        ValueError, FileNotFoundError
            Missing input directory.
        EmptyDataset
            No monthly means survive to the periodicity stage.
        ContractViolation
            A stage broke its output invariants (pipeline bug).
        """
        self._setup_logging()
        self._start_time = time.time()

        logger.info("=" * 60)
        logger.info("Starting soltemp pipeline")
        logger.info("=" * 60)

        try:
            paths = self.discover_sources()
            adjusted, counts = self.ingest(paths)
            assert_adjusted(adjusted, self.config.corrector.max_abs_correction_c)

            normalizer = DayOfYearNormalizer.from_config(self.config)
            normalized = normalizer.normalize(adjusted)
            assert_normalized(normalized)

            aggregator = MonthlyAggregator()
            monthly = aggregator.aggregate(normalized)
            assert_monthly(monthly)
            series = aggregator.to_series_table(monthly)

            analyzer = PeriodicityAnalyzer.from_config(self.config)
            spectrum = analyzer.analyze(monthly)
            assert_spectrum(spectrum, self.config.periodicity.n_period_bins)
            dominant = analyzer.dominant_periods(spectrum)
            for row in dominant.itertuples():
                logger.info("Dominant period: %.2f years (power %.4g)", row.period_years, row.power)

            results = PipelineResults(
                adjusted=adjusted,
                normalized=normalized,
                monthly=monthly,
                series=series,
                spectrum=spectrum,
                dominant_periods=dominant,
                counts=counts,
            )

            if self.output_dirs:
                self.save_results(results)
        finally:
            self.stop()

        return results

    def stop(self):
        """Stop any running workers and log the runtime. Safe to call twice."""
        if self._stopped:
            return
        self._stopped = True

        self._stop_workers()

        elapsed = time.time() - self._start_time if self._start_time else 0
        logger.info("=" * 60)
        logger.info("Pipeline finished. Runtime: %.1f seconds", elapsed)
        logger.info("=" * 60)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _write_table(self, df: pd.DataFrame, name: str) -> Path:
        fmt = self.config.output.format
        filepath = get_analysis_path(self.output_dirs, name, fmt)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        if fmt == "parquet":
            compression = self.config.output.compression
            df.to_parquet(filepath, engine='pyarrow',
                          compression=None if compression == "none" else compression,
                          index=False)
        else:
            df.to_csv(filepath, index=False)

        logger.info("Wrote %d rows to: %s", len(df), filepath)
        return filepath

    def save_results(self, results: PipelineResults) -> Dict[str, Path]:
        """Write all result tables and the runtime config to the analysis directory.

        Returns
        -------
        dict
            Artifact name to written path.
        """
        spectrum = results.spectrum
        tables = {
            "adjusted_observations": results.adjusted,
            "monthly_means": results.monthly,
            "normalized_monthly_series": results.series,
            "spectrum": pd.DataFrame({
                "frequency_cpy": spectrum["frequency"].values,
                "power": spectrum["power"].values,
            }),
            "periodogram": pd.DataFrame({
                "period_years": spectrum["period"].values,
                "power": spectrum["periodogram"].values,
            }),
            "dominant_periods": results.dominant_periods,
        }

        written = {name: self._write_table(df, name) for name, df in tables.items()}

        config_path = get_analysis_path(self.output_dirs, "runtime_config", "json")
        config_path.write_text(self.config.model_dump_json(indent=2))
        written["runtime_config"] = config_path
        logger.info("Runtime config saved: %s", config_path)
        return written
