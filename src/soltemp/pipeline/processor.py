"""Per-source ingestion worker.

Each worker thread takes file paths from a shared queue, runs them through
its own ``IngestionPipeline`` and appends the adjusted records to a shared
output list under a lock.
"""

import logging
import queue
import threading
from pathlib import Path
from typing import List, Optional, TYPE_CHECKING

from soltemp.pipeline.ingest import IngestionPipeline
from soltemp.records import AdjustedObservation
from soltemp.solar.corrector import TemperatureCorrector

if TYPE_CHECKING:
    from soltemp.schemas import InternalConfig

__all__ = ['SourceProcessor']

logger = logging.getLogger(__name__)


class SourceProcessor(threading.Thread):
    """Worker thread that ingests input files from a queue.

    The orchestrator fills ``input_queue`` with paths, starts a pool of
    processors, waits on ``input_queue.join()`` and then stops them. Record
    order in ``output`` is unspecified.

    Parameters
    ----------
    input_queue : queue.Queue
        Paths of input files to process.
    config : InternalConfig
        Runtime configuration (reader and corrector sections are used).
    output : list
        Shared list receiving AdjustedObservation records.
    output_lock : threading.Lock
        Guards ``output``.
    name : str, optional
        Thread name, shown in log records.

    Notes
    -----
    A file that cannot be opened or decoded is logged and counted in
    ``files_failed``; none of its lines enter the line counters and the
    worker carries on with the next path. Records go to ``output`` only,
    the worker's own pipeline does not retain them.
    """

    def __init__(self, input_queue: queue.Queue, config: "InternalConfig",
                 output: List[AdjustedObservation], output_lock: threading.Lock,
                 name: Optional[str] = None):
        super().__init__(daemon=True, name=name)
        self.input_queue = input_queue
        self.config = config
        self.output = output
        self.output_lock = output_lock

        self.pipeline = IngestionPipeline(
            TemperatureCorrector.from_config(config),
            delimiter=config.reader.delimiter,
            keep_records=False,
        )
        self.files_processed = 0
        self.files_failed = 0

        self._stop_event = threading.Event()

    def stop(self):
        """Signal the thread to exit after the current file."""
        self._stop_event.set()

    def stopped(self):
        return self._stop_event.is_set()

    def process_file(self, filepath) -> bool:
        """Ingest one file. Returns False when the file could not be read."""
        path = Path(filepath)
        try:
            with open(path, "r", encoding=self.config.reader.encoding) as fh:
                records = self.pipeline.run(fh, source=path.name)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Cannot read %s: %s", path, e)
            self.files_failed += 1
            return False

        with self.output_lock:
            self.output.extend(records)
        self.files_processed += 1
        return True

    def run(self):
        """Main worker loop (runs in thread)."""
        logger.debug("%s started", self.name)

        while not self.stopped():
            try:
                filepath = self.input_queue.get(timeout=0.1)
            except queue.Empty:
                continue

            try:
                self.process_file(filepath)
            except Exception:
                logger.exception("Failed to process file: %s", filepath)
                self.files_failed += 1
            finally:
                self.input_queue.task_done()

        logger.debug("%s stopped (%d files)", self.name, self.files_processed)
