"""Line parsing and per-record correction.

Input lines are semicolon-delimited with exactly seven fields::

    year;month;day;hourUTC;temperatureC;latitudeDeg;longitudeDeg

Each line is parsed into a ``RawObservation`` and handed to the
``TemperatureCorrector``. Bad lines and geometry failures are counted and
skipped; they never abort a batch.
"""

import logging
import math
from typing import Iterable, List, Optional

import pandas as pd

from soltemp.errors import InvalidDate, InvalidInput, ParseFailure
from soltemp.records import ADJUSTED_COLUMNS, AdjustedObservation, RawObservation
from soltemp.solar.corrector import TemperatureCorrector

__all__ = ['parse_line', 'IngestionPipeline', 'records_to_dataframe']

logger = logging.getLogger(__name__)

N_FIELDS = 7


def _parse_int(text: str, name: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise ParseFailure(f"{name}: not an integer: {text!r}") from None


def _parse_float(text: str, name: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise ParseFailure(f"{name}: not a number: {text!r}") from None
    if not math.isfinite(value):
        raise ParseFailure(f"{name}: not finite: {text!r}")
    return value


def parse_line(line: str, delimiter: str = ";") -> RawObservation:
    """Parse one input line into a RawObservation.

    Parameters
    ----------
    line : str
        Raw line, trailing newline allowed.
    delimiter : str, default ";"
        Field separator.

    Returns
    -------
    RawObservation

    Raises
    ------
    ParseFailure
        Wrong field count, non-numeric or non-finite field.

    Examples
    --------
    >>> parse_line("1958;06;21;12;17.0;57.7607;12.9468")
    RawObservation(year=1958, month=6, day=21, hour_utc=12, temperature_c=17.0, latitude_deg=57.7607, longitude_deg=12.9468)
    """
    fields = [f.strip() for f in line.strip().split(delimiter)]
    if len(fields) != N_FIELDS:
        raise ParseFailure(f"expected {N_FIELDS} fields, got {len(fields)}")

    return RawObservation(
        year=_parse_int(fields[0], "year"),
        month=_parse_int(fields[1], "month"),
        day=_parse_int(fields[2], "day"),
        hour_utc=_parse_int(fields[3], "hour_utc"),
        temperature_c=_parse_float(fields[4], "temperature_c"),
        latitude_deg=_parse_float(fields[5], "latitude_deg"),
        longitude_deg=_parse_float(fields[6], "longitude_deg"),
    )


class IngestionPipeline:
    """Parse and correct an ordered stream of input lines.

    Counters accumulate over successive ``run`` calls, so one pipeline can
    consume several sources. After any call::

        total_lines == bad_lines + rejected_records + produced_records

    Blank lines are not counted.

    Parameters
    ----------
    corrector : TemperatureCorrector
        Applied to every parsed record.
    delimiter : str, default ";"
        Field separator of the input lines.
    keep_records : bool, default True
        Retain produced records in ``records`` for ``to_dataframe``. Callers
        that collect the return value of ``run`` themselves turn this off.
    """

    def __init__(self, corrector: TemperatureCorrector, delimiter: str = ";",
                 keep_records: bool = True):
        self.corrector = corrector
        self.delimiter = delimiter
        self.keep_records = keep_records
        self.total_lines = 0
        self.bad_lines = 0
        self.rejected_records = 0
        self.produced_records = 0
        self.records: List[AdjustedObservation] = []

    def _counters(self):
        return self.total_lines, self.bad_lines, self.rejected_records

    def run(self, lines: Iterable[str], source: Optional[str] = None) -> List[AdjustedObservation]:
        """Ingest lines and return the adjusted records produced by this call.

        A source is counted all or nothing: if iterating ``lines`` raises
        (e.g. ``UnicodeDecodeError`` partway through a file), the counters
        are restored to their values before the call and the error propagates.
        """
        label = source or "<lines>"
        produced = []
        before = self._counters()

        try:
            for lineno, line in enumerate(lines, start=1):
                if not line.strip():
                    continue
                self.total_lines += 1

                try:
                    raw = parse_line(line, self.delimiter)
                except ParseFailure as e:
                    self.bad_lines += 1
                    logger.debug("%s:%d: bad line: %s", label, lineno, e)
                    continue

                try:
                    adjusted = self.corrector.adjust(raw)
                except (InvalidDate, InvalidInput) as e:
                    self.rejected_records += 1
                    logger.debug("%s:%d: rejected record: %s", label, lineno, e)
                    continue

                produced.append(adjusted)
        except Exception:
            self.total_lines, self.bad_lines, self.rejected_records = before
            raise

        self.produced_records += len(produced)
        if self.keep_records:
            self.records.extend(produced)

        logger.info(
            "Ingested %s: %d records, %d bad lines, %d rejected",
            label, len(produced),
            self.bad_lines - before[1], self.rejected_records - before[2],
        )
        return produced

    def to_dataframe(self) -> pd.DataFrame:
        """Adjusted-observation table of every record retained so far."""
        return records_to_dataframe(self.records)


def records_to_dataframe(records: Iterable[AdjustedObservation]) -> pd.DataFrame:
    """Build the 11-column adjusted-observation table from records."""
    df = pd.DataFrame(list(records), columns=list(AdjustedObservation._fields))
    return df.rename(columns=ADJUSTED_COLUMNS)
