"""Error kinds for soltemp.

All record-level errors subclass ``ValueError``: they describe bad input,
not pipeline bugs. Ingestion catches them per record, counts them and moves
on; only configuration-level errors reach the caller.

Key distinction:
- SoltempError subclasses: bad data or bad parameters
- ContractViolation: pipeline bug (see ``soltemp.contracts``)
"""


class SoltempError(ValueError):
    """Base class for all soltemp input and parameter errors."""


class InvalidDate(SoltempError):
    """Calendar-impossible year/month/day combination."""


class InvalidInput(SoltempError):
    """Hour, latitude or longitude outside its physical range."""


class InvalidParameter(SoltempError):
    """Correction parameter outside its admissible range (e.g. beta not in (0, 1))."""


class ParseFailure(SoltempError):
    """Malformed input line. Recovered locally by the ingestion pipeline."""


class EmptyDataset(SoltempError):
    """A whole-dataset stage received nothing to work on."""
