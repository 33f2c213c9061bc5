"""Stage-boundary checks for the soltemp pipeline.

Every contract in this package reduces to ``require``: a condition that
the preceding stage guaranteed, and the message to raise when it did not.
"""

from soltemp.contracts.failure import ContractViolation


def require(condition: bool, message: str) -> None:
    """Raise ContractViolation with ``message`` unless ``condition`` holds.

    A failed check means a stage produced output that breaks its own
    invariants (e.g. a normalized value above 1, or a correction larger
    than the configured cap). Bad input never reaches this point: it is
    counted and dropped during ingestion.

    Parameters
    ----------
    condition : bool
        Invariant of the stage output.
    message : str
        Names the stage and the broken invariant.

    Examples
    --------
    >>> cap = config.corrector.max_abs_correction_c
    >>> require(bool((df["correction_C"].abs() <= cap).all()),
    ...         f"Adjusted contract violated: |correction_C| exceeds {cap}")
    """
    if not condition:
        raise ContractViolation(message)
