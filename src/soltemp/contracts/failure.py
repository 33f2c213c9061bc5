"""Centralized failure type for contract violations.

Contracts fail fast, loud, and once. All violations raise the same
exception type, allowing caller to handle pipeline bugs uniformly.
"""


class ContractViolation(RuntimeError):
    """Raised when a pipeline contract is violated.

    This indicates a bug in pipeline logic, not bad input data. It means
    a pipeline stage did not produce the invariants it promised.

    Key distinction:
    - ValidationError: config error (handled by Pydantic)
    - SoltempError subclasses: bad records (counted and skipped)
    - ContractViolation: pipeline bug (programmer error)
    """
    pass
