"""Pipeline contracts: fail-fast enforcement of stage invariants.

Contracts fail immediately and loudly when pipeline stages don't produce
their promised invariants.

Key principle:
- Pydantic validates config correctness
- Contracts validate pipeline correctness
- Ingestion counts and skips bad records
"""

from soltemp.contracts.failure import ContractViolation
from soltemp.contracts.base import require
from soltemp.contracts.adjusted import assert_adjusted
from soltemp.contracts.normalized import assert_normalized, assert_monthly
from soltemp.contracts.spectrum import assert_spectrum

__all__ = [
    "ContractViolation",
    "require",
    "assert_adjusted",
    "assert_normalized",
    "assert_monthly",
    "assert_spectrum",
]
