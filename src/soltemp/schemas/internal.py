"""InternalConfig: Authoritative runtime configuration.

This is the ONLY config schema that runtime code sees. It is fully validated,
normalized, and immutable.

Fallback defaults and validation logic are FORBIDDEN in runtime code -
everything is explicit here.
"""

from typing import Literal, Optional
from pydantic import ConfigDict, Field
from soltemp.schemas.base import SoltempBaseModel


# =============================================================================
# Nested Configuration Models (Runtime)
# =============================================================================

class InternalReaderConfig(SoltempBaseModel):
    """Runtime reader configuration.
    
    Note: input_dir may be None after merging; the orchestrator refuses to
    run without it.
    """
    input_dir: Optional[str]
    file_pattern: str
    delimiter: str
    encoding: str


class InternalCorrectorConfig(SoltempBaseModel):
    """Runtime correction parameters."""
    beta: float = Field(gt=0, lt=1)
    max_abs_correction_c: float = Field(gt=0)


class InternalNormalizerConfig(SoltempBaseModel):
    """Runtime day-of-year bounds."""
    min_day_of_year: int = Field(ge=1, le=366)
    max_day_of_year: int = Field(ge=1, le=366)


class InternalPeriodicityConfig(SoltempBaseModel):
    """Runtime spectrum settings."""
    period_min_years: float
    period_max_years: float
    n_period_bins: int
    focus_min_years: float
    focus_max_years: float


class InternalProcessorConfig(SoltempBaseModel):
    """Runtime worker pool settings."""
    n_workers: int = Field(ge=1, le=64)


class InternalOutputConfig(SoltempBaseModel):
    """Runtime output configuration."""
    format: Literal["csv", "parquet"]
    compression: Literal["snappy", "gzip", "none"]


class InternalLoggingConfig(SoltempBaseModel):
    """Runtime logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


# =============================================================================
# Main InternalConfig
# =============================================================================

class InternalConfig(SoltempBaseModel):
    """Authoritative runtime configuration.
    
    Runtime modules receive InternalConfig and access fields directly:
    
        def __init__(self, config: InternalConfig):
            self.beta = config.corrector.beta  # NOT .get()
    
    Rules
    -----
    - NO .get() calls
    - NO fallback defaults
    - NO validation in runtime code
    """
    
    base_dir: Optional[str]
    reader: InternalReaderConfig
    corrector: InternalCorrectorConfig
    normalizer: InternalNormalizerConfig
    periodicity: InternalPeriodicityConfig
    processor: InternalProcessorConfig
    output: InternalOutputConfig
    logging: InternalLoggingConfig
    
    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
        frozen=True,  # Immutable after construction
    )
