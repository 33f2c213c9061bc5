"""ParamConfig: Expert defaults for the soltemp pipeline.

This module defines the complete default configuration. ALL pipeline
parameters must have defaults here. No runtime code should define
fallback values - this is the single source of truth for defaults.

Runtime code NEVER reads from ParamConfig directly - it only receives InternalConfig.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator, model_validator
from soltemp.schemas.base import SoltempBaseModel


# =============================================================================
# Nested Configuration Models
# =============================================================================

class ReaderConfig(SoltempBaseModel):
    """Input source configuration."""
    input_dir: Optional[str] = None
    file_pattern: str = Field("*.csv", min_length=1, description="Glob for input files inside input_dir")
    delimiter: str = Field(";", min_length=1, max_length=1)
    encoding: str = "utf-8"


class CorrectorConfig(SoltempBaseModel):
    """Solar-irradiance temperature correction."""
    beta: float = Field(0.003, gt=0, lt=1, description="Temperature response in degC per W/m2")
    max_abs_correction_c: float = Field(20.0, gt=0, description="Cap on |correction| in degC")

    @field_validator("beta", "max_abs_correction_c", mode="before")
    @classmethod
    def coerce_to_float(cls, v):
        """Allow int or float."""
        return float(v)


class NormalizerConfig(SoltempBaseModel):
    """Day-of-year normalization bounds."""
    min_day_of_year: int = Field(1, ge=1, le=366)
    max_day_of_year: int = Field(366, ge=1, le=366)

    @model_validator(mode="after")
    def check_bounds_order(self):
        if self.min_day_of_year > self.max_day_of_year:
            raise ValueError("min_day_of_year must not exceed max_day_of_year")
        return self


class PeriodicityConfig(SoltempBaseModel):
    """Spectrum and periodogram settings."""
    period_min_years: float = Field(0.5, gt=0)
    period_max_years: float = Field(50.0, gt=0)
    n_period_bins: int = Field(500, ge=1)
    focus_min_years: float = Field(2.0, gt=0)
    focus_max_years: float = Field(20.0, gt=0)

    @model_validator(mode="after")
    def check_ranges(self):
        if self.period_min_years >= self.period_max_years:
            raise ValueError("period_min_years must be below period_max_years")
        if self.focus_min_years >= self.focus_max_years:
            raise ValueError("focus_min_years must be below focus_max_years")
        return self


class ProcessorConfig(SoltempBaseModel):
    """Parallel ingestion settings."""
    n_workers: int = Field(4, ge=1, le=64)


class OutputConfig(SoltempBaseModel):
    """Output file configuration."""
    format: Literal["csv", "parquet"] = "csv"
    compression: Literal["snappy", "gzip", "none"] = "snappy"


class LoggingConfig(SoltempBaseModel):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


# =============================================================================
# Main ParamConfig
# =============================================================================

class ParamConfig(SoltempBaseModel):
    """Complete expert configuration with all defaults.
    
    This is the single source of truth for all pipeline parameters.
    Every tunable parameter MUST have a default here.
    
    Usage
    -----
    This config is NOT used directly by runtime code. It serves as the
    base layer in config resolution:
    
        internal_cfg = resolve_config(param_cfg, user_cfg, cli_cfg)
    
    Runtime code only sees InternalConfig.
    """
    
    base_dir: Optional[str] = None
    reader: ReaderConfig = Field(default_factory=ReaderConfig)
    corrector: CorrectorConfig = Field(default_factory=CorrectorConfig)
    normalizer: NormalizerConfig = Field(default_factory=NormalizerConfig)
    periodicity: PeriodicityConfig = Field(default_factory=PeriodicityConfig)
    processor: ProcessorConfig = Field(default_factory=ProcessorConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
