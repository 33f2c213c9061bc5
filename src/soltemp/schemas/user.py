"""UserConfig: Forgiving, minimal user-facing configuration.

This schema accepts user inputs with aliases for common naming patterns
(e.g., INPUT_DIR → input_dir, BETA → beta).

UserConfig is intentionally minimal - users only specify what they want
to override from the expert defaults.
"""

from typing import Any, Literal, Optional
from pydantic import Field, field_validator
from soltemp.schemas.base import SoltempBaseModel


class UserReaderConfig(SoltempBaseModel):
    """User-facing reader config."""
    input_dir: Optional[str] = None
    file_pattern: Optional[str] = None
    delimiter: Optional[str] = None
    encoding: Optional[str] = None


class UserCorrectorConfig(SoltempBaseModel):
    """User-facing corrector config."""
    beta: Optional[float] = None
    max_abs_correction_c: Optional[float] = None


class UserConfig(SoltempBaseModel):
    """User-facing configuration schema.
    
    Minimal, forgiving, and uses common aliases. Users only specify
    what they want to override from ParamConfig defaults.
    
    Usage
    -----
        user_cfg = UserConfig(
            INPUT_DIR="/data/smhi/hourly",
            BASE_DIR="/data/soltemp",
            BETA=0.004,
        )
        
        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """
    
    # Top-level operational settings
    input_dir: Optional[str] = Field(None, alias="INPUT_DIR")
    base_dir: Optional[str] = Field(None, alias="BASE_DIR")
    file_pattern: Optional[str] = Field(None, alias="FILE_PATTERN")
    
    # Correction settings (flat aliases)
    beta: Optional[float] = Field(None, alias="BETA")
    max_abs_correction_c: Optional[float] = Field(None, alias="MAX_ABS_CORRECTION_C")
    
    # Normalization bounds (flat aliases)
    min_day_of_year: Optional[int] = Field(None, alias="MIN_DAY_OF_YEAR")
    max_day_of_year: Optional[int] = Field(None, alias="MAX_DAY_OF_YEAR")
    
    # Operational
    n_workers: Optional[int] = Field(None, alias="N_WORKERS")
    output_format: Optional[Literal["csv", "parquet"]] = Field(None, alias="OUTPUT_FORMAT")
    
    # Nested overrides (advanced users)
    reader: Optional[UserReaderConfig] = None
    corrector: Optional[UserCorrectorConfig] = None
    normalizer: Optional[dict[str, Any]] = None
    periodicity: Optional[dict[str, Any]] = None
    
    model_config = SoltempBaseModel.model_config.copy()
    # Allow forgiving input dictionaries (ignore unknown legacy keys)
    model_config.update({"populate_by_name": True, "extra": "ignore"})

    @field_validator("beta", "max_abs_correction_c", mode="before")
    @classmethod
    def coerce_numeric_fields(cls, v):
        """Accept int or float for numeric fields."""
        if v is not None:
            return float(v)
        return v

    @field_validator("output_format", mode="before")
    @classmethod
    def normalize_format(cls, v):
        """Normalize format names to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v
    
    def to_internal_overrides(self) -> dict:
        """Convert flat UserConfig to nested InternalConfig structure.
        
        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}
        
        if self.base_dir is not None:
            overrides["base_dir"] = str(self.base_dir)
        
        # Reader section
        reader = {}
        if self.input_dir is not None:
            reader["input_dir"] = str(self.input_dir)
        if self.file_pattern is not None:
            reader["file_pattern"] = self.file_pattern
        if self.reader is not None:
            reader.update(self.reader.model_dump(exclude_none=True))
        if reader:
            overrides["reader"] = reader
        
        # Corrector section
        corrector = {}
        if self.beta is not None:
            corrector["beta"] = self.beta
        if self.max_abs_correction_c is not None:
            corrector["max_abs_correction_c"] = self.max_abs_correction_c
        if self.corrector is not None:
            corrector.update(self.corrector.model_dump(exclude_none=True))
        if corrector:
            overrides["corrector"] = corrector
        
        # Normalizer section
        normalizer = {}
        if self.min_day_of_year is not None:
            normalizer["min_day_of_year"] = self.min_day_of_year
        if self.max_day_of_year is not None:
            normalizer["max_day_of_year"] = self.max_day_of_year
        if self.normalizer is not None:
            normalizer.update(self.normalizer)
        if normalizer:
            overrides["normalizer"] = normalizer
        
        if self.periodicity:
            overrides["periodicity"] = dict(self.periodicity)
        
        if self.n_workers is not None:
            overrides["processor"] = {"n_workers": self.n_workers}
        
        if self.output_format is not None:
            overrides["output"] = {"format": self.output_format}
        
        return overrides
