"""CLIConfig: Command-line operational overrides.

Minimal configuration for operational parameters that commonly change
between runs: input directory, output directory, beta, verbosity.

This schema handles command-line arguments parsed by argparse.
"""

from typing import Literal, Optional
from pydantic import Field
from soltemp.schemas.base import SoltempBaseModel


class CLIConfig(SoltempBaseModel):
    """Command-line configuration overrides.
    
    Operational-only settings that override user and param configs.
    Highest priority in config resolution.
    
    Usage
    -----
        cli_cfg = CLIConfig(
            input_dir="/data/smhi/hourly",
            base_dir="/scratch/soltemp_output",
        )
        
        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """
    
    input_dir: Optional[str] = None
    base_dir: Optional[str] = None
    beta: Optional[float] = None
    max_abs_correction_c: Optional[float] = None
    n_workers: Optional[int] = Field(None, ge=1)
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = None
    
    def to_internal_overrides(self) -> dict:
        """Convert CLI config to internal config structure.
        
        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}
        
        if self.base_dir is not None:
            overrides["base_dir"] = str(self.base_dir)
        
        if self.input_dir is not None:
            overrides["reader"] = {"input_dir": str(self.input_dir)}
        
        corrector = {}
        if self.beta is not None:
            corrector["beta"] = self.beta
        if self.max_abs_correction_c is not None:
            corrector["max_abs_correction_c"] = self.max_abs_correction_c
        if corrector:
            overrides["corrector"] = corrector
        
        if self.n_workers is not None:
            overrides["processor"] = {"n_workers": self.n_workers}
        
        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}
        
        return overrides
