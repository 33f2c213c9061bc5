"""soltemp User Configuration.

This is the user-facing configuration file. Modify settings here to customize
the pipeline behavior. Advanced settings live in soltemp.schemas.param.

Usage:
    soltemp-run scripts/user_config.py
    soltemp-run scripts/user_config.py --beta 0.004
    python scripts/run_soltemp_pipeline.py scripts/user_config.py --input-dir data/
"""

CONFIG = {
    # ========================================================================
    # INPUT & OUTPUT
    # ========================================================================
    "INPUT_DIR": "./data",        # Semicolon-delimited hourly observations
    "FILE_PATTERN": "*.csv",
    "BASE_DIR": "./output",       # analysis/ and logs/ are created here
    "OUTPUT_FORMAT": "csv",       # "csv" or "parquet"

    # ========================================================================
    # CORRECTION
    # ========================================================================
    "BETA": 0.003,                # degC per W/m2, must be in (0, 1)
    "MAX_ABS_CORRECTION_C": 20.0,

    # ========================================================================
    # NORMALIZATION
    # ========================================================================
    "MIN_DAY_OF_YEAR": 1,
    "MAX_DAY_OF_YEAR": 366,

    # ========================================================================
    # PERFORMANCE
    # ========================================================================
    "N_WORKERS": 4,               # Parallel ingestion threads

    # Advanced: period range of the periodogram
    # "periodicity": {"period_min_years": 0.5, "period_max_years": 50.0},
}
