"""Core soltemp pipeline execution logic.

This module contains the actual pipeline runner, separated from argument parsing.
``main`` is a thin wrapper around ``run_correction_pipeline``.
"""

import argparse
import importlib.util
import json
import shutil
from pathlib import Path
from typing import Any, Dict, Optional

from soltemp.pipeline.orchestrator import PipelineOrchestrator, PipelineResults
from soltemp.schemas import CLIConfig, ParamConfig, UserConfig, resolve_config
from soltemp.setup_directories import setup_output_directories

__all__ = ['load_user_config_dict', 'run_correction_pipeline', 'main']


def load_user_config_dict(config_path: str) -> dict:
    """Load user config dict from Python file.

    Returns the raw dict before Pydantic validation.

    Parameters
    ----------
    config_path : str
        Path to user config Python file containing a CONFIG dict.

    Returns
    -------
    dict
        Raw user configuration dictionary.

    Raises
    ------
    FileNotFoundError
        If config file does not exist.
    ValueError
        If no CONFIG dict found in file.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")

    spec = importlib.util.spec_from_file_location("soltemp_user_config", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    for name in dir(module):
        if name.startswith('CONFIG'):
            obj = getattr(module, name)
            if isinstance(obj, dict):
                return obj

    raise ValueError(f"No CONFIG dict found in {path}")


def run_correction_pipeline(
    user_config_path: Optional[str] = None,
    cli_args: Optional[Dict[str, Any]] = None,
    rerun: bool = False,
    verbose: bool = False
) -> PipelineResults:
    """Execute the solar-correction and periodicity pipeline.

    1. Loads and resolves configuration (Param < User < CLI)
    2. Sets up output directories
    3. Optionally cleans the output directory if rerun=True
    4. Runs the orchestrator to completion

    Parameters
    ----------
    user_config_path : str, optional
        Path to user config file (Python file with CONFIG dict). When None,
        only expert defaults and CLI overrides apply.
    cli_args : dict, optional
        CLI overrides. Keys: input_dir, base_dir, beta,
        max_abs_correction_c, n_workers, log_level. None values are ignored.
    rerun : bool, optional
        If True, delete the output directory before running.
    verbose : bool, optional
        If True, enable DEBUG logging and print the resolved config.

    Returns
    -------
    PipelineResults

    Examples
    --------
    ::

        run_correction_pipeline(
            "scripts/user_config.py",
            cli_args={"input_dir": "data/smhi", "beta": 0.004},
        )
    """
    param_cfg = ParamConfig()

    user_cfg = None
    if user_config_path is not None:
        user_cfg = UserConfig.model_validate(load_user_config_dict(user_config_path))

    cli_args = dict(cli_args or {})
    if verbose and cli_args.get("log_level") is None:
        cli_args["log_level"] = "DEBUG"
    cli_dict = {k: v for k, v in cli_args.items() if v is not None}
    cli_cfg = CLIConfig.model_validate(cli_dict) if cli_dict else None

    config = resolve_config(param_cfg, user_cfg, cli_cfg)

    if rerun and config.base_dir:
        base_dir_path = Path(config.base_dir)
        if base_dir_path.exists():
            print(f"Cleaning output directory: {base_dir_path}")
            shutil.rmtree(base_dir_path)

    output_dirs = setup_output_directories(config.base_dir)

    print(f"\n{'='*60}")
    print("soltemp: solar-loading correction and periodicity")
    print('='*60)
    print(f"Config: {user_config_path or '(defaults)'}")
    print(f"Input:  {config.reader.input_dir}")
    print(f"Beta:   {config.corrector.beta}")
    print(f"Output: {output_dirs['base']}")
    print('='*60)

    if verbose:
        print("\nFull Internal Configuration:")
        print(json.dumps(config.model_dump(), indent=2))
        print('='*60)

    orchestrator = PipelineOrchestrator(config, output_dirs)
    return orchestrator.run()


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Remove solar-loading bias from temperature records and analyze periodicity"
    )
    parser.add_argument("config", nargs="?", help="Path to user config file (Python, CONFIG dict)")
    parser.add_argument("--input-dir", help="Directory of semicolon-delimited input files")
    parser.add_argument("--base-dir", help="Output directory")
    parser.add_argument("--beta", type=float, help="Temperature response, degC per W/m2")
    parser.add_argument("--max-abs-correction", type=float, dest="max_abs_correction_c",
                        help="Cap on |correction| in degC")
    parser.add_argument("--workers", type=int, dest="n_workers", help="Ingestion worker threads")
    parser.add_argument("--rerun", action="store_true", help="Delete output directory before running")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    results = run_correction_pipeline(
        args.config,
        cli_args={
            "input_dir": args.input_dir,
            "base_dir": args.base_dir,
            "beta": args.beta,
            "max_abs_correction_c": args.max_abs_correction_c,
            "n_workers": args.n_workers,
        },
        rerun=args.rerun,
        verbose=args.verbose,
    )

    counts = results.counts
    print(f"Records: {counts.produced_records} produced, {counts.bad_lines} bad lines, "
          f"{counts.rejected_records} rejected")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
