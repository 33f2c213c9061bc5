"""
Directory setup for the soltemp pipeline.

Layout under the base directory::

    <base>/analysis/   tables and spectrum artifacts
    <base>/logs/       pipeline log file
"""

from pathlib import Path


def setup_output_directories(base_output_dir=None):
    """
    Set up the output directory structure.

    Parameters
    ----------
    base_output_dir : str or Path, optional
        Base output directory. If None, ``./output`` under the current
        working directory is used.

    Returns
    -------
    dict
        Dictionary with paths: 'base', 'analysis', 'logs'
    """
    if base_output_dir is None:
        base_output_dir = Path.cwd() / "output"

    base_output_dir = Path(base_output_dir).expanduser().resolve()

    directories = {
        "base": base_output_dir,
        "analysis": base_output_dir / "analysis",
        "logs": base_output_dir / "logs",
    }

    for path in directories.values():
        path.mkdir(parents=True, exist_ok=True)

    return directories


def get_analysis_path(output_dirs, name, fmt="csv"):
    """
    Get the path of an analysis artifact.

    Parameters
    ----------
    output_dirs : dict
        Output directories from setup_output_directories()
    name : str
        Artifact name, e.g. 'adjusted_observations'
    fmt : str
        File extension: 'csv', 'parquet' or 'json'

    Returns
    -------
    Path
        Full path: analysis/<name>.<fmt>

    Example
    -------
    >>> get_analysis_path(dirs, 'periodogram', 'parquet')
    Path('output/analysis/periodogram.parquet')
    """
    ext = fmt[1:] if fmt.startswith('.') else fmt
    return Path(output_dirs["analysis"]) / f"{name}.{ext}"


def get_log_path(output_dirs):
    """
    Get the pipeline log file path.

    Parameters
    ----------
    output_dirs : dict
        Output directories from setup_output_directories()

    Returns
    -------
    Path
        Full path to log file
    """
    log_dir = Path(output_dirs["logs"])
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / "soltemp_pipeline.log"
