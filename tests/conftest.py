"""Root-level pytest fixtures for the soltemp test suite.

Provides shared configuration fixtures following the Pydantic-based
architecture. Tests use these fixtures instead of raw dict configs.
"""

import pytest
from pathlib import Path
import tempfile
import shutil

from soltemp.schemas import ParamConfig, UserConfig, resolve_config


# =============================================================================
# Configuration Fixtures (Pydantic-based)
# =============================================================================

@pytest.fixture
def param_config():
    """Expert configuration with all defaults."""
    return ParamConfig()


@pytest.fixture
def internal_config(param_config):
    """Fully validated runtime configuration (no overrides).

    Examples
    --------
    >>> def test_corrector_from_config(internal_config):
    ...     corrector = TemperatureCorrector.from_config(internal_config)
    ...     assert corrector.beta == 0.003
    """
    return resolve_config(param_config, None, None)


@pytest.fixture
def make_config(param_config):
    """Factory fixture for creating custom test configs.

    Returns a callable that accepts UserConfig-compatible kwargs.

    Examples
    --------
    >>> def test_custom_beta(make_config):
    ...     config = make_config(BETA=0.004)
    ...     assert config.corrector.beta == 0.004
    """
    def _make(**user_overrides):
        """Create InternalConfig with user overrides."""
        if user_overrides:
            user = UserConfig(**user_overrides)
            return resolve_config(param_config, user, None)
        return resolve_config(param_config, None, None)

    return _make


# =============================================================================
# Directory Fixtures
# =============================================================================

@pytest.fixture
def temp_dir():
    """Temporary directory that is cleaned up after test."""
    d = tempfile.mkdtemp()
    yield Path(d)
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def output_dirs(temp_dir):
    """Standard soltemp output directory structure (base, analysis, logs)."""
    dirs = {
        "base": temp_dir,
        "analysis": temp_dir / "analysis",
        "logs": temp_dir / "logs",
    }
    for d in dirs.values():
        d.mkdir(parents=True, exist_ok=True)
    return dirs


# =============================================================================
# Data Fixtures
# =============================================================================

REFERENCE_LINE = "1958;06;21;12;17.0;57.7607;12.9468"


@pytest.fixture
def reference_line():
    """Gothenburg-area midsummer noon observation used as regression anchor."""
    return REFERENCE_LINE
