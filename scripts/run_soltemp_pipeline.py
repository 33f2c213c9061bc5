#!/usr/bin/env python3
"""soltemp pipeline runner.

Usage:
    python scripts/run_soltemp_pipeline.py scripts/user_config.py
    python scripts/run_soltemp_pipeline.py scripts/user_config.py --input-dir data/ --beta 0.004

Note: User config in scripts/user_config.py, expert config in soltemp.schemas.param
"""

import sys
from pathlib import Path

# Add src to path
project_root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(project_root / "src"))

from soltemp.cli.run_correction import main


if __name__ == "__main__":
    sys.exit(main())
