"""
Pytest configuration for agentmux tests.
"""

import sys
from pathlib import Path

ROOT = Path(__file__).parent.parent

# Make `agentmux` and `tests.fixtures` importable without an install
sys.path.insert(0, str(ROOT / "src"))
sys.path.insert(0, str(ROOT))
