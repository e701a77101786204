"""Make the checkout's ``fuzzyscope`` importable without an install.

Tests exercise the engine and the picker straight from the source tree, so
the repository root goes first on ``sys.path`` even when pytest runs from
its console script.
"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = str(Path(__file__).resolve().parents[1])

if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)
