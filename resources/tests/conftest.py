"""Pytest configuration for resources/tests.

Puts the repository root on sys.path so tests can import the in-memory
link source via `resources.tests.helpers.link_source`.
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
