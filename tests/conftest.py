"""
conftest.py – make the src/ layout and the fixture tools importable without an install.
"""
import sys
from pathlib import Path

_TESTS = Path(__file__).resolve().parent
for _p in (_TESTS.parent / "src", _TESTS / "tools"):
    if str(_p) not in sys.path:
        sys.path.insert(0, str(_p))
