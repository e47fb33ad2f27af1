"""
Pytest configuration file.

Ensures the repo root and this directory are on sys.path so that
'import relval...' and 'from factories import ...' work, and gives every test
a clean settings singleton read from a RELVAL_*-free environment.
"""
import os
import sys
from pathlib import Path

import pytest

# Add the repo root and tests dir to sys.path
repo_root = Path(__file__).parent.parent
for path in (repo_root, Path(__file__).parent):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from relval.config.settings import reset_settings  # noqa: E402


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Drop RELVAL_* overrides and reset cached settings around each test."""
    for name in list(os.environ):
        if name.startswith("RELVAL_"):
            monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()
