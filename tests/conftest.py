"""Pytest configuration for qjsx loader tests."""

import logging
import sys
from pathlib import Path

import pytest

# Make tests/helpers.py importable regardless of the rootdir pytest picks
sys.path.insert(0, str(Path(__file__).parent))


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run the test from an empty temporary working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def clean_root_logger():
    """Restore root logger handlers and level after the test."""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield root
    for h in list(root.handlers):
        if h not in saved_handlers:
            root.removeHandler(h)
            h.close()
    root.setLevel(saved_level)
