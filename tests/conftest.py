"""Root test configuration: keep MDFIGURES_* settings from leaking into tests"""

import os

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Drop any MDFIGURES_* environment variables set outside the test session."""
    for name in list(os.environ):
        if name.startswith("MDFIGURES_"):
            monkeypatch.delenv(name)
