"""Root test configuration: keep MDVIEW_* env vars from leaking into tests"""

import os

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Drop any MDVIEW_* variables set in the surrounding shell."""
    for name in list(os.environ):
        if name.startswith("MDVIEW_"):
            monkeypatch.delenv(name)
