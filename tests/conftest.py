"""Root test configuration: isolate config.yaml and OUTBREAK_* lookups per test"""

import os

import pytest


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Run each test from an empty directory with no OUTBREAK_* variables set."""
    monkeypatch.chdir(tmp_path)
    for name in list(os.environ):
        if name.startswith("OUTBREAK_"):
            monkeypatch.delenv(name)
