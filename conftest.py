"""Pytest configuration."""

import os
import sys
from pathlib import Path

import pytest

# Add project root to path for imports
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture(autouse=True)
def clean_plugin_env(monkeypatch):
    """Keep the runner's own PLUGIN_*/DRONE_* settings out of every test."""
    for name in list(os.environ):
        if name.startswith(("PLUGIN_", "DRONE_")):
            monkeypatch.delenv(name, raising=False)

    import artifactory_upload.utils.config as config_module

    config_module.reset_config()
    yield
    config_module.reset_config()
