"""
Shared fixtures and configuration for snapmatch tests
"""

import os
import re
import sys
import pytest

# Add src directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

from snapmatch import Redactions, reset_config
from snapmatch import config as config_module


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the user's real configuration"""
    monkeypatch.delenv(config_module.CONFIG_ENV_VAR, raising=False)
    monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATH", tmp_path / "no-config.json5")
    reset_config()
    yield
    reset_config()


@pytest.fixture
def empty_redactions():
    return Redactions()


@pytest.fixture
def home_redactions():
    """Redactions for a home directory and a request id"""
    redactions = Redactions()
    redactions.insert("[HOME]", "/home/alice")
    redactions.insert("[REQUEST_ID]", re.compile(r"req-[0-9a-f]{8}"))
    return redactions


@pytest.fixture
def write_file(tmp_path):
    """Write a fixture file and return its path"""
    def _write(name, content):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def sample_log():
    """Captured program output with volatile lines"""
    return (
        "Compiling demo v0.1.0 (/home/alice/demo)\n"
        "warning: unused variable `x`\n"
        "warning: unused import `y`\n"
        "Finished dev profile in 1.52s\n"
        "Running target/debug/demo\n"
    )
