# ============================================================================
# FILE: conftest.py
# RELPATH: namesafe/tests/conftest.py
# PROJECT: NameSafe Download Filename Sanitizer
# VERSION: 1.0.0
# LIFECYCLE: Proposed
# DESCRIPTION: Pytest fixtures for the NameSafe test suite
# ============================================================================

"""
Pytest configuration and shared fixtures.

Provides temporary directories, config paths, loggers and sample names
shared across the unit and integration tests.
"""

import pytest
import tempfile
import shutil
from pathlib import Path
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

from namesafe.logging import StructuredLogger


# ============================================================================
# Sample Name Fixtures
# ============================================================================

@pytest.fixture
def safe_names():
    """Names every rule leaves alone."""
    return [
        "my_report_2024",
        "a.b c",
        "a/b",
        "a\\b",
        "CONSOLE.txt",
        "LPT10",
        "photo\ue000.png",
        "\U0001F468\U0001F469",
    ]


@pytest.fixture
def tricky_names():
    """Names that exercise every rule, alone and combined."""
    return [
        "",
        ".",
        " ",
        "\x00",
        "CON",
        "con.txt",
        "COM1",
        "LPT9.log",
        "aux.tar.gz",
        "CON\u200d",
        "CON ",
        ".hidden",
        "trailing ",
        "file<>:\"|?*.txt",
        "tilde~name",
        "\x01\x1f\x7f\x80\x9f",
        "a\x00b",
        "\u2028x\u2029",
        "\u00a0x\u3000",
        "\ufeffname",
        "\U0001F468\u200d\U0001F469",
        "\ufdd0\uffff",
        "a\ud800b",
        "..",
        "::**",
    ]


# ============================================================================
# Filesystem Fixtures
# ============================================================================

@pytest.fixture
def temp_dir():
    """Create a temporary directory for test file operations."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def temp_config_file(temp_dir):
    """Create a temporary config file path."""
    yield temp_dir / "namesafe_config.json"


@pytest.fixture
def memory_logger(temp_dir):
    """StructuredLogger that keeps entries in memory only."""
    return StructuredLogger(log_dir=str(temp_dir / "logs"), write_to_file=False)


# ============================================================================
# LIFECYCLE STATUS: Proposed
# USAGE: Import fixtures in test files, pytest auto-discovers them
# ============================================================================
