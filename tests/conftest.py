"""
Pytest configuration and shared fixtures for the vacuum packaging controller.

Provides:
1. Test environment variables (log directory, machine id)
2. Recording clock / observer doubles for deterministic stage timing
3. Product and settings factories
"""
import os
import tempfile

# Keep test log files out of the working tree; must run before vacpack imports.
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "vacpack-test-logs"))
os.environ.setdefault("MACHINE_ID", "test-packer")

import pytest

from tests.fixtures.machine_fixtures import (
    fast_timings,
    machine,
    observer,
    recording_clock,
)
from tests.factories import create_product, create_settings


@pytest.fixture
def product():
    """Chilled product, moderate moisture."""
    return create_product(moisture=75.0, requires_refrigeration=True)


@pytest.fixture
def settings():
    """Settings compatible with the default product fixture."""
    return create_settings()
