"""
Pytest configuration for the filekit test suite.

Provides:
- ``src/`` on ``sys.path`` so the suite runs without an editable install
- A Loguru-to-standard-logging bridge so ``caplog`` sees filekit messages
- Isolation of the process-wide settings and filesystem provider
"""

import contextlib
import logging
import os
import sys
from pathlib import Path

src_path = str(Path(__file__).parent.parent / "src")
sys.path.insert(0, src_path)

import pytest
from loguru import logger

from filekit.config import reset_settings
from filekit.utils.paths import get_current_filesystem_provider, restore_filesystem_provider


# ============================================================================
# LOGURU INTEGRATION FIXTURES
# ============================================================================

@pytest.fixture(autouse=True, scope="function")
def capture_loguru_logs_globally(caplog):
    """
    Capture Loguru logs into pytest's caplog.

    Every Loguru record is re-emitted on the standard logger named after the
    module that produced it, with the level mapped to the closest standard
    level.
    """
    class PropagateHandler(logging.Handler):
        def emit(self, record):
            logging.getLogger(record.name or "filekit").handle(record)

    caplog.set_level(logging.DEBUG)

    handler_id = logger.add(
        PropagateHandler(),
        format="{message}",
        level="DEBUG",
        enqueue=False,
    )

    yield

    with contextlib.suppress(ValueError):
        logger.remove(handler_id)


# ============================================================================
# STATE ISOLATION FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def isolate_filekit_state(monkeypatch):
    """
    Start every test from default settings and the standard filesystem
    provider, with no ``FILEKIT_*`` variables leaking in from the environment.
    """
    for name in list(os.environ):
        if name.startswith("FILEKIT_"):
            monkeypatch.delenv(name, raising=False)

    reset_settings()
    original_provider = get_current_filesystem_provider()

    yield

    restore_filesystem_provider(original_provider)
    reset_settings()
