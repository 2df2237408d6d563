"""Pytest configuration and fixtures."""

import asyncio
import logging

import pytest


@pytest.fixture
def event_loop_policy():
    """Use the default event loop policy for all async tests."""
    return asyncio.DefaultEventLoopPolicy()


@pytest.fixture(autouse=True)
def _engine_debug_logs(caplog):
    """Capture engine debug output so failing tests show the mode transitions."""
    caplog.set_level(logging.DEBUG, logger="tradegrid")
