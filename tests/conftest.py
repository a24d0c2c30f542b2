"""
Pytest configuration and fixtures
"""

import logging

import pytest


@pytest.fixture(autouse=True)
def debug_logging(caplog):
    """Capture estimator debug logs, e.g. withheld calculations."""
    caplog.set_level(logging.DEBUG, logger="sitecalc")
    return caplog
