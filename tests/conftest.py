"""
Root conftest.py — sys.path, env vars, shared fixtures.

Sets up the test environment so all production code can be imported
without Azure credentials. No test talks to Azure: every SDK client is a
MagicMock.
"""

import os
import sys

import pytest

# Add project root to sys.path so 'core', 'config', 'services', etc. are importable
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


@pytest.fixture(autouse=True, scope="session")
def set_minimal_env_vars():
    """
    Provide a subscription so startup validation passes without a
    credential file.
    """
    defaults = {
        "AZURE_SUBSCRIPTION_ID": "00000000-0000-0000-0000-000000000000",
    }
    for key, value in defaults.items():
        os.environ.setdefault(key, value)


@pytest.fixture(autouse=True)
def fresh_config():
    """Drop the cached configuration around every test."""
    from config import reset_config
    reset_config()
    yield
    reset_config()


@pytest.fixture
def no_sleep():
    """Sleep replacement that records requested durations."""
    calls = []

    def _sleep(seconds):
        calls.append(seconds)

    _sleep.calls = calls
    return _sleep


@pytest.fixture
def fake_clock():
    """
    Monotonic clock that only advances when fake sleep is called.

    Returns (clock, sleep).
    """
    now = [0.0]

    def _clock():
        return now[0]

    def _sleep(seconds):
        now[0] += seconds

    return _clock, _sleep
