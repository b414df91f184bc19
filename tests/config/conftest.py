"""
Config test fixtures — clean environment via monkeypatch.
"""

import pytest


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all env vars that config modules might read, for isolation."""
    env_vars_to_clear = [
        "AZURE_AUTH_LOCATION", "AZURE_SUBSCRIPTION_ID",
        "BATCH_REGION", "BATCH_RESOURCE_GROUP", "BATCH_ACCOUNT_NAME",
        "BATCH_STORAGE_ACCOUNT_NAME", "BATCH_APPLICATION_NAME",
        "BATCH_APPLICATION_PACKAGE_VERSION", "BATCH_ROTATE_KEYS", "BATCH_DELETE_ACCOUNT",
        "BATCH_POOL_ID", "BATCH_POOL_VM_SIZE", "BATCH_POOL_DEDICATED_NODES",
        "BATCH_POOL_STEADY_TIMEOUT_SECONDS", "BATCH_POOL_POLL_INTERVAL_SECONDS",
        "BATCH_FAIL_ON_POOL_TIMEOUT", "BATCH_JOB_ID", "BATCH_TASK_COUNT",
        "BATCH_TASK_COMMAND_LINE", "BATCH_SUBMIT_CHUNK_SIZE", "BATCH_MONITOR_ITERATIONS",
        "BATCH_MONITOR_INTERVAL_SECONDS", "BATCH_MONITOR_STOP_WHEN_COMPLETE",
        "BATCH_CLEANUP_SCOPE", "DEBUG_MODE", "LOG_LEVEL",
    ]
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
