"""
Shared pytest fixtures.

Every test gets an isolated ENV mapping (no writes to os.environ), a fresh
TApplication singleton and fresh auto-name counters.
"""

import pytest

from tf_sys import set_env_mapping, reset_auto_counters
from tf_logger import stop_log_router


@pytest.fixture(autouse=True)
def isolated_env(tmp_path):
    """Private ENV mapping; fail.log goes to the test's tmp dir."""
    from tf_application import TApplication

    env = {"LOG_ECHO": "0", "FAIL_LOG_DIR": str(tmp_path)}
    set_env_mapping(env)
    yield env
    set_env_mapping(None)
    TApplication.reset()
    reset_auto_counters()
    stop_log_router()
