"""
Shared pytest fixtures for the dit client config store test suite.

Autouse fixtures below isolate tests from the live installation:
  - Config path -> temp directory  (prevents writes to ~/.ditconfig)
  - Logging     -> reconfigured per test
"""

import pytest


@pytest.fixture(autouse=True)
def _isolate_config_path(tmp_path, monkeypatch):
    """Point DIT_CONFIG at a temp file and clear other DIT_* overrides.

    Without this, a ConfigStore built with default settings would read and
    write the developer's real ``~/.ditconfig``.
    """
    for var in ("DIT_KDF", "DIT_LOG_JSON", "DIT_LOG_LEVEL", "DIT_COORDINATOR",
                "DIT_KNW_VOTING", "DIT_KNW_TOKEN", "DIT_TOKEN"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("DIT_CONFIG", str(tmp_path / ".ditconfig"))
    yield


@pytest.fixture(autouse=True)
def _reset_logging(monkeypatch):
    """Force configure_logging() to run again for every test."""
    import dit_client.core.log as log_mod

    monkeypatch.setattr(log_mod, "_configured", False)
    yield


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / ".ditconfig"
