"""
Shared pytest fixtures for the scopeprint test suite.

Usage in tests:
    def test_something(sequential):
        engine = FingerprintEngine(provider=FakeProvider(...), orchestrator=sequential)

Every test runs with the user config pointed at a temp directory, so a
developer's ~/.scopeprint/config.yaml never leaks into results.
"""

import pytest

from scopeprint.config import ConfigManager
from scopeprint.orchestrator import TaskOrchestrator, reset_orchestrator
from scopeprint.orchestrator.config import OrchestratorConfig


@pytest.fixture(autouse=True)
def isolated_user_config(tmp_path, monkeypatch):
    """Point the user config layer at a per-test directory."""
    user_dir = tmp_path / "home" / ".scopeprint"
    monkeypatch.setattr(ConfigManager, "USER_CONFIG_DIR", user_dir)
    monkeypatch.setattr(ConfigManager, "USER_CONFIG_FILE", user_dir / "config.yaml")
    for name in ("SCOPEPRINT_HASH_ALGORITHM", "SCOPEPRINT_ENCODING", "SCOPEPRINT_DEFAULT_SCOPE"):
        monkeypatch.delenv(name, raising=False)
    return user_dir


@pytest.fixture(autouse=True)
def reset_global_orchestrator():
    """Reset global orchestrator before and after each test."""
    reset_orchestrator()
    yield
    reset_orchestrator()


@pytest.fixture
def sequential():
    """Orchestrator that runs every task inline."""
    orch = TaskOrchestrator(OrchestratorConfig(enabled=False))
    yield orch
    orch.shutdown(wait=True)


@pytest.fixture
def threaded():
    """Orchestrator backed by a small thread pool."""
    orch = TaskOrchestrator(OrchestratorConfig(enabled=True, workers=3, task_timeout=10.0))
    yield orch
    orch.shutdown(wait=True)
