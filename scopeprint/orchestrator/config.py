"""
OrchestratorConfig -- Configuration for parallel fingerprinting

Loads parallelization settings from environment variables.
Provides sensible defaults that work on any machine.

Environment variables:
- SCOPEPRINT_PARALLEL_ENABLED: Enable/disable parallelization (default: true)
- SCOPEPRINT_WORKERS: Thread pool size (default: min(8, CPU_COUNT))
- SCOPEPRINT_TASK_TIMEOUT: Per-file task timeout in seconds (default: 60)
- SCOPEPRINT_SHUTDOWN_TIMEOUT: Pool shutdown timeout in seconds (default: 10)
"""

import os
import multiprocessing
from dataclasses import dataclass


@dataclass
class OrchestratorConfig:
    """
    Configuration for the task orchestrator.

    Loaded from environment variables with sensible defaults.
    """

    # Feature toggle
    enabled: bool = True

    # Worker pool size
    workers: int = 4

    # Timeouts
    task_timeout: float = 60.0             # Per-task timeout (seconds)
    shutdown_timeout: float = 10.0         # Pool shutdown timeout (seconds)

    @classmethod
    def from_env(cls) -> 'OrchestratorConfig':
        """Load configuration from environment variables."""
        cpu_count = multiprocessing.cpu_count()

        return cls(
            enabled=_get_bool_env("SCOPEPRINT_PARALLEL_ENABLED", True),
            workers=_get_int_env("SCOPEPRINT_WORKERS", max(1, min(8, cpu_count))),
            task_timeout=_get_float_env("SCOPEPRINT_TASK_TIMEOUT", 60.0),
            shutdown_timeout=_get_float_env("SCOPEPRINT_SHUTDOWN_TIMEOUT", 10.0),
        )

    def validate(self) -> None:
        """Validate configuration values."""
        if self.workers < 1:
            raise ValueError("SCOPEPRINT_WORKERS must be >= 1")
        if self.task_timeout <= 0:
            raise ValueError("SCOPEPRINT_TASK_TIMEOUT must be > 0")

    def to_dict(self) -> dict:
        """Serialize for display/logging."""
        return {
            "enabled": self.enabled,
            "workers": self.workers,
            "task_timeout": self.task_timeout,
            "shutdown_timeout": self.shutdown_timeout,
        }


def _get_bool_env(key: str, default: bool) -> bool:
    """Get boolean from environment variable."""
    value = os.environ.get(key, "").lower()
    if value in ("true", "1", "yes", "on"):
        return True
    if value in ("false", "0", "no", "off"):
        return False
    return default


def _get_int_env(key: str, default: int) -> int:
    """Get integer from environment variable."""
    value = os.environ.get(key, "")
    if value:
        try:
            return int(value)
        except ValueError:
            pass
    return default


def _get_float_env(key: str, default: float) -> float:
    """Get float from environment variable."""
    value = os.environ.get(key, "")
    if value:
        try:
            return float(value)
        except ValueError:
            pass
    return default
