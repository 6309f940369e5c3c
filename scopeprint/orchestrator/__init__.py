"""
Task Orchestrator -- Parallel execution for per-file fingerprinting

Usage:
    from scopeprint.orchestrator import get_orchestrator, file_task

    orchestrator = get_orchestrator()
    results = orchestrator.map_parallel(fingerprint_file, groups)

    # Graceful shutdown
    orchestrator.shutdown()

Configuration via environment variables:
    SCOPEPRINT_PARALLEL_ENABLED=true    # Enable/disable parallelization
    SCOPEPRINT_WORKERS=4                # Thread pool size
    SCOPEPRINT_TASK_TIMEOUT=60          # Per-file timeout (seconds)
"""

import logging
import threading
from concurrent.futures import Future
from typing import Any, Callable, Dict, List, Optional

from .config import OrchestratorConfig
from .pools import PoolStats, WorkerPool
from .task import Task, TaskResult, TaskStatus, file_task

logger = logging.getLogger(__name__)


class TaskOrchestrator:
    """
    Runs tasks on a worker pool, or inline when parallelism is disabled.

    Thread Safety:
    - All public methods are thread-safe
    - The pool is created lazily on first use
    """

    def __init__(self, config: Optional[OrchestratorConfig] = None):
        """
        Initialize the orchestrator.

        Args:
            config: Configuration. If None, loads from environment.
        """
        self._config = config or OrchestratorConfig.from_env()
        self._config.validate()

        self._lock = threading.Lock()
        self._pool: Optional[WorkerPool] = None
        self._shutdown = False

    def _ensure_started(self) -> None:
        """Lazily create the pool on first use."""
        if self._pool is not None or not self._config.enabled:
            return

        with self._lock:
            if self._pool is None:
                self._pool = WorkerPool(self._config)

    @property
    def enabled(self) -> bool:
        """Check if parallelization is enabled."""
        return self._config.enabled

    @property
    def config(self) -> OrchestratorConfig:
        """Get current configuration."""
        return self._config

    def submit(self, task: Task) -> Future:
        """
        Submit a task for execution.

        Args:
            task: Task to execute

        Returns:
            Future that resolves to TaskResult

        Raises:
            RuntimeError: If orchestrator is shut down
        """
        if self._shutdown:
            raise RuntimeError("Orchestrator is shut down")

        if not self._config.enabled:
            return self._execute_sequential(task)

        self._ensure_started()
        return self._pool.submit(task)

    def map_parallel(
        self,
        fn: Callable,
        items: List[Any],
        timeout: Optional[float] = None,
    ) -> List[Any]:
        """
        Parallel map operation.

        Applies fn to each item, returning results in the same order
        as items.

        Args:
            fn: Function to apply
            items: Items to process
            timeout: Per-item timeout; defaults to the configured task timeout

        Returns:
            List of results in same order as items

        Raises:
            RuntimeError: If orchestrator is shut down or a task fails
        """
        if not items:
            return []

        if self._shutdown:
            raise RuntimeError("Orchestrator is shut down")

        if not self._config.enabled:
            return [fn(item) for item in items]

        timeout = timeout or self._config.task_timeout
        futures = [
            self.submit(file_task(fn=fn, args=(item,), timeout=timeout))
            for item in items
        ]

        results = []
        for future in futures:
            result: TaskResult = future.result(timeout=timeout)
            if not result.success:
                raise RuntimeError(f"Task failed: {result.error}")
            results.append(result.result)
        return results

    def stats(self) -> Dict[str, Any]:
        """Pool statistics and configuration."""
        summary: Dict[str, Any] = {"enabled": self._config.enabled, "config": self._config.to_dict()}
        if self._pool is not None:
            summary["pool"] = self._pool.stats().to_dict()
        return summary

    def shutdown(self, wait: bool = True) -> None:
        """
        Shutdown the orchestrator.

        Args:
            wait: If True, wait for pending tasks to complete
        """
        with self._lock:
            if self._shutdown:
                return

            self._shutdown = True
            if self._pool is not None:
                logger.debug("Shutting down worker pool: %s", self._pool.stats().to_dict())
                self._pool.shutdown(wait=wait)

    def _execute_sequential(self, task: Task) -> Future:
        """
        Execute task inline (fallback mode).

        Returns a completed Future for API compatibility.
        """
        future: Future = Future()
        future.set_result(task.run())
        return future


# Global orchestrator instance (singleton pattern)
_orchestrator: Optional[TaskOrchestrator] = None
_orchestrator_lock = threading.Lock()


def get_orchestrator() -> TaskOrchestrator:
    """
    Get the global orchestrator instance.

    Creates one if it doesn't exist, using environment configuration.
    """
    global _orchestrator

    if _orchestrator is None:
        with _orchestrator_lock:
            if _orchestrator is None:
                _orchestrator = TaskOrchestrator()

    return _orchestrator


def reset_orchestrator() -> None:
    """
    Reset the global orchestrator.

    Useful for testing or reconfiguration.
    """
    global _orchestrator

    with _orchestrator_lock:
        if _orchestrator is not None:
            _orchestrator.shutdown(wait=True)
            _orchestrator = None


__all__ = [
    "TaskOrchestrator",
    "Task",
    "TaskStatus",
    "TaskResult",
    "file_task",
    "OrchestratorConfig",
    "WorkerPool",
    "PoolStats",
    "get_orchestrator",
    "reset_orchestrator",
]
