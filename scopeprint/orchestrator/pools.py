"""
WorkerPool -- Thread pool for per-file fingerprinting

Parsing happens inside tree-sitter's C code and trees are shared
read-only between issues of one file, so threads are enough; nothing
needs to be pickled.
"""

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass

from .config import OrchestratorConfig
from .task import Task


@dataclass
class PoolStats:
    """Statistics for pool observability."""
    active_tasks: int = 0
    completed_tasks: int = 0
    failed_tasks: int = 0
    total_duration_ms: float = 0.0

    @property
    def avg_duration_ms(self) -> float:
        if self.completed_tasks == 0:
            return 0.0
        return self.total_duration_ms / self.completed_tasks

    def to_dict(self) -> dict:
        return {
            "active_tasks": self.active_tasks,
            "completed_tasks": self.completed_tasks,
            "failed_tasks": self.failed_tasks,
            "avg_duration_ms": round(self.avg_duration_ms, 2)
        }


class WorkerPool:
    """ThreadPoolExecutor wrapper that records per-task statistics."""

    def __init__(self, config: OrchestratorConfig):
        self._config = config
        self._executor = ThreadPoolExecutor(
            max_workers=config.workers,
            thread_name_prefix="scopeprint-"
        )
        self._stats = PoolStats()
        self._lock = threading.Lock()
        self._shutdown = False

    def submit(self, task: Task) -> Future:
        """
        Submit a task for execution.

        Returns a Future resolving to the task's TaskResult.
        """
        if self._shutdown:
            raise RuntimeError("Pool is shut down")

        with self._lock:
            self._stats.active_tasks += 1

        future = self._executor.submit(task.run)
        future.add_done_callback(self._on_complete)
        return future

    def _on_complete(self, future: Future) -> None:
        """Callback when task completes."""
        with self._lock:
            self._stats.active_tasks -= 1

            try:
                result = future.result()
                if result.success:
                    self._stats.completed_tasks += 1
                    self._stats.total_duration_ms += result.duration_ms or 0
                else:
                    self._stats.failed_tasks += 1
            except Exception:
                self._stats.failed_tasks += 1

    def stats(self) -> PoolStats:
        """Get pool statistics."""
        with self._lock:
            return PoolStats(
                active_tasks=self._stats.active_tasks,
                completed_tasks=self._stats.completed_tasks,
                failed_tasks=self._stats.failed_tasks,
                total_duration_ms=self._stats.total_duration_ms
            )

    def shutdown(self, wait: bool = True) -> None:
        """Shutdown the pool."""
        self._shutdown = True
        self._executor.shutdown(wait=wait)
