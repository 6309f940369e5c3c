"""
Task -- Unit of parallelizable work

Defines the core abstractions for the orchestrator:
- Task: Immutable unit of work carrying its callable and arguments
- TaskStatus: Lifecycle states
- TaskResult: Outcome of task execution

In scopeprint one task fingerprints every issue of one file.
"""

import itertools
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Optional

import orjson
import xxhash

_sequence = itertools.count()


class TaskStatus(Enum):
    """Task lifecycle states."""
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class Task:
    """
    Unit of parallelizable work.

    Immutable after creation. Carries all context needed for execution.
    """
    # Identity
    id: str = field(default_factory=lambda: _generate_task_id())

    # Execution
    fn: Callable = field(default=None)
    args: tuple = field(default_factory=tuple)
    kwargs: Dict[str, Any] = field(default_factory=dict)

    # Limits
    timeout: float = 60.0  # seconds

    # Metadata (for observability)
    name: str = ""
    created_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        if isinstance(other, Task):
            return self.id == other.id
        return False

    def run(self) -> 'TaskResult':
        """Execute the task, capturing failure in the result."""
        started_at = datetime.now(timezone.utc)

        try:
            value = self.fn(*self.args, **self.kwargs)
            status, error = TaskStatus.COMPLETED, None
        except Exception as e:
            value, status, error = None, TaskStatus.FAILED, f"{type(e).__name__}: {e}"

        completed_at = datetime.now(timezone.utc)
        return TaskResult(
            task_id=self.id,
            status=status,
            result=value,
            error=error,
            started_at=started_at.isoformat(),
            completed_at=completed_at.isoformat(),
            duration_ms=(completed_at - started_at).total_seconds() * 1000,
        )


@dataclass
class TaskResult:
    """Outcome of task execution."""
    task_id: str
    status: TaskStatus
    result: Any = None
    error: Optional[str] = None

    # Timing
    started_at: Optional[str] = None
    completed_at: Optional[str] = None
    duration_ms: Optional[float] = None

    @property
    def success(self) -> bool:
        return self.status == TaskStatus.COMPLETED

    @property
    def failed(self) -> bool:
        return self.status == TaskStatus.FAILED

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for logging and diagnostics."""
        return {
            "task_id": self.task_id,
            "status": self.status.value,
            "result": self.result if _is_serializable(self.result) else str(self.result),
            "error": self.error,
            "started_at": self.started_at,
            "completed_at": self.completed_at,
            "duration_ms": self.duration_ms,
        }


def _generate_task_id() -> str:
    """Generate unique task ID using xxhash."""
    seed = f"{datetime.now(timezone.utc).isoformat()}:{next(_sequence)}"
    return xxhash.xxh64(seed.encode()).hexdigest()[:12]


def _is_serializable(obj: Any) -> bool:
    """Check if object can be serialized with orjson."""
    try:
        orjson.dumps(obj)
        return True
    except (TypeError, orjson.JSONEncodeError):
        return False


def file_task(
    fn: Callable,
    args: tuple = (),
    kwargs: Dict[str, Any] = None,
    name: str = "",
    timeout: float = 60.0,
) -> Task:
    """
    Create a task that processes one file.

    Args:
        fn: Function to execute
        args: Positional arguments tuple for fn
        kwargs: Keyword arguments dict for fn
        name: Optional task name for observability (usually the file name)
        timeout: Execution timeout in seconds (default: 60)
    """
    return Task(fn=fn, args=args, kwargs=kwargs or {}, name=name, timeout=timeout)
