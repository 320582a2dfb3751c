"""
Reclaim.ai task API client and command-line front end.

    from reclaim_tasks import ReclaimClient

    with ReclaimClient() as client:
        task = client.create_task("Important Work", duration=2.0, time_scheme="work")
        client.complete_task(task.id)
"""

from .api.client import ReclaimClient, TaskFilter
from .core.errors import (
    ApiError,
    AuthenticationError,
    InvalidRecordError,
    NotFoundError,
    ReclaimError,
)
from .core.fields import UNSPECIFIED, Clear, SetTo
from .tasks.task_models import Priority, Task, TaskStatus

__version__ = "0.1.0"

__all__ = [
    "ApiError",
    "AuthenticationError",
    "Clear",
    "InvalidRecordError",
    "NotFoundError",
    "Priority",
    "ReclaimClient",
    "ReclaimError",
    "SetTo",
    "Task",
    "TaskFilter",
    "TaskStatus",
    "UNSPECIFIED",
]
