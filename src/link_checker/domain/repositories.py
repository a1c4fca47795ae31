from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol

from src.link_checker.domain.models.link_status import LinkStatus
from src.link_checker.domain.models.payloads import LinkBatch
from src.link_checker.domain.models.task import Task


class StorageRepository(Protocol):
    """Repository contract for the authoritative record of tasks and link statuses."""

    def create_task(self, links: Iterable[str]) -> int:
        """Persist a new task with every link queued and return its identifier."""

    def update_status(self, task_id: int, link: str, status: LinkStatus) -> None:
        """Set the status of one link of an existing task and persist it."""

    def get_tasks(self, task_ids: Sequence[int]) -> list[Task]:
        """Return the tasks that exist among ``task_ids``; unknown ids are skipped."""

    def close(self) -> None:
        """Flush state before the process exits."""


class TaskManagerRepository(Protocol):
    """Repository contract for scheduling batches of links for checking."""

    def enqueue(self, batch: LinkBatch) -> None:
        """Hand a batch to the workers, blocking while the queue is full."""

    def dequeue(self) -> LinkBatch | None:
        """Take the next batch, or ``None`` once the queue has been closed."""

    def close(self) -> None:
        """Wake every waiter and stop accepting batches."""
