import asyncio
from collections.abc import Sequence
from typing import cast

import inject

from src.link_checker.domain.models import LinkBatch, Task
from src.link_checker.domain.repositories import StorageRepository, TaskManagerRepository


class TaskService:
    """Accepts batches of links for checking and reports their current statuses."""

    def __init__(
        self,
        storage: StorageRepository | None = None,
        task_manager: TaskManagerRepository | None = None,
    ) -> None:
        self._storage = storage or cast(StorageRepository, inject.instance(StorageRepository))
        self._task_manager = task_manager or cast(
            TaskManagerRepository, inject.instance(TaskManagerRepository)
        )

    async def submit(self, links: Sequence[str]) -> int:
        """
        Create a task for ``links`` and schedule it; return the task id.

        Duplicate links are checked once. Enqueueing runs in a thread because a
        full queue blocks the caller until a worker frees a slot.
        """
        unique_links = list(dict.fromkeys(links))
        if not unique_links:
            raise ValueError("At least one link is required.")
        task_id = await asyncio.to_thread(self._storage.create_task, unique_links)
        await asyncio.to_thread(
            self._task_manager.enqueue, LinkBatch(task_id=task_id, links=unique_links)
        )
        return task_id

    async def query(self, task_ids: Sequence[int]) -> list[Task]:
        """Return the known tasks among ``task_ids``."""
        return await asyncio.to_thread(self._storage.get_tasks, list(task_ids))
