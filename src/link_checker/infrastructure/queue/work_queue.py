from __future__ import annotations

import logging
import threading
from collections import deque

from src.link_checker.domain.exceptions import WorkQueueClosedError
from src.link_checker.domain.models.payloads import LinkBatch
from src.link_checker.domain.repositories import TaskManagerRepository

logger = logging.getLogger(__name__)


class WorkQueue(TaskManagerRepository):
    """
    Bounded FIFO of pending batches between the dispatcher and the workers.

    A full queue blocks the submitter instead of dropping the batch. Closing
    the queue wakes every blocked producer and consumer; batches still
    buffered at that point are abandoned.
    """

    def __init__(self, capacity: int = 100) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._items: deque[LinkBatch] = deque()
        self._closed = False
        self._mutex = threading.Lock()
        self._not_empty = threading.Condition(self._mutex)
        self._not_full = threading.Condition(self._mutex)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending(self) -> int:
        with self._mutex:
            return len(self._items)

    def enqueue(self, batch: LinkBatch) -> None:
        waited = False
        with self._not_full:
            if not self._closed and len(self._items) >= self._capacity:
                waited = True
                logger.warning("Work queue is full, task waits", extra={"task_id": batch.task_id})
                self._not_full.wait_for(lambda: self._closed or len(self._items) < self._capacity)
            if self._closed:
                raise WorkQueueClosedError(batch.task_id)
            self._items.append(batch)
            self._not_empty.notify()
        if waited:
            logger.info("Task queued after waiting", extra={"task_id": batch.task_id})
        else:
            logger.info("Task queued", extra={"task_id": batch.task_id})

    def dequeue(self) -> LinkBatch | None:
        """Block until a batch arrives; ``None`` means the queue was closed."""
        with self._not_empty:
            self._not_empty.wait_for(lambda: self._closed or bool(self._items))
            if self._closed:
                return None
            batch = self._items.popleft()
            self._not_full.notify()
            return batch

    def close(self) -> None:
        with self._mutex:
            if self._closed:
                return
            self._closed = True
            abandoned = len(self._items)
            self._not_empty.notify_all()
            self._not_full.notify_all()
        if abandoned:
            logger.warning("Work queue closed with pending tasks", extra={"abandoned": abandoned})
