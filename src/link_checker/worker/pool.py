from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

from src.link_checker.domain.exceptions import (
    InvalidStatusTransitionError,
    LinkNotFoundError,
    PersistenceError,
    TaskNotFoundError,
)
from src.link_checker.domain.models.link_status import LinkStatus
from src.link_checker.domain.models.payloads import LinkBatch
from src.link_checker.domain.repositories import StorageRepository, TaskManagerRepository
from src.link_checker.infrastructure.http.link_probe import check_link

logger = logging.getLogger(__name__)

LinkCheck = Callable[[str], LinkStatus]

_STORE_ERRORS = (
    TaskNotFoundError,
    LinkNotFoundError,
    InvalidStatusTransitionError,
    PersistenceError,
)


class LinkCheckerPool:
    """
    Fixed set of worker threads draining the work queue.

    Each worker owns one batch at a time and walks its links in order:
    ``checking``, probe, terminal status, short pause. ``stop()`` closes the
    queue and waits for every worker; a worker finishes the batch it holds
    before exiting, anything still queued is dropped. A stopped pool cannot
    be started again because its queue stays closed.
    """

    def __init__(
        self,
        storage: StorageRepository,
        task_manager: TaskManagerRepository,
        *,
        workers: int = 3,
        link_pause: float = 0.1,
        check: LinkCheck = check_link,
    ) -> None:
        if workers < 1:
            raise ValueError("workers must be at least 1")
        self._storage = storage
        self._task_manager = task_manager
        self._workers = workers
        self._link_pause = link_pause
        self._check = check
        self._threads: list[threading.Thread] = []
        self._stopped = False
        self._lock = threading.Lock()

    @property
    def storage(self) -> StorageRepository:
        return self._storage

    @property
    def task_manager(self) -> TaskManagerRepository:
        return self._task_manager

    @property
    def running(self) -> bool:
        return any(thread.is_alive() for thread in self._threads)

    @property
    def stopped(self) -> bool:
        return self._stopped

    def start(self) -> None:
        with self._lock:
            if self._stopped:
                raise RuntimeError("Link checker pool was stopped and cannot be restarted")
            if self._threads:
                return
            for worker_id in range(1, self._workers + 1):
                thread = threading.Thread(
                    target=self._run,
                    args=(worker_id,),
                    name=f"link-checker-{worker_id}",
                    daemon=True,
                )
                thread.start()
                self._threads.append(thread)
        logger.info("Link checker workers started", extra={"workers": self._workers})

    def stop(self) -> None:
        with self._lock:
            self._stopped = True
            self._task_manager.close()
            for thread in self._threads:
                thread.join()
            self._threads.clear()
        logger.info("All link checker workers stopped")

    def recover_tasks(self) -> None:
        """
        Hook for resuming batches lost at the last shutdown.

        Nothing is recovered yet: unfinished tasks keep their last persisted
        statuses and are not re-queued.
        """
        logger.info("Checking for unfinished tasks")

    def _run(self, worker_id: int) -> None:
        logger.debug("Worker started", extra={"worker_id": worker_id})
        while True:
            batch = self._task_manager.dequeue()
            if batch is None:
                logger.debug("Worker exiting", extra={"worker_id": worker_id})
                return
            try:
                self.process_batch(batch, worker_id=worker_id)
            except Exception:
                logger.exception(
                    "Worker failed on task, moving on",
                    extra={"worker_id": worker_id, "task_id": batch.task_id},
                )

    def process_batch(self, batch: LinkBatch, *, worker_id: int = 0) -> None:
        logger.info(
            "Worker processing task",
            extra={"worker_id": worker_id, "task_id": batch.task_id, "links": len(batch.links)},
        )
        for link in batch.links:
            self._write(batch.task_id, link, LinkStatus.CHECKING)
            self._write(batch.task_id, link, self._probe(batch.task_id, link))
            if self._link_pause > 0:
                time.sleep(self._link_pause)
        logger.info("Task finished", extra={"worker_id": worker_id, "task_id": batch.task_id})

    def _probe(self, task_id: int, link: str) -> LinkStatus:
        try:
            return LinkStatus(self._check(link))
        except Exception:
            logger.exception("Link check failed", extra={"task_id": task_id, "link": link})
            return LinkStatus.NOT_AVAILABLE

    def _write(self, task_id: int, link: str, status: LinkStatus) -> None:
        try:
            self._storage.update_status(task_id, link, status)
        except _STORE_ERRORS:
            logger.exception(
                "Failed to record link status",
                extra={"task_id": task_id, "link": link, "status": status.value},
            )
