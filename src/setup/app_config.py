from __future__ import annotations

import functools

import inject

from src.link_checker.domain.repositories import StorageRepository, TaskManagerRepository
from src.link_checker.infrastructure.http.link_probe import check_link
from src.link_checker.infrastructure.json_store.repository import JsonStatusStore
from src.link_checker.infrastructure.queue.work_queue import WorkQueue
from src.link_checker.worker.pool import LinkCheckerPool
from src.setup.worker_config import WorkerSettings, get_worker_settings


def build_pool(settings: WorkerSettings | None = None) -> LinkCheckerPool:
    """Create the status store, work queue and worker pool from settings."""
    if settings is None:
        settings = get_worker_settings()
    storage = JsonStatusStore(settings.DATA_FILE)
    task_manager = WorkQueue(settings.QUEUE_CAPACITY)
    return LinkCheckerPool(
        storage,
        task_manager,
        workers=settings.WORKER_COUNT,
        link_pause=settings.LINK_PAUSE_SEC,
        check=functools.partial(check_link, timeout=settings.CHECK_TIMEOUT_SEC),
    )


def configure_di(settings: WorkerSettings | None = None) -> None:
    """Bind the store, queue and pool into the DI container once per process."""
    if inject.is_configured():
        return
    pool = build_pool(settings)

    def _config(binder: inject.Binder) -> None:
        binder.bind(StorageRepository, pool.storage)
        binder.bind(TaskManagerRepository, pool.task_manager)
        binder.bind(LinkCheckerPool, pool)

    inject.configure(_config)
