from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Sequence
from datetime import UTC, datetime
from pathlib import Path

from pydantic import ValidationError

from src.link_checker.domain.exceptions import (
    InvalidStatusTransitionError,
    LinkNotFoundError,
    PersistenceError,
    StoreLoadError,
    TaskNotFoundError,
)
from src.link_checker.domain.models.link_status import LinkStatus
from src.link_checker.domain.models.snapshot import StoreSnapshot
from src.link_checker.domain.models.task import Task
from src.link_checker.domain.repositories import StorageRepository
from src.link_checker.infrastructure.json_store.rwlock import ReadWriteLock

logger = logging.getLogger(__name__)


class JsonStatusStore(StorageRepository):
    """
    Status store kept in memory and written through to a JSON file.

    Every mutation rewrites the whole snapshot (tasks and the next id) before
    returning. All access goes through one readers-writer lock; callers only
    ever receive copies of the stored tasks.
    """

    def __init__(self, data_file: str | Path = "tasks_data.json", *, autoload: bool = True) -> None:
        self._data_file = Path(data_file)
        self._lock = ReadWriteLock()
        self._tasks: dict[int, Task] = {}
        self._next_id = 1
        self.load_error: StoreLoadError | None = None
        if autoload:
            try:
                self.load()
            except StoreLoadError as exc:
                # Startup continues with an empty store.
                self.load_error = exc
                logger.warning(
                    "Could not load persisted tasks, starting empty",
                    extra={"data_file": str(self._data_file), "error": str(exc)},
                )

    @property
    def data_file(self) -> Path:
        return self._data_file

    def create_task(self, links: Iterable[str]) -> int:
        """Allocate the next id, queue every link and persist the new task."""
        now = datetime.now(UTC)
        with self._lock.write_locked():
            task_id = self._next_id
            self._next_id += 1
            self._tasks[task_id] = Task(
                id=task_id,
                links={link: LinkStatus.QUEUED for link in links},
                created_at=now,
                updated_at=now,
            )
            self._save()
        logger.debug("Task created", extra={"task_id": task_id})
        return task_id

    def update_status(self, task_id: int, link: str, status: LinkStatus) -> None:
        status = LinkStatus(status)
        with self._lock.write_locked():
            task = self._tasks.get(task_id)
            if task is None:
                raise TaskNotFoundError(task_id)
            current = task.links.get(link)
            if current is None:
                raise LinkNotFoundError(task_id, link)
            if not current.can_transition_to(status):
                raise InvalidStatusTransitionError(task_id, link, current.value, status.value)
            task.links[link] = status
            task.updated_at = datetime.now(UTC)
            self._save()

    def get_tasks(self, task_ids: Sequence[int]) -> list[Task]:
        with self._lock.read_locked():
            return [
                self._tasks[task_id].model_copy(deep=True)
                for task_id in task_ids
                if task_id in self._tasks
            ]

    def snapshot(self) -> StoreSnapshot:
        """Return a consistent copy of the whole store."""
        with self._lock.read_locked():
            return self._snapshot().model_copy(deep=True)

    def load(self) -> None:
        """
        Replace in-memory state with the persisted snapshot.

        A missing file is a cold start and leaves the store empty.
        """
        with self._lock.write_locked():
            try:
                raw = self._data_file.read_text("utf-8")
            except FileNotFoundError:
                return
            except OSError as exc:
                raise StoreLoadError(f"Cannot read {self._data_file}: {exc}") from exc
            try:
                snapshot = StoreSnapshot.model_validate_json(raw)
            except ValidationError as exc:
                raise StoreLoadError(f"Malformed store file {self._data_file}") from exc
            self._tasks = dict(snapshot.tasks)
            # Never hand out an id that is already taken, even if the counter was stale.
            self._next_id = max([snapshot.next_id, *(task_id + 1 for task_id in self._tasks)])
        logger.info(
            "Loaded persisted tasks",
            extra={"data_file": str(self._data_file), "tasks": len(self._tasks)},
        )

    def close(self) -> None:
        """Flush state one last time; failures are logged, not raised."""
        try:
            with self._lock.write_locked():
                self._save()
        except PersistenceError:
            logger.exception("Failed to flush tasks on close", extra={"data_file": str(self._data_file)})

    def _snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(next_id=self._next_id, tasks=self._tasks)

    def _save(self) -> None:
        """Write the snapshot atomically. Caller must hold the write lock."""
        payload = self._snapshot().model_dump_json(indent=2)
        tmp = self._data_file.with_name(self._data_file.name + ".tmp")
        try:
            self._data_file.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload, "utf-8")
            os.replace(tmp, self._data_file)
        except OSError as exc:
            raise PersistenceError(f"Cannot write {self._data_file}: {exc}") from exc
