from __future__ import annotations

from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.link_checker.application.services import TaskService
from src.link_checker.infrastructure.json_store.repository import JsonStatusStore
from src.link_checker.infrastructure.queue.work_queue import WorkQueue
from src.link_checker.worker.pool import LinkCheckerPool
from fakes import RecordingStore, StubChecker, StubTaskManager


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "tasks_data.json"


@pytest.fixture
def store(data_file: Path) -> JsonStatusStore:
    return JsonStatusStore(data_file)


@pytest.fixture
def recording_store(data_file: Path) -> RecordingStore:
    return RecordingStore(data_file)


@pytest.fixture
def pool_factory(recording_store: RecordingStore):
    """Build pools over the recording store; every pool is stopped at teardown."""
    pools: list[LinkCheckerPool] = []

    def _build(
        *,
        checker: StubChecker | None = None,
        workers: int = 3,
        capacity: int = 100,
    ) -> tuple[LinkCheckerPool, WorkQueue, StubChecker]:
        checker = checker or StubChecker()
        work_queue = WorkQueue(capacity)
        pool = LinkCheckerPool(
            recording_store,
            work_queue,
            workers=workers,
            link_pause=0.0,
            check=checker,
        )
        pools.append(pool)
        return pool, work_queue, checker

    yield _build
    for pool in pools:
        pool.stop()


@pytest.fixture
def api_client(store: JsonStatusStore):
    """FastAPI test client with the service wired to a real store and a stub task manager."""
    from src.link_checker.presentation.routes import get_task_service, router

    task_stub = StubTaskManager()
    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_task_service] = lambda: TaskService(store, task_stub)
    client = TestClient(app)
    return client, task_stub, store


@pytest.fixture
def app_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Reload the application module against a private data file and a stub link check."""
    import importlib

    import inject

    import src.setup.app_config as app_config

    monkeypatch.setenv("DATA_FILE", str(tmp_path / "app_tasks.json"))
    monkeypatch.setenv("WORKER_COUNT", "2")
    monkeypatch.setenv("LINK_PAUSE_SEC", "0")
    checker = StubChecker(down={"http://localhost:1"})
    monkeypatch.setattr(app_config, "check_link", lambda link, *, timeout: checker(link))

    # Module-level wiring binds once per process; start from a clean injector.
    inject.clear()
    main_module = importlib.reload(importlib.import_module("src.link_checker.presentation.main"))
    yield main_module
    inject.clear()
