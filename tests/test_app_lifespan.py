import json

import inject
import pytest
from fastapi.testclient import TestClient

from src.link_checker.domain.models import LinkStatus
from src.link_checker.domain.repositories import StorageRepository, TaskManagerRepository
from src.link_checker.infrastructure.json_store.repository import JsonStatusStore
from src.link_checker.infrastructure.queue.work_queue import WorkQueue
from src.link_checker.worker.pool import LinkCheckerPool
from fakes import wait_for


def test_configure_di_binds_one_shared_pool(app_module, tmp_path) -> None:
    pool = inject.instance(LinkCheckerPool)

    assert inject.instance(StorageRepository) is pool.storage
    assert inject.instance(TaskManagerRepository) is pool.task_manager
    assert isinstance(pool.storage, JsonStatusStore)
    assert pool.storage.data_file == tmp_path / "app_tasks.json"
    assert isinstance(pool.task_manager, WorkQueue)


def test_lifespan_runs_workers_and_flushes_store_on_shutdown(app_module, tmp_path) -> None:
    pool = inject.instance(LinkCheckerPool)
    store = inject.instance(StorageRepository)

    with TestClient(app_module.app) as client:
        assert pool.running
        response = client.post("/api/v1/check", json={"links": ["example.com", "http://localhost:1"]})
        assert response.status_code == 200
        task_id = response.json()["links_num"]

        assert wait_for(lambda: store.get_tasks([task_id])[0].is_finished)
        report = client.post("/api/v1/report", json={"links_list": [task_id]})
        assert report.json()["tasks"][0]["links"] == {
            "example.com": LinkStatus.AVAILABLE.value,
            "http://localhost:1": LinkStatus.NOT_AVAILABLE.value,
        }

    assert pool.stopped
    assert not pool.running
    persisted = json.loads((tmp_path / "app_tasks.json").read_text("utf-8"))
    assert persisted["tasks"][str(task_id)]["links"]["example.com"] == "available"
    assert persisted["next_id"] == task_id + 1


def test_second_lifespan_on_a_stopped_pool_fails_loudly(app_module) -> None:
    with TestClient(app_module.app):
        pass

    with pytest.raises(RuntimeError):
        with TestClient(app_module.app):
            pass
