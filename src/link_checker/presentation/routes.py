from __future__ import annotations

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from src.link_checker.application.services import TaskService
from src.link_checker.domain.exceptions import PersistenceError, WorkQueueClosedError
from src.link_checker.domain.models import LinkStatus, Task

router = APIRouter(tags=["links"])
logger = logging.getLogger(__name__)


def get_task_service() -> TaskService:
    return TaskService()


class CheckRequest(BaseModel):
    links: list[str] = Field(..., min_length=1, description="Links to check.")


class CheckResponse(BaseModel):
    links: dict[str, LinkStatus] = Field(..., description="Initial status of every link.")
    links_num: int = Field(..., description="Identifier of the created task.")


class ReportRequest(BaseModel):
    links_list: list[int] = Field(..., description="Task identifiers to report on.")


class ReportResponse(BaseModel):
    tasks: list[Task] = Field(..., description="Known tasks among the requested ids.")
    total: int = Field(..., description="Number of tasks returned.")


@router.post(
    "/api/v1/check",
    response_model=CheckResponse,
    summary="Submit links for checking",
    description="Creates a task for the given links and queues it for the workers.",
    responses={500: {"description": "The task could not be created."}},
)
async def check_links(body: CheckRequest, service: TaskService = Depends(get_task_service)):
    try:
        task_id = await service.submit(body.links)
    except (PersistenceError, WorkQueueClosedError):
        logger.exception("Could not create link check task")
        raise HTTPException(status_code=500, detail="Could not create task")  # noqa: B904
    return CheckResponse(
        links={link: LinkStatus.QUEUED for link in body.links},
        links_num=task_id,
    )


@router.post(
    "/api/v1/report",
    response_model=ReportResponse,
    summary="Report link statuses",
    description="Returns the current status of every link for the requested tasks.",
    responses={404: {"description": "None of the requested tasks exist."}},
)
async def report(body: ReportRequest, service: TaskService = Depends(get_task_service)):
    tasks = await service.query(body.links_list)
    if not tasks:
        raise HTTPException(status_code=404, detail="No tasks found for the requested ids")
    return ReportResponse(tasks=tasks, total=len(tasks))


@router.get("/health", summary="Liveness probe")
def health() -> dict[str, str]:
    return {"status": "ok", "timestamp": datetime.now(UTC).isoformat()}
