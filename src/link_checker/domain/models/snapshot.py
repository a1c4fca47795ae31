from pydantic import BaseModel, Field

from src.link_checker.domain.models.task import Task


class StoreSnapshot(BaseModel):
    """On-disk layout of the status store."""

    next_id: int = Field(default=1, ge=1, description="Identifier handed to the next task.")
    tasks: dict[int, Task] = Field(default_factory=dict, description="All known tasks by id.")
