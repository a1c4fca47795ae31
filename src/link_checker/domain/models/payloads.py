from pydantic import BaseModel, Field


class LinkBatch(BaseModel):
    """Unit of work handed from the dispatcher to exactly one worker."""

    task_id: int = Field(description="Task the links belong to.")
    links: list[str] = Field(description="Links to check, in submission order.")
