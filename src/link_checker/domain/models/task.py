from datetime import datetime

from pydantic import BaseModel, Field

from src.link_checker.domain.models.link_status import LinkStatus


class Task(BaseModel):
    id: int = Field(gt=0, description="Unique, monotonically assigned task identifier.")
    links: dict[str, LinkStatus] = Field(
        default_factory=dict, description="Current status of every link in the batch."
    )
    created_at: datetime = Field(description="When the batch was submitted.")
    updated_at: datetime = Field(description="When any link status last changed.")

    @property
    def is_finished(self) -> bool:
        return all(status.is_terminal for status in self.links.values())
