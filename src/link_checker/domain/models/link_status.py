from enum import Enum


class LinkStatus(str, Enum):
    QUEUED = "queued"
    CHECKING = "checking"
    AVAILABLE = "available"
    NOT_AVAILABLE = "not available"

    @property
    def is_terminal(self) -> bool:
        return self in (LinkStatus.AVAILABLE, LinkStatus.NOT_AVAILABLE)

    def can_transition_to(self, new: "LinkStatus") -> bool:
        """Statuses only move forward: queued -> checking -> terminal."""
        if self.is_terminal:
            return new == self
        if self == LinkStatus.CHECKING:
            return new != LinkStatus.QUEUED
        return True
