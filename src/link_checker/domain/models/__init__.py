from src.link_checker.domain.models.link_status import LinkStatus
from src.link_checker.domain.models.payloads import LinkBatch
from src.link_checker.domain.models.snapshot import StoreSnapshot
from src.link_checker.domain.models.task import Task

__all__ = [
    "Task",
    "LinkStatus",
    "LinkBatch",
    "StoreSnapshot",
]
