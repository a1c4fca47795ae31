class TaskNotFoundError(Exception):
    """Raised when a task identifier does not exist in the status store."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task with id '{task_id}' was not found.")
        self.task_id = task_id


class LinkNotFoundError(Exception):
    """Raised when a status write names a link the task was not created with."""

    def __init__(self, task_id: int, link: str) -> None:
        super().__init__(f"Link '{link}' is not part of task '{task_id}'.")
        self.task_id = task_id
        self.link = link


class InvalidStatusTransitionError(Exception):
    """Raised when a link status would move backwards."""

    def __init__(self, task_id: int, link: str, current: str, new: str) -> None:
        super().__init__(
            f"Link '{link}' of task '{task_id}' cannot move from '{current}' to '{new}'."
        )
        self.task_id = task_id
        self.link = link
        self.current = current
        self.new = new


class PersistenceError(Exception):
    """Raised when the store cannot write or read its backing file."""


class StoreLoadError(PersistenceError):
    """Raised when previously persisted state exists but cannot be decoded."""


class WorkQueueClosedError(Exception):
    """Raised when a batch is offered to a queue that has been shut down."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Work queue is closed; batch for task '{task_id}' was not accepted.")
        self.task_id = task_id
