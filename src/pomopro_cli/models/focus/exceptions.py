"""Custom exceptions for PomoPro focus sessions."""


class FocusError(Exception):
    """Base exception for all focus timer errors."""


class StorageUnavailableError(FocusError):
    """Raised when a value cannot be written to the durable store."""


class InvalidTransitionError(FocusError, ValueError):
    """Raised when a timer operation is not valid in the current state."""


class TaskNotFoundError(FocusError, KeyError):
    """Raised when a task id does not match any stored task."""

    def __init__(self, task_id: str):
        super().__init__(task_id)
        self.task_id = task_id

    def __str__(self) -> str:
        return f"Task not found: {self.task_id}"


class CorruptValueError(FocusError):
    """Raised by a strict store read when the stored value cannot be decoded."""

    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Stored value for {self.key!r} is corrupt"
