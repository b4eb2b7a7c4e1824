"""Exception types raised by the Synaptik task service."""


class SynaptikError(Exception):
    """Base class for errors that tools report back to the caller."""

    tip: str | None = None

    def __init__(self, message: str, tip: str | None = None):
        super().__init__(message)
        if tip is not None:
            self.tip = tip


class TaskNotFoundError(SynaptikError):
    """Raised when a task id does not exist in the store."""

    tip = "Use synaptik_list to find valid task IDs."

    def __init__(self, task_id: str):
        super().__init__(f"Task '{task_id}' not found")
        self.task_id = task_id


class ValidationError(SynaptikError):
    """Raised when task fields are rejected before saving."""


class StoreError(SynaptikError):
    """Raised when the task file cannot be read or written."""

    tip = "Check SYNAPTIK_STORE_PATH and the file's permissions."


class InvalidDateError(SynaptikError, ValueError):
    """Raised when a date expression cannot be resolved to a date."""

    tip = "Use today, tomorrow, a weekday name, eom, eoy, YYYY-MM-DD, Nd or Nw."

    def __init__(self, expression: str):
        super().__init__(f"Cannot parse date '{expression}'")
        self.expression = expression
