from __future__ import annotations


class TaskError(Exception):
    code = "task_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TaskValidationError(TaskError):
    """Rejected create input; the message is meant to be shown to the user."""
    code = "invalid"


class EmptyTitleError(TaskValidationError):
    code = "empty_title"

    def __init__(self, message: str = "Title is required."):
        super().__init__(message)


class InvalidDeadlineError(TaskValidationError):
    code = "invalid_deadline"

    def __init__(self, due_date: str, message: str = "Invalid due date."):
        super().__init__(message)
        self.due_date = due_date


class TaskNotFoundError(TaskError):
    code = "not_found"

    def __init__(self, task_id: int):
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id
