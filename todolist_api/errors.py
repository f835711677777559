"""
Error types raised by the stores.

Every error that reaches the HTTP layer carries the status code and the
message shown to the client, so the exception handlers in ``main`` only
have to copy them into the response.
"""

from fastapi import status


class TodoError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "Unexpected error"

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class ValidationError(TodoError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid request body"


class NotFoundError(TodoError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Not found"


class ListNotFoundError(NotFoundError):
    detail = "To-Do list not found"

    def __init__(self, list_id: int):
        self.list_id = list_id
        super().__init__()


class TaskNotFoundError(NotFoundError):
    detail = "To-Do item not found in this list"

    def __init__(self, list_id: int, task_id: int):
        self.list_id = list_id
        self.task_id = task_id
        super().__init__()


class ConflictError(TodoError):
    status_code = status.HTTP_409_CONFLICT
    detail = "A todo list with this title already exists"


class StorageError(TodoError):
    detail = "Storage failure"


class ConfigurationError(Exception):
    """Raised at startup when required settings are missing."""
