"""
Storage contract shared by the in-memory and relational backends.

Handlers only talk to ``TodoStore``; which backend sits behind it is
decided once at startup (see ``todolist_api.dependencies``).
"""

from typing import Protocol

from todolist_api.errors import ValidationError
from todolist_api.models import TodoListRead, TodoRead


class TodoStore(Protocol):
    name: str

    async def startup(self) -> None: ...

    async def shutdown(self) -> None: ...

    async def create_list(self, title: str) -> TodoListRead: ...

    async def list_all(self) -> list[TodoListRead]: ...

    async def get_list(self, list_id: int) -> TodoListRead: ...

    async def update_list(self, list_id: int, title: str) -> TodoListRead: ...

    async def delete_list(self, list_id: int) -> None: ...

    async def create_task(
        self, list_id: int, title: str, description: str = "", completed: bool = False
    ) -> TodoRead: ...

    async def list_tasks(self, list_id: int) -> list[TodoRead]: ...

    async def get_task(self, list_id: int, task_id: int) -> TodoRead: ...

    async def update_task(
        self,
        list_id: int,
        task_id: int,
        title: str,
        description: str = "",
        completed: bool = False,
    ) -> TodoRead: ...

    async def delete_task(self, list_id: int, task_id: int) -> None: ...


MAX_TITLE_LENGTH = 255


def require_list_title(title: str) -> None:
    if not title:
        raise ValidationError("Title for todo list is required")
    if len(title) > MAX_TITLE_LENGTH:
        raise ValidationError(
            f"Title for todo list must be at most {MAX_TITLE_LENGTH} characters"
        )


def require_task_title(title: str) -> None:
    if not title:
        raise ValidationError("Todo title is required")
    if len(title) > MAX_TITLE_LENGTH:
        raise ValidationError(
            f"Todo title must be at most {MAX_TITLE_LENGTH} characters"
        )
