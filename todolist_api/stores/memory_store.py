"""
In-memory backend.

All lists, their tasks and both id counters live in process memory and
are guarded by one lock. Every public method holds that lock for its
whole body and never awaits while holding it, so each call is atomic
with respect to every other call, whether it comes from the event loop
or from a worker thread.
"""

import logging
from dataclasses import dataclass, field
from threading import Lock
from typing import Dict

from todolist_api.errors import (
    ConflictError,
    ListNotFoundError,
    TaskNotFoundError,
)
from todolist_api.models import TodoListRead, TodoRead
from todolist_api.stores.base import require_list_title, require_task_title

logger = logging.getLogger(__name__)


@dataclass
class _ListRecord:
    id: int
    title: str
    tasks: Dict[int, TodoRead] = field(default_factory=dict)
    next_task_id: int = 1

    def snapshot(self) -> TodoListRead:
        return TodoListRead(
            id=self.id,
            title=self.title,
            todos=[task.model_copy() for task in self.tasks.values()],
        )


class MemoryStore:
    """Lists and tasks held in dictionaries behind a single lock."""

    name = "memory"

    def __init__(self):
        self._lists: Dict[int, _ListRecord] = {}
        self._next_list_id = 1
        self._lock = Lock()

    async def startup(self) -> None:
        logger.info("In-memory store ready")

    async def shutdown(self) -> None:
        with self._lock:
            logger.info("Discarding %d in-memory list(s)", len(self._lists))
            self._lists.clear()

    def _get_record(self, list_id: int) -> _ListRecord:
        record = self._lists.get(list_id)
        if record is None:
            raise ListNotFoundError(list_id)
        return record

    def _get_task(self, list_id: int, task_id: int) -> TodoRead:
        record = self._get_record(list_id)
        task = record.tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(list_id, task_id)
        return task

    def _ensure_title_free(self, title: str, list_id: int | None = None) -> None:
        for record in self._lists.values():
            if record.title == title and record.id != list_id:
                logger.warning("Duplicate list title rejected: %r", title)
                raise ConflictError()

    # Lists

    async def create_list(self, title: str) -> TodoListRead:
        require_list_title(title)
        with self._lock:
            self._ensure_title_free(title)
            record = _ListRecord(id=self._next_list_id, title=title)
            self._next_list_id += 1
            self._lists[record.id] = record
            logger.info("Created list %d", record.id)
            return record.snapshot()

    async def list_all(self) -> list[TodoListRead]:
        with self._lock:
            return [record.snapshot() for record in self._lists.values()]

    async def get_list(self, list_id: int) -> TodoListRead:
        with self._lock:
            return self._get_record(list_id).snapshot()

    async def update_list(self, list_id: int, title: str) -> TodoListRead:
        require_list_title(title)
        with self._lock:
            record = self._get_record(list_id)
            self._ensure_title_free(title, list_id)
            record.title = title
            return record.snapshot()

    async def delete_list(self, list_id: int) -> None:
        with self._lock:
            record = self._get_record(list_id)
            del self._lists[list_id]
            logger.info("Deleted list %d with %d task(s)", list_id, len(record.tasks))

    # Tasks

    async def create_task(
        self, list_id: int, title: str, description: str = "", completed: bool = False
    ) -> TodoRead:
        with self._lock:
            record = self._get_record(list_id)
            require_task_title(title)
            task = TodoRead(
                id=record.next_task_id,
                list_id=list_id,
                title=title,
                description=description,
                completed=completed,
            )
            record.next_task_id += 1
            record.tasks[task.id] = task
            logger.debug("Created task %d in list %d", task.id, list_id)
            return task.model_copy()

    async def list_tasks(self, list_id: int) -> list[TodoRead]:
        with self._lock:
            record = self._get_record(list_id)
            return [task.model_copy() for task in record.tasks.values()]

    async def get_task(self, list_id: int, task_id: int) -> TodoRead:
        with self._lock:
            return self._get_task(list_id, task_id).model_copy()

    async def update_task(
        self,
        list_id: int,
        task_id: int,
        title: str,
        description: str = "",
        completed: bool = False,
    ) -> TodoRead:
        with self._lock:
            self._get_task(list_id, task_id)
            require_task_title(title)
            task = TodoRead(
                id=task_id,
                list_id=list_id,
                title=title,
                description=description,
                completed=completed,
            )
            self._lists[list_id].tasks[task_id] = task
            return task.model_copy()

    async def delete_task(self, list_id: int, task_id: int) -> None:
        with self._lock:
            self._get_task(list_id, task_id)
            del self._lists[list_id].tasks[task_id]
            logger.debug("Deleted task %d from list %d", task_id, list_id)
