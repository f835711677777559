"""
Relational backend on SQLModel / SQLAlchemy asyncio.

Ids come from the database, list title uniqueness and the list -> task
cascade are enforced by the schema. Every operation opens its own
session; existence checks and the following write share its
transaction.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from todolist_api.core.config import Settings
from todolist_api.database import (
    create_db_and_tables,
    create_engine,
    create_session_factory,
)
from todolist_api.errors import (
    ConflictError,
    ListNotFoundError,
    StorageError,
    TaskNotFoundError,
)
from todolist_api.models import Todo, TodoList, TodoListRead, TodoRead
from todolist_api.stores.base import require_list_title, require_task_title

logger = logging.getLogger(__name__)


def _to_read(task: Todo) -> TodoRead:
    return TodoRead(
        id=task.id,
        list_id=task.list_id,
        title=task.title,
        description=task.description or "",
        completed=task.completed,
    )


class SQLStore:
    name = "sql"

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self._session_factory = create_session_factory(engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "SQLStore":
        return cls(create_engine(settings.sqlalchemy_url(), echo=settings.db_echo))

    async def startup(self) -> None:
        # Failures here are fatal; let them reach the lifespan
        await create_db_and_tables(self.engine)

    async def shutdown(self) -> None:
        await self.engine.dispose()
        logger.info("Database engine disposed")

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as session:
            try:
                yield session
            except SQLAlchemyError as e:
                logger.exception("Database operation failed")
                raise StorageError() from e

    async def _list_exists(self, session: AsyncSession, list_id: int) -> bool:
        result = await session.exec(select(TodoList.id).where(TodoList.id == list_id))
        return result.first() is not None

    async def _require_list(self, session: AsyncSession, list_id: int) -> None:
        if not await self._list_exists(session, list_id):
            raise ListNotFoundError(list_id)

    async def _require_task(
        self, session: AsyncSession, list_id: int, task_id: int
    ) -> Todo:
        result = await session.exec(
            select(Todo).where(Todo.list_id == list_id, Todo.id == task_id)
        )
        task = result.first()
        if task is None:
            # Tell a missing list apart from a missing task
            await self._require_list(session, list_id)
            raise TaskNotFoundError(list_id, task_id)
        return task

    async def _tasks_for(self, session: AsyncSession, list_id: int) -> list[TodoRead]:
        result = await session.exec(
            select(Todo).where(Todo.list_id == list_id).order_by(Todo.id)
        )
        return [_to_read(task) for task in result.all()]

    async def _commit_title(self, session: AsyncSession, todo_list: TodoList) -> None:
        # a failed flush expires todo_list, so read the title beforehand
        title = todo_list.title
        session.add(todo_list)
        try:
            await session.commit()
        except IntegrityError as e:
            logger.warning("Duplicate list title rejected: %r", title)
            raise ConflictError() from e

    # Lists

    async def create_list(self, title: str) -> TodoListRead:
        require_list_title(title)
        async with self._session() as session:
            todo_list = TodoList(title=title)
            await self._commit_title(session, todo_list)
            logger.info("Created list %d", todo_list.id)
            return TodoListRead(id=todo_list.id, title=todo_list.title, todos=[])

    async def list_all(self) -> list[TodoListRead]:
        async with self._session() as session:
            lists = (await session.exec(select(TodoList).order_by(TodoList.id))).all()
            tasks = (
                await session.exec(select(Todo).order_by(Todo.list_id, Todo.id))
            ).all()

        by_list: dict[int, list[TodoRead]] = {}
        for task in tasks:
            by_list.setdefault(task.list_id, []).append(_to_read(task))
        return [
            TodoListRead(id=tl.id, title=tl.title, todos=by_list.get(tl.id, []))
            for tl in lists
        ]

    async def get_list(self, list_id: int) -> TodoListRead:
        async with self._session() as session:
            todo_list = await session.get(TodoList, list_id)
            if todo_list is None:
                raise ListNotFoundError(list_id)
            todos = await self._tasks_for(session, list_id)
            return TodoListRead(id=todo_list.id, title=todo_list.title, todos=todos)

    async def update_list(self, list_id: int, title: str) -> TodoListRead:
        require_list_title(title)
        async with self._session() as session:
            todo_list = await session.get(TodoList, list_id)
            if todo_list is None:
                raise ListNotFoundError(list_id)
            todo_list.title = title
            await self._commit_title(session, todo_list)
            todos = await self._tasks_for(session, list_id)
            return TodoListRead(id=list_id, title=title, todos=todos)

    async def delete_list(self, list_id: int) -> None:
        async with self._session() as session:
            todo_list = await session.get(TodoList, list_id)
            if todo_list is None:
                raise ListNotFoundError(list_id)
            # tasks go with it through ON DELETE CASCADE
            await session.delete(todo_list)
            await session.commit()
            logger.info("Deleted list %d", list_id)

    # Tasks

    async def create_task(
        self, list_id: int, title: str, description: str = "", completed: bool = False
    ) -> TodoRead:
        async with self._session() as session:
            await self._require_list(session, list_id)
            require_task_title(title)
            task = Todo(
                list_id=list_id,
                title=title,
                description=description,
                completed=completed,
            )
            session.add(task)
            await session.commit()
            logger.debug("Created task %d in list %d", task.id, list_id)
            return _to_read(task)

    async def list_tasks(self, list_id: int) -> list[TodoRead]:
        async with self._session() as session:
            await self._require_list(session, list_id)
            return await self._tasks_for(session, list_id)

    async def get_task(self, list_id: int, task_id: int) -> TodoRead:
        async with self._session() as session:
            return _to_read(await self._require_task(session, list_id, task_id))

    async def update_task(
        self,
        list_id: int,
        task_id: int,
        title: str,
        description: str = "",
        completed: bool = False,
    ) -> TodoRead:
        async with self._session() as session:
            task = await self._require_task(session, list_id, task_id)
            require_task_title(title)
            task.title = title
            task.description = description
            task.completed = completed
            session.add(task)
            await session.commit()
            return _to_read(task)

    async def delete_task(self, list_id: int, task_id: int) -> None:
        async with self._session() as session:
            task = await self._require_task(session, list_id, task_id)
            await session.delete(task)
            await session.commit()
            logger.debug("Deleted task %d from list %d", task_id, list_id)
