# tests/test_sql_store.py

import pytest
from sqlalchemy import text

from todolist_api.database import create_db_and_tables
from todolist_api.errors import StorageError
from todolist_api.stores.sql_store import SQLStore


async def _count(store: SQLStore, table: str) -> int:
    async with store.engine.connect() as conn:
        result = await conn.execute(text(f"SELECT COUNT(*) FROM {table}"))
        return result.scalar_one()


async def test_schema_creation_is_idempotent(sql_store: SQLStore) -> None:
    await sql_store.create_list("Groceries")

    await create_db_and_tables(sql_store.engine)

    assert await _count(sql_store, "lists") == 1


async def test_delete_list_cascades_in_database(sql_store: SQLStore) -> None:
    groceries = await sql_store.create_list("Groceries")
    chores = await sql_store.create_list("Chores")
    await sql_store.create_task(groceries.id, "Milk")
    await sql_store.create_task(groceries.id, "Eggs")
    await sql_store.create_task(chores.id, "Vacuum")

    await sql_store.delete_list(groceries.id)

    assert await _count(sql_store, "tasks") == 1
    assert [t.title for t in await sql_store.list_tasks(chores.id)] == ["Vacuum"]


async def test_task_ids_come_from_the_table(sql_store: SQLStore) -> None:
    groceries = await sql_store.create_list("Groceries")
    chores = await sql_store.create_list("Chores")

    milk = await sql_store.create_task(groceries.id, "Milk")
    vacuum = await sql_store.create_task(chores.id, "Vacuum")

    assert milk.id != vacuum.id
    assert (await sql_store.get_task(chores.id, vacuum.id)).list_id == chores.id


async def test_database_failure_becomes_storage_error(sql_store: SQLStore) -> None:
    todo_list = await sql_store.create_list("Groceries")
    async with sql_store.engine.begin() as conn:
        await conn.execute(text("DROP TABLE tasks"))

    with pytest.raises(StorageError):
        await sql_store.list_tasks(todo_list.id)
