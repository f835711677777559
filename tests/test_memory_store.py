# tests/test_memory_store.py

import asyncio
from concurrent.futures import ThreadPoolExecutor

from todolist_api.stores.memory_store import MemoryStore


async def test_task_ids_are_scoped_per_list(memory_store: MemoryStore) -> None:
    groceries = await memory_store.create_list("Groceries")
    chores = await memory_store.create_list("Chores")

    milk = await memory_store.create_task(groceries.id, "Milk")
    vacuum = await memory_store.create_task(chores.id, "Vacuum")

    assert milk.id == 1
    assert vacuum.id == 1
    assert (await memory_store.get_task(groceries.id, 1)).title == "Milk"
    assert (await memory_store.get_task(chores.id, 1)).title == "Vacuum"


async def test_task_ids_not_reused_after_delete(memory_store: MemoryStore) -> None:
    todo_list = await memory_store.create_list("Groceries")
    await memory_store.create_task(todo_list.id, "Milk")
    eggs = await memory_store.create_task(todo_list.id, "Eggs")
    await memory_store.delete_task(todo_list.id, eggs.id)

    bread = await memory_store.create_task(todo_list.id, "Bread")

    assert bread.id == 3


async def test_concurrent_task_creation_from_coroutines(memory_store: MemoryStore) -> None:
    todo_list = await memory_store.create_list("Groceries")

    tasks = await asyncio.gather(
        *(memory_store.create_task(todo_list.id, f"item {i}") for i in range(50))
    )

    assert sorted(t.id for t in tasks) == list(range(1, 51))


def test_concurrent_task_creation_from_threads(memory_store: MemoryStore) -> None:
    todo_list = asyncio.run(memory_store.create_list("Groceries"))

    def create(i: int) -> int:
        task = asyncio.run(memory_store.create_task(todo_list.id, f"item {i}"))
        return task.id

    with ThreadPoolExecutor(max_workers=8) as pool:
        ids = list(pool.map(create, range(200)))

    assert sorted(ids) == list(range(1, 201))
    stored = asyncio.run(memory_store.list_tasks(todo_list.id))
    assert len(stored) == 200


async def test_shutdown_discards_state(memory_store: MemoryStore) -> None:
    await memory_store.create_list("Groceries")
    await memory_store.shutdown()

    assert await memory_store.list_all() == []
