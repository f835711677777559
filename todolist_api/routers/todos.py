from fastapi import APIRouter, Response, status

from todolist_api.dependencies import StoreDep
from todolist_api.models import TodoCreate, TodoRead, TodoUpdate

router = APIRouter(prefix="/todolists/{list_id}/todos", tags=["todos"])


@router.post("", response_model=TodoRead, status_code=status.HTTP_201_CREATED)
async def create_todo(list_id: int, todo_data: TodoCreate, store: StoreDep):
    """Create a task in a list"""
    return await store.create_task(
        list_id, todo_data.title, todo_data.description or "", todo_data.completed
    )


@router.get("", response_model=list[TodoRead])
async def get_todos(list_id: int, store: StoreDep):
    return await store.list_tasks(list_id)


@router.get("/{todo_id}", response_model=TodoRead)
async def get_todo(list_id: int, todo_id: int, store: StoreDep):
    """Get a specific task of a list"""
    return await store.get_task(list_id, todo_id)


@router.put("/{todo_id}", response_model=TodoRead)
async def update_todo(
    list_id: int, todo_id: int, todo_data: TodoUpdate, store: StoreDep
):
    return await store.update_task(
        list_id,
        todo_id,
        todo_data.title,
        todo_data.description or "",
        todo_data.completed,
    )


@router.delete("/{todo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_todo(list_id: int, todo_id: int, store: StoreDep):
    """Delete a task"""
    await store.delete_task(list_id, todo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
