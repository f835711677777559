from fastapi import APIRouter, Response, status

from todolist_api.dependencies import StoreDep
from todolist_api.models import TodoListCreate, TodoListRead, TodoListUpdate

router = APIRouter(prefix="/todolists", tags=["todolists"])


@router.post("", response_model=TodoListRead, status_code=status.HTTP_201_CREATED)
async def create_todo_list(list_data: TodoListCreate, store: StoreDep):
    """Create a new list"""
    return await store.create_list(list_data.title)


@router.get("", response_model=list[TodoListRead])
async def get_todo_lists(store: StoreDep):
    return await store.list_all()


@router.get("/{list_id}", response_model=TodoListRead)
async def get_todo_list(list_id: int, store: StoreDep):
    """Get a list together with its tasks"""
    return await store.get_list(list_id)


@router.put("/{list_id}", response_model=TodoListRead)
async def update_todo_list(list_id: int, list_data: TodoListUpdate, store: StoreDep):
    return await store.update_list(list_id, list_data.title)


@router.delete("/{list_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_todo_list(list_id: int, store: StoreDep):
    """Delete a list and every task in it"""
    await store.delete_list(list_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
