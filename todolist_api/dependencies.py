import logging

from fastapi import Depends, Request
from typing_extensions import Annotated

from todolist_api.core.config import Settings
from todolist_api.stores.base import TodoStore
from todolist_api.stores.memory_store import MemoryStore
from todolist_api.stores.sql_store import SQLStore

logger = logging.getLogger(__name__)


def create_store(settings: Settings) -> TodoStore:
    """Build the backend selected by ``STORAGE_BACKEND``."""
    if settings.storage_backend == "sql":
        store = SQLStore.from_settings(settings)
    else:
        store = MemoryStore()
    logger.info("Using %s storage backend", store.name)
    return store


# Dependency for getting the store built by the lifespan
def get_store(request: Request) -> TodoStore:
    return request.app.state.store


StoreDep = Annotated[TodoStore, Depends(get_store)]
