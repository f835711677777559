from sqlmodel import Field, SQLModel


class TodoListBase(SQLModel):
    """Fields shared by list tables and schemas"""

    title: str = Field(default="", max_length=255)


class TodoList(TodoListBase, table=True):
    """Database model"""

    __tablename__ = "lists"
    # never hand out an id twice, even on SQLite
    __table_args__ = {"sqlite_autoincrement": True}

    id: int | None = Field(default=None, primary_key=True)
    title: str = Field(max_length=255, unique=True)


class TodoBase(SQLModel):
    """Fields shared by task tables and schemas"""

    title: str = Field(default="", max_length=255)
    description: str = Field(default="")
    completed: bool = Field(default=False)


class Todo(TodoBase, table=True):
    """Database model"""

    __tablename__ = "tasks"
    __table_args__ = {"sqlite_autoincrement": True}

    id: int | None = Field(default=None, primary_key=True)
    list_id: int = Field(foreign_key="lists.id", ondelete="CASCADE", index=True)


class TodoListCreate(TodoListBase):
    """Schema for creating a list"""

    pass


class TodoListUpdate(TodoListBase):
    """Schema for renaming a list"""

    pass


class TodoCreate(TodoBase):
    """Schema for creating a task - a null description is stored as empty"""

    description: str | None = Field(default="")


class TodoUpdate(TodoBase):
    """Schema for replacing a task - every mutable field is overwritten"""

    description: str | None = Field(default="")


class TodoRead(TodoBase):
    """Schema for task responses"""

    id: int
    list_id: int = Field(alias="listId")

    model_config = {"from_attributes": True, "populate_by_name": True}


class TodoListRead(TodoListBase):
    """Schema for list responses, tasks included"""

    id: int
    todos: list[TodoRead] = Field(default_factory=list)

    model_config = {"from_attributes": True}
