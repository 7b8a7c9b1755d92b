from todo_api.core.todo_store import TodoStore
from todo_api.model import Todo, TodoConfig

__all__ = ["Todo", "TodoConfig", "TodoStore"]
