"""API schemas package."""

from api.schemas.todo import Todo, TodoListResponse

__all__ = [
    "Todo",
    "TodoListResponse",
]
