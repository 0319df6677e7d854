"""API services package."""

from api.services.todo_service import TodoNotFoundError, TodoService, TodoServiceError

__all__ = [
    "TodoNotFoundError",
    "TodoService",
    "TodoServiceError",
]
