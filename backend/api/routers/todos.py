"""Todos router - read endpoints over the todos table."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.schemas.todo import Todo, TodoListResponse
from api.services.todo_service import TodoNotFoundError, TodoService, TodoServiceError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/todos", tags=["todos"])


def get_todo_service() -> TodoService:
    """Provide a TodoService bound to the configured table."""
    return TodoService()


@router.get(
    "",
    response_model=TodoListResponse,
    summary="List todos",
)
def list_todos(service: TodoService = Depends(get_todo_service)) -> TodoListResponse:
    """List every todo.

    Returns:
        All todos with their total count
    """
    try:
        todos = service.list_todos()
    except TodoServiceError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Todos are temporarily unavailable",
        ) from e

    return TodoListResponse(items=todos, total=len(todos))


@router.get(
    "/{todo_id}",
    response_model=Todo,
    summary="Get a todo",
)
def get_todo(todo_id: str, service: TodoService = Depends(get_todo_service)) -> Todo:
    """Get a single todo by id.

    Raises:
        HTTPException: 404 if the todo does not exist, 503 on storage errors
    """
    try:
        return service.get_todo(todo_id)
    except TodoNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except TodoServiceError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Todos are temporarily unavailable",
        ) from e
