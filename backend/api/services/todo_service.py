"""Todo service - read access to the DynamoDB todos table.

The function role only grants ``dynamodb:Scan`` and ``dynamodb:GetItem``
on the todos table, so this service is read-only.
"""

import logging
from functools import lru_cache
from typing import TYPE_CHECKING, Any

import boto3
from botocore.exceptions import ClientError

from api.schemas.todo import Todo
from common.config import settings
from common.tracing import add_span_attributes, dynamodb_span

if TYPE_CHECKING:
    from mypy_boto3_dynamodb.service_resource import DynamoDBServiceResource, Table

logger = logging.getLogger(__name__)


class TodoNotFoundError(Exception):
    """Raised when a todo id has no item in the table."""

    def __init__(self, todo_id: str):
        super().__init__(f"Todo '{todo_id}' not found")
        self.todo_id = todo_id


class TodoServiceError(Exception):
    """Raised when DynamoDB rejects or fails a request."""


@lru_cache
def _get_dynamodb_resource() -> "DynamoDBServiceResource":
    """Get cached DynamoDB resource."""
    return boto3.resource("dynamodb")


class TodoService:
    """Service for reading todos from DynamoDB."""

    def __init__(self, *, table_name: str | None = None, table: "Table | None" = None):
        """Initialize the todo service.

        Args:
            table_name: Name of the todos table. Falls back to
                ``settings.todo_table`` when not provided.
            table: Optional DynamoDB Table resource (for testing).

        Raises:
            ValueError: If no table name is available.
        """
        self._table_name = table_name or settings.resolved_todo_table
        self._table = table or _get_dynamodb_resource().Table(self._table_name)

    def list_todos(self) -> list[Todo]:
        """List every todo in the table.

        Follows ``LastEvaluatedKey`` until the scan is exhausted.

        Raises:
            TodoServiceError: If DynamoDB returns an error.
        """
        items: list[dict[str, Any]] = []
        scan_kwargs: dict[str, Any] = {}
        pages = 0

        with dynamodb_span("scan", self._table_name) as subsegment:
            try:
                while True:
                    response = self._table.scan(**scan_kwargs)
                    items.extend(response.get("Items", []))
                    pages += 1
                    last_key = response.get("LastEvaluatedKey")
                    if not last_key:
                        break
                    scan_kwargs["ExclusiveStartKey"] = last_key
            except ClientError as e:
                logger.error(
                    "Failed to scan todos",
                    extra={"table": self._table_name, "pages": pages, "error": str(e)},
                )
                raise TodoServiceError("Failed to list todos") from e
            add_span_attributes(subsegment, item_count=len(items), pages=pages)

        logger.info("Listed todos", extra={"count": len(items), "pages": pages})
        return [Todo.model_validate(item) for item in items]

    def get_todo(self, todo_id: str) -> Todo:
        """Get a single todo by id.

        Raises:
            TodoNotFoundError: If no item has this id.
            TodoServiceError: If DynamoDB returns an error.
        """
        with dynamodb_span("get_item", self._table_name, todo_id=todo_id):
            try:
                response = self._table.get_item(Key={"id": todo_id})
            except ClientError as e:
                logger.error(
                    "Failed to get todo",
                    extra={"table": self._table_name, "todo_id": todo_id, "error": str(e)},
                )
                raise TodoServiceError(f"Failed to get todo '{todo_id}'") from e

        item = response.get("Item")
        if item is None:
            raise TodoNotFoundError(todo_id)
        return Todo.model_validate(item)
