"""Pydantic schemas for todo endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class Todo(BaseModel):
    """A todo item as stored in the todos table."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1, description="Partition key")
    title: str = Field("", description="What needs doing")
    completed: bool = Field(False, description="Whether the todo is done")


class TodoListResponse(BaseModel):
    """Schema for the todo list response."""

    items: list[Todo]
    total: int
