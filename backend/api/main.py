"""FastAPI application entry point."""

from fastapi import FastAPI

from api.routers import health, todos
from common.config import settings

app = FastAPI(
    title="Todos API",
    description="Read API over the todos table",
    version="0.1.0",
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# No CORS middleware: the HTTP API answers preflight requests and only
# allows the frontend origin.

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(todos.router, tags=["Todos"])
