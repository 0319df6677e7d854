"""Composition of the two deployable units.

The frontend is declared first: its published URL is the only origin the
backend API allows.
"""

from pathlib import Path

import pulumi

from components.backend import BackendComponent
from components.config import StackSettings
from components.frontend import FrontendComponent


def unit_tags(unit: str) -> dict:
    """Tags identifying which unit a resource belongs to."""
    return {"Unit": unit}


def compose_stack(
    settings: StackSettings,
    code_path: str | Path,
) -> tuple[FrontendComponent | None, BackendComponent, pulumi.Output[str]]:
    """Declare the frontend (when enabled) and the backend wired to its URL.

    Returns:
        (frontend or None, backend, frontend URL allowed by the API's CORS)
    """
    stage = settings.stage

    frontend = None
    if settings.deploy_frontend:
        if settings.frontend_url:
            pulumi.log.warn(
                f"Ignoring frontendUrl {settings.frontend_url}: "
                "deployFrontend is true, CORS uses the distribution URL"
            )
        frontend = FrontendComponent(
            f"{stage}-frontend",
            settings=settings,
            tags=unit_tags("frontend"),
        )
        frontend_url = frontend.url
    else:
        pulumi.log.warn(
            f"Frontend unit disabled; allowing CORS from configured frontendUrl {settings.frontend_url}"
        )
        frontend_url = pulumi.Output.from_input(settings.frontend_url)

    backend = BackendComponent(
        f"{stage}-backend",
        settings=settings,
        frontend_url=frontend_url,
        code_path=code_path,
        tags=unit_tags("backend"),
    )
    return frontend, backend, frontend_url
