"""Stage-scoped physical names and default tags."""

import re

# Component parts of every physical name, per unit
BACKEND_COMPONENTS = ("table", "api", "api-role", "api-access", "api-handler")
FRONTEND_COMPONENTS = ("web", "web-oac")

LOG_GROUP_PREFIX = "/aws/apigateway/"


def stage_name(project: str, component: str, stage: str) -> str:
    """Build a physical resource name, e.g. ``todos-stack-table-dev``."""
    return f"{project}-{component}-{stage}"


def log_group_name(project: str, stage: str) -> str:
    """Access log group of the HTTP API."""
    return f"{LOG_GROUP_PREFIX}{stage_name(project, 'api', stage)}"


def fixed_segments(project: str) -> set[str]:
    """Every non-stage word that can appear in a physical name."""
    parts = [project, LOG_GROUP_PREFIX, *BACKEND_COMPONENTS, *FRONTEND_COMPONENTS]
    return {seg for part in parts for seg in re.split(r"[-/]", part) if seg}


def default_tags(project: str, stage: str) -> dict[str, str]:
    """Tags applied by every provider binding."""
    return {
        "Project": project,
        "Stage": stage,
        "ManagedBy": "pulumi",
    }
