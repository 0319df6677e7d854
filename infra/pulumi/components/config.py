"""Stack configuration loaded from Pulumi stack config.

Values come from ``Pulumi.<stack>.yaml`` under the project namespace, e.g.::

    config:
      todos-stack:stage: dev
      todos-stack:region: eu-west-3
      todos-stack:profile: my-profile
"""

import re

import pulumi
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from components.naming import fixed_segments

_STAGE = re.compile(r"^[a-z0-9]+$")
_PROJECT = re.compile(r"^[a-z][a-z0-9-]*[a-z0-9]$")


class StackSettings(BaseModel):
    """Validated settings shared by the backend and frontend units."""

    # Aliases are the stack config keys, so validation errors name them
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    stage: str = Field(..., max_length=20)
    project: str = "todos-stack"
    region: str = "eu-west-3"
    profile: str | None = None
    log_retention_days: int = Field(14, gt=0, alias="logRetentionDays")
    lambda_archive: str = Field("../../backend/dist/lambda.zip", alias="lambdaArchive")
    deploy_frontend: bool = Field(True, alias="deployFrontend")
    frontend_url: str | None = Field(None, alias="frontendUrl")

    @model_validator(mode="after")
    def _check_names(self) -> "StackSettings":
        if not _STAGE.match(self.stage):
            raise ValueError("stage must be lowercase letters and digits only")
        if not _PROJECT.match(self.project):
            raise ValueError("project must be lowercase letters, digits and hyphens")
        # stage must appear exactly once in every physical name
        clashes = sorted(seg for seg in fixed_segments(self.project) if self.stage in seg)
        if clashes:
            raise ValueError(f"stage '{self.stage}' also appears in name parts {clashes}")
        if self.frontend_url is not None and not self.frontend_url.startswith("https://"):
            raise ValueError("frontendUrl must be an https:// origin")
        if not self.deploy_frontend and not self.frontend_url:
            raise ValueError("frontendUrl is required when deployFrontend is false")
        return self


def load_settings(
    config: pulumi.Config | None = None,
    stack: str | None = None,
) -> StackSettings:
    """Read and validate stack settings.

    Args:
        config: Pulumi config for the project namespace (default: current project)
        stack: Stage fallback when ``stage`` is not configured (default: stack name)

    Raises:
        pulumi.RunError: If a value is missing or invalid.
    """
    config = config or pulumi.Config()
    values = {
        "stage": config.get("stage") or stack or pulumi.get_stack(),
        "project": config.get("project"),
        "region": config.get("region"),
        "profile": config.get("profile"),
        "logRetentionDays": config.get_int("logRetentionDays"),
        "lambdaArchive": config.get("lambdaArchive"),
        "deployFrontend": config.get_bool("deployFrontend"),
        "frontendUrl": config.get("frontendUrl"),
    }
    try:
        return StackSettings(**{k: v for k, v in values.items() if v is not None})
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'config'}: {err['msg']}"
            for err in e.errors()
        )
        raise pulumi.RunError(f"Invalid stack configuration: {errors}") from e
