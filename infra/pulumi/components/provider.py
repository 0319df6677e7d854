"""AWS provider binding shared by the resources of one unit."""

import pulumi
import pulumi_aws as aws

from components.config import StackSettings
from components.naming import default_tags


def create_provider(
    name: str,
    settings: StackSettings,
    opts: pulumi.ResourceOptions | None = None,
) -> aws.Provider:
    """Create an explicit AWS provider with region, profile and default tags."""
    return aws.Provider(
        f"{name}-aws",
        region=settings.region,
        profile=settings.profile,
        default_tags=aws.ProviderDefaultTagsArgs(
            tags=default_tags(settings.project, settings.stage),
        ),
        opts=opts,
    )
