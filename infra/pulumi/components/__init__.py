"""Components package for Pulumi infrastructure.

Deployable units:
- BackendComponent: DynamoDB + Lambda + API Gateway for the todos API
- FrontendComponent: S3 + CloudFront for static site hosting

compose_stack wires the frontend URL into the backend CORS allow-list.
"""

from components.backend import BackendComponent
from components.config import StackSettings, load_settings
from components.frontend import FrontendComponent
from components.stack import compose_stack

__all__ = [
    "BackendComponent",
    "FrontendComponent",
    "StackSettings",
    "compose_stack",
    "load_settings",
]
