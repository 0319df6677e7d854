"""Todos Stack Infrastructure - Main Entry Point.

This module composes the two deployable units of the todos application
using Pulumi with a serverless architecture.

Architecture:
- Frontend: S3 + CloudFront CDN serving the React build
- Backend: Lambda + API Gateway (HTTP API v2) over a DynamoDB table

The frontend's public URL is the only origin allowed by the backend's CORS
configuration.
"""

from pathlib import Path

import pulumi

from components.archive import resolve_archive
from components.config import load_settings
from components.stack import compose_stack

PROJECT_DIR = Path(__file__).resolve().parent

# Get configuration
settings = load_settings()

pulumi.log.info(
    f"Declaring {settings.project} for stage '{settings.stage}' in {settings.region}"
)

# =============================================================================
# Frontend (S3 + CloudFront) and Backend (DynamoDB + Lambda + API Gateway)
# =============================================================================
frontend, backend, frontend_url = compose_stack(
    settings,
    code_path=resolve_archive(settings.lambda_archive, PROJECT_DIR),
)

# =============================================================================
# Stack Outputs
# =============================================================================
pulumi.export("api_endpoint", backend.api_endpoint)
pulumi.export("table_name", backend.table.name)
pulumi.export("function_name", backend.function.name)
pulumi.export("frontend_url", frontend_url)

if frontend:
    pulumi.export("frontend_bucket_name", frontend.bucket.bucket)
    pulumi.export("frontend_distribution_id", frontend.distribution.id)
