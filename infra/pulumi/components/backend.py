"""Backend Infrastructure Component - DynamoDB + Lambda + HTTP API.

This module creates the serverless REST backend:
- DynamoDB table holding the todos
- IAM role for the API function, scoped to that table
- Lambda function running the todos API (Mangum + FastAPI)
- API Gateway HTTP API with a catch-all proxy route and access logs
"""

from pathlib import Path

import pulumi
import pulumi_aws as aws

from components.archive import filebase64sha256
from components.config import StackSettings
from components.naming import log_group_name, stage_name
from components.policies import (
    access_log_format,
    lambda_access_policy,
    lambda_assume_role_policy,
)
from components.provider import create_provider

RUNTIME = "python3.12"
HANDLER = "api.lambda_handler.handler"
CATCH_ALL_ROUTE = "ANY /{proxy+}"


class BackendComponent(pulumi.ComponentResource):
    """Serverless todos API backed by a DynamoDB table."""

    def __init__(
        self,
        name: str,
        settings: StackSettings,
        frontend_url: pulumi.Input[str],
        code_path: str | Path,
        tags: dict | None = None,
        opts: pulumi.ResourceOptions | None = None,
    ):
        """
        Create the backend unit.

        Args:
            name: Logical name prefix
            settings: Validated stack settings (stage, region, naming)
            frontend_url: Single origin allowed by the API's CORS configuration
            code_path: Path to the built Lambda archive
            tags: Extra tags merged over the provider default tags
            opts: Pulumi resource options
        """
        # Fail before declaring anything when the archive has not been built
        source_code_hash = filebase64sha256(code_path)

        super().__init__("todos:backend:Api", name, None, opts)

        self.tags = tags or {}
        project, stage = settings.project, settings.stage

        self.provider = create_provider(name, settings, pulumi.ResourceOptions(parent=self))
        child_opts = pulumi.ResourceOptions(parent=self, provider=self.provider)

        # =====================================================================
        # DynamoDB - Todos Table
        # =====================================================================
        self.table = aws.dynamodb.Table(
            f"{name}-table",
            name=stage_name(project, "table", stage),
            billing_mode="PROVISIONED",
            read_capacity=1,
            write_capacity=1,
            hash_key="id",
            attributes=[
                aws.dynamodb.TableAttributeArgs(name="id", type="S"),
            ],
            tags=self.tags,
            opts=child_opts,
        )

        # =====================================================================
        # IAM - Function Role
        # =====================================================================
        self.role = aws.iam.Role(
            f"{name}-role",
            name=stage_name(project, "api-role", stage),
            assume_role_policy=lambda_assume_role_policy(),
            tags=self.tags,
            opts=child_opts,
        )

        self.role_policy = aws.iam.RolePolicy(
            f"{name}-access",
            name=stage_name(project, "api-access", stage),
            role=self.role.id,
            policy=self.table.arn.apply(lambda_access_policy),
            opts=child_opts,
        )

        # X-Ray tracing policy
        aws.iam.RolePolicyAttachment(
            f"{name}-xray",
            role=self.role.name,
            policy_arn="arn:aws:iam::aws:policy/AWSXRayDaemonWriteAccess",
            opts=child_opts,
        )

        # =====================================================================
        # CloudWatch - API Access Logs
        # =====================================================================
        self.log_group = aws.cloudwatch.LogGroup(
            f"{name}-logs",
            name=log_group_name(project, stage),
            retention_in_days=settings.log_retention_days,
            tags=self.tags,
            opts=child_opts,
        )

        # =====================================================================
        # API Gateway (HTTP API v2)
        # =====================================================================
        self.api = aws.apigatewayv2.Api(
            f"{name}-api",
            name=stage_name(project, "api", stage),
            protocol_type="HTTP",
            cors_configuration=aws.apigatewayv2.ApiCorsConfigurationArgs(
                allow_origins=[frontend_url],
            ),
            tags=self.tags,
            opts=child_opts,
        )

        # Default stage with auto-deploy
        self.stage = aws.apigatewayv2.Stage(
            f"{name}-stage",
            api_id=self.api.id,
            name="$default",
            auto_deploy=True,
            access_log_settings=aws.apigatewayv2.StageAccessLogSettingsArgs(
                destination_arn=self.log_group.arn,
                format=access_log_format(),
            ),
            tags=self.tags,
            opts=child_opts,
        )

        # =====================================================================
        # Lambda - Todos API
        # =====================================================================
        self.function = aws.lambda_.Function(
            f"{name}-func",
            name=stage_name(project, "api-handler", stage),
            role=self.role.arn,
            runtime=RUNTIME,
            handler=HANDLER,
            code=pulumi.FileArchive(str(code_path)),
            source_code_hash=source_code_hash,
            environment=aws.lambda_.FunctionEnvironmentArgs(
                variables={"TODO_TABLE": self.table.name},
            ),
            tracing_config=aws.lambda_.FunctionTracingConfigArgs(
                mode="Active",
            ),
            tags=self.tags,
            opts=pulumi.ResourceOptions.merge(
                child_opts,
                pulumi.ResourceOptions(depends_on=[self.role_policy]),
            ),
        )

        # Permission for API Gateway to invoke Lambda
        self.permission = aws.lambda_.Permission(
            f"{name}-permission",
            action="lambda:InvokeFunction",
            function=self.function.name,
            principal="apigateway.amazonaws.com",
            source_arn=pulumi.Output.concat(self.api.execution_arn, "/*/*/{proxy+}"),
            opts=child_opts,
        )

        # Lambda integration
        self.integration = aws.apigatewayv2.Integration(
            f"{name}-integration",
            api_id=self.api.id,
            integration_type="AWS_PROXY",
            connection_type="INTERNET",
            integration_method="POST",
            integration_uri=self.function.invoke_arn,
            passthrough_behavior="WHEN_NO_MATCH",
            payload_format_version="2.0",
            opts=child_opts,
        )

        # Catch-all route
        self.route = aws.apigatewayv2.Route(
            f"{name}-route-proxy",
            api_id=self.api.id,
            route_key=CATCH_ALL_ROUTE,
            target=pulumi.Output.concat("integrations/", self.integration.id),
            opts=child_opts,
        )

        self.api_endpoint = self.api.api_endpoint

        self.register_outputs(
            {
                "api_endpoint": self.api.api_endpoint,
                "table_name": self.table.name,
                "function_name": self.function.name,
            }
        )
