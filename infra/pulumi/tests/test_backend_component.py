"""Unit tests for the backend unit, run against Pulumi mocks."""

import json

import pulumi
import pytest

from components.archive import filebase64sha256
from components.backend import CATCH_ALL_ROUTE, HANDLER, RUNTIME, BackendComponent

FRONTEND_URL = "https://d111111abcdef8.cloudfront.net"


@pytest.fixture
def backend(request, make_settings, lambda_archive):
    """Backend unit with a unique logical name per test."""
    return BackendComponent(
        f"{request.node.name}-backend",
        settings=make_settings("dev"),
        frontend_url=FRONTEND_URL,
        code_path=lambda_archive,
    )


@pulumi.runtime.test
def test_table_key_schema(backend):
    """Test the provisioned table keyed on a string id."""

    def check(args):
        name, billing_mode, read, write, hash_key, attributes = args
        assert name == "todos-stack-table-dev"
        assert billing_mode == "PROVISIONED"
        assert (read, write) == (1, 1)
        assert hash_key == "id"
        assert [(a["name"], a["type"]) for a in attributes] == [("id", "S")]

    return pulumi.Output.all(
        backend.table.name,
        backend.table.billing_mode,
        backend.table.read_capacity,
        backend.table.write_capacity,
        backend.table.hash_key,
        backend.table.attributes,
    ).apply(check)


@pulumi.runtime.test
def test_role_policy_is_scoped_to_table(backend):
    """Test that the inline policy lists exactly the table ARN."""

    def check(args):
        table_arn, policy = args
        statements = json.loads(policy)["Statement"]
        table_statements = [s for s in statements if s["Action"][0].startswith("dynamodb:")]
        assert len(table_statements) == 1
        assert table_statements[0]["Resource"] == [table_arn]

    return pulumi.Output.all(backend.table.arn, backend.role_policy.policy).apply(check)


@pulumi.runtime.test
def test_role_policy_is_attached_to_function_role(backend):
    """Test that the inline policy and the function share the role."""

    def check(args):
        role_id, policy_role, role_arn, function_role = args
        assert policy_role == role_id
        assert function_role == role_arn

    return pulumi.Output.all(
        backend.role.id,
        backend.role_policy.role,
        backend.role.arn,
        backend.function.role,
    ).apply(check)


@pulumi.runtime.test
def test_api_allows_only_frontend_origin(backend):
    """Test the single-origin CORS allow-list."""

    def check(args):
        protocol, cors = args
        assert protocol == "HTTP"
        assert cors["allow_origins"] == [FRONTEND_URL]

    return pulumi.Output.all(
        backend.api.protocol_type, backend.api.cors_configuration
    ).apply(check)


@pulumi.runtime.test
def test_default_stage_ships_access_logs(backend):
    """Test the auto-deployed stage logging to the API log group."""

    def check(args):
        name, auto_deploy, log_settings, log_group_arn, log_group_name = args
        assert name == "$default"
        assert auto_deploy is True
        assert log_settings["destination_arn"] == log_group_arn
        assert json.loads(log_settings["format"])["status"] == "$context.status"
        assert log_group_name == "/aws/apigateway/todos-stack-api-dev"

    return pulumi.Output.all(
        backend.stage.name,
        backend.stage.auto_deploy,
        backend.stage.access_log_settings,
        backend.log_group.arn,
        backend.log_group.name,
    ).apply(check)


@pulumi.runtime.test
def test_function_configuration(backend, lambda_archive):
    """Test runtime, handler, code hash, environment and tracing."""

    def check(args):
        runtime, handler, code_hash, environment, tracing, table_name = args
        assert runtime == RUNTIME
        assert handler == HANDLER
        assert code_hash == filebase64sha256(lambda_archive)
        assert environment["variables"] == {"TODO_TABLE": table_name}
        assert tracing["mode"] == "Active"

    return pulumi.Output.all(
        backend.function.runtime,
        backend.function.handler,
        backend.function.source_code_hash,
        backend.function.environment,
        backend.function.tracing_config,
        backend.table.name,
    ).apply(check)


@pulumi.runtime.test
def test_permission_lets_gateway_invoke_function(backend):
    """Test the invoke grant for API Gateway on the proxy path."""

    def check(args):
        action, principal, function, source_arn, function_name, execution_arn = args
        assert action == "lambda:InvokeFunction"
        assert principal == "apigateway.amazonaws.com"
        assert function == function_name
        assert source_arn == f"{execution_arn}/*/*/{{proxy+}}"

    return pulumi.Output.all(
        backend.permission.action,
        backend.permission.principal,
        backend.permission.function,
        backend.permission.source_arn,
        backend.function.name,
        backend.api.execution_arn,
    ).apply(check)


@pulumi.runtime.test
def test_integration_proxies_to_function(backend):
    """Test the Lambda proxy integration settings."""

    def check(args):
        integration_type, connection, method, uri, passthrough, payload, invoke_arn = args
        assert integration_type == "AWS_PROXY"
        assert connection == "INTERNET"
        assert method == "POST"
        assert uri == invoke_arn
        assert passthrough == "WHEN_NO_MATCH"
        assert payload == "2.0"

    return pulumi.Output.all(
        backend.integration.integration_type,
        backend.integration.connection_type,
        backend.integration.integration_method,
        backend.integration.integration_uri,
        backend.integration.passthrough_behavior,
        backend.integration.payload_format_version,
        backend.function.invoke_arn,
    ).apply(check)


@pulumi.runtime.test
def test_catch_all_route_targets_integration(backend):
    """Test that the proxy route resolves to the declared integration."""

    def check(args):
        route_key, target, route_api, integration_id, api_id = args
        assert route_key == CATCH_ALL_ROUTE
        assert target == f"integrations/{integration_id}"
        assert route_api == api_id

    return pulumi.Output.all(
        backend.route.route_key,
        backend.route.target,
        backend.route.api_id,
        backend.integration.id,
        backend.api.id,
    ).apply(check)


@pulumi.runtime.test
def test_api_endpoint_output(backend):
    """Test that the unit publishes the gateway endpoint."""

    def check(args):
        endpoint, api_endpoint = args
        assert endpoint == api_endpoint
        assert endpoint.startswith("https://")

    return pulumi.Output.all(backend.api_endpoint, backend.api.api_endpoint).apply(check)


def test_missing_archive_fails_before_declaring_function(make_settings, tmp_path):
    """Test that an unbuilt archive is reported instead of deployed."""
    with pytest.raises(FileNotFoundError):
        BackendComponent(
            "missing-archive-backend",
            settings=make_settings("dev"),
            frontend_url=FRONTEND_URL,
            code_path=tmp_path / "lambda.zip",
        )
