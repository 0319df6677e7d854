"""Pytest configuration for infrastructure unit tests.

Pulumi mocks are installed BEFORE any component module creates resources,
so components can be instantiated without an engine or AWS credentials.
"""

import pulumi
import pytest

ACCOUNT_ID = "123456789012"
REGION = "eu-west-3"


class TodosMocks(pulumi.runtime.Mocks):
    """Echo inputs back as outputs and fill in provider-computed attributes."""

    def new_resource(self, args: pulumi.runtime.MockResourceArgs):
        outputs = dict(args.inputs)
        resource_id = f"{args.name}_id"

        if args.typ == "aws:dynamodb/table:Table":
            outputs["arn"] = f"arn:aws:dynamodb:{REGION}:{ACCOUNT_ID}:table/{args.inputs['name']}"
        elif args.typ == "aws:apigatewayv2/api:Api":
            outputs["apiEndpoint"] = f"https://{resource_id}.execute-api.{REGION}.amazonaws.com"
            outputs["executionArn"] = f"arn:aws:execute-api:{REGION}:{ACCOUNT_ID}:{resource_id}"
        elif args.typ == "aws:lambda/function:Function":
            function_arn = f"arn:aws:lambda:{REGION}:{ACCOUNT_ID}:function:{args.inputs['name']}"
            outputs["arn"] = function_arn
            outputs["invokeArn"] = (
                f"arn:aws:apigateway:{REGION}:lambda:path/2015-03-31/functions/"
                f"{function_arn}/invocations"
            )
        elif args.typ == "aws:s3/bucketV2:BucketV2":
            outputs["arn"] = f"arn:aws:s3:::{args.inputs['bucket']}"
            outputs["bucketRegionalDomainName"] = (
                f"{args.inputs['bucket']}.s3.{REGION}.amazonaws.com"
            )
        elif args.typ == "aws:cloudfront/distribution:Distribution":
            outputs["arn"] = f"arn:aws:cloudfront::{ACCOUNT_ID}:distribution/{resource_id}"
            outputs["domainName"] = f"{args.name}.cloudfront.net"

        outputs.setdefault("arn", f"arn:aws:mock:{REGION}:{ACCOUNT_ID}:{args.name}")
        return [resource_id, outputs]

    def call(self, args: pulumi.runtime.MockCallArgs):
        return {}


pulumi.runtime.set_mocks(TodosMocks(), project="todos-stack", stack="dev", preview=False)


@pytest.fixture
def lambda_archive(tmp_path):
    """A stand-in Lambda archive on disk."""
    archive = tmp_path / "lambda.zip"
    archive.write_bytes(b"PK\x05\x06" + b"\x00" * 18)
    return archive


@pytest.fixture
def make_settings():
    """Factory for validated stack settings."""
    from components.config import StackSettings

    def _make(stage: str = "dev", **overrides):
        return StackSettings(stage=stage, **overrides)

    return _make
