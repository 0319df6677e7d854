"""
AWS X-Ray subsegments around todo table reads.

Outside Lambda there is no active segment and every helper is a no-op.
"""

import os
from contextlib import contextmanager
from typing import Any

from aws_xray_sdk.core import patch_all, xray_recorder

# boto3 calls show up as their own subsegments once patched
if os.environ.get("AWS_LAMBDA_FUNCTION_NAME"):
    patch_all()


@contextmanager
def dynamodb_span(operation: str, table: str, **attributes: Any):
    """Wrap a DynamoDB call in a ``dynamodb.<operation>`` subsegment.

    Yields None when tracing is inactive (tests, local runs).
    """
    with xray_recorder.in_subsegment(f"dynamodb.{operation}") as subsegment:
        if subsegment is not None:
            subsegment.put_annotation("table", table)
            subsegment.put_annotation("operation", operation)
            add_span_attributes(subsegment, **attributes)
        yield subsegment


def add_span_attributes(subsegment, **attributes: Any) -> None:
    """Attach metadata such as page or item counts to a subsegment."""
    if subsegment is None:
        return
    for key, value in attributes.items():
        subsegment.put_metadata(key, value)
