"""IAM and bucket policy documents.

Plain functions over already-resolved ARNs; components call them from
``Output.apply`` so the documents stay easy to test.
"""

import json

POLICY_VERSION = "2012-10-17"


def lambda_assume_role_policy() -> str:
    """Trust policy letting Lambda assume the function role."""
    return json.dumps(
        {
            "Version": POLICY_VERSION,
            "Statement": [
                {
                    "Effect": "Allow",
                    "Action": ["sts:AssumeRole"],
                    "Principal": {"Service": ["lambda.amazonaws.com"]},
                }
            ],
        }
    )


def lambda_access_policy(table_arn: str) -> str:
    """Inline policy for the API function.

    Table access is scoped to the single table ARN.
    """
    return json.dumps(
        {
            "Version": POLICY_VERSION,
            "Statement": [
                {
                    "Effect": "Allow",
                    "Action": ["dynamodb:Scan", "dynamodb:GetItem"],
                    "Resource": [table_arn],
                },
                {
                    "Effect": "Allow",
                    "Action": [
                        "logs:CreateLogGroup",
                        "logs:CreateLogStream",
                        "logs:PutLogEvents",
                    ],
                    "Resource": ["arn:aws:logs:*:*:*"],
                },
            ],
        }
    )


def cloudfront_read_policy(bucket_arn: str, distribution_arn: str) -> str:
    """Bucket policy allowing one CloudFront distribution to read objects."""
    return json.dumps(
        {
            "Version": POLICY_VERSION,
            "Statement": [
                {
                    "Sid": "AllowCloudFrontServicePrincipal",
                    "Effect": "Allow",
                    "Action": ["s3:GetObject"],
                    "Resource": [f"{bucket_arn}/*"],
                    "Principal": {"Service": ["cloudfront.amazonaws.com"]},
                    "Condition": {"StringEquals": {"aws:SourceArn": distribution_arn}},
                }
            ],
        }
    )


def access_log_format() -> str:
    """JSON access log line for the HTTP API stage."""
    return json.dumps(
        {
            "httpMethod": "$context.httpMethod",
            "ip": "$context.identity.sourceIp",
            "protocol": "$context.protocol",
            "requestId": "$context.requestId",
            "requestTime": "$context.requestTime",
            "responseLength": "$context.responseLength",
            "routeKey": "$context.routeKey",
            "status": "$context.status",
        }
    )
