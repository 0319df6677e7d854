"""AWS Lambda entry point for the todos API.

The backend unit points the function handler at ``api.lambda_handler.handler``.
Mangum translates HTTP API (payload format 2.0) events into ASGI calls.
"""

import logging

from mangum import Mangum

from api.main import app
from common.config import settings

# The Lambda runtime leaves the root logger at WARNING; raise it so service
# logs (scan page counts, storage errors) reach CloudWatch.
logging.getLogger().setLevel(logging.DEBUG if settings.debug else logging.INFO)

handler = Mangum(app, lifespan="off")
