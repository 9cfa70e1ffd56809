"""AWS Lambda entry point.

API Gateway (HTTP API, payload format 2.0) events are adapted to the ASGI
application by Mangum. Logging is configured once per container, on cold
start; database connections are reused across warm invocations.

Handler: pay_api.lambda_handler.handler
"""

import json
from typing import Any

from loguru import logger
from mangum import Mangum

from pay_api.app import app
from pay_api.logging import setup_logging, setup_sqlalchemy_logging
from pay_api.settings import get_settings

setup_logging(get_settings().log_level, json_logs=get_settings().log_json)
setup_sqlalchemy_logging()

# The FastAPI lifespan would reconfigure logging and dispose the engine on every invocation
_asgi_handler = Mangum(app, lifespan="off")


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Proxy an API Gateway event to the FastAPI application."""
    logger.debug("Request received {}", json.dumps(event, default=str))
    return _asgi_handler(event, context)
