"""
Hello Lambda functions.

Two minimal API Gateway handlers used to check that a deployment is wired up.
"""

import json
from typing import Any, Dict

from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from item_gateway.handlers.utils.observability import logger, metrics, tracer

HELLO_MESSAGE = "hello world! part 4!"
HELLO_V2_MESSAGE = "lambdaHandler2 hello!"


@tracer.capture_method
def build_hello_response(message: str) -> Dict[str, Any]:
    """Build the 200 response carrying ``message``."""
    return {
        "statusCode": 200,
        "body": json.dumps({"message": message}),
    }


def _respond(message: str) -> Dict[str, Any]:
    metrics.add_metric(name="HelloRequestCount", unit=MetricUnit.Count, value=1)
    try:
        return build_hello_response(message)
    except Exception as e:
        logger.exception("Hello invocation failed", extra={"error": str(e)})
        metrics.add_metric(name="ErrorCount", unit=MetricUnit.Count, value=1)
        return {
            "statusCode": 500,
            "body": json.dumps({"message": "some error happened"}),
        }


@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@metrics.log_metrics(capture_cold_start_metric=True)
def hello_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Hello Lambda function handler.

    Args:
        event: API Gateway proxy event, unused
        context: Lambda context object

    Returns:
        API Gateway response
    """
    return _respond(HELLO_MESSAGE)


@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@metrics.log_metrics(capture_cold_start_metric=True)
def hello_handler_v2(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """Second hello handler, kept as a separate deployable function."""
    return _respond(HELLO_V2_MESSAGE)
