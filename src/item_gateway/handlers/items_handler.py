"""
Items Handler - Lambda functions for the item access gateway.

This module implements the handler layer for the list, upsert and delete
operations. Each ``handle_*`` function maps an API Gateway proxy event and a
GatewayConfig to a proxy response; the ``*_handler`` functions are the Lambda
entry points that own the configuration lifecycle.
"""

import base64
import binascii
import json
from functools import lru_cache, wraps
from typing import Any, Callable, Dict, Optional, Type, TypeVar

from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from item_gateway.handlers.models.env_vars import get_handler_env_vars
from item_gateway.handlers.models.gateway_config import GatewayConfig, build_gateway_config
from item_gateway.handlers.utils.errors import (
    BaseServiceError,
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    InvalidMethodError,
    ValidationError,
    create_error_context,
    format_error_response,
    get_http_status_code,
    log_error_metrics,
)
from item_gateway.handlers.utils.observability import logger, metrics, tracer
from item_gateway.handlers.utils.responses import create_api_response
from item_gateway.logic import item_service
from item_gateway.models.input import DeleteItemRequest, UpsertItemRequest

M = TypeVar('M', bound=BaseModel)
Handler = Callable[[Dict[str, Any], GatewayConfig], Dict[str, Any]]


def handle_service_errors(func: Handler) -> Handler:
    """Decorator to convert service errors into failure responses."""

    @wraps(func)
    def wrapper(event: Dict[str, Any], config: GatewayConfig) -> Dict[str, Any]:
        try:
            return func(event, config)
        except BaseServiceError as e:
            log_error_metrics(e)
            return create_api_response(
                status_code=get_http_status_code(e),
                body=format_error_response(e),
                policy=config.header_policy,
            )
        except Exception as e:
            logger.exception("Unexpected error in handler", extra={
                "error": str(e),
                "function_name": func.__name__,
            })
            metrics.add_metric(name="UnexpectedError", unit=MetricUnit.Count, value=1)

            unexpected_error = BaseServiceError(
                message="An unexpected error occurred",
                error_code="INTERNAL_SERVER_ERROR",
                severity=ErrorSeverity.CRITICAL,
                category=ErrorCategory.INFRASTRUCTURE,
            )
            return create_api_response(
                status_code=500,
                body=format_error_response(unexpected_error),
                policy=config.header_policy,
            )

    return wrapper


def _request_context(event: Dict[str, Any], operation: str, resource_id: Optional[str] = None) -> ErrorContext:
    request_context = event.get("requestContext") or {}
    return create_error_context(
        request_id=request_context.get("requestId", "unknown"),
        operation=operation,
        resource_id=resource_id,
        path=event.get("path"),
    )


def _require_method(event: Dict[str, Any], operation: str, expected: str, context: ErrorContext) -> None:
    """Reject the request before any store access when the verb is wrong."""
    method = event.get("httpMethod")
    if method != expected:
        raise InvalidMethodError(operation=operation, expected=[expected], actual=method, context=context)


def _parse_body(event: Dict[str, Any], context: ErrorContext) -> Dict[str, Any]:
    """Decode the JSON object carried in the proxy event body."""
    raw_body = event.get("body")
    if raw_body and event.get("isBase64Encoded"):
        try:
            raw_body = base64.b64decode(raw_body).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise ValidationError(message="Request body is not valid base64", context=context) from e

    if not raw_body:
        raise ValidationError(message="Request body is required", context=context)

    try:
        body = json.loads(raw_body)
    except json.JSONDecodeError as e:
        raise ValidationError(message=f"Invalid JSON in request body: {e.msg}", context=context) from e

    if not isinstance(body, dict):
        raise ValidationError(message="Request body must be a JSON object", context=context)
    return body


def _validate(model: Type[M], body: Dict[str, Any], context: ErrorContext) -> M:
    try:
        return model.model_validate(body)
    except PydanticValidationError as e:
        field_errors = [
            {"field": ".".join(str(part) for part in error["loc"]) or "body", "message": error["msg"]}
            for error in e.errors()
        ]
        raise ValidationError(
            message="Request validation failed",
            field_errors=field_errors,
            context=context,
        ) from e


@tracer.capture_method
@handle_service_errors
def handle_list_items(event: Dict[str, Any], config: GatewayConfig) -> Dict[str, Any]:
    """
    Return one page of all items.

    Args:
        event: API Gateway proxy event, must use GET
        config: Gateway configuration

    Returns:
        200 response whose body is the JSON list of stored records
    """
    context = _request_context(event, "list_items")
    _require_method(event, "getItems", "GET", context)
    logger.info("Received getItems", extra={"path": event.get("path")})

    items = item_service.list_items(config.store, limit=config.scan_limit)

    response = create_api_response(status_code=200, body=items, policy=config.header_policy)
    logger.info("Response ready", extra={"path": event.get("path"), "status_code": 200, "count": len(items)})
    return response


@tracer.capture_method
@handle_service_errors
def handle_upsert_item(event: Dict[str, Any], config: GatewayConfig) -> Dict[str, Any]:
    """
    Create or fully replace an item.

    Args:
        event: API Gateway proxy event, must use POST with a JSON object body
        config: Gateway configuration

    Returns:
        200 response echoing the normalized item
    """
    context = _request_context(event, "upsert_item")
    _require_method(event, "postItem", "POST", context)
    logger.info("Received postItem", extra={"path": event.get("path")})

    body = _parse_body(event, context)
    request = _validate(UpsertItemRequest, body, context)
    context.resource_id = request.id

    item = item_service.upsert_item(config.store, request)

    response = create_api_response(status_code=200, body=item.to_record(), policy=config.header_policy)
    logger.info("Response ready", extra={"path": event.get("path"), "status_code": 200, "item_id": item.id})
    return response


@tracer.capture_method
@handle_service_errors
def handle_delete_item(event: Dict[str, Any], config: GatewayConfig) -> Dict[str, Any]:
    """
    Delete an item by id. Deleting an unknown id still succeeds.

    Args:
        event: API Gateway proxy event, must use DELETE with a JSON object body
        config: Gateway configuration

    Returns:
        200 response echoing the validated request
    """
    context = _request_context(event, "delete_item")
    _require_method(event, "deleteItem", "DELETE", context)
    logger.info("Received deleteItem", extra={"path": event.get("path")})

    body = _parse_body(event, context)
    request = _validate(DeleteItemRequest, body, context)
    context.resource_id = request.id

    deleted = item_service.delete_item(config.store, request)

    response = create_api_response(status_code=200, body=deleted.model_dump(), policy=config.header_policy)
    logger.info("Response ready", extra={"path": event.get("path"), "status_code": 200, "item_id": request.id})
    return response


OPERATIONS: Dict[str, Handler] = {
    "GET": handle_list_items,
    "POST": handle_upsert_item,
    "DELETE": handle_delete_item,
}


@handle_service_errors
def handle_request(event: Dict[str, Any], config: GatewayConfig) -> Dict[str, Any]:
    """Route a proxy event to the operation registered for its HTTP method."""
    method = event.get("httpMethod")
    operation = OPERATIONS.get(method) if isinstance(method, str) else None
    if operation is None:
        raise InvalidMethodError(
            operation="items",
            expected=list(OPERATIONS),
            actual=method,
            context=_request_context(event, "dispatch"),
        )
    return operation(event, config)


@lru_cache(maxsize=1)
def get_gateway_config() -> GatewayConfig:
    """Build the gateway configuration once per execution environment."""
    return build_gateway_config(get_handler_env_vars())


def _record_outcome(response: Dict[str, Any]) -> Dict[str, Any]:
    metrics.add_metric(name="RequestCount", unit=MetricUnit.Count, value=1)
    if response["statusCode"] == 200:
        metrics.add_metric(name="SuccessCount", unit=MetricUnit.Count, value=1)
    return response


@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@metrics.log_metrics(capture_cold_start_metric=True)
def get_items_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """Lambda entry point for the list operation."""
    return _record_outcome(handle_list_items(event, get_gateway_config()))


@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@metrics.log_metrics(capture_cold_start_metric=True)
def post_item_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """Lambda entry point for the upsert operation."""
    return _record_outcome(handle_upsert_item(event, get_gateway_config()))


@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@metrics.log_metrics(capture_cold_start_metric=True)
def delete_item_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """Lambda entry point for the delete operation."""
    return _record_outcome(handle_delete_item(event, get_gateway_config()))


@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Main Lambda handler function.

    Dispatches GET, POST and DELETE to list, upsert and delete.

    Args:
        event: Lambda event payload
        context: Lambda context object

    Returns:
        API Gateway response
    """
    return _record_outcome(handle_request(event, get_gateway_config()))
