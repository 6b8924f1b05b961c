"""
Response envelope helpers for API Gateway proxy integrations.
"""

import json
from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class HeaderPolicy(BaseModel):
    """Headers attached to every gateway response."""

    cors_enabled: bool = Field(default=True, description="Attach CORS headers")
    allow_origin: str = Field(default="*")
    allow_headers: str = Field(default="Content-Type")
    allow_methods: str = Field(default="*")

    def build_headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.cors_enabled:
            headers.update({
                "Access-Control-Allow-Headers": self.allow_headers,
                "Access-Control-Allow-Origin": self.allow_origin,
                "Access-Control-Allow-Methods": self.allow_methods,
            })
        return headers


def _json_default(value: Any) -> Any:
    # boto3 deserializes every DynamoDB number as Decimal and string sets as set
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def to_json(body: Any) -> str:
    """Serialize a response body, accepting the types the store hands back."""
    return json.dumps(body, default=_json_default)


def create_api_response(
    status_code: int,
    body: Any,
    policy: Optional[HeaderPolicy] = None,
    headers: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """Create standardized API Gateway response."""

    response_headers = (policy or HeaderPolicy()).build_headers()
    if headers:
        response_headers.update(headers)

    return {
        "statusCode": status_code,
        "headers": response_headers,
        "body": body if isinstance(body, str) else to_json(body),
    }
