"""
Runtime configuration passed to every gateway operation.
"""

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field

from item_gateway.dal import ItemStore, get_dal_handler
from item_gateway.handlers.models.env_vars import GatewayEnvVars
from item_gateway.handlers.utils.responses import HeaderPolicy


class GatewayConfig(BaseModel):
    """Store and response policy an operation runs against."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    store: ItemStore

    scan_limit: Annotated[Optional[int], Field(
        ge=1,
        description='Maximum number of items returned by a list call'
    )] = None

    header_policy: HeaderPolicy = Field(default_factory=HeaderPolicy)


def build_gateway_config(env_vars: GatewayEnvVars, store: Optional[ItemStore] = None) -> GatewayConfig:
    """
    Build the gateway configuration from validated environment variables.

    Args:
        env_vars: Parsed environment variables
        store: Store to use instead of the DynamoDB table named by TABLE_NAME

    Returns:
        Gateway configuration
    """
    return GatewayConfig(
        store=store or get_dal_handler(env_vars.TABLE_NAME, endpoint_url=env_vars.DYNAMODB_ENDPOINT or None),
        scan_limit=env_vars.SCAN_LIMIT,
        header_policy=HeaderPolicy(
            cors_enabled=env_vars.cors_enabled,
            allow_origin=env_vars.CORS_ALLOW_ORIGIN,
            allow_headers=env_vars.CORS_ALLOW_HEADERS,
            allow_methods=env_vars.CORS_ALLOW_METHODS,
        ),
    )
