"""
Environment variable models for type-safe configuration.

The item gateway reads everything it needs about its table and response
headers from the environment; nothing is hardcoded in the handler modules.
POWERTOOLS_* and LOG_LEVEL are consumed by the observability module and
Powertools itself, not by this model.
"""

from typing import Annotated, Optional

from aws_lambda_env_modeler import get_environment_variables
from pydantic import BaseModel, Field


class GatewayEnvVars(BaseModel):
    """Environment variables for the item gateway handlers."""

    # DynamoDB table holding the items, keyed by "id"
    TABLE_NAME: Annotated[str, Field(
        description='DynamoDB table name for item storage',
        min_length=1
    )]

    # Endpoint override, used for local testing against DynamoDB Local
    DYNAMODB_ENDPOINT: Annotated[Optional[str], Field(
        description='Custom DynamoDB endpoint URL'
    )] = None

    SCAN_LIMIT: Annotated[Optional[int], Field(
        description='Maximum number of items returned by a single list call',
        ge=1,
        le=1000
    )] = None

    # CORS header policy
    CORS_ENABLED: Annotated[str, Field(
        description='Attach CORS headers to responses (true/false)',
        pattern=r'^(true|false)$'
    )] = 'true'

    CORS_ALLOW_ORIGIN: Annotated[str, Field(
        description='CORS allowed origins for API responses'
    )] = '*'

    CORS_ALLOW_HEADERS: Annotated[str, Field(
        description='CORS allowed headers for API requests'
    )] = 'Content-Type'

    CORS_ALLOW_METHODS: Annotated[str, Field(
        description='CORS allowed HTTP methods'
    )] = '*'

    @property
    def cors_enabled(self) -> bool:
        """Check if CORS headers should be attached."""
        return self.CORS_ENABLED.lower() == 'true'


def get_handler_env_vars() -> GatewayEnvVars:
    """
    Get typed environment variables for the gateway handlers.

    Returns:
        Validated environment variables model instance
    """
    return get_environment_variables(model=GatewayEnvVars)
