"""
Centralized observability utilities for the item gateway handlers.

This module provides configured instances of AWS Lambda Powertools for logging,
tracing, and metrics collection shared by every handler, logic and DAL module.
"""

import os

from aws_lambda_powertools.logging import Logger
from aws_lambda_powertools.metrics import Metrics
from aws_lambda_powertools.tracing import Tracer

# Explicit arguments win over Powertools' own environment lookup, so the
# environment is read here and the defaults only apply when it is unset
SERVICE_NAME = os.environ.get('POWERTOOLS_SERVICE_NAME', 'item-gateway')
METRICS_NAMESPACE = os.environ.get('POWERTOOLS_METRICS_NAMESPACE', 'ItemGateway')

# JSON output format, level taken from POWERTOOLS_LOG_LEVEL or LOG_LEVEL
logger: Logger = Logger(service=SERVICE_NAME)

# Disabled by setting POWERTOOLS_TRACE_DISABLED to "true"
tracer: Tracer = Tracer(service=SERVICE_NAME)

metrics = Metrics(namespace=METRICS_NAMESPACE, service=SERVICE_NAME)
