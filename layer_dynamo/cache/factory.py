"""
Layer Dynamo - Layer Factory

Canonical way to build a DynamoLayer from configuration.

Examples:
    from layer_dynamo.cache.factory import create_layer

    # Uses env-configured layer settings (LAYER_DYNAMO_TABLE_NAME, AWS_REGION, ...)
    layer = create_layer()

    # Or explicitly supply a LayerConfig (e.g., for tests)
    from layer_dynamo.config import AwsConfig, LayerConfig
    cfg = LayerConfig(table_name="cache", aws_config=AwsConfig(region_name="us-east-1"))
    layer = create_layer(cfg, reporter=my_reporter)
"""

from __future__ import annotations

import logging

from ..config import LayerConfig, get_config
from .backends.dynamo import DynamoLayer
from .pool import ConnectionPool
from .reporting import ErrorReporter

logger = logging.getLogger(__name__)


def create_layer(
    config: LayerConfig | None = None,
    reporter: ErrorReporter | None = None,
    pool: ConnectionPool | None = None,
) -> DynamoLayer:
    """
    Create a DynamoDB cache layer.

    Args:
        config: Layer configuration (uses global config if not provided)
        reporter: Error reporter (logs by default)
        pool: Connection pool (process-wide default if not provided)

    Returns:
        Configured DynamoLayer

    Raises:
        ConfigurationError: If the environment configuration fails validation
    """
    if config is None:
        config = get_config().layer

    logger.info(
        "Creating DynamoDB layer for table: %s",
        config.table_name,
        extra={"table_name": config.table_name, "compress": config.compress},
    )

    return DynamoLayer(config, reporter=reporter, pool=pool)
