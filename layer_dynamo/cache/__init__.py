"""
Layer Dynamo - Cache Module

DynamoDB-backed cache layer.

- codec.py: CacheEntry <-> DynamoDB item translation
- backends/dynamo.py: get/set driver with per-request timeout
- pool.py: one DynamoDB client per connection configuration
- reporting.py: error reporter callback for recovered failures

Usage:
    from layer_dynamo.cache import create_layer

    layer = create_layer()
    await layer.set("key", CacheEntry(key="key", value="value", created_at=now_ms(), ttl_ms=60_000))
    entry = await layer.get("key")
"""

from .backends.dynamo import DynamoLayer
from .client import DynamoClient
from .codec import (
    CacheEntry,
    EncodeOptions,
    StoredItem,
    build_stored_item,
    now_ms,
    parse_stored_item,
)
from .factory import create_layer
from .interface import CacheLayerInterface
from .pool import ConnectionPool, config_identity, get_default_pool
from .reporting import COMPONENT_NAME, ErrorReport, ErrorReporter, log_error_reporter

__all__ = [
    # Factory
    "create_layer",
    # Layer
    "CacheLayerInterface",
    "DynamoLayer",
    # Codec
    "CacheEntry",
    "EncodeOptions",
    "StoredItem",
    "build_stored_item",
    "parse_stored_item",
    "now_ms",
    # Connections
    "DynamoClient",
    "ConnectionPool",
    "config_identity",
    "get_default_pool",
    # Reporting
    "COMPONENT_NAME",
    "ErrorReport",
    "ErrorReporter",
    "log_error_reporter",
]
