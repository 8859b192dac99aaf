"""
Layer Dynamo - DynamoDB cache layer

Persists cache entries in a DynamoDB table with optional compression,
TTL-based expiry and an invalidation flag.
"""

__version__ = "1.0.0"

from .cache import CacheEntry, DynamoLayer, create_layer
from .config import AwsConfig, LayerConfig

__all__ = ["AwsConfig", "CacheEntry", "DynamoLayer", "LayerConfig", "create_layer", "__version__"]
