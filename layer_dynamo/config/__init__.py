"""
Layer Dynamo - Configuration Module

Provides typed configuration loading and validation.
"""

from .loader import get_config, load_config, reload_config
from .schemas import (
    DEFAULT_REQUEST_TIMEOUT_MS,
    AwsConfig,
    Environment,
    LayerConfig,
    LayerDynamoConfig,
    LogLevel,
)

__all__ = [
    # Loader functions
    "load_config",
    "get_config",
    "reload_config",
    # Main config
    "LayerDynamoConfig",
    # Enums
    "Environment",
    "LogLevel",
    # Config sections
    "LayerConfig",
    "AwsConfig",
    "DEFAULT_REQUEST_TIMEOUT_MS",
]
