"""
Layer Dynamo - Configuration Loader

Loads and validates configuration from environment variables and .env files.
Provides a singleton configuration instance for the process.
"""

import logging
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import ValidationError

from ..errors import ConfigurationError, ErrorCode
from .schemas import DEFAULT_REQUEST_TIMEOUT_MS, LayerDynamoConfig

logger = logging.getLogger(__name__)

_config_instance: LayerDynamoConfig | None = None

_AWS_ENV_VARS = {
    "region_name": ("AWS_REGION", "AWS_DEFAULT_REGION"),
    "endpoint_url": ("AWS_ENDPOINT_URL_DYNAMODB", "AWS_ENDPOINT_URL"),
    "aws_access_key_id": ("AWS_ACCESS_KEY_ID",),
    "aws_secret_access_key": ("AWS_SECRET_ACCESS_KEY",),
    "aws_session_token": ("AWS_SESSION_TOKEN",),
    "profile_name": ("AWS_PROFILE",),
}


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


def _aws_config_from_env() -> dict[str, Any] | None:
    """Collect connection parameters; None when no variable is set at all."""
    values: dict[str, Any] = {}
    for field, names in _AWS_ENV_VARS.items():
        for name in names:
            value = os.getenv(name)
            if value:
                values[field] = value
                break
    return values or None


def load_config(
    env_file: str | None = None,
    reload: bool = False,
) -> LayerDynamoConfig:
    """
    Load configuration from environment variables and .env file.

    Args:
        env_file: Path to .env file (default: .env in current directory)
        reload: Force reload even if config already loaded

    Returns:
        Validated LayerDynamoConfig instance

    Raises:
        ConfigurationError: If configuration is invalid
    """
    global _config_instance

    if _config_instance is not None and not reload:
        return _config_instance

    if env_file:
        env_path = Path(env_file)
    else:
        env_path = Path.cwd() / ".env"

    if env_path.exists():
        logger.info(f"Loading environment from {env_path}")
        try:
            load_dotenv(env_path, override=True)
        except Exception as e:
            logger.error(
                f"Failed to load .env file from {env_path}: {e}",
                extra={"path": str(env_path), "error": str(e)},
                exc_info=True,
            )
            raise ConfigurationError(
                f"Failed to load environment file: {e}",
                details={"path": str(env_path), "error": str(e)},
            ) from e
    else:
        logger.debug("No .env file found, using environment variables only")

    config_dict = {
        "environment": os.getenv("ENVIRONMENT", "development"),
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
        "layer": {
            "table_name": os.getenv("LAYER_DYNAMO_TABLE_NAME"),
            "aws_config": _aws_config_from_env(),
            "compress": _env_flag("LAYER_DYNAMO_COMPRESS"),
            # Numeric strings are coerced by the model so bad values fail validation
            "request_timeout_ms": os.getenv("LAYER_DYNAMO_REQUEST_TIMEOUT_MS", str(DEFAULT_REQUEST_TIMEOUT_MS)),
            "default_ttl_ms": os.getenv("LAYER_DYNAMO_DEFAULT_TTL_MS") or None,
            "consistent_read": _env_flag("LAYER_DYNAMO_CONSISTENT_READ"),
        },
    }

    try:
        _config_instance = LayerDynamoConfig(**config_dict)  # type: ignore[arg-type]
        logger.info(
            f"Configuration loaded successfully (environment: {_config_instance.environment})",
            extra={
                "environment": _config_instance.environment,
                "table_name": _config_instance.layer.table_name,
            },
        )
        return _config_instance
    except ValidationError as e:
        logger.error(
            f"Configuration validation failed: {e}",
            extra={"validation_errors": e.errors(), "config_dict_keys": list(config_dict.keys())},
            exc_info=True,
        )
        raise ConfigurationError(
            "Configuration validation failed. Check your environment variables and configuration.",
            details={"validation_errors": e.errors(), "error_code": ErrorCode.INVALID_CONFIGURATION},
        ) from e


def get_config() -> LayerDynamoConfig:
    """
    Get the current configuration instance, loading it on first access.

    Returns:
        Current LayerDynamoConfig instance
    """
    if _config_instance is None:
        return load_config()

    return _config_instance


def reload_config(env_file: str | None = None) -> LayerDynamoConfig:
    """
    Force reload configuration.

    Args:
        env_file: Optional path to .env file

    Returns:
        Reloaded LayerDynamoConfig instance
    """
    return load_config(env_file=env_file, reload=True)
