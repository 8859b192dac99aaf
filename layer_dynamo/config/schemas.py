"""
Layer Dynamo - Configuration Schemas

Defines typed configuration models using Pydantic for validation and type safety.

Required options (table_name, aws_config) are Optional at the schema level:
a missing value is reported by the layer through its error reporter instead
of aborting construction.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_REQUEST_TIMEOUT_MS = 3000


class Environment(str, Enum):
    """Runtime environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TEST = "test"


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class AwsConfig(BaseModel):
    """Connection parameters for the DynamoDB client."""

    region_name: str | None = Field(default=None, description="AWS region, e.g. us-east-1")
    endpoint_url: str | None = Field(default=None, description="Custom endpoint (DynamoDB Local, LocalStack)")
    aws_access_key_id: str | None = Field(default=None, description="Access key id")
    aws_secret_access_key: str | None = Field(default=None, description="Secret access key")
    aws_session_token: str | None = Field(default=None, description="Session token for temporary credentials")
    profile_name: str | None = Field(default=None, description="Named profile from ~/.aws/credentials")

    model_config = ConfigDict(frozen=True)

    def session_kwargs(self) -> dict[str, Any]:
        """Arguments accepted by boto3.session.Session."""
        kwargs = {
            "aws_access_key_id": self.aws_access_key_id,
            "aws_secret_access_key": self.aws_secret_access_key,
            "aws_session_token": self.aws_session_token,
            "region_name": self.region_name,
            "profile_name": self.profile_name,
        }
        return {k: v for k, v in kwargs.items() if v is not None}

    def client_kwargs(self) -> dict[str, Any]:
        """Arguments accepted by Session.client("dynamodb")."""
        return {"endpoint_url": self.endpoint_url} if self.endpoint_url else {}


class LayerConfig(BaseModel):
    """DynamoDB cache layer configuration."""

    table_name: str | None = Field(default=None, description="Name of the DynamoDB table")
    aws_config: AwsConfig | None = Field(default=None, description="DynamoDB connection parameters")
    compress: bool = Field(default=False, description="Store values gzip-compressed as binary")
    request_timeout_ms: int = Field(
        default=DEFAULT_REQUEST_TIMEOUT_MS,
        ge=1,
        description="Timeout for each DynamoDB request in milliseconds",
    )
    default_ttl_ms: int | None = Field(
        default=None,
        ge=1,
        description="TTL applied when an entry carries none (None = no ttl attribute)",
    )
    consistent_read: bool = Field(default=False, description="Use strongly consistent GetItem reads")

    @field_validator("table_name")
    @classmethod
    def validate_table_name(cls, v: str | None) -> str | None:
        """Treat blank table names as missing."""
        if v is None:
            return None
        v = v.strip()
        return v or None

    model_config = ConfigDict(validate_assignment=True)


class LayerDynamoConfig(BaseModel):
    """Root configuration for Layer Dynamo."""

    environment: Environment = Field(default=Environment.DEVELOPMENT, description="Runtime environment")
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")

    layer: LayerConfig = Field(default_factory=LayerConfig)

    model_config = ConfigDict(use_enum_values=True, validate_assignment=True)
