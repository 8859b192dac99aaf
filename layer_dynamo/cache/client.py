"""
Layer Dynamo - DynamoDB Client

Async facade over the boto3 low-level DynamoDB client.

boto3 is synchronous; each request runs in a worker thread via
asyncio.to_thread so the event loop is never blocked. Retry/backoff is
left to botocore's own configuration.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import boto3

from ..config.schemas import AwsConfig

logger = logging.getLogger(__name__)


class DynamoClient:
    """
    Thin async wrapper exposing GetItem and PutItem.

    Instances are created by ConnectionPool, one per connection configuration,
    and are not mutated after construction.
    """

    def __init__(self, aws_config: AwsConfig, client: Any | None = None) -> None:
        """
        Args:
            aws_config: Connection parameters
            client: Pre-built boto3 DynamoDB client (built from aws_config when omitted)
        """
        self.aws_config = aws_config
        if client is None:
            session = boto3.session.Session(**aws_config.session_kwargs())
            client = session.client("dynamodb", **aws_config.client_kwargs())
        self._client = client

        logger.debug(
            "Created DynamoDB client",
            extra={"region": aws_config.region_name, "endpoint_url": aws_config.endpoint_url},
        )

    async def get_item(self, **params: Any) -> dict[str, Any]:
        """Issue GetItem; botocore errors propagate unchanged."""
        return await asyncio.to_thread(self._client.get_item, **params)

    async def put_item(self, **params: Any) -> dict[str, Any]:
        """Issue PutItem; botocore errors propagate unchanged."""
        return await asyncio.to_thread(self._client.put_item, **params)
