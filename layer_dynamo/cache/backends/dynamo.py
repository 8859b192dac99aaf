"""
Layer Dynamo - DynamoDB Cache Layer

Asynchronous DynamoDB cache layer with:
- JSON values, optionally gzip-compressed into a binary attribute
- Per-entry TTL written as an epoch-seconds `ttl` attribute
- Per-request timeout (default 3s)
- One shared client per connection configuration (see ConnectionPool)

The table must have DynamoDB TTL enabled on the `ttl` attribute, otherwise
expired entries are never evicted. This layer never issues deletes.

Example:
    layer = DynamoLayer(LayerConfig(table_name="cache", aws_config=AwsConfig(region_name="us-east-1")))
    await layer.set("greeting", CacheEntry(key="greeting", value={"msg": "hi"}, created_at=now_ms()))
    entry = await layer.get("greeting")
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import Any, TypeVar

from ...config.schemas import LayerConfig
from ...errors import CacheTimeoutError, ConfigurationError, CorruptionError, ErrorCode
from ..client import DynamoClient
from ..codec import (
    CacheEntry,
    EncodeOptions,
    build_stored_item,
    make_get_params,
    make_put_params,
    parse_stored_item,
)
from ..interface import CacheLayerInterface
from ..pool import ConnectionPool, get_default_pool
from ..reporting import ErrorReport, ErrorReporter, log_error_reporter

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DynamoLayer(CacheLayerInterface):
    """
    DynamoDB cache layer.

    Notes:
    - A missing table name or connection config is reported at construction;
      every later get/set then raises ConfigurationError.
    - A corrupt item is reported and read as a miss. This favors
      availability over strict correctness.
    - Timeouts and botocore errors propagate to the caller. Nothing is retried.
    """

    def __init__(
        self,
        config: LayerConfig,
        reporter: ErrorReporter | None = None,
        pool: ConnectionPool | None = None,
    ) -> None:
        """
        Initialize the DynamoDB layer.

        Args:
            config: Layer configuration
            reporter: Receives configuration and corruption reports (logs by default)
            pool: Connection pool (process-wide default when omitted)
        """
        self.config = config
        self._reporter: ErrorReporter = reporter or log_error_reporter
        self._pool = pool if pool is not None else get_default_pool()

        self._hits = 0
        self._misses = 0
        self._sets = 0
        self._corruptions = 0
        self._timeouts = 0

        self._config_error: ConfigurationError | None = None
        if not config.table_name:
            self._config_error = ConfigurationError(
                "Must provide table_name",
                details={"option": "table_name", "error_code": ErrorCode.MISSING_TABLE_NAME},
            )
            self._report(self._config_error.message, self._config_error)
        if config.aws_config is None:
            error = ConfigurationError(
                "Must provide aws_config",
                details={"option": "aws_config", "error_code": ErrorCode.MISSING_AWS_CONFIG},
            )
            self._config_error = self._config_error or error
            self._report(error.message, error)

    # ------------ Helpers ------------

    @property
    def timeout_ms(self) -> int:
        return self.config.request_timeout_ms

    def _report(self, message: str, error: BaseException, key: str | None = None) -> None:
        self._reporter(ErrorReport(message=message, error=error, key=key))

    def _connect(self) -> tuple[DynamoClient, str]:
        """Resolve the pooled client and table name, failing on misconfiguration."""
        table_name = self.config.table_name
        aws_config = self.config.aws_config
        if self._config_error is not None or table_name is None or aws_config is None:
            error = self._config_error
            raise ConfigurationError(
                error.message if error else "Layer is not configured",
                details=dict(error.details) if error else {},
            )
        return self._pool.get_client(aws_config), table_name

    async def _with_timeout(self, operation: str, key: str, request: Awaitable[T]) -> T:
        """Await request under the configured deadline."""
        try:
            return await asyncio.wait_for(request, timeout=self.timeout_ms / 1000)
        except asyncio.TimeoutError as e:
            self._timeouts += 1
            logger.warning(
                f"DynamoDB {operation} timed out for key '{key}'",
                extra={"key": key, "operation": operation, "timeout_ms": self.timeout_ms},
            )
            raise CacheTimeoutError(operation, key, self.timeout_ms) from e

    # ------------ Core Interface ------------

    async def get(self, key: str) -> CacheEntry | None:
        """Fetch and decode the entry stored under key."""
        key = str(key)
        client, table_name = self._connect()
        params = make_get_params(table_name, key, self.config.consistent_read)

        response = await self._with_timeout("GetItem", key, client.get_item(**params))

        item = (response or {}).get("Item")
        if not item:
            self._misses += 1
            return None

        try:
            entry = parse_stored_item(item, key)
        except CorruptionError as e:
            self._corruptions += 1
            self._misses += 1
            self._report(e.message, e, key)
            return None

        self._hits += 1
        return entry

    async def set(self, key: str, entry: CacheEntry) -> None:
        """Encode entry and write it under key, overwriting any existing item."""
        key = str(key)
        client, table_name = self._connect()

        ttl_ms = entry.ttl_ms if entry.ttl_ms is not None else self.config.default_ttl_ms
        item = build_stored_item(key, entry, EncodeOptions(compress=self.config.compress, ttl_ms=ttl_ms))
        params = make_put_params(table_name, item)

        await self._with_timeout("PutItem", key, client.put_item(**params))
        self._sets += 1

    def get_stats(self) -> dict[str, Any]:
        """Return layer counters."""
        total_requests = self._hits + self._misses
        return {
            "backend": "dynamodb",
            "table_name": self.config.table_name,
            "compress": self.config.compress,
            "request_timeout_ms": self.timeout_ms,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round((self._hits / total_requests) * 100, 2) if total_requests else 0.0,
            "sets": self._sets,
            "corruptions": self._corruptions,
            "timeouts": self._timeouts,
        }
