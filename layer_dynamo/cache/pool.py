"""
Layer Dynamo - Connection Pool

Holds one DynamoClient per distinct connection configuration.

Key points:
- Clients are created lazily on first use and kept for the pool's lifetime
- Two different configurations never share a client
- Construction is guarded by a lock so at most one client exists per identity
- No teardown: clients are released at process exit
"""

from __future__ import annotations

import hashlib
import json
import logging
import threading
from collections.abc import Callable

from ..config.schemas import AwsConfig
from .client import DynamoClient

logger = logging.getLogger(__name__)

ClientFactory = Callable[[AwsConfig], DynamoClient]


def config_identity(aws_config: AwsConfig) -> str:
    """SHA-256 of the canonical JSON of the connection parameters."""
    canonical = json.dumps(aws_config.model_dump(), sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


class ConnectionPool:
    """
    Per-configuration DynamoDB client registry.

    Example:
        pool = ConnectionPool()
        client = pool.get_client(AwsConfig(region_name="us-east-1"))
        assert pool.get_client(AwsConfig(region_name="us-east-1")) is client
    """

    def __init__(self, client_factory: ClientFactory | None = None) -> None:
        self._client_factory: ClientFactory = client_factory or DynamoClient
        self._clients: dict[str, DynamoClient] = {}
        self._lock = threading.Lock()

    def get_client(self, aws_config: AwsConfig) -> DynamoClient:
        """Return the client for aws_config, creating it on first use."""
        identity = config_identity(aws_config)

        client = self._clients.get(identity)
        if client is not None:
            return client

        with self._lock:
            client = self._clients.get(identity)
            if client is None:
                client = self._client_factory(aws_config)
                self._clients[identity] = client
                logger.info(
                    "Created DynamoDB client for configuration %s",
                    identity[:12],
                    extra={"config_identity": identity, "region": aws_config.region_name},
                )
            return client

    @property
    def size(self) -> int:
        """Number of clients created so far."""
        return len(self._clients)

    def clear(self) -> None:
        """
        Drop all client references.

        Warning: Only use this in testing contexts.
        """
        with self._lock:
            count = len(self._clients)
            self._clients.clear()
        logger.debug("Cleared connection pool, dropped %d client(s)", count)


_default_pool: ConnectionPool | None = None
_default_pool_lock = threading.Lock()


def get_default_pool() -> ConnectionPool:
    """
    Process-wide pool used by layers that are not given one explicitly.

    Initialized lazily under a lock; safe to call from any thread.
    """
    global _default_pool

    if _default_pool is None:
        with _default_pool_lock:
            if _default_pool is None:
                _default_pool = ConnectionPool()
    return _default_pool
