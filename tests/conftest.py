"""
Layer Dynamo - Test Configuration and Shared Fixtures

Provides pytest configuration and shared fixtures for unit and integration tests.
DynamoDB is replaced by an in-memory fake so no AWS account or network is needed.
"""

import asyncio
import copy
import os
from typing import Any

import pytest

from layer_dynamo.cache.codec import CacheEntry
from layer_dynamo.cache.pool import ConnectionPool
from layer_dynamo.cache.reporting import ErrorReport
from layer_dynamo.config import AwsConfig, LayerConfig
from layer_dynamo.config import loader as config_loader

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "DEBUG"

LAYER_ENV_VARS = (
    "LAYER_DYNAMO_TABLE_NAME",
    "LAYER_DYNAMO_COMPRESS",
    "LAYER_DYNAMO_REQUEST_TIMEOUT_MS",
    "LAYER_DYNAMO_DEFAULT_TTL_MS",
    "LAYER_DYNAMO_CONSISTENT_READ",
    "AWS_REGION",
    "AWS_DEFAULT_REGION",
    "AWS_ENDPOINT_URL",
    "AWS_ENDPOINT_URL_DYNAMODB",
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "AWS_SESSION_TOKEN",
    "AWS_PROFILE",
)


class FakeDynamoClient:
    """
    In-memory stand-in for DynamoClient.

    Stores items per table, records every request, and can be slowed down
    (delay, seconds) or made to fail (error) to exercise timeout and error paths.
    """

    def __init__(self) -> None:
        self.tables: dict[str, dict[str, dict[str, Any]]] = {}
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.delay: float = 0.0
        self.error: BaseException | None = None

    async def _simulate(self) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error

    async def get_item(self, **params: Any) -> dict[str, Any]:
        self.calls.append(("get_item", params))
        await self._simulate()
        key = params["Key"]["key"]["S"]
        item = self.tables.get(params["TableName"], {}).get(key)
        if item is None:
            return {"ResponseMetadata": {"HTTPStatusCode": 200}}
        return {"Item": copy.deepcopy(item), "ResponseMetadata": {"HTTPStatusCode": 200}}

    async def put_item(self, **params: Any) -> dict[str, Any]:
        self.calls.append(("put_item", params))
        await self._simulate()
        item = params["Item"]
        self.tables.setdefault(params["TableName"], {})[item["key"]["S"]] = copy.deepcopy(item)
        return {"ResponseMetadata": {"HTTPStatusCode": 200}}

    def put_raw(self, table: str, item: dict[str, Any]) -> None:
        """Write an item directly, bypassing the codec."""
        self.tables.setdefault(table, {})[item["key"]["S"]] = item


@pytest.fixture
def fake_client() -> FakeDynamoClient:
    """Fresh in-memory DynamoDB fake."""
    return FakeDynamoClient()


@pytest.fixture
def pool(fake_client: FakeDynamoClient) -> ConnectionPool:
    """Connection pool that hands out the fake client."""
    return ConnectionPool(client_factory=lambda aws_config: fake_client)  # type: ignore[arg-type, return-value]


@pytest.fixture
def reports() -> list[ErrorReport]:
    """Collects error reports; pass reports.append as the reporter."""
    return []


@pytest.fixture
def aws_config() -> AwsConfig:
    """Offline connection parameters."""
    return AwsConfig(
        region_name="us-east-1",
        endpoint_url="http://localhost:8000",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def layer_config(aws_config: AwsConfig) -> LayerConfig:
    """Minimal valid layer configuration."""
    return LayerConfig(table_name="cache-test", aws_config=aws_config, request_timeout_ms=500)


@pytest.fixture
def sample_values() -> dict[str, Any]:
    """Sample JSON values for cache testing."""
    return {
        "simple_string": "hello",
        "unicode_string": "héllo wörld ✓",
        "simple_int": 42,
        "simple_float": 3.14,
        "simple_bool": True,
        "simple_none": None,
        "complex_dict": {
            "nested": {
                "key": "value",
                "number": 123,
                "list": [1, 2, 3],
            }
        },
        "complex_list": [
            {"id": 1, "name": "Alice"},
            {"id": 2, "name": "Bob"},
        ],
    }


@pytest.fixture
def sample_entry() -> CacheEntry:
    """A typical cache entry."""
    return CacheEntry(
        key="user:42",
        value={"name": "Alice", "roles": ["admin", "dev"], "score": 9.5},
        created_at=1_700_000_000_123,
        invalidated=False,
    )


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Any) -> None:
    """Remove layer/AWS variables, run from an empty directory and reset the config singleton."""
    for name in LAYER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config_loader, "_config_instance", None)
