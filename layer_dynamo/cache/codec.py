"""
Layer Dynamo - Item Codec

Pure, stateless translation between CacheEntry and the DynamoDB item schema.

Once populated, the table looks like this:

    Field  Type    Description
    c      BOOL    Compression flag
    i      BOOL    Invalidation flag
    key    S       Partition key
    t      N       Time created (ms since epoch)
    ttl    N       Expiry (seconds since epoch), only when a ttl was given
    v      S / B   JSON value, or gzip-compressed JSON when c is true

DynamoDB requires numbers to be sent as strings, so t and ttl are decimal
strings on the wire.
"""

from __future__ import annotations

import gzip
import json
import time
import zlib
from dataclasses import dataclass
from typing import Any

from ..errors import CorruptionError, EncodeError

StoredItem = dict[str, dict[str, Any]]


@dataclass
class CacheEntry:
    """A cache entry as exchanged with the host cache framework."""

    key: str
    value: Any
    created_at: int
    invalidated: bool = False
    ttl_ms: int | None = None


@dataclass(frozen=True)
class EncodeOptions:
    """Per-write encoding options."""

    compress: bool = False
    ttl_ms: int | None = None


def now_ms() -> int:
    """Current time in milliseconds since epoch."""
    return int(time.time() * 1000)


# ------------ Payload helpers ------------


def to_json(value: Any, key: str = "") -> str:
    """Serialize value to canonical JSON (sorted keys, no whitespace)."""
    try:
        return json.dumps(
            value,
            ensure_ascii=False,
            separators=(",", ":"),
            sort_keys=True,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        raise EncodeError(key, type(value).__name__, {"error": str(e)}) from e


def compress_payload(payload: str) -> bytes:
    """gzip the payload with a fixed header timestamp so output is deterministic."""
    return gzip.compress(payload.encode("utf-8"), mtime=0)


def decompress_payload(data: bytes | bytearray | memoryview) -> str:
    return gzip.decompress(bytes(data)).decode("utf-8")


def compute_ttl(created_at: int, ttl_ms: int) -> int:
    """Expiry in epoch seconds: floor((ttl_ms + created_at) / 1000)."""
    return (int(ttl_ms) + int(created_at)) // 1000


# ------------ Encode ------------


def make_value(value: Any, compress: bool, key: str = "") -> dict[str, Any]:
    """
    Build the typed v attribute.

    Compressed values use the binary type (B), otherwise the JSON string
    is stored as-is with the string type (S).
    """
    payload = to_json(value, key)
    if compress:
        return {"B": compress_payload(payload)}
    return {"S": payload}


def build_stored_item(key: Any, entry: CacheEntry, options: EncodeOptions) -> StoredItem:
    """
    Encode a cache entry into a DynamoDB item.

    Args:
        key: Partition key (coerced to str)
        entry: Entry to encode
        options: Compression and ttl settings for this write

    Returns:
        Item ready for PutItem

    Raises:
        EncodeError: If entry.value is not JSON-serializable
    """
    key = str(key)
    item: StoredItem = {
        "key": {"S": key},
        "v": make_value(entry.value, options.compress, key),
        "t": {"N": str(int(entry.created_at))},
        "i": {"BOOL": bool(entry.invalidated)},
        "c": {"BOOL": bool(options.compress)},
    }

    if options.ttl_ms:
        item["ttl"] = {"N": str(compute_ttl(entry.created_at, options.ttl_ms))}

    return item


def make_get_params(table_name: str, key: Any, consistent_read: bool = False) -> dict[str, Any]:
    """Build GetItem request parameters."""
    params: dict[str, Any] = {
        "TableName": table_name,
        "Key": {"key": {"S": str(key)}},
    }
    if consistent_read:
        params["ConsistentRead"] = True
    return params


def make_put_params(table_name: str, item: StoredItem) -> dict[str, Any]:
    """Build PutItem request parameters."""
    return {"TableName": table_name, "Item": item}


# ------------ Decode ------------


def parse_value(item: StoredItem, key: str | None = None) -> Any:
    """
    Recover the cached value from the typed v attribute.

    The c flag decides which sub-attribute must be present. A mismatch is
    never resolved by falling back to the other encoding.

    Raises:
        CorruptionError: If v disagrees with c or the payload cannot be decoded
    """
    v = item.get("v")
    if not isinstance(v, dict):
        raise CorruptionError(f"Value attribute (v) is missing for key: {key}", key)

    compressed = bool((item.get("c") or {}).get("BOOL", False))

    if compressed:
        if v.get("B") is None:
            raise CorruptionError(
                f"Compression flag (c) was set, but v.B is undefined for key: {key}",
                key,
                {"compressed": True},
            )
        if "S" in v:
            raise CorruptionError(
                f"Compression flag (c) was set, but v.S is also populated for key: {key}",
                key,
                {"compressed": True},
            )
        try:
            payload = decompress_payload(v["B"])
        except (OSError, EOFError, zlib.error, UnicodeDecodeError, TypeError) as e:
            raise CorruptionError(
                f"Failed to decompress v.B for key: {key}",
                key,
                {"compressed": True, "error": str(e)},
            ) from e
    else:
        if v.get("S") is None:
            raise CorruptionError(
                f"Compression flag (c) was not set, but v.S is undefined for key: {key}",
                key,
                {"compressed": False},
            )
        if "B" in v:
            raise CorruptionError(
                f"Compression flag (c) was not set, but v.B is also populated for key: {key}",
                key,
                {"compressed": False},
            )
        payload = v["S"]

    try:
        return json.loads(payload)
    except (TypeError, ValueError) as e:
        raise CorruptionError(
            f"Failed to parse JSON value for key: {key}",
            key,
            {"compressed": compressed, "error": str(e)},
        ) from e


def parse_stored_item(item: StoredItem, key: str | None = None) -> CacheEntry:
    """
    Decode a DynamoDB item into a cache entry.

    The ttl attribute is a store-only eviction hint and is not reconstructed.

    Args:
        item: Item as returned by GetItem
        key: Requested key, used for error context when the item lacks one

    Raises:
        CorruptionError: If the item violates the encode/decode invariant
    """
    try:
        item_key = item["key"]["S"]
        created_at = int(item["t"]["N"])
        invalidated = item["i"]["BOOL"]
    except (KeyError, TypeError, ValueError) as e:
        raise CorruptionError(
            f"Item metadata (key, t, i) is missing or malformed for key: {key}",
            key,
            {"error": str(e)},
        ) from e

    value = parse_value(item, key if key is not None else item_key)

    return CacheEntry(
        key=item_key,
        value=value,
        created_at=created_at,
        invalidated=bool(invalidated),
    )
