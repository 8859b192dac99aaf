"""
Layer Dynamo - Cache Backends

Exports available cache layer implementations.
"""

from .dynamo import DynamoLayer

__all__ = [
    "DynamoLayer",
]
