"""
Layer Dynamo - Error Reporting

Configuration and corruption failures are not raised to the caller; they are
handed to an error reporter passed into the layer. A reporter is any callable
taking an ErrorReport and is invoked synchronously.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ..errors import ErrorCode, extract_error_code

logger = logging.getLogger(__name__)

COMPONENT_NAME = "LayerDynamo"


@dataclass
class ErrorReport:
    """A failure recovered locally by the layer."""

    message: str
    error: BaseException
    key: str | None = None
    name: str = COMPONENT_NAME
    error_code: ErrorCode = field(init=False)

    def __post_init__(self) -> None:
        self.error_code = extract_error_code(self.error)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "message": self.message,
            "key": self.key,
            "error_code": self.error_code.value,
            "error": type(self.error).__name__,
        }


ErrorReporter = Callable[[ErrorReport], None]


def log_error_reporter(report: ErrorReport) -> None:
    """Default reporter: log the report at ERROR level."""
    logger.error(
        f"[{report.name}] {report.message}",
        extra={
            "component": report.name,
            "key": report.key,
            "error_code": report.error_code.value,
            "error": str(report.error),
        },
    )
