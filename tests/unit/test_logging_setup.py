"""
Layer Dynamo - Logging Setup Tests
"""

import logging

import pytest

from layer_dynamo.logging_setup import LOG_FORMAT, configure_logging


def test_configure_logging_quiets_botocore(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    configure_logging("DEBUG")

    assert calls == [{"level": "DEBUG", "format": LOG_FORMAT}]
    assert logging.getLogger("botocore").level == logging.WARNING


@pytest.mark.usefixtures("clean_env")
def test_configure_logging_uses_configured_level(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    monkeypatch.setenv("LOG_LEVEL", "WARNING")

    configure_logging()

    assert calls == [{"level": "WARNING", "format": LOG_FORMAT}]
