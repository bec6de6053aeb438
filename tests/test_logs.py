"""Unit tests for logging configuration."""

from __future__ import annotations

import logging
from unittest.mock import patch

from sortset.logs import configure_logging


def test_configure_logging_calls_structlog_and_basicconfig() -> None:
    with (
        patch("sortset.logs.logging.basicConfig") as basic_config,
        patch("sortset.logs.structlog.configure") as configure,
    ):
        configure_logging(level=logging.DEBUG)

    basic_config.assert_called_once()
    assert basic_config.call_args.kwargs["level"] == logging.DEBUG
    configure.assert_called_once()
