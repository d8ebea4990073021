"""Tests for the logging setup."""

import logging

from ellagarden_api.app.core.logging_config import QUIET_LOGGERS, setup_logging


def test_multipart_parser_is_quieted_at_debug() -> None:
    setup_logging("DEBUG")
    for name in QUIET_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING


def test_existing_handlers_are_left_alone() -> None:
    root = logging.getLogger()
    handler = logging.NullHandler()
    root.addHandler(handler)
    try:
        before = list(root.handlers)
        setup_logging("INFO", "unused.log")
        assert root.handlers == before
    finally:
        root.removeHandler(handler)
