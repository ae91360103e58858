"""Tests for logging setup."""

import json

from loguru import logger

from apigw_router.config import Config
from apigw_router.log import configure_logging
from apigw_router.request import Request
from apigw_router.router import Router


def test_package_logs_are_silent_by_default(router, restore_logging):
    messages = []
    logger.add(messages.append, level="TRACE")
    router.register_static("a", "GET", "/a", lambda req: "a")

    router.dispatch(Request("GET", "/a"))

    assert messages == []


def test_configure_logging_enables_package_logs(restore_logging):
    messages = []
    config = Config()
    config.set("log_level", "DEBUG")
    configure_logging(config, sink=messages.append)

    Router().register_static("a", "GET", "/a", lambda req: "a").dispatch(Request("GET", "/a"))

    assert any("Matched GET /a" in message for message in messages)


def test_configure_logging_respects_level(restore_logging):
    messages = []
    configure_logging(Config(), sink=messages.append)

    Router().register_static("a", "GET", "/a", lambda req: "a").dispatch(Request("GET", "/a"))

    assert messages == []


def test_configure_logging_serializes_records(restore_logging):
    messages = []
    config = Config()
    config.set("log_level", "DEBUG")
    config.set("log_serialize", True)
    configure_logging(config, sink=messages.append)

    Router().register_static("a", "GET", "/a", lambda req: "a").dispatch(Request("GET", "/a"))

    record = json.loads(messages[-1])
    assert record["record"]["extra"]["route"] == "a"
