"""Test fixtures and configuration for apigw_router."""

import os
import sys

import pytest
from loguru import logger

from apigw_router.config import Config
from apigw_router.request import Request
from apigw_router.response import Response
from apigw_router.router import Router


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove any APIGW_ROUTER_ variables from the environment."""
    for key in list(os.environ):
        if key.startswith("APIGW_ROUTER_"):
            monkeypatch.delenv(key)


@pytest.fixture
def restore_logging():
    """Reset loguru to the package default after a test changes it."""
    yield
    logger.remove()
    logger.add(sys.stderr)
    logger.disable("apigw_router")


@pytest.fixture
def router():
    """Create an empty router."""
    return Router()


@pytest.fixture
def config():
    """Create a test configuration instance."""
    return Config()


@pytest.fixture
def request_factory():
    """Create a factory function for test requests."""
    def _create_request(method="GET", path="/", headers=None, query_params=None, body=None):
        return Request(
            method=method,
            path=path,
            headers=headers,
            query_params=query_params,
            body=body,
        )
    return _create_request


@pytest.fixture
def event_factory():
    """Create a factory function for API Gateway proxy events."""
    def _create_event(method="GET", path="/", **extra):
        event = {
            "httpMethod": method,
            "path": path,
            "resource": "/{proxy+}",
            "headers": None,
            "multiValueHeaders": None,
            "queryStringParameters": None,
            "multiValueQueryStringParameters": None,
            "pathParameters": None,
            "stageVariables": None,
            "requestContext": {"stage": "test"},
            "body": None,
            "isBase64Encoded": False,
        }
        event.update(extra)
        return event
    return _create_event


@pytest.fixture
def dummy_handler():
    """Create a handler returning an empty response."""
    def _handler(_request):
        return Response()
    return _handler