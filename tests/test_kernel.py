"""Tests for the Kernel class."""

import base64
import json

import pytest

from apigw_router.config import Config
from apigw_router.errors import RouterFrozen
from apigw_router.kernel import Kernel
from apigw_router.request import Request
from apigw_router.response import Response
from apigw_router.router import Router


class TeapotError(Exception):
    status_code = 418


def test_kernel_freezes_router(router, dummy_handler):
    Kernel(router)

    with pytest.raises(RouterFrozen):
        router.register_static("late", "GET", "/late", dummy_handler)


def test_kernel_can_leave_router_open(router, config, dummy_handler):
    config.set("kernel__freeze_router", False)
    Kernel(router, config)

    router.register_static("late", "GET", "/late", dummy_handler)
    assert "late" in router


def test_kernel_handles_matched_event(router, event_factory):
    """Test that a matched route's response is rendered as a proxy response."""
    router.register_static("hello", "GET", "/hello", lambda req: Response.text("Hello " + req.get_query("name")))
    kernel = Kernel(router)

    result = kernel(event_factory(path="/hello", queryStringParameters={"name": "you"}), None)

    assert result["statusCode"] == 200
    assert result["body"] == "Hello you"
    assert result["headers"]["Content-Type"] == "text/plain; charset=utf-8"
    assert result["isBase64Encoded"] is False


def test_kernel_maps_not_found_to_404(router, event_factory):
    kernel = Kernel(router)

    result = kernel(event_factory(path="/missing"))

    assert result["statusCode"] == 404
    assert result["body"] == "Not found"


def test_kernel_uses_configured_not_found_message(router, config, event_factory):
    config.set("kernel__not_found_message", "No such thing")

    result = Kernel(router, config)(event_factory(path="/missing"))

    assert result["body"] == "No such thing"


def test_kernel_uses_router_fallback(event_factory):
    router = Router(not_found=lambda req: Response.json({"missing": req.path}, status_code=404))

    result = Kernel(router)(event_factory(path="/missing"))

    assert result["statusCode"] == 404
    assert json.loads(result["body"]) == {"missing": "/missing"}


def test_kernel_rejects_malformed_event(router):
    result = Kernel(router)({"path": "/no-method"})

    assert result["statusCode"] == 400


def test_kernel_maps_body_parsing_errors_to_400(router, event_factory):
    router.register_static("create", "POST", "/items", lambda req: Response.json(req.json()))

    result = Kernel(router)(event_factory(method="POST", path="/items", body="{broken"))

    assert result["statusCode"] == 400


def test_kernel_handles_handler_errors(router, event_factory):
    def handler(req):
        raise RuntimeError("database down")

    router.register_static("boom", "GET", "/boom", handler)

    result = Kernel(router)(event_factory(path="/boom"))

    assert result["statusCode"] == 500
    body = json.loads(result["body"])
    assert body == {"error": "Internal server error"}


def test_kernel_includes_details_in_debug_mode(router, config, event_factory):
    def handler(req):
        raise RuntimeError("database down")

    router.register_static("boom", "GET", "/boom", handler)
    config.set("debug", True)

    body = json.loads(Kernel(router, config)(event_factory(path="/boom"))["body"])

    assert body["exception"] == "database down"
    assert body["type"] == "RuntimeError"
    assert any("database down" in line for line in body["traceback"])


def test_kernel_uses_error_status_code(router, event_factory):
    def handler(req):
        raise TeapotError("short and stout")

    router.register_static("tea", "GET", "/tea", handler)

    assert Kernel(router)(event_factory(path="/tea"))["statusCode"] == 418


@pytest.mark.parametrize(
    "value,status,body",
    [
        ("plain", 200, "plain"),
        (None, 204, ""),
        ({"statusCode": 201, "body": "made", "headers": {"X-A": "1"}}, 201, "made"),
        ([1, 2], 200, "[1,2]"),
    ],
)
def test_kernel_coerces_handler_results(router, value, status, body):
    router.register_static("r", "GET", "/r", lambda req: value)

    response = Kernel(router).process(Request("GET", "/r"))

    assert response.status_code == status
    assert response.body == body


def test_kernel_passes_prebuilt_base64_results(router):
    encoded = base64.b64encode(b"\x00\x01").decode("ascii")
    router.register_static("r", "GET", "/r", lambda req: {"statusCode": 200, "body": encoded, "isBase64Encoded": True})

    event = Kernel(router).process(Request("GET", "/r")).to_event()

    assert event["isBase64Encoded"] is True
    assert event["body"] == encoded


def test_kernel_dispatches_through_sub_routers(event_factory):
    api = Router().register_pattern("user", "GET", r"^/users/\d+$", lambda req: Response.json({"path": req.path}))
    root = Router().register_sub_router("api", "/api", api, strip_prefix=True)

    result = Kernel(root)(event_factory(path="/api/users/5"))

    assert result["statusCode"] == 200
    assert json.loads(result["body"]) == {"path": "/users/5"}


def test_kernel_maps_unserializable_results_to_500(router, event_factory):
    router.register_static("r", "GET", "/r", lambda req: object())

    result = Kernel(router)(event_factory(path="/r"))

    assert result["statusCode"] == 500
    assert json.loads(result["body"]) == {"error": "Internal server error"}


def test_kernel_maps_invalid_prebuilt_status_to_500(router, event_factory):
    router.register_static("r", "GET", "/r", lambda req: {"statusCode": "200", "body": "ok"})

    result = Kernel(router)(event_factory(path="/r"))

    assert result["statusCode"] == 500
