"""Lambda entry point for a router.

This module provides the Kernel class that turns API Gateway proxy
events into requests, dispatches them through a router and renders the
result back into a proxy response.
"""

import base64
import traceback
from typing import Any, Dict, Optional

from loguru import logger

from apigw_router.config import Config
from apigw_router.errors import RouteNotFound
from apigw_router.request import ProxyEvent, Request, RequestParsingError
from apigw_router.response import Response
from apigw_router.router import Router


class Kernel:
    """Lambda handler wrapping a router.

    Usage::

        router = Router()
        # configure the router's routes...
        handler = Kernel(router)

    ``handler`` can then be used as the Lambda function handler.
    """

    def __init__(self, router: Router, config: Optional[Config] = None) -> None:
        """Initialize a new Kernel.

        Args:
            router: The router to dispatch requests through.
            config: Optional configuration. If not provided, default config is used.
        """
        self._router = router
        self._config = config or Config()
        if self._config.get("kernel__freeze_router"):
            router.freeze()

    @property
    def router(self) -> Router:
        """Get the router requests are dispatched through."""
        return self._router

    @property
    def config(self) -> Config:
        """Get the kernel configuration."""
        return self._config

    def __call__(self, event: ProxyEvent, context: Any = None) -> Dict[str, Any]:
        """Handle a proxy event and return a proxy response."""
        try:
            request = Request.from_event(event)
        except RequestParsingError as e:
            logger.warning("Rejected malformed event: {}", e)
            return Response.bad_request(str(e)).to_event()
        return self.process(request).to_event()

    def process(self, request: Request) -> Response:
        """Dispatch a request and turn the outcome into a response.

        Args:
            request: The request to dispatch.

        Returns:
            The handler's response, a 404 response when no route matches,
            or an error response when the handler raised.
        """
        try:
            result = self._router.dispatch(request)
            return self._to_response(result.response)
        except RouteNotFound:
            return Response.not_found(self._config.get("kernel__not_found_message"))
        except RequestParsingError as e:
            return Response.bad_request(str(e))
        except Exception as e:
            logger.opt(exception=e).error("Unhandled error in handler for {} {}", request.method, request.path)
            return self._handle_error(e)

    def _to_response(self, value: Any) -> Response:
        """Coerce a handler's return value into a Response."""
        if isinstance(value, Response):
            return value
        if isinstance(value, dict) and "statusCode" in value:
            body = value.get("body") or ""
            if value.get("isBase64Encoded"):
                body = base64.b64decode(body)
            response = Response(
                body=body,
                status_code=value["statusCode"],
                headers=value.get("headers"),
            )
            for name, values in (value.get("multiValueHeaders") or {}).items():
                if name not in response.headers:
                    for item in values:
                        response.headers.add(name, item)
            return response
        if isinstance(value, (str, bytes)):
            return Response(body=value)
        if value is None:
            return Response(status_code=204)
        return Response.json(value)

    def _handle_error(self, exception: Exception) -> Response:
        """Create a response for an exception raised by a handler."""
        status = getattr(exception, "status_code", 500)
        if not isinstance(status, int) or status < 400 or status > 599:
            status = 500

        error_data: Dict[str, Any] = {"error": self._config.get("kernel__error_message")}
        if self._config.debug:
            error_data["exception"] = str(exception)
            error_data["type"] = exception.__class__.__name__
            error_data["traceback"] = traceback.format_exception(
                type(exception), exception, exception.__traceback__
            )
        return Response.json(error_data, status_code=status)
