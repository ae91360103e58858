"""API Gateway proxy requests.

This module provides the Request class that represents an API Gateway
proxy integration request, including headers, query parameters and body.
"""

import base64
import binascii
import copy
from typing import Any, Dict, List, Mapping, Optional

import orjson
from multidict import CIMultiDict, MultiDict
from typing_extensions import NotRequired, TypedDict


class RequestParsingError(Exception):
    """Exception raised when a request or its body cannot be parsed."""
    pass


class ProxyEvent(TypedDict):
    """Shape of the API Gateway proxy event the Lambda receives."""

    httpMethod: str
    path: str
    resource: NotRequired[Optional[str]]
    headers: NotRequired[Optional[Dict[str, str]]]
    multiValueHeaders: NotRequired[Optional[Dict[str, List[str]]]]
    queryStringParameters: NotRequired[Optional[Dict[str, str]]]
    multiValueQueryStringParameters: NotRequired[Optional[Dict[str, List[str]]]]
    pathParameters: NotRequired[Optional[Dict[str, str]]]
    stageVariables: NotRequired[Optional[Dict[str, str]]]
    requestContext: NotRequired[Optional[Dict[str, Any]]]
    body: NotRequired[Optional[str]]
    isBase64Encoded: NotRequired[bool]


def _merge(single: Optional[Mapping[str, str]], multi: Optional[Mapping[str, List[str]]], into: MultiDict) -> None:
    # API Gateway sends both forms; the multi-value form is complete when present.
    for key, values in (multi or {}).items():
        for value in values:
            into.add(key, value)
    for key, value in (single or {}).items():
        if key not in into:
            into.add(key, value)


class Request:
    """API Gateway proxy request.

    Only ``method`` and ``path`` are used for routing; everything else is
    carried along for handlers.
    """

    def __init__(
        self,
        method: str,
        path: str,
        headers: Optional[Mapping[str, str]] = None,
        query_params: Optional[Mapping[str, str]] = None,
        body: Optional[str] = None,
        is_base64_encoded: bool = False,
        resource: Optional[str] = None,
        path_parameters: Optional[Dict[str, str]] = None,
        stage_variables: Optional[Dict[str, str]] = None,
        request_context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize a new request.

        Args:
            method: HTTP method (GET, POST, etc.).
            path: Request path.
            headers: HTTP headers.
            query_params: Query string parameters.
            body: Request body as sent by API Gateway.
            is_base64_encoded: Whether the body is base64 encoded.
            resource: The API Gateway resource that received the request.
            path_parameters: Path parameters extracted by API Gateway.
            stage_variables: Stage variables of the deployment.
            request_context: The API Gateway request context.
        """
        self.method = method.upper()
        self.path = path
        self.headers: CIMultiDict = CIMultiDict(headers or {})
        self.query_params: MultiDict = MultiDict(query_params or {})
        self.body = body or ""
        self.is_base64_encoded = is_base64_encoded
        self.resource = resource
        self.path_parameters = path_parameters or {}
        self.stage_variables = stage_variables or {}
        self.request_context = request_context or {}
        self.attributes: Dict[str, Any] = {}

    def __repr__(self) -> str:
        return f"Request({self.method!r}, {self.path!r})"

    @classmethod
    def from_event(cls, event: ProxyEvent) -> "Request":
        """Create a request from an API Gateway proxy event.

        Args:
            event: The proxy event dict passed to the Lambda function.

        Returns:
            The request.

        Raises:
            RequestParsingError: If the event has no method or path.
        """
        if not isinstance(event, Mapping):
            raise RequestParsingError(f"Expected a proxy event mapping, got {type(event).__name__}")
        method = event.get("httpMethod")
        path = event.get("path")
        if not method or path is None:
            raise RequestParsingError("Proxy event is missing httpMethod or path")

        request = cls(
            method=method,
            path=path,
            body=event.get("body"),
            is_base64_encoded=bool(event.get("isBase64Encoded", False)),
            resource=event.get("resource"),
            path_parameters=event.get("pathParameters"),
            stage_variables=event.get("stageVariables"),
            request_context=event.get("requestContext"),
        )
        _merge(event.get("headers"), event.get("multiValueHeaders"), request.headers)
        _merge(
            event.get("queryStringParameters"),
            event.get("multiValueQueryStringParameters"),
            request.query_params,
        )
        return request

    @property
    def content_type(self) -> str:
        """Get the content type of the request."""
        content_type = self.headers.get("Content-Type", "")
        if ";" in content_type:
            return content_type.split(";")[0].strip()
        return content_type

    @property
    def raw_body(self) -> bytes:
        """Get the body as bytes, decoding base64 bodies.

        Raises:
            RequestParsingError: If a base64 body is malformed.
        """
        if not self.is_base64_encoded:
            return self.body.encode("utf-8")
        try:
            return base64.b64decode(self.body, validate=True)
        except (binascii.Error, ValueError) as e:
            raise RequestParsingError(f"Failed to decode base64 body: {str(e)}") from e

    def json(self) -> Any:
        """Parse the request body as JSON.

        Returns:
            The parsed JSON, or an empty dict for an empty body.

        Raises:
            RequestParsingError: If the body is not valid JSON.
        """
        raw = self.raw_body
        if not raw:
            return {}
        try:
            return orjson.loads(raw)
        except orjson.JSONDecodeError as e:
            raise RequestParsingError(f"Failed to parse JSON body: {str(e)}") from e

    def with_path(self, path: str) -> "Request":
        """Get a shallow copy of this request with a different path."""
        request = copy.copy(self)
        request.path = path
        return request

    def get_header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get a header value, case-insensitively."""
        return self.headers.get(name, default)

    def get_query(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get the first value of a query parameter."""
        return self.query_params.get(name, default)

    def get_query_all(self, name: str) -> List[str]:
        """Get every value of a query parameter."""
        return self.query_params.getall(name, [])
