"""API Gateway proxy response representation."""

import base64
from typing import Any, Dict, List, Optional, Union

import orjson
from multidict import CIMultiDict


class ResponseError(Exception):
    """Exception raised for errors related to response creation."""
    pass


def _check_status(status_code: Any) -> None:
    if not isinstance(status_code, int) or status_code < 100 or status_code > 599:
        raise ResponseError(f"Invalid status code: {status_code}")


class Response:
    """Represents an API Gateway proxy response."""

    def __init__(
        self,
        body: Union[str, bytes] = "",
        status_code: int = 200,
        headers: Optional[Dict[str, str]] = None,
    ):
        """Initialize a new response.

        Args:
            body: Response body. Bytes bodies are sent base64 encoded.
            status_code: HTTP status code
            headers: HTTP headers

        Raises:
            ResponseError: If the status code is invalid
        """
        _check_status(status_code)
        self.status_code = status_code
        self.headers: CIMultiDict = CIMultiDict(headers or {})
        self.body = body

    def __repr__(self) -> str:
        return f"Response(status_code={self.status_code})"

    @property
    def is_base64_encoded(self) -> bool:
        """Whether the body has to be base64 encoded for API Gateway."""
        return isinstance(self.body, bytes)

    @classmethod
    def text(cls, content: str, status_code: int = 200) -> "Response":
        """Create a plain text response."""
        headers = {"Content-Type": "text/plain; charset=utf-8"}
        return cls(body=content, status_code=status_code, headers=headers)

    @classmethod
    def html(cls, content: str, status_code: int = 200) -> "Response":
        """Create an HTML response."""
        headers = {"Content-Type": "text/html; charset=utf-8"}
        return cls(body=content, status_code=status_code, headers=headers)

    @classmethod
    def json(cls, data: Any, status_code: int = 200) -> "Response":
        """Create a JSON response.

        Args:
            data: Data to serialize to JSON
            status_code: HTTP status code

        Returns:
            Response instance

        Raises:
            ResponseError: If data cannot be serialized to JSON
        """
        headers = {"Content-Type": "application/json"}
        try:
            content = orjson.dumps(data).decode("utf-8")
        except TypeError as e:
            raise ResponseError(f"Failed to serialize data to JSON: {str(e)}") from e
        return cls(body=content, status_code=status_code, headers=headers)

    @classmethod
    def redirect(cls, location: str, permanent: bool = False) -> "Response":
        """Create a redirect response."""
        status_code = 301 if permanent else 302
        return cls(body="", status_code=status_code, headers={"Location": location})

    @classmethod
    def not_found(cls, message: str = "Not Found") -> "Response":
        """Create a 404 Not Found response."""
        return cls.text(message, status_code=404)

    @classmethod
    def bad_request(cls, message: str = "Bad Request") -> "Response":
        """Create a 400 Bad Request response."""
        return cls.text(message, status_code=400)

    @classmethod
    def server_error(cls, message: str = "Internal Server Error") -> "Response":
        """Create a 500 Internal Server Error response."""
        return cls.text(message, status_code=500)

    def with_header(self, name: str, value: str) -> "Response":
        """Add a header value, keeping existing values for the same name.

        Returns:
            Self for method chaining
        """
        self.headers.add(name, value)
        return self

    def with_status(self, status_code: int) -> "Response":
        """Change the status code of the response.

        Returns:
            Self for method chaining

        Raises:
            ResponseError: If the status code is invalid
        """
        _check_status(status_code)
        self.status_code = status_code
        return self

    def to_event(self) -> Dict[str, Any]:
        """Render the response in the shape API Gateway expects.

        Headers with a single value go in ``headers``; every header is
        also listed in ``multiValueHeaders``.
        """
        multi: Dict[str, List[str]] = {}
        seen = set()
        for name in self.headers:
            if name.lower() not in seen:
                seen.add(name.lower())
                multi[name] = self.headers.getall(name)
        single = {name: values[-1] for name, values in multi.items() if len(values) == 1}

        if self.is_base64_encoded:
            body = base64.b64encode(self.body).decode("ascii")
        else:
            body = self.body

        return {
            "statusCode": self.status_code,
            "headers": single,
            "multiValueHeaders": multi,
            "body": body,
            "isBase64Encoded": self.is_base64_encoded,
        }
