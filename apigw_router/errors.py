"""Exceptions raised by the router.

Handler exceptions are never wrapped by the router; only routing
outcomes and misuse of the registration API are represented here.
"""


class RouterError(Exception):
    """Base class for errors raised by the router itself."""
    pass


class RouteNotFound(RouterError):
    """Raised when no route matches a request and no fallback is configured.

    This is an expected outcome, not a fatal one. The kernel maps it to
    an HTTP 404 response.
    """

    status_code = 404

    def __init__(self, method: str, path: str, message: str = "Not found") -> None:
        """Initialize a new RouteNotFound.

        Args:
            method: The HTTP method of the unmatched request.
            path: The path of the unmatched request.
            message: The error message.
        """
        super().__init__(message)
        self.method = method
        self.path = path


class RouterFrozen(RouterError, RuntimeError):
    """Raised when a route is registered on a frozen router."""
    pass
