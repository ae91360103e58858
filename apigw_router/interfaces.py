"""Interfaces for the router.

The router only ever looks at a request's ``path`` and ``method`` and
treats responses as opaque values, so these protocols are kept small.
"""

from typing import Any, Callable

from typing_extensions import Protocol, runtime_checkable


class IRequest(Protocol):
    """Protocol defining what the router reads from a request."""

    @property
    def method(self) -> str:
        """Get the HTTP method."""
        ...

    @property
    def path(self) -> str:
        """Get the request path."""
        ...


@runtime_checkable
class IRoute(Protocol):
    """Protocol for anything that can be registered with a router."""

    def matches(self, request: IRequest) -> bool:
        """Check if this route can handle the request.

        Must not mutate the request or have any other side effect.
        """
        ...

    def handle(self, request: IRequest) -> Any:
        """Handle a matched request and return the response."""
        ...


MatchFunc = Callable[[IRequest], bool]
HandleFunc = Callable[[IRequest], Any]
