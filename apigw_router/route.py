"""Route values and the standard predicate constructors.

A route is nothing more than a match predicate paired with a handler.
The helpers in this module build the two common kinds of route: exact
method/path matches and regular expression matches.
"""

import re
from dataclasses import dataclass
from typing import Any, Union

from apigw_router.interfaces import HandleFunc, IRequest, MatchFunc


PatternLike = Union[str, "re.Pattern"]


@dataclass(frozen=True)
class Route:
    """A route built from a match function and a handle function.

    Routes are immutable. To change a route, register a new one under
    the same name.
    """

    match: MatchFunc
    handler: HandleFunc

    def matches(self, request: IRequest) -> bool:
        """Check if this route can handle the request."""
        return bool(self.match(request))

    def handle(self, request: IRequest) -> Any:
        """Invoke the handler for a matched request."""
        return self.handler(request)


def static_route(method: str, path: str, handler: HandleFunc) -> Route:
    """Create a route matching an exact method and path.

    Args:
        method: The HTTP method to match.
        path: The exact request path to match.
        handler: The handler to invoke for matching requests.

    Returns:
        The new route.
    """
    method = method.upper()

    def match(request: IRequest) -> bool:
        return request.path == path and request.method.upper() == method

    return Route(match, handler)


def pattern_route(method: str, pattern: PatternLike, handler: HandleFunc) -> Route:
    """Create a route matching a method and a regular expression.

    The pattern only has to match somewhere in the path; anchor it with
    ``^`` and ``$`` when the whole path must match. String patterns are
    compiled here, so an invalid pattern raises ``re.error`` when the
    route is created rather than when a request is dispatched.

    Args:
        method: The HTTP method to match.
        pattern: A compiled pattern or a pattern string.
        handler: The handler to invoke for matching requests.

    Returns:
        The new route.
    """
    method = method.upper()
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern

    def match(request: IRequest) -> bool:
        return compiled.search(request.path) is not None and request.method.upper() == method

    return Route(match, handler)


def prefix_pattern(prefix: str) -> "re.Pattern":
    """Compile a pattern matching a path prefix on a segment boundary.

    ``/api`` matches ``/api`` and ``/api/users`` but not ``/apiary``.
    A trailing slash on the prefix is ignored.
    """
    return re.compile("^" + re.escape(prefix.rstrip("/")) + "(?=/|$)")
