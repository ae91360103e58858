"""Mounting a router inside another router.

A ``MountedRouter`` presents a whole router as a single route, so a
parent router can delegate every request under a path prefix to it.
"""

import copy
from typing import TYPE_CHECKING, Any

from loguru import logger

from apigw_router.interfaces import IRequest
from apigw_router.route import prefix_pattern

if TYPE_CHECKING:
    from apigw_router.router import Router


class MountedRouter:
    """Route that delegates to a nested router under a path prefix.

    The route matches when the request path starts with the prefix and
    the nested router has a route for the request. The nested router's
    fallback does not count, so an empty nested router never matches and
    the parent carries on scanning its own routes.

    By default the nested router receives the request unchanged, with
    the full path, and its routes must be declared with the full path.
    With ``strip_prefix`` the nested router instead receives a copy of
    the request whose path has the prefix removed. That copy is made
    with ``request.with_path()`` when the request has one, otherwise as
    a shallow copy with ``path`` replaced.
    """

    def __init__(self, prefix: str, router: "Router", strip_prefix: bool = False) -> None:
        """Initialize a new MountedRouter.

        Args:
            prefix: The path prefix the nested router is mounted under.
            router: The nested router.
            strip_prefix: Whether to remove the prefix before delegating.
        """
        self.prefix = prefix
        self.router = router
        self.strip_prefix = strip_prefix
        self._pattern = prefix_pattern(prefix)

    def __repr__(self) -> str:
        return f"MountedRouter(prefix={self.prefix!r}, routes={len(self.router)})"

    def _forwarded(self, request: IRequest) -> IRequest:
        if not self.strip_prefix:
            return request
        remaining = self._pattern.sub("", request.path, count=1) or "/"
        with_path = getattr(request, "with_path", None)
        if with_path is not None:
            return with_path(remaining)
        forwarded = copy.copy(request)
        forwarded.path = remaining
        return forwarded

    def matches(self, request: IRequest) -> bool:
        """Check the prefix, then do a trial selection in the nested router.

        The trial selection never invokes a handler and never touches the
        nested router's state.
        """
        if self._pattern.match(request.path) is None:
            return False
        found = self.router.first_match(self._forwarded(request))
        if found is None:
            logger.debug("No route under prefix {} for {} {}", self.prefix, request.method, request.path)
        return found is not None

    def handle(self, request: IRequest) -> Any:
        """Dispatch the request into the nested router."""
        return self.router.dispatch(self._forwarded(request)).response
