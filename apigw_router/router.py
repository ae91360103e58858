"""Router implementation.

This module provides the Router class, an ordered table of named routes.
Requests are dispatched to the first route, in registration order, whose
predicate matches.
"""

from collections import OrderedDict
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from loguru import logger

from apigw_router.composition import MountedRouter
from apigw_router.errors import RouteNotFound, RouterFrozen
from apigw_router.interfaces import HandleFunc, IRequest, IRoute
from apigw_router.route import PatternLike, pattern_route, static_route


class DispatchResult(NamedTuple):
    """Result of dispatching a request.

    ``route_name`` is the name of the route that handled the request in
    the router that was called, or ``None`` when the fallback handled it.
    """

    route_name: Optional[str]
    response: Any


class Router:
    """An ordered table of named routes.

    Route names are unique. Registering a name that already exists
    replaces the previous route in place, so it keeps its position in
    the scan order. Routes should all be registered before the router
    starts serving requests; call ``freeze()`` to enforce that.

    Usage::

        router = Router()
        router.register_static("health", "GET", "/health", health)
        router.register_pattern("user", "GET", r"^/users/\\d+$", get_user)
        result = router.dispatch(request)
    """

    def __init__(self, not_found: Optional[HandleFunc] = None) -> None:
        """Initialize a new empty Router.

        Args:
            not_found: Optional fallback handler invoked when no route
                matches. Without it, unmatched requests raise RouteNotFound.
        """
        self._routes: "OrderedDict[str, IRoute]" = OrderedDict()
        self._frozen = False
        self.not_found = not_found
        # Advisory only. Shared between concurrent dispatches.
        self.current_route_name: Optional[str] = None

    def __len__(self) -> int:
        return len(self._routes)

    def __contains__(self, name: object) -> bool:
        return name in self._routes

    def __repr__(self) -> str:
        return f"Router(routes={list(self._routes)!r}, frozen={self._frozen})"

    @property
    def routes(self) -> Dict[str, IRoute]:
        """Get a copy of the registered routes, in scan order."""
        return OrderedDict(self._routes)

    @property
    def frozen(self) -> bool:
        """Whether registration has been closed."""
        return self._frozen

    def names(self) -> List[str]:
        """Get the registered route names, in scan order."""
        return list(self._routes)

    def freeze(self) -> "Router":
        """Close the router for registration.

        Registering routes while requests are being dispatched is not
        supported. After this call any registration raises RouterFrozen.
        Routers mounted with ``register_sub_router`` are frozen as well.
        """
        self._frozen = True
        for route in self._routes.values():
            if isinstance(route, MountedRouter) and not route.router.frozen:
                route.router.freeze()
        return self

    def register(self, name: str, route: IRoute) -> "Router":
        """Add a route under a name, replacing any route with that name.

        This is also used by the other ``register_*`` methods.

        Args:
            name: The route name.
            route: The route to add.

        Returns:
            Self for method chaining.

        Raises:
            RouterFrozen: If the router has been frozen.
        """
        if self._frozen:
            raise RouterFrozen(f"Cannot register route {name!r} on a frozen router")
        if name in self._routes:
            logger.debug("Replacing route {}", name)
        self._routes[name] = route
        return self

    def register_static(self, name: str, method: str, path: str, handler: HandleFunc) -> "Router":
        """Add a route matching an exact method and path.

        Args:
            name: The route name.
            method: The HTTP method to match.
            path: The exact path to match.
            handler: The handler to invoke.

        Returns:
            Self for method chaining.
        """
        return self.register(name, static_route(method, path, handler))

    def register_pattern(self, name: str, method: str, pattern: PatternLike, handler: HandleFunc) -> "Router":
        """Add a route matching a method and a regular expression.

        The pattern is searched for anywhere in the path. Invalid pattern
        strings raise ``re.error`` here.

        Returns:
            Self for method chaining.
        """
        return self.register(name, pattern_route(method, pattern, handler))

    def register_sub_router(
        self,
        name: str,
        prefix: str,
        router: "Router",
        strip_prefix: bool = False,
    ) -> "Router":
        """Mount another router under a path prefix.

        Args:
            name: The route name.
            prefix: The path prefix to mount the router under.
            router: The nested router.
            strip_prefix: Whether the nested router sees paths with the
                prefix removed. By default it sees the full path.

        Returns:
            Self for method chaining.
        """
        return self.register(name, MountedRouter(prefix, router, strip_prefix=strip_prefix))

    def set_not_found(self, handler: Optional[HandleFunc]) -> "Router":
        """Set or clear the fallback handler.

        Returns:
            Self for method chaining.
        """
        self.not_found = handler
        return self

    def first_match(self, request: IRequest) -> Optional[Tuple[str, IRoute]]:
        """Find the first route that matches a request.

        Only predicates are evaluated; no handler is called and no state
        is changed.

        Args:
            request: The request to match.

        Returns:
            A (name, route) tuple, or None if no route matches.
        """
        for name, route in self._routes.items():
            if route.matches(request):
                return name, route
        return None

    def dispatch(self, request: IRequest) -> DispatchResult:
        """Dispatch a request to the first matching route.

        The handler's response is returned unchanged and any exception
        it raises propagates unchanged.

        Args:
            request: The request to dispatch.

        Returns:
            The name of the route that handled the request and its response.

        Raises:
            RouteNotFound: If no route matches and there is no fallback.
        """
        found = self.first_match(request)
        if found is None:
            if self.not_found is None:
                logger.debug("No route for {} {}", request.method, request.path)
                raise RouteNotFound(request.method, request.path)
            logger.debug("Using fallback for {} {}", request.method, request.path)
            return DispatchResult(None, self.not_found(request))

        name, route = found
        self.current_route_name = name
        logger.bind(route=name).debug("Matched {} {}", request.method, request.path)
        return DispatchResult(name, route.handle(request))

    def handle(self, request: IRequest) -> Any:
        """Dispatch a request and return only the response."""
        return self.dispatch(request).response

    __call__ = handle
