"""apigw_router - request routing for API Gateway triggered Lambda functions.

Routes are registered by name on a Router and tried in registration
order; the first route whose predicate matches handles the request.
Routers can be mounted inside other routers under a path prefix, and a
Kernel turns a router into a Lambda handler.
"""

from loguru import logger

# Define version
__version__ = "0.1.0"

__all__ = [
    "Config",
    "DispatchResult",
    "IRequest",
    "IRoute",
    "Kernel",
    "MountedRouter",
    "Request",
    "RequestParsingError",
    "Response",
    "ResponseError",
    "Route",
    "RouteNotFound",
    "Router",
    "RouterError",
    "RouterFrozen",
    "configure_logging",
    "pattern_route",
    "static_route",
]

from apigw_router.composition import MountedRouter
from apigw_router.config import Config
from apigw_router.errors import RouteNotFound, RouterError, RouterFrozen
from apigw_router.interfaces import IRequest, IRoute
from apigw_router.kernel import Kernel
from apigw_router.log import configure_logging
from apigw_router.request import Request, RequestParsingError
from apigw_router.response import Response, ResponseError
from apigw_router.route import Route, pattern_route, static_route
from apigw_router.router import DispatchResult, Router

logger.disable(__name__)
