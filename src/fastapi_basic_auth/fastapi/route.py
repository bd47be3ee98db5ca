"""FastAPI and Starlette adapters for the basic auth middleware.

Two ways to protect an application:
- BasicAuthMiddleware guards every request via ``app.add_middleware``.
- protected_route guards the routes of a single APIRouter.
"""

import logging
from collections.abc import Callable
from typing import Any

from fastapi.routing import APIRoute
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from fastapi_basic_auth.core.config import BasicAuthConfig
from fastapi_basic_auth.core.middleware import basic_auth, build_middleware_chain
from fastapi_basic_auth.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class BasicAuthMiddleware(BaseHTTPMiddleware):
    """Application-wide Basic Authentication.

    Starlette instantiates middleware lazily, on the first request. Build
    the BasicAuthConfig yourself when registering the middleware so a
    missing validator still fails at startup.

    Example:
        app = FastAPI()
        app.add_middleware(
            BasicAuthMiddleware,
            config=BasicAuthConfig(validate=check, skipper=skip_paths("/health")),
        )
    """

    def __init__(self, app: ASGIApp, config: BasicAuthConfig) -> None:
        if not isinstance(config, BasicAuthConfig):
            raise ConfigurationError(
                f"BasicAuthMiddleware requires a BasicAuthConfig, got {type(config).__name__}"
            )
        super().__init__(app)
        self.config = config
        self._middleware = basic_auth(config)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        return await self._middleware(request, call_next)


def protected_route(*middleware: Callable[..., Any]) -> type[APIRoute]:
    """Create an APIRoute subclass that runs middleware around every handler.

    The wrapping happens in get_route_handler(), so middleware sees the
    Starlette request and may short-circuit before FastAPI resolves the
    endpoint's parameters.

    Args:
        *middleware: ``(request, call_next)`` middleware, outermost first.

    Returns:
        A subclass of APIRoute for ``APIRouter(route_class=...)``.

    Raises:
        ConfigurationError: If no middleware or a non-callable is given.

    Example:
        admin = APIRouter(
            prefix="/admin",
            route_class=protected_route(basic_auth(validate=check)),
        )
    """
    if not middleware:
        raise ConfigurationError("protected_route requires at least one middleware")
    for i, mw in enumerate(middleware):
        if not callable(mw):
            raise ConfigurationError(
                f"Non-callable middleware at index {i}: {type(mw).__name__}"
            )

    middleware_stack = tuple(middleware)

    class ProtectedRoute(APIRoute):
        def get_route_handler(self) -> Callable[..., Any]:
            original_handler = super().get_route_handler()
            logger.debug(
                "Wrapped route handler",
                extra={"path": self.path, "middleware_count": len(middleware_stack)},
            )
            return build_middleware_chain(original_handler, middleware_stack)

    return ProtectedRoute
