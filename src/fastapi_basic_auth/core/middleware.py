"""Basic auth middleware and middleware chain assembly.

Provides basic_auth, the builder for the ``(request, call_next)``
middleware function, and build_middleware_chain for wrapping individual
route handlers.
"""

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from starlette.requests import Request
from starlette.responses import Response

from fastapi_basic_auth.core.config import BasicAuthConfig, Skipper, Validator
from fastapi_basic_auth.core.decision import Allow, authenticate
from fastapi_basic_auth.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CallNext = Callable[[Request], Awaitable[Response]]
Middleware = Callable[[Request, CallNext], Awaitable[Response]]

# request.state attribute holding the authenticated account
ACCOUNT_STATE_KEY = "basic_auth_account"


def basic_auth(
    config: BasicAuthConfig | None = None,
    *,
    validate: Validator | None = None,
    realm: str = "",
    skipper: Skipper | None = None,
) -> Middleware:
    """Build a Basic Authentication middleware.

    Either pass a prepared BasicAuthConfig or the individual settings as
    keyword arguments, not both. The configuration is checked immediately,
    so a missing validator stops the application at startup.

    Args:
        config: A prepared configuration.
        validate: ``validate(account, password, request) -> bool``, sync or async.
        realm: Realm for the ``WWW-Authenticate`` challenge.
        skipper: ``skipper(request) -> bool`` exempting requests.

    Returns:
        An async ``middleware(request, call_next)`` function.

    Raises:
        ConfigurationError: If the configuration is invalid or ambiguous.

    Example:
        from fastapi import FastAPI
        from fastapi_basic_auth import basic_auth

        def check(account, password, request):
            return account == "admin" and password == "secret"

        app = FastAPI()
        app.middleware("http")(basic_auth(validate=check))
    """
    if config is None:
        config = BasicAuthConfig(validate=validate, realm=realm, skipper=skipper)
    elif validate is not None or realm or skipper is not None:
        raise ConfigurationError(
            "pass either a BasicAuthConfig or keyword settings to basic_auth, not both"
        )

    logger.info(
        "Configured basic auth middleware",
        extra={"realm": config.realm},
    )

    async def middleware(request: Request, call_next: CallNext) -> Response:
        decision = await authenticate(config, request)
        if not isinstance(decision, Allow):
            return decision.to_response()
        if decision.account is not None:
            setattr(request.state, ACCOUNT_STATE_KEY, decision.account)
        return await call_next(request)

    middleware.__name__ = "basic_auth"
    middleware.__qualname__ = middleware.__name__
    return middleware


def build_middleware_chain(
    handler: Callable[..., Any],
    middleware_stack: Sequence[Callable[..., Any]],
) -> Callable[..., Any]:
    """Wrap a request handler with a middleware chain.

    Composes middleware so that the first entry is the outermost (runs
    first). Each middleware receives (request, call_next) where call_next
    invokes the next middleware or the handler.

    Args:
        handler: Async function taking a request and returning a response.
        middleware_stack: Ordered sequence of middleware (outermost first).

    Returns:
        The wrapped handler, or the handler itself if the stack is empty.
    """
    if not middleware_stack:
        return handler

    chain = handler
    for mw in reversed(middleware_stack):
        chain = _wrap_with_middleware(chain, mw)
    return chain


def _wrap_with_middleware(
    next_handler: Callable[..., Any],
    middleware: Callable[..., Any],
) -> Callable[..., Any]:
    """Wrap a handler with a single ``(request, call_next)`` middleware."""

    async def wrapped(request: Any) -> Any:
        async def call_next(req: Any) -> Any:
            return await next_handler(req)

        return await middleware(request, call_next)

    wrapped.__name__ = (
        f"{getattr(middleware, '__name__', 'middleware')}_wrapping_"
        f"{getattr(next_handler, '__name__', 'handler')}"
    )
    wrapped.__qualname__ = wrapped.__name__
    return wrapped
