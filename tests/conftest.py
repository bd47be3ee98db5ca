"""Shared pytest fixtures for fastapi-basic-auth tests."""

import base64
from collections.abc import Callable
from typing import Any

import pytest
from fastapi import FastAPI, Request
from starlette.requests import Request as StarletteRequest

from fastapi_basic_auth import AuthenticationError


def encode_basic(account: str, password: str) -> str:
    """Return an Authorization header value for the given credentials."""
    token = base64.b64encode(f"{account}:{password}".encode()).decode()
    return f"Basic {token}"


def tree_validator(account: str, password: str, request: Any) -> bool:
    """Accepts tree.xie/password; account "n" fails with its own 400 error."""
    if account == "tree.xie" and password == "password":
        return True
    if account == "n":
        raise AuthenticationError("account is invalid", status_code=400, category=None)
    return False


@pytest.fixture
def validator() -> Callable[[str, str, Any], bool]:
    """Return the reference validator."""
    return tree_validator


@pytest.fixture
def make_request() -> Callable[..., StarletteRequest]:
    """Build a bare Starlette request from headers, path and method.

    Example:
        request = make_request(headers={"authorization": "Basic YTpi"}, path="/users")
    """

    def _create(
        headers: dict[str, str] | None = None,
        path: str = "/",
        method: str = "GET",
    ) -> StarletteRequest:
        raw_headers = [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in (headers or {}).items()
        ]
        scope = {
            "type": "http",
            "method": method,
            "scheme": "http",
            "server": ("testserver", 80),
            "root_path": "",
            "path": path,
            "query_string": b"",
            "headers": raw_headers,
        }
        return StarletteRequest(scope)

    return _create


@pytest.fixture
def make_app() -> Callable[..., FastAPI]:
    """Build a FastAPI app guarded by a ``(request, call_next)`` middleware.

    The app records whether its handler ran in ``app.state.handled``.
    Routes:
        GET /         -> {"account": <authenticated account or None>}
        GET /health   -> {"status": "ok"}
    """

    def _create(middleware: Callable[..., Any]) -> FastAPI:
        app = FastAPI()
        app.state.handled = False

        @app.get("/")
        async def index(request: Request) -> dict[str, Any]:
            app.state.handled = True
            return {"account": getattr(request.state, "basic_auth_account", None)}

        @app.get("/health")
        async def health() -> dict[str, str]:
            app.state.handled = True
            return {"status": "ok"}

        app.middleware("http")(middleware)
        return app

    return _create


@pytest.fixture
def basic_header() -> Callable[[str, str], str]:
    """Return the Authorization header encoder."""
    return encode_basic
