"""FastAPI adapter for basic auth."""

from fastapi_basic_auth.fastapi.route import BasicAuthMiddleware, protected_route

__all__ = ["BasicAuthMiddleware", "protected_route"]
