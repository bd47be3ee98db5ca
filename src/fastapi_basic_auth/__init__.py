"""HTTP Basic Authentication middleware for FastAPI and Starlette."""

# Primary API — the main entry point
from fastapi_basic_auth.core.config import (
    DEFAULT_REALM,
    BasicAuthConfig,
    Skipper,
    Validator,
    never_skip,
    skip_methods,
    skip_paths,
)

# Core types — for advanced users and type checking
from fastapi_basic_auth.core.decision import Allow, Decision, Reject, authenticate
from fastapi_basic_auth.core.middleware import (
    ACCOUNT_STATE_KEY,
    basic_auth,
    build_middleware_chain,
)
from fastapi_basic_auth.core.parser import Credentials, parse_authorization

# Exceptions — for error handling
from fastapi_basic_auth.exceptions import (
    ERROR_CATEGORY,
    AuthenticationError,
    BasicAuthError,
    ConfigurationError,
    CredentialsRejectedError,
    MalformedCredentialsError,
    MalformedEncodingError,
    MissingCredentialsError,
    ValidationFailedError,
)
from fastapi_basic_auth.fastapi.route import BasicAuthMiddleware, protected_route

__all__ = [
    # Primary API
    "basic_auth",
    "BasicAuthConfig",
    "BasicAuthMiddleware",
    "protected_route",
    # Skippers
    "never_skip",
    "skip_methods",
    "skip_paths",
    # Core types
    "ACCOUNT_STATE_KEY",
    "Allow",
    "Credentials",
    "DEFAULT_REALM",
    "Decision",
    "Reject",
    "Skipper",
    "Validator",
    "authenticate",
    "build_middleware_chain",
    "parse_authorization",
    # Exceptions
    "ERROR_CATEGORY",
    "AuthenticationError",
    "BasicAuthError",
    "ConfigurationError",
    "CredentialsRejectedError",
    "MalformedCredentialsError",
    "MalformedEncodingError",
    "MissingCredentialsError",
    "ValidationFailedError",
]

__version__ = "1.0.0"
