"""Per-request authentication decision.

Runs the Basic auth state machine for one request and returns an explicit
outcome: Allow (hand the request on) or Reject (respond immediately).
Per-request failures are converted to Reject here and never raised.
"""

import inspect
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

from fastapi_basic_auth.core.config import BasicAuthConfig
from fastapi_basic_auth.core.parser import parse_authorization
from fastapi_basic_auth.exceptions import (
    AuthenticationError,
    CredentialsRejectedError,
    MalformedCredentialsError,
    MalformedEncodingError,
    MissingCredentialsError,
    ValidationFailedError,
)

logger = logging.getLogger(__name__)


class RejectReason(Enum):
    """Why a request was rejected, used for logging."""

    MISSING_CREDENTIALS = "missing_credentials"
    MALFORMED_ENCODING = "malformed_encoding"
    MALFORMED_CREDENTIALS = "malformed_credentials"
    CREDENTIALS_REJECTED = "credentials_rejected"
    VALIDATION_FAILED = "validation_failed"

    @classmethod
    def of(cls, error: AuthenticationError) -> "RejectReason":
        """Classify an authentication error."""
        match error:
            case MissingCredentialsError():
                return cls.MISSING_CREDENTIALS
            case MalformedEncodingError():
                return cls.MALFORMED_ENCODING
            case MalformedCredentialsError():
                return cls.MALFORMED_CREDENTIALS
            case CredentialsRejectedError():
                return cls.CREDENTIALS_REJECTED
            case _:
                return cls.VALIDATION_FAILED


@dataclass(frozen=True)
class Allow:
    """The request may proceed to the next handler.

    Attributes:
        account: The authenticated account, or None if the request was skipped.
    """

    account: str | None = None


@dataclass(frozen=True)
class Reject:
    """The request is answered immediately with an error response."""

    status_code: int
    body: str
    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_error(cls, error: AuthenticationError) -> "Reject":
        """Build the rejection described by an authentication error."""
        return cls(
            status_code=error.status_code,
            body=str(error),
            headers=dict(error.headers),
        )

    def to_response(self) -> Response:
        """Render as a plain-text Starlette response."""
        return PlainTextResponse(
            self.body,
            status_code=self.status_code,
            headers=self.headers,
        )


Decision = Allow | Reject


async def authenticate(config: BasicAuthConfig, request: Request) -> Decision:
    """Decide whether a request carries acceptable Basic credentials.

    Steps, each of which may end the evaluation:
    1. Skipped requests are allowed without looking at the header.
    2. A missing or non-Basic header is rejected with 401 and a challenge.
    3. A token that does not decode is rejected with 400.
    4. A decoded token without ``:`` is rejected with 401.
    5. The validator decides: True allows, False rejects with 401,
       an exception rejects with 400.

    Args:
        config: The middleware configuration.
        request: The incoming request, passed unchanged to the validator.

    Returns:
        Allow or Reject.
    """
    if config.should_skip(request):
        logger.debug("Skipped basic auth", extra={"path": request.url.path})
        return Allow()

    try:
        credentials = parse_authorization(
            request.headers.get("authorization"),
            realm=config.realm,
        )
        if not await _run_validator(config, credentials.account, credentials.password, request):
            raise CredentialsRejectedError()
    except AuthenticationError as error:
        return _reject(error, request)

    return Allow(account=credentials.account)


async def _run_validator(
    config: BasicAuthConfig,
    account: str,
    password: str,
    request: Request,
) -> bool:
    """Invoke the validator, converting unexpected failures to ValidationFailedError.

    Sync validators run in the threadpool so a blocking lookup does not hold
    up the event loop. AuthenticationError raised by the validator passes
    through untouched.

    Only the bool True accepts the credentials and only False rejects them.
    Any other return value, truthy or not, is a validator failure.
    """
    validate: Any = config.validate

    try:
        if inspect.iscoroutinefunction(validate):
            result = await validate(account, password, request)
        else:
            result = await run_in_threadpool(validate, account, password, request)
            if inspect.isawaitable(result):
                result = await result
    except AuthenticationError:
        raise
    except Exception as exc:
        logger.warning(
            "Basic auth validator failed",
            extra={"path": request.url.path, "error": str(exc)},
        )
        raise ValidationFailedError(str(exc)) from exc

    if isinstance(result, bool):
        return result

    logger.warning(
        "Basic auth validator returned a non-bool",
        extra={"path": request.url.path, "result_type": type(result).__name__},
    )
    raise ValidationFailedError(f"validate must return a bool, got {type(result).__name__}")


def _reject(error: AuthenticationError, request: Request) -> Reject:
    logger.debug(
        "Rejected basic auth",
        extra={
            "reason": RejectReason.of(error).value,
            "status_code": error.status_code,
            "path": request.url.path,
        },
    )
    return Reject.from_error(error)
