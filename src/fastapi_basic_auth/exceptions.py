"""Exception hierarchy for basic authentication errors."""

ERROR_CATEGORY = "fastapi-basic-auth"

UNAUTHORIZED_MESSAGE = "unAuthorized"

CHALLENGE_TEMPLATE = 'basic realm="{realm}"'


class BasicAuthError(Exception):
    """Base exception for all basic authentication errors.

    This is the parent class for all exceptions raised by the
    fastapi-basic-auth package. Catching this exception will catch
    both configuration and per-request errors.

    Example:
        try:
            middleware = basic_auth(validate=None)
        except BasicAuthError as e:
            logger.error(f"Failed to configure basic auth: {e}")
    """


class ConfigurationError(BasicAuthError):
    """Raised when the middleware is configured without a usable validator.

    This exception is raised while the middleware is being built, never
    while a request is handled. It signals a programming error that must
    stop the application from starting:
        - No validator supplied
        - Validator is not callable
        - Skipper is not callable

    Example:
        ConfigurationError("basic auth requires a validate function")
    """


class AuthenticationError(BasicAuthError):
    """A request rejected by the basic auth middleware.

    Carries everything needed to render the rejection: the HTTP status,
    the message, the category tag identifying the source of the failure
    and any response headers.

    ``str(error)`` renders the response body, ``category=<tag>, message=<text>``,
    or just ``message=<text>`` when the error has no category.

    Validators may raise this exception directly to control the status code
    and body of a failure. It is then surfaced unchanged.

    Example:
        AuthenticationError("account is invalid", status_code=400, category=None)
    """

    status_code: int = 400

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        category: str | None = ERROR_CATEGORY,
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.category = category
        self.headers = dict(headers or {})

    def __str__(self) -> str:
        if self.category:
            return f"category={self.category}, message={self.message}"
        return f"message={self.message}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(status_code={self.status_code}, "
            f"category={self.category!r}, message={self.message!r})"
        )


class MissingCredentialsError(AuthenticationError):
    """Raised when the Authorization header is absent or not a Basic header.

    The only rejection that carries the ``WWW-Authenticate`` challenge,
    prompting the client to supply credentials.
    """

    status_code = 401

    def __init__(self, realm: str) -> None:
        super().__init__(
            UNAUTHORIZED_MESSAGE,
            headers={"WWW-Authenticate": CHALLENGE_TEMPLATE.format(realm=realm)},
        )
        self.realm = realm


class MalformedEncodingError(AuthenticationError):
    """Raised when the Basic token is not valid Base64.

    The decoder's own diagnostic is used as the message, unmodified.
    """

    status_code = 400


class MalformedCredentialsError(AuthenticationError):
    """Raised when the decoded token has no ``:`` separator."""

    status_code = 401

    def __init__(self) -> None:
        super().__init__(UNAUTHORIZED_MESSAGE)


class CredentialsRejectedError(AuthenticationError):
    """Raised when the validator reports the credentials as wrong."""

    status_code = 401

    def __init__(self) -> None:
        super().__init__(UNAUTHORIZED_MESSAGE)


class ValidationFailedError(AuthenticationError):
    """Raised when the validator itself fails.

    Distinguishes an operational failure (e.g. an unreachable user store)
    from wrong credentials. The validator's error message is surfaced
    verbatim and the original exception is kept as ``__cause__``.
    """

    status_code = 400
