"""Configuration for the basic auth middleware.

Built once at startup and never mutated afterwards, so it can be shared
by any number of concurrent requests without locking.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from starlette.requests import Request

from fastapi_basic_auth.exceptions import CHALLENGE_TEMPLATE, ConfigurationError

DEFAULT_REALM = "basic auth tips"

Validator = Callable[[str, str, Request], bool | Awaitable[bool]]
Skipper = Callable[[Request], bool]


def never_skip(request: Request) -> bool:
    """Default skipper: every request is authenticated."""
    return False


def skip_paths(*paths: str) -> Skipper:
    """Build a skipper exempting requests whose path matches exactly.

    Example:
        basic_auth(validate=check, skipper=skip_paths("/health", "/ready"))
    """
    exempt = frozenset(paths)

    def skipper(request: Request) -> bool:
        return request.url.path in exempt

    skipper.__name__ = f"skip_paths{tuple(sorted(exempt))}"
    return skipper


def skip_methods(*methods: str) -> Skipper:
    """Build a skipper exempting the given HTTP methods (case-insensitive)."""
    exempt = frozenset(m.upper() for m in methods)

    def skipper(request: Request) -> bool:
        return request.method.upper() in exempt

    skipper.__name__ = f"skip_methods{tuple(sorted(exempt))}"
    return skipper


@dataclass(frozen=True)
class BasicAuthConfig:
    """Immutable basic auth settings.

    Attributes:
        validate: Called as ``validate(account, password, request)``. Returns
            True to accept the credentials and False to reject them; raises to
            signal that validation itself failed. May be sync or async.
        realm: Protection space announced in the ``WWW-Authenticate`` challenge.
            Empty falls back to DEFAULT_REALM.
        skipper: Predicate exempting a request from authentication.
            None means nothing is skipped.

    Raises:
        ConfigurationError: If validate is missing or not callable, or if
            skipper is given but not callable.
    """

    validate: Validator | None = None
    realm: str = DEFAULT_REALM
    skipper: Skipper | None = None

    def __post_init__(self) -> None:
        """Fail fast on unusable settings and apply defaults."""
        if self.validate is None:
            raise ConfigurationError("basic auth requires a validate function")
        if not callable(self.validate):
            raise ConfigurationError(
                f"validate must be callable, got {type(self.validate).__name__}"
            )
        if self.skipper is not None and not callable(self.skipper):
            raise ConfigurationError(
                f"skipper must be callable, got {type(self.skipper).__name__}"
            )

        # frozen dataclass: defaults are applied through object.__setattr__
        if not self.realm:
            object.__setattr__(self, "realm", DEFAULT_REALM)
        if self.skipper is None:
            object.__setattr__(self, "skipper", never_skip)

    @property
    def challenge(self) -> str:
        """Value of the ``WWW-Authenticate`` header sent with a 401 challenge."""
        return CHALLENGE_TEMPLATE.format(realm=self.realm)

    def should_skip(self, request: Request) -> bool:
        """Return True when the skipper exempts this request."""
        skipper: Any = self.skipper
        return bool(skipper(request))
