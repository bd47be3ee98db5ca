"""Authorization header parser for the Basic scheme.

Turns a raw header value into a credential pair:
- "Basic dHJlZS54aWU6cGFzc3dvcmQ=" -> Credentials("tree.xie", "password")
- missing header or other scheme -> MissingCredentialsError
- token that is not strict Base64 -> MalformedEncodingError
- decoded token without ":" -> MalformedCredentialsError
"""

import binascii
from dataclasses import dataclass, field

from fastapi_basic_auth.exceptions import (
    MalformedCredentialsError,
    MalformedEncodingError,
    MissingCredentialsError,
)

SCHEME_PREFIX = "basic "

_SEPARATOR = ":"


@dataclass(frozen=True)
class Credentials:
    """An account/password pair taken from one request."""

    account: str
    password: str = field(repr=False)


def extract_token(header: str | None, *, realm: str) -> str:
    """Return the token following the ``basic`` scheme prefix.

    The prefix is matched case-insensitively.

    Args:
        header: Raw Authorization header value, or None if absent.
        realm: Realm announced in the challenge if no token is found.

    Raises:
        MissingCredentialsError: If the header is absent, uses another
            scheme, or carries an empty token.
    """
    if not header or header[: len(SCHEME_PREFIX)].lower() != SCHEME_PREFIX:
        raise MissingCredentialsError(realm)

    token = header[len(SCHEME_PREFIX) :].strip()
    if not token:
        raise MissingCredentialsError(realm)
    return token


def decode_token(token: str) -> str:
    """Decode a standard, padded Base64 token into text.

    Decoding is strict: characters outside the standard alphabet, missing
    padding and data or padding past the final block are all rejected.
    The bytes are read as UTF-8, with undecodable bytes kept as surrogate
    escapes, so any byte string decodes and the separator check decides.

    Raises:
        MalformedEncodingError: With the decoder's own message, unmodified.
    """
    try:
        raw = binascii.a2b_base64(token, strict_mode=True)
    except ValueError as exc:
        raise MalformedEncodingError(str(exc)) from exc
    return raw.decode("utf-8", errors="surrogateescape")


def split_credentials(decoded: str) -> Credentials:
    """Split ``account:password`` at the first colon.

    Everything after the first colon is the password, colons included.

    Raises:
        MalformedCredentialsError: If there is no colon.
    """
    account, sep, password = decoded.partition(_SEPARATOR)
    if not sep:
        raise MalformedCredentialsError()
    return Credentials(account=account, password=password)


def parse_authorization(header: str | None, *, realm: str) -> Credentials:
    """Parse a Basic Authorization header into Credentials.

    Args:
        header: Raw Authorization header value, or None if absent.
        realm: Realm announced in the challenge if no credentials were sent.

    Returns:
        The decoded credential pair.

    Raises:
        MissingCredentialsError: No usable Basic header.
        MalformedEncodingError: Token is not valid, padded standard Base64.
        MalformedCredentialsError: Decoded token lacks a ``:`` separator.

    Examples:
        "Basic YTpi" -> Credentials(account="a", password="b")
        "basic bjph" -> Credentials(account="n", password="b")
    """
    token = extract_token(header, realm=realm)
    return split_credentials(decode_token(token))
