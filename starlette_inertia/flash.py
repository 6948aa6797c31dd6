"""Error flash carried across a redirect in a one-shot cookie.

The errors are written by :meth:`InertiaContext.set_errors <starlette_inertia.response.InertiaContext.set_errors>`
and read, then cleared, by the next request that renders a page.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable
from urllib.parse import quote, unquote

import msgspec

from starlette_inertia.config import DEFAULT_ERROR_COOKIE

if TYPE_CHECKING:
    from starlette.requests import HTTPConnection

__all__ = (
    "ErrorFlash",
    "decode_errors",
    "encode_errors",
    "error_cookie",
    "expired_error_cookie",
    "read_error_flash",
)

logger = logging.getLogger("starlette_inertia")

EXPIRED = "Thu, 01 Jan 1970 00:00:00 GMT"
COOKIE_ATTRIBUTES = "HttpOnly; SameSite=Lax"


def encode_errors(errors: Any, enc_hook: Callable[[Any], Any] | None = None) -> str:
    """Serialize errors to a cookie safe string."""
    return quote(msgspec.json.encode(errors, enc_hook=enc_hook).decode(), safe="")


def decode_errors(value: str) -> Any:
    """Parse a value produced by :func:`encode_errors`.

    Raises:
        msgspec.DecodeError: The value is not valid JSON once unquoted.
    """
    return msgspec.json.decode(unquote(value))


def error_cookie(errors: Any, name: str = DEFAULT_ERROR_COOKIE, enc_hook: Callable[[Any], Any] | None = None) -> str:
    """Return the ``Set-Cookie`` value storing ``errors``."""
    return f"{name}={encode_errors(errors, enc_hook)}; {COOKIE_ATTRIBUTES}"


def expired_error_cookie(name: str = DEFAULT_ERROR_COOKIE) -> str:
    """Return the ``Set-Cookie`` value removing the error cookie."""
    return f"{name}=; {COOKIE_ATTRIBUTES}; expires={EXPIRED}"


class ErrorFlash:
    """Errors read from the request's error cookie.

    ``present`` tells whether the cookie was sent at all. ``decoded`` tells whether
    its value parsed, in which case ``errors`` holds it, JSON ``null`` included.
    """

    __slots__ = ("decoded", "errors", "name", "present")

    def __init__(self, name: str, present: bool = False, errors: Any = None, decoded: bool = False) -> None:
        self.name = name
        self.present = present
        self.errors = errors
        self.decoded = decoded

    @property
    def is_valid(self) -> bool:
        return self.present and self.decoded

    def clear_cookie(self) -> str:
        return expired_error_cookie(self.name)


def read_error_flash(connection: HTTPConnection, name: str = DEFAULT_ERROR_COOKIE) -> ErrorFlash:
    """Read the error flash sent with the request.

    A cookie that fails to decode is dropped: the returned flash is still
    ``present`` so the caller clears it, but carries no errors.
    """
    raw = connection.cookies.get(name)
    if not raw:
        return ErrorFlash(name)
    try:
        errors = decode_errors(raw)
    except msgspec.DecodeError:
        logger.warning("Discarding malformed `%s` cookie for %s", name, connection.url.path)
        return ErrorFlash(name, present=True)
    return ErrorFlash(name, present=True, errors=errors, decoded=True)
