from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable

from starlette_inertia.exceptions import ImproperlyConfiguredError

if TYPE_CHECKING:
    from starlette_inertia.types import HtmlRenderer

__all__ = ("InertiaConfig",)

DEFAULT_ERROR_COOKIE = "inertiaErrors"


@dataclass
class InertiaConfig:
    """Configuration for InertiaJS support.

    To enable Inertia, pass an instance of this class to
    :class:`InertiaMiddleware <starlette_inertia.middleware.InertiaMiddleware>` or use
    :func:`inertia <starlette_inertia.middleware.inertia>` to build the middleware entry.
    """

    html: HtmlRenderer | None = None
    """Render function for full page visits.

    It is called with the serialized page object (quotes escaped for use inside an HTML attribute)
    and the view data collected for the request, and returns the final markup.
    """
    asset_version: str = field(default_factory=lambda: os.getenv("INERTIA_ASSET_VERSION", "1"))
    """Current version of the client side assets.

    Inertia requests sent with a different ``X-Inertia-Version`` trigger a hard visit.
    """
    error_cookie_name: str = DEFAULT_ERROR_COOKIE
    """Name of the cookie used to carry validation errors across a redirect."""
    state_key: str = "inertia"
    """Attribute on ``request.state`` where the request's Inertia context is stored."""
    enc_hook: Callable[[Any], Any] | None = None
    """Optional ``msgspec`` encoding hook for prop values msgspec can't serialize natively."""

    def __post_init__(self) -> None:
        """Ensure a renderer and a version are configured."""
        if self.html is None or not callable(self.html):
            msg = "An `html` render function is required for Inertia full page visits."
            raise ImproperlyConfiguredError(msg)
        if not isinstance(self.asset_version, str):
            self.asset_version = str(self.asset_version)
        if not self.error_cookie_name:
            msg = "error_cookie_name cannot be empty."
            raise ImproperlyConfiguredError(msg)
