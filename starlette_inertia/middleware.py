from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from starlette.middleware import Middleware
from starlette.requests import HTTPConnection, Request

from starlette_inertia.config import InertiaConfig
from starlette_inertia.exceptions import MissingInertiaContextError
from starlette_inertia.request import InertiaDetails
from starlette_inertia.response import InertiaContext, InertiaExternalRedirect

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Receive, Scope, Send

    from starlette_inertia.types import HtmlRenderer

__all__ = (
    "InertiaMiddleware",
    "get_inertia",
    "inertia",
    "redirect_on_asset_version_mismatch",
)

logger = logging.getLogger("starlette_inertia")

STATE_KEY_SCOPE_KEY = "starlette_inertia.state_key"
"""ASGI scope entry recording under which ``request.state`` key the context lives."""


def redirect_on_asset_version_mismatch(
    connection: HTTPConnection,
    asset_version: str,
) -> InertiaExternalRedirect | None:
    """Return a hard visit response when the client's assets are stale.

    Only Inertia ``GET`` requests are checked, writes always go through so a
    redirect after the write can happen. A missing version header is a mismatch.

    Returns:
        An InertiaExternalRedirect when versions differ, otherwise None.
    """
    if connection.scope.get("method") != "GET":
        return None
    details = InertiaDetails(connection)
    if not details or details.version == asset_version:
        return None
    logger.debug(
        "Asset version mismatch for %s: client sent %r, current is %r",
        connection.url.path,
        details.version,
        asset_version,
    )
    return InertiaExternalRedirect(connection)


class InertiaMiddleware:
    """Middleware for handling Inertia.js protocol requirements.

    This middleware:
    1. Detects version mismatches between client and server assets
    2. Returns 409 Conflict with X-Inertia-Location header when versions differ
    3. Attaches an :class:`InertiaContext` to ``request.state`` for the route handlers
    """

    def __init__(self, app: ASGIApp, config: InertiaConfig) -> None:
        self.app = app
        self.config = config

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return
        request = Request(scope, receive)
        redirect = redirect_on_asset_version_mismatch(request, self.config.asset_version)
        if redirect is not None:
            await redirect(scope, receive, send)
            return
        scope[STATE_KEY_SCOPE_KEY] = self.config.state_key
        scope.setdefault("state", {})[self.config.state_key] = InertiaContext(request, self.config)
        await self.app(scope, receive, send)


def inertia(html: HtmlRenderer, asset_version: str | None = None, **kwargs: Any) -> Middleware:
    """Build the middleware entry enabling Inertia on a Starlette application.

    Args:
        html: Render function for full page visits.
        asset_version: Current asset version, see :attr:`InertiaConfig.asset_version`.
        **kwargs: Extra :class:`InertiaConfig` settings.

    Returns:
        A middleware definition for ``Starlette(middleware=[...])``.
    """
    if asset_version is not None:
        kwargs["asset_version"] = asset_version
    return Middleware(InertiaMiddleware, config=InertiaConfig(html=html, **kwargs))


def get_inertia(connection: HTTPConnection, state_key: str | None = None) -> InertiaContext:
    """Return the Inertia context of the current request.

    Args:
        connection: The current connection.
        state_key: ``request.state`` key holding the context. Defaults to the key the
            middleware was configured with.

    Raises:
        MissingInertiaContextError: The request did not go through :class:`InertiaMiddleware`.
    """
    if state_key is None:
        state_key = connection.scope.get(STATE_KEY_SCOPE_KEY, "inertia")
    context = connection.scope.get("state", {}).get(state_key)
    if not isinstance(context, InertiaContext):
        raise MissingInertiaContextError(state_key)
    return context
