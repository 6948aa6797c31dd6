from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Mapping

import msgspec
from starlette.datastructures import MutableHeaders
from starlette.responses import RedirectResponse, Response
from starlette.status import HTTP_200_OK, HTTP_302_FOUND, HTTP_303_SEE_OTHER, HTTP_409_CONFLICT

from starlette_inertia._utils import get_enabled_header, get_location_header, get_request_location
from starlette_inertia.exceptions import ResponseAlreadySentError
from starlette_inertia.flash import error_cookie, read_error_flash
from starlette_inertia.props import LazyProp, lazy, merge_props, resolve_props
from starlette_inertia.request import InertiaDetails
from starlette_inertia.types import PageProps

if TYPE_CHECKING:
    from starlette.requests import HTTPConnection, Request

    from starlette_inertia.config import InertiaConfig
    from starlette_inertia.types import PropProducer

__all__ = (
    "InertiaBack",
    "InertiaContext",
    "InertiaExternalRedirect",
    "InertiaRedirect",
    "InertiaResponse",
    "ResponseState",
    "encode_page",
    "escape_page",
)

logger = logging.getLogger("starlette_inertia")

REDIRECT_SEE_OTHER_METHODS = frozenset({"PUT", "PATCH", "DELETE"})


def encode_page(page: PageProps[Any], enc_hook: Any = None) -> bytes:
    """Serialize a page object to JSON."""
    return msgspec.json.encode(page, enc_hook=enc_hook)


def escape_page(serialized_page: str) -> str:
    """Escape quotes so the page object can be placed inside an HTML attribute.

    The result is a plain string, template renderers mark it safe themselves.
    """
    return serialized_page.replace('"', "&quot;").replace("'", "&#039;")


@dataclass
class ResponseState:
    """Response settings collected while a request is handled."""

    headers: MutableHeaders = field(default_factory=MutableHeaders)
    view_data: Dict[str, Any] = field(default_factory=dict)
    status_code: int = HTTP_200_OK
    shared_props: Dict[str, Any] = field(default_factory=dict)


class InertiaResponse(Response):
    """Inertia protocol response carrying the page object as JSON."""

    def __init__(
        self,
        page: PageProps[Any],
        *,
        status_code: int = HTTP_200_OK,
        headers: Mapping[str, str] | None = None,
        enc_hook: Any = None,
    ) -> None:
        """Serialize the page and apply the protocol headers.

        Args:
            page: The resolved page object.
            status_code: A value for the response HTTP status code.
            headers: Headers configured for the request. ``Content-Type``, ``X-Inertia``
                and ``Vary`` always take the protocol values.
            enc_hook: Optional ``msgspec`` hook for unsupported prop types.
        """
        response_headers = MutableHeaders(headers=dict(headers or {}))
        response_headers.update(
            {"Content-Type": "application/json", **get_enabled_header(), "Vary": "Accept"},
        )
        super().__init__(
            content=encode_page(page, enc_hook),
            status_code=status_code,
            headers=response_headers,
        )


class InertiaExternalRedirect(Response):
    """Client side hard visit."""

    def __init__(self, connection: HTTPConnection, redirect_to: str | None = None) -> None:
        """Set status code to 409 (required by Inertia) and pass the location to visit.

        Args:
            connection: The current connection.
            redirect_to: Location the client must visit, defaults to the requested path.
        """
        location = redirect_to if redirect_to is not None else get_request_location(connection)
        super().__init__(
            content=b"",
            status_code=HTTP_409_CONFLICT,
            headers=get_location_header(location),
        )


class InertiaRedirect(RedirectResponse):
    """Redirect following a form submission or a visit.

    PUT, PATCH and DELETE requests get a ``303 See Other`` so the client follows
    up with a GET, everything else a ``302 Found``.
    """

    def __init__(
        self,
        connection: HTTPConnection,
        redirect_to: str,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        method = connection.scope.get("method", "GET")
        super().__init__(
            url=redirect_to,
            status_code=HTTP_303_SEE_OTHER if method in REDIRECT_SEE_OTHER_METHODS else HTTP_302_FOUND,
            headers=dict(headers) if headers is not None else None,
        )


class InertiaBack(InertiaRedirect):
    """Redirect back to the page the request came from."""

    def __init__(self, connection: HTTPConnection, headers: Mapping[str, str] | None = None) -> None:
        referer = InertiaDetails(connection).referer or str(connection.base_url)
        super().__init__(connection, redirect_to=referer, headers=headers)


class InertiaContext:
    """Request scoped Inertia page builder.

    Configuration methods return the context so calls can be chained, for example
    ``await inertia.share_props({"user": user}).set_status_code(201).render("Users/Show")``.
    """

    __slots__ = ("_sent", "config", "details", "request", "state")

    def __init__(self, request: Request, config: InertiaConfig) -> None:
        self.request = request
        self.config = config
        self.details = InertiaDetails(request)
        self.state = ResponseState()
        self._sent = False

    @property
    def is_sent(self) -> bool:
        """Whether :meth:`render` or :meth:`redirect` already produced the response."""
        return self._sent

    def _ensure_open(self, operation: str) -> None:
        if self._sent:
            raise ResponseAlreadySentError(operation)

    def set_headers(self, headers: Mapping[str, str]) -> InertiaContext:
        """Merge headers into the response headers, later values win."""
        self._ensure_open("set_headers")
        self.state.headers.update(headers)
        return self

    def set_errors(self, errors: Any) -> InertiaContext:
        """Flash errors to the next rendered page.

        The errors travel in a cookie which replaces any ``Set-Cookie`` header set
        before. Empty errors are ignored.
        """
        self._ensure_open("set_errors")
        if errors:
            self.state.headers["Set-Cookie"] = error_cookie(
                errors,
                name=self.config.error_cookie_name,
                enc_hook=self.config.enc_hook,
            )
        return self

    def set_view_data(self, view_data: Mapping[str, Any]) -> InertiaContext:
        """Merge data passed to the HTML renderer on full page visits."""
        self._ensure_open("set_view_data")
        self.state.view_data.update(view_data)
        return self

    def set_status_code(self, status_code: int) -> InertiaContext:
        self._ensure_open("set_status_code")
        self.state.status_code = status_code
        return self

    def share_props(self, props: Mapping[str, Any]) -> InertiaContext:
        """Merge props sent with every page rendered for this request."""
        self._ensure_open("share_props")
        self.state.shared_props.update(props)
        return self

    @staticmethod
    def lazy(producer: PropProducer) -> LazyProp[Any]:
        """Shortcut for :func:`starlette_inertia.props.lazy`."""
        return lazy(producer)

    async def build_page(self, component: str, props: Mapping[str, Any] | None = None) -> PageProps[Any]:
        """Resolve the page object for ``component``.

        Consumes the error flash sent with the request. When one is found the
        response headers are replaced by the header expiring it.
        """
        page = PageProps[Any](
            version=self.config.asset_version,
            component=component,
            url=get_request_location(self.request),
        )
        flash = read_error_flash(self.request, self.config.error_cookie_name)
        if flash.present:
            if flash.is_valid:
                page.props["errors"] = flash.errors
            self.state.headers = MutableHeaders(headers={"Set-Cookie": flash.clear_cookie()})

        partial_data = self.details.partial_data if self.details.is_partial_render(component) else None
        if partial_data is not None:
            logger.debug("Partial reload of %s requested props %s", component, partial_data)
        page.props.update(await resolve_props(merge_props(self.state.shared_props, props), partial_data))
        return page

    async def render(self, component: str, props: Mapping[str, Any] | None = None) -> Response:
        """Render ``component`` as a JSON page object or a full HTML document.

        Args:
            component: Name of the client side page component.
            props: Page props, merged over the shared props.

        Returns:
            The response to send.
        """
        self._ensure_open("render")
        page = await self.build_page(component, props)
        self._sent = True
        if self.details:
            return InertiaResponse(
                page,
                status_code=self.state.status_code,
                headers=self.state.headers,
                enc_hook=self.config.enc_hook,
            )

        markup = self.config.html(escape_page(encode_page(page, self.config.enc_hook).decode()), self.state.view_data)  # type: ignore[misc]
        if inspect.isawaitable(markup):
            markup = await markup
        headers = MutableHeaders(headers=dict(self.state.headers))
        headers["Content-Type"] = "text/html"
        return Response(content=markup, status_code=self.state.status_code, headers=headers)

    def redirect(self, url: str | None = None) -> Response:
        """Redirect to ``url``, or back to the referring page when omitted."""
        self._ensure_open("redirect")
        self._sent = True
        if url is None:
            return InertiaBack(self.request, headers=self.state.headers)
        return InertiaRedirect(self.request, redirect_to=url, headers=self.state.headers)
