from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING
from urllib.parse import unquote

from starlette_inertia._utils import InertiaHeaders

__all__ = ("InertiaDetails",)


if TYPE_CHECKING:
    from starlette.requests import HTTPConnection


class InertiaDetails:
    """InertiaDetails holds all the values sent by Inertia client in headers and provide convenient properties."""

    def __init__(self, connection: HTTPConnection) -> None:
        """Initialize :class:`InertiaDetails`"""
        self.connection = connection

    def _get_header_value(self, name: InertiaHeaders) -> str | None:
        """Parse request header

        Check for uri encoded header and unquotes it in readable format.
        """

        if value := self.connection.headers.get(name.value.lower()):
            is_uri_encoded = self.connection.headers.get(f"{name.value.lower()}-uri-autoencoded") == "true"
            return unquote(value) if is_uri_encoded else value
        return None

    def __bool__(self) -> bool:
        """Check if request is sent by an Inertia client.

        Any non-empty ``X-Inertia`` value counts.
        """
        return self._get_header_value(InertiaHeaders.ENABLED) is not None

    @cached_property
    def version(self) -> str | None:
        """Asset version cached by the client."""
        return self._get_header_value(InertiaHeaders.VERSION)

    @cached_property
    def partial_component(self) -> str | None:
        """Component targeted by a partial reload."""
        return self._get_header_value(InertiaHeaders.PARTIAL_COMPONENT)

    @cached_property
    def partial_data(self) -> list[str] | None:
        """Prop keys requested by a partial reload."""
        value = self._get_header_value(InertiaHeaders.PARTIAL_DATA)
        if value is None:
            return None
        return [key for key in (k.strip() for k in value.split(",")) if key]

    @cached_property
    def referer(self) -> str | None:
        """Page the request originated from."""
        return self._get_header_value(InertiaHeaders.REFERER)

    def is_partial_render(self, component: str) -> bool:
        """Return whether the request is a partial reload of ``component``."""
        return self.partial_data is not None and self.partial_component == component
