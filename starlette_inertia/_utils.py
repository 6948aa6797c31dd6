from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from starlette.datastructures import URL
    from starlette.requests import HTTPConnection


class InertiaHeaders(str, Enum):
    """Enum for Inertia Headers"""

    ENABLED = "X-Inertia"
    VERSION = "X-Inertia-Version"
    PARTIAL_DATA = "X-Inertia-Partial-Data"
    PARTIAL_COMPONENT = "X-Inertia-Partial-Component"
    LOCATION = "X-Inertia-Location"
    REFERER = "Referer"


def get_enabled_header(enabled: bool = True) -> dict[str, str]:
    """True if inertia is enabled."""
    return {InertiaHeaders.ENABLED.value: "true" if enabled else "false"}


def get_location_header(location: str) -> dict[str, str]:
    """Return headers telling the client to visit ``location`` with a full page load."""
    return {InertiaHeaders.LOCATION.value: location}


def get_request_location(connection: HTTPConnection) -> str:
    """Return the path and query string the client requested."""
    url: URL = connection.url
    return f"{url.path}?{url.query}" if url.query else url.path
