from __future__ import annotations

from starlette_inertia.__metadata__ import __version__
from starlette_inertia._utils import InertiaHeaders
from starlette_inertia.config import InertiaConfig
from starlette_inertia.exceptions import (
    ImproperlyConfiguredError,
    InertiaError,
    MissingInertiaContextError,
    ResponseAlreadySentError,
)
from starlette_inertia.middleware import InertiaMiddleware, get_inertia, inertia
from starlette_inertia.props import LazyProp, PropKind, lazy
from starlette_inertia.request import InertiaDetails
from starlette_inertia.response import (
    InertiaBack,
    InertiaContext,
    InertiaExternalRedirect,
    InertiaRedirect,
    InertiaResponse,
)
from starlette_inertia.types import PageProps

__all__ = (
    "ImproperlyConfiguredError",
    "InertiaBack",
    "InertiaConfig",
    "InertiaContext",
    "InertiaDetails",
    "InertiaError",
    "InertiaExternalRedirect",
    "InertiaHeaders",
    "InertiaMiddleware",
    "InertiaRedirect",
    "InertiaResponse",
    "LazyProp",
    "MissingInertiaContextError",
    "PageProps",
    "PropKind",
    "ResponseAlreadySentError",
    "get_inertia",
    "inertia",
    "__version__",
    "lazy",
)
