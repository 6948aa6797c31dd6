from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Sequence

import pytest
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.testclient import TestClient

from starlette_inertia import InertiaConfig, InertiaMiddleware

if TYPE_CHECKING:
    from starlette.routing import BaseRoute

ASSET_VERSION = "1.0"

CreateTestClient = Callable[..., TestClient]


@pytest.fixture
def inertia_config(html_renderer: Any) -> InertiaConfig:
    return InertiaConfig(html=html_renderer, asset_version=ASSET_VERSION)


@pytest.fixture
def create_test_client(inertia_config: InertiaConfig) -> CreateTestClient:
    def _create(routes: Sequence[BaseRoute], config: InertiaConfig | None = None) -> TestClient:
        app = Starlette(
            routes=list(routes),
            middleware=[Middleware(InertiaMiddleware, config=config or inertia_config)],
        )
        return TestClient(app, follow_redirects=False)

    return _create


@pytest.fixture
def make_request() -> Callable[..., Request]:
    def _make(
        method: str = "GET",
        path: str = "/",
        headers: dict[str, str] | None = None,
        query_string: bytes = b"",
    ) -> Request:
        return Request(
            {
                "type": "http",
                "method": method,
                "scheme": "http",
                "server": ("testserver", 80),
                "root_path": "",
                "path": path,
                "query_string": query_string,
                "headers": [(k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in (headers or {}).items()],
            },
        )

    return _make
