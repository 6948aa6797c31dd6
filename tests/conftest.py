from __future__ import annotations

from typing import Any

import pytest
from jinja2 import DictLoader, Environment, select_autoescape
from markupsafe import Markup

ROOT_TEMPLATE = """<!DOCTYPE html>
<html>
  <head><title>{{ title | default("Inertia") }}</title></head>
  <body><div id="app" data-page="{{ page }}"></div></body>
</html>"""


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def template_env() -> Environment:
    return Environment(
        loader=DictLoader({"index.html": ROOT_TEMPLATE}),
        autoescape=select_autoescape(),
    )


@pytest.fixture
def html_renderer(template_env: Environment) -> Any:
    def render(page: str, view_data: dict[str, Any]) -> str:
        return template_env.get_template("index.html").render(page=Markup(page), **view_data)

    return render
