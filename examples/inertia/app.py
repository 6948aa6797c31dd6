"""Inertia example - shared "Library" demo served through the Inertia protocol.

Routes:
- `/` - home page with the featured book
- `/books` - list of books, `stats` is only computed on partial reloads
- `/books/new` - form page, `POST /books` validates and redirects back with errors

Run with ``uvicorn examples.inertia.app:app --reload``.
"""

import os
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup
from msgspec import Struct, to_builtins
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Route

from starlette_inertia import get_inertia, inertia, lazy

here = Path(__file__).parent
templates = Environment(loader=FileSystemLoader(here / "templates"), autoescape=select_autoescape())


class Book(Struct):
    id: int
    title: str
    author: str
    year: int


BOOKS: list[Book] = [
    Book(id=1, title="Async Python", author="C. Developer", year=2024),
    Book(id=2, title="Type-Safe Web", author="J. Dev", year=2025),
    Book(id=3, title="Frontend Patterns", author="A. Designer", year=2023),
]


def render_page(page: str, view_data: dict[str, Any]) -> str:
    """Render the root template around the serialized page.

    The page arrives already escaped for an attribute, so it is marked safe here.
    """
    return templates.get_template("index.html").render(page=Markup(page), **view_data)


async def book_stats() -> dict[str, Any]:
    years = [book.year for book in BOOKS]
    return {"total": len(BOOKS), "newest": max(years), "oldest": min(years)}


async def home(request: Request) -> Response:
    return await get_inertia(request).set_view_data({"title": "Library"}).render("Home", {"featured": BOOKS[0]})


async def books(request: Request) -> Response:
    return await get_inertia(request).render(
        "Books/Index",
        {"books": lambda: to_builtins(BOOKS), "stats": lazy(book_stats)},
    )


async def new_book(request: Request) -> Response:
    return await get_inertia(request).set_view_data({"title": "New book"}).render("Books/New")


async def create_book(request: Request) -> Response:
    form = await request.json()
    errors = {field: "This field is required." for field in ("title", "author") if not form.get(field)}
    if errors:
        return get_inertia(request).set_errors(errors).redirect()
    BOOKS.append(Book(id=len(BOOKS) + 1, title=str(form["title"]), author=str(form["author"]), year=2025))
    return get_inertia(request).redirect("/books")


app = Starlette(
    routes=[
        Route("/", home),
        Route("/books", books),
        Route("/books/new", new_book),
        Route("/books", create_book, methods=["POST"]),
    ],
    middleware=[inertia(render_page, asset_version=os.getenv("INERTIA_ASSET_VERSION", "dev"))],
    debug=True,
)
