from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Generic, TypeAlias, TypeVar, Union

__all__ = (
    "HtmlRenderer",
    "PageProps",
    "PropProducer",
)


T = TypeVar("T")

HtmlRenderer: TypeAlias = Callable[[str, Dict[str, Any]], Union[str, Awaitable[str]]]
"""Render callable receiving the escaped page object and the view data."""
PropProducer: TypeAlias = Callable[[], Union[Any, Awaitable[Any]]]
"""Zero argument callable producing a prop value, optionally asynchronously."""


@dataclass
class PageProps(Generic[T]):
    """Inertia Page Object.

    Field order is the serialized key order.
    """

    version: str
    component: str
    props: Dict[str, T] = field(default_factory=dict)
    url: str = "/"

