"""Prop variants and the partial reload aware prop resolution.

Every prop value handed to :meth:`InertiaContext.render <starlette_inertia.response.InertiaContext.render>`
or :meth:`InertiaContext.share_props <starlette_inertia.response.InertiaContext.share_props>` is one of:

- a literal value, sent as is;
- an eager producer, a zero argument callable (sync or async) evaluated on every render;
- a lazy producer, created with :func:`lazy`, only evaluated when a partial reload asks for it.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, Iterable, Mapping, TypeGuard, TypeVar, cast

import anyio

if TYPE_CHECKING:
    from starlette_inertia.types import PropProducer

__all__ = (
    "LazyProp",
    "Prop",
    "PropKind",
    "classify_prop",
    "is_lazy_prop",
    "lazy",
    "merge_props",
    "resolve_props",
    "select_prop_keys",
)

T = TypeVar("T")

logger = logging.getLogger("starlette_inertia")


class PropKind(str, Enum):
    """Kind of a prop value."""

    LITERAL = "literal"
    EAGER = "eager"
    LAZY = "lazy"


class LazyProp(Generic[T]):
    """A producer that is only evaluated when a partial reload requests its key.

    The wrapper stays callable so it can be used wherever the plain producer was.
    """

    __slots__ = ("_producer",)

    def __init__(self, producer: PropProducer) -> None:
        if isinstance(producer, LazyProp):
            producer = producer.producer
        if not callable(producer):
            msg = f"lazy() expects a zero argument callable, got {type(producer).__name__!r}"
            raise TypeError(msg)
        self._producer = producer

    @property
    def producer(self) -> PropProducer:
        return self._producer

    def __call__(self) -> Any:
        return self._producer()

    def __repr__(self) -> str:
        return f"LazyProp({self._producer!r})"


def lazy(producer: PropProducer) -> LazyProp[Any]:
    """Mark a producer as lazy.

    Lazy props are skipped on full page loads and evaluated only when a partial
    reload of the rendered component names them.

    Args:
        producer: A zero argument callable, sync or async.

    Returns:
        The tagged producer, ready to be used as a prop value.
    """
    return LazyProp(producer)


def is_lazy_prop(value: Any) -> TypeGuard[LazyProp[Any]]:
    """Check if value is a lazy prop.

    Args:
        value: Any value to check

    Returns:
        bool: True if value is a lazy prop
    """
    return isinstance(value, LazyProp)


@dataclass(frozen=True)
class Prop:
    """A prop value tagged with its :class:`PropKind`."""

    kind: PropKind
    value: Any

    async def render(self) -> Any:
        """Return the literal value or the producer's (awaited) result."""
        if self.kind is PropKind.LITERAL:
            return self.value
        result = self.value()
        if inspect.isawaitable(result):
            result = await result
        return result


def classify_prop(value: Any) -> Prop:
    """Tag a raw prop value."""
    if is_lazy_prop(value):
        return Prop(PropKind.LAZY, value.producer)
    if callable(value):
        return Prop(PropKind.EAGER, value)
    return Prop(PropKind.LITERAL, value)


def merge_props(*sources: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge prop sources, later sources win.

    A later value replaces an earlier one as a whole, lazy tag included.
    """
    merged: dict[str, Any] = {}
    for source in sources:
        if source:
            merged.update(source)
    return merged


def select_prop_keys(props: Mapping[str, Any], partial_data: Iterable[str] | None) -> list[str]:
    """Return the keys to resolve.

    In a partial reload only the requested keys that exist are kept, otherwise every key is.
    """
    if partial_data is None:
        return list(props)
    return [key for key in dict.fromkeys(partial_data) if key in props]


async def resolve_props(
    props: Mapping[str, Any],
    partial_data: Iterable[str] | None = None,
) -> dict[str, Any]:
    """Resolve the props sent to the client.

    Args:
        props: The merged shared and page props.
        partial_data: Keys requested by a partial reload of the rendered component,
            ``None`` for a full render.

    Returns:
        The resolved props. Lazy props are left out of full renders.
    """
    is_partial = partial_data is not None
    resolved: dict[str, Any] = {}
    producers: dict[str, Prop] = {}
    keys = select_prop_keys(props, partial_data)

    for key in keys:
        prop = classify_prop(props[key])
        if prop.kind is PropKind.LITERAL:
            resolved[key] = prop.value
        elif prop.kind is PropKind.LAZY and not is_partial:
            continue
        else:
            producers[key] = prop

    if not producers:
        return resolved

    results: dict[str, Any] = {}

    async def _render(key: str, prop: Prop) -> None:
        results[key] = await prop.render()

    try:
        async with anyio.create_task_group() as tg:
            for key, prop in producers.items():
                tg.start_soon(_render, key, prop)
    except BaseExceptionGroup as exc_group:
        if len(exc_group.exceptions) == 1:
            raise cast("BaseException", exc_group.exceptions[0]) from None
        raise
    logger.debug("Evaluated props %s", sorted(results))
    resolved.update(results)
    return {key: resolved[key] for key in keys if key in resolved}
