"""Starlette-Inertia exception classes."""

from __future__ import annotations

__all__ = (
    "ImproperlyConfiguredError",
    "InertiaError",
    "MissingInertiaContextError",
    "ResponseAlreadySentError",
)


class InertiaError(Exception):
    """Base exception for Starlette-Inertia related errors."""


class ImproperlyConfiguredError(InertiaError):
    """Raised when the Inertia configuration is incomplete or invalid."""


class MissingInertiaContextError(InertiaError):
    """Raised when a request did not pass through the Inertia middleware."""

    def __init__(self, state_key: str) -> None:
        super().__init__(
            f"No Inertia context found under request.state.{state_key}. "
            "Did you forget to add the Inertia middleware to the application?",
        )


class ResponseAlreadySentError(InertiaError):
    """Raised when an Inertia context is used after its response was emitted."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Cannot call {operation!r}: the response for this request was already emitted.")
