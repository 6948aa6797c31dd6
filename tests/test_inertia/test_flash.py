from __future__ import annotations

from typing import Any, Callable

import msgspec
import pytest
from starlette.requests import Request

from starlette_inertia.flash import (
    decode_errors,
    encode_errors,
    error_cookie,
    expired_error_cookie,
    read_error_flash,
)


def test_encode_errors_is_cookie_safe() -> None:
    encoded = encode_errors({"email": "must contain ; and ="})

    assert ";" not in encoded
    assert "=" not in encoded
    assert " " not in encoded
    assert decode_errors(encoded) == {"email": "must contain ; and ="}


def test_error_cookie() -> None:
    assert error_cookie({"field": "required"}) == (
        "inertiaErrors=%7B%22field%22%3A%22required%22%7D; HttpOnly; SameSite=Lax"
    )
    assert error_cookie(["x"], name="errors").startswith("errors=%5B%22x%22%5D;")


def test_expired_error_cookie() -> None:
    assert expired_error_cookie() == "inertiaErrors=; HttpOnly; SameSite=Lax; expires=Thu, 01 Jan 1970 00:00:00 GMT"


def test_decode_errors_rejects_invalid_json() -> None:
    with pytest.raises(msgspec.DecodeError):
        decode_errors("%7Bnope")


def test_read_error_flash(make_request: Callable[..., Request]) -> None:
    request = make_request(headers={"cookie": "theme=dark; inertiaErrors=%7B%22a%22%3A%22b%22%7D"})
    flash = read_error_flash(request)

    assert flash.present
    assert flash.is_valid
    assert flash.errors == {"a": "b"}
    assert flash.clear_cookie().startswith("inertiaErrors=;")


@pytest.mark.parametrize("cookie", ["", "theme=dark", "inertiaErrors="])
def test_read_error_flash_without_cookie(make_request: Callable[..., Request], cookie: str) -> None:
    headers: dict[str, Any] = {"cookie": cookie} if cookie else {}
    flash = read_error_flash(make_request(headers=headers))

    assert not flash.present
    assert flash.errors is None


def test_read_malformed_error_flash(make_request: Callable[..., Request]) -> None:
    flash = read_error_flash(make_request(headers={"cookie": "inertiaErrors=%7Bnope"}))

    assert flash.present
    assert not flash.is_valid
    assert not flash.decoded


def test_read_null_error_flash(make_request: Callable[..., Request]) -> None:
    flash = read_error_flash(make_request(headers={"cookie": "inertiaErrors=null"}))

    assert flash.present
    assert flash.decoded
    assert flash.is_valid
    assert flash.errors is None
