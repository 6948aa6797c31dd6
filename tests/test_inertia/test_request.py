from __future__ import annotations

from typing import Callable

from starlette.requests import Request

from starlette_inertia import InertiaDetails, InertiaHeaders


def test_inertia_details_defaults(make_request: Callable[..., Request]) -> None:
    details = InertiaDetails(make_request())

    assert not details
    assert details.version is None
    assert details.partial_data is None
    assert details.partial_component is None
    assert details.referer is None
    assert not details.is_partial_render("Home")


def test_any_marker_value_enables_inertia(make_request: Callable[..., Request]) -> None:
    assert InertiaDetails(make_request(headers={InertiaHeaders.ENABLED.value: "true"}))
    assert InertiaDetails(make_request(headers={InertiaHeaders.ENABLED.value: "1"}))
    assert not InertiaDetails(make_request(headers={InertiaHeaders.ENABLED.value: ""}))


def test_partial_reload_headers(make_request: Callable[..., Request]) -> None:
    details = InertiaDetails(
        make_request(
            headers={
                InertiaHeaders.ENABLED.value: "true",
                InertiaHeaders.VERSION.value: "1.0",
                InertiaHeaders.PARTIAL_COMPONENT.value: "Users/Index",
                InertiaHeaders.PARTIAL_DATA.value: "users, filters,,",
                InertiaHeaders.REFERER.value: "http://testserver/users",
            },
        ),
    )

    assert details.version == "1.0"
    assert details.partial_component == "Users/Index"
    assert details.partial_data == ["users", "filters"]
    assert details.referer == "http://testserver/users"
    assert details.is_partial_render("Users/Index")
    assert not details.is_partial_render("users/index")


def test_partial_data_without_component_is_not_partial(make_request: Callable[..., Request]) -> None:
    details = InertiaDetails(make_request(headers={InertiaHeaders.PARTIAL_DATA.value: "users"}))

    assert details.partial_data == ["users"]
    assert not details.is_partial_render("Users/Index")


def test_uri_encoded_headers(make_request: Callable[..., Request]) -> None:
    details = InertiaDetails(
        make_request(
            headers={
                InertiaHeaders.PARTIAL_COMPONENT.value: "Users%2FIndex",
                "x-inertia-partial-component-uri-autoencoded": "true",
                InertiaHeaders.PARTIAL_DATA.value: "a%2Cb",
            },
        ),
    )

    assert details.partial_component == "Users/Index"
    assert details.partial_data == ["a%2Cb"]
