"""
Public API Client Tests
=======================

HTTP is stubbed with ``responses``; no server is needed.
Run with: pytest tests/test_public_api.py -v
"""

import json
from unittest.mock import patch

import pytest
import requests
import responses

from pruto.core.config import Config
from pruto.modules.public_api import PublicApiClient, ApiError, AuthenticationRequired
from pruto.modules.public_api import service

BASE = "http://api.test"


@pytest.fixture
def api():
    return PublicApiClient(base_url=BASE)


@responses.activate
def test_success_returns_parsed_json_exactly(api):
    responses.add(responses.GET, f"{BASE}/thing", json={"a": 1}, status=200)

    assert api.fetch_public("/thing") == {"a": 1}


@responses.activate
def test_error_uses_server_message(api):
    responses.add(responses.GET, f"{BASE}/missing", json={"message": "not found"}, status=404)

    with pytest.raises(ApiError) as exc_info:
        api.fetch_public("/missing")

    assert str(exc_info.value) == "not found"
    assert exc_info.value.status_code == 404
    assert exc_info.value.payload == {"message": "not found"}


@responses.activate
def test_error_without_message_uses_generic_text(api):
    responses.add(responses.GET, f"{BASE}/boom", json={"error": "x"}, status=500)

    with pytest.raises(ApiError) as exc_info:
        api.fetch_public("/boom")

    assert str(exc_info.value) == "HTTP error! status: 500"


@responses.activate
def test_error_with_non_json_body_uses_generic_text(api):
    responses.add(responses.GET, f"{BASE}/html", body="<h1>Bad Gateway</h1>", status=502)

    with pytest.raises(ApiError) as exc_info:
        api.fetch_public("/html")

    assert exc_info.value.message == "HTTP error! status: 502"
    assert exc_info.value.payload is None


@responses.activate
def test_default_json_content_type_header(api):
    responses.add(responses.GET, f"{BASE}/thing", json=[], status=200)

    api.fetch_public("/thing")

    assert responses.calls[0].request.headers["Content-Type"] == "application/json"


@responses.activate
def test_caller_headers_win_on_collision(api):
    responses.add(responses.POST, f"{BASE}/upload", json={}, status=200)

    api.fetch_public("/upload", method="POST", headers={"Content-Type": "text/plain", "X-Trace": "1"},
                     data="raw")

    sent = responses.calls[0].request
    assert sent.headers["Content-Type"] == "text/plain"
    assert sent.headers["X-Trace"] == "1"
    assert sent.body == "raw"


@responses.activate
def test_options_pass_through(api):
    responses.add(responses.POST, f"{BASE}/products", json={"_id": "1", "name": "Shoe"}, status=201)

    result = api.fetch_public("/products", method="POST", data=json.dumps({"name": "Shoe"}))

    assert result == {"_id": "1", "name": "Shoe"}
    assert json.loads(responses.calls[0].request.body) == {"name": "Shoe"}


@responses.activate
def test_absolute_url_ignores_base():
    responses.add(responses.GET, "https://other.test/x", json={"ok": True}, status=200)

    assert PublicApiClient(base_url=BASE).fetch_public("https://other.test/x") == {"ok": True}


@pytest.mark.parametrize("url", ["HTTP://other.test/x", "Https://other.test/x"])
def test_absolute_url_scheme_is_case_insensitive(api, url):
    assert api.build_url(url) == url


def test_scheme_like_path_is_relative(api):
    assert api.build_url("/http-status") == f"{BASE}/http-status"


def test_relative_url_without_base_url_raises():
    api = PublicApiClient(base_url="")
    with pytest.raises(ValueError):
        api.fetch_public("/products")


@responses.activate
def test_empty_success_body_returns_none(api):
    responses.add(responses.DELETE, f"{BASE}/products/1", status=204)

    assert api.fetch_public("/products/1", method="DELETE") is None


@responses.activate
def test_transport_error_propagates(api):
    responses.add(responses.GET, f"{BASE}/down", body=requests.ConnectionError("refused"))

    with pytest.raises(requests.ConnectionError):
        api.fetch_public("/down")


@responses.activate
def test_product_helpers(api):
    responses.add(responses.GET, f"{BASE}/products", json=[{"_id": "1"}], status=200)
    responses.add(responses.GET, f"{BASE}/products/1", json={"_id": "1"}, status=200)

    assert api.list_products() == [{"_id": "1"}]
    assert api.get_product("1") == {"_id": "1"}


@responses.activate
def test_cart_and_order_helpers_send_uid(api):
    responses.add(responses.GET, f"{BASE}/cart", json={"items": []}, status=200)
    responses.add(responses.GET, f"{BASE}/orders", json=[], status=200)

    assert api.get_cart({"uid": "u1"}) == {"items": []}
    assert api.list_orders({"uid": "u1"}) == []
    assert all(call.request.headers["X-Firebase-UID"] == "u1" for call in responses.calls)


# ---------------------------------------------------------------------------
# fetch_with_auth
# ---------------------------------------------------------------------------

def test_fetch_with_auth_requires_user(api):
    with pytest.raises(AuthenticationRequired):
        api.fetch_with_auth("/cart", None)


@responses.activate
def test_fetch_with_auth_sends_uid_header(api):
    responses.add(responses.GET, f"{BASE}/cart", json={"items": []}, status=200)

    class User:
        uid = "user-123"

    assert api.fetch_with_auth("/cart", User()) == {"items": []}
    assert responses.calls[0].request.headers["X-Firebase-UID"] == "user-123"


@responses.activate
def test_fetch_with_auth_accepts_dict_user(api):
    responses.add(responses.GET, f"{BASE}/cart", json={}, status=200)

    api.fetch_with_auth("/cart", {"uid": "abc"})

    assert responses.calls[0].request.headers["X-Firebase-UID"] == "abc"


def test_authentication_required_is_api_error():
    assert issubclass(AuthenticationRequired, ApiError)


# ---------------------------------------------------------------------------
# Module-level helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def default_client(monkeypatch):
    """Fresh shared client built from a patched SERVER_URL"""
    monkeypatch.setattr(service, "_default_client", None)
    with patch.object(Config, "SERVER_URL", BASE):
        yield service.get_default_client()


def test_default_client_uses_server_url_and_is_shared(default_client):
    assert default_client.base_url == BASE
    assert service.get_default_client() is default_client


@responses.activate
def test_module_fetch_public(default_client):
    responses.add(responses.GET, f"{BASE}/products", json=[{"_id": "1"}], status=200)

    assert service.fetch_public("/products") == [{"_id": "1"}]
    assert responses.calls[0].request.url == f"{BASE}/products"


@responses.activate
def test_module_fetch_with_auth(default_client):
    responses.add(responses.POST, f"{BASE}/cart/add", json={"message": "ok"}, status=200)

    result = service.fetch_with_auth("/cart/add", {"uid": "u1"}, method="POST", json={"productId": "p"})

    assert result == {"message": "ok"}
    sent = responses.calls[0].request
    assert sent.headers["X-Firebase-UID"] == "u1"
    assert json.loads(sent.body) == {"productId": "p"}


def test_module_fetch_with_auth_requires_user(default_client):
    with pytest.raises(AuthenticationRequired):
        service.fetch_with_auth("/cart", None)
