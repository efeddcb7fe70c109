"""외부 연동 클라이언트 테스트 (네트워크 대신 requests를 monkeypatch)."""

import base64
from types import SimpleNamespace

import pytest
import requests

from client import google_oauth, imgbb, medusa
from client.gemini import extract_image_data_url
from client.google_oauth import GoogleOAuthClient
from client.imgbb import ImgbbUploader
from client.medusa import MedusaAdminClient, MedusaStoreClient
from conftest import HtmlResponse
from core.exceptions import OAuthFailed, UpstreamError


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self.ok = status_code < 400
        self._payload = payload or {}
        self.text = text
        self.content = b"{}" if payload is not None else b""

    def json(self):
        return self._payload


class TestGeminiResponse:
    def _resp(self, *parts):
        return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=list(parts)))])

    def test_first_image_part(self):
        text = SimpleNamespace(inline_data=None, text="here you go")
        image = SimpleNamespace(inline_data=SimpleNamespace(data=b"\x89PNG", mime_type="image/png"))
        url = extract_image_data_url(self._resp(text, image))
        assert url == "data:image/png;base64," + base64.b64encode(b"\x89PNG").decode()

    def test_base64_string_payload(self):
        image = SimpleNamespace(inline_data=SimpleNamespace(data="QUJD", mime_type="image/jpeg"))
        assert extract_image_data_url(self._resp(image)) == "data:image/jpeg;base64,QUJD"

    def test_no_image(self):
        assert extract_image_data_url(self._resp(SimpleNamespace(inline_data=None))) is None
        assert extract_image_data_url(SimpleNamespace(candidates=None)) is None


class TestImgbb:
    def test_upload(self, monkeypatch):
        sent = {}

        def fake_post(url, data, timeout):
            sent.update(data)
            return FakeResponse(payload={"data": {"url": "https://i.ibb.co/x/a.webp"}})

        monkeypatch.setattr(imgbb.requests, "post", fake_post)
        url = ImgbbUploader("key").upload(b"abc", slug="art transform/1")
        assert url == "https://i.ibb.co/x/a.webp"
        assert sent["name"] == "art_transform_1"
        assert sent["image"] == base64.b64encode(b"abc").decode()

    def test_http_error(self, monkeypatch):
        monkeypatch.setattr(imgbb.requests, "post", lambda *a, **k: FakeResponse(400, text="bad key"))
        with pytest.raises(UpstreamError):
            ImgbbUploader("key").upload(b"abc")

    def test_non_json_body(self, monkeypatch):
        monkeypatch.setattr(imgbb.requests, "post", lambda *a, **k: HtmlResponse())
        with pytest.raises(UpstreamError):
            ImgbbUploader("key").upload(b"abc")


class TestGoogleOAuth:
    def test_authorization_url(self):
        url = GoogleOAuthClient("cid", "secret", "http://cb").authorization_url("xyz")
        assert "client_id=cid" in url
        assert "state=xyz" in url
        assert "response_type=code" in url

    def test_exchange_and_profile(self, monkeypatch):
        monkeypatch.setattr(
            google_oauth.requests, "post",
            lambda *a, **k: FakeResponse(payload={"access_token": "tok"}),
        )
        monkeypatch.setattr(
            google_oauth.requests, "get",
            lambda *a, **k: FakeResponse(payload={"sub": "42", "email": "a@b.c", "given_name": "A"}),
        )
        client = GoogleOAuthClient("cid", "secret", "http://cb")
        profile = client.fetch_profile(client.exchange_code("code"))
        assert (profile.id, profile.email, profile.first_name) == ("42", "a@b.c", "A")

    def test_exchange_failure(self, monkeypatch):
        monkeypatch.setattr(google_oauth.requests, "post", lambda *a, **k: FakeResponse(401))
        with pytest.raises(OAuthFailed):
            GoogleOAuthClient("cid", "secret", "http://cb").exchange_code("code")

    def test_non_json_token_response(self, monkeypatch):
        monkeypatch.setattr(google_oauth.requests, "post", lambda *a, **k: HtmlResponse())
        with pytest.raises(OAuthFailed):
            GoogleOAuthClient("cid", "secret", "http://cb").exchange_code("code")

    def test_non_json_userinfo(self, monkeypatch):
        monkeypatch.setattr(google_oauth.requests, "get", lambda *a, **k: HtmlResponse())
        with pytest.raises(OAuthFailed):
            GoogleOAuthClient("cid", "secret", "http://cb").fetch_profile("tok")


class TestMedusaStore:
    def test_region_fallback_and_cart(self, monkeypatch):
        calls = []

        def fake_request(method, url, headers, timeout, **kwargs):
            calls.append((method, url, kwargs.get("json")))
            if url.endswith("/store/regions"):
                return FakeResponse(payload={"regions": [{"id": "reg_1"}]})
            return FakeResponse(payload={"cart": {"id": "cart_1"}})

        monkeypatch.setattr(medusa.requests, "request", fake_request)
        client = MedusaStoreClient("https://shop.test/", publishable_key="pk")
        cart = client.create_cart({"source": "art-transform"})

        assert cart["id"] == "cart_1"
        assert client.headers["x-publishable-api-key"] == "pk"
        assert calls[-1] == (
            "POST", "https://shop.test/store/carts",
            {"region_id": "reg_1", "metadata": {"source": "art-transform"}},
        )

    def test_connection_error(self, monkeypatch):
        def boom(*a, **k):
            raise requests.ConnectionError("refused")

        monkeypatch.setattr(medusa.requests, "request", boom)
        with pytest.raises(UpstreamError):
            MedusaStoreClient("https://shop.test", region_id="reg_1").get_product("x")

    def test_non_json_body(self, monkeypatch):
        monkeypatch.setattr(medusa.requests, "request", lambda *a, **k: HtmlResponse())
        with pytest.raises(UpstreamError):
            MedusaStoreClient("https://shop.test", region_id="reg_1").create_cart()


class TestMedusaAdmin:
    def test_retries_then_succeeds(self, monkeypatch):
        responses = [FakeResponse(500, text="busy"), FakeResponse(payload={"product": {"id": "p1"}})]
        monkeypatch.setattr(medusa.requests, "request", lambda *a, **k: responses.pop(0))
        monkeypatch.setattr(medusa.time, "sleep", lambda s: None)

        assert MedusaAdminClient("https://shop.test").create_product({}) == "p1"

    def test_gives_up(self, monkeypatch):
        monkeypatch.setattr(medusa.requests, "request", lambda *a, **k: FakeResponse(500, text="down"))
        monkeypatch.setattr(medusa.time, "sleep", lambda s: None)
        with pytest.raises(UpstreamError):
            MedusaAdminClient("https://shop.test").request("GET", "/admin/products")

    def test_login_connection_error(self, monkeypatch):
        def boom(*a, **k):
            raise requests.ConnectionError("refused")

        monkeypatch.setattr(medusa.requests, "post", boom)
        with pytest.raises(UpstreamError):
            MedusaAdminClient("https://shop.test").login("admin@test.com", "pw")

    def test_non_json_body_is_not_retried(self, monkeypatch):
        calls = []

        def html(*a, **k):
            calls.append(1)
            return HtmlResponse()

        monkeypatch.setattr(medusa.requests, "request", html)
        with pytest.raises(UpstreamError):
            MedusaAdminClient("https://shop.test").request("GET", "/admin/products")
        assert len(calls) == 1
