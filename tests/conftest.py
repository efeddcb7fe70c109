"""pytest 공용 fixture.

모든 API 테스트는 in-memory SQLite DB를 사용하여 격리된다.
외부 연동(Gemini, ImgBB, Medusa, Google OAuth)은 가짜 구현으로 바꿔 끼운다.
- client: TestClient (로그인 안 됨)
- signed_in: Google 로그인 흐름을 거쳐 세션 쿠키가 붙은 client
- admin_headers: 관리자 Bearer 헤더
"""

import io
import os
import sys
from pathlib import Path
from urllib.parse import parse_qs, urlparse

# 앱 import 전에 파일 DB 대신 메모리 DB를 쓰도록 설정
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
import requests
from fastapi.testclient import TestClient
from PIL import Image
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

# src/ 디렉토리를 import path에 추가
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from client.google_oauth import GoogleOAuthClient, GoogleProfile
from core.config import settings
from core.dependencies import (
    get_google_oauth_client,
    get_image_generator,
    get_imgbb_uploader,
    get_medusa_client,
)
from core.exceptions import GenerationFailed
from core.security import hash_password
from main import app
from model.database import get_session
from processor.operations import encode_data_url, image_to_bytes
from service.catalog import build_variants_for_category, product_handle

ADMIN_PASSWORD = "admin-pass-1234"


def make_data_url(size=(40, 60), color="red", mime="image/png") -> str:
    img = Image.new("RGB", size, color)
    return encode_data_url(image_to_bytes(img, mime), mime)


# --- 가짜 외부 연동 ---


class FakeGenerator:
    """Gemini 대신 단색 PNG를 돌려준다. fail=True면 GenerationFailed."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls = []

    def generate(self, prompt, images=None, aspect_ratio="3:4"):
        self.calls.append({"prompt": prompt, "images": images or [], "aspect_ratio": aspect_ratio})
        if self.fail:
            raise GenerationFailed
        return make_data_url((30, 40), "blue")


class HtmlResponse:
    """2xx인데 본문이 JSON이 아닌 응답 (프록시 에러 페이지 등)."""

    status_code = 200
    ok = True
    text = "<html>502 Bad Gateway</html>"
    content = text.encode()

    def json(self):
        raise requests.JSONDecodeError("Expecting value", self.text, 0)


class FakeOAuthClient(GoogleOAuthClient):
    """code → 미리 정한 프로필. 네트워크 호출 없음."""

    def __init__(self, profile: GoogleProfile):
        super().__init__("test-client-id", "test-secret", "http://testserver/api/auth/google/callback")
        self.profile = profile

    def exchange_code(self, code):
        return f"token-{code}"

    def fetch_profile(self, access_token):
        return self.profile


class FakeMedusa:
    """Store API 흉내. 카탈로그 규칙대로 만든 변형을 Medusa v2 응답 형태로 돌려준다."""

    def __init__(self):
        self.carts = []
        self.line_items = []
        self.error = None

    def _check(self):
        if self.error:
            raise self.error

    def get_product(self, handle):
        self._check()
        category = handle.removeprefix("art-transform-")
        if handle != product_handle(category):
            return None
        variants = []
        for n, spec in enumerate(build_variants_for_category(category)):
            variants.append({
                "id": f"variant_{category}_{n}",
                "title": spec.title,
                "options": [{"value": v, "option": {"title": k}} for k, v in spec.options.items()],
            })
        return {"id": f"prod_{category}", "title": f"{category} Portrait Art", "variants": variants}

    def create_cart(self, metadata=None):
        self._check()
        cart = {"id": f"cart_{len(self.carts) + 1}", "metadata": metadata or {}}
        self.carts.append(cart)
        return cart

    def add_line_item(self, cart_id, variant_id, metadata=None, quantity=1):
        self._check()
        self.line_items.append({"cart_id": cart_id, "variant_id": variant_id, "metadata": metadata})
        return {"id": cart_id}


# --- DB / 앱 ---


@pytest.fixture()
def engine():
    """테스트마다 새 in-memory SQLite DB를 생성한다.

    StaticPool을 사용해야 모든 커넥션이 같은 in-memory DB를 공유한다.
    (기본값은 커넥션마다 별도 DB가 생성되어 테이블이 안 보임)
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine):
    with Session(engine) as s:
        yield s


@pytest.fixture()
def generator():
    return FakeGenerator()


@pytest.fixture()
def medusa():
    return FakeMedusa()


@pytest.fixture()
def profile():
    return GoogleProfile(
        id="google-123",
        email="painter@test.com",
        first_name="Ada",
        last_name="Lovelace",
        picture="https://example.com/ada.png",
    )


@pytest.fixture()
def client(engine, generator, medusa, profile):
    """get_session과 외부 연동을 테스트용으로 오버라이드한 TestClient.

    요청마다 같은 엔진에서 새 세션을 열어 운영과 같은 세션 수명을 따른다.
    """

    def _override_session():
        with Session(engine) as s:
            yield s

    app.dependency_overrides[get_session] = _override_session
    app.dependency_overrides[get_image_generator] = lambda: generator
    app.dependency_overrides[get_imgbb_uploader] = lambda: None
    app.dependency_overrides[get_medusa_client] = lambda: medusa
    app.dependency_overrides[get_google_oauth_client] = lambda: FakeOAuthClient(profile)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def sign_in(client: TestClient) -> str:
    """Google 로그인 흐름(리다이렉트 → 콜백)을 거쳐 세션 쿠키를 받는다."""
    resp = client.get("/api/auth/google", follow_redirects=False)
    state = parse_qs(urlparse(resp.headers["location"]).query)["state"][0]
    resp = client.get(
        "/api/auth/google/callback",
        params={"code": "auth-code", "state": state},
        follow_redirects=False,
    )
    assert resp.headers["location"] == settings.POST_LOGIN_REDIRECT
    return client.cookies[settings.SESSION_COOKIE_NAME]


@pytest.fixture()
def signed_in(client):
    """로그인된 client (크레딧 DEFAULT_CREDITS)."""
    sign_in(client)
    return client


@pytest.fixture()
def admin_headers(client, monkeypatch):
    """관리자 패스워드 해시를 설정하고 로그인한 Authorization 헤더."""
    monkeypatch.setattr(settings, "ADMIN_PASSWORD_HASH", hash_password(ADMIN_PASSWORD))
    resp = client.post(
        "/api/admin/login",
        json={"username": settings.ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture()
def png_bytes():
    buf = io.BytesIO()
    Image.new("RGB", (64, 48), "green").save(buf, format="PNG")
    return buf.getvalue()
