"""관리자 API (로그인, 목록, 삭제, 통계) 테스트."""

from datetime import UTC, datetime, timedelta

from conftest import ADMIN_PASSWORD
from core.config import settings
from core.security import create_session_token, hash_password
from model.transformation import COMPLETED, FAILED, PROCESSING, Transformation


def _seed(session, n, status=COMPLETED):
    base = datetime.now(UTC)
    ids = []
    for i in range(n):
        record = Transformation(
            original_image_url="data:image/png;base64,AA==",
            transformed_image_url="data:image/png;base64,AA==" if status == COMPLETED else None,
            style="oil-painting",
            status=status,
            created_at=base - timedelta(minutes=i),
        )
        session.add(record)
        ids.append(record.id)
    session.commit()
    return ids


class TestAdminLogin:
    def test_login_success(self, client, monkeypatch):
        monkeypatch.setattr(settings, "ADMIN_PASSWORD_HASH", hash_password(ADMIN_PASSWORD))
        resp = client.post(
            "/api/admin/login",
            json={"username": settings.ADMIN_USERNAME, "password": ADMIN_PASSWORD},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["token"]
        assert data["tokenType"] == "bearer"

    def test_wrong_password(self, client, monkeypatch):
        """잘못된 패스워드 → 401 INVALID_CREDENTIALS."""
        monkeypatch.setattr(settings, "ADMIN_PASSWORD_HASH", hash_password(ADMIN_PASSWORD))
        resp = client.post(
            "/api/admin/login",
            json={"username": settings.ADMIN_USERNAME, "password": "wrong"},
        )
        assert resp.status_code == 401
        assert resp.json()["error_code"] == "INVALID_CREDENTIALS"

    def test_disabled_without_hash(self, client, monkeypatch):
        """ADMIN_PASSWORD_HASH가 비어 있으면 어떤 패스워드도 통과하지 않는다."""
        monkeypatch.setattr(settings, "ADMIN_PASSWORD_HASH", "")
        resp = client.post("/api/admin/login", json={"username": "admin", "password": ""})
        assert resp.status_code == 401


class TestAdminAuth:
    def test_missing_token(self, client):
        resp = client.get("/api/admin/transformations")
        assert resp.status_code == 401
        assert resp.json()["error_code"] == "INVALID_TOKEN"

    def test_session_token_is_not_admin(self, client):
        """세션 쿠키용 토큰을 Bearer로 보내도 관리자로 인정하지 않는다."""
        token = create_session_token("user-1", "sid-1")
        resp = client.get("/api/admin/stats", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401


class TestAdminTransformations:
    def test_list_shape(self, client, session, admin_headers):
        """목록 항목은 id/style/mood/status/createdAt/hasImage만 포함한다."""
        _seed(session, 2)
        _seed(session, 1, PROCESSING)

        resp = client.get("/api/admin/transformations", headers=admin_headers)
        assert resp.status_code == 200
        data = resp.json()
        assert data["total"] == 3
        assert (data["page"], data["limit"], data["pages"]) == (1, 30, 1)
        item = data["transformations"][0]
        assert set(item) == {"id", "style", "mood", "status", "createdAt", "hasImage"}
        assert sorted(t["hasImage"] for t in data["transformations"]) == [False, True, True]

    def test_pagination(self, client, session, admin_headers):
        ids = _seed(session, 5)
        resp = client.get(
            "/api/admin/transformations", params={"page": 2, "limit": 2}, headers=admin_headers
        )
        data = resp.json()
        assert data["pages"] == 3
        assert [t["id"] for t in data["transformations"]] == ids[2:4]

    def test_limit_clamped(self, client, session, admin_headers):
        _seed(session, 1)
        resp = client.get(
            "/api/admin/transformations", params={"limit": 500}, headers=admin_headers
        )
        assert resp.json()["limit"] == 100

    def test_status_filter(self, client, session, admin_headers):
        _seed(session, 2)
        _seed(session, 1, FAILED)
        resp = client.get(
            "/api/admin/transformations", params={"status": FAILED}, headers=admin_headers
        )
        data = resp.json()
        assert data["total"] == 1
        assert data["transformations"][0]["status"] == FAILED

    def test_delete(self, client, session, admin_headers):
        (transformation_id,) = _seed(session, 1)
        resp = client.delete(f"/api/admin/transformations/{transformation_id}", headers=admin_headers)
        assert resp.status_code == 200
        assert client.get(f"/api/transform/{transformation_id}").status_code == 404

    def test_delete_missing(self, client, admin_headers):
        resp = client.delete("/api/admin/transformations/nope", headers=admin_headers)
        assert resp.status_code == 404
        assert resp.json()["error_code"] == "TRANSFORMATION_NOT_FOUND"

    def test_stats(self, client, session, admin_headers):
        _seed(session, 2)
        _seed(session, 1, FAILED)
        resp = client.get("/api/admin/stats", headers=admin_headers)
        assert resp.json() == {
            "pending": 0,
            "processing": 0,
            "completed": 2,
            "failed": 1,
            "total": 3,
        }
