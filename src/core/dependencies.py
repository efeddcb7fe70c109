from datetime import UTC, datetime

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from client.gemini import GeminiImageGenerator
from client.google_oauth import GoogleOAuthClient
from client.imgbb import ImgbbUploader
from client.medusa import MedusaStoreClient
from core.config import settings
from core.exceptions import InvalidToken, NotAuthenticated, ServiceUnavailable
from core.security import verify_token
from model.database import get_session
from model.session import UserSession
from model.user import User

# HTTPBearer:
# - Swagger UI에 "Authorize" 버튼을 자동 생성
# - 요청 헤더에서 "Authorization: Bearer <token>"을 추출
# - auto_error=False: 헤더가 없을 때도 우리 예외 형식(INVALID_TOKEN)으로 응답하기 위함
admin_scheme = HTTPBearer(auto_error=False)


def _as_utc(value: datetime) -> datetime:
    # SQLite는 tz 정보를 버리므로 naive datetime은 UTC로 간주한다.
    return value if value.tzinfo else value.replace(tzinfo=UTC)


def get_optional_user(
    request: Request,
    session: Session = Depends(get_session),
) -> User | None:
    """세션 쿠키에서 현재 사용자를 찾는다. 없거나 무효하면 None.

    흐름:
    1. 쿠키의 JWT 서명 + 만료 + typ=session 확인
    2. sid 클레임으로 세션 행 조회, 사용자 일치 + 만료 확인
    3. 만료된 세션 행은 그 자리에서 삭제
    """
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        return None

    payload = verify_token(token, "session")
    if not payload or not payload.get("sid"):
        return None

    user_session = session.get(UserSession, payload["sid"])
    if not user_session or user_session.user_id != payload.get("sub"):
        return None

    if _as_utc(user_session.expires_at) <= datetime.now(UTC):
        session.delete(user_session)
        session.commit()
        return None

    return session.get(User, user_session.user_id)


def get_current_user(user: User | None = Depends(get_optional_user)) -> User:
    """로그인 필수 엔드포인트용. 실패 시 401 UNAUTHORIZED."""
    if user is None:
        raise NotAuthenticated
    return user


def require_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(admin_scheme),
) -> str:
    """관리자 Bearer 토큰을 검증하고 관리자 이름을 반환한다."""
    if credentials is None:
        raise InvalidToken("Missing admin token")
    payload = verify_token(credentials.credentials, "admin")
    if not payload or payload.get("role") != "admin":
        raise InvalidToken
    return payload["sub"]


# --- 외부 연동 ---
# 테스트에서는 app.dependency_overrides로 가짜 구현을 주입한다.


def get_image_generator() -> GeminiImageGenerator:
    if not settings.gemini_configured:
        raise ServiceUnavailable("GOOGLE_API_KEY is not set")
    return GeminiImageGenerator(api_key=settings.GOOGLE_API_KEY, model=settings.GEMINI_IMAGE_MODEL)


def get_imgbb_uploader() -> ImgbbUploader | None:
    """ImgBB는 선택 사항. 키가 없으면 결과를 data URL 그대로 저장한다."""
    if not settings.imgbb_configured:
        return None
    return ImgbbUploader(api_key=settings.IMGBB_API_KEY)


def get_medusa_client() -> MedusaStoreClient:
    if not settings.medusa_configured:
        raise ServiceUnavailable("MEDUSA_BACKEND_URL is not set")
    return MedusaStoreClient(
        backend_url=settings.MEDUSA_BACKEND_URL,
        publishable_key=settings.MEDUSA_PUBLISHABLE_KEY,
        region_id=settings.MEDUSA_REGION_ID,
        timeout=settings.MEDUSA_TIMEOUT_SECONDS,
    )


def get_google_oauth_client() -> GoogleOAuthClient:
    if not settings.google_oauth_configured:
        raise ServiceUnavailable("GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET must be set")
    return GoogleOAuthClient(
        client_id=settings.GOOGLE_CLIENT_ID,
        client_secret=settings.GOOGLE_CLIENT_SECRET,
        redirect_uri=settings.OAUTH_CALLBACK_URL,
    )
