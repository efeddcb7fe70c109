from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from loguru import logger
from sqlmodel import Session

from client.google_oauth import GoogleOAuthClient
from core.config import settings
from core.dependencies import get_current_user, get_google_oauth_client
from core.exceptions import AppException, OAuthFailed
from core.schemas import CamelModel
from core.security import create_state_token, new_opaque_token, verify_token
from model.database import get_session
from model.user import User
from service import auth_service

router = APIRouter(prefix="/api", tags=["auth"])


# --- 응답 스키마 ---

class UserResponse(CamelModel):
    id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    credits: int


class CreditsResponse(CamelModel):
    credits: int


def _set_cookie(response: RedirectResponse, name: str, value: str, max_age: int) -> None:
    response.set_cookie(
        name,
        value,
        max_age=max_age,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        path="/",
    )


# --- Google OAuth ---

@router.get("/auth/google")
def google_login(client: GoogleOAuthClient = Depends(get_google_oauth_client)):
    """Google 동의 화면으로 리다이렉트.

    state는 서명된 단기 쿠키에 담아 두고 콜백에서 비교한다 (CSRF 방지).
    """
    state = new_opaque_token(16)
    response = RedirectResponse(client.authorization_url(state), status_code=302)
    _set_cookie(
        response,
        settings.OAUTH_STATE_COOKIE_NAME,
        create_state_token(state),
        settings.OAUTH_STATE_TTL_MINUTES * 60,
    )
    return response


@router.get("/auth/google/callback")
def google_callback(
    request: Request,
    code: str | None = None,
    state: str | None = None,
    client: GoogleOAuthClient = Depends(get_google_oauth_client),
    session: Session = Depends(get_session),
):
    """code → 토큰 → 프로필 → 사용자 upsert → 세션 쿠키.

    어떤 단계든 실패하면 "/"로 돌려보낸다.
    """
    try:
        stored = verify_token(request.cookies.get(settings.OAUTH_STATE_COOKIE_NAME, ""), "state")
        if not code or not state or not stored or stored.get("state") != state:
            raise OAuthFailed("OAuth state mismatch")

        profile = client.fetch_profile(client.exchange_code(code))
        user = auth_service.upsert_user(profile, session)
        token = auth_service.create_session(user, session)
    except AppException as e:
        logger.warning(f"Google sign-in failed: {e.message}")
        response = RedirectResponse("/", status_code=302)
        response.delete_cookie(settings.OAUTH_STATE_COOKIE_NAME, path="/")
        return response

    logger.info(f"User {user.id} signed in")
    response = RedirectResponse(settings.POST_LOGIN_REDIRECT, status_code=302)
    response.delete_cookie(settings.OAUTH_STATE_COOKIE_NAME, path="/")
    _set_cookie(response, settings.SESSION_COOKIE_NAME, token, settings.SESSION_TTL_DAYS * 86400)
    return response


@router.get("/login")
def legacy_login():
    return RedirectResponse("/api/auth/google", status_code=302)


@router.get("/logout")
def logout(request: Request, session: Session = Depends(get_session)):
    """세션 행 삭제 + 쿠키 제거 후 "/"로."""
    auth_service.end_session(request.cookies.get(settings.SESSION_COOKIE_NAME), session)
    response = RedirectResponse("/", status_code=302)
    response.delete_cookie(settings.SESSION_COOKIE_NAME, path="/")
    return response


# --- 현재 사용자 ---

@router.get("/auth/user", response_model=UserResponse)
def get_user(current_user: User = Depends(get_current_user)):
    """현재 로그인한 사용자 정보 + 남은 크레딧. (세션 필수)"""
    return current_user


@router.get("/credits", response_model=CreditsResponse)
def get_credits(
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    return CreditsResponse(credits=auth_service.get_credits(current_user.id, session))
