import secrets
from datetime import UTC, datetime, timedelta

import jwt
from pwdlib.hashers.bcrypt import BcryptHasher

from core.config import settings

# --- 패스워드 해싱 ---
# 관리자 패스워드는 평문 대신 bcrypt 해시(ADMIN_PASSWORD_HASH)로만 설정한다.
pwd_hash = BcryptHasher()


def hash_password(plain: str) -> str:
    """평문 패스워드 → bcrypt 해시."""
    return pwd_hash.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """평문과 해시를 비교한다. 해시가 비어 있거나 bcrypt 형식이 아니면 항상 실패."""
    if not hashed:
        return False
    try:
        return pwd_hash.verify(plain, hashed)
    except ValueError:
        return False


# --- JWT 토큰 ---
# 세 종류의 토큰이 같은 서명 키를 쓰고 "typ" 클레임으로 구분된다.
#
#   session: 세션 쿠키.     {"sub": user_id, "sid": session_id}
#   state:   OAuth state.  {"state": "..."}
#   admin:   관리자 Bearer. {"sub": username, "role": "admin"}
#
# typ이 다른 토큰을 다른 용도로 재사용할 수 없게 검증 시 typ을 반드시 비교한다.


def create_token(data: dict, token_type: str, expires_delta: timedelta) -> str:
    """typ 클레임과 만료 시간을 붙여 JWT를 서명한다."""
    payload = data.copy()
    payload["typ"] = token_type
    payload["exp"] = datetime.now(UTC) + expires_delta
    return jwt.encode(payload, settings.SESSION_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str, token_type: str) -> dict | None:
    """JWT 토큰을 검증하고 payload를 반환한다.

    서명이 틀렸거나, 만료되었거나, typ이 다르면 None을 반환.
    """
    try:
        payload = jwt.decode(
            token, settings.SESSION_SECRET, algorithms=[settings.JWT_ALGORITHM]
        )
    except jwt.PyJWTError:
        return None
    if payload.get("typ") != token_type:
        return None
    return payload


def create_admin_token(username: str, expires_delta: timedelta | None = None) -> str:
    return create_token(
        {"sub": username, "role": "admin"},
        "admin",
        expires_delta or timedelta(minutes=settings.ADMIN_TOKEN_EXPIRE_MINUTES),
    )


def create_session_token(user_id: str, session_id: str) -> str:
    return create_token(
        {"sub": user_id, "sid": session_id},
        "session",
        timedelta(days=settings.SESSION_TTL_DAYS),
    )


def create_state_token(state: str) -> str:
    return create_token(
        {"state": state},
        "state",
        timedelta(minutes=settings.OAUTH_STATE_TTL_MINUTES),
    )


def new_opaque_token(nbytes: int = 32) -> str:
    """세션 ID, OAuth state 등에 쓰는 URL-safe 랜덤 문자열."""
    return secrets.token_urlsafe(nbytes)
