import secrets

from loguru import logger

from core.config import settings
from core.exceptions import InvalidCredentials
from core.security import create_admin_token, verify_password


def login(username: str, password: str) -> str:
    """관리자 계정을 확인하고 Bearer JWT를 반환한다.

    1. 사용자 이름 비교 (상수 시간)
    2. bcrypt 해시(ADMIN_PASSWORD_HASH)와 패스워드 비교
    3. 일치하면 role=admin 토큰 발급, 실패 시 InvalidCredentials
    """
    username_ok = secrets.compare_digest(username.encode(), settings.ADMIN_USERNAME.encode())
    password_ok = verify_password(password, settings.ADMIN_PASSWORD_HASH)
    if not (username_ok and password_ok):
        logger.warning(f"Failed admin login for '{username}'")
        raise InvalidCredentials

    return create_admin_token(username)
