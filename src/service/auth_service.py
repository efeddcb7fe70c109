from datetime import UTC, datetime, timedelta

from loguru import logger
from sqlalchemy import delete, update
from sqlmodel import Session, col

from client.google_oauth import GoogleProfile
from core.config import settings
from core.exceptions import InsufficientCredits
from core.security import create_session_token, new_opaque_token, verify_token
from model.session import UserSession
from model.user import User


def upsert_user(profile: GoogleProfile, session: Session) -> User:
    """Google 프로필로 사용자를 만들거나 갱신한다.

    - 신규 사용자: DEFAULT_CREDITS 만큼 크레딧 지급
    - 기존 사용자: 프로필 필드만 갱신 (크레딧은 그대로)
    """
    user = session.get(User, profile.id)
    if user is None:
        user = User(id=profile.id)
        logger.info(f"New user {profile.id} ({settings.DEFAULT_CREDITS} credits)")

    user.email = profile.email
    user.first_name = profile.first_name
    user.last_name = profile.last_name
    user.profile_image_url = profile.picture
    user.updated_at = datetime.now(UTC)

    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def create_session(user: User, session: Session) -> str:
    """세션 행을 만들고 쿠키에 넣을 서명된 토큰을 반환한다.

    만료된 이 사용자의 세션은 같이 정리한다.
    """
    now = datetime.now(UTC)
    session.exec(
        delete(UserSession).where(
            col(UserSession.user_id) == user.id,
            col(UserSession.expires_at) <= now,
        ).execution_options(synchronize_session=False)
    )

    user_session = UserSession(
        id=new_opaque_token(),
        user_id=user.id,
        expires_at=now + timedelta(days=settings.SESSION_TTL_DAYS),
    )
    session.add(user_session)
    session.commit()
    return create_session_token(user.id, user_session.id)


def end_session(token: str | None, session: Session) -> None:
    """쿠키 토큰이 가리키는 세션 행을 지운다. 무효한 토큰은 무시."""
    if not token:
        return
    payload = verify_token(token, "session")
    if not payload or not payload.get("sid"):
        return
    user_session = session.get(UserSession, payload["sid"])
    if user_session:
        session.delete(user_session)
        session.commit()


def deduct_credits(user_id: str, amount: int, session: Session, commit: bool = True) -> None:
    """크레딧을 조건부 UPDATE 한 번으로 차감한다.

    WHERE credits >= amount 조건 때문에 동시 요청이 겹쳐도 0 아래로 내려가지 않는다.
    갱신된 행이 없으면 InsufficientCredits.
    commit=False면 호출자의 트랜잭션에 합류한다 (변환 행 생성과 함께 커밋).
    """
    result = session.exec(
        update(User)
        .where(col(User.id) == user_id, col(User.credits) >= amount)
        .values(credits=User.credits - amount, updated_at=datetime.now(UTC))
    )
    if result.rowcount == 0:
        session.rollback()
        raise InsufficientCredits
    if commit:
        session.commit()


def get_credits(user_id: str, session: Session) -> int:
    user = session.get(User, user_id)
    if user is None:
        return 0
    session.refresh(user)
    return user.credits
