from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


class UserSession(SQLModel, table=True):
    """로그인 세션 저장소. 쿠키의 JWT가 sid 클레임으로 이 행을 가리킨다."""

    __tablename__ = "sessions"

    id: str = Field(primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    expires_at: datetime
