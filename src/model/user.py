from datetime import UTC, datetime

from sqlmodel import Field, SQLModel

from core.config import settings


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: str = Field(primary_key=True)  # Google 프로필 ID
    email: str | None = Field(default=None, index=True)
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    credits: int = Field(default_factory=lambda: settings.DEFAULT_CREDITS)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
