import uuid
from datetime import UTC, datetime

from sqlmodel import Field, SQLModel

PENDING = "pending"
PROCESSING = "processing"
COMPLETED = "completed"
FAILED = "failed"

STATUSES = (PENDING, PROCESSING, COMPLETED, FAILED)
TERMINAL_STATUSES = (COMPLETED, FAILED)

# 앞으로만 진행한다. 종료 상태(completed, failed)에서는 나가는 간선이 없다.
ALLOWED_TRANSITIONS: dict[str, tuple[str, ...]] = {
    PENDING: (PROCESSING, COMPLETED, FAILED),
    PROCESSING: (COMPLETED, FAILED),
    COMPLETED: (),
    FAILED: (),
}


class Transformation(SQLModel, table=True):
    __tablename__ = "transformations"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    user_id: str | None = Field(default=None, foreign_key="users.id", index=True)
    original_image_url: str
    transformed_image_url: str | None = None
    style: str = Field(max_length=50)
    mood: str = Field(default="none", max_length=30)
    category: str | None = Field(default=None, max_length=30)
    status: str = Field(default=PENDING, max_length=20, index=True)
    error_message: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC), index=True)
    completed_at: datetime | None = None
