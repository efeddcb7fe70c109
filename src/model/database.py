from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from core.config import settings


def _build_engine(url: str) -> Engine:
    # SQLite는 스레드 간 커넥션 공유를 허용해야 백그라운드 작업에서도 쓸 수 있다.
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    # Postgres: 긴 Gemini 호출 동안 끊긴 커넥션을 재사용하지 않도록 pre-ping
    return create_engine(url, pool_pre_ping=True, pool_recycle=300)


engine = _build_engine(settings.DATABASE_URL)


def create_db_and_tables() -> None:
    SQLModel.metadata.create_all(engine)


def get_session():
    """요청 단위 DB 세션 (FastAPI dependency)."""
    with Session(engine) as session:
        yield session
