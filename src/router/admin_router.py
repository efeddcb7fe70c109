from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from core.dependencies import require_admin
from core.schemas import CamelModel
from model.database import get_session
from service import admin_service, transformation_service

router = APIRouter(prefix="/api/admin", tags=["admin"])


# --- 요청/응답 스키마 ---

class AdminLoginRequest(CamelModel):
    username: str
    password: str


class AdminTokenResponse(CamelModel):
    token: str
    token_type: str = "bearer"


class AdminTransformationItem(CamelModel):
    id: str
    style: str
    mood: str
    status: str
    created_at: datetime
    has_image: bool


class AdminTransformationPage(CamelModel):
    transformations: list[AdminTransformationItem]
    total: int
    page: int
    limit: int
    pages: int


# --- 엔드포인트 ---

@router.post("/login", response_model=AdminTokenResponse)
def admin_login(req: AdminLoginRequest):
    """관리자 로그인: 사용자 이름 + 패스워드 → Bearer 토큰."""
    return AdminTokenResponse(token=admin_service.login(req.username, req.password))


@router.get("/transformations", response_model=AdminTransformationPage)
def list_transformations(
    page: int = Query(default=1, ge=1),
    limit: int = 30,
    status: str | None = None,
    _admin: str = Depends(require_admin),
    session: Session = Depends(get_session),
):
    """최신순 목록. 이미지 본문 대신 hasImage만 내려준다 (썸네일은 /api/transform/{id}/image?w=)."""
    items, total, page, limit = transformation_service.list_transformations(
        session, page=page, limit=limit, status=status
    )
    return AdminTransformationPage(
        transformations=[
            AdminTransformationItem(
                id=t.id,
                style=t.style,
                mood=t.mood,
                status=t.status,
                created_at=t.created_at,
                has_image=bool(t.transformed_image_url),
            )
            for t in items
        ],
        total=total,
        page=page,
        limit=limit,
        pages=transformation_service.page_count(total, limit),
    )


@router.delete("/transformations/{transformation_id}")
def delete_transformation(
    transformation_id: str,
    _admin: str = Depends(require_admin),
    session: Session = Depends(get_session),
):
    transformation_service.delete_transformation(transformation_id, session)
    return {"success": True}


@router.get("/stats")
def stats(_admin: str = Depends(require_admin), session: Session = Depends(get_session)):
    """상태별 변환 건수."""
    return transformation_service.status_counts(session)
