from datetime import datetime

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Response
from fastapi.responses import RedirectResponse
from sqlmodel import Session

from client.gemini import GeminiImageGenerator
from client.imgbb import ImgbbUploader
from core.dependencies import get_current_user, get_image_generator, get_imgbb_uploader
from core.schemas import CamelModel
from model.database import get_session
from model.user import User
from service import transformation_service

router = APIRouter(prefix="/api/transform", tags=["transform"])


# --- 요청/응답 스키마 ---

class TransformRequest(CamelModel):
    original_image_url: str
    style: str
    status: str | None = None  # 클라이언트가 보내도 무시 (항상 processing으로 시작)
    mood: str | None = None
    category: str | None = None


class TransformationResponse(CamelModel):
    id: str
    user_id: str | None = None
    original_image_url: str
    transformed_image_url: str | None = None
    style: str
    mood: str
    category: str | None = None
    status: str
    error_message: str | None = None
    created_at: datetime
    completed_at: datetime | None = None


class TransformCreatedResponse(CamelModel):
    success: bool = True
    transformation_id: str
    transformation: TransformationResponse


# --- 엔드포인트 ---

@router.post("", response_model=TransformCreatedResponse)
def create_transformation(
    req: TransformRequest,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(get_current_user),
    generator: GeminiImageGenerator = Depends(get_image_generator),
    uploader: ImgbbUploader | None = Depends(get_imgbb_uploader),
    session: Session = Depends(get_session),
):
    """변환 요청: 크레딧 1 차감 → processing 행 생성 → 백그라운드 생성 예약.

    결과는 GET /api/transform/{id} 폴링으로 확인한다.
    """
    record = transformation_service.create_transformation(
        req.original_image_url,
        req.style,
        current_user.id,
        session,
        mood=req.mood,
        category=req.category,
    )
    background_tasks.add_task(
        transformation_service.run_transformation,
        record.id,
        session.get_bind(),
        generator,
        uploader,
    )
    return TransformCreatedResponse(
        transformation_id=record.id,
        transformation=TransformationResponse.model_validate(record),
    )


@router.get("/{transformation_id}", response_model=TransformationResponse)
def get_transformation(transformation_id: str, session: Session = Depends(get_session)):
    """폴링용 현재 상태 조회."""
    return transformation_service.get_transformation(transformation_id, session)


@router.get("/{transformation_id}/image")
def get_transformation_image(
    transformation_id: str,
    w: int | None = Query(default=None, ge=16, le=4096),
    q: int = Query(default=85, ge=10, le=100),
    watermark: bool = False,
    session: Session = Depends(get_session),
):
    """결과 이미지 바이트.

    - w: 가로 폭으로 축소 (관리자 목록 썸네일 등)
    - watermark: 미리보기용 "ART & SEE" 워터마크
    외부 호스팅된 결과를 가공 없이 요청하면 그 URL로 리다이렉트한다.
    """
    record = transformation_service.get_transformation(transformation_id, session)
    url = record.transformed_image_url or ""
    if url.startswith("http") and w is None and not watermark:
        return RedirectResponse(url, status_code=302)

    content, mime = transformation_service.render_result_image(
        record, width=w, quality=q, watermarked=watermark
    )
    return Response(content=content, media_type=mime, headers={"Cache-Control": "private, max-age=3600"})
