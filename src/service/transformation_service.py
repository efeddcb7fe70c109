"""사진 → 그림 변환 작업.

요청 시점에는 크레딧 차감 + processing 행 생성만 하고 바로 응답한다.
실제 Gemini 호출은 run_transformation이 응답 이후 백그라운드에서 수행하며,
종료 상태(completed/failed)를 기록하는 유일한 작성자다.
"""

import math
from datetime import UTC, datetime

import requests
from loguru import logger
from PIL import UnidentifiedImageError
from sqlalchemy import func
from sqlalchemy.engine import Engine
from sqlmodel import Session, col, select

from client.gemini import GeminiImageGenerator
from client.imgbb import ImgbbUploader
from core.config import settings
from core.exceptions import (
    ImageNotReady,
    InvalidCategory,
    InvalidImage,
    InvalidMood,
    InvalidStatusTransition,
    InvalidStyle,
    TransformationNotFound,
    UpstreamError,
)
from model.transformation import (
    ALLOWED_TRANSITIONS,
    COMPLETED,
    FAILED,
    PROCESSING,
    STATUSES,
    TERMINAL_STATUSES,
    Transformation,
)
from processor.operations import (
    aspect_ratio_for,
    decode_data_url,
    image_to_bytes,
    load_image,
    optimize_for_upload,
    thumbnail,
    to_webp,
    watermark,
)
from prompt.builder import build_transform_prompt
from prompt.presets import MOOD_SLUG_TO_ID, PRESET_IDS
from service import auth_service
from service.catalog import CATEGORIES, STYLES
from utility.timer import timer

MAX_PAGE_SIZE = 100


# --- 입력 검증 ---


def normalize_mood(mood: str | None) -> str:
    """빈 값/classic은 none, URL 슬러그(royal 등)는 프리셋 ID로 바꾼다."""
    if not mood or mood == "classic":
        return "none"
    mood = MOOD_SLUG_TO_ID.get(mood, mood)
    if mood not in PRESET_IDS:
        raise InvalidMood(f"Unknown mood preset: {mood}")
    return mood


def validate_style(style: str) -> str:
    if style not in STYLES:
        raise InvalidStyle(f"Unknown art style: {style}")
    return style


def validate_category(category: str | None) -> str | None:
    if category is None or category == "":
        return None
    if category not in CATEGORIES:
        raise InvalidCategory(f"Unknown category: {category}")
    return category


def prepare_original_image(data_url: str) -> str:
    """업로드 data URL을 검증하고 긴 변 MAX_IMAGE_DIMENSION 이내로 다시 인코딩한다."""
    if not data_url or not data_url.strip():
        raise InvalidImage

    try:
        _, raw = decode_data_url(data_url)
    except ValueError as e:
        raise InvalidImage(str(e)) from e

    if len(raw) > settings.MAX_UPLOAD_BYTES:
        raise InvalidImage("Image is too large")

    try:
        return optimize_for_upload(data_url, settings.MAX_IMAGE_DIMENSION)
    except (UnidentifiedImageError, OSError) as e:
        raise InvalidImage("Could not read the uploaded image") from e


# --- 상태 전이 ---


def transition(record: Transformation, status: str) -> Transformation:
    """상태를 앞으로만 옮긴다. 허용되지 않은 전이는 InvalidStatusTransition."""
    if status not in ALLOWED_TRANSITIONS.get(record.status, ()):
        raise InvalidStatusTransition(
            f"Cannot move transformation from {record.status} to {status}"
        )
    record.status = status
    if status in TERMINAL_STATUSES:
        record.completed_at = datetime.now(UTC)
    return record


# --- 생성 ---


def create_transformation(
    original_image_url: str,
    style: str,
    user_id: str,
    session: Session,
    mood: str | None = None,
    category: str | None = None,
) -> Transformation:
    """요청을 검증하고, 크레딧을 차감하고, processing 상태 행을 만든다.

    크레딧 차감과 행 생성은 한 트랜잭션으로 커밋된다.
    """
    style = validate_style(style)
    mood = normalize_mood(mood)
    category = validate_category(category)
    image_url = prepare_original_image(original_image_url)

    auth_service.deduct_credits(user_id, settings.TRANSFORM_CREDIT_COST, session, commit=False)

    record = Transformation(
        user_id=user_id,
        original_image_url=image_url,
        style=style,
        mood=mood,
        category=category,
    )
    transition(record, PROCESSING)
    session.add(record)
    session.commit()
    session.refresh(record)

    logger.info(f"Transformation {record.id} queued ({style}, mood={mood}, category={category})")
    return record


def _rehost(result_url: str, record: Transformation, uploader: ImgbbUploader) -> str:
    """결과를 ImgBB에 올린다. 실패하면 data URL을 그대로 쓴다."""
    _, raw = decode_data_url(result_url)
    try:
        return uploader.upload(to_webp(load_image(raw)), slug=f"art-transform-{record.id}")
    except UpstreamError as e:
        logger.warning(f"ImgBB re-host failed for {record.id}, keeping data URL: {e.message}")
        return result_url


def run_transformation(
    transformation_id: str,
    bind: Engine,
    generator: GeminiImageGenerator,
    uploader: ImgbbUploader | None = None,
) -> None:
    """백그라운드 작업: Gemini로 이미지를 생성하고 종료 상태를 한 번 기록한다.

    요청 세션은 이미 닫혔으므로 같은 엔진으로 새 세션을 연다.
    어떤 예외든 failed + error_message로 남기고, 재시도하지 않는다.
    """
    with Session(bind) as session:
        record = session.get(Transformation, transformation_id)
        if record is None:
            logger.warning(f"Transformation {transformation_id} disappeared before processing")
            return
        if record.status in TERMINAL_STATUSES:
            logger.warning(f"Transformation {transformation_id} already {record.status}")
            return

        try:
            prompt = build_transform_prompt(record.style, record.mood, record.category)
            _, raw = decode_data_url(record.original_image_url)
            photo = load_image(raw)

            with timer(f"gemini {record.style}/{record.mood}"):
                result_url = generator.generate(prompt, [photo], aspect_ratio=aspect_ratio_for(photo))

            if uploader is not None:
                result_url = _rehost(result_url, record, uploader)

            record.transformed_image_url = result_url
            transition(record, COMPLETED)
            logger.info(f"Transformation {record.id} completed")
        except Exception as e:
            logger.exception(f"Transformation {record.id} failed")
            record.error_message = str(e) or e.__class__.__name__
            transition(record, FAILED)

        session.add(record)
        session.commit()


# --- 조회 ---


def get_transformation(transformation_id: str, session: Session) -> Transformation:
    record = session.get(Transformation, transformation_id)
    if record is None:
        raise TransformationNotFound
    return record


def _download(url: str) -> bytes:
    try:
        res = requests.get(url, timeout=30)
    except requests.RequestException as e:
        raise UpstreamError(f"Could not fetch hosted image: {e}") from e
    if not res.ok:
        raise UpstreamError(f"Could not fetch hosted image: {res.status_code}")
    return res.content


def render_result_image(
    record: Transformation,
    width: int | None = None,
    quality: int = 85,
    watermarked: bool = False,
) -> tuple[bytes, str]:
    """결과 이미지 바이트와 MIME.

    width/watermark 옵션이 없으면 저장된 원본 그대로, 있으면 JPEG로 다시 인코딩한다.
    """
    url = record.transformed_image_url
    if record.status != COMPLETED or not url:
        raise ImageNotReady

    if url.startswith("data:"):
        mime, raw = decode_data_url(url)
    else:
        mime, raw = "image/webp", _download(url)

    if width is None and not watermarked:
        return raw, mime

    img = load_image(raw)
    if width is not None:
        img = thumbnail(img, width)
    if watermarked:
        img = watermark(img)
    return image_to_bytes(img, "image/jpeg", quality=quality), "image/jpeg"


# --- 관리 ---


def list_transformations(
    session: Session,
    page: int = 1,
    limit: int = 30,
    status: str | None = None,
) -> tuple[list[Transformation], int, int, int]:
    """최신순 페이지 조회. (items, total, page, limit)를 반환한다.

    limit은 1..100, page는 1 이상으로 보정한다.
    """
    limit = max(1, min(limit, MAX_PAGE_SIZE))
    page = max(1, page)

    query = select(Transformation)
    count_query = select(func.count()).select_from(Transformation)
    if status:
        query = query.where(col(Transformation.status) == status)
        count_query = count_query.where(col(Transformation.status) == status)

    total = session.exec(count_query).one()
    items = session.exec(
        query.order_by(col(Transformation.created_at).desc())
        .offset((page - 1) * limit)
        .limit(limit)
    ).all()
    return list(items), total, page, limit


def page_count(total: int, limit: int) -> int:
    return max(1, math.ceil(total / limit))


def delete_transformation(transformation_id: str, session: Session) -> None:
    record = get_transformation(transformation_id, session)
    session.delete(record)
    session.commit()
    logger.info(f"Transformation {transformation_id} deleted")


def status_counts(session: Session) -> dict[str, int]:
    """상태별 건수 + total."""
    rows = session.exec(
        select(Transformation.status, func.count()).group_by(Transformation.status)
    ).all()
    counts = {status: 0 for status in STATUSES}
    for status, count in rows:
        counts[status] = count
    counts["total"] = sum(counts.values())
    return counts
