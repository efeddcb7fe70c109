from fastapi import APIRouter, Depends
from sqlmodel import Session

from client.medusa import MedusaStoreClient
from core.dependencies import get_medusa_client
from core.schemas import CamelModel
from model.database import get_session
from service import checkout_service

router = APIRouter(prefix="/api/medusa", tags=["medusa"])


# --- 요청/응답 스키마 ---

class CheckoutRequest(CamelModel):
    category: str | None = None
    product_handle: str | None = None
    style: str
    type: str
    size: str | None = None
    mood: str | None = None
    locale: str | None = None
    transformation_id: str | None = None


class CheckoutResponse(CamelModel):
    cart_id: str
    variant_id: str
    checkout_url: str


# --- 엔드포인트 ---

@router.post("/checkout", response_model=CheckoutResponse)
def checkout(
    req: CheckoutRequest,
    client: MedusaStoreClient = Depends(get_medusa_client),
    session: Session = Depends(get_session),
):
    """구매 선택 → Medusa 카트 생성 → 체크아웃 URL.

    category 또는 productHandle 중 하나로 상품을 지정한다.
    """
    selection = checkout_service.resolve_selection(
        style=req.style,
        product_type=req.type,
        size=req.size,
        mood=req.mood,
        category=req.category,
        handle=req.product_handle,
    )
    result = checkout_service.create_checkout(
        selection,
        client,
        session,
        locale=req.locale,
        transformation_id=req.transformation_id,
    )
    return CheckoutResponse(
        cart_id=result.cart_id,
        variant_id=result.variant_id,
        checkout_url=result.checkout_url,
    )
