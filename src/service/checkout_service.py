"""Medusa 체크아웃.

구매 선택(카테고리, 스타일, 타입, 사이즈, 무드)을 Medusa 상품 변형으로 풀고,
카트를 만들어 라인 아이템을 넣은 뒤 스토어프론트 체크아웃 URL을 돌려준다.
"""

from dataclasses import dataclass
from urllib.parse import urlencode

from loguru import logger
from sqlmodel import Session

from client.medusa import MedusaStoreClient
from core.config import settings
from core.exceptions import (
    CheckoutFailed,
    InvalidCategory,
    InvalidPurchaseOption,
    ProductNotFound,
    UpstreamError,
    VariantNotFound,
)
from model.transformation import COMPLETED, Transformation
from prompt.presets import catalog_mood
from service.catalog import (
    CATEGORIES,
    DIGITAL_SIZE,
    PRODUCT_TYPES,
    product_handle,
    sizes_for_type,
    variant_image_urls,
)
from service.transformation_service import normalize_mood, validate_style
from utility.timer import timer

SUPPORTED_LOCALES = ("de", "fr", "es", "it", "pt", "ko", "ja")
SOURCE = "art-transform"


@dataclass(frozen=True)
class PurchaseSelection:
    handle: str
    category: str | None
    style: str
    type: str
    size: str
    mood: str


@dataclass(frozen=True)
class CheckoutResult:
    cart_id: str
    variant_id: str
    checkout_url: str


def checkout_locale(locale: str | None) -> str | None:
    """지원하는 체크아웃 로케일만 남긴다."""
    if locale and locale.lower() in SUPPORTED_LOCALES:
        return locale.lower()
    return None


def resolve_selection(
    style: str,
    product_type: str,
    size: str | None = None,
    mood: str | None = None,
    category: str | None = None,
    handle: str | None = None,
) -> PurchaseSelection:
    """요청 값을 검증하고 Medusa 옵션 값으로 정규화한다."""
    if not handle:
        if category not in CATEGORIES:
            raise InvalidCategory(f"Unknown category: {category}")
        handle = product_handle(category)

    validate_style(style)
    if product_type not in PRODUCT_TYPES:
        raise InvalidPurchaseOption(f"Unknown product type: {product_type}")

    if product_type == "digital":
        size = DIGITAL_SIZE
    elif size not in sizes_for_type(product_type):
        raise InvalidPurchaseOption(f"Size {size} is not available for {product_type}")

    return PurchaseSelection(
        handle=handle,
        category=category,
        style=style,
        type=product_type,
        size=size,
        mood=catalog_mood(normalize_mood(mood)),
    )


def variant_options(variant: dict, product: dict) -> dict[str, str]:
    """변형의 옵션을 {"Style": "...", ...} 형태로 펼친다.

    Medusa 응답은 option.title을 포함하거나 option_id만 주는 경우가 있어
    상품의 options 목록으로 제목을 보충한다.
    """
    titles = {opt.get("id"): opt.get("title") for opt in product.get("options") or []}
    values = {}
    for opt in variant.get("options") or []:
        title = (opt.get("option") or {}).get("title") or titles.get(opt.get("option_id"))
        if title:
            values[title] = opt.get("value")
    return values


def find_variant(product: dict, selection: PurchaseSelection) -> dict:
    wanted = {
        "Style": selection.style,
        "Type": selection.type,
        "Size": selection.size,
        "Mood": selection.mood,
    }
    for variant in product.get("variants") or []:
        options = variant_options(variant, product)
        if all(options.get(key) == value for key, value in wanted.items()):
            return variant
    raise VariantNotFound(
        f"No variant for {selection.style}/{selection.type}/{selection.size}/{selection.mood}"
    )


def checkout_url(cart_id: str, locale: str | None = None) -> str:
    base = settings.CHECKOUT_BASE_URL.rstrip("/")
    prefix = f"/{locale}" if locale else ""
    return f"{base}{prefix}/checkout?{urlencode({'cart_id': cart_id})}"


def preview_image_url(
    selection: PurchaseSelection, transformation: Transformation | None
) -> str | None:
    """변환 결과가 외부 호스팅되어 있으면 그 URL, 아니면 갤러리 대표 이미지."""
    if transformation is not None and transformation.status == COMPLETED:
        url = transformation.transformed_image_url or ""
        if url.startswith("http"):
            return url
    if selection.category:
        return variant_image_urls(
            settings.GALLERY_BASE_URL, selection.category, selection.style, selection.mood
        )[0]
    return None


def create_checkout(
    selection: PurchaseSelection,
    client: MedusaStoreClient,
    session: Session,
    locale: str | None = None,
    transformation_id: str | None = None,
) -> CheckoutResult:
    """상품·변형을 찾고 카트를 만들어 체크아웃 URL을 반환한다.

    - 상품 없음: ProductNotFound (404)
    - 옵션이 맞는 변형 없음: VariantNotFound (404)
    - Medusa 호출 실패: CheckoutFailed (502)
    """
    transformation = session.get(Transformation, transformation_id) if transformation_id else None
    locale = checkout_locale(locale)

    with timer(f"medusa checkout {selection.handle}"):
        try:
            product = client.get_product(selection.handle)
            if product is None:
                raise ProductNotFound(f"Product {selection.handle} not found")
            variant = find_variant(product, selection)

            metadata = {
                "source": SOURCE,
                "productTitle": product.get("title"),
                "productStyle": selection.style,
                "productType": selection.type,
                "productSize": selection.size,
                "productMood": selection.mood,
                "transformationId": transformation.id if transformation else None,
                "previewImageUrl": preview_image_url(selection, transformation),
            }
            cart_metadata = {"source": SOURCE}
            if locale:
                cart_metadata["locale"] = locale

            cart = client.create_cart(cart_metadata)
            client.add_line_item(cart["id"], variant["id"], metadata)
        except UpstreamError as e:
            logger.error(f"Medusa checkout failed: {e.message}")
            raise CheckoutFailed from e

    logger.info(f"Checkout cart {cart['id']} ({selection.handle} / {variant['id']})")
    return CheckoutResult(
        cart_id=cart["id"],
        variant_id=variant["id"],
        checkout_url=checkout_url(cart["id"], locale),
    )
