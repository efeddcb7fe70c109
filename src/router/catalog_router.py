from fastapi import APIRouter

from prompt.presets import PRESET_DESCRIPTIONS, PRESET_IDS, PRESET_LABELS, mood_slug_for_url
from service.catalog import (
    CATEGORIES,
    CATEGORY_LABELS,
    PRODUCT_TYPES,
    STYLE_INFO,
    STYLES,
    handmade_price,
    sizes_for_type,
    variant_price,
)

router = APIRouter(prefix="/api", tags=["catalog"])


def _purchase_options(category: str) -> list[dict]:
    return [
        {
            "type": product_type,
            "sizes": [
                {"size": size, "price": variant_price(category, product_type, size)}
                for size in sizes_for_type(product_type)
            ],
        }
        for product_type in PRODUCT_TYPES
    ]


@router.get("/catalog")
def get_catalog():
    """스타일 피커와 구매 단계가 쓰는 정적 카탈로그."""
    return {
        "styles": [
            {
                "id": info.id,
                "name": info.name,
                "description": info.description,
                "intensity": info.intensity,
                "texture": info.texture,
                "detail": info.detail,
            }
            for info in (STYLE_INFO[s] for s in STYLES)
        ],
        "moods": [
            {
                "id": preset_id,
                "label": PRESET_LABELS[preset_id],
                "description": PRESET_DESCRIPTIONS[preset_id],
                "slug": mood_slug_for_url(preset_id),
            }
            for preset_id in PRESET_IDS
        ],
        "categories": [
            {
                "id": category,
                "label": CATEGORY_LABELS[category],
                "purchaseOptions": _purchase_options(category),
                "handmadeFrom": handmade_price(category, sizes_for_type("handmade")[0]),
            }
            for category in CATEGORIES
        ],
    }
