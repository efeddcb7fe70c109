"""Art & See 상품 카탈로그.

카테고리 × 스타일 × 무드 × 구매 형식(디지털 / 프린트 / 핸드메이드) 조합의
정적 데이터와, Medusa 상품·변형(variant)을 만드는 규칙을 한곳에 모은다.
Medusa에는 카테고리마다 상품 1개(handle = art-transform-<category>)가 있고,
각 상품은 Style / Type / Size / Mood 옵션 조합마다 변형 1개를 갖는다.
"""

from dataclasses import dataclass

CATEGORIES = ("pets", "family", "kids", "couples", "self-portrait")
STYLES = ("oil-painting", "acrylic", "pencil-sketch", "watercolor", "charcoal", "pastel")
MOODS = ("classic", "royal_noble", "neoclassical", "heritage")
PRODUCT_TYPES = ("digital", "print", "handmade")

PRINT_SIZES = ("8x10", "11x14", "16x20", "20x24")
HANDMADE_SIZES = ("12x16", "18x24", "24x36", "40x60")
DIGITAL_SIZE = "default"

CATEGORY_LABELS = {
    "pets": "Pet",
    "family": "Family",
    "kids": "Kids",
    "couples": "Couples",
    "self-portrait": "Self Portrait",
}

STYLE_LABELS = {
    "oil-painting": "Oil Painting",
    "acrylic": "Acrylic",
    "pencil-sketch": "Pencil Sketch",
    "watercolor": "Watercolor",
    "charcoal": "Charcoal",
    "pastel": "Pastel",
}

# 프롬프트에서 쓰는 기법 이름
STYLE_TECHNIQUES = {
    "oil-painting": "oil painting",
    "acrylic": "acrylic painting",
    "pencil-sketch": "pencil sketch",
    "watercolor": "watercolor painting",
    "charcoal": "charcoal drawing",
    "pastel": "pastel artwork",
}

MOOD_LABELS = {
    "classic": "Classic",
    "royal_noble": "Royal",
    "neoclassical": "Neoclassical",
    "heritage": "Heritage",
}

# Medusa 가격은 달러(major unit) 단위
DIGITAL_PRICE = 29
PRINT_PRICES = {"8x10": 89, "11x14": 119, "16x20": 199, "20x24": 299}
HANDMADE_PRICES = {"12x16": 269.95, "18x24": 349.95, "24x36": 479.95, "40x60": 769.95}
HANDMADE_MULTIPLIER = {"family": 1.3, "couples": 1.2}

COLLECTION_HANDLE = "art-transform"


@dataclass(frozen=True)
class StyleInfo:
    id: str
    name: str
    description: str
    intensity: int
    texture: int
    detail: int


STYLE_INFO = {
    "oil-painting": StyleInfo(
        "oil-painting", "Oil Painting",
        "Rich, textured brushstrokes with vibrant colors and classic artistic depth",
        95, 90, 85,
    ),
    "acrylic": StyleInfo(
        "acrylic", "Acrylic",
        "Bold, modern strokes with vivid colors and contemporary energy",
        90, 85, 80,
    ),
    "pencil-sketch": StyleInfo(
        "pencil-sketch", "Pencil Sketch",
        "Detailed graphite shading with realistic cross-hatching and fine lines",
        70, 60, 95,
    ),
    "watercolor": StyleInfo(
        "watercolor", "Watercolor",
        "Soft, flowing colors with translucent washes and delicate blooms",
        75, 70, 65,
    ),
    "charcoal": StyleInfo(
        "charcoal", "Charcoal",
        "Dramatic contrasts with smoky, expressive shading and bold strokes",
        85, 75, 80,
    ),
    "pastel": StyleInfo(
        "pastel", "Pastel",
        "Soft, chalky texture with gentle blended colors and muted tones",
        65, 80, 70,
    ),
}


@dataclass(frozen=True)
class VariantSpec:
    style: str
    type: str
    size: str
    mood: str
    title: str
    amount: float

    @property
    def options(self) -> dict[str, str]:
        return {"Style": self.style, "Type": self.type, "Size": self.size, "Mood": self.mood}


def product_handle(category: str) -> str:
    return f"art-transform-{category}"


def sizes_for_type(product_type: str) -> tuple[str, ...]:
    if product_type == "digital":
        return (DIGITAL_SIZE,)
    if product_type == "print":
        return PRINT_SIZES
    if product_type == "handmade":
        return HANDMADE_SIZES
    return ()


def handmade_price(category: str, size: str) -> float:
    base = HANDMADE_PRICES[size]
    return round(base * HANDMADE_MULTIPLIER.get(category, 1), 2)


def variant_price(category: str, product_type: str, size: str) -> float:
    if product_type == "digital":
        return DIGITAL_PRICE
    if product_type == "print":
        return PRINT_PRICES[size]
    return handmade_price(category, size)


def variant_title(style: str, product_type: str, size: str, mood: str) -> str:
    style_label = STYLE_LABELS[style]
    mood_label = MOOD_LABELS[mood]
    if product_type == "digital":
        return f"{style_label} - Digital Download - {mood_label}"
    if product_type == "print":
        return f"{style_label} Print {size} - {mood_label}"
    return f"{style_label} Handmade {size} - {mood_label}"


def build_variants_for_category(category: str) -> list[VariantSpec]:
    """카테고리 상품 하나에 들어갈 전체 변형 목록 (무드 4 × 스타일 6 × 사이즈 9 = 216)."""
    variants = []
    for mood in MOODS:
        for style in STYLES:
            for product_type in PRODUCT_TYPES:
                for size in sizes_for_type(product_type):
                    variants.append(
                        VariantSpec(
                            style=style,
                            type=product_type,
                            size=size,
                            mood=mood,
                            title=variant_title(style, product_type, size, mood),
                            amount=variant_price(category, product_type, size),
                        )
                    )
    return variants


def product_option_values() -> list[dict]:
    """Medusa 상품 생성 시 options 필드."""
    return [
        {"title": "Style", "values": list(STYLES)},
        {"title": "Type", "values": list(PRODUCT_TYPES)},
        {"title": "Size", "values": [DIGITAL_SIZE, *PRINT_SIZES, *HANDMADE_SIZES]},
        {"title": "Mood", "values": list(MOODS)},
    ]


# --- 갤러리 이미지 URL ---


def variant_image_urls(
    gallery_base_url: str, category: str, style: str, mood: str
) -> tuple[str, str, str]:
    """(카테고리, 스타일, 무드) 조합의 갤러리 이미지 3장 URL.

    classic은 접두사 없이 pets-oil-painting-1.png,
    나머지 무드는 royal_noble--pets-oil-painting-1.png 형식.
    """
    base = gallery_base_url.rstrip("/")
    name = gallery_image_stem(category, style, mood)
    return (f"{base}/{name}-1.png", f"{base}/{name}-2.png", f"{base}/{name}-3.png")


def gallery_image_stem(category: str, style: str, mood: str) -> str:
    prefix = "" if mood == "classic" else f"{mood}--"
    return f"{prefix}{category}-{style}"


def product_image_urls(gallery_base_url: str, category: str) -> tuple[str, str, str]:
    return variant_image_urls(gallery_base_url, category, "oil-painting", "classic")


def all_variant_keys() -> list[tuple[str, str, str]]:
    return [
        (category, style, mood)
        for category in CATEGORIES
        for style in STYLES
        for mood in MOODS
    ]
