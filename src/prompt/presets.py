"""무드 프리셋 (Classic, Smart pick, Royal, Neoclassical, Heritage).

선택한 매체(유화, 아크릴 등)와 결합해 변환 프롬프트의 "비전" 문장을 만든다.
none / intelligent 는 중립 프리셋이라 추가 프롬프트가 없다.
"""

import re

from prompt.template import build_mood_prompt

PRESET_IDS = ("none", "intelligent", "neoclassical", "royal_noble", "heritage")
NEUTRAL_PRESETS = ("none", "intelligent")

PRESET_LABELS = {
    "none": "Classic",
    "intelligent": "Smart pick",
    "neoclassical": "Neoclassical",
    "royal_noble": "Royal",
    "heritage": "Heritage",
}

PRESET_DESCRIPTIONS = {
    "none": "No extra mood, just your chosen medium",
    "intelligent": "AI picks the best look from your photo",
    "neoclassical": "Clean Greco-Roman, marble, sculptural",
    "royal_noble": "Baroque palace, throne, crowns, ermine",
    "heritage": "Old money, library, country mansion, tweed",
}

# URL 세그먼트가 있는 무드만 슬러그를 갖는다.
MOOD_SLUG_TO_ID = {
    "royal": "royal_noble",
    "neoclassical": "neoclassical",
    "heritage": "heritage",
}
MOOD_ID_TO_SLUG = {v: k for k, v in MOOD_SLUG_TO_ID.items()}

CATEGORY_SUBJECT = {
    "pets": "the subject",
    "family": "ALL subjects (every person visible in the photo)",
    "kids": "ALL subjects (every child visible in the photo)",
    "couples": "BOTH subjects (the couple in the photo)",
    "self-portrait": "the subject",
}


def is_neutral_mood(preset_id: str) -> bool:
    return preset_id in NEUTRAL_PRESETS


def mood_slug_for_url(preset_id: str) -> str | None:
    return MOOD_ID_TO_SLUG.get(preset_id)


def catalog_mood(preset_id: str) -> str:
    """프리셋 ID → Medusa Mood 옵션 값. 중립 프리셋은 classic."""
    return "classic" if is_neutral_mood(preset_id) else preset_id


def fill_placeholders(template: str, medium_name: str, subject: str) -> str:
    filled = template.replace("[MEDIUM]", medium_name).replace("[SUBJECT]", subject)
    return re.sub(r"\s+", " ", filled).strip()


def resolve_style_preset_prompt(
    preset_id: str, medium_name: str, category: str | None = None
) -> str | None:
    """프리셋의 무드 프롬프트를 완성한다.

    [MEDIUM]은 매체 표시 이름으로, [SUBJECT]는 카테고리별 피사체 문구로 바꾼다.
    중립 프리셋이거나 템플릿에 없는 무드면 None.
    """
    if is_neutral_mood(preset_id):
        return None
    template = build_mood_prompt(preset_id)
    if not template:
        return None
    subject = CATEGORY_SUBJECT.get(category or "", "the subject")
    return fill_placeholders(template, medium_name, subject)
