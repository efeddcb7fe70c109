"""사진 변환용 최종 프롬프트 조립."""

from prompt.presets import resolve_style_preset_prompt
from prompt.template import (
    get_format_block,
    get_identity_anchor,
    get_identity_guard,
    get_style_block,
)
from service.catalog import STYLE_LABELS, STYLE_TECHNIQUES


def build_transform_prompt(style: str, mood: str = "none", category: str | None = None) -> str:
    """업로드 사진을 선택한 매체·무드로 그리게 하는 Gemini 지시문.

    순서: 보존 규칙(guard) → 무드 비전 또는 매체 지시 → 스타일 블록
    → 보존 규칙(anchor) → 포맷/네거티브 블록.
    """
    technique = STYLE_TECHNIQUES.get(style, "oil painting")
    medium_name = STYLE_LABELS.get(style, "Oil Painting")

    parts = [get_identity_guard(category)]

    vision = resolve_style_preset_prompt(mood, medium_name, category)
    if vision:
        parts.append(f"Create an artwork that fulfills this exact vision: {vision}")
    else:
        parts.append(
            f"Transform this photo into a realistic handmade {technique} "
            f"using authentic {technique} techniques."
        )

    style_block = get_style_block(style).strip()
    if style_block:
        parts.append(style_block)

    parts.append(get_identity_anchor(category))

    return "\n\n".join(p for p in parts if p) + get_format_block()
