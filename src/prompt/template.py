"""prompt_template.json 기반 프롬프트 조각 생성기.

템플릿 JSON 하나가 유일한 원본이다. 여기 함수들은 JSON의 값을 읽어
문자열로 이어 붙일 뿐이며, 키가 없으면 예외 대신 빈 문자열을 돌려준다.

구조:
    identity / identity_guard   얼굴·털 보존 규칙 (사람 / 동물)
    format                      풀블리드 규칙 + 네거티브 프롬프트
    critical_rules              박물관 품질 규칙
    moods.<id>                  Royal / Neoclassical / Heritage 무드
    styles.<id>                 매체(유화, 연필 등)별 기법 설명
"""

import json
from pathlib import Path

TEMPLATE_PATH = Path(__file__).resolve().parent / "prompt_template.json"

MOOD_IDS = ("royal_noble", "neoclassical", "heritage")

_DEFAULT_MUSEUM_RULE = (
    "MUSEUM QUALITY: every output must look like it belongs in a national gallery"
)
_DEFAULT_SUBJECT_RULE = (
    "THE SUBJECT IS THE STAR: 60-70% of frame, sharpest detail, brightest light"
)

# 무드 프롬프트 첫 문장. [MEDIUM], [SUBJECT]는 presets.resolve_style_preset_prompt가 채운다.
_MOOD_HEADER = (
    "[MEDIUM] portrait of [SUBJECT]. Authentic masterwork painting, not AI-generated, "
    "not photo filter; depth and craftsmanship of Old Masters."
)

_FACIAL_NEGATIVES = (
    "No altered facial features, no changed facial expression, no changed hairstyle, "
    "no added or removed facial hair, no idealized or beautified face, no aged or "
    "de-aged face, no changed skin tone, no changed eye color, no changed nose shape, "
    "no changed lip shape."
)


def load_template(path: Path = TEMPLATE_PATH) -> dict:
    with path.open(encoding="utf-8") as f:
        return json.load(f)


_template: dict = load_template()


def _is_pet(category: str | None) -> bool:
    return category == "pets"


def get_identity_anchor(category: str | None = None) -> str:
    """얼굴/털 보존 규칙. 반려동물 카테고리만 동물용 문구를 쓴다."""
    key = "animals" if _is_pet(category) else "humans"
    return _template.get("identity", {}).get(key, "")


def get_identity_guard(category: str | None = None) -> str:
    """프롬프트 맨 앞에 두는 강한 보존 규칙. anchor보다 단호한 문장."""
    key = "animals" if _is_pet(category) else "humans"
    return _template.get("identity_guard", {}).get(key, "")


def get_format_block() -> str:
    rules = _template.get("critical_rules", [])
    museum = rules[0] if len(rules) > 0 else _DEFAULT_MUSEUM_RULE
    subject_star = rules[1] if len(rules) > 1 else _DEFAULT_SUBJECT_RULE

    fmt = _template.get("format", {})
    full_bleed = fmt.get("full_bleed", {})
    negative = fmt.get("negative_prompt", "")

    return (
        "\n\n"
        f"{museum}: Visible brushstrokes, craquelure, warm varnish sheen; {subject_star}; "
        "subject GLOWS; rim light on hair/shoulders/fur; Rembrandt triangle on faces. "
        "Indistinguishable from a painting in the National Gallery or the Met.\n\n"
        "Format: SUBJECT 60-70% & FULL BLEED (artwork covers 100% of surface):\n"
        f"{full_bleed.get('rule', '')} {full_bleed.get('paper_styles', '')} "
        "Show ONLY the artwork: no frame, no canvas/paper edge, no wall, no easel. "
        "Animals ALERT and DIGNIFIED.\n\n"
        "Negative prompt (always apply):\n"
        f"{negative}\n"
        f"{_FACIAL_NEGATIVES}"
    )


def get_style_block(style_id: str) -> str:
    """styles.<id>의 medium + technique + coverage (+ negative). 없는 스타일이면 ""."""
    s = _template.get("styles", {}).get(style_id)
    if not s:
        return ""
    coverage = s.get("full_coverage") or s.get("coverage") or ""
    neg = f" Negative: {s['negative_prompt']}." if s.get("negative_prompt") else ""
    return f" {s.get('medium', '')}. {s.get('technique', '')}. {coverage}.{neg}"


def _flatten_attire(obj) -> list[str]:
    if not isinstance(obj, dict):
        return []
    out = []
    for v in obj.values():
        if isinstance(v, list):
            out.append(", ".join(str(x) for x in v))
        elif isinstance(v, str) and v.strip():
            out.append(v.strip())
    return out


def _background_line(bg: dict) -> str:
    line = f"BACKGROUND: {bg['type']}"
    if bg.get("description"):
        line += f": {bg['description']}"
    if bg.get("elements"):
        line += " " + "; ".join(bg["elements"])
    if bg.get("priority"):
        line += f". {bg['priority']}"
    for key, label in (("interior", "Interior"), ("exterior", "Exterior")):
        elements = (bg.get(key) or {}).get("elements")
        if elements:
            line += f" {label}: " + "; ".join(elements)
    if bg.get("technique"):
        line += f" {bg['technique']}"
    if bg.get("style_reference"):
        line += f" ({bg['style_reference']})"
    for key in ("narrative", "atmosphere", "brightness"):
        if bg.get(key):
            line += f" {bg[key]}"
    return line.strip().rstrip(".") + "."


def build_mood_prompt(mood_id: str) -> str:
    """무드 프롬프트 템플릿을 만든다. [MEDIUM], [SUBJECT] 자리표시자를 포함한다.

    없는 무드면 "" 를 반환.
    """
    m = _template.get("moods", {}).get(mood_id)
    if not m:
        return ""

    parts = [_MOOD_HEADER, m.get("concept", ""), "SUBJECT 60-70% of frame."]

    animal_bits = _flatten_attire(m.get("attire_animals"))
    if animal_bits:
        parts.append(
            "If [SUBJECT] is an animal: ATTIRE, ANIMALS ONLY: " + ". ".join(animal_bits) + "."
        )

    human_bits = _flatten_attire(m.get("attire_humans"))
    if human_bits:
        parts.append("If human: vary creatively: " + "; ".join(human_bits) + ".")

    bg = m.get("background")
    if isinstance(bg, dict) and bg.get("type"):
        parts.append(_background_line(bg))

    parts.append(f"LIGHTING: {m.get('lighting', '')}")
    parts.append("PALETTE: " + ", ".join(m.get("palette", [])) + ".")

    return " ".join(p for p in parts if p)
