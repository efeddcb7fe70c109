"""랜딩 페이지 갤러리 이미지용 텍스트 전용 프롬프트.

원본 사진 없이 카테고리 × 스타일 × 무드 예시 이미지를 만들 때 쓴다.
같은 조합이라도 이미지 번호마다 피사체·포즈·구도·배경이 달라지도록
차원별 목록을 스타일마다 다른 오프셋으로 순환한다.
"""

from dataclasses import dataclass

from prompt.presets import fill_placeholders
from prompt.template import build_mood_prompt, get_style_block
from service.catalog import STYLE_LABELS, STYLES, STYLE_TECHNIQUES

CATEGORY_LABELS = {
    "pets": "pet portrait",
    "family": "family portrait",
    "kids": "child portrait",
    "couples": "couple portrait",
    "self-portrait": "self-portrait",
}


@dataclass(frozen=True)
class VariationDimensions:
    subjects: tuple[str, ...]
    poses: tuple[str, ...]
    angles: tuple[str, ...]
    backgrounds: tuple[str, ...]


CATEGORY_DIMENSIONS = {
    "pets": VariationDimensions(
        subjects=("golden retriever", "tabby cat", "black labrador", "siamese cat",
                  "german shepherd", "persian cat", "beagle", "dachshund", "bengal cat"),
        poses=("profile view", "facing forward", "sitting", "lying down",
               "playful alert pose", "head tilted", "ears perked"),
        angles=("close-up", "three-quarter view", "head and shoulders",
                "slightly from above", "low angle"),
        backgrounds=("soft green foliage", "warm indoor", "neutral studio",
                     "outdoor natural light", "autumn leaves", "cozy couch", "garden",
                     "beach tones"),
    ),
    "family": VariationDimensions(
        subjects=("parents with two children, smiling",
                  "grandparents with grandchildren, standing or sitting side by side",
                  "siblings laughing", "single parent with child",
                  "extended family, 2-4 people",
                  "father and daughter, natural side-by-side pose",
                  "mother and son, natural side-by-side pose"),
        poses=("joyful smiling", "warm and tender", "laughing together", "playful",
               "happy content", "cheerful", "radiant"),
        angles=("three-quarter group", "front-facing", "natural candid angle",
                "slightly from above", "intimate close grouping"),
        backgrounds=("outdoor park", "home interior", "studio portrait", "garden setting",
                     "beach", "cozy living room", "rustic outdoor"),
    ),
    "kids": VariationDimensions(
        subjects=("toddler", "school-age child", "baby", "preteen", "child with toy"),
        poses=("joyful smiling", "playful curious", "gentle serene", "active energetic",
               "peaceful resting", "concentrated focus"),
        angles=("close-up face", "three-quarter", "full upper body", "slightly from above",
                "candid side angle"),
        backgrounds=("soft natural light", "warm indoor", "outdoor", "neutral studio",
                     "playroom", "garden", "window light"),
    ),
    "couples": VariationDimensions(
        subjects=("young man and woman couple", "middle-aged man and woman",
                  "mixed-gender couple", "newlyweds", "man and woman, long-term partners"),
        poses=("romantic tender, both smiling", "joyful laughing together",
               "warm embrace, happy", "forehead touch, content", "dancing pose",
               "cheerful together"),
        angles=("three-quarter", "front-facing", "intimate close-up", "profile embrace",
                "natural candid"),
        backgrounds=("outdoor sunset", "studio", "home interior", "urban setting",
                     "vineyard", "coastal", "cozy café"),
    ),
    "self-portrait": VariationDimensions(
        subjects=("young woman", "young man", "middle-aged woman", "middle-aged man",
                  "older woman", "older man"),
        poses=("warm smile", "gentle smile", "confident friendly gaze", "relaxed content",
               "joyful expression", "approachable"),
        angles=("close-up face", "upper body", "three-quarter angle", "profile",
                "slightly from above"),
        backgrounds=("soft neutral", "warm tone", "minimal studio", "subtle gradient",
                     "window backlight", "muted color field"),
    ),
}

FORMAT_BLOCK_GENERATION = """

Format:
Output aspect ratio: 3:4 portrait
Output must be a cropped end-to-end image; the artwork fills the entire frame edge to edge with no visible borders
Show only the artwork surface: no frame, canvas edge, paper edge, wall, or easel
Focus entirely on the medium and technique without external elements
Photorealistic painted portrait that looks like a real photograph of a painting. Not illustration, not cartoon, not sketch-like, not stylized or graphic.
Warm, uplifting, happy mood. Subject must be smiling or have a positive, content expression. No sad, pensive, melancholic, or depressed looks.
Simple composition. For family/kids: 2-4 people max, avoid crowded scenes.
Wholesome, appropriate poses. No inappropriate physical contact. Child-safe composition for kids/family.
Bright, warm lighting. Avoid dark, gothic, melancholic, or depressing atmosphere.
Each image must feel distinctly different: vary subject, pose, expression, and composition to avoid repetition.

Negative prompt:
No frames, no walls, no canvas edges, no paper edges, no canvas mounting, no easels, no hanging display, no room context, no visible borders or margins.
No illustration style, no cartoon, no sketch-like look, no graphic art, no anime.
No sad expressions, no frowning, no depressed mood, no melancholic, no pensive, no somber.
No dark atmosphere, no gothic, no crowded composition, no inappropriate poses, no awkward physical contact.
No surrealism, no abstract, no dreamlike, no fantasy elements, no distorted features, no artistic exaggeration."""


def build_variation(category: str, img_index: int, style: str) -> str:
    """이미지 번호(1부터)와 스타일로 피사체/포즈/구도/배경 조합을 고른다."""
    dims = CATEGORY_DIMENSIONS.get(category)
    if dims is None:
        return CATEGORY_LABELS.get(category, "portrait")

    i = img_index - 1
    style_offset = (STYLES.index(style) + 1) * 3 if style in STYLES else 0
    subject = dims.subjects[(i + style_offset) % len(dims.subjects)]
    pose = dims.poses[(i + 1 + style_offset) % len(dims.poses)]
    angle = dims.angles[(i + 2 + style_offset) % len(dims.angles)]
    background = dims.backgrounds[(i + 3 + style_offset) % len(dims.backgrounds)]

    return f"{subject}, {pose}, {angle} angle, {background} background"


def build_gallery_prompt(
    style: str, category: str, img_index: int | None = None, mood: str = "classic"
) -> str:
    technique = STYLE_TECHNIQUES.get(style, "oil painting")
    if img_index is not None and img_index > 0:
        variation = build_variation(category, img_index, style)
    else:
        variation = CATEGORY_LABELS.get(category, "portrait")

    mood_template = build_mood_prompt(mood) if mood != "classic" else ""
    if mood_template:
        vision = fill_placeholders(mood_template, STYLE_LABELS.get(style, "Oil Painting"), f"a {variation}")
        base = (
            f"Create an artwork that fulfills this exact vision: {vision} "
            f"The result must be a realistic handmade {technique} using authentic "
            f"{technique} techniques.{get_style_block(style)}"
        )
    else:
        base = (
            f"Create a unique, distinctive handmade {technique} of a {variation}. "
            f"Use authentic {technique} techniques. The result must look like a photorealistic "
            "painting, not an illustration or sketch. The subject should appear happy, warm, "
            "or content. Make the composition, subject, pose, expression, and setting "
            "distinctly different; avoid repetitive or formulaic results."
        )
    return base + FORMAT_BLOCK_GENERATION
