"""프롬프트 템플릿 조립 테스트.

모든 (무드, 스타일, 카테고리) 조합에서 자리표시자가 남지 않아야 한다.
"""

import pytest

from prompt.builder import build_transform_prompt
from prompt.gallery import build_gallery_prompt, build_variation
from prompt.presets import PRESET_IDS, fill_placeholders, resolve_style_preset_prompt
from prompt.template import (
    MOOD_IDS,
    build_mood_prompt,
    get_format_block,
    get_identity_anchor,
    get_identity_guard,
    get_style_block,
)
from service.catalog import CATEGORIES, MOODS, STYLE_LABELS, STYLES

PLACEHOLDERS = ("[MEDIUM]", "[SUBJECT]")


class TestTemplate:
    @pytest.mark.parametrize("mood", MOOD_IDS)
    def test_mood_prompt_has_placeholders(self, mood):
        """무드 템플릿 원문은 [MEDIUM]/[SUBJECT]를 포함한다 (치환 전)."""
        text = build_mood_prompt(mood)
        assert "[MEDIUM]" in text
        assert "[SUBJECT]" in text

    def test_unknown_mood_and_style(self):
        assert build_mood_prompt("vaporwave") == ""
        assert get_style_block("crayon") == ""

    @pytest.mark.parametrize("style", STYLES)
    def test_style_block(self, style):
        block = get_style_block(style)
        assert block.startswith(" ")
        assert block.endswith(".")

    def test_pets_use_animal_rules(self):
        assert "breed" in get_identity_anchor("pets")
        assert "breed" in get_identity_guard("pets")
        assert "breed" not in get_identity_guard("family")

    def test_format_block(self):
        block = get_format_block()
        assert block.startswith("\n\n")
        assert "FULL BLEED" in block
        assert "Negative prompt" in block


class TestPresets:
    @pytest.mark.parametrize("preset", ["none", "intelligent"])
    def test_neutral_presets(self, preset):
        assert resolve_style_preset_prompt(preset, "Oil Painting") is None

    def test_substitution(self):
        text = resolve_style_preset_prompt("royal_noble", "Watercolor", "couples")
        assert "Watercolor" in text
        assert "BOTH subjects" in text
        assert "  " not in text

    def test_fill_placeholders_collapses_whitespace(self):
        assert fill_placeholders("[MEDIUM]  of\n [SUBJECT]", "Pastel", "a cat") == "Pastel of a cat"


class TestTransformPrompt:
    @pytest.mark.parametrize("mood", PRESET_IDS)
    @pytest.mark.parametrize("style", STYLES)
    def test_no_leftover_placeholders(self, mood, style):
        for category in (None, *CATEGORIES):
            prompt = build_transform_prompt(style, mood, category)
            assert not any(p in prompt for p in PLACEHOLDERS), (mood, style, category)

    def test_mood_vision_uses_medium_name(self):
        prompt = build_transform_prompt("charcoal", "heritage", "family")
        assert prompt.startswith(get_identity_guard("family"))
        assert "Create an artwork that fulfills this exact vision:" in prompt
        assert STYLE_LABELS["charcoal"] in prompt

    def test_neutral_mood_uses_medium_instruction(self):
        prompt = build_transform_prompt("oil-painting", "none", "pets")
        assert "Transform this photo into a realistic handmade oil painting" in prompt
        assert "exact vision" not in prompt
        assert get_identity_anchor("pets") in prompt
        assert prompt.endswith(get_format_block().split("\n")[-1])


class TestGalleryPrompt:
    def test_variation_is_deterministic(self):
        assert build_variation("pets", 1, "acrylic") == build_variation("pets", 1, "acrylic")
        assert build_variation("pets", 1, "acrylic") != build_variation("pets", 2, "acrylic")

    def test_variation_differs_by_style(self):
        assert build_variation("family", 1, "oil-painting") != build_variation("family", 1, "acrylic")

    @pytest.mark.parametrize("mood", MOODS)
    @pytest.mark.parametrize("style", STYLES)
    def test_no_leftover_placeholders(self, mood, style):
        prompt = build_gallery_prompt(style, "kids", 2, mood)
        assert not any(p in prompt for p in PLACEHOLDERS)
