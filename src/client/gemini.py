"""Gemini 이미지 생성 클라이언트 (google-genai SDK)."""

from typing import Any

from google import genai
from google.genai import types
from loguru import logger
from PIL import Image

from core.exceptions import GenerationFailed
from processor.operations import encode_data_url


class GeminiImageGenerator:
    name = "gemini"

    def __init__(self, api_key: str, model: str) -> None:
        self.client = genai.Client(api_key=api_key)
        self.model = model

    def generate(
        self,
        prompt: str,
        images: list[Image.Image] | None = None,
        aspect_ratio: str = "3:4",
    ) -> str:
        """프롬프트(+참조 이미지)로 이미지 1장을 생성해 data URL로 반환한다.

        응답에 이미지 파트가 없으면 GenerationFailed.
        """
        contents: list[Any] = [prompt, *(images or [])]
        resp = self.client.models.generate_content(
            model=self.model,
            contents=contents,
            config=types.GenerateContentConfig(
                response_modalities=["TEXT", "IMAGE"],
                image_config=types.ImageConfig(aspect_ratio=aspect_ratio),
            ),
        )

        extracted = extract_image_data_url(resp)
        if extracted is None:
            text = getattr(resp, "text", None)
            if text:
                logger.warning(f"Gemini returned text instead of an image: {text[:200]}")
            raise GenerationFailed("No image data in Gemini API response")
        return extracted


def extract_image_data_url(resp: Any) -> str | None:
    """generate_content 응답에서 첫 번째 inline 이미지를 data URL로 꺼낸다."""
    for cand in getattr(resp, "candidates", None) or []:
        content = getattr(cand, "content", None)
        for part in getattr(content, "parts", None) or []:
            inline = getattr(part, "inline_data", None)
            data = getattr(inline, "data", None) if inline else None
            if not data:
                continue
            mime = getattr(inline, "mime_type", None) or "image/png"
            if not mime.startswith("image/"):
                continue
            if isinstance(data, str):
                # 일부 SDK 버전은 base64 문자열을 그대로 돌려준다.
                return f"data:{mime};base64,{data}"
            return encode_data_url(data, mime)
    return None
