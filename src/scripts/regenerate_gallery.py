"""
갤러리 이미지 재생성 (원본 사진 없이 텍스트 프롬프트만으로 생성).

사용법:
    cd src && python -m scripts.regenerate_gallery
    cd src && python -m scripts.regenerate_gallery --only=family-oil-painting-1,pets-pastel-3
    cd src && python -m scripts.regenerate_gallery --mood=royal_noble --count=1

출력 파일: GALLERY_DIR/{mood--}{category}-{style}-{n}.png  (classic은 접두사 없음)
"""

import argparse
import os
import sys
import time
from dataclasses import dataclass

from client.gemini import GeminiImageGenerator
from core.config import settings
from core.exceptions import AppException
from processor.operations import decode_data_url
from prompt.gallery import build_gallery_prompt
from service.catalog import CATEGORIES, MOODS, STYLES, gallery_image_stem
from utility.logger import setup_logger
from utility.timer import timer

IMAGES_PER_COMBINATION = 3
DELAY_BETWEEN_REQUESTS_SECONDS = 1.5


@dataclass(frozen=True)
class ImageSpec:
    category: str
    style: str
    img_index: int
    mood: str = "classic"

    @property
    def filename(self) -> str:
        return f"{gallery_image_stem(self.category, self.style, self.mood)}-{self.img_index}.png"


def parse_only(value: str, mood: str, count: int) -> list[ImageSpec]:
    """"family-oil-painting-1,pets-pastel-3" → ImageSpec 목록. 알 수 없는 항목은 건너뛴다."""
    specs = []
    for item in (s.strip() for s in value.split(",")):
        for style in STYLES:
            for n in range(1, count + 1):
                suffix = f"-{style}-{n}"
                category = item[: -len(suffix)] if item.endswith(suffix) else None
                if category in CATEGORIES:
                    specs.append(ImageSpec(category, style, n, mood))
    return specs


def all_specs(mood: str, count: int) -> list[ImageSpec]:
    return [
        ImageSpec(category, style, n, mood)
        for category in CATEGORIES
        for style in STYLES
        for n in range(1, count + 1)
    ]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Regenerate gallery images with Gemini")
    parser.add_argument("--only", default="", help="comma separated {category}-{style}-{n} names")
    parser.add_argument("--mood", default="classic", choices=MOODS)
    parser.add_argument("--count", type=int, default=IMAGES_PER_COMBINATION)
    args = parser.parse_args(argv)

    setup_logger("INFO")

    if not settings.gemini_configured:
        print("Set GOOGLE_API_KEY in .env")
        return 1

    specs = parse_only(args.only, args.mood, args.count) if args.only else all_specs(args.mood, args.count)
    if not specs:
        print(f"Nothing to generate for --only={args.only}")
        return 1

    generator = GeminiImageGenerator(api_key=settings.GOOGLE_API_KEY, model=settings.GEMINI_IMAGE_MODEL)
    os.makedirs(settings.GALLERY_DIR, exist_ok=True)

    print(f"Output: {settings.GALLERY_DIR}")
    print(f"Images: {len(specs)} (mood={args.mood})")
    print("-" * 50)

    failed = 0
    for n, spec in enumerate(specs, start=1):
        print(f"[{n}/{len(specs)}] {spec.filename}")
        prompt = build_gallery_prompt(spec.style, spec.category, spec.img_index, spec.mood)
        try:
            with timer(spec.filename):
                data_url = generator.generate(prompt, aspect_ratio=settings.GEMINI_ASPECT_RATIO)
            _, data = decode_data_url(data_url)
        except (AppException, ValueError) as e:
            print(f"  FAILED: {e}")
            failed += 1
        else:
            with open(os.path.join(settings.GALLERY_DIR, spec.filename), "wb") as f:
                f.write(data)

        if n < len(specs):
            time.sleep(DELAY_BETWEEN_REQUESTS_SECONDS)

    print("-" * 50)
    print(f"Done. {len(specs) - failed} images written, {failed} failed.")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
