"""
업로드/결과 이미지 처리 함수.
data URL 인코딩·디코딩과 PIL.Image 변환(리사이즈, 워터마크, 포맷 변환)을 담당한다.
"""

import base64
import binascii
import io
import re

from PIL import Image, ImageDraw, ImageFont, ImageOps

DATA_URL_RE = re.compile(r"^data:(image/[\w.+-]+);base64,(.+)$", re.DOTALL)

WATERMARK_TEXT = "ART & SEE"

_FORMATS = {
    "image/jpeg": "JPEG",
    "image/png": "PNG",
    "image/webp": "WEBP",
}


def decode_data_url(data_url: str) -> tuple[str, bytes]:
    """data:image/...;base64,... → (mime, bytes). 형식이 틀리면 ValueError."""
    match = DATA_URL_RE.match(data_url.strip())
    if not match:
        raise ValueError("Invalid image data URL")
    mime, payload = match.groups()
    try:
        return mime, base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError("Invalid base64 image payload") from e


def encode_data_url(data: bytes, mime: str = "image/png") -> str:
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"


def load_image(data: bytes) -> Image.Image:
    """바이트 → RGB 이미지. EXIF 회전 정보를 반영한다."""
    img = Image.open(io.BytesIO(data))
    img = ImageOps.exif_transpose(img)
    return img.convert("RGB")


def image_to_bytes(image: Image.Image, mime: str = "image/jpeg", quality: int = 85) -> bytes:
    fmt = _FORMATS.get(mime, "JPEG")
    buf = io.BytesIO()
    if fmt == "PNG":
        image.save(buf, fmt, optimize=True)
    else:
        image.save(buf, fmt, quality=quality)
    return buf.getvalue()


def fit_within(image: Image.Image, max_dimension: int) -> Image.Image:
    """비율을 유지하며 긴 변을 max_dimension 이하로 줄인다. 확대는 하지 않는다."""
    width, height = image.size
    if width <= max_dimension and height <= max_dimension:
        return image
    if width >= height:
        new_size = (max_dimension, max(1, round(height * max_dimension / width)))
    else:
        new_size = (max(1, round(width * max_dimension / height)), max_dimension)
    return image.resize(new_size, Image.LANCZOS)


def thumbnail(image: Image.Image, width: int) -> Image.Image:
    """가로 폭 기준 축소 (관리자 목록 미리보기)."""
    if image.width <= width:
        return image
    height = max(1, round(image.height * width / image.width))
    return image.resize((width, height), Image.LANCZOS)


def aspect_ratio_for(image: Image.Image) -> str:
    """세로 사진은 3:4, 가로 사진은 4:3으로 정규화."""
    return "4:3" if image.width > image.height else "3:4"


def optimize_for_upload(data_url: str, max_dimension: int) -> str:
    """업로드 사진을 max_dimension 이내 JPEG/PNG data URL로 다시 인코딩한다."""
    mime, raw = decode_data_url(data_url)
    img = fit_within(load_image(raw), max_dimension)
    out_mime = "image/png" if mime == "image/png" else "image/jpeg"
    return encode_data_url(image_to_bytes(img, out_mime, quality=85), out_mime)


def to_webp(image: Image.Image, max_width: int = 1600, quality: int = 88) -> bytes:
    """외부 호스팅(ImgBB) 업로드용 WebP."""
    if image.width > max_width:
        image = thumbnail(image, max_width)
    return image_to_bytes(image, "image/webp", quality=quality)


def _load_font(size: int) -> ImageFont.ImageFont:
    try:
        return ImageFont.truetype("/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf", size)
    except OSError:
        return ImageFont.load_default(size=size)


def watermark(image: Image.Image, text: str = WATERMARK_TEXT) -> Image.Image:
    """-20도 기울인 반투명 텍스트를 3열 × 4행 엇갈린 격자로 깐다."""
    base = image.convert("RGBA")
    font_size = max(16, base.width // 28)
    font = _load_font(font_size)

    probe = ImageDraw.Draw(base)
    left, top, right, bottom = probe.textbbox((0, 0), text, font=font)
    text_w, text_h = right - left, bottom - top

    # 회전해도 잘리지 않도록 여유를 둔 텍스트 타일
    pad = font_size // 2
    tile = Image.new("RGBA", (text_w + pad * 2, text_h + pad * 2), (0, 0, 0, 0))
    tile_draw = ImageDraw.Draw(tile)
    tile_draw.text((pad + 1, pad + 1 - top), text, font=font, fill=(0, 0, 0, 40))
    tile_draw.text((pad, pad - top), text, font=font, fill=(255, 255, 255, 115))
    tile = tile.rotate(20, expand=True, resample=Image.BICUBIC)

    overlay = Image.new("RGBA", base.size, (0, 0, 0, 0))
    cols, rows = 3, 4
    cell_w = base.width / cols
    cell_h = base.height / rows
    for row in range(rows):
        offset_x = cell_w / 2 if row % 2 == 1 else 0
        for col in range(cols):
            x = int(cell_w * col + cell_w / 2 + offset_x - tile.width / 2)
            y = int(cell_h * row + cell_h / 2 - tile.height / 2)
            _paste_clipped(overlay, tile, x, y)

    return Image.alpha_composite(base, overlay).convert("RGB")


def _paste_clipped(target: Image.Image, tile: Image.Image, x: int, y: int) -> None:
    """타일 중 target 영역과 겹치는 부분만 합성한다."""
    left, top = max(0, -x), max(0, -y)
    right = min(tile.width, target.width - x)
    bottom = min(tile.height, target.height - y)
    if right <= left or bottom <= top:
        return
    target.alpha_composite(tile.crop((left, top, right, bottom)), dest=(x + left, y + top))
