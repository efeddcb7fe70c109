"""ImgBB 이미지 호스팅.

결과 이미지를 외부 공개 URL(i.ibb.co/...)로 올려 체크아웃 미리보기 등
서버 밖에서도 열리는 안정적인 주소를 만든다.
API: https://api.imgbb.com/
"""

import base64
import re

import requests

from core.exceptions import UpstreamError

IMGBB_UPLOAD_URL = "https://api.imgbb.com/1/upload"


class ImgbbUploader:
    def __init__(self, api_key: str, timeout: int = 60) -> None:
        self.api_key = api_key
        self.timeout = timeout

    def upload(self, data: bytes, slug: str | None = None) -> str:
        """이미지 바이트를 올리고 직접 링크(data.url)를 반환한다."""
        form = {"key": self.api_key, "image": base64.b64encode(data).decode("ascii")}
        if slug:
            form["name"] = re.sub(r"[^a-zA-Z0-9._-]", "_", slug)

        try:
            res = requests.post(IMGBB_UPLOAD_URL, data=form, timeout=self.timeout)
        except requests.RequestException as e:
            raise UpstreamError(f"ImgBB upload failed: {e}") from e

        if not res.ok:
            raise UpstreamError(f"ImgBB upload failed: {res.status_code} {res.text[:200]}")

        try:
            body = res.json()
        except ValueError as e:
            raise UpstreamError(f"ImgBB returned a non-JSON response: {res.text[:200]}") from e

        url = (body.get("data") or {}).get("url")
        if not url:
            raise UpstreamError("ImgBB response missing data.url")
        return url
