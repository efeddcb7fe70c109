"""Medusa 커머스 백엔드 HTTP 클라이언트.

Store API (공개, publishable key)는 체크아웃 카트 생성에,
Admin API (이메일/패스워드 토큰)는 상품·변형 시딩 스크립트에 쓴다.
"""

import time
from urllib.parse import quote

import requests
from loguru import logger

from core.exceptions import UpstreamError


def _error_text(res: requests.Response) -> str:
    return f"{res.status_code}: {res.text[:200]}"


def _json(res: requests.Response, what: str) -> dict:
    try:
        return res.json()
    except ValueError as e:
        raise UpstreamError(f"{what} returned non-JSON: {res.text[:200]}") from e


class MedusaStoreClient:
    def __init__(
        self,
        backend_url: str,
        publishable_key: str = "",
        region_id: str = "",
        timeout: int = 30,
    ) -> None:
        self.backend_url = backend_url.rstrip("/")
        self.region_id = region_id
        self.timeout = timeout
        self.headers = {"Content-Type": "application/json"}
        if publishable_key:
            self.headers["x-publishable-api-key"] = publishable_key

    def _request(self, method: str, path: str, **kwargs) -> dict:
        url = f"{self.backend_url}{path}"
        try:
            res = requests.request(method, url, headers=self.headers, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise UpstreamError(f"Medusa {method} {path} failed: {e}") from e
        if not res.ok:
            raise UpstreamError(f"Medusa {method} {path} failed: {_error_text(res)}")
        return _json(res, f"Medusa {method} {path}")

    def resolve_region_id(self) -> str:
        """설정된 region이 없으면 첫 번째 region을 쓴다."""
        if self.region_id:
            return self.region_id
        regions = self._request("GET", "/store/regions").get("regions") or []
        if not regions:
            raise UpstreamError("No Medusa region found")
        self.region_id = regions[0]["id"]
        return self.region_id

    def get_product(self, handle: str) -> dict | None:
        region_id = self.resolve_region_id()
        data = self._request(
            "GET",
            f"/store/products?handle[]={quote(handle)}&region_id={region_id}&fields=*variants,*variants.options",
        )
        products = data.get("products") or []
        return products[0] if products else None

    def create_cart(self, metadata: dict | None = None) -> dict:
        body = {"region_id": self.resolve_region_id(), "metadata": metadata or {}}
        return self._request("POST", "/store/carts", json=body)["cart"]

    def add_line_item(
        self, cart_id: str, variant_id: str, metadata: dict | None = None, quantity: int = 1
    ) -> dict:
        body = {"variant_id": variant_id, "quantity": quantity, "metadata": metadata or {}}
        return self._request("POST", f"/store/carts/{cart_id}/line-items", json=body)["cart"]


class MedusaAdminClient:
    """재시도가 붙은 Admin API 클라이언트 (시딩 스크립트용)."""

    MAX_RETRIES = 3
    RETRY_DELAY_SECONDS = 2.0

    def __init__(self, backend_url: str, timeout: int = 30) -> None:
        self.backend_url = backend_url.rstrip("/")
        self.timeout = timeout
        self.token: str | None = None

    def login(self, email: str, password: str) -> str:
        try:
            res = requests.post(
                f"{self.backend_url}/auth/user/emailpass",
                json={"email": email, "password": password},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise UpstreamError(f"Medusa auth failed: {e}") from e
        if not res.ok:
            raise UpstreamError(f"Medusa auth failed: {_error_text(res)}")
        data = _json(res, "Medusa auth")
        token = data.get("token") or (data.get("user") or {}).get("token") or data.get("access_token")
        if not token:
            raise UpstreamError("Medusa auth response missing token")
        self.token = token
        return token

    def request(self, method: str, path: str, body: dict | None = None) -> dict:
        """JSON 요청. 실패하면 attempt × RETRY_DELAY_SECONDS 만큼 쉬고 재시도한다."""
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        last_error = ""
        for attempt in range(1, self.MAX_RETRIES + 1):
            try:
                res = requests.request(
                    method, f"{self.backend_url}{path}",
                    headers=headers, json=body, timeout=self.timeout,
                )
                if res.ok:
                    return _json(res, f"{method} {path}") if res.content else {}
                last_error = _error_text(res)
            except requests.RequestException as e:
                last_error = str(e)

            if attempt < self.MAX_RETRIES:
                delay = self.RETRY_DELAY_SECONDS * attempt
                logger.warning(f"Retry {attempt}/{self.MAX_RETRIES} in {delay:.0f}s: {last_error[:80]}")
                time.sleep(delay)

        raise UpstreamError(f"{method} {path} failed after {self.MAX_RETRIES} attempts: {last_error}")

    def find_product(self, handle: str) -> dict | None:
        data = self.request("GET", f"/admin/products?handle[]={quote(handle)}&fields=*variants")
        products = data.get("products") or []
        return products[0] if products else None

    def find_collection_id(self, handle: str) -> str | None:
        data = self.request("GET", f"/admin/collections?handle[]={quote(handle)}")
        collections = data.get("collections") or []
        return collections[0]["id"] if collections else None

    def create_collection(self, title: str, handle: str) -> str:
        data = self.request("POST", "/admin/collections", {"title": title, "handle": handle})
        return data["collection"]["id"]

    def create_product(self, payload: dict) -> str:
        return self.request("POST", "/admin/products", payload)["product"]["id"]

    def create_variant(self, product_id: str, payload: dict) -> dict:
        return self.request("POST", f"/admin/products/{product_id}/variants", payload)

    def delete_product(self, product_id: str) -> None:
        self.request("DELETE", f"/admin/products/{product_id}")
