"""Google OAuth2 authorization code 흐름.

1. authorization_url: 사용자를 Google 동의 화면으로 보낼 URL
2. exchange_code:      콜백의 code → access token
3. fetch_profile:      access token → OpenID userinfo (sub, email, 이름, 사진)
"""

from dataclasses import dataclass
from urllib.parse import urlencode

import requests

from core.exceptions import OAuthFailed

AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"
USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"

SCOPES = ("openid", "email", "profile")


def _json(res: requests.Response, what: str) -> dict:
    try:
        return res.json()
    except ValueError as e:
        raise OAuthFailed(f"{what} is not JSON") from e


@dataclass(frozen=True)
class GoogleProfile:
    id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    picture: str | None = None


class GoogleOAuthClient:
    def __init__(self, client_id: str, client_secret: str, redirect_uri: str, timeout: int = 15):
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.timeout = timeout

    def authorization_url(self, state: str) -> str:
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": " ".join(SCOPES),
            "state": state,
            "prompt": "select_account",
        }
        return f"{AUTHORIZE_URL}?{urlencode(params)}"

    def exchange_code(self, code: str) -> str:
        try:
            res = requests.post(
                TOKEN_URL,
                data={
                    "code": code,
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "redirect_uri": self.redirect_uri,
                    "grant_type": "authorization_code",
                },
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise OAuthFailed(f"Token exchange failed: {e}") from e
        if not res.ok:
            raise OAuthFailed(f"Token exchange failed: {res.status_code}")

        token = _json(res, "Token response").get("access_token")
        if not token:
            raise OAuthFailed("Token response missing access_token")
        return token

    def fetch_profile(self, access_token: str) -> GoogleProfile:
        try:
            res = requests.get(
                USERINFO_URL,
                headers={"Authorization": f"Bearer {access_token}"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise OAuthFailed(f"Userinfo request failed: {e}") from e
        if not res.ok:
            raise OAuthFailed(f"Userinfo request failed: {res.status_code}")

        info = _json(res, "Userinfo response")
        if not info.get("sub"):
            raise OAuthFailed("Userinfo response missing subject")
        return GoogleProfile(
            id=info["sub"],
            email=info.get("email"),
            first_name=info.get("given_name"),
            last_name=info.get("family_name"),
            picture=info.get("picture"),
        )
