# src/diary_mood/core/spotify_oauth.py
from urllib.parse import urlencode

import requests

from .config import (
    SPOTIFY_ACCOUNTS_URL,
    SPOTIFY_CLIENT_ID,
    SPOTIFY_CLIENT_SECRET,
    SPOTIFY_REDIRECT_URI,
)

SCOPES = [
    "user-read-email",
    "playlist-modify-public",
    "playlist-modify-private",
    "playlist-read-private",
    "user-library-read",
]


class SpotifyOAuth:
    """Authorization-code flow against the Spotify accounts service."""

    def __init__(
        self,
        client_id: str | None = SPOTIFY_CLIENT_ID,
        client_secret: str | None = SPOTIFY_CLIENT_SECRET,
        redirect_uri: str = SPOTIFY_REDIRECT_URI,
        accounts_url: str = SPOTIFY_ACCOUNTS_URL,
        session: requests.Session | None = None,
    ):
        if not client_id or not client_secret:
            raise ValueError(
                "SPOTIFY_CLIENT_ID or SPOTIFY_CLIENT_SECRET not found in environment variables."
            )
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.accounts_url = accounts_url.rstrip("/")
        self.session = session or requests.Session()

    def authorize_url(self, state: str) -> str:
        params = {
            "client_id": self.client_id,
            "response_type": "code",
            "redirect_uri": self.redirect_uri,
            "scope": " ".join(SCOPES),
            "state": state,
        }
        return f"{self.accounts_url}/authorize?{urlencode(params)}"

    def exchange_code(self, code: str) -> dict:
        """
        Trades an authorization code for tokens.

        Returns the token payload (`access_token`, `refresh_token`, `expires_in`, ...).
        Raises `requests.HTTPError` when Spotify rejects the code.
        """
        resp = self.session.post(
            f"{self.accounts_url}/api/token",
            data={
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": self.redirect_uri,
            },
            auth=(self.client_id, self.client_secret),
        )
        resp.raise_for_status()
        return resp.json()
