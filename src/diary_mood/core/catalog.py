# src/diary_mood/core/catalog.py
import logging

import requests

from .config import RECOMMENDATION_LIMIT, SPOTIFY_API_URL
from .models import Playlist, Track
from .mood_mapper import RecommendationQuery

logger = logging.getLogger(__name__)

PLAYLIST_DESCRIPTION = "Generated from your diary mood entries"


class SpotifyCatalog:
    """
    Thin wrapper over the Spotify Web API, authenticated as the signed-in user.

    Failures never propagate: recommendation errors give an empty list and
    playlist errors give None. A playlist that was created before a later step
    failed is left in place on Spotify.
    """

    def __init__(
        self,
        access_token: str,
        session: requests.Session | None = None,
        base_url: str = SPOTIFY_API_URL,
    ):
        self.access_token = access_token
        self.session = session or requests.Session()
        self.base_url = base_url.rstrip("/")

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json",
        }

    def _get(self, path: str, params: dict | None = None) -> dict:
        resp = self.session.get(
            f"{self.base_url}{path}", headers=self.headers, params=params
        )
        resp.raise_for_status()
        return resp.json()

    def _post(self, path: str, body: dict) -> dict:
        resp = self.session.post(f"{self.base_url}{path}", headers=self.headers, json=body)
        resp.raise_for_status()
        return resp.json()

    def recommend(
        self, query: RecommendationQuery, limit: int = RECOMMENDATION_LIMIT
    ) -> list[Track]:
        logger.info(f"Requesting recommendations with seeds={list(query.seed_genres)}")
        try:
            data = self._get("/recommendations", params=query.to_params(limit))
            items = data.get("tracks") if isinstance(data, dict) else None
            if not isinstance(items, list):
                raise ValueError(f"unexpected recommendations body: {data!r}")
            return [Track.from_spotify(item) for item in items if isinstance(item, dict)]
        except (requests.RequestException, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error(f"Spotify recommendations error: {e}")
            return []

    def get_current_user(self) -> dict | None:
        try:
            user = self._get("/me")
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Spotify profile lookup error: {e}")
            return None
        if not isinstance(user, dict):
            logger.error(f"Spotify profile lookup error: unexpected body {user!r}")
            return None
        return user

    def create_playlist(self, name: str, track_ids: list[str]) -> Playlist | None:
        """
        Creates a private playlist for the current user and adds `track_ids` to it.

        Three sequential calls: resolve the user, create the playlist, add the
        tracks. Returns None as soon as any of them fails.
        """
        user = self.get_current_user()
        if not user or not user.get("id"):
            return None

        try:
            playlist = self._post(
                f"/users/{user['id']}/playlists",
                {"name": name, "description": PLAYLIST_DESCRIPTION, "public": False},
            )
            if track_ids:
                self._post(
                    f"/playlists/{playlist['id']}/tracks",
                    {"uris": [f"spotify:track:{track_id}" for track_id in track_ids]},
                )
            return Playlist(
                id=playlist["id"],
                external_url=(playlist.get("external_urls") or {}).get("spotify"),
            )
        except (requests.RequestException, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error(f"Create playlist error: {e}")
            return None
