from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from diary_mood.app.dependencies import Principal, get_principal
from diary_mood.app.main import create_app
from diary_mood.core.models import Entry, Playlist, SentimentResult, Track
from diary_mood.core.store import MAX_ENTRIES

USER_EMAIL = "alice@example.com"


class FakeStore:
    def __init__(self):
        self.users: dict[str, dict] = {}
        self.entries: list[dict] = []
        self._clock = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def upsert_user(self, email, name, spotify_id):
        user = self.users.setdefault(email, {"_id": f"user-{len(self.users) + 1}", "email": email})
        user.update({"name": name, "spotify_id": spotify_id})
        return user

    def find_user_by_email(self, email):
        return self.users.get(email)

    def create_entry(self, user_id, data):
        self._clock += timedelta(minutes=1)
        doc = {**data, "id": f"entry-{len(self.entries) + 1}", "user_id": user_id, "created_at": self._clock}
        self.entries.append(doc)
        return Entry(**doc)

    def list_entries(self, user_id, limit=MAX_ENTRIES):
        mine = [e for e in self.entries if e["user_id"] == user_id]
        mine.sort(key=lambda e: e["created_at"], reverse=True)
        return [Entry(**e) for e in mine[: min(limit, MAX_ENTRIES)]]


class FakeClassifier:
    def __init__(self, result=None):
        self.result = result or SentimentResult(
            sentiment="positive", confidence=0.9, mood="happy", explanation="Upbeat day."
        )
        self.calls: list[str] = []

    def analyze(self, text):
        self.calls.append(text)
        return self.result


class FakeCatalog:
    def __init__(self, access_token, tracks=None, playlist=None, profile=None):
        self.access_token = access_token
        self.tracks = tracks if tracks is not None else [
            Track(
                id="t1",
                name="Walking on Sunshine",
                artists=["Katrina and the Waves"],
                external_url="https://open.spotify.com/track/t1",
            )
        ]
        self.playlist = playlist
        self.profile = profile
        self.queries = []
        self.playlist_calls = []

    def recommend(self, query, limit=10):
        self.queries.append(query)
        return self.tracks

    def get_current_user(self):
        return self.profile

    def create_playlist(self, name, track_ids):
        self.playlist_calls.append((name, track_ids))
        return self.playlist


class FakeOAuth:
    def __init__(self, token=None, error=None):
        self.token = token or {"access_token": "spotify-token"}
        self.error = error
        self.codes: list[str] = []

    def authorize_url(self, state):
        return f"https://accounts.example.com/authorize?state={state}"

    def exchange_code(self, code):
        self.codes.append(code)
        if self.error:
            raise self.error
        return self.token


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def classifier():
    return FakeClassifier()


@pytest.fixture
def catalog():
    return FakeCatalog("spotify-token", playlist=Playlist(id="p1", external_url="https://open.spotify.com/playlist/p1"))


@pytest.fixture
def oauth():
    return FakeOAuth()


@pytest.fixture
def app(store, classifier, catalog, oauth):
    return create_app(
        store=store,
        classifier=classifier,
        oauth=oauth,
        catalog_factory=lambda token, session: catalog,
        session_secret="test-secret",
    )


@pytest.fixture
def client(app):
    """A client with no session: every protected route should reject it."""
    return TestClient(app)


@pytest.fixture
def auth_client(app, store):
    """A client signed in as a user that exists in the store."""
    store.upsert_user(USER_EMAIL, "Alice", "alice-spotify")
    app.dependency_overrides[get_principal] = lambda: Principal(
        email=USER_EMAIL, name="Alice", access_token="spotify-token"
    )
    yield TestClient(app)
    app.dependency_overrides.clear()
